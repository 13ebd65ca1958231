"""Custom exceptions for mock-modules."""

from src.mock_modules.exceptions.base import (
    MockModulesError,
    AdapterTypeMismatchError,
    type_name,
)

from src.mock_modules.exceptions.registry import (
    ProviderConfigurationError,
    MissingDefaultConstructorError,
    ProviderConstructionError,
    MissingMockedTypeError,
    ProviderConflictError,
    InvalidConflictResolutionError,
)

from src.mock_modules.exceptions.config import (
    ConfigError,
    ConfigImportError,
)

__all__ = [
    # Base exceptions
    "MockModulesError",
    "AdapterTypeMismatchError",
    "type_name",
    # Discovery exceptions
    "ProviderConfigurationError",
    "MissingDefaultConstructorError",
    "ProviderConstructionError",
    "MissingMockedTypeError",
    "ProviderConflictError",
    "InvalidConflictResolutionError",
    # Configuration exceptions
    "ConfigError",
    "ConfigImportError",
]
