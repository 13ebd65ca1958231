"""mock-modules: discover fakes and mock providers for unit tests.

Provides a registry that finds every concrete and mock provider in the
process and a session that hands out the right one for any interface.
"""
from src.mock_modules.exceptions import (
    MockModulesError,
    AdapterTypeMismatchError,
    ProviderConfigurationError,
    MissingDefaultConstructorError,
    ProviderConstructionError,
    MissingMockedTypeError,
    ProviderConflictError,
    InvalidConflictResolutionError,
    ConfigError,
    ConfigImportError,
)
from src.mock_modules.mocking import MockBehavior, MockHandle, UnittestStubFactory
from src.mock_modules.providers import ConcreteImplementationProvider, MockImplementationProvider
from src.mock_modules.config import MockModulesSettings
from src.mock_modules.discovery import (
    ConflictResolutionPolicy,
    LoadedTypeScanner,
    ProviderRegistry,
    StaticTypeScanner,
    clear_shared_registries,
    decline_conflict,
    get_shared_registry,
)
from src.mock_modules.session import MockSession
from src.mock_modules.testing import MockTestBase

__all__ = [
    # Exceptions
    "MockModulesError",
    "AdapterTypeMismatchError",
    "ProviderConfigurationError",
    "MissingDefaultConstructorError",
    "ProviderConstructionError",
    "MissingMockedTypeError",
    "ProviderConflictError",
    "InvalidConflictResolutionError",
    "ConfigError",
    "ConfigImportError",
    # Mocking
    "MockBehavior",
    "MockHandle",
    "UnittestStubFactory",
    # Providers
    "ConcreteImplementationProvider",
    "MockImplementationProvider",
    # Configuration
    "MockModulesSettings",
    # Discovery
    "ConflictResolutionPolicy",
    "LoadedTypeScanner",
    "ProviderRegistry",
    "StaticTypeScanner",
    "clear_shared_registries",
    "decline_conflict",
    "get_shared_registry",
    # Session
    "MockSession",
    "MockTestBase",
]
