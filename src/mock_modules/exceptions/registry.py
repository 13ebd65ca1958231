"""Provider discovery exceptions.

All of these are fatal configuration errors raised while the registry scans
for providers. Discovery never partially succeeds.
"""
from typing import Any, Optional

from src.mock_modules.exceptions.base import MockModulesError, type_name


class ProviderConfigurationError(MockModulesError):
    """Base exception for provider configuration errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "PROVIDER_CONFIGURATION",
        details: Optional[dict] = None,
        original: Optional[Exception] = None,
    ):
        super().__init__(message=message, error_code=error_code, details=details, original=original)


class MissingDefaultConstructorError(ProviderConfigurationError):
    """Provider class cannot be constructed without arguments."""

    def __init__(self, provider_type: type):
        super().__init__(
            message=f"{type_name(provider_type)} must have a constructor that takes no arguments",
            error_code="MISSING_DEFAULT_CONSTRUCTOR",
            details={"provider": type_name(provider_type)},
        )
        self.provider_type = provider_type


class ProviderConstructionError(ProviderConfigurationError):
    """Provider constructor raised while discovery instantiated it."""

    def __init__(self, provider_type: type, original: Exception):
        super().__init__(
            message=f"{type_name(provider_type)} raised while being constructed",
            error_code="PROVIDER_CONSTRUCTION",
            details={"provider": type_name(provider_type)},
            original=original,
        )
        self.provider_type = provider_type


class MissingMockedTypeError(ProviderConfigurationError):
    """Provider does not declare the interface it provides."""

    def __init__(self, provider_type: type):
        super().__init__(
            message=(
                f"{type_name(provider_type)} does not declare a mocked type. "
                "Parametrize the provider base class or set the mocked_type attribute."
            ),
            error_code="MISSING_MOCKED_TYPE",
            details={"provider": type_name(provider_type)},
        )
        self.provider_type = provider_type


class ProviderConflictError(ProviderConfigurationError):
    """Two providers target the same interface and nothing chose a winner."""

    def __init__(self, interface_type: type, existing: type, incoming: type):
        super().__init__(
            message=(
                f"{type_name(existing)} and {type_name(incoming)} both provide "
                f"mocked implementations of {type_name(interface_type)}. "
                "Supply a conflict resolution (override resolve_conflict() or set "
                "conflict_resolutions) to choose which one to use."
            ),
            error_code="PROVIDER_CONFLICT",
            details={
                "interface": type_name(interface_type),
                "providers": [type_name(existing), type_name(incoming)],
            },
        )
        self.interface_type = interface_type
        self.existing = existing
        self.incoming = incoming


class InvalidConflictResolutionError(ProviderConfigurationError):
    """The conflict resolver picked something that cannot serve as the winner."""

    def __init__(self, interface_type: type, winner: Any, reason: str):
        super().__init__(
            message=(
                f"Conflict resolution for {type_name(interface_type)} chose "
                f"{winner!r}: {reason}"
            ),
            error_code="INVALID_CONFLICT_RESOLUTION",
            details={
                "interface": type_name(interface_type),
                "winner": repr(winner),
                "reason": reason,
            },
        )
        self.interface_type = interface_type
        self.winner = winner
