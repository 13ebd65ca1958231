"""Base exception classes for mock-modules."""
from typing import Optional, Dict, Any


def type_name(value: Any) -> str:
    """Return the fully qualified name of a type (``module.QualName``)."""
    if not isinstance(value, type):
        value = type(value)
    return f"{value.__module__}.{value.__qualname__}"


class MockModulesError(Exception):
    """Base exception for all mock-modules errors.

    Carries a machine-readable code and structured details so that failures
    raised during discovery can be logged as a single record.

    Args:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "PROVIDER_CONFLICT")
        details: Additional context as dictionary
        original: Exception raised by user code (e.g. a provider constructor)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or "UNKNOWN_ERROR"
        self.details = dict(details or {})
        self.original = original
        super().__init__(self._render())

    def _render(self) -> str:
        rendered = f"[{self.error_code}] {self.message}"
        if self.original is not None:
            rendered += f" (caused by: {type_name(self.original)}: {self.original})"
        return rendered

    def to_dict(self) -> Dict[str, Any]:
        """Structured view for ``extra={...}`` logging.

        Returns:
            Dict with code, message, details and, when wrapping, the cause
        """
        data: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "exception_type": type(self).__name__,
        }
        if self.original is not None:
            data["cause"] = f"{type_name(self.original)}: {self.original}"
        return data


class AdapterTypeMismatchError(MockModulesError, TypeError):
    """A provider was invoked for a type it was not written for.

    This is a programming error in the dispatch code, never a user-facing
    configuration problem: the registry only calls a provider with its own
    mocked type.

    Args:
        provider: The provider instance (or class) being invoked
        expected: The provider's mocked type
        requested: The type the caller asked for
    """

    def __init__(self, provider: Any, expected: Any, requested: Any):
        super().__init__(
            message=(
                f"{type_name(provider)} provides {type_name(expected)} "
                f"but was asked for {type_name(requested)}"
            ),
            error_code="ADAPTER_TYPE_MISMATCH",
            details={
                "provider": type_name(provider),
                "expected": type_name(expected),
                "requested": type_name(requested),
            },
        )
        self.expected = expected
        self.requested = requested
