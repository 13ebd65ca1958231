"""Configuration-related exceptions."""
from typing import Optional


class ConfigError(Exception):
    """Base exception for configuration errors.

    Args:
        message: Human-readable error message
        setting: Name of the offending setting
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.setting = setting
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.setting:
            parts.append(f"Setting: {self.setting}")
        return " | ".join(parts)


class ConfigImportError(ConfigError):
    """A dotted path in the configuration could not be imported."""

    def __init__(
        self,
        message: str = "Failed to import configured object",
        setting: Optional[str] = None,
        dotted_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if dotted_path is not None:
            details["dotted_path"] = dotted_path
        super().__init__(message, setting, details)
        self.dotted_path = dotted_path
        self.original_error = original_error
