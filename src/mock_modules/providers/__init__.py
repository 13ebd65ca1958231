"""Base classes for concrete and mock providers."""
from src.mock_modules.providers.base import (
    ConcreteImplementationProvider,
    MockImplementationProvider,
)

__all__ = [
    "ConcreteImplementationProvider",
    "MockImplementationProvider",
]
