"""Test framework integration."""
from src.mock_modules.testing.base import MockTestBase

__all__ = [
    "MockTestBase",
]
