"""Mock construction on top of unittest.mock."""
from src.mock_modules.mocking.handle import (
    MockBehavior,
    MockHandle,
    default_for,
    stubbable_properties,
)
from src.mock_modules.mocking.factory import UnittestStubFactory

__all__ = [
    "MockBehavior",
    "MockHandle",
    "UnittestStubFactory",
    "default_for",
    "stubbable_properties",
]
