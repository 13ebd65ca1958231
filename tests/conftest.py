"""Root pytest configuration."""
import pytest

from src.mock_modules.discovery import clear_shared_registries
from tests.fixtures.scanners import EXAMPLE_SCANNER


pytest_plugins = [
    "src.mock_modules.testing.pytest_plugin",
]


@pytest.fixture
def mock_type_scanner():
    """Limit discovery to the example domain; misconfigured providers live elsewhere."""
    return EXAMPLE_SCANNER


@pytest.fixture
def isolated_registries():
    """Drop shared registries before and after a test."""
    clear_shared_registries()
    yield
    clear_shared_registries()
