"""Unit tests for the generic provider base classes."""
import inspect
from unittest.mock import MagicMock

import pytest

from src.mock_modules.exceptions import AdapterTypeMismatchError
from src.mock_modules.mocking import MockHandle, UnittestStubFactory
from src.mock_modules.providers import ConcreteImplementationProvider, MockImplementationProvider
from tests.fixtures.example_domain import (
    Clock,
    FixedClock,
    InMemoryLogger,
    Logger,
    MockPermissions,
    Permissions,
)
from tests.fixtures.misconfigured_providers import UntypedProvider


@pytest.fixture
def producer():
    return MagicMock(name="mock_producer")


class TestMockedType:
    """Test how providers declare their interface."""

    def test_inferred_from_generic_argument(self):
        """Should read the interface from the parametrized base."""
        assert InMemoryLogger.mocked_type is Logger
        assert MockPermissions.mocked_type is Permissions
        assert InMemoryLogger().mocked_type is Logger

    def test_explicit_attribute(self):
        """Should accept mocked_type set on the class."""
        class ExplicitLogger(ConcreteImplementationProvider):
            mocked_type = Logger

            def create_implementation(self, mock_producer):
                return self

        assert ExplicitLogger.mocked_type is Logger

    def test_inherited_by_subclasses(self):
        """Should keep the parent's interface in subclasses."""
        class VerboseLogger(InMemoryLogger):
            pass

        assert VerboseLogger.mocked_type is Logger

    def test_missing_without_generic_argument(self):
        """Should leave mocked_type unset for unparametrized providers."""
        assert UntypedProvider.mocked_type is None

    def test_generic_bases_are_abstract(self):
        """Should keep the base classes out of discovery."""
        assert inspect.isabstract(ConcreteImplementationProvider)
        assert inspect.isabstract(MockImplementationProvider)


class TestConcreteImplementationProvider:
    """Test the erased get_implementation entry point."""

    def test_returns_implementation_for_own_type(self, producer):
        """Should hand back what create_implementation returns."""
        provider = InMemoryLogger()

        assert provider.get_implementation(Logger, producer) is provider

    def test_implementation_can_be_separate_object(self, producer):
        """Should support fakes that are not the provider itself."""
        provider = FixedClock()

        clock = provider.get_implementation(Clock, producer)

        assert isinstance(clock, Clock)
        assert clock.now == 1000.0

    def test_mismatched_type_raises(self, producer):
        """Should fail loudly when asked for another interface."""
        with pytest.raises(AdapterTypeMismatchError) as exc_info:
            InMemoryLogger().get_implementation(Permissions, producer)

        error = exc_info.value
        assert isinstance(error, TypeError)
        assert error.error_code == "ADAPTER_TYPE_MISMATCH"
        assert error.expected is Logger
        assert error.requested is Permissions
        assert "InMemoryLogger" in str(error)


class TestMockImplementationProvider:
    """Test the erased setup_mock entry point."""

    def test_configures_handle(self, producer):
        """Should let the provider stub members on the handle."""
        provider = MockPermissions()
        handle = UnittestStubFactory().create_stub(Permissions)

        provider.setup_mock(Permissions, producer, handle)
        permissions = handle.object

        assert permissions.is_allowed is False
        provider.is_allowed = True
        assert permissions.is_allowed is True

    def test_mismatched_requested_type_raises(self, producer):
        """Should reject a request for another interface."""
        with pytest.raises(AdapterTypeMismatchError):
            MockPermissions().setup_mock(Logger, producer, MockHandle(Logger))

    def test_mismatched_handle_raises(self, producer):
        """Should reject a handle built for another interface."""
        with pytest.raises(AdapterTypeMismatchError) as exc_info:
            MockPermissions().setup_mock(Permissions, producer, MockHandle(Logger))

        assert exc_info.value.requested is Logger
