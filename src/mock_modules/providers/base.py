"""Generic provider base classes.

Providers are written against one interface:

    class InMemoryLogger(ConcreteImplementationProvider[Logger]):
        def create_implementation(self, mock_producer):
            return self

    class MockPermissions(MockImplementationProvider[Permissions]):
        is_allowed = False

        def configure_mock(self, mock_producer, mock):
            mock.setup_get("is_allowed", lambda: self.is_allowed)

The registry calls them through the type-erased entry points
(``get_implementation`` / ``setup_mock``), which check that the requested
type is the one the provider was written for.
"""
from abc import abstractmethod
from typing import Any, Generic, Optional, Type, TypeVar, cast, get_args, get_origin

from src.mock_modules.exceptions import AdapterTypeMismatchError
from src.mock_modules.interfaces import (
    IConcreteImplementationProvider,
    IImplementationProvider,
    IMockImplementationProvider,
    IMockProducer,
)
from src.mock_modules.mocking.handle import MockHandle

T = TypeVar("T")
R = TypeVar("R")


def _mocked_type_from_bases(cls: type) -> Optional[type]:
    """Read the interface from ``class X(SomeProvider[Interface])``."""
    for base in cls.__dict__.get("__orig_bases__", ()):
        origin = get_origin(base)
        if not isinstance(origin, type) or not issubclass(origin, IImplementationProvider):
            continue
        for arg in get_args(base):
            if isinstance(arg, type):
                return arg
    return None


class _ProviderAdapter(IImplementationProvider):
    """Resolves ``mocked_type`` when a provider class is declared."""

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("mocked_type") is None:
            mocked_type = _mocked_type_from_bases(cls)
            if mocked_type is not None:
                cls.mocked_type = mocked_type

    def _check_requested_type(self, requested_type: Any) -> None:
        if requested_type is not self.mocked_type:
            raise AdapterTypeMismatchError(self, self.mocked_type, requested_type)


class ConcreteImplementationProvider(_ProviderAdapter, IConcreteImplementationProvider, Generic[T]):
    """Base class for hand-written fakes of one interface.

    The registry materializes one instance per test, so returning ``self``
    from ``create_implementation`` lets tests fetch the same object back
    with ``get_mock``.
    """

    def get_implementation(self, requested_type: Type[R], mock_producer: IMockProducer) -> R:
        self._check_requested_type(requested_type)
        return cast(R, self.create_implementation(mock_producer))

    @abstractmethod
    def create_implementation(self, mock_producer: IMockProducer) -> T:
        """Return the fake implementation.

        Args:
            mock_producer: Producer for any dependencies the fake needs
        """
        ...


class MockImplementationProvider(_ProviderAdapter, IMockImplementationProvider, Generic[T]):
    """Base class for providers that configure an auto-generated mock."""

    def setup_mock(
        self,
        requested_type: Type[R],
        mock_producer: IMockProducer,
        mock: MockHandle[R],
    ) -> None:
        self._check_requested_type(requested_type)
        if mock.mocked_type is not self.mocked_type:
            raise AdapterTypeMismatchError(self, self.mocked_type, mock.mocked_type)
        self.configure_mock(mock_producer, cast(MockHandle[T], mock))

    @abstractmethod
    def configure_mock(self, mock_producer: IMockProducer, mock: MockHandle[T]) -> None:
        """Stub members on the mock.

        Args:
            mock_producer: Producer for any dependencies the mock returns
            mock: Handle on the mock being built
        """
        ...
