"""Abstract interfaces for provider discovery and mock production.

Collaborators (type scanner, stub factory, conflict resolver, mock producer)
are protocols so that any object with the right shape can be plugged in.
Provider capabilities are abstract base classes because discovery selects
providers by subclass relationship.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, ClassVar, Optional, Protocol, Sequence, Type, TypeVar

if TYPE_CHECKING:
    from src.mock_modules.mocking.handle import MockBehavior, MockHandle


T = TypeVar("T")


# ==================== Collaborator Interfaces ====================

class ITypeScanner(Protocol):
    """Protocol for enumerating loaded types."""

    @abstractmethod
    def find(self, predicate: Callable[[type], bool]) -> Sequence[type]:
        """Find every loaded type matching a predicate.

        Args:
            predicate: Filter applied to each candidate type

        Returns:
            Matching types, in a deterministic order
        """
        ...


class IStubFactory(Protocol):
    """Protocol for the mock-construction library boundary."""

    @abstractmethod
    def create_stub(self, interface: Type[T], behavior: "MockBehavior") -> "MockHandle[T]":
        """Create a fresh, unconfigured mock for an interface.

        Args:
            interface: Interface the mock must satisfy
            behavior: How unconfigured members behave

        Returns:
            Handle used to stub members and obtain the finished mock
        """
        ...


class IConflictResolver(Protocol):
    """Protocol for choosing a winner when two providers target one interface."""

    def __call__(self, interface_type: type) -> Optional[type]:
        """Return the provider class to use, or None to decline."""
        ...


class IMockProducer(Protocol):
    """Protocol for anything that hands out mocks by interface."""

    @abstractmethod
    def setup_mock(self, interface: Type[T]) -> T:
        """Return an object satisfying the interface.

        Args:
            interface: Requested interface type

        Returns:
            Concrete fake or configured mock
        """
        ...


# ==================== Provider Capabilities ====================

class IImplementationProvider(ABC):
    """Common shape of every provider.

    Providers are constructed without arguments and declare the interface
    they back through ``mocked_type``.
    """

    mocked_type: ClassVar[Optional[type]] = None


class IConcreteImplementationProvider(IImplementationProvider):
    """Provider that supplies a ready-made fake implementation."""

    @abstractmethod
    def get_implementation(self, requested_type: Type[T], mock_producer: IMockProducer) -> T:
        """Return the fake implementation as the requested type.

        Args:
            requested_type: Interface requested by the caller
            mock_producer: Producer for any further dependencies

        Returns:
            Object satisfying requested_type
        """
        ...


class IMockImplementationProvider(IImplementationProvider):
    """Provider that configures an auto-generated mock."""

    @abstractmethod
    def setup_mock(
        self,
        requested_type: Type[T],
        mock_producer: IMockProducer,
        mock: "MockHandle[T]",
    ) -> None:
        """Stub members on a mock before it is handed to the caller.

        Args:
            requested_type: Interface requested by the caller
            mock_producer: Producer for any further dependencies
            mock: Handle on the not yet finalized mock
        """
        ...


__all__ = [
    # Collaborators
    "ITypeScanner",
    "IStubFactory",
    "IConflictResolver",
    "IMockProducer",
    # Provider capabilities
    "IImplementationProvider",
    "IConcreteImplementationProvider",
    "IMockImplementationProvider",
]
