"""Mock session: the one call tests use to get dependencies.

A session belongs to one test. It reads the provider classes from a
(shared, discover-once) registry and keeps the provider instances it
materializes until ``reset()``.

Example:
    session = MockSession()
    incrementer = Incrementer(session.setup_mock(Permissions))

    session.get_mock(MockPermissions, Permissions).is_allowed = True
    assert incrementer.increment(9) == 10
"""
import logging
from typing import Dict, Optional, Type, TypeVar

from src.mock_modules.config import MockModulesSettings
from src.mock_modules.discovery.registry import ProviderRegistry, get_shared_registry
from src.mock_modules.exceptions import AdapterTypeMismatchError, type_name
from src.mock_modules.interfaces import (
    IConcreteImplementationProvider,
    IMockImplementationProvider,
    IStubFactory,
)
from src.mock_modules.mocking.factory import UnittestStubFactory
from src.mock_modules.mocking.handle import MockBehavior

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")


class MockSession:
    """Hands out fakes and mocks by interface type.

    Args:
        registry: Provider registry (default: the shared, configured one)
        stub_factory: Builds mocks for interfaces without a concrete provider
        behavior: Behavior of generated mocks (default from configuration)
        settings: Configuration used for any default above
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        stub_factory: Optional[IStubFactory] = None,
        behavior: Optional[MockBehavior] = None,
        settings: Optional[MockModulesSettings] = None,
    ):
        if registry is None or behavior is None:
            settings = settings or MockModulesSettings()
        self._registry = registry if registry is not None else get_shared_registry(settings=settings)
        self._stub_factory = stub_factory if stub_factory is not None else UnittestStubFactory()
        self.behavior = MockBehavior(behavior if behavior is not None else settings.default_behavior)

        self._concrete_providers: Dict[type, IConcreteImplementationProvider] = {}
        self._mock_providers: Dict[type, IMockImplementationProvider] = {}

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def setup_mock(self, interface: Type[T]) -> T:
        """Return an object satisfying ``interface``.

        A registered concrete provider supplies its fake (the same provider
        instance until ``reset()``). Otherwise a fresh mock is generated and,
        if a mock provider is registered, handed to it for configuration.
        Interfaces without any provider get a plain auto-stub.

        Args:
            interface: Requested interface type

        Returns:
            Concrete fake or configured mock

        Raises:
            ProviderConfigurationError: If provider discovery fails
        """
        self._ensure_setup(interface)

        concrete_provider = self._concrete_providers.get(interface)
        if concrete_provider is not None:
            return concrete_provider.get_implementation(interface, self)

        handle = self._stub_factory.create_stub(interface, self.behavior)

        mock_provider = self._mock_providers.get(interface)
        if mock_provider is not None:
            mock_provider.setup_mock(interface, self, handle)

        return handle.object

    def get_mock(self, provider_type: Type[P], interface: type) -> Optional[P]:
        """Return the provider instance backing ``interface`` in this session.

        Lets a test reach a provider it holds no reference to, e.g. to flip
        a flag on a mock provider before exercising the unit under test.

        Args:
            provider_type: Expected provider class
            interface: Interface the provider backs

        Returns:
            The provider instance, or None if no provider backs the interface

        Raises:
            AdapterTypeMismatchError: If the provider is not a provider_type
        """
        self._ensure_setup(interface)

        provider = self._concrete_providers.get(interface)
        if provider is None:
            provider = self._mock_providers.get(interface)
        if provider is None:
            return None

        if not isinstance(provider, provider_type):
            raise AdapterTypeMismatchError(provider, interface, provider_type)
        return provider

    def is_materialized(self, interface: type) -> bool:
        """Whether a provider instance for ``interface`` exists in this session."""
        return interface in self._concrete_providers or interface in self._mock_providers

    def reset(self) -> None:
        """Drop materialized provider instances. Discovery is not re-run."""
        count = len(self._concrete_providers) + len(self._mock_providers)
        self._concrete_providers.clear()
        self._mock_providers.clear()
        logger.debug(f"Mock session reset, {count} providers dropped")

    def _ensure_setup(self, interface: type) -> None:
        if self.is_materialized(interface):
            return

        provider_type = self._registry.find_concrete_provider(interface)
        if provider_type is not None:
            self._concrete_providers[interface] = provider_type()
            self._log_materialized(interface, provider_type, "concrete")
            return

        provider_type = self._registry.find_mock_provider(interface)
        if provider_type is not None:
            self._mock_providers[interface] = provider_type()
            self._log_materialized(interface, provider_type, "mock")

    def _log_materialized(self, interface: type, provider_type: type, kind: str) -> None:
        logger.debug(
            f"Materialized {kind} provider {type_name(provider_type)}",
            extra={
                "interface": type_name(interface),
                "provider": type_name(provider_type),
                "kind": kind,
            },
        )

    def __repr__(self) -> str:
        return (
            f"MockSession(registry={self._registry!r}, behavior={self.behavior.value}, "
            f"materialized={len(self._concrete_providers) + len(self._mock_providers)})"
        )
