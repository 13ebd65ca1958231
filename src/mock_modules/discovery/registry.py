"""Provider registry: discovers providers and maps interfaces to them.

Discovery runs once per registry and produces two read-only mappings of
interface -> provider class, one for concrete providers and one for mock
providers. Provider instances are not kept here; sessions materialize them
per test from these classes.
"""
import inspect
import logging
import threading
import time
from types import MappingProxyType
from typing import Dict, Hashable, Mapping, Optional, Tuple

from src.mock_modules.config import MockModulesSettings
from src.mock_modules.discovery.conflicts import ConflictResolutionPolicy, decline_conflict
from src.mock_modules.discovery.scanner import LoadedTypeScanner, is_provider_type
from src.mock_modules.exceptions import (
    InvalidConflictResolutionError,
    MissingDefaultConstructorError,
    MissingMockedTypeError,
    ProviderConfigurationError,
    ProviderConstructionError,
    ProviderConflictError,
    type_name,
)
from src.mock_modules.interfaces import (
    IConcreteImplementationProvider,
    IConflictResolver,
    IMockImplementationProvider,
    ITypeScanner,
)

logger = logging.getLogger(__name__)

_PROVIDER_KINDS = (IConcreteImplementationProvider, IMockImplementationProvider)


def _require_default_constructor(provider_type: type) -> None:
    """Raise unless the class can be called without arguments."""
    try:
        signature = inspect.signature(provider_type)
    except (TypeError, ValueError):
        # Builtin constructor without a signature; construction decides
        return
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            raise MissingDefaultConstructorError(provider_type)


class ProviderRegistry:
    """Maps interface types to the provider classes that back them.

    Args:
        scanner: Source of candidate provider classes
        resolver: Picks the winner when two providers target one interface
            (default: decline, which makes any collision fatal)

    Example:
        registry = ProviderRegistry(LoadedTypeScanner(("tests.fixtures",)))
        registry.find_concrete_provider(Logger)  # -> InMemoryLogger
    """

    def __init__(
        self,
        scanner: ITypeScanner,
        resolver: Optional[IConflictResolver] = None,
    ):
        self._scanner = scanner
        self._resolver = resolver if resolver is not None else decline_conflict
        self._lock = threading.Lock()
        self._concrete: Optional[Mapping[type, type]] = None
        self._mock: Optional[Mapping[type, type]] = None

    @property
    def scanner(self) -> ITypeScanner:
        return self._scanner

    @property
    def resolver(self) -> IConflictResolver:
        return self._resolver

    @property
    def is_discovered(self) -> bool:
        return self._concrete is not None

    @property
    def concrete_providers(self) -> Mapping[type, type]:
        """Interface -> concrete provider class (runs discovery if needed)."""
        self.discover()
        return self._concrete

    @property
    def mock_providers(self) -> Mapping[type, type]:
        """Interface -> mock provider class (runs discovery if needed)."""
        self.discover()
        return self._mock

    def find_concrete_provider(self, interface: type) -> Optional[type]:
        return self.concrete_providers.get(interface)

    def find_mock_provider(self, interface: type) -> Optional[type]:
        return self.mock_providers.get(interface)

    def discover(self) -> "ProviderRegistry":
        """Run discovery unless it already completed.

        A failed pass leaves nothing behind, so the next call fails the
        same way instead of serving a partial mapping.

        Raises:
            ProviderConfigurationError: On any misconfigured provider
        """
        if self._concrete is None:
            with self._lock:
                if self._concrete is None:
                    self._run_discovery()
        return self

    def _run_discovery(self) -> None:
        start = time.monotonic()
        try:
            mock = self._find_constructors(IMockImplementationProvider)
            concrete = self._find_constructors(IConcreteImplementationProvider)
            self._resolve_cross_kind(concrete, mock)
        except ProviderConfigurationError as e:
            logger.error(f"Provider discovery failed: {e.message}", extra={"error": e.to_dict()})
            raise

        self._mock = MappingProxyType(mock)
        # Assigned last: a non-None concrete map marks discovery as complete
        self._concrete = MappingProxyType(concrete)

        logger.info(
            f"Discovered {len(concrete)} concrete and {len(mock)} mock providers",
            extra={
                "concrete_providers": {type_name(k): type_name(v) for k, v in concrete.items()},
                "mock_providers": {type_name(k): type_name(v) for k, v in mock.items()},
                "duration_ms": round((time.monotonic() - start) * 1000, 3),
            },
        )

    def _find_constructors(self, capability: type) -> Dict[type, type]:
        constructors: Dict[type, type] = {}
        for provider_type in self._scanner.find(is_provider_type(capability)):
            _require_default_constructor(provider_type)
            try:
                instance = provider_type()
            except Exception as e:
                raise ProviderConstructionError(provider_type, e) from e

            interface = getattr(instance, "mocked_type", None)
            if interface is None:
                raise MissingMockedTypeError(provider_type)

            existing = constructors.get(interface)
            if existing is not None and existing is not provider_type:
                provider_type = self._resolve(interface, existing, provider_type, (capability,))
            constructors[interface] = provider_type
        return constructors

    def _resolve_cross_kind(self, concrete: Dict[type, type], mock: Dict[type, type]) -> None:
        """Leave each interface in at most one of the two maps."""
        for interface in sorted(set(concrete) & set(mock), key=type_name):
            winner = self._resolve(interface, concrete[interface], mock[interface], _PROVIDER_KINDS)
            if issubclass(winner, IConcreteImplementationProvider):
                concrete[interface] = winner
                del mock[interface]
            else:
                mock[interface] = winner
                del concrete[interface]

    def _resolve(
        self,
        interface: type,
        existing: type,
        incoming: type,
        kinds: Tuple[type, ...],
    ) -> type:
        winner = self._resolver(interface)
        if winner is None:
            raise ProviderConflictError(interface, existing, incoming)
        self._validate_winner(interface, winner, kinds)

        logger.warning(
            f"Conflict on {type_name(interface)} resolved to {type_name(winner)}",
            extra={
                "interface": type_name(interface),
                "candidates": [type_name(existing), type_name(incoming)],
                "winner": type_name(winner),
            },
        )
        return winner

    def _validate_winner(self, interface: type, winner: object, kinds: Tuple[type, ...]) -> None:
        if not isinstance(winner, type):
            raise InvalidConflictResolutionError(interface, winner, "not a class")
        if not issubclass(winner, kinds):
            expected = " or ".join(kind.__name__ for kind in kinds)
            raise InvalidConflictResolutionError(interface, winner, f"not a {expected}")
        if inspect.isabstract(winner):
            raise InvalidConflictResolutionError(interface, winner, "abstract provider")
        declared = getattr(winner, "mocked_type", None)
        if declared is None:
            raise InvalidConflictResolutionError(interface, winner, "declares no mocked type")
        if declared is not interface:
            raise InvalidConflictResolutionError(
                interface, winner, f"provides {type_name(declared)}"
            )
        _require_default_constructor(winner)

    def __repr__(self) -> str:
        state = "discovered" if self.is_discovered else "pending"
        return f"ProviderRegistry(scanner={self._scanner!r}, resolver={self._resolver!r}, {state})"


# Process-wide registries, one per scanner/resolver pair
_shared_registries: Dict[Tuple[Hashable, Hashable], ProviderRegistry] = {}
_shared_registries_lock = threading.Lock()


def get_shared_registry(
    scanner: Optional[ITypeScanner] = None,
    resolver: Optional[IConflictResolver] = None,
    settings: Optional[MockModulesSettings] = None,
) -> ProviderRegistry:
    """Get or create the process-wide registry for a scanner and resolver.

    Missing arguments come from configuration: the scanner covers
    ``provider_packages`` and the resolver applies ``conflict_resolutions``.

    Args:
        scanner: Type scanner (must be hashable)
        resolver: Conflict resolver (must be hashable)
        settings: Configuration to read defaults from

    Returns:
        Shared ProviderRegistry instance
    """
    if scanner is None or resolver is None:
        settings = settings or MockModulesSettings()
        if scanner is None:
            scanner = LoadedTypeScanner(tuple(settings.provider_packages))
        if resolver is None:
            resolver = ConflictResolutionPolicy.from_dotted(settings.conflict_resolutions)

    key = (scanner, resolver)
    with _shared_registries_lock:
        registry = _shared_registries.get(key)
        if registry is None:
            registry = ProviderRegistry(scanner, resolver)
            _shared_registries[key] = registry
            logger.debug("Shared provider registry created", extra={"registry": repr(registry)})
    return registry


def clear_shared_registries() -> None:
    """Drop every shared registry so the next use re-runs discovery."""
    with _shared_registries_lock:
        count = len(_shared_registries)
        _shared_registries.clear()
    logger.info(f"Shared provider registries cleared: {count}")
