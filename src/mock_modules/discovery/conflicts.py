"""Conflict resolution policies.

A resolver is any hashable callable taking the contested interface and
returning the provider class that should win, or None to decline. Declining
makes discovery fail. Resolvers are consulted only during discovery.
"""
import importlib
import logging
from types import MappingProxyType
from typing import Mapping, Optional

from src.mock_modules.exceptions import ConfigImportError, type_name

logger = logging.getLogger(__name__)


def decline_conflict(interface_type: type) -> Optional[type]:
    """Default resolver: never picks a winner."""
    return None


def import_dotted(dotted_path: str, setting: Optional[str] = None) -> type:
    """Import a class from ``package.module.Class`` or ``package.module:Class``.

    Args:
        dotted_path: Path to the class
        setting: Setting name, for error reporting

    Returns:
        The imported class

    Raises:
        ConfigImportError: If the path cannot be imported or is not a class
    """
    if ":" in dotted_path:
        module_name, _, attribute = dotted_path.partition(":")
    else:
        module_name, _, attribute = dotted_path.rpartition(".")
    if not module_name or not attribute:
        raise ConfigImportError(
            f"'{dotted_path}' is not a dotted path to a class",
            setting=setting,
            dotted_path=dotted_path,
        )

    try:
        value = importlib.import_module(module_name)
        for part in attribute.split("."):
            value = getattr(value, part)
    except (ImportError, AttributeError) as e:
        raise ConfigImportError(
            f"Cannot import '{dotted_path}'",
            setting=setting,
            dotted_path=dotted_path,
            original_error=e,
        ) from e

    if not isinstance(value, type):
        raise ConfigImportError(
            f"'{dotted_path}' is not a class",
            setting=setting,
            dotted_path=dotted_path,
        )
    return value


class ConflictResolutionPolicy:
    """Resolver backed by a mapping of interface -> winning provider.

    Interfaces not in the mapping are declined.

    Example:
        policy = ConflictResolutionPolicy({Permissions: MockPermissionsV1})
        registry = ProviderRegistry(scanner, policy)
    """

    def __init__(self, overrides: Optional[Mapping[type, type]] = None):
        self._overrides = dict(overrides or {})

    @classmethod
    def from_dotted(
        cls,
        overrides: Mapping[str, str],
        setting: str = "conflict_resolutions",
    ) -> "ConflictResolutionPolicy":
        """Build a policy from dotted paths (as found in configuration)."""
        return cls({
            import_dotted(interface, setting): import_dotted(provider, setting)
            for interface, provider in overrides.items()
        })

    @property
    def overrides(self) -> Mapping[type, type]:
        return MappingProxyType(self._overrides)

    def __call__(self, interface_type: type) -> Optional[type]:
        winner = self._overrides.get(interface_type)
        if winner is not None:
            logger.debug(
                f"Policy resolves {type_name(interface_type)} to {type_name(winner)}",
                extra={"interface": type_name(interface_type), "winner": type_name(winner)},
            )
        return winner

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConflictResolutionPolicy):
            return NotImplemented
        return self._overrides == other._overrides

    def __hash__(self) -> int:
        return hash(frozenset(self._overrides.items()))

    def __repr__(self) -> str:
        pairs = ", ".join(
            f"{type_name(interface)}: {type_name(winner)}"
            for interface, winner in self._overrides.items()
        )
        return f"ConflictResolutionPolicy({{{pairs}}})"
