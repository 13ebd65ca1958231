"""Type scanners: enumerate loaded classes for provider discovery."""
import importlib
import inspect
import logging
import pkgutil
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

logger = logging.getLogger(__name__)


def is_provider_type(capability: type) -> Callable[[type], bool]:
    """Build a predicate matching non-abstract classes deriving from ``capability``.

    Args:
        capability: Provider capability base class

    Returns:
        Predicate suitable for ``ITypeScanner.find``
    """
    def predicate(candidate: type) -> bool:
        return (
            inspect.isclass(candidate)
            and not inspect.isabstract(candidate)
            and issubclass(candidate, capability)
        )

    predicate.__name__ = f"is_{capability.__name__}"
    return predicate


def _in_packages(module_name: str, packages: Tuple[str, ...]) -> bool:
    return any(
        module_name == package or module_name.startswith(package + ".")
        for package in packages
    )


@dataclass(frozen=True)
class LoadedTypeScanner:
    """Scan classes defined in modules loaded into the interpreter.

    When ``packages`` is given, those packages (and their sub-modules) are
    imported first and only classes defined inside them are considered.

    Args:
        packages: Dotted package or module names to restrict scanning to
    """

    packages: Tuple[str, ...] = ()

    def __post_init__(self):
        packages = (self.packages,) if isinstance(self.packages, str) else tuple(self.packages)
        object.__setattr__(self, "packages", packages)

    def find(self, predicate: Callable[[type], bool]) -> Sequence[type]:
        self._import_packages()

        found: Dict[str, type] = {}
        for module_name, module in list(sys.modules.items()):
            if module is None:
                continue
            if self.packages and not _in_packages(module_name, self.packages):
                continue
            namespace = getattr(module, "__dict__", None)
            if not isinstance(namespace, dict):
                continue
            for value in list(namespace.values()):
                # Only count a class in the module that defines it
                if not inspect.isclass(value) or value.__module__ != module_name:
                    continue
                if predicate(value):
                    found[f"{value.__module__}.{value.__qualname__}"] = value

        matches = [found[name] for name in sorted(found)]
        logger.debug(
            f"Scanned loaded modules: {len(matches)} types matched",
            extra={
                "predicate": getattr(predicate, "__name__", repr(predicate)),
                "packages": list(self.packages),
                "matches": sorted(found),
            },
        )
        return matches

    def _import_packages(self) -> None:
        for package in self.packages:
            module = importlib.import_module(package)
            path = getattr(module, "__path__", None)
            if path is None:
                continue
            for info in pkgutil.walk_packages(path, prefix=module.__name__ + "."):
                importlib.import_module(info.name)


@dataclass(frozen=True)
class StaticTypeScanner:
    """Scan an explicit list of types.

    Example:
        scanner = StaticTypeScanner((InMemoryLogger, MockPermissions))
    """

    types: Tuple[type, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "types", tuple(self.types))

    def find(self, predicate: Callable[[type], bool]) -> Sequence[type]:
        matches: List[type] = []
        for candidate in self.types:
            if candidate not in matches and predicate(candidate):
                matches.append(candidate)
        return matches
