"""Mock handles built on unittest.mock.

A handle wraps one ``NonCallableMagicMock`` specced on an interface and lets
providers stub individual members before the mock is handed out.

Properties (annotated attributes and ``property`` members of the interface)
are replaced by stateful descriptors on the mock's own class, so reads return
the last value written, starting from a neutral default:

    handle = MockHandle(Settings)
    handle.setup_all_properties()
    settings = handle.object
    settings.retries          # 0
    settings.retries = 3
    settings.retries          # 3
"""
import inspect
import logging
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Generic, Optional, Type, TypeVar, get_origin
from unittest.mock import NonCallableMagicMock, seal

from src.mock_modules.exceptions import type_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_VALUES: Dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}
_DEFAULT_VALUES_BY_NAME = {t.__name__: v for t, v in _DEFAULT_VALUES.items()}

# Bases whose annotations and members belong to the typing machinery
_SKIPPED_MODULES = {"builtins", "typing", "typing_extensions", "abc"}


class MockBehavior(str, Enum):
    """How a mock treats members nobody configured."""
    LOOSE = "loose"    # Auto-create child mocks
    STRICT = "strict"  # Seal on finalization, unconfigured members raise


def default_for(annotation: Any) -> Any:
    """Return the neutral value for an annotation (False, 0, "", ... or None)."""
    if isinstance(annotation, str):
        return _DEFAULT_VALUES_BY_NAME.get(annotation.strip())
    if isinstance(annotation, type):
        return _DEFAULT_VALUES.get(annotation)
    return None


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.strip().startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _is_method(interface: type, name: str) -> bool:
    member = inspect.getattr_static(interface, name, None)
    if isinstance(member, (staticmethod, classmethod)):
        return True
    return callable(member) and not isinstance(member, property)


def stubbable_properties(interface: type) -> Dict[str, Any]:
    """Collect the public properties of an interface with their defaults.

    Annotated attributes use their class-level value when one is given,
    otherwise the neutral default for the annotation. ``property`` members
    use the return annotation of their getter.

    Args:
        interface: Class to inspect

    Returns:
        Dict of property name -> initial value
    """
    properties: Dict[str, Any] = {}
    for klass in reversed(interface.__mro__):
        if klass.__module__ in _SKIPPED_MODULES:
            continue
        namespace = vars(klass)
        for name, annotation in inspect.get_annotations(klass).items():
            if name.startswith("_") or _is_class_var(annotation):
                continue
            value = namespace.get(name)
            if name in namespace and not callable(value):
                properties[name] = value
            else:
                properties[name] = default_for(annotation)
        for name, member in namespace.items():
            if name.startswith("_") or not isinstance(member, property):
                continue
            returns = inspect.get_annotations(member.fget).get("return") if member.fget else None
            properties[name] = default_for(returns)
    return properties


class _StubbedProperty:
    """Data descriptor holding one property's state for a single mock.

    Installed on the mock's private class, so its state is per mock.
    A getter, once set, wins over stored values.
    """

    def __init__(self, name: str, value: Any = None):
        self.name = name
        self.value = value
        self.getter: Optional[Callable[[], Any]] = None

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        if self.getter is not None:
            return self.getter()
        return self.value

    def __set__(self, instance, value) -> None:
        self.value = value


class MockHandle(Generic[T]):
    """Handle on a mock that is still being configured.

    Args:
        mocked_type: Interface the mock satisfies
        behavior: How unconfigured members behave

    Example:
        handle = MockHandle(Permissions)
        handle.setup_get("is_allowed", lambda: provider.is_allowed)
        permissions = handle.object
    """

    def __init__(self, mocked_type: Type[T], behavior: MockBehavior = MockBehavior.LOOSE):
        if not isinstance(mocked_type, type):
            raise TypeError(f"Only classes can be mocked, got {mocked_type!r}")

        self.mocked_type = mocked_type
        self.behavior = MockBehavior(behavior)
        self._mock = NonCallableMagicMock(spec=mocked_type, name=mocked_type.__name__)
        self._defaults = stubbable_properties(mocked_type)
        self._members = set(dir(mocked_type)) | set(self._defaults)
        self._properties: Dict[str, _StubbedProperty] = {}
        self._finalized = False

    @property
    def mock(self) -> NonCallableMagicMock:
        """Raw mock, for stubbing beyond what the handle offers."""
        return self._mock

    @property
    def object(self) -> T:
        """The finished mock. Strict mocks are sealed on first access."""
        if not self._finalized:
            if self.behavior is MockBehavior.STRICT:
                seal(self._mock)
            self._finalized = True
            logger.debug(
                f"Mock of {type_name(self.mocked_type)} finalized",
                extra={
                    "mocked_type": type_name(self.mocked_type),
                    "behavior": self.behavior.value,
                    "stubbed_properties": sorted(self._properties),
                },
            )
        return self._mock

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def setup_all_properties(self) -> "MockHandle[T]":
        """Give every interface property last-write-wins behavior."""
        for name, value in self._defaults.items():
            self.setup_property(name, value)
        return self

    def setup_property(self, name: str, value: Any = None) -> "MockHandle[T]":
        """Track a property's value, starting from ``value``."""
        stubbed = self._install_property(name)
        stubbed.value = value
        stubbed.getter = None
        return self

    def setup_get(self, name: str, getter: Callable[[], Any]) -> "MockHandle[T]":
        """Make reads of a property return ``getter()``.

        The getter is called on every read, so it can reflect state that
        changes after the mock was handed out.
        """
        if not callable(getter):
            raise TypeError(f"getter for {name!r} must be callable")
        self._install_property(name).getter = getter
        return self

    def setup_method(
        self,
        name: str,
        returns: Any = None,
        side_effect: Any = None,
    ) -> NonCallableMagicMock:
        """Stub a method.

        Args:
            name: Method name on the interface
            returns: Value returned by calls (ignored when side_effect is set)
            side_effect: Callable, exception or iterable, as in unittest.mock

        Returns:
            The child mock standing in for the method
        """
        self._require_member(name)
        method = getattr(self._mock, name)
        if side_effect is not None:
            method.side_effect = side_effect
        else:
            method.return_value = returns
        return method

    def _install_property(self, name: str) -> _StubbedProperty:
        self._require_member(name)
        if name not in self._defaults and _is_method(self.mocked_type, name):
            raise TypeError(
                f"{type_name(self.mocked_type)}.{name} is a method; stub it with setup_method()"
            )
        stubbed = self._properties.get(name)
        if stubbed is None:
            stubbed = _StubbedProperty(name)
            # Every mock instance has its own class, so this stays local to it
            setattr(type(self._mock), name, stubbed)
            self._properties[name] = stubbed
        return stubbed

    def _require_member(self, name: str) -> None:
        if name not in self._members:
            raise AttributeError(f"{type_name(self.mocked_type)} has no member {name!r}")

    def __repr__(self) -> str:
        return (
            f"MockHandle({type_name(self.mocked_type)}, "
            f"behavior={self.behavior.value}, finalized={self._finalized})"
        )
