"""Unit tests for MockHandle and the unittest.mock stub factory."""
from typing import Optional

import pytest

from src.mock_modules.mocking import (
    MockBehavior,
    MockHandle,
    UnittestStubFactory,
    default_for,
    stubbable_properties,
)
from tests.fixtures.example_domain import Clock, Logger, Permissions, Settings


class TestPropertyDefaults:
    """Test neutral defaults derived from annotations."""

    def test_builtin_annotations(self):
        """Should map builtin types to their neutral value."""
        assert default_for(bool) is False
        assert default_for(int) == 0
        assert default_for(float) == 0.0
        assert default_for(str) == ""
        assert default_for(bytes) == b""

    def test_string_annotations(self):
        """Should understand postponed (string) annotations."""
        assert default_for("bool") is False
        assert default_for(" int ") == 0

    def test_other_annotations_default_to_none(self):
        """Should fall back to None for anything else."""
        assert default_for(list) is None
        assert default_for(Optional[int]) is None
        assert default_for(Logger) is None

    def test_collects_annotated_attributes(self):
        """Should collect annotations, honoring class-level values."""
        assert stubbable_properties(Settings) == {
            "name": "",
            "retries": 0,
            "timeout": 0.0,
            "verbose": False,
            "region": "eu-west-1",
        }

    def test_collects_property_members(self):
        """Should use the getter's return annotation for properties."""
        assert stubbable_properties(Clock) == {"now": 0.0}

    def test_methods_are_not_properties(self):
        """Should leave methods out."""
        assert stubbable_properties(Logger) == {}


class TestMockHandleProperties:
    """Test stateful property stubbing."""

    def test_setup_all_properties_starts_from_defaults(self):
        """Should expose neutral defaults after setup_all_properties."""
        settings = MockHandle(Settings).setup_all_properties().object

        assert settings.name == ""
        assert settings.retries == 0
        assert settings.verbose is False
        assert settings.region == "eu-west-1"

    def test_last_write_wins(self):
        """Should return the last value written."""
        settings = MockHandle(Settings).setup_all_properties().object

        settings.retries = 3
        settings.retries = 5
        settings.name = "primary"

        assert settings.retries == 5
        assert settings.name == "primary"

    def test_properties_are_independent_per_mock(self):
        """Should not share property state between mocks of one interface."""
        first = MockHandle(Settings).setup_all_properties().object
        second = MockHandle(Settings).setup_all_properties().object

        first.name = "first"

        assert second.name == ""

    def test_setup_property_sets_initial_value(self):
        """Should start a single property from the given value."""
        handle = MockHandle(Settings)
        handle.setup_property("retries", 7)

        assert handle.object.retries == 7

    def test_setup_get_calls_getter_on_every_read(self):
        """Should reflect state that changes after the mock is handed out."""
        state = {"allowed": False}
        handle = MockHandle(Permissions).setup_all_properties()
        handle.setup_get("is_allowed", lambda: state["allowed"])
        permissions = handle.object

        assert permissions.is_allowed is False
        state["allowed"] = True
        assert permissions.is_allowed is True

    def test_setup_get_wins_over_writes(self):
        """Should keep returning the getter's value after a write."""
        handle = MockHandle(Permissions).setup_all_properties()
        handle.setup_get("is_allowed", lambda: True)
        permissions = handle.object

        permissions.is_allowed = False

        assert permissions.is_allowed is True

    def test_setup_get_requires_callable(self):
        """Should reject a non-callable getter."""
        with pytest.raises(TypeError, match="must be callable"):
            MockHandle(Permissions).setup_get("is_allowed", True)

    def test_abstract_property_is_stubbed(self):
        """Should replace abstract properties and keep isinstance working."""
        clock = MockHandle(Clock).setup_all_properties().object

        assert clock.now == 0.0
        clock.now = 12.5
        assert clock.now == 12.5
        assert isinstance(clock, Clock)

    def test_methods_cannot_become_properties(self):
        """Should refuse to replace a method with a value."""
        handle = MockHandle(Settings)

        with pytest.raises(TypeError, match="is a method"):
            handle.setup_property("reload", True)
        with pytest.raises(TypeError, match="is a method"):
            handle.setup_get("reload", lambda: True)

        handle.setup_method("reload", returns=True)
        assert handle.object.reload() is True

    def test_unknown_member_is_rejected(self):
        """Should refuse to stub members the interface does not have."""
        with pytest.raises(AttributeError, match="no member 'missing'"):
            MockHandle(Settings).setup_property("missing", 1)


class TestMockHandleMethods:
    """Test method stubbing."""

    def test_setup_method_return_value(self):
        """Should return the configured value and record calls."""
        handle = MockHandle(Settings)
        method = handle.setup_method("reload", returns=True)

        assert handle.object.reload() is True
        method.assert_called_once_with()

    def test_setup_method_side_effect(self):
        """Should apply unittest.mock side effects."""
        handle = MockHandle(Settings)
        handle.setup_method("reload", side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            handle.object.reload()

    def test_loose_mock_auto_creates_members(self):
        """Should accept calls to unconfigured methods."""
        logger = MockHandle(Logger).object

        logger.log("hello")

        logger.log.assert_called_once_with("hello")

    def test_members_outside_interface_raise(self):
        """Should keep the spec of the interface."""
        logger = MockHandle(Logger).object

        with pytest.raises(AttributeError):
            logger.not_on_the_interface


class TestMockHandleBehavior:
    """Test loose and strict behavior."""

    def test_defaults_to_loose(self):
        """Should be loose unless asked otherwise."""
        assert MockHandle(Logger).behavior is MockBehavior.LOOSE

    def test_accepts_behavior_value(self):
        """Should accept the string value of a behavior."""
        assert MockHandle(Logger, "strict").behavior is MockBehavior.STRICT

    def test_strict_mock_rejects_unconfigured_members(self):
        """Should seal strict mocks when finalized."""
        handle = MockHandle(Logger, MockBehavior.STRICT)
        logger = handle.object

        with pytest.raises(AttributeError):
            logger.log("hello")

    def test_strict_mock_keeps_configured_members(self):
        """Should serve members configured before finalization."""
        handle = MockHandle(Settings, MockBehavior.STRICT).setup_all_properties()
        handle.setup_method("reload", returns=False)
        settings = handle.object

        assert settings.reload() is False
        settings.retries = 2
        assert settings.retries == 2

    def test_object_marks_handle_finalized(self):
        """Should finalize on first access to object."""
        handle = MockHandle(Logger)
        assert handle.is_finalized is False

        first = handle.object

        assert handle.is_finalized is True
        assert handle.object is first

    def test_rejects_non_classes(self):
        """Should only mock classes."""
        with pytest.raises(TypeError, match="Only classes can be mocked"):
            MockHandle(Optional[int])


class TestUnittestStubFactory:
    """Test the default stub factory."""

    def test_creates_handle_with_properties(self):
        """Should set up every property of the interface."""
        handle = UnittestStubFactory().create_stub(Settings, MockBehavior.LOOSE)

        assert handle.mocked_type is Settings
        assert handle.object.timeout == 0.0

    def test_passes_behavior(self):
        """Should build the handle with the requested behavior."""
        handle = UnittestStubFactory().create_stub(Logger, MockBehavior.STRICT)

        assert handle.behavior is MockBehavior.STRICT
