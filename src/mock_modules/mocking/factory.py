"""Default stub factory backed by unittest.mock."""
import logging
from typing import Type, TypeVar

from src.mock_modules.exceptions import type_name
from src.mock_modules.mocking.handle import MockBehavior, MockHandle

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnittestStubFactory:
    """Create permissive stubs with every property auto-implemented.

    Example:
        factory = UnittestStubFactory()
        handle = factory.create_stub(Settings, MockBehavior.LOOSE)
        settings = handle.object
    """

    def create_stub(self, interface: Type[T], behavior: MockBehavior = MockBehavior.LOOSE) -> MockHandle[T]:
        handle = MockHandle(interface, behavior)
        handle.setup_all_properties()
        logger.debug(
            f"Stub created for {type_name(interface)}",
            extra={"mocked_type": type_name(interface), "behavior": handle.behavior.value},
        )
        return handle
