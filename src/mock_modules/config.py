"""mock-modules configuration."""
import logging
from typing import Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.mock_modules.mocking.handle import MockBehavior

logger = logging.getLogger(__name__)


class MockModulesSettings(BaseSettings):
    """Provider discovery and mock construction settings.

    Settings are loaded from ``MOCK_MODULES_*`` environment variables (or a
    ``.env`` file) with defaults that scan every loaded module.
    """

    model_config = SettingsConfigDict(
        env_prefix="MOCK_MODULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider_packages: List[str] = Field(
        default_factory=list,
        description="Packages imported and scanned for providers (empty: all loaded modules)"
    )
    default_behavior: MockBehavior = Field(
        default=MockBehavior.LOOSE,
        description="Behavior of auto-generated mocks"
    )
    conflict_resolutions: Dict[str, str] = Field(
        default_factory=dict,
        description="Dotted interface path -> dotted provider path used on collisions"
    )

    @field_validator("provider_packages")
    @classmethod
    def validate_provider_packages(cls, v: List[str]) -> List[str]:
        """Strip package names and reject blank ones."""
        packages = [package.strip() for package in v]
        if any(not package for package in packages):
            raise ValueError("provider_packages must not contain blank names")
        return packages

    @field_validator("conflict_resolutions")
    @classmethod
    def validate_conflict_resolutions(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Reject blank dotted paths."""
        for interface, provider in v.items():
            if not interface.strip() or not provider.strip():
                raise ValueError("conflict_resolutions must map dotted paths to dotted paths")
        return {interface.strip(): provider.strip() for interface, provider in v.items()}
