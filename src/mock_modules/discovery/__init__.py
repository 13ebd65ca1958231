"""Provider discovery: type scanning, conflict resolution and the registry."""
from src.mock_modules.discovery.scanner import (
    LoadedTypeScanner,
    StaticTypeScanner,
    is_provider_type,
)
from src.mock_modules.discovery.conflicts import (
    ConflictResolutionPolicy,
    decline_conflict,
    import_dotted,
)
from src.mock_modules.discovery.registry import (
    ProviderRegistry,
    clear_shared_registries,
    get_shared_registry,
)

__all__ = [
    # Scanning
    "LoadedTypeScanner",
    "StaticTypeScanner",
    "is_provider_type",
    # Conflicts
    "ConflictResolutionPolicy",
    "decline_conflict",
    "import_dotted",
    # Registry
    "ProviderRegistry",
    "clear_shared_registries",
    "get_shared_registry",
]
