from typing import Dict, Iterable

from labels import ExtractionRegistry, LabelExtractor, DEFAULT_EXTRACTORS
from services import UserSystemService


class AppState:
    """Central state for the extensions loaded into one process."""

    def __init__(self):
        self._label_registry = ExtractionRegistry()
        self._user_systems: Dict[str, UserSystemService] = {}

    @property
    def label_registry(self) -> ExtractionRegistry:
        """Get the label extraction registry."""
        return self._label_registry

    def register_extractors(
        self, extractors: Iterable[LabelExtractor] = DEFAULT_EXTRACTORS
    ) -> None:
        """Resolve a full set of discovered extractors into the registry."""
        self._label_registry.register(extractors)

    def add_user_system(self, service: UserSystemService) -> None:
        """Add a started user system service to the state."""
        self._user_systems[service.name] = service

    def get_user_system(self, name: str) -> UserSystemService | None:
        """Get a user system service by name."""
        return self._user_systems.get(name)

    def clear_user_systems(self) -> None:
        """Forget all user system services."""
        self._user_systems.clear()


# Global app state instance
app_state = AppState()
