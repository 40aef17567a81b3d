import os
from dataclasses import dataclass

# =========================
#     ENVIRONMENT NAMES
# =========================
DATA_SOURCE_ENV_VAR = "TASK_ASSIGNING_DB_DS"
USERS_INITIALIZER_ENV_VAR = "TASK_ASSIGNING_DB_USERS_INITIALIZER"
USERS_SET_SIZE_ENV_VAR = "TASK_ASSIGNING_DB_USERS_SET_SIZE"

DEFAULT_DATA_SOURCE = "datasources/ExampleDS"
DEFAULT_USERS_SET_SIZE = "0"


# =========================
#     DIRECTORY CONFIG
# =========================
@dataclass(frozen=True)
class DirectoryConfig:
    """Configuration for the database backed user system service.

    data_source may be a resource name bound in a DataSourceRegistry, a
    SQLite database path or ``file:`` URI, or a DataSource instance.
    users_set_size is kept raw and only validated when seeding runs.
    """

    data_source: object = DEFAULT_DATA_SOURCE
    users_initializer: str | None = None
    users_set_size: str | int = DEFAULT_USERS_SET_SIZE

    def __post_init__(self):
        # Defaults are applied at construction, never at call time
        if self.data_source is None or self.data_source == "":
            object.__setattr__(self, "data_source", DEFAULT_DATA_SOURCE)
        if self.users_initializer is not None:
            object.__setattr__(
                self, "users_initializer", self.users_initializer.strip() or None
            )
        if self.users_set_size is None or self.users_set_size == "":
            object.__setattr__(self, "users_set_size", DEFAULT_USERS_SET_SIZE)

    @property
    def seeding_enabled(self) -> bool:
        return self.users_initializer is not None

    @staticmethod
    def from_env() -> "DirectoryConfig":
        """Build a configuration from the TASK_ASSIGNING_DB_* environment variables."""
        return DirectoryConfig(
            data_source=os.getenv(DATA_SOURCE_ENV_VAR, DEFAULT_DATA_SOURCE),
            users_initializer=os.getenv(USERS_INITIALIZER_ENV_VAR),
            users_set_size=os.getenv(USERS_SET_SIZE_ENV_VAR, DEFAULT_USERS_SET_SIZE),
        )


# Global configuration instance, read once at import
DIRECTORY_CONFIG = DirectoryConfig.from_env()
