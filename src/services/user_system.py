import sqlite3
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from domain import DirectoryConfig, DIRECTORY_CONFIG
from constraint_solvers.task_assigning.domain import Group, User

from .data_source import DataSource, DataSourceRegistry, locate_data_source
from .errors import DirectoryConnectionError, DirectoryQueryError, InitializationError
from .initializers import DBUsersInitializer, find_initializer

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


class UserSystemService(ABC):
    """Source of the users and groups the task assigning host plans with."""

    name: str = ""

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def test(self) -> None:
        """Raise if the underlying user system is not reachable."""

    @abstractmethod
    def find_all_users(self) -> List[User]:
        ...

    @abstractmethod
    def find_user(self, user_id: Optional[str]) -> Optional[User]:
        ...


def find_user_system_service(
    name: str, services: Iterable[UserSystemService]
) -> Optional[UserSystemService]:
    """Return the service declaring the given name, or None."""
    return next((s for s in services if s.name == name), None)


# =========================
#        QUERIES
# =========================
ENABLED = 1

_USERS_JOIN = (
    "SELECT u.id, u.enabled, g.group_id, s.skill_id FROM user u "
    "LEFT JOIN user_group g ON (u.id = g.user_id) "
    "LEFT JOIN user_skill s ON (u.id = s.user_id) "
)

FIND_ALL_USERS_QUERY = _USERS_JOIN + "WHERE u.enabled = ?"

# Stored ids are compared trimmed, as find_all_users reports them
FIND_USER_QUERY = _USERS_JOIN + "WHERE TRIM(u.id) = ? AND u.enabled = ?"


def _trimmed(value) -> Optional[str]:
    return str(value).strip() if value is not None else None


class _UserBuilder:
    """Accumulates the group and skill rows seen for one user id."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        self.groups: set[Group] = set()
        self.skills: set[str] = set()

    def add_row(self, row: sqlite3.Row) -> None:
        group_id = _trimmed(row["group_id"])
        skill_id = _trimmed(row["skill_id"])
        if group_id:
            self.groups.add(Group(group_id))
        if skill_id:
            self.skills.add(skill_id)

    def build(self) -> User:
        return User(
            id=self.user_id,
            groups=frozenset(self.groups),
            skills=frozenset(self.skills),
        )


def fold_user_rows(rows: Iterable[sqlite3.Row]) -> List[User]:
    """
    Fold joined user/group/skill rows into one User per distinct id.

    Users keep the order in which their id first appears. Rows with an
    empty id are malformed and skipped; empty group or skill values are
    ignored.
    """
    builders: dict[str, _UserBuilder] = {}
    for row in rows:
        user_id = _trimmed(row["id"])
        if not user_id:
            logger.debug("Skipping directory row without user id")
            continue
        builder = builders.get(user_id)
        if builder is None:
            builder = builders[user_id] = _UserBuilder(user_id)
        builder.add_row(row)
    return [b.build() for b in builders.values()]


# =========================
#    DB USER SYSTEM
# =========================
class DBUserSystemService(UserSystemService):
    """
    Database based user system service.

    Reads users, their groups and their skills from the user, user_group and
    user_skill tables. Only enabled users (enabled = 1) are visible. Every
    call opens and closes its own connection, so the service can be shared
    between threads once started. Callers needing a time limit must apply it
    around the calls; none is enforced here beyond the store's own.
    """

    name = "DBUserSystemService"

    def __init__(
        self,
        config: Optional[DirectoryConfig] = None,
        data_sources: Optional[DataSourceRegistry] = None,
        initializers: Iterable[DBUsersInitializer] = (),
    ):
        self.config = config if config is not None else DIRECTORY_CONFIG
        self.data_sources = data_sources
        self.initializers = list(initializers)
        self._data_source: Optional[DataSource] = None

    @property
    def data_source(self) -> DataSource:
        if self._data_source is None:
            raise DirectoryConnectionError(f"{self.name} has not been started")
        return self._data_source

    def start(self) -> None:
        """
        Locate the backing store and run the configured users initializer.

        Raises:
            DirectoryConnectionError: If the data source cannot be located
            InitializationError: If the users initialization fails
        """
        self._data_source = None
        data_source = locate_data_source(self.config.data_source, self.data_sources)

        try:
            self._initialize_users(data_source)
        except InitializationError:
            raise
        except Exception as e:
            raise InitializationError(
                f"An error was produced during DBUsers initialization: {e}"
            ) from e

        # Only a fully initialized store is served
        self._data_source = data_source
        logger.info(f"🚀 {self.name} started on {data_source!r}")

    def _initialize_users(self, data_source: DataSource) -> None:
        initializer_name = self.config.users_initializer
        if not initializer_name:
            logger.info("No DBUsersInitializer has been configured")
            return

        initializer = find_initializer(initializer_name, self.initializers)
        if initializer is None:
            logger.info(
                f"DBUsersInitializer: {initializer_name} was not found among "
                f"{[i.name for i in self.initializers]}"
            )
            return

        initializer.initialize_users(data_source, self.config)

    def test(self) -> None:
        """Execute a read against the store without returning any data."""
        data_source = self.data_source
        try:
            with data_source.connection() as con:
                con.execute(FIND_ALL_USERS_QUERY, (ENABLED,))
        except (sqlite3.Error, DirectoryConnectionError) as e:
            raise DirectoryQueryError(
                f"An error was produced while testing the user system: {e}"
            ) from e

    health_check = test

    def find_all_users(self) -> List[User]:
        data_source = self.data_source
        try:
            with data_source.connection() as con:
                rows = con.execute(FIND_ALL_USERS_QUERY, (ENABLED,)).fetchall()
        except (sqlite3.Error, DirectoryConnectionError) as e:
            raise DirectoryQueryError(
                f"An error was produced while finding all users: {e}"
            ) from e

        users = fold_user_rows(rows)
        logger.debug(f"Found {len(users)} enabled user(s)")
        return users

    def find_user(self, user_id: Optional[str]) -> Optional[User]:
        user_id = _trimmed(user_id)
        if not user_id:
            return None
        data_source = self.data_source
        try:
            with data_source.connection() as con:
                rows = con.execute(FIND_USER_QUERY, (user_id, ENABLED)).fetchall()
        except (sqlite3.Error, DirectoryConnectionError) as e:
            raise DirectoryQueryError(
                f"An error was produced while finding user {user_id}: {e}"
            ) from e

        users = fold_user_rows(rows)
        return users[0] if users else None
