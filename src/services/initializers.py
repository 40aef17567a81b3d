import sqlite3
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from domain import DirectoryConfig
from .data_source import DataSource
from .errors import InitializationError

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


class DBUsersInitializer(ABC):
    """Seeds the directory store once, when the user system service starts."""

    name: str = ""

    @abstractmethod
    def initialize_users(self, data_source: DataSource, config: DirectoryConfig) -> None:
        ...


def find_initializer(
    name: Optional[str], initializers: Iterable[DBUsersInitializer]
) -> Optional[DBUsersInitializer]:
    """Return the initializer declaring the given name, or None."""
    if not name:
        return None
    return next((i for i in initializers if i.name == name), None)


# =========================
#     BENCHMARK USERS
# =========================
INSERT_USER_QUERY = "INSERT INTO user (id, enabled, description) VALUES (?, ?, ?)"
INSERT_USER_GROUP_QUERY = "INSERT INTO user_group (user_id, group_id) VALUES (?, ?)"

# Child tables first so the user rows are unreferenced when deleted
DELETE_QUERIES = (
    "DELETE FROM user_skill WHERE user_id LIKE ?",
    "DELETE FROM user_group WHERE user_id LIKE ?",
    "DELETE FROM user WHERE id LIKE ?",
)

BASE_GROUP = "user"

# Generated user id prefix -> domain group
USER_PREFIX_GROUPS: dict[str, str] = {
    "HR-user": "HR",
    "IT-user": "IT",
    "ENG-user": "ENG",
}


def parse_users_set_size(value) -> int:
    """Validate the configured number of users to generate per prefix."""
    try:
        size = int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise InitializationError(f"usersSetSize wasn't properly set: {e}") from e
    if size < 0:
        raise InitializationError(
            f"usersSetSize wasn't properly set: {size} is negative"
        )
    return size


class BenchmarksDBUsersInitializer(DBUsersInitializer):
    """
    Regenerates the benchmark users: N users for each of the HR, IT and ENG
    prefixes, each in the "user" group plus its domain group.

    Previously generated rows for the prefixes are removed first, so running
    it again with the same size leaves the store unchanged. Must not run
    while the directory is being queried for the same users.
    """

    name = "BenchmarksDBUsersInitializer"

    def __init__(self, prefix_groups: Optional[dict[str, str]] = None):
        self.prefix_groups = dict(prefix_groups or USER_PREFIX_GROUPS)

    def initialize_users(self, data_source: DataSource, config: DirectoryConfig) -> None:
        users_set_size = parse_users_set_size(config.users_set_size)
        logger.info(
            f"🔄 Generating {users_set_size} benchmark user(s) for prefixes "
            f"{list(self.prefix_groups)}"
        )

        try:
            with data_source.connection() as con:
                # Commits on success, rolls back the whole invocation on error
                with con:
                    self._delete_generated_users(con)
                    self._insert_users(con, users_set_size)
        except sqlite3.Error as e:
            logger.error(f"❌ Benchmark users initialization rolled back: {e}")
            raise InitializationError(str(e)) from e

        logger.info(
            f"✅ Generated {users_set_size * len(self.prefix_groups)} benchmark user(s)"
        )

    def _delete_generated_users(self, con: sqlite3.Connection) -> None:
        for prefix in self.prefix_groups:
            for query in DELETE_QUERIES:
                con.execute(query, (prefix + "%",))

    def _insert_users(self, con: sqlite3.Connection, users_set_size: int) -> None:
        for i in range(1, users_set_size + 1):
            for prefix, group in self.prefix_groups.items():
                user_id = f"{prefix}{i}"
                con.execute(INSERT_USER_QUERY, (user_id, 1, f"{user_id} Description"))
                con.execute(INSERT_USER_GROUP_QUERY, (user_id, BASE_GROUP))
                con.execute(INSERT_USER_GROUP_QUERY, (user_id, group))
