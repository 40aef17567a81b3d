import os
import sqlite3
from contextlib import closing, contextmanager
from typing import Iterator, Optional

from .errors import DirectoryConnectionError

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS user (
    id TEXT PRIMARY KEY,
    enabled SMALLINT NOT NULL DEFAULT 1,
    description TEXT
);
CREATE TABLE IF NOT EXISTS user_group (
    user_id TEXT NOT NULL REFERENCES user(id),
    group_id TEXT NOT NULL,
    PRIMARY KEY (user_id, group_id)
);
CREATE TABLE IF NOT EXISTS user_skill (
    user_id TEXT NOT NULL REFERENCES user(id),
    skill_id TEXT NOT NULL,
    PRIMARY KEY (user_id, skill_id)
);
"""


class DataSource:
    """Hands out short-lived connections to one SQLite database."""

    def __init__(self, database: str, timeout: float = 5.0):
        self.database = database
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"DataSource({self.database!r})"

    @property
    def uri(self) -> str:
        if self.database.startswith("file:"):
            return self.database
        return f"file:{os.path.abspath(self.database)}?mode=rw"

    def open(self) -> sqlite3.Connection:
        """Open a new connection. The database must already exist."""
        try:
            con = sqlite3.connect(
                self.uri, uri=True, timeout=self.timeout, check_same_thread=False
            )
        except sqlite3.Error as e:
            raise DirectoryConnectionError(
                f"Unable to open database {self.database}: {e}"
            ) from e
        try:
            con.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            con.close()
            raise DirectoryConnectionError(
                f"Unable to open database {self.database}: {e}"
            ) from e
        con.row_factory = sqlite3.Row
        return con

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Connection scoped to the with block, closed on every exit path."""
        with closing(self.open()) as con:
            yield con


class DataSourceRegistry:
    """Name based lookup of data sources, as the host's naming service provides."""

    def __init__(self):
        self._bindings: dict[str, DataSource] = {}

    def bind(self, name: str, data_source: DataSource) -> None:
        self._bindings[name] = data_source

    def unbind(self, name: str) -> None:
        self._bindings.pop(name, None)

    def lookup(self, name: str) -> DataSource:
        try:
            return self._bindings[name]
        except KeyError:
            raise DirectoryConnectionError(
                f"Unable to find data source under name {name}"
            ) from None

    def __contains__(self, name: str) -> bool:
        return name in self._bindings


def locate_data_source(
    locator: object, registry: Optional[DataSourceRegistry] = None
) -> DataSource:
    """
    Resolve a configured locator into a usable data source.

    Args:
        locator: A DataSource, a name bound in the registry, or a SQLite
            database path / file: URI
        registry: Names to look the locator up in first

    Returns:
        DataSource: A data source whose database could be opened

    Raises:
        DirectoryConnectionError: If the locator names nothing reachable
    """
    if isinstance(locator, DataSource):
        data_source = locator
    elif not isinstance(locator, str) or not locator:
        raise DirectoryConnectionError(f"Invalid data source locator: {locator!r}")
    elif registry is not None and locator in registry:
        data_source = registry.lookup(locator)
    elif locator.startswith("file:") or os.path.exists(locator):
        data_source = DataSource(locator)
    else:
        raise DirectoryConnectionError(
            f"Unable to find data source under name {locator}"
        )

    # Fail fast on an unreachable store rather than on the first query
    with data_source.connection() as con:
        try:
            con.execute("SELECT 1")
        except sqlite3.Error as e:
            raise DirectoryConnectionError(
                f"Unable to reach data source {data_source!r}: {e}"
            ) from e
    logger.debug(f"Located data source {data_source!r}")
    return data_source


def create_schema(data_source: DataSource) -> None:
    """Create the user, user_group and user_skill tables if missing."""
    with data_source.connection() as con:
        con.executescript(SCHEMA)
        con.commit()


def create_database(path: str) -> DataSource:
    """Create a SQLite database file with the directory schema."""
    sqlite3.connect(path).close()
    data_source = DataSource(path)
    create_schema(data_source)
    logger.info(f"Created directory database at {path}")
    return data_source
