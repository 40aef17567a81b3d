"""
Services module for the task assigning user system.

This module contains the database backed user directory, its data source
handling and the pluggable users initializers.
"""

from .errors import (
    DirectoryServiceError,
    DirectoryConnectionError,
    DirectoryQueryError,
    InitializationError,
)
from .data_source import (
    DataSource,
    DataSourceRegistry,
    locate_data_source,
    create_schema,
    create_database,
)
from .initializers import (
    DBUsersInitializer,
    BenchmarksDBUsersInitializer,
    find_initializer,
)
from .user_system import (
    UserSystemService,
    DBUserSystemService,
    find_user_system_service,
)

__all__ = [
    # Errors
    "DirectoryServiceError",
    "DirectoryConnectionError",
    "DirectoryQueryError",
    "InitializationError",
    # Data sources
    "DataSource",
    "DataSourceRegistry",
    "locate_data_source",
    "create_schema",
    "create_database",
    # Users initializers
    "DBUsersInitializer",
    "BenchmarksDBUsersInitializer",
    "find_initializer",
    # User system services
    "UserSystemService",
    "DBUserSystemService",
    "find_user_system_service",
]
