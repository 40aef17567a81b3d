class DirectoryServiceError(Exception):
    """Base class for failures of the database backed user system."""

    pass


class DirectoryConnectionError(DirectoryServiceError, ConnectionError):
    """Raised when the backing store cannot be located or opened."""

    pass


class DirectoryQueryError(DirectoryServiceError):
    """Raised when a directory query fails. No partial results are returned."""

    pass


class InitializationError(DirectoryServiceError):
    """Raised when users seeding is misconfigured or its transaction fails."""

    pass
