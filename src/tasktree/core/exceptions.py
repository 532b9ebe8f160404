"""Custom exception hierarchy for tasktree."""


class TaskTreeError(Exception):
    """Base exception for all tasktree errors."""


class SearchCancelledError(TaskTreeError):
    """Raised when a search is cancelled before it completes.

    Callers treat this as "the attempt is void": no partial results are
    returned and it should never be reported as a failure.
    """

    def __init__(self, message: str = "Search operation was cancelled") -> None:
        super().__init__(message)


class QueryValidationError(TaskTreeError):
    """Raised when a search query or pagination request is malformed."""


class StorageError(TaskTreeError):
    """Raised when a record source cannot be read."""


class ConfigError(TaskTreeError):
    """Raised when configuration is invalid."""
