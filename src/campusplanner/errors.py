"""Error hierarchy for the campus planner.

Only storage failures are meant to cross the core boundary. Data-quality
problems are caught where they are detected and turned into diagnostics, so
their exception types exist mainly for the storage adapters and key codec.

Example:
    try:
        store.commit_batch(updates)
    except StorageError as exc:
        planner.error = f"Failed during batch save: {exc}"
"""


class PlannerError(Exception):
    """Base exception for all planner errors."""

    pass


class DataQualityError(PlannerError):
    """Input data that cannot be used for scheduling.

    Examples: missing arrival/departure timestamps, inverted stays.
    """

    pass


class InvalidKeyError(DataQualityError):
    """A composite schedule key that does not decode to (date, group id)."""

    def __init__(self, key: str, reason: str = "malformed key"):
        super().__init__(f"Invalid schedule key {key!r}: {reason}")
        self.key = key
        self.reason = reason


class StorageError(PlannerError):
    """Read or write against the document store failed."""

    pass


class CommitError(StorageError):
    """An atomic batch commit failed. Nothing in the batch was written."""

    def __init__(self, message: str, batch_size: int = 0):
        super().__init__(message)
        self.batch_size = batch_size


class ConfigurationError(PlannerError):
    """Planner configuration is missing or inconsistent."""

    pass
