"""
Typed failures raised by the activity-log core.

Each error carries the HTTP status code and a short error code so the API
layer can turn it into a structured response without a lookup table:

    raise DuplicateEntry("You already logged problem #1 today.")
"""


class ActivityLogError(Exception):
    """Base class for every failure the core reports to its caller."""

    status_code: int = 500
    error_code: str = "activity_log_error"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class DuplicateEntry(ActivityLogError):
    """The problem was already logged by this user on that date."""

    status_code = 409
    error_code = "duplicate_entry"


class ProblemNotFound(ActivityLogError):
    """The problem id does not resolve in the catalog."""

    status_code = 404
    error_code = "problem_not_found"


class StorageCorruption(ActivityLogError):
    """A persisted record could not be parsed into an activity log."""

    status_code = 500
    error_code = "storage_corruption"


class InvalidInput(ActivityLogError):
    """Malformed date, time or problem id. Nothing was written."""

    status_code = 422
    error_code = "invalid_input"
