"""Sync domain exceptions."""

from doorsign.core.exceptions import AppException


class SyncFailedError(AppException):
    """Raised by the sync route when a run failed as a whole.

    The failure is already recorded in the ledger when this is raised.
    """

    status_code = 500
    error_type = "sync_failed"

    def __init__(self, message: str = "Failed to sync statuses"):
        super().__init__(message)
