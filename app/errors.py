# app/errors.py
from typing import Any, Dict, Optional


class ActionHistoryError(Exception):
    """Base error of the action history subsystem."""

    status_code: int = 500
    code: str = "ACTION_HISTORY_ERROR"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(ActionHistoryError):
    status_code = 400
    code = "VALIDATION_ERROR"


class UnsupportedType(ValidationError):
    """No adapter is registered for the item type."""

    status_code = 422
    code = "UNSUPPORTED_TYPE"

    def __init__(self, item_type: str):
        self.item_type = item_type
        super().__init__(
            f"Unsupported item type: {item_type}",
            detail={"item_type": item_type},
        )


class NotFound(ActionHistoryError):
    status_code = 404
    code = "NOT_FOUND"


class NoSnapshotAvailable(ActionHistoryError):
    status_code = 400
    code = "NO_SNAPSHOT_AVAILABLE"

    def __init__(self, message: str = "Cannot undo this action - no before state available"):
        super().__init__(message)


class NoAfterSnapshotAvailable(ActionHistoryError):
    status_code = 400
    code = "NO_AFTER_SNAPSHOT_AVAILABLE"

    def __init__(self, message: str = "Cannot redo this action - no after state available"):
        super().__init__(message)


class TargetNotFound(ActionHistoryError):
    """The entity a snapshot points at no longer exists."""

    status_code = 404
    code = "TARGET_NOT_FOUND"


class ReplayFailed(ActionHistoryError):
    status_code = 500
    code = "REPLAY_FAILED"


class UndoFailed(ReplayFailed):
    code = "UNDO_FAILED"

    def __init__(self, message: str = "Failed to perform undo operation"):
        super().__init__(message)


class RedoFailed(ReplayFailed):
    code = "REDO_FAILED"

    def __init__(self, message: str = "Failed to perform redo operation"):
        super().__init__(message)
