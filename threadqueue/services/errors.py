# threadqueue/services/errors.py
"""
Errors reported by the composition orchestrator.

    CompositionError
    +-- ValidationError   local precondition failed, nothing was sent to the store
    +-- PersistError      create/update failed
    +-- ScheduleError     schedule failed after a successful persist; carries post_id
"""
from typing import Optional
from threadqueue.schemas.post_schema import ComposeErr, ErrorKind


class CompositionError(Exception):
    kind: ErrorKind

    def __init__(self, message: str, post_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.post_id = post_id

    def to_result(self) -> ComposeErr:
        return ComposeErr(kind=self.kind, message=self.message, post_id=self.post_id)


class ValidationError(CompositionError):
    kind = ErrorKind.VALIDATION


class PersistError(CompositionError):
    kind = ErrorKind.PERSIST


class ScheduleError(CompositionError):
    kind = ErrorKind.SCHEDULE

    def __init__(self, message: str, post_id: str):
        super().__init__(message, post_id=post_id)
