"""Typed failures raised by the reading plan engine.

Callers distinguish "fix your input" from "try again later" from
"this record is gone" by exception class or by ``kind``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories exposed to callers."""
    VALIDATION_FAILED = "validation_failed"
    STORAGE_FAILURE = "storage_failure"
    NOT_FOUND = "not_found"


class ReadingPlanError(Exception):
    """Base class for engine failures."""
    
    kind: ErrorKind


class ValidationFailed(ReadingPlanError):
    """Malformed or out-of-range input. Nothing was persisted."""
    
    kind = ErrorKind.VALIDATION_FAILED
    
    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class StorageFailure(ReadingPlanError):
    """The persistence collaborator failed."""
    
    kind = ErrorKind.STORAGE_FAILURE
    
    def __init__(self, cause: Optional[BaseException] = None, message: str = "Storage operation failed"):
        super().__init__(f"{message}: {cause}" if cause else message)
        self.cause = cause


class NotFound(ReadingPlanError):
    """A referenced record does not exist."""
    
    kind = ErrorKind.NOT_FOUND
    
    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class GoalValidationError(ValueError):
    """Raised by goal resolution for input that cannot produce a plan."""
    
    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason
