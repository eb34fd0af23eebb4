from src.core.exceptions.base import (
    AppException,
    NotFoundError,
    ValidationError,
    ExportFieldTooLongError,
    SubmissionConflictError,
    StoreUnavailableError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ValidationError",
    "ExportFieldTooLongError",
    "SubmissionConflictError",
    "StoreUnavailableError",
]
