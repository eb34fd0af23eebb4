from typing import Any


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id={identifier} not found"
        super().__init__(message=message, status_code=404)


class ValidationError(AppException):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message=message, status_code=422, details=details)


class ExportFieldTooLongError(ValidationError):
    """A value does not fit its fixed-width column."""

    def __init__(self, field: str, value: str, width: int, line: int):
        message = (
            f"Line {line}: {field} '{value}' is {len(value)} characters long, "
            f"the column allows {width}"
        )
        super().__init__(message=message, field=field)
        self.details.update({"width": width, "line": line})


class SubmissionConflictError(AppException):
    """Concurrent submissions kept colliding on the daily counter."""

    def __init__(self, attempts: int):
        message = (
            f"Could not allocate a correlative after {attempts} attempts "
            "because of concurrent submissions. Please try again."
        )
        super().__init__(message=message, status_code=409, details={"attempts": attempts})


class StoreUnavailableError(AppException):
    """Database unreachable or connection pool exhausted."""

    def __init__(self, message: str | None = None):
        msg = message or "The database is temporarily unavailable. Please try again."
        super().__init__(message=msg, status_code=503)
