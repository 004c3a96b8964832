from fastapi import HTTPException


class AppError(HTTPException):
    """HTTP error carrying a stable machine-readable code."""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class BadRequest(AppError):
    status_code = 400
    code = "BAD_REQUEST"
    default_detail = "Invalid input"


class Unauthorized(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_detail = "Please login"

    def __init__(self, detail: str | None = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"
    default_detail = "Access denied"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_detail = "Not found"


class CompletionServiceError(AppError):
    status_code = 502
    code = "COMPLETION_FAILED"
    default_detail = "Completion service failed"


class StorageUnavailable(AppError):
    status_code = 503
    code = "STORAGE_UNAVAILABLE"
    default_detail = "Database not available"
