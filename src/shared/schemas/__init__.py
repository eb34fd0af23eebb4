from src.shared.schemas.base import (
    BaseSchema,
    PaginatedResponse,
    SuccessResponse,
    ApiResponse,
    ErrorResponse,
    ErrorDetail,
)

__all__ = [
    "BaseSchema",
    "PaginatedResponse",
    "SuccessResponse",
    "ApiResponse",
    "ErrorResponse",
    "ErrorDetail",
]
