# src/chirper/api/responses.py
"""
Standardized API Response Models

Provides consistent error envelopes for all API endpoints and the mapping
from domain errors to HTTP status codes.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..core.errors import (
    ChirperError,
    ForbiddenError,
    NotFoundError,
    StoreError,
    ValidationError,
)


# -------------------------
# Error Codes
# -------------------------

class ErrorCode(str, Enum):
    """
    Standardized error codes for API responses.
    Format: {CATEGORY}_{SPECIFIC_ERROR}
    """
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


ERROR_CODE_TO_HTTP_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.AUTH_REQUIRED: 401,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 500,
}


def get_http_status(error_code: ErrorCode) -> int:
    """Get HTTP status code for an error code."""
    return ERROR_CODE_TO_HTTP_STATUS.get(error_code, 500)


# -------------------------
# Response Models
# -------------------------

class ErrorDetail(BaseModel):
    """Error payload inside the envelope."""
    code: ErrorCode
    message: str
    detail: Optional[str] = None
    field_errors: Optional[List[Dict[str, str]]] = None


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    success: bool = False
    error: ErrorDetail
    timestamp: datetime = Field(default_factory=datetime.utcnow)


def error_response(
    code: ErrorCode,
    message: str,
    detail: Optional[str] = None,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """Create an error response body."""
    return ErrorResponse(
        error=ErrorDetail(
            code=code,
            message=message,
            detail=detail,
            field_errors=field_errors,
        )
    ).model_dump(mode="json")


# -------------------------
# Domain error translation
# -------------------------

def describe_error(exc: ChirperError) -> Dict[str, Any]:
    """Map a domain error to an error code, message and field errors."""
    if isinstance(exc, ValidationError):
        return {
            "code": ErrorCode.VALIDATION_ERROR,
            "message": exc.message,
            "field_errors": [{"field": exc.field, "message": exc.message}],
        }
    if isinstance(exc, NotFoundError):
        return {"code": ErrorCode.NOT_FOUND, "message": f"{exc.resource} not found"}
    if isinstance(exc, ForbiddenError):
        return {"code": ErrorCode.PERMISSION_DENIED, "message": "Forbidden"}
    if isinstance(exc, StoreError):
        return {"code": ErrorCode.DATABASE_ERROR, "message": "The data store is unavailable"}
    return {"code": ErrorCode.INTERNAL_ERROR, "message": "Internal error"}


class APIException(HTTPException):
    """
    Custom API exception with structured error response.

    Usage:
        raise APIException(
            error_code=ErrorCode.NOT_FOUND,
            message="Notification not found",
        )
    """
    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        detail: Optional[str] = None,
        field_errors: Optional[List[Dict[str, str]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.error_detail = detail
        self.field_errors = field_errors

        status_code = get_http_status(error_code)
        super().__init__(status_code=status_code, detail=message, headers=headers)

    def to_response(self) -> JSONResponse:
        """Convert to JSONResponse for exception handlers."""
        return JSONResponse(
            status_code=self.status_code,
            content=error_response(
                code=self.error_code,
                message=self.message,
                detail=self.error_detail,
                field_errors=self.field_errors,
            ),
        )
