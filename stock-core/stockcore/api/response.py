# stockcore/api/response.py
import math
from pydantic import BaseModel
from typing import Any, Dict, Optional

class ErrorInfo(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

class Meta(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int

class ApiResponse(BaseModel):
    """Uniform envelope for every response body."""

    success: bool
    message: Optional[str] = None
    data: Any = None
    error: Optional[ErrorInfo] = None
    meta: Optional[Meta] = None


def success_response(data: Any = None, message: str = "Success", meta: Optional[Meta] = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data, meta=meta)


def error_response(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> ApiResponse:
    return ApiResponse(success=False, error=ErrorInfo(code=code, message=message, details=details))


def page_meta(page: int, per_page: int, total: int) -> Meta:
    return Meta(
        page=page,
        per_page=per_page,
        total=total,
        total_pages=math.ceil(total / per_page) if per_page else 0,
    )
