"""
Response envelope shared by every route.

Success: {"success": true, "message": ..., "data": ...}
Failure: {"success": false, "message": ..., "code": ..., "errors": [...]}
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


def ok(data: Optional[T] = None, message: str = "Success") -> ApiResponse[T]:
    return ApiResponse(message=message, data=data)


def error_body(message: str, code: Optional[str] = None, errors: Optional[List[Any]] = None) -> dict:
    body = {"success": False, "message": message}
    if code is not None:
        body["code"] = code
    if errors:
        body["errors"] = errors
    return body
