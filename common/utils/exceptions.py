"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with machine-readable error codes so
every failure reaches the client as {"detail": {"message", "code"}}.

Example:
    from common.utils import NotFoundException

    @router.get("/courses/{course_id}")
    async def get_course(course_id: str):
        course = await repository.get_by_id("courses", course_id)
        if course is None:
            raise NotFoundException("Course not found", code="COURSE_NOT_FOUND")
        return course
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def code(self) -> Optional[str]:
        return self.detail.get("code")

    @property
    def message(self) -> str:
        return self.detail["message"]


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid membership token."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, message, code, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenException(APIException):
    """403 Forbidden - Authenticated member without the required role."""

    def __init__(
        self,
        message: str = "Forbidden",
        code: str = "FORBIDDEN",
        details: Optional[Any] = None,
    ):
        super().__init__(403, message, code, details)


class NotFoundException(APIException):
    """404 Not Found - Record doesn't exist."""

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class ValidationException(APIException):
    """422 Validation Error - Request payload rejected."""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
        errors: Optional[list] = None,
    ):
        detail_info = details
        if errors:
            detail_info = {"errors": errors, **(details or {})}
        super().__init__(422, message, code, detail_info)
