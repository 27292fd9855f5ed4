"""
Standard API response helpers.

Every route wraps its payload in the same envelope so clients can branch
on "success" before reading "data" or "error".

Example:
    from common.utils import success_response

    @router.get("/progress/dashboard")
    async def dashboard(...):
        stats = await progress_service.get_dashboard_stats(member.member_id)
        return success_response(stats.model_dump())
"""

from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Used by the application exception handlers for errors raised below
    the HTTP layer (storage failures, invalid player actions).

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "SERVICE_UNAVAILABLE")
        details: Additional error details

    Returns:
        Dictionary with success=False and error info
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    return {"success": False, "error": error}


def list_response(
    items: list,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a simple list response with an item count.

    Args:
        items: List of items
        message: Optional success message

    Returns:
        Dictionary with success=True, items list and count
    """
    response: Dict[str, Any] = {
        "success": True,
        "data": items,
        "count": len(items),
    }

    if message:
        response["message"] = message

    return response
