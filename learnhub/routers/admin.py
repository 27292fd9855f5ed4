"""
FastAPI router for admin course and content management.

All endpoints require an admin member.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from common.utils import list_response, success_response
from learnhub.dependencies import get_admin_service, require_admin
from learnhub.membership.member_context import MemberContext
from learnhub.schemas.admin import (
    CreateContentRequest,
    CreateCourseRequest,
    UpdateContentRequest,
    UpdateCourseRequest,
)
from learnhub.services.admin.admin_service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _dump(record) -> dict:
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Courses
# =============================================================================

@router.get("/courses")
async def list_courses(
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """List all courses."""
    return list_response([_dump(c) for c in await admin_service.list_courses()])


@router.post("/courses", status_code=201)
async def create_course(
    body: CreateCourseRequest,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Create a course."""
    course = await admin_service.create_course(body.model_dump(exclude_none=True))
    return success_response(_dump(course), message="Course created")


@router.put("/courses/{course_id}")
async def update_course(
    course_id: str,
    body: UpdateCourseRequest,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Update a course."""
    course = await admin_service.update_course(course_id, body.model_dump(exclude_unset=True))
    return success_response(_dump(course), message="Course updated")


@router.delete("/courses/{course_id}")
async def delete_course(
    course_id: str,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Delete a course."""
    await admin_service.delete_course(course_id)
    return success_response(message="Course deleted")


# =============================================================================
# Content
# =============================================================================

@router.get("/content")
async def list_content(
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
    course_id: Optional[str] = Query(None, alias="courseId"),
):
    """List content items, optionally for one course."""
    return list_response([_dump(c) for c in await admin_service.list_content(course_id)])


@router.post("/content", status_code=201)
async def create_content(
    body: CreateContentRequest,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Create a content item."""
    content = await admin_service.create_content(body.model_dump(exclude_none=True))
    return success_response(_dump(content), message="Content created")


@router.put("/content/{content_id}")
async def update_content(
    content_id: str,
    body: UpdateContentRequest,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Update a content item."""
    content = await admin_service.update_content(content_id, body.model_dump(exclude_unset=True))
    return success_response(_dump(content), message="Content updated")


@router.delete("/content/{content_id}")
async def delete_content(
    content_id: str,
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Delete a content item."""
    await admin_service.delete_content(content_id)
    return success_response(message="Content deleted")


# =============================================================================
# Export
# =============================================================================

@router.get("/export")
async def export_data(
    admin: Annotated[MemberContext, Depends(require_admin)],
    admin_service: Annotated[AdminService, Depends(get_admin_service)],
):
    """Download every course and content item as JSON."""
    export = await admin_service.export_data()
    filename = export.pop("filename")
    return JSONResponse(
        content=export,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
