"""
FastAPI router for learner progress endpoints.

Provides endpoints for the dashboard and per-course progress.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import NotFoundException, success_response
from learnhub.dependencies import get_course_service, get_progress_service, require_member
from learnhub.membership.member_context import MemberContext
from learnhub.schemas.progress import DashboardResponse, UpdateProgressRequest
from learnhub.services.catalog.course_service import CourseService
from learnhub.services.progress.progress_service import UserProgressService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/dashboard")
async def get_dashboard(
    member: Annotated[MemberContext, Depends(require_member)],
    progress_service: Annotated[UserProgressService, Depends(get_progress_service)],
):
    """Get dashboard stats, enrolled and completed courses."""
    await progress_service.initialize_user_progress(member.member_id)

    dashboard = DashboardResponse(
        stats=await progress_service.get_dashboard_stats(member.member_id),
        enrolledCourses=await progress_service.get_enrolled_courses(member.member_id),
        completedCourses=await progress_service.get_completed_courses(member.member_id),
    )
    data = dashboard.model_dump(mode="json", by_alias=True)
    data["member"] = member.to_dict()
    return success_response(data)


@router.get("/courses")
async def get_courses_with_progress(
    member: Annotated[MemberContext, Depends(require_member)],
    progress_service: Annotated[UserProgressService, Depends(get_progress_service)],
):
    """Get every course joined with the member's progress."""
    courses = await progress_service.get_user_courses_with_progress(member.member_id)
    return success_response([c.model_dump(mode="json", by_alias=True) for c in courses])


@router.get("/courses/{course_id}")
async def get_course_progress(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    progress_service: Annotated[UserProgressService, Depends(get_progress_service)],
):
    """Get the member's progress row for one course."""
    progress = await progress_service.get_course_progress(member.member_id, course_id)
    if progress is None:
        raise NotFoundException("No progress recorded for this course", code="PROGRESS_NOT_FOUND")
    return success_response(progress.model_dump(mode="json", by_alias=True))


@router.put("/courses/{course_id}")
async def update_course_progress(
    course_id: str,
    body: UpdateProgressRequest,
    member: Annotated[MemberContext, Depends(require_member)],
    progress_service: Annotated[UserProgressService, Depends(get_progress_service)],
    course_service: Annotated[CourseService, Depends(get_course_service)],
):
    """Set the member's completion percentage for a course."""
    await course_service.get_course(course_id)

    progress = await progress_service.update_course_progress(
        member.member_id,
        course_id,
        body.completionPercentage,
    )
    return success_response(progress.model_dump(mode="json", by_alias=True), message="Progress updated")
