"""
FastAPI router for the lesson player.

Each endpoint applies one player action and returns the updated view.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends

from common.utils import success_response
from learnhub.config import settings
from learnhub.dependencies import (
    get_course_service,
    get_progress_service,
    get_session_service,
    require_member,
)
from learnhub.membership.member_context import MemberContext
from learnhub.pipelines.player import get_player_view_pipeline, player_action_pipeline
from learnhub.schemas.player import ScrollRequest, SelectLessonRequest, SubmitActivityRequest
from learnhub.services.catalog.course_service import CourseService
from learnhub.services.player.session_service import PlayerSessionService
from learnhub.services.progress.progress_service import UserProgressService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/player", tags=["player"])


class PlayerServices:
    """Bundles the services every player action needs."""

    def __init__(
        self,
        course_service: Annotated[CourseService, Depends(get_course_service)],
        session_service: Annotated[PlayerSessionService, Depends(get_session_service)],
        progress_service: Annotated[UserProgressService, Depends(get_progress_service)],
    ):
        self.course_service = course_service
        self.session_service = session_service
        self.progress_service = progress_service

    async def act(
        self,
        member: MemberContext,
        course_id: str,
        action: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> dict:
        view = await player_action_pipeline(
            course_service=self.course_service,
            session_service=self.session_service,
            progress_service=self.progress_service,
            user_id=member.member_id,
            course_id=course_id,
            action=action,
            payload=payload,
            pass_threshold=settings.ACTIVITY_PASS_THRESHOLD,
        )
        return success_response(view)


@router.get("/{course_id}")
async def get_player(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Get the current player view, resuming any saved session."""
    view = await get_player_view_pipeline(
        course_service=services.course_service,
        session_service=services.session_service,
        user_id=member.member_id,
        course_id=course_id,
    )
    return success_response(view)


@router.post("/{course_id}/scroll")
async def scroll(
    course_id: str,
    body: ScrollRequest,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Report the read position through the current lesson."""
    return await services.act(member, course_id, "scroll", {"fraction": body.fraction})


@router.post("/{course_id}/activity/start")
async def start_activity(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Start the current lesson's activity."""
    return await services.act(member, course_id, "start_activity")


@router.post("/{course_id}/activity/submit")
async def submit_activity(
    course_id: str,
    body: SubmitActivityRequest,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Submit activity answers for scoring."""
    return await services.act(member, course_id, "submit_activity", {"answers": body.answers})


@router.post("/{course_id}/next")
async def next_lesson(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Move to the next lesson without completing the current one."""
    return await services.act(member, course_id, "next")


@router.post("/{course_id}/previous")
async def previous_lesson(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Move to the previous lesson."""
    return await services.act(member, course_id, "previous")


@router.post("/{course_id}/select")
async def select_lesson(
    course_id: str,
    body: SelectLessonRequest,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Jump to a lesson from the sidebar."""
    return await services.act(member, course_id, "select", {"index": body.index})


@router.post("/{course_id}/advance")
async def advance(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    services: Annotated[PlayerServices, Depends()],
):
    """Complete the current lesson and continue, or complete the course on the last lesson."""
    return await services.act(member, course_id, "advance")
