"""
FastAPI router for the course catalog.

Provides endpoints for browsing courses, course detail and lesson notes.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from common.utils import success_response
from learnhub.config import settings
from learnhub.dependencies import get_course_service, require_member
from learnhub.membership.member_context import MemberContext
from learnhub.schemas.course import Course
from learnhub.services.catalog.course_service import CourseService
from learnhub.services.content.notes_service import build_text_notes, notes_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


def resolve_language(lang: Optional[str]) -> str:
    """Fall back to the default language for unsupported codes."""
    if lang and lang in settings.get_supported_languages():
        return lang
    return settings.DEFAULT_LANGUAGE


def _format_course(course: Course, language: str) -> dict:
    """Format course for API response with localized title/description."""
    data = course.model_dump(mode="json", by_alias=True, exclude_none=True)
    data["title"] = course.localized_title(language)
    data["description"] = course.localized_description(language)
    return data


@router.get("")
async def list_courses(
    member: Annotated[MemberContext, Depends(require_member)],
    course_service: Annotated[CourseService, Depends(get_course_service)],
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    difficulty: Optional[str] = Query(None),
    lang: Optional[str] = Query(None),
):
    """List courses matching the filters, with the available facets."""
    language = resolve_language(lang)
    courses = await course_service.list_courses(search=search, category=category, difficulty=difficulty)
    facets = await course_service.get_facets()

    return success_response({
        "courses": [_format_course(c, language) for c in courses],
        "facets": facets,
    })


@router.get("/{course_id}")
async def get_course(
    course_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    course_service: Annotated[CourseService, Depends(get_course_service)],
    lang: Optional[str] = Query(None),
):
    """Get a course with its lessons in display order."""
    detail = await course_service.get_course_detail(course_id)

    return success_response({
        "course": _format_course(detail.course, resolve_language(lang)),
        "lessons": [lesson.model_dump(mode="json", by_alias=True, exclude_none=True) for lesson in detail.lessons],
    })


@router.get("/{course_id}/lessons/{content_id}/notes", response_class=PlainTextResponse)
async def download_lesson_notes(
    course_id: str,
    content_id: str,
    member: Annotated[MemberContext, Depends(require_member)],
    course_service: Annotated[CourseService, Depends(get_course_service)],
):
    """Download plain-text study notes for a lesson."""
    course = await course_service.get_course(course_id)
    lesson = await course_service.get_lesson(content_id)

    notes = build_text_notes(lesson, course_name=course.titleEn, platform_name=settings.PLATFORM_NAME)
    return PlainTextResponse(
        notes,
        headers={"Content-Disposition": f'attachment; filename="{notes_filename(lesson.title)}"'},
    )
