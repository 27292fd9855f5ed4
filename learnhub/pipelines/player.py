"""
Lesson player pipeline functions.

Stateless orchestration for the lesson player: load the lessons and the
saved session, apply one action, report any completions to the progress
aggregator, then save.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from common.utils.exceptions import ValidationException
from learnhub.schemas.course import Course
from learnhub.services.activities.activity_scoring import ActivityResult, reflection_ready, score_activity
from learnhub.services.catalog.course_service import CourseService
from learnhub.services.player.lesson_player import LessonPlayer
from learnhub.services.player.reading_tracker import InvalidPlayerActionError, PlayerState
from learnhub.services.player.session_service import PlayerSessionService
from learnhub.services.progress.progress_service import UserProgressService

logger = logging.getLogger(__name__)

PLAYER_ACTIONS = ("scroll", "start_activity", "submit_activity", "next", "previous", "select", "advance")

# Hidden from learners until they submit
_ANSWER_KEY_FIELDS = {
    "questions": {"__all__": {"correctAnswer", "explanation"}},
    "items": {"__all__": {"correctCategory"}},
}


async def load_player(
    course_service: CourseService,
    session_service: PlayerSessionService,
    user_id: str,
    course_id: str,
) -> Tuple[Course, LessonPlayer]:
    """
    Rebuild a learner's player for a course.

    Args:
        course_service: For the course and its ordered lessons
        session_service: For the saved snapshot
        user_id: Member ID
        course_id: Course ID

    Returns:
        (course, player)
    """
    course = await course_service.get_course(course_id)
    lessons = await course_service.get_course_lessons(course_id)
    snapshot = await session_service.load(user_id, course_id)

    if snapshot is None:
        return course, LessonPlayer(lessons)
    return course, LessonPlayer.from_snapshot(snapshot, lessons)


async def get_player_view_pipeline(
    course_service: CourseService,
    session_service: PlayerSessionService,
    user_id: str,
    course_id: str,
) -> Dict[str, Any]:
    """Current player view without changing any state."""
    course, player = await load_player(course_service, session_service, user_id, course_id)
    return _format_player_view(course, player)


async def player_action_pipeline(
    course_service: CourseService,
    session_service: PlayerSessionService,
    progress_service: UserProgressService,
    user_id: str,
    course_id: str,
    action: str,
    payload: Optional[Dict[str, Any]] = None,
    pass_threshold: float = 70.0,
) -> Dict[str, Any]:
    """
    Apply one player action and persist the result.

    Handles:
    - Restoring the saved session (or starting a new one)
    - Scoring submitted activities
    - Reporting lesson and course completion to the progress aggregator

    Args:
        course_service: For the course and its lessons
        session_service: For loading/saving the snapshot
        progress_service: Receives completion updates
        user_id: Member ID
        course_id: Course ID
        action: One of PLAYER_ACTIONS
        payload: Action arguments (fraction, index or answers)
        pass_threshold: Minimum activity score that counts as passed

    Returns:
        Player view plus the completion events and any activity result

    Raises:
        InvalidPlayerActionError: If the action is not allowed in the current state
    """
    payload = payload or {}
    course, player = await load_player(course_service, session_service, user_id, course_id)

    # 1. Collect completions fired by the state machine
    events: List[Dict[str, Any]] = []
    player.on_lesson_complete(lambda lesson_id: events.append({"type": "lesson_complete", "lessonId": lesson_id}))
    player.on_course_complete(lambda percent: events.append({"type": "course_complete", "progress": percent}))

    # 2. Apply the action
    activity_result = _apply_action(player, action, payload, pass_threshold)

    # 3. Hand completions to the aggregator before saving, so a failed
    # report leaves the old snapshot and a retried action fires again
    for event in events:
        logger.info(f"Player {event['type']} for user {user_id} on course {course_id}")
        await progress_service.update_course_progress(user_id, course_id, player.progress_percent)

    # 4. Persist the new state
    await session_service.save(user_id, course_id, player.to_snapshot())

    view = _format_player_view(course, player)
    view["events"] = events
    view["activityResult"] = activity_result.model_dump() if activity_result else None
    return view


def _apply_action(
    player: LessonPlayer,
    action: str,
    payload: Dict[str, Any],
    pass_threshold: float,
) -> Optional[ActivityResult]:
    if action == "scroll":
        player.scroll(payload["fraction"])
    elif action == "start_activity":
        player.start_activity()
    elif action == "submit_activity":
        if player.state != PlayerState.ACTIVITY_IN_PROGRESS:
            raise InvalidPlayerActionError("submit activity", player.state, "activity is not in progress")
        activity = player.current_activity
        answers = payload.get("answers") or {}
        if activity.type == "reflection" and not reflection_ready(activity, answers):
            raise ValidationException(
                "Every reflection prompt needs its minimum number of words",
                code="REFLECTION_INCOMPLETE",
                details={"minWords": {prompt.id: prompt.required_words for prompt in activity.prompts}},
            )
        result = score_activity(activity, answers, pass_threshold)
        player.complete_activity(result.score)
        return result
    elif action == "next":
        player.next()
    elif action == "previous":
        player.previous()
    elif action == "select":
        player.select(payload["index"])
    elif action == "advance":
        player.advance()
    else:
        raise InvalidPlayerActionError(action, player.state, f"unknown action, expected one of {PLAYER_ACTIONS}")
    return None


def _format_player_view(course: Course, player: LessonPlayer) -> Dict[str, Any]:
    """Format player state for API response."""
    completed = set(player.completed_lesson_ids)
    lesson = player.current_lesson
    tracker = player.tracker
    activity = player.current_activity

    reading = None
    if tracker is not None:
        reading = {
            "fraction": tracker.fraction,
            "objectives": [
                {"id": objective_id, "completed": objective_id in tracker.completed_objectives}
                for objective_id in tracker.objective_ids
            ],
            "activityOffered": tracker.activity_offered,
            "activityScore": tracker.activity_score,
            "lessonCompleted": tracker.is_completed,
        }

    return {
        "courseId": course.id,
        "courseTitle": course.titleEn,
        "state": player.state.value,
        "currentIndex": player.current_index,
        "totalLessons": len(player.lessons),
        "progressPercent": round(player.progress_percent, 2),
        "courseCompleted": player.course_completed,
        "completedLessonIds": player.completed_lesson_ids,
        "lessons": [
            {
                "_id": item.id,
                "title": item.title,
                "contentType": item.contentType,
                "estimatedDurationMinutes": item.estimatedDurationMinutes,
                "completed": item.id in completed,
            }
            for item in player.lessons
        ],
        "currentLesson": lesson.model_dump(mode="json", by_alias=True, exclude_none=True) if lesson else None,
        "reading": reading,
        "activity": activity.model_dump(mode="json", exclude=_ANSWER_KEY_FIELDS) if activity else None,
        "activityScores": player.activity_scores,
    }
