"""
Course lesson player state machine.

Moves a learner through an ordered list of lessons, one reading tracker at
a time, and reports lesson and course completion to registered listeners.
The player is pure in-memory state; persistence and the hand-off to the
progress aggregator happen in learnhub.pipelines.player.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from learnhub.schemas.course import CourseContent
from learnhub.schemas.learning import Activity
from learnhub.services.content.blob_parser import parse_activity, parse_learning_objectives
from learnhub.services.player.reading_tracker import (
    InvalidPlayerActionError,
    LessonReadingTracker,
    PlayerState,
)

logger = logging.getLogger(__name__)


class LessonPlayer:
    """
    Navigation and completion state for one learner in one course.

    Listeners:
        on_lesson_complete(lesson_id): once per lesson
        on_course_complete(progress_percent): once per course
    """

    def __init__(
        self,
        lessons: Sequence[CourseContent],
        completed_ids: Iterable[str] = (),
        current_index: int = 0,
        course_completed: bool = False,
        activity_scores: Optional[Dict[str, float]] = None,
    ):
        """
        Args:
            lessons: Lessons in display order
            completed_ids: Lessons completed earlier; ids not in lessons are dropped
            current_index: Lesson to open, clamped to the lesson range
            course_completed: Whether course completion was already reported
            activity_scores: Earlier activity scores by lesson id
        """
        self._lessons = list(lessons)
        lesson_ids = {lesson.id for lesson in self._lessons}

        self._completed: List[str] = [
            lesson_id for lesson_id in dict.fromkeys(completed_ids) if lesson_id in lesson_ids
        ]
        self._activity_scores = {
            lesson_id: score for lesson_id, score in (activity_scores or {}).items() if lesson_id in lesson_ids
        }
        self._course_completed = course_completed and self.all_completed
        self._lesson_listeners: List[Callable[[str], None]] = []
        self._course_listeners: List[Callable[[float], None]] = []

        self._index = self._clamp(current_index)
        self._activity: Optional[Activity] = None
        self._tracker: Optional[LessonReadingTracker] = None
        self._open_current()

    # ─────────────────────────────────────────────────────────────────
    # Listeners
    # ─────────────────────────────────────────────────────────────────

    def on_lesson_complete(self, listener: Callable[[str], None]) -> None:
        self._lesson_listeners.append(listener)

    def on_course_complete(self, listener: Callable[[float], None]) -> None:
        self._course_listeners.append(listener)

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    @property
    def lessons(self) -> List[CourseContent]:
        return list(self._lessons)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_lesson(self) -> Optional[CourseContent]:
        return self._lessons[self._index] if self._lessons else None

    @property
    def current_activity(self) -> Optional[Activity]:
        return self._activity

    @property
    def tracker(self) -> Optional[LessonReadingTracker]:
        return self._tracker

    @property
    def completed_lesson_ids(self) -> List[str]:
        return list(self._completed)

    @property
    def activity_scores(self) -> Dict[str, float]:
        return dict(self._activity_scores)

    @property
    def course_completed(self) -> bool:
        return self._course_completed

    @property
    def all_completed(self) -> bool:
        return bool(self._lessons) and len(self._completed) == len(self._lessons)

    @property
    def is_last_lesson(self) -> bool:
        return self._index == len(self._lessons) - 1

    @property
    def progress_percent(self) -> float:
        if not self._lessons:
            return 0.0
        return len(self._completed) / len(self._lessons) * 100

    @property
    def state(self) -> PlayerState:
        if self._course_completed:
            return PlayerState.COURSE_COMPLETE
        if self._tracker is None:
            return PlayerState.BROWSING
        return self._tracker.state

    # ─────────────────────────────────────────────────────────────────
    # Reading and activity
    # ─────────────────────────────────────────────────────────────────

    def scroll(self, fraction: float) -> bool:
        """Apply a scroll fraction to the current lesson. Returns True if it completed the lesson."""
        return self._require_tracker("scroll").update_scroll(fraction)

    def start_activity(self) -> None:
        self._require_tracker("start activity").start_activity()
        self._record_activity_score()

    def complete_activity(self, score: float) -> None:
        self._require_tracker("complete activity").complete_activity(score)
        self._record_activity_score()

    # ─────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────

    def next(self) -> None:
        self.select(self._index + 1)

    def previous(self) -> None:
        self.select(self._index - 1)

    def select(self, index: int) -> None:
        """
        Jump to a lesson, clamping the index, with a fresh reading tracker.

        Selecting the lesson already on screen keeps its reading state.
        """
        self._require_tracker("select lesson")
        target = self._clamp(index)
        if target == self._index:
            return
        self._index = target
        self._open_current()

    def advance(self) -> None:
        """
        Confirm the current lesson and move on.

        Marks the current lesson complete, then opens the next one. On the
        last lesson the course completes once every lesson is complete.
        """
        tracker = self._require_tracker("advance")
        tracker.mark_complete()

        if not self.is_last_lesson:
            self.select(self._index + 1)
            return

        if self.all_completed and not self._course_completed:
            self._course_completed = True
            percent = self.progress_percent
            logger.info(f"Course completed after {len(self._lessons)} lessons")
            for listener in self._course_listeners:
                listener(percent)

    # ─────────────────────────────────────────────────────────────────
    # Snapshots
    # ─────────────────────────────────────────────────────────────────

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "lessonIds": [lesson.id for lesson in self._lessons],
            "currentIndex": self._index,
            "completedLessonIds": list(self._completed),
            "state": self.state.value,
            "courseCompleted": self._course_completed,
            "reading": self._tracker.to_snapshot() if self._tracker else None,
            "activityScores": dict(self._activity_scores),
        }

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], lessons: Sequence[CourseContent]) -> "LessonPlayer":
        """
        Rebuild a player from a saved snapshot against the current lesson list.

        Lessons removed since the snapshot are dropped from the completed
        set and the saved index is clamped. The reading state is only
        restored when the same lesson is still at that index.
        """
        player = cls(
            lessons,
            completed_ids=snapshot.get("completedLessonIds") or [],
            current_index=snapshot.get("currentIndex") or 0,
            course_completed=bool(snapshot.get("courseCompleted")),
            activity_scores=snapshot.get("activityScores") or {},
        )
        reading = snapshot.get("reading")
        if reading and player._tracker and reading.get("lessonId") == player._tracker.lesson_id:
            player._tracker.restore(reading)
        return player

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    def _clamp(self, index: int) -> int:
        if not self._lessons:
            return 0
        return max(0, min(len(self._lessons) - 1, int(index)))

    def _open_current(self) -> None:
        lesson = self.current_lesson
        if lesson is None:
            self._activity = None
            self._tracker = None
            return

        self._activity = parse_activity(lesson)
        objectives = parse_learning_objectives(lesson.learningObjectives)
        self._tracker = LessonReadingTracker(
            lesson.id,
            objective_ids=[objective.id for objective in objectives],
            activity_is_empty=self._activity.is_empty,
            completed=lesson.id in self._completed,
        )
        self._tracker.on_complete(self._handle_lesson_complete)

    def _handle_lesson_complete(self, lesson_id: str) -> None:
        if lesson_id in self._completed:
            return
        self._completed.append(lesson_id)
        for listener in self._lesson_listeners:
            listener(lesson_id)

    def _record_activity_score(self) -> None:
        if self._tracker.activity_completed:
            self._activity_scores[self._tracker.lesson_id] = self._tracker.activity_score

    def _require_tracker(self, action: str) -> LessonReadingTracker:
        if self._tracker is None:
            raise InvalidPlayerActionError(action, self.state, "course has no lessons")
        return self._tracker
