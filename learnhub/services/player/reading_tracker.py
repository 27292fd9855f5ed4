"""
Per-lesson reading state driven by scroll position.

A learner's scroll fraction through a lesson completes its objectives
(evenly spaced across the first 80%), offers the embedded activity at 80%
and completes the lesson at 95% once the activity has been offered.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

OBJECTIVES_SPAN = 0.8
ACTIVITY_THRESHOLD = 0.8
COMPLETION_THRESHOLD = 0.95


class PlayerState(str, Enum):
    BROWSING = "BROWSING"
    READING_CONTENT = "READING_CONTENT"
    ACTIVITY_OFFERED = "ACTIVITY_OFFERED"
    ACTIVITY_IN_PROGRESS = "ACTIVITY_IN_PROGRESS"
    ACTIVITY_COMPLETE = "ACTIVITY_COMPLETE"
    COURSE_COMPLETE = "COURSE_COMPLETE"


class InvalidPlayerActionError(Exception):
    """An action was attempted in a state that does not allow it."""

    def __init__(self, action: str, state: PlayerState, reason: str):
        super().__init__(f"Cannot {action} in state {state.value}: {reason}")
        self.action = action
        self.state = state
        self.reason = reason


class LessonReadingTracker:
    """
    Reading and activity progress for the lesson currently on screen.

    A lesson that was completed earlier starts with is_completed set, so
    scrolling it again never re-fires completion.
    """

    def __init__(
        self,
        lesson_id: str,
        objective_ids: Sequence[str] = (),
        activity_is_empty: bool = False,
        completed: bool = False,
    ):
        self.lesson_id = lesson_id
        self.objective_ids = list(objective_ids)
        self.activity_is_empty = activity_is_empty
        self.fraction = 0.0
        self.completed_objectives: List[str] = []
        self.activity_offered = False
        self.activity_started = False
        self.activity_completed = False
        self.activity_score: Optional[float] = None
        self.is_completed = completed
        self._listeners: List[Callable[[str], None]] = []

    def on_complete(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    @property
    def state(self) -> PlayerState:
        if self.activity_completed:
            return PlayerState.ACTIVITY_COMPLETE
        if self.activity_started:
            return PlayerState.ACTIVITY_IN_PROGRESS
        if self.activity_offered:
            return PlayerState.ACTIVITY_OFFERED
        if self.fraction > 0:
            return PlayerState.READING_CONTENT
        return PlayerState.BROWSING

    def objective_threshold(self, index: int) -> float:
        return (index + 1) / len(self.objective_ids) * OBJECTIVES_SPAN

    def update_scroll(self, fraction: float) -> bool:
        """
        Apply a new scroll fraction.

        Args:
            fraction: Read position through the lesson, clamped to [0, 1]

        Returns:
            True if this update completed the lesson
        """
        self.fraction = max(0.0, min(1.0, float(fraction)))

        for index, objective_id in enumerate(self.objective_ids):
            if self.fraction >= self.objective_threshold(index) and objective_id not in self.completed_objectives:
                self.completed_objectives.append(objective_id)

        if self.fraction >= ACTIVITY_THRESHOLD:
            self.activity_offered = True

        if self.fraction >= COMPLETION_THRESHOLD and self.activity_offered:
            return self.mark_complete()
        return False

    def mark_complete(self) -> bool:
        """Complete the lesson, notifying listeners only the first time."""
        if self.is_completed:
            return False
        self.is_completed = True
        logger.debug(f"Lesson {self.lesson_id} completed")
        for listener in self._listeners:
            listener(self.lesson_id)
        return True

    def start_activity(self) -> None:
        """
        Begin the embedded activity.

        An activity with nothing to answer completes immediately with 100.

        Raises:
            InvalidPlayerActionError: If the activity is not offered yet or already started
        """
        if not self.activity_offered:
            raise InvalidPlayerActionError("start activity", self.state, "activity has not been offered yet")
        if self.activity_started:
            raise InvalidPlayerActionError("start activity", self.state, "activity already started")

        self.activity_started = True
        if self.activity_is_empty:
            self.complete_activity(100.0)

    def complete_activity(self, score: float) -> None:
        """
        Record the activity score.

        Raises:
            InvalidPlayerActionError: If the activity is not in progress
        """
        if not self.activity_started or self.activity_completed:
            raise InvalidPlayerActionError("complete activity", self.state, "activity is not in progress")

        self.activity_score = max(0.0, min(100.0, float(score)))
        self.activity_completed = True

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "lessonId": self.lesson_id,
            "fraction": self.fraction,
            "completedObjectives": list(self.completed_objectives),
            "activityOffered": self.activity_offered,
            "activityStarted": self.activity_started,
            "activityCompleted": self.activity_completed,
            "activityScore": self.activity_score,
        }

    def restore(self, snapshot: Dict[str, Any]) -> None:
        """Reapply a saved snapshot of the same lesson."""
        self.fraction = max(0.0, min(1.0, float(snapshot.get("fraction") or 0)))
        self.completed_objectives = [
            objective_id for objective_id in snapshot.get("completedObjectives") or []
            if objective_id in self.objective_ids
        ]
        self.activity_offered = bool(snapshot.get("activityOffered"))
        self.activity_started = self.activity_offered and bool(snapshot.get("activityStarted"))
        self.activity_completed = self.activity_started and bool(snapshot.get("activityCompleted"))
        self.activity_score = snapshot.get("activityScore") if self.activity_completed else None
