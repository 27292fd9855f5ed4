"""Activity scoring."""

from learnhub.services.activities.activity_scoring import (
    ActivityResult,
    question_is_correct,
    reflection_ready,
    score_activity,
)

__all__ = [
    "ActivityResult",
    "question_is_correct",
    "reflection_ready",
    "score_activity",
]
