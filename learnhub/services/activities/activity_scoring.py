"""
Scoring for embedded lesson activities.

Quiz, drag-drop and reflection activities are scored 0-100. Other
activity types are displayed by the client but cannot be submitted.
"""

import logging
from typing import Any, Dict, Mapping

from pydantic import BaseModel

from common.utils.exceptions import ValidationException
from learnhub.schemas.learning import Activity, QuizQuestion, SCORED_ACTIVITY_TYPES

logger = logging.getLogger(__name__)


class ActivityResult(BaseModel):
    """Outcome of a submitted activity."""
    activityId: str
    activityType: str
    score: float
    passed: bool
    responses: Dict[str, Any] = {}


def _same_answer(answer: Any, expected: Any) -> bool:
    # True == 1 in Python, which must not count as a correct answer
    if isinstance(answer, bool) != isinstance(expected, bool):
        return False
    return answer == expected


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def question_is_correct(question: QuizQuestion, answer: Any) -> bool:
    """
    Check one quiz answer.

    multiple-choice/true-false need an exact match, short-answer matches
    when either text contains the other (case-insensitive) and essays earn
    their points for any non-blank answer.
    """
    if question.type in ("multiple-choice", "true-false"):
        return answer is not None and _same_answer(answer, question.correctAnswer)

    if question.type == "short-answer":
        if _is_blank(answer) or question.correctAnswer is None:
            return False
        given = str(answer).strip().lower()
        expected = str(question.correctAnswer).strip().lower()
        return given in expected or expected in given

    if question.type == "essay":
        return not _is_blank(answer)

    return False


def score_quiz(activity: Activity, answers: Mapping[str, Any]) -> float:
    max_score = sum(q.weight for q in activity.questions)
    if max_score <= 0:
        return 100.0

    earned = sum(q.weight for q in activity.questions if question_is_correct(q, answers.get(q.id)))
    return earned / max_score * 100


def score_drag_drop(activity: Activity, assignments: Mapping[str, Any]) -> float:
    if not activity.items:
        return 100.0
    correct = sum(
        1 for item in activity.items
        if assignments.get(item.id) is not None and str(assignments[item.id]) == item.correctCategory
    )
    return correct / len(activity.items) * 100


def score_reflection(activity: Activity, responses: Mapping[str, Any]) -> float:
    if not activity.prompts:
        return 100.0
    answered = sum(1 for prompt in activity.prompts if not _is_blank(responses.get(prompt.id)))
    return answered / len(activity.prompts) * 100


def reflection_ready(activity: Activity, responses: Mapping[str, Any]) -> bool:
    """Whether every prompt has at least its minimum word count (default 10)."""
    return all(
        len(str(responses.get(prompt.id) or "").split()) >= prompt.required_words
        for prompt in activity.prompts
    )


_SCORERS = {
    "quiz": score_quiz,
    "drag-drop": score_drag_drop,
    "reflection": score_reflection,
}


def score_activity(
    activity: Activity,
    responses: Mapping[str, Any],
    pass_threshold: float = 70.0,
) -> ActivityResult:
    """
    Score a submitted activity.

    Args:
        activity: Activity being submitted
        responses: Answers keyed by question, item or prompt id
        pass_threshold: Minimum score that counts as passed

    Returns:
        ActivityResult

    Raises:
        ValidationException: If the activity type cannot be scored
    """
    scorer = _SCORERS.get(activity.type)
    if scorer is None:
        raise ValidationException(
            f"Activity type '{activity.type}' cannot be submitted. Supported: {', '.join(SCORED_ACTIVITY_TYPES)}",
            code="UNSUPPORTED_ACTIVITY_TYPE",
        )

    score = round(scorer(activity, responses), 2)
    logger.debug(f"Scored {activity.type} activity {activity.id}: {score}")

    return ActivityResult(
        activityId=activity.id,
        activityType=activity.type,
        score=score,
        passed=score >= pass_threshold,
        responses=dict(responses),
    )
