"""
Tolerant parsing of the JSON blobs stored on course content.

Content authors edit these fields by hand, so a malformed, empty or
wrong-shaped blob must never break a page. Every parser falls back to an
empty structure and logs a warning; individual list items that fail
validation are dropped while the rest are kept.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from learnhub.schemas.course import CourseContent
from learnhub.schemas.learning import (
    Activity,
    DragDropCategory,
    DragDropItem,
    InteractiveElement,
    KeyTakeaway,
    LearningObjective,
    QuizQuestion,
    ReflectionPrompt,
    ScoringSystem,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Authors sometimes write these as JSON numbers
_ID_FIELDS = ("id", "correctCategory")


def _load_json(raw: Any, field: str) -> Any:
    """Decode a blob, returning None for missing or undecodable input."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if not isinstance(raw, str):
        logger.warning(f"Ignoring {field}: expected JSON text, got {type(raw).__name__}")
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning(f"Ignoring malformed {field}: {e}")
        return None


def _normalize_ids(item: Dict[str, Any], index: int) -> Dict[str, Any]:
    """Give an item a string id (1-based position when missing); numeric references become strings."""
    item = dict(item)
    if item.get("id") is None or item.get("id") == "":
        item["id"] = str(index + 1)
    for key in _ID_FIELDS:
        if isinstance(item.get(key), (int, float)) and not isinstance(item.get(key), bool):
            item[key] = str(item[key])
    return item


def _validate_items(data: Any, model: Type[ModelT], field: str) -> List[ModelT]:
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning(f"Ignoring {field}: expected a list, got {type(data).__name__}")
        return []

    parsed = []
    for index, item in enumerate(data):
        if isinstance(item, dict):
            item = _normalize_ids(item, index)
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping {field}[{index}]: {e.error_count()} validation error(s)")
    return parsed


# ─────────────────────────────────────────────────────────────────
# Typed parsers
# ─────────────────────────────────────────────────────────────────

def parse_learning_objectives(raw: Any) -> List[LearningObjective]:
    return _validate_items(_load_json(raw, "learningObjectives"), LearningObjective, "learningObjectives")


def parse_key_takeaways(raw: Any) -> List[KeyTakeaway]:
    return _validate_items(_load_json(raw, "keyTakeaways"), KeyTakeaway, "keyTakeaways")


def parse_interactive_elements(raw: Any) -> List[InteractiveElement]:
    return _validate_items(_load_json(raw, "interactiveElements"), InteractiveElement, "interactiveElements")


def parse_assessment_questions(raw: Any) -> List[QuizQuestion]:
    """
    Parse assessment questions.

    Accepts either a bare list or an object with a "questions" list, the
    shape the content seeding script writes.
    """
    data = _load_json(raw, "assessmentQuestions")
    if isinstance(data, dict):
        data = data.get("questions")
    return _validate_items(data, QuizQuestion, "assessmentQuestions")


def parse_scoring_system(raw: Any) -> ScoringSystem:
    data = _load_json(raw, "scoringSystem")
    if data is None:
        return ScoringSystem()
    try:
        return ScoringSystem.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid scoringSystem: {e.error_count()} validation error(s)")
        return ScoringSystem()


def parse_activity(content: CourseContent) -> Activity:
    """
    Resolve the activity embedded in a lesson.

    Order of precedence:
    1. activityData (a full activity object)
    2. assessmentQuestions, as a quiz
    3. a JSON question set in textContent on quiz/assessment items
    Anything else yields an empty quiz, which counts as trivially complete.

    Args:
        content: Lesson the activity belongs to

    Returns:
        Activity (never None)
    """
    fallback_type = content.activityType or "quiz"
    title = content.title or ""

    data = _load_json(content.activityData, "activityData")
    if isinstance(data, dict):
        data = {"id": content.id, "type": fallback_type, "title": title, **data}
        data["questions"] = _validate_items(data.get("questions"), QuizQuestion, "activityData.questions")
        data["items"] = _validate_items(data.get("items"), DragDropItem, "activityData.items")
        data["categories"] = _validate_items(data.get("categories"), DragDropCategory, "activityData.categories")
        data["prompts"] = _validate_items(data.get("prompts"), ReflectionPrompt, "activityData.prompts")
        try:
            return Activity.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid activityData on {content.id}: {e.error_count()} validation error(s)")
    elif data is not None:
        logger.warning(f"Ignoring activityData on {content.id}: expected an object")

    questions = parse_assessment_questions(content.assessmentQuestions)
    if not questions and content.contentType in ("quiz", "assessment"):
        questions = parse_assessment_questions(content.textContent)

    return Activity(id=content.id, type="quiz", title=title, questions=questions)


# ─────────────────────────────────────────────────────────────────
# Defaults used for study notes when a lesson has none
# ─────────────────────────────────────────────────────────────────

def default_learning_objectives(title: Optional[str]) -> List[LearningObjective]:
    subject = title or "this learning module"
    return [
        LearningObjective(id="1", text=f"Master the core concepts of {subject}"),
        LearningObjective(id="2", text="Apply knowledge through interactive exercises and activities"),
        LearningObjective(id="3", text="Understand practical applications in real-world scenarios"),
        LearningObjective(id="4", text="Develop critical thinking skills for problem-solving"),
    ]


def default_key_takeaways() -> List[KeyTakeaway]:
    return [
        KeyTakeaway(id="1", text="Interactive learning enhances retention and understanding", icon="brain"),
        KeyTakeaway(id="2", text="Progressive disclosure prevents cognitive overload", icon="activity"),
        KeyTakeaway(id="3", text="Hands-on practice reinforces theoretical concepts", icon="target"),
        KeyTakeaway(id="4", text="Regular review and reflection improve long-term retention", icon="lightbulb"),
    ]


def default_interactive_elements() -> List[InteractiveElement]:
    return [
        InteractiveElement(
            id="1",
            type="highlight",
            title="Core Principle",
            content="Active engagement with content leads to better learning outcomes than passive consumption.",
            position=20,
        ),
        InteractiveElement(
            id="2",
            type="definition",
            title="Progressive Learning",
            content="A methodology that introduces concepts gradually, building complexity as understanding develops.",
            position=40,
        ),
        InteractiveElement(
            id="3",
            type="tip",
            title="Study Strategy",
            content="Take breaks between sections to allow your brain to process and consolidate new information.",
            position=60,
        ),
        InteractiveElement(
            id="4",
            type="example",
            title="Real-World Application",
            content="These learning principles are used by top educational institutions and corporate training programs worldwide.",
            position=80,
        ),
    ]
