"""
Pydantic models for the structures stored as JSON blobs on course content.

Defines learning objectives, key takeaways, interactive elements,
assessment questions, scoring systems and embedded activities.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

ACTIVITY_TYPES = ("quiz", "drag-drop", "scenario", "reflection", "case-study", "matching", "sorting")
SCORED_ACTIVITY_TYPES = ("quiz", "drag-drop", "reflection")
QUESTION_TYPES = ("multiple-choice", "true-false", "short-answer", "essay")

Answer = Union[bool, int, float, str]


class LearningObjective(BaseModel):
    id: str
    text: str
    completed: bool = False


class KeyTakeaway(BaseModel):
    id: str
    text: str
    icon: str = "lightbulb"


class InteractiveElement(BaseModel):
    """highlight | callout | definition | example | tip, placed at a 0-100 position."""
    id: str
    type: str = "highlight"
    content: str
    position: float = 0
    title: Optional[str] = None


class QuizQuestion(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    question: str
    type: str = "multiple-choice"
    options: List[str] = []
    correctAnswer: Optional[Answer] = None
    explanation: Optional[str] = None
    points: Optional[float] = None

    @property
    def weight(self) -> float:
        return self.points if self.points is not None else 1


class DragDropItem(BaseModel):
    id: str
    content: str
    correctCategory: str


class DragDropCategory(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class ReflectionPrompt(BaseModel):
    id: str
    question: str
    placeholder: Optional[str] = None
    minWords: Optional[int] = None

    @property
    def required_words(self) -> int:
        return self.minWords or 10


class Activity(BaseModel):
    """
    Embedded lesson activity.

    Only the list matching the activity type is meaningful; the others
    stay empty.
    """
    model_config = ConfigDict(extra="allow")

    id: str = "activity"
    type: str = "quiz"
    title: str = ""
    instructions: str = ""
    timeLimit: Optional[float] = None
    points: Optional[float] = None
    questions: List[QuizQuestion] = []
    items: List[DragDropItem] = []
    categories: List[DragDropCategory] = []
    prompts: List[ReflectionPrompt] = []
    decisions: List[Dict[str, Any]] = []

    @property
    def item_count(self) -> int:
        if self.type == "drag-drop":
            return len(self.items)
        if self.type == "reflection":
            return len(self.prompts)
        if self.type == "scenario":
            return len(self.decisions)
        return len(self.questions)

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0


class ScoringSystem(BaseModel):
    model_config = ConfigDict(extra="allow")

    totalPoints: Optional[float] = None
    passingScore: Optional[float] = None
    timeLimit: Optional[float] = None
