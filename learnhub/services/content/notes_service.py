"""
Plain-text study notes for a lesson.

Builds the downloadable notes file learners print or annotate. Lessons
without objectives, takeaways or interactive elements get the standard
study-guide defaults so every notes file has the same sections.
"""

import re
from datetime import date
from typing import Optional

from learnhub.schemas.course import CourseContent
from learnhub.services.content.blob_parser import (
    default_interactive_elements,
    default_key_takeaways,
    default_learning_objectives,
    parse_interactive_elements,
    parse_key_takeaways,
    parse_learning_objectives,
)

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def strip_html(html: str) -> str:
    return _WHITESPACE.sub(" ", _TAG.sub("", html)).strip()


def notes_filename(title: Optional[str]) -> str:
    """Lower-cased title with every non-alphanumeric character replaced by '-'."""
    return f"{_UNSAFE_FILENAME.sub('-', title or 'module-notes').lower()}-notes.txt"


def _format_minutes(minutes: float) -> str:
    return str(int(minutes)) if float(minutes).is_integer() else str(minutes)


def build_text_notes(
    content: CourseContent,
    course_name: Optional[str] = None,
    generated_on: Optional[date] = None,
    platform_name: str = "LearnHub",
) -> str:
    """
    Render a lesson as plain-text notes.

    Args:
        content: Lesson to export
        course_name: Optional course title printed above the lesson title
        generated_on: Date for the footer (defaults to today)
        platform_name: Platform name for the footer

    Returns:
        Notes text
    """
    objectives = parse_learning_objectives(content.learningObjectives) or default_learning_objectives(content.title)
    takeaways = parse_key_takeaways(content.keyTakeaways) or default_key_takeaways()
    elements = parse_interactive_elements(content.interactiveElements) or default_interactive_elements()
    generated_on = generated_on or date.today()

    lines = []
    if course_name:
        lines.append(course_name)
    lines.append(content.title or "Learning Module")
    lines.append("=" * 50)
    lines.append("")

    if content.description:
        lines.append(f"Description: {content.description}")
        lines.append("")

    lines.append("LEARNING OBJECTIVES:")
    lines.append("-" * 20)
    lines.extend(f"{i}. {objective.text}" for i, objective in enumerate(objectives, start=1))
    lines.append("")

    if content.moduleContent:
        lines.append("MODULE CONTENT:")
        lines.append("-" * 15)
        lines.append(strip_html(content.moduleContent))
        lines.append("")

    lines.append("KEY CONCEPTS & INTERACTIVE ELEMENTS:")
    lines.append("-" * 35)
    for i, element in enumerate(elements, start=1):
        lines.append(f"{i}. [{element.type.upper()}] {element.title or 'Key Point'}")
        lines.append(f"   {element.content}")
        lines.append("")

    lines.append("KEY TAKEAWAYS:")
    lines.append("-" * 15)
    lines.extend(f"{i}. {takeaway.text}" for i, takeaway in enumerate(takeaways, start=1))
    lines.append("")

    lines.append("PERSONAL NOTES:")
    lines.append("-" * 15)
    notes = "\n".join(lines) + "\n" + "\n" * 10

    footer = [
        "",
        "=" * 50,
        f"Generated on: {generated_on.month}/{generated_on.day}/{generated_on.year}",
        f"{platform_name} Learning Platform",
    ]
    if content.estimatedDurationMinutes:
        footer.append(f"Estimated Duration: {_format_minutes(content.estimatedDurationMinutes)} minutes")

    return notes + "\n".join(footer) + "\n"
