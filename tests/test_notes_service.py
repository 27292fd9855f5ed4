"""Unit tests for plain-text lesson notes."""

import json
from datetime import date

from learnhub.schemas.course import CourseContent
from learnhub.services.content import build_text_notes, notes_filename
from learnhub.services.content.notes_service import strip_html


def _lesson(**fields):
    return CourseContent.model_validate({"_id": "l1", "title": "Chart Basics", **fields})


class TestBuildTextNotes:
    def test_layout(self):
        lesson = _lesson(
            description="Choosing charts",
            moduleContent="<p>Bars   compare.</p><p>Lines show <b>trends</b>.</p>",
            estimatedDurationMinutes=25,
            learningObjectives=json.dumps([{"id": "1", "text": "Pick a chart"}]),
            keyTakeaways=json.dumps([{"id": "1", "text": "Less is more"}]),
            interactiveElements=json.dumps([
                {"id": "1", "type": "tip", "content": "Start at zero", "position": 10},
            ]),
        )

        notes = build_text_notes(lesson, course_name="Data Viz", generated_on=date(2026, 3, 7))
        lines = notes.split("\n")

        assert lines[:5] == ["Data Viz", "Chart Basics", "=" * 50, "", "Description: Choosing charts"]
        assert "LEARNING OBJECTIVES:\n--------------------\n1. Pick a chart\n" in notes
        assert "MODULE CONTENT:\n---------------\nBars compare.Lines show trends.\n" in notes
        assert "1. [TIP] Key Point\n   Start at zero\n" in notes
        assert "KEY TAKEAWAYS:\n---------------\n1. Less is more\n" in notes
        assert notes.endswith(
            "=" * 50 + "\nGenerated on: 3/7/2026\nLearnHub Learning Platform\nEstimated Duration: 25 minutes\n"
        )

    def test_defaults_when_blobs_missing(self):
        notes = build_text_notes(_lesson(learningObjectives="not json"), generated_on=date(2026, 1, 2))

        assert "1. Master the core concepts of Chart Basics" in notes
        assert "4. [EXAMPLE] Real-World Application" in notes
        assert "4. Regular review and reflection improve long-term retention" in notes
        assert "MODULE CONTENT:" not in notes
        assert "Estimated Duration" not in notes
        assert notes.startswith("Chart Basics\n")

    def test_platform_name(self):
        notes = build_text_notes(_lesson(), generated_on=date(2026, 1, 2), platform_name="Acme")
        assert "Acme Learning Platform" in notes


class TestHelpers:
    def test_notes_filename(self):
        assert notes_filename("Lesson 1: Charts & Graphs") == "lesson-1--charts---graphs-notes.txt"
        assert notes_filename(None) == "module-notes-notes.txt"

    def test_strip_html(self):
        assert strip_html("<h1>Title</h1>\n\n<p>Body  text</p>") == "Title Body text"
