"""Unit tests for tolerant JSON blob parsing."""

import json

from learnhub.schemas.course import CourseContent
from learnhub.services.content.blob_parser import (
    parse_activity,
    parse_assessment_questions,
    parse_key_takeaways,
    parse_learning_objectives,
    parse_scoring_system,
)


def _content(**fields):
    return CourseContent.model_validate({"_id": "c1", "title": "Charts", **fields})


# ─────────────────────────────────────────────────────────────────
# List blobs
# ─────────────────────────────────────────────────────────────────


class TestListBlobs:
    def test_valid(self):
        objectives = parse_learning_objectives(json.dumps([{"id": "a", "text": "Read"}, {"id": "b", "text": "Plot"}]))
        assert [o.id for o in objectives] == ["a", "b"]

    def test_missing_and_blank(self):
        assert parse_learning_objectives(None) == []
        assert parse_learning_objectives("   ") == []

    def test_malformed_json(self):
        assert parse_key_takeaways("[{not json") == []

    def test_wrong_shape(self):
        assert parse_learning_objectives(json.dumps({"id": "a", "text": "x"})) == []

    def test_non_string_value(self):
        assert parse_learning_objectives(42) == []

    def test_invalid_items_dropped_and_ids_filled(self):
        raw = json.dumps([{"text": "No id"}, {"id": "x"}, "junk", {"id": "c", "text": "Ok"}])

        objectives = parse_learning_objectives(raw)

        assert [(o.id, o.text) for o in objectives] == [("1", "No id"), ("c", "Ok")]

    def test_numeric_ids_kept_as_strings(self):
        raw = json.dumps([{"id": 1, "text": "Read"}, {"id": 2, "text": "Plot"}, {"id": 0, "text": "Zero"}])

        objectives = parse_learning_objectives(raw)

        assert [o.id for o in objectives] == ["1", "2", "0"]

    def test_numeric_ids_keep_quiz_and_drag_drop_activities(self):
        quiz = _content(assessmentQuestions=json.dumps([{"id": 1, "question": "Q?", "correctAnswer": 1}]))
        drag_drop = _content(activityData=json.dumps({
            "type": "drag-drop",
            "items": [{"id": 1, "content": "Bar", "correctCategory": 10}],
            "categories": [{"id": 10, "name": "Charts"}],
        }))

        quiz_activity = parse_activity(quiz)
        drag_drop_activity = parse_activity(drag_drop)

        assert [q.id for q in quiz_activity.questions] == ["1"]
        assert quiz_activity.is_empty is False
        assert drag_drop_activity.items[0].correctCategory == "10"
        assert drag_drop_activity.categories[0].id == "10"


class TestAssessmentQuestions:
    def test_bare_list(self):
        questions = parse_assessment_questions(json.dumps([{"question": "Q?", "correctAnswer": 0}]))
        assert questions[0].id == "1"
        assert questions[0].type == "multiple-choice"

    def test_wrapped_object(self):
        raw = json.dumps({"questions": [{"question": "A?"}, {"question": "B?", "type": "essay"}], "totalPoints": 30})
        assert [q.question for q in parse_assessment_questions(raw)] == ["A?", "B?"]


class TestScoringSystem:
    def test_defaults_when_invalid(self):
        assert parse_scoring_system("oops").totalPoints is None
        assert parse_scoring_system(json.dumps({"totalPoints": 30, "passingScore": 21})).passingScore == 21


# ─────────────────────────────────────────────────────────────────
# parse_activity
# ─────────────────────────────────────────────────────────────────


class TestParseActivity:
    def test_activity_data_wins(self):
        content = _content(
            activityData=json.dumps({
                "type": "drag-drop",
                "items": [{"id": "i1", "content": "Bar", "correctCategory": "cmp"}, {"id": "bad"}],
                "categories": [{"id": "cmp", "name": "Compare"}],
            }),
            assessmentQuestions=json.dumps([{"question": "ignored"}]),
        )

        activity = parse_activity(content)

        assert activity.type == "drag-drop"
        assert activity.id == "c1"
        assert [i.id for i in activity.items] == ["i1"]
        assert activity.questions == []

    def test_falls_back_to_assessment_questions(self):
        activity = parse_activity(_content(
            activityData="{broken",
            assessmentQuestions=json.dumps([{"question": "Q?"}]),
        ))

        assert activity.type == "quiz"
        assert len(activity.questions) == 1

    def test_question_set_in_text_content(self):
        activity = parse_activity(_content(
            contentType="assessment",
            textContent=json.dumps({"questions": [{"question": "Q1"}, {"question": "Q2"}], "passingScore": 21}),
        ))

        assert [q.id for q in activity.questions] == ["1", "2"]

    def test_plain_text_lesson_has_empty_quiz(self):
        activity = parse_activity(_content(contentType="text", textContent="Just prose."))

        assert activity.type == "quiz"
        assert activity.is_empty is True
