"""Unit tests for mock fallbacks, prompt builders and payload models."""

import random

from pydantic import ValidationError
import pytest

from gemini_interview.interview import (
    AnswerEvaluation,
    InterviewSession,
    QuestionRecord,
    SummaryReport,
    language_guidance,
    mock_evaluation,
    mock_questions,
    mock_report,
)
from gemini_interview.interview.prompts import (
    evaluation_prompt,
    questions_prompt,
    report_prompt,
)


def _session(*scores):
    return InterviewSession(
        candidate_name="Ravi",
        position="Analyst",
        questions=[
            QuestionRecord(
                question_text=f"Q{i}?",
                evaluation=None if score is None else AnswerEvaluation(score=score),
            )
            for i, score in enumerate(scores, start=1)
        ],
    )


class TestMocks:
    @pytest.mark.unit
    def test_mock_questions_respects_count(self):
        assert len(mock_questions()) == 7
        assert len(mock_questions(3)) == 3

    @pytest.mark.unit
    def test_mock_evaluation_is_seedable(self):
        first = mock_evaluation(random.Random(7))
        second = mock_evaluation(random.Random(7))

        assert first == second
        assert 70 <= first.score <= 99

    @pytest.mark.unit
    def test_mock_report_averages_over_all_questions(self):
        report = mock_report(_session(90, None, 90))

        assert report.performance_metrics.average_score == 60
        assert report.hiring_recommendation.level == "Recommended"

    @pytest.mark.unit
    def test_mock_report_recommendation_threshold(self):
        assert mock_report(_session(81)).hiring_recommendation.level == "Highly Recommended"
        assert mock_report(_session(80)).hiring_recommendation.level == "Recommended"

    @pytest.mark.unit
    def test_mock_report_for_empty_session(self):
        assert mock_report(_session()).performance_metrics.average_score == 0


class TestPrompts:
    @pytest.mark.unit
    def test_unknown_language_falls_back_to_english(self):
        assert language_guidance("fr-FR").name == "English"
        assert language_guidance("ta-IN").name == "Tamil"

    @pytest.mark.unit
    def test_questions_prompt_mentions_count_and_language(self):
        prompt = questions_prompt("I teach maths.", 3, "hi-IN")

        assert "exactly 3" in prompt
        assert "Hindi" in prompt
        assert '["Question 1?", "Question 2?", "Question 3?"]' in prompt

    @pytest.mark.unit
    def test_evaluation_prompt_embeds_question_and_answer(self):
        prompt = evaluation_prompt("Why?", "Because.", "en-US")

        assert 'Question: "Why?"' in prompt
        assert 'Answer: "Because."' in prompt
        assert '{"score": <0-100 integer>' in prompt

    @pytest.mark.unit
    def test_report_prompt_lists_every_question(self):
        prompt = report_prompt(_session(75, None), "en-US")

        assert "Q1: Q1?" in prompt
        assert "Q2: Q2?" in prompt
        assert "Score: 75/100 - no feedback" in prompt


class TestModels:
    @pytest.mark.unit
    def test_partial_evaluation_is_valid(self):
        evaluation = AnswerEvaluation.model_validate(
            {"feedback": "ok", "strengths": None, "extra": 1}
        )

        assert evaluation.score is None
        assert evaluation.strengths == []
        assert evaluation.improvements == []

    @pytest.mark.unit
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            AnswerEvaluation(score=101)

    @pytest.mark.unit
    def test_report_accepts_aliases_and_field_names(self):
        by_alias = SummaryReport.model_validate({"topStrengths": ["a"]})
        by_name = SummaryReport(top_strengths=["a"])

        assert by_alias == by_name
        assert by_alias.model_dump(by_alias=True)["topStrengths"] == ["a"]
