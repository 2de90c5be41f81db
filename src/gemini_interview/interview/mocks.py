"""Deterministic fallbacks used when the API is unavailable or unparseable."""

import random

from .models import (
    AnswerEvaluation,
    HiringRecommendation,
    InterviewSession,
    PerformanceMetrics,
    SummaryReport,
)

MOCK_QUESTIONS = (
    "Can you tell us more about your most significant professional achievement?",
    "Describe a situation where you had to solve a complex problem. What was your approach?",
    "How do you stay updated with industry trends and technologies?",
    "Tell us about a time you had to work with a difficult team member. How did you handle it?",
    "What attracts you to this specific position and our organization?",
    "Describe your experience with leading projects or initiatives.",
    "Where do you see yourself in the next five years, and how does this role fit into that vision?",
)

# Scores of mock evaluations fall in [70, 99]
_MOCK_SCORE_RANGE = (70, 99)
_HIGHLY_RECOMMENDED_ABOVE = 80


def mock_questions(count: int = len(MOCK_QUESTIONS)) -> list[str]:
    return list(MOCK_QUESTIONS[:count])


def mock_evaluation(rng: random.Random | None = None) -> AnswerEvaluation:
    rng = rng or random.Random()
    return AnswerEvaluation(
        score=rng.randint(*_MOCK_SCORE_RANGE),
        feedback=(
            "Good response demonstrating relevant experience and communication skills."
        ),
        strengths=[
            "Clear articulation of thoughts",
            "Relevant experience demonstrated",
            "Good communication skills",
        ],
        improvements=[
            "Could provide more specific examples",
            "Consider adding measurable outcomes",
        ],
    )


def mock_report(session: InterviewSession) -> SummaryReport:
    """Build a report from the scores already recorded in the session."""
    scores = session.evaluated_scores()
    average = sum(scores) / len(session.questions) if session.questions else 0.0

    return SummaryReport(
        introduction_highlights=[
            "Demonstrated strong professional background",
            "Clear understanding of role requirements",
            "Enthusiastic about the opportunity",
        ],
        performance_metrics=PerformanceMetrics(
            average_score=round(average),
            communication_rating=4,
            technical_rating=4,
            confidence_level="High",
        ),
        top_strengths=[
            "Excellent communication and presentation skills",
            "Strong relevant technical background",
            "Good problem-solving approach",
        ],
        areas_for_improvement=[
            "More specific examples could strengthen responses",
            "Could elaborate on team collaboration experience",
        ],
        hiring_recommendation=HiringRecommendation(
            level=(
                "Highly Recommended"
                if average > _HIGHLY_RECOMMENDED_ABOVE
                else "Recommended"
            ),
            reasoning=(
                "Candidate demonstrates strong technical skills and communication "
                "abilities. Shows good fit for the role."
            ),
            next_steps="Schedule technical assessment and team lead interview.",
        ),
    )
