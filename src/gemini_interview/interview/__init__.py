"""
Interview workflows built on Gemini and the extraction engine
"""

from .mocks import mock_evaluation, mock_questions, mock_report
from .models import (
    AnswerEvaluation,
    HiringRecommendation,
    InterviewSession,
    PerformanceMetrics,
    QuestionRecord,
    SummaryReport,
)
from .prompts import GenerationProfile, language_guidance
from .service import InterviewService, build_client

__all__ = [
    "InterviewService",
    "build_client",
    "AnswerEvaluation",
    "HiringRecommendation",
    "InterviewSession",
    "PerformanceMetrics",
    "QuestionRecord",
    "SummaryReport",
    "GenerationProfile",
    "language_guidance",
    "mock_evaluation",
    "mock_questions",
    "mock_report",
]
