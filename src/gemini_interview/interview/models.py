"""Typed records for interview payloads.

Values recovered by the extraction engine may be partial (salvaged), so every
field a model produces is optional here and list fields default to empty.
Unknown keys are kept so richer model output is not lost.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gemini_interview.constants import MAX_SCORE, MIN_SCORE


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class AnswerEvaluation(_Payload):
    """Evaluation of a single answer."""

    score: int | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    feedback: str | None = None
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)

    @field_validator("strengths", "improvements", mode="before")
    @classmethod
    def _none_as_empty(cls, v: object) -> object:
        return [] if v is None else v


class PerformanceMetrics(_Payload):
    average_score: float | None = Field(default=None, alias="averageScore")
    communication_rating: float | None = Field(default=None, alias="communicationRating")
    technical_rating: float | None = Field(default=None, alias="technicalRating")
    confidence_level: str | None = Field(default=None, alias="confidenceLevel")


class HiringRecommendation(_Payload):
    level: str | None = None
    reasoning: str | None = None
    next_steps: str | None = Field(default=None, alias="nextSteps")


class SummaryReport(_Payload):
    """Overall interview report produced from all evaluations."""

    introduction_highlights: list[str] = Field(
        default_factory=list, alias="introductionHighlights"
    )
    performance_metrics: PerformanceMetrics | None = Field(
        default=None, alias="performanceMetrics"
    )
    top_strengths: list[str] = Field(default_factory=list, alias="topStrengths")
    areas_for_improvement: list[str] = Field(
        default_factory=list, alias="areasForImprovement"
    )
    hiring_recommendation: HiringRecommendation | None = Field(
        default=None, alias="hiringRecommendation"
    )

    @field_validator(
        "introduction_highlights",
        "top_strengths",
        "areas_for_improvement",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, v: object) -> object:
        return [] if v is None else v


class QuestionRecord(BaseModel):
    """One asked question with the candidate's transcribed answer."""

    question_text: str
    answer_transcription: str = ""
    evaluation: AnswerEvaluation | None = None


class InterviewSession(BaseModel):
    """Everything the summary report is generated from."""

    candidate_name: str
    position: str
    self_introduction: str = ""
    questions: list[QuestionRecord] = Field(default_factory=list)

    def evaluated_scores(self) -> list[int]:
        return [
            q.evaluation.score
            for q in self.questions
            if q.evaluation is not None and q.evaluation.score is not None
        ]
