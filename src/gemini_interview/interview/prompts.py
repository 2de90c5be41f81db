"""Prompt construction for the interview tasks."""

from dataclasses import dataclass

from gemini_interview.constants import DEFAULT_LANGUAGE

from .models import InterviewSession, QuestionRecord


@dataclass(frozen=True, slots=True)
class GenerationProfile:
    """Sampling settings for one kind of request."""

    temperature: float
    max_output_tokens: int


QUESTIONS_PROFILE = GenerationProfile(temperature=0.5, max_output_tokens=2000)
EVALUATION_PROFILE = GenerationProfile(temperature=0.1, max_output_tokens=1500)
REPORT_PROFILE = GenerationProfile(temperature=0.3, max_output_tokens=3000)


@dataclass(frozen=True, slots=True)
class LanguageGuidance:
    name: str
    questions_note: str
    evaluation_note: str
    report_note: str


_LANGUAGES = {
    "en-US": LanguageGuidance(
        name="English",
        questions_note=(
            "Respond in English. Return the questions in English and ensure "
            "the JSON fields are in English."
        ),
        evaluation_note=(
            "The candidate responded in English. Provide the evaluation in English."
        ),
        report_note="",
    ),
    "ta-IN": LanguageGuidance(
        name="Tamil",
        questions_note=(
            "Respond ONLY in Tamil (தமிழ்). Return the questions in Tamil script "
            "and ensure the JSON fields are in Tamil."
        ),
        evaluation_note=(
            "The candidate responded in Tamil (தமிழ்). Provide the evaluation in "
            "Tamil and include language-appropriate feedback."
        ),
        report_note=(
            "Note: The interview was conducted in Tamil (தமிழ்). Return the report "
            "fields (highlights, strengths, feedback) in Tamil."
        ),
    ),
    "hi-IN": LanguageGuidance(
        name="Hindi",
        questions_note=(
            "Respond ONLY in Hindi (हिन्दी). Return the questions in Hindi "
            "(Devanagari) and ensure the JSON fields are in Hindi."
        ),
        evaluation_note=(
            "The candidate responded in Hindi (हिन्दी). Provide the evaluation in "
            "Hindi and include language-appropriate feedback."
        ),
        report_note=(
            "Note: The interview was conducted in Hindi (हिन्दी). Return the report "
            "fields in Hindi."
        ),
    ),
}


def language_guidance(language: str) -> LanguageGuidance:
    """Guidance for a language code; unknown codes fall back to English."""
    return _LANGUAGES.get(language, _LANGUAGES[DEFAULT_LANGUAGE])


def questions_prompt(introduction: str, count: int, language: str) -> str:
    guidance = language_guidance(language)
    example = ", ".join(f'"Question {i}?"' for i in range(1, count + 1))
    return f"""You are a professional HR recruiter. {guidance.questions_note} Based on the following candidate's self-introduction, generate exactly {count} diverse and relevant follow-up interview questions in {guidance.name}.

Self-Introduction: "{introduction}"

Generate {count} interview questions that cover different competency areas such as:
- Technical skills (if applicable)
- Problem-solving abilities
- Communication skills
- Team collaboration
- Experience and background
- Career goals and motivation
- Specific domain expertise

Return ONLY a valid JSON array with exactly {count} questions. No markdown, no code fences, no extra text. Example:
[{example}]"""


def evaluation_prompt(question: str, answer: str, language: str) -> str:
    guidance = language_guidance(language)
    return f"""You are a professional HR recruiter. Evaluate this candidate's answer objectively. {guidance.evaluation_note}

Question: "{question}"
Answer: "{answer}"

Score this answer from 0-100 and provide structured feedback.

Respond with ONLY a valid JSON object on a single line. No markdown, no code fences, no extra text, no line breaks:
{{"score": <0-100 integer>, "feedback": "<1-2 sentence summary>", "strengths": ["<strength 1>", "<strength 2>"], "improvements": ["<improvement 1>", "<improvement 2>"]}}"""


def report_prompt(session: InterviewSession, language: str) -> str:
    guidance = language_guidance(language)
    evaluations = "\n\n".join(
        f"Q{i}: {q.question_text}\nA: {q.answer_transcription}\n"
        f"Score: {_score_text(q)}/100 - {_feedback_text(q)}"
        for i, q in enumerate(session.questions, start=1)
    )
    return f"""You are a senior HR recruiter generating a comprehensive interview summary report.

Candidate Information:
- Name: {session.candidate_name}
- Position: {session.position}
- Self-Introduction: {session.self_introduction}

{guidance.report_note}

Interview Q&A Evaluations:
{evaluations}

Generate a comprehensive JSON report on a single line. Respond with ONLY valid JSON, no markdown, no code fences, no extra text:
{{"introductionHighlights": ["<key highlight 1>", "<highlight 2>", "<highlight 3>"], "performanceMetrics": {{"averageScore": <number>, "communicationRating": <1-5>, "technicalRating": <1-5>, "confidenceLevel": "<High|Medium|Low>"}}, "topStrengths": ["<strength 1>", "<strength 2>", "<strength 3>"], "areasForImprovement": ["<area 1>", "<area 2>"], "hiringRecommendation": {{"level": "<Highly Recommended|Recommended|Consider|Not Recommended>", "reasoning": "<detailed reasoning>", "nextSteps": "<recommended next action>"}}}}"""


def _score_text(record: QuestionRecord) -> str:
    if record.evaluation is None or record.evaluation.score is None:
        return "n/a"
    return str(record.evaluation.score)


def _feedback_text(record: QuestionRecord) -> str:
    if record.evaluation is None or not record.evaluation.feedback:
        return "no feedback"
    return record.evaluation.feedback
