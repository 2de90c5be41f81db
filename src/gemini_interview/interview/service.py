"""Interview question generation, answer evaluation and summary reports.

Each operation sends one prompt to Gemini, recovers a structured value from
the free-text response with the extraction engine, and validates it into a
typed record. When the API is not configured, the call fails, or nothing
usable can be recovered, the operation returns a mock value instead of
raising. That fallback is a documented branch, not an error path.
"""

import asyncio
import logging
import random
from typing import Any, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from gemini_interview.config import FrozenConfig, resolve_config
from gemini_interview.constants import (
    DEFAULT_LANGUAGE,
    FINISH_REASON_STOP,
    LOG_PREVIEW_CHARS,
)
from gemini_interview.exceptions import GenerationError, MissingKeyError
from gemini_interview.extraction import JsonExtractor

from .mocks import mock_evaluation, mock_questions, mock_report
from .models import AnswerEvaluation, InterviewSession, SummaryReport
from .prompts import (
    EVALUATION_PROFILE,
    QUESTIONS_PROFILE,
    REPORT_PROFILE,
    GenerationProfile,
    evaluation_prompt,
    questions_prompt,
    report_prompt,
)

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_client(config: FrozenConfig) -> genai.Client:
    """Create a Gemini client for the configured API key.

    Raises:
        MissingKeyError: If no API key is configured.
    """
    if not config.api_key:
        raise MissingKeyError(
            "GEMINI_API_KEY is required to call the Gemini API. "
            "Set the environment variable or pass api_key programmatically."
        )
    return genai.Client(api_key=config.api_key)


def _preview(text: str) -> str:
    return text[:LOG_PREVIEW_CHARS]


class InterviewService:
    """Gemini-backed interview assistant with mock fallbacks.

    Examples:
        service = InterviewService()  # Uses GEMINI_* environment configuration
        questions = await service.generate_questions("I am a backend engineer...")
    """

    def __init__(
        self,
        config: FrozenConfig | None = None,
        *,
        client: Any | None = None,
        rng: random.Random | None = None,
    ):
        """Create the service.

        Args:
            config: Frozen configuration; resolved from the environment if omitted.
            client: Pre-built `genai.Client` (or compatible object). When omitted
                a client is created lazily from the configured API key.
            rng: Random source for mock evaluation scores.
        """
        self.config = config if config is not None else resolve_config().to_frozen()
        self._client = client
        self._client_init_attempted = client is not None
        self._rng = rng or random.Random()
        self._array_extractor = JsonExtractor(self.config.array_extractor())
        self._object_extractor = JsonExtractor(self.config.object_extractor())
        log.debug("InterviewService initialized with %s.", self.config)

    # --- Client handling ---

    def _get_client(self) -> Any | None:
        """Return the API client, or None when mock responses should be used."""
        if self.config.use_mock:
            return None
        if not self._client_init_attempted:
            self._client_init_attempted = True
            if not self.config.api_key:
                log.warning("GEMINI_API_KEY not configured. Using mock responses.")
                return None
            try:
                self._client = build_client(self.config)
                log.info("Gemini client initialized for model '%s'.", self.config.model)
            except Exception as e:
                log.warning("Failed to initialize Gemini client: %s", e)
                self._client = None
        return self._client

    async def _generate_text(self, client: Any, prompt: str, profile: GenerationProfile) -> str:
        """Send one prompt and return the response text.

        Raises:
            GenerationError: If the call fails or exceeds `request_timeout`.
        """
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.config.model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=profile.temperature,
                        max_output_tokens=profile.max_output_tokens,
                    ),
                ),
                timeout=self.config.request_timeout,
            )
        except TimeoutError as e:
            raise GenerationError(
                f"Gemini request timed out after {self.config.request_timeout}s"
            ) from e
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        self._check_finish_reason(response)
        text = getattr(response, "text", None) or ""
        log.debug("Gemini response received (length: %d): %r", len(text), _preview(text))
        return text

    @staticmethod
    def _check_finish_reason(response: Any) -> None:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return
        reason = getattr(candidates[0], "finish_reason", None)
        name = getattr(reason, "name", reason)
        if name and name != FINISH_REASON_STOP:
            log.warning("Gemini response finished with reason: %s", name)

    @staticmethod
    def _validate(model: type[ModelT], parsed: Any, label: str) -> ModelT | None:
        if not isinstance(parsed, dict):
            return None
        try:
            return model.model_validate(parsed)
        except ValidationError as e:
            log.warning("Parsed %s did not match the expected shape: %s", label, e)
            return None

    # --- Operations ---

    async def generate_questions(
        self, introduction: str, language: str = DEFAULT_LANGUAGE
    ) -> list[str]:
        """Generate follow-up interview questions from a self-introduction."""
        count = self.config.question_count
        client = self._get_client()
        if client is None:
            log.info("Using mock questions.")
            return mock_questions(count)

        try:
            text = await self._generate_text(
                client, questions_prompt(introduction, count, language), QUESTIONS_PROFILE
            )
        except GenerationError:
            log.exception("Error generating interview questions; using mock questions.")
            return mock_questions(count)

        parsed = self._array_extractor.extract(text)
        questions = (
            [str(q).strip() for q in parsed if q is not None and str(q).strip()]
            if isinstance(parsed, list)
            else []
        )
        if not questions:
            log.warning(
                "Could not parse questions from Gemini response (length %d), using mock. "
                "Preview: %r",
                len(text),
                _preview(text),
            )
            return mock_questions(count)

        log.info("Successfully parsed %d questions from Gemini.", len(questions))
        return questions[:count]

    async def evaluate_answer(
        self, question: str, answer: str, language: str = DEFAULT_LANGUAGE
    ) -> AnswerEvaluation:
        """Score one answer and collect structured feedback."""
        client = self._get_client()
        if client is None:
            log.info("Using mock evaluation.")
            return mock_evaluation(self._rng)

        try:
            text = await self._generate_text(
                client, evaluation_prompt(question, answer, language), EVALUATION_PROFILE
            )
        except GenerationError:
            log.exception("Error evaluating answer; using mock evaluation.")
            return mock_evaluation(self._rng)

        evaluation = self._validate(
            AnswerEvaluation, self._object_extractor.extract(text), "evaluation"
        )
        if evaluation is None:
            log.warning(
                "Could not parse evaluation from Gemini response, using mock. "
                "Full response: %r",
                text,
            )
            return mock_evaluation(self._rng)

        log.info("Successfully parsed evaluation from Gemini (score: %s).", evaluation.score)
        return evaluation

    async def generate_summary_report(
        self, session: InterviewSession, language: str = DEFAULT_LANGUAGE
    ) -> SummaryReport:
        """Summarise a finished interview session."""
        client = self._get_client()
        if client is None:
            log.info("Using mock report.")
            return mock_report(session)

        try:
            text = await self._generate_text(
                client, report_prompt(session, language), REPORT_PROFILE
            )
        except GenerationError:
            log.exception("Error generating summary report; using mock report.")
            return mock_report(session)

        report = self._validate(
            SummaryReport, self._object_extractor.extract(text), "report"
        )
        if report is None:
            log.warning(
                "Could not parse report from Gemini response (length %d), using mock.",
                len(text),
            )
            return mock_report(session)

        log.info("Successfully parsed report from Gemini.")
        return report
