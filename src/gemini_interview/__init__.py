"""Resilient structured-data extraction for Gemini interview workflows."""

import importlib.metadata
import logging

from gemini_interview.config import FrozenConfig, ResolvedConfig, resolve_config
from gemini_interview.exceptions import (
    ConfigurationError,
    GeminiInterviewError,
    GenerationError,
    MissingKeyError,
)
from gemini_interview.extraction import (
    ExtractionResult,
    ExtractorConfig,
    JsonExtractor,
    extract,
    extract_array,
    extract_object,
)
from gemini_interview.interview import (
    AnswerEvaluation,
    InterviewService,
    InterviewSession,
    QuestionRecord,
    SummaryReport,
)

# Version handling
try:
    __version__ = importlib.metadata.version("gemini-interview")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Extraction engine
    "extract",
    "extract_array",
    "extract_object",
    "JsonExtractor",
    "ExtractorConfig",
    "ExtractionResult",
    # Interview service
    "InterviewService",
    "AnswerEvaluation",
    "InterviewSession",
    "QuestionRecord",
    "SummaryReport",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Exceptions
    "GeminiInterviewError",
    "ConfigurationError",
    "GenerationError",
    "MissingKeyError",
]
