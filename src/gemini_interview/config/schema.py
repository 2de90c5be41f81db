"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment, an optional .env file and programmatic overrides
into the correct types with proper defaults.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_interview.constants import (
    DEFAULT_MAX_TEXT_SIZE,
    DEFAULT_MODEL,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_QUESTION_COUNT,
)


class InterviewSettings(BaseSettings):
    """Pydantic settings schema for the interview toolkit.

    Environment variables use the GEMINI_ prefix, e.g. GEMINI_API_KEY or
    GEMINI_MAX_SWEEP_STARTS.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    # --- API ---

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key; without one, mock responses are used",
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    use_mock: bool = Field(
        default=False,
        description="Always return mock responses, even with an API key",
    )

    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Upper bound in seconds for one model call",
        gt=0,
    )

    question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        description="Number of interview questions to generate",
        ge=1,
        le=MAX_QUESTION_COUNT,
    )

    # --- Extraction ---

    max_text_size: int = Field(
        default=DEFAULT_MAX_TEXT_SIZE,
        description="Responses longer than this are truncated before extraction",
        ge=1,
    )

    max_sweep_starts: int | None = Field(
        default=None,
        description="Bound on delimiter positions scanned per response; None scans all",
        ge=1,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for source tracking."""
        return {name: getattr(self, name) for name in type(self).model_fields}
