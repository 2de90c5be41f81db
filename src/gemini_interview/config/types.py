"""Core configuration data types.

Configuration follows a resolve-once, freeze-then-flow pattern: values are
merged and validated into a `ResolvedConfig` carrying audit metadata, then
frozen into the `FrozenConfig` handed to the service.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

from gemini_interview.constants import (
    DEFAULT_MAX_TEXT_SIZE,
    DEFAULT_MODEL,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_REQUEST_TIMEOUT,
)
from gemini_interview.extraction import ARRAY, OBJECT, ExtractorConfig

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing."""

    api_key: str | None
    model: str
    use_mock: bool
    request_timeout: float
    question_count: int
    max_text_size: int
    max_sweep_starts: int | None

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_mock={self.use_mock!r}, request_timeout={self.request_timeout!r}, "
            f"question_count={self.question_count!r}, "
            f"max_text_size={self.max_text_size!r}, "
            f"max_sweep_starts={self.max_sweep_starts!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used by the service."""
        return FrozenConfig(
            api_key=self.api_key,
            model=self.model,
            use_mock=self.use_mock,
            request_timeout=self.request_timeout,
            question_count=self.question_count,
            max_text_size=self.max_text_size,
            max_sweep_starts=self.max_sweep_starts,
        )


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration that flows into the interview service."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    use_mock: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    question_count: int = DEFAULT_QUESTION_COUNT
    max_text_size: int = DEFAULT_MAX_TEXT_SIZE
    max_sweep_starts: int | None = None

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_mock={self.use_mock!r}, request_timeout={self.request_timeout!r}, "
            f"question_count={self.question_count!r}, "
            f"max_text_size={self.max_text_size!r}, "
            f"max_sweep_starts={self.max_sweep_starts!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    @property
    def use_real_api(self) -> bool:
        """True when an API key is configured and mocks are not forced."""
        return bool(self.api_key) and not self.use_mock

    def object_extractor(self) -> ExtractorConfig:
        return ExtractorConfig(
            pair=OBJECT,
            max_text_size=self.max_text_size,
            max_sweep_starts=self.max_sweep_starts,
        )

    def array_extractor(self) -> ExtractorConfig:
        return ExtractorConfig(
            pair=ARRAY,
            max_text_size=self.max_text_size,
            max_sweep_starts=self.max_sweep_starts,
        )
