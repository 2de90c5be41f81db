"""Orchestration of the extraction pipeline.

`JsonExtractor` runs a strict fallback chain over one complete model
response and returns the first value any stage recovers:

1. strict parse of the trimmed response, then of its first fenced block;
2. for the balanced span opened at the first delimiter of the fence-free
   text: strict parse, heuristic repair, field-level salvage;
3. the same three stages for every later delimiter position (the sweep);
4. field-level salvage over the whole fence-free text.

Focus: how to configure an extractor, what `run()` returns, and why it never
raises for text input.
"""

from __future__ import annotations

import dataclasses
import logging

from gemini_interview.constants import DEFAULT_MAX_TEXT_SIZE

from .fences import strip_fences
from .repair import DEFAULT_REPAIR_RULES, RepairRule, parse_repaired
from .salvage import DEFAULT_SALVAGE_FIELDS, SalvageFieldSpec, salvage
from .scanner import SpanLocator
from .strict import parse_strict
from .types import (
    ARRAY,
    OBJECT,
    DelimiterPair,
    ExtractionDiagnostics,
    ExtractionResult,
    Failure,
    FailureReason,
    JsonValue,
    ParseOutcome,
    Source,
    Span,
)

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Immutable settings for a `JsonExtractor`.

    Attributes:
        pair: Delimiters expected at the top level of the result.
        repair_rules: Ordered rules for the heuristic repair pass.
        salvage_fields: Field specifications for the salvage stage.
        max_text_size: Longer inputs are truncated before processing.
        max_sweep_starts: Upper bound on scanned start positions; None scans all.
    """

    pair: DelimiterPair = OBJECT
    repair_rules: tuple[RepairRule, ...] = DEFAULT_REPAIR_RULES
    salvage_fields: tuple[SalvageFieldSpec, ...] = DEFAULT_SALVAGE_FIELDS
    max_text_size: int = DEFAULT_MAX_TEXT_SIZE
    max_sweep_starts: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pair, DelimiterPair):
            raise TypeError(f"pair: must be DelimiterPair, got {type(self.pair).__name__}")
        if self.max_text_size < 1:
            raise ValueError("max_text_size: must be >= 1")
        if self.max_sweep_starts is not None and self.max_sweep_starts < 1:
            raise ValueError("max_sweep_starts: must be >= 1 or None")
        object.__setattr__(self, "repair_rules", tuple(self.repair_rules))
        object.__setattr__(self, "salvage_fields", tuple(self.salvage_fields))

    @classmethod
    def for_object(cls, **overrides: object) -> ExtractorConfig:
        return cls(pair=OBJECT, **overrides)  # type: ignore[arg-type]

    @classmethod
    def for_array(cls, **overrides: object) -> ExtractorConfig:
        return cls(pair=ARRAY, **overrides)  # type: ignore[arg-type]

    def with_overrides(self, **overrides: object) -> ExtractorConfig:
        return dataclasses.replace(self, **overrides)  # type: ignore[arg-type]


class JsonExtractor:
    """Recover a JSON object or array from free-form model output.

    The extractor holds only its configuration, so one instance can be shared
    between threads and tasks.
    """

    def __init__(self, config: ExtractorConfig | None = None, **overrides: object):
        """Initialize the extractor.

        Args:
            config: Base configuration. Defaults to an object extractor.
            **overrides: Field overrides applied on top of `config`.
        """
        base = config if config is not None else ExtractorConfig()
        self.config = base.with_overrides(**overrides) if overrides else base

    def extract(self, text: object) -> JsonValue:
        """Return the recovered value, or None when nothing was recovered."""
        return self.run(text).value

    def run(self, text: object) -> ExtractionResult:
        """Run the full fallback chain and describe how it ended.

        Returns:
            `ExtractionResult` whose outcome is the first success, or a
            `Failure` whose reason tells an unbalanced structure apart from
            text with no usable structure at all. Never raises.
        """
        diagnostics = ExtractionDiagnostics()

        if not isinstance(text, str):
            log.debug("Ignoring non-string input of type %s.", type(text).__name__)
            diagnostics.flags.add("non_string_input")
            return ExtractionResult(
                Failure(FailureReason.NO_CANDIDATE), diagnostics=diagnostics
            )

        if len(text) > self.config.max_text_size:
            text = text[: self.config.max_text_size]
            diagnostics.flags.add("truncated_input")

        trimmed = text.strip()

        # Direct parse of the whole response
        diagnostics.attempted_sources.append("raw")
        outcome = parse_strict(trimmed)
        if outcome.ok:
            return self._finish(outcome, "raw", None, diagnostics)

        fenced = strip_fences(trimmed)
        if fenced.first_block is not None:
            diagnostics.attempted_sources.append("fenced")
            outcome = parse_strict(fenced.first_block)
            if outcome.ok:
                return self._finish(outcome, "fenced", None, diagnostics)

        working = fenced.working_text
        locator = SpanLocator(working, self.config.pair)
        limit = self.config.max_sweep_starts

        for attempt, start in enumerate(locator.open_positions()):
            if limit is not None and attempt >= limit:
                diagnostics.flags.add("sweep_limited")
                log.debug("Sweep stopped after %d start positions.", limit)
                break
            if attempt == 1:
                log.debug("First candidate recovered nothing; sweeping later positions.")

            span = locator.span_at(start)
            if span is None:
                diagnostics.truncated_starts.append(start)
                continue

            if not diagnostics.attempted_spans:
                diagnostics.attempted_sources.append("span")
            diagnostics.attempted_spans.append(start)
            outcome = self._parse_candidate(span.slice(working))
            if outcome.ok:
                return self._finish(outcome, "span", span, diagnostics)

        # Labelled fields may survive outside any balanced structure
        diagnostics.attempted_sources.append("text")
        outcome = salvage(
            working,
            self.config.salvage_fields,
            allow_plain_list=self.config.pair.is_array,
        )
        if outcome.ok:
            return self._finish(outcome, "text", None, diagnostics)

        reason = self._failure_reason(working, diagnostics)
        log.debug(
            "No value recovered (%s); %d candidate(s), %d truncated.",
            reason.value,
            len(diagnostics.attempted_spans),
            len(diagnostics.truncated_starts),
        )
        return ExtractionResult(Failure(reason), diagnostics=diagnostics)

    def _parse_candidate(self, candidate: str) -> ParseOutcome:
        """Strict parse, then repair, then salvage; the first success wins."""
        outcome = parse_strict(candidate)
        if outcome.ok:
            return outcome
        outcome = parse_repaired(candidate, self.config.repair_rules)
        if outcome.ok:
            return outcome
        return salvage(candidate, self.config.salvage_fields)

    def _failure_reason(
        self, working: str, diagnostics: ExtractionDiagnostics
    ) -> FailureReason:
        if diagnostics.attempted_spans:
            return FailureReason.UNPARSEABLE
        if diagnostics.truncated_starts:
            return FailureReason.TRUNCATED
        if self.config.pair.open not in working:
            return FailureReason.NO_CANDIDATE
        return FailureReason.UNPARSEABLE

    @staticmethod
    def _finish(
        outcome: ParseOutcome,
        source: Source,
        span: Span | None,
        diagnostics: ExtractionDiagnostics,
    ) -> ExtractionResult:
        log.debug("Recovered a value at the %s stage from %s text.", outcome.stage, source)
        return ExtractionResult(outcome, source, span, diagnostics)


def extract(text: object, open_char: str = "{", close_char: str = "}") -> JsonValue:
    """Recover a JSON value delimited by `open_char`/`close_char`, or None.

    Raises:
        ValueError: If the delimiter pair is neither `{}` nor `[]`.
    """
    pair = DelimiterPair.of(open_char, close_char)
    return JsonExtractor(ExtractorConfig(pair=pair)).extract(text)


def extract_object(text: object) -> JsonValue:
    return JsonExtractor(ExtractorConfig.for_object()).extract(text)


def extract_array(text: object) -> JsonValue:
    return JsonExtractor(ExtractorConfig.for_array()).extract(text)
