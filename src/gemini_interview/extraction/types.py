"""Core data types that flow through the extraction pipeline.

Every stage of the pipeline is a pure function that returns a `ParseOutcome`
instead of raising. The outcome is a small tagged union: three success
variants that record which stage recovered the value, and a `Failure`
carrying the reason. The orchestrator advances to the next stage only on
`Failure`, so malformed model output stays a predictable part of the data
flow rather than an exception.
"""

from __future__ import annotations

import dataclasses
import enum
import typing

# JSON-like values as produced by the decoder (dicts keep key order)
JsonValue = typing.Union[
    dict[str, "JsonValue"], list["JsonValue"], str, int, float, bool, None
]

Stage = typing.Literal["strict", "repair", "salvage"]
Source = typing.Literal["raw", "fenced", "span", "text"]


def _require(*, condition: bool, message: str, field_name: str) -> None:
    """Validation helper that prefixes the failing field name."""
    if not condition:
        raise ValueError(f"{field_name}: {message}")


# --- Delimiters ---


@dataclasses.dataclass(frozen=True, slots=True)
class DelimiterPair:
    """Opening/closing characters expected at the top level of a result."""

    open: str
    close: str

    def __post_init__(self) -> None:
        """Only the JSON object and array pairs are meaningful."""
        _require(
            condition=(self.open, self.close) in (("{", "}"), ("[", "]")),
            message=f"unsupported delimiter pair {self.open!r}, {self.close!r}",
            field_name="pair",
        )

    @classmethod
    def of(cls, open_char: str, close_char: str) -> DelimiterPair:
        if (open_char, close_char) == ("{", "}"):
            return OBJECT
        if (open_char, close_char) == ("[", "]"):
            return ARRAY
        return cls(open_char, close_char)  # raises with a clear message

    @property
    def is_array(self) -> bool:
        return self.open == "["


OBJECT = DelimiterPair("{", "}")
ARRAY = DelimiterPair("[", "]")


# --- Scanner ---


class ScanMode(enum.Enum):
    """States of the string-aware bracket scanner."""

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_STRING_ESCAPED = "in_string_escaped"


@dataclasses.dataclass(frozen=True, slots=True)
class Span:
    """Inclusive bounds of one balanced structure inside the working text."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end + 1]


# --- Outcomes ---


class FailureReason(enum.Enum):
    """Why a stage (or the whole pipeline) recovered nothing."""

    UNPARSEABLE = "unparseable"
    TRUNCATED = "truncated"
    NO_CANDIDATE = "no_candidate"


@dataclasses.dataclass(frozen=True, slots=True)
class StrictSuccess:
    """The text parsed as-is."""

    value: JsonValue
    stage: typing.ClassVar[Stage] = "strict"
    ok: typing.ClassVar[bool] = True


@dataclasses.dataclass(frozen=True, slots=True)
class RepairedSuccess:
    """The text parsed after the heuristic repair pass."""

    value: JsonValue
    stage: typing.ClassVar[Stage] = "repair"
    ok: typing.ClassVar[bool] = True


@dataclasses.dataclass(frozen=True, slots=True)
class SalvagePartial:
    """Individually recognised fields, or a flat list of strings.

    Only the recovered keys are present, so consumers must treat every
    field of a salvaged object as optional.
    """

    value: JsonValue
    stage: typing.ClassVar[Stage] = "salvage"
    ok: typing.ClassVar[bool] = True


@dataclasses.dataclass(frozen=True, slots=True)
class Failure:
    """Nothing was recovered."""

    reason: FailureReason = FailureReason.UNPARSEABLE
    stage: typing.ClassVar[None] = None
    ok: typing.ClassVar[bool] = False

    @property
    def value(self) -> None:
        return None


ParseOutcome = StrictSuccess | RepairedSuccess | SalvagePartial | Failure


# --- Orchestrator results ---


@dataclasses.dataclass(slots=True)
class ExtractionDiagnostics:
    """Record of what the orchestrator tried for a single call.

    Attributes:
        attempted_sources: Sources tried in order ("raw", "fenced", "span", "text").
        attempted_spans: Start offsets of the balanced candidates that were parsed.
        truncated_starts: Start offsets whose structure never closed.
        flags: Free-form markers such as "truncated_input" or "sweep_limited".
    """

    attempted_sources: list[Source] = dataclasses.field(default_factory=list)
    attempted_spans: list[int] = dataclasses.field(default_factory=list)
    truncated_starts: list[int] = dataclasses.field(default_factory=list)
    flags: set[str] = dataclasses.field(default_factory=set)


@dataclasses.dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Final outcome of one extraction call."""

    outcome: ParseOutcome
    source: Source | None = None
    span: Span | None = None
    diagnostics: ExtractionDiagnostics = dataclasses.field(
        default_factory=ExtractionDiagnostics
    )

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def value(self) -> JsonValue:
        return self.outcome.value

    @property
    def stage(self) -> Stage | None:
        return self.outcome.stage
