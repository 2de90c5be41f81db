"""Field-level salvage for responses too malformed to repair.

Each field is recognised independently with its own pattern, so a corrupted
`feedback` value does not prevent recovering a valid `score`. Salvage always
reads the original candidate text, never the output of the repair pass.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
import re
from typing import Any

from .types import Failure, FailureReason, ParseOutcome, SalvagePartial

Reducer = Callable[[str], Any]

_SURROUNDING_QUOTE = re.compile(r"""^["']|["']$""")
_QUOTED_ITEM_BOUNDARY = re.compile(r'"\s*,\s*"')


def strip_quote_layer(item: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    return _SURROUNDING_QUOTE.sub("", item)


def reduce_int(raw: str) -> int:
    return int(raw, 10)


def reduce_text(raw: str) -> str:
    return raw


def reduce_list(raw: str) -> list[str]:
    """Split comma-separated items, trimming and unquoting each one."""
    items = (strip_quote_layer(part.strip()) for part in raw.split(","))
    return [item for item in items if item]


@dataclass(frozen=True, slots=True)
class SalvageFieldSpec:
    """How to recognise and reduce one named field.

    The recogniser accepts both `"name": VALUE` and bare `name: VALUE`;
    `value_pattern` must contain exactly one capturing group.

    Attributes:
        name: Key of the field in the salvaged object.
        value_pattern: Regex for the value, with one capturing group.
        reducer: Converts the captured text into the field value.
        default_factory: Value used when the field is absent; None omits it.
        anchor: Whether recovering this field alone justifies a result.
        terminator: Closing character the value must end with. Text after its
            last occurrence cannot hold a match and is not searched.
    """

    name: str
    value_pattern: str
    reducer: Reducer
    default_factory: Callable[[], Any] | None = None
    anchor: bool = False
    terminator: str | None = None
    recognizer: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        label = re.escape(self.name)
        pattern = (
            rf'"{label}"\s*:\s*{self.value_pattern}|{label}\s*:\s*{self.value_pattern}'
        )
        object.__setattr__(self, "recognizer", re.compile(pattern))

    def extract(self, text: str) -> Any | None:
        """Return the reduced value of the first match, or None."""
        if self.terminator is not None:
            end = text.rfind(self.terminator)
            if end == -1:
                return None
            text = text[: end + 1]
        match = self.recognizer.search(text)
        if match is None:
            return None
        raw = match.group(1) if match.group(1) is not None else match.group(2)
        try:
            return self.reducer(raw)
        except ValueError:
            # e.g. integers beyond the interpreter's digit limit
            return None


DEFAULT_SALVAGE_FIELDS: tuple[SalvageFieldSpec, ...] = (
    SalvageFieldSpec("score", r"([0-9]+)", reduce_int, anchor=True),
    SalvageFieldSpec("feedback", r'"([^"]*)"', reduce_text, anchor=True),
    SalvageFieldSpec(
        "strengths",
        r"\[([\s\S]*?)\]",
        reduce_list,
        default_factory=list,
        terminator="]",
    ),
    SalvageFieldSpec(
        "improvements",
        r"\[([\s\S]*?)\]",
        reduce_list,
        default_factory=list,
        terminator="]",
    ),
)


def plain_string_list(text: str) -> list[str]:
    """Recover a flat list of strings from the outermost `[...]` in text."""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end < start:
        return []
    items = (
        strip_quote_layer(part.strip())
        for part in _QUOTED_ITEM_BOUNDARY.split(text[start + 1 : end])
    )
    return [item for item in items if item]


def salvage(
    candidate: str,
    specs: Sequence[SalvageFieldSpec] = DEFAULT_SALVAGE_FIELDS,
    *,
    allow_plain_list: bool = True,
) -> ParseOutcome:
    """Recover whatever individually recognisable fields the text holds.

    Args:
        candidate: Original (unrepaired) text to search.
        specs: Field specifications, tried independently.
        allow_plain_list: Fall back to a flat list of quoted strings when no
            field pattern matched.

    Returns:
        `SalvagePartial` with a fresh dict when an anchor field was recovered,
        `SalvagePartial` with a non-empty list from the plain-list fallback,
        otherwise `Failure(UNPARSEABLE)`.
    """
    recovered: dict[str, Any] = {}
    matched_any = False
    anchored = False

    for spec in specs:
        value = spec.extract(candidate)
        if value is None:
            if spec.default_factory is not None:
                recovered[spec.name] = spec.default_factory()
            continue
        matched_any = True
        recovered[spec.name] = value
        if spec.anchor and value != "":
            anchored = True

    if anchored:
        return SalvagePartial(recovered)

    if allow_plain_list and not matched_any and "[" in candidate:
        items = plain_string_list(candidate)
        if items:
            return SalvagePartial(items)

    return Failure(FailureReason.UNPARSEABLE)
