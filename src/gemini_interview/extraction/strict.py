"""Strict JSON parsing that reports failure instead of raising."""

import json
from typing import Any

from .types import Failure, FailureReason, JsonValue, ParseOutcome, StrictSuccess

_PAIRS = (("{", "}"), ("[", "]"))


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key {key!r}")
        result[key] = value
    return result


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard constant {name}")


_DECODER = json.JSONDecoder(
    object_pairs_hook=_reject_duplicate_keys,
    parse_constant=_reject_constant,
    strict=True,
)


def looks_complete(text: str) -> bool:
    """True when the text starts and ends with a matching top-level pair."""
    return any(text.startswith(o) and text.endswith(c) for o, c in _PAIRS)


def loads(text: str) -> JsonValue:
    """Decode a complete JSON document, raising ValueError on any problem.

    Trailing data after the document is an error, as with `json.loads`.
    """
    return _DECODER.decode(text)


def parse_strict(text: str) -> ParseOutcome:
    """Parse text that already looks like a complete JSON object or array.

    Returns:
        `StrictSuccess` carrying the decoded value, otherwise
        `Failure(UNPARSEABLE)`. This function does not raise.
    """
    trimmed = text.strip()
    if not looks_complete(trimmed):
        return Failure(FailureReason.UNPARSEABLE)
    try:
        return StrictSuccess(loads(trimmed))
    except (ValueError, RecursionError):
        # json.JSONDecodeError is a ValueError subclass
        return Failure(FailureReason.UNPARSEABLE)
