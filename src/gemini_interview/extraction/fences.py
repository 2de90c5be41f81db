"""Markdown code-fence handling for model responses."""

import re
from typing import NamedTuple

from gemini_interview.constants import FENCE_LANGUAGE_TAGS

_TAGS = "|".join(FENCE_LANGUAGE_TAGS)

# First complete fenced block, non-greedy, optional json tag
_FIRST_BLOCK = re.compile(r"```(?:json(?![\w-]))?\s*([\s\S]*?)\s*```", re.IGNORECASE)
# Opening fences with an optional language tag, then closing fences
_OPENING_FENCE = re.compile(rf"```(?:(?:{_TAGS})(?![\w-]))?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"```\s*")


class FencedText(NamedTuple):
    """Result of fence stripping.

    Attributes:
        first_block: Trimmed inner text of the first fenced block, if any.
        working_text: The text with every fence marker removed, trimmed.
    """

    first_block: str | None
    working_text: str


def first_fenced_block(text: str) -> str | None:
    match = _FIRST_BLOCK.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return None


def remove_fences(text: str) -> str:
    """Remove all fence markers, leaving fenced content untouched."""
    without_opening = _OPENING_FENCE.sub("", text)
    return _CLOSING_FENCE.sub("", without_opening).strip()


def strip_fences(raw: str) -> FencedText:
    """Split a raw response into its first fenced block and fence-free text."""
    trimmed = raw.strip()
    return FencedText(first_fenced_block(trimmed), remove_fences(trimmed))
