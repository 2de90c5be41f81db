"""String-aware balanced-span location.

The scanner is a three-state machine (`NORMAL`, `IN_STRING`,
`IN_STRING_ESCAPED`) plus a depth counter. Escapes only have meaning inside a
string, and delimiters inside a string never change depth. Plain runs between
significant characters are skipped with a regex search, so a scan costs
roughly one step per quote, backslash or delimiter.
"""

from collections.abc import Iterator
import re

from .types import ARRAY, OBJECT, DelimiterPair, ScanMode, Span

_STRING_SIGNIFICANT = re.compile(r'["\\]')
_NORMAL_SIGNIFICANT = {
    OBJECT: re.compile(r'["{}]'),
    ARRAY: re.compile(r'["\[\]]'),
}


class SpanLocator:
    """Finds balanced candidates for one text and delimiter pair.

    A locator lives for a single extraction call. Every opening delimiter
    visited in `NORMAL` mode while scanning has the same fate it would have
    if scanned on its own, so those results are remembered and later sweep
    positions are answered without rescanning.
    """

    __slots__ = ("_known", "_significant", "pair", "text")

    def __init__(self, text: str, pair: DelimiterPair) -> None:
        self.text = text
        self.pair = pair
        self._significant = _NORMAL_SIGNIFICANT[pair]
        self._known: dict[int, Span | None] = {}

    def open_positions(self) -> Iterator[int]:
        """Yield every index holding the opening delimiter, left to right."""
        position = self.text.find(self.pair.open)
        while position != -1:
            yield position
            position = self.text.find(self.pair.open, position + 1)

    def span_at(self, start: int) -> Span | None:
        """Return the balanced span opened at `start`.

        Returns:
            The inclusive `Span`, or None when the structure never closes
            before the end of the text (or `start` holds no opening delimiter).
        """
        if start in self._known:
            return self._known[start]
        text = self.text
        if not 0 <= start < len(text) or text[start] != self.pair.open:
            return None

        mode = ScanMode.NORMAL
        # Open positions seen in NORMAL mode; its length is the current depth
        stack: list[int] = []
        i = start
        end = len(text)
        while i < end:
            if mode is ScanMode.IN_STRING_ESCAPED:
                mode = ScanMode.IN_STRING
                i += 1
                continue

            if mode is ScanMode.IN_STRING:
                match = _STRING_SIGNIFICANT.search(text, i)
                if match is None:
                    break
                i = match.start()
                if text[i] == "\\":
                    mode = ScanMode.IN_STRING_ESCAPED
                else:
                    mode = ScanMode.NORMAL
                i += 1
                continue

            match = self._significant.search(text, i)
            if match is None:
                break
            i = match.start()
            char = text[i]
            if char == '"':
                mode = ScanMode.IN_STRING
            elif char == self.pair.open:
                stack.append(i)
            else:
                opened = stack.pop()
                self._known[opened] = Span(opened, i)
                if not stack:
                    return self._known[start]
            i += 1

        for opened in stack:
            self._known[opened] = None
        return None


def find_balanced_span(text: str, start: int, pair: DelimiterPair) -> Span | None:
    """Scan `text` from `start` and return the balanced span, if any."""
    return SpanLocator(text, pair).span_at(start)
