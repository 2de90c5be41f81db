"""Heuristic repair of almost-JSON produced by language models.

Rules are applied as a single composed pass in a fixed order: later rules
rely on the normalisation done by earlier ones (keys are quoted only after
quote styles have been unified, whitespace is collapsed last). The default
rule set is convergent, so repairing already repaired text is a no-op.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import re

from .strict import loads
from .types import Failure, FailureReason, ParseOutcome, RepairedSuccess

log = logging.getLogger(__name__)

Replacement = str | Callable[[re.Match[str]], str]

# A well-formed double-quoted literal, escapes included
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)


@dataclass(frozen=True, slots=True)
class RepairRule:
    """A named, pure text substitution.

    Attributes:
        name: Identifier used in logs and tests.
        pattern: Compiled pattern to replace.
        replacement: Replacement string or callable, as accepted by `re.sub`.
        outside_strings: Only rewrite text between double-quoted literals.
    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement
    outside_strings: bool = False

    def apply(self, text: str) -> str:
        if not self.outside_strings:
            return self.pattern.sub(self.replacement, text)

        pieces: list[str] = []
        last = 0
        for literal in _STRING_LITERAL.finditer(text):
            pieces.append(self.pattern.sub(self.replacement, text[last : literal.start()]))
            pieces.append(literal.group(0))
            last = literal.end()
        pieces.append(self.pattern.sub(self.replacement, text[last:]))
        return "".join(pieces)


def _rule(
    name: str,
    pattern: str,
    replacement: Replacement,
    *,
    outside_strings: bool = False,
) -> RepairRule:
    return RepairRule(name, re.compile(pattern), replacement, outside_strings)


def _join_split_string(match: re.Match[str]) -> str:
    return f': "{match.group(1).strip()} {match.group(2).strip()}"'


DEFAULT_REPAIR_RULES: tuple[RepairRule, ...] = (
    # Quote styles
    _rule("smart_single_quotes", "[\u2018\u2019\u201a\u201b\u2032]", "'"),
    _rule("smart_double_quotes", "[\u201c\u201d\u201e\u201f\u2033]", '"'),
    _rule("single_quoted_keys", r"""([{,]\s*)'([^'"]*)'\s*:""", r'\1"\2":'),
    _rule("single_quote_after_colon", r":\s*'", ': "'),
    _rule("single_quote_after_comma", r",\s*'", ', "'),
    _rule("single_quote_after_bracket", r"\[\s*'", '[ "'),
    _rule("close_single_quoted_values", r"(?<=[^\\])'(?=\s*[,}\]])", '"'),
    # Structure
    _rule("trailing_commas", r"(?:,\s*)+([}\]])", r"\1"),
    _rule("empty_values", r":\s*,", ": null,"),
    _rule("missing_values", r":\s*([}\]])", r": null\1"),
    _rule(
        "bare_keys",
        r"([{,]\s*)((?:[^\W\d]|\$)[\w$]*)\s*:",
        r'\1"\2":',
        outside_strings=True,
    ),
    # Whitespace
    _rule("split_string_newline", r':\s*"([^"]*)\n([^"]*)"', _join_split_string),
    _rule("collapse_whitespace", r"\s+", " "),
)


def apply_repairs(
    text: str, rules: Sequence[RepairRule] = DEFAULT_REPAIR_RULES
) -> str:
    """Run every rule once, in order, and return the transformed text."""
    for rule in rules:
        text = rule.apply(text)
    return text


def parse_repaired(
    candidate: str, rules: Sequence[RepairRule] = DEFAULT_REPAIR_RULES
) -> ParseOutcome:
    """Repair a candidate that failed strict parsing and parse it once more.

    Returns:
        `RepairedSuccess` with the decoded value, otherwise
        `Failure(UNPARSEABLE)`. This function does not raise.
    """
    fixed = apply_repairs(candidate, rules)
    try:
        return RepairedSuccess(loads(fixed))
    except (ValueError, RecursionError) as e:
        log.debug("Repaired candidate still unparseable: %s", e)
        return Failure(FailureReason.UNPARSEABLE)
