"""Unit tests for the heuristic repair pass."""

import re

import pytest

from gemini_interview.extraction import (
    DEFAULT_REPAIR_RULES,
    Failure,
    RepairedSuccess,
    RepairRule,
    apply_repairs,
    parse_repaired,
)


class TestApplyRepairs:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("broken", "repaired"),
        [
            ('{"a": 1,}', '{"a": 1}'),
            ("[1, 2, ]", "[1, 2]"),
            ('{"a": [1,2,],}', '{"a": [1,2]}'),
            ('{name: "x", age: 3}', '{"name": "x", "age": 3}'),
            ("{$id: 1, _x: 2}", '{"$id": 1, "_x": 2}'),
            ("{'a': 'b'}", '{"a": "b"}'),
            ("['x', 'y']", '[ "x", "y"]'),
            ("{“a”: “b”}", '{"a": "b"}'),
            ('{"a": , "b": 1}', '{"a": null, "b": 1}'),
            ('{"a": }', '{"a": null}'),
            ('{"a": "line one\nline two"}', '{"a": "line one line two"}'),
            ('{\n  "a":   1\n}', '{ "a": 1 }'),
        ],
    )
    def test_rule_outcomes(self, broken, repaired):
        assert apply_repairs(broken) == repaired

    @pytest.mark.unit
    def test_colon_inside_string_is_not_treated_as_key(self):
        text = '{"note": "see: here, and x: y"}'

        assert apply_repairs(text) == text

    @pytest.mark.unit
    def test_numeric_keys_are_left_alone(self):
        # Identifiers cannot start with a digit
        assert apply_repairs("{1a: 2}") == "{1a: 2}"

    @pytest.mark.unit
    def test_custom_rule_sequence(self):
        rules = (RepairRule("foo_to_bar", re.compile("foo"), "bar"),)

        assert apply_repairs("foo foo", rules) == "bar bar"

    @pytest.mark.unit
    def test_outside_strings_rule_skips_literals(self):
        rule = RepairRule("upper_a", re.compile("a"), "A", outside_strings=True)

        assert rule.apply('a "a \\" a" a') == 'A "a \\" a" A'

    @pytest.mark.unit
    def test_default_rule_names_are_unique(self):
        names = [rule.name for rule in DEFAULT_REPAIR_RULES]

        assert len(names) == len(set(names))


class TestParseRepaired:
    @pytest.mark.unit
    def test_repairs_then_parses(self):
        outcome = parse_repaired("{score: 85, feedback: 'ok',}")

        assert outcome == RepairedSuccess({"score": 85, "feedback": "ok"})
        assert outcome.stage == "repair"

    @pytest.mark.unit
    def test_unrepairable_text_fails(self):
        outcome = parse_repaired('{"score": 85 "feedback": "x"}')

        assert isinstance(outcome, Failure)
