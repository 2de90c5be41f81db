"""Behavioral contracts of the extraction engine.

These tests pin the guarantees callers rely on: recovery of well-formed
values, convergent repair, and total (never raising) extraction.
"""

from concurrent.futures import ThreadPoolExecutor
import json
import random
import time

import pytest

from gemini_interview.extraction import (
    ARRAY,
    OBJECT,
    FailureReason,
    JsonExtractor,
    apply_repairs,
    extract,
)

WELL_FORMED_VALUES = [
    {},
    [],
    {"a": 1},
    {"text": "a } b", "nested": {"list": [1, 2.5, None, True, False]}},
    {"unicode": "தமிழ் हिन्दी", "escapes": 'quote " backslash \\ newline \n'},
    {"brackets": "[ { ] }", "deep": [[[{"x": [[]]}]]]},
    [{"q": "Q1?"}, {"q": "Q2?"}],
    ["Q1?", "Q2?", "Q3?"],
    [1, [2, [3, [4]]]],
]

REPAIR_SAMPLES = [
    "{score: 85, feedback: 'ok',}",
    "{'a': 'b', 'c': ['d', 'e',],}",
    '{“title”: “smart”, list: [1,2,,],}',
    '{"a": , "b": }',
    '{"text": "first\nsecond", key:    "v"}',
    "[ 'x' , 'y' , ]",
    "{note: \"see: here\", x: 1}",
]


class TestRoundTrip:
    @pytest.mark.contract
    @pytest.mark.parametrize("value", WELL_FORMED_VALUES)
    @pytest.mark.parametrize("indent", [None, 2])
    def test_serialized_value_is_recovered(self, value, indent):
        text = json.dumps(value, indent=indent, ensure_ascii=False)
        open_char, close_char = ("[", "]") if isinstance(value, list) else ("{", "}")

        assert extract(text, open_char, close_char) == value

    @pytest.mark.contract
    @pytest.mark.parametrize("value", WELL_FORMED_VALUES)
    def test_value_surrounded_by_prose_is_recovered(self, value):
        text = f"Here is the result:\n{json.dumps(value)}\nLet me know!"
        open_char, close_char = ("[", "]") if isinstance(value, list) else ("{", "}")

        assert extract(text, open_char, close_char) == value


class TestRepairIdempotence:
    @pytest.mark.contract
    @pytest.mark.parametrize("text", REPAIR_SAMPLES)
    def test_repairing_twice_changes_nothing(self, text):
        once = apply_repairs(text)

        assert apply_repairs(once) == once


class TestTotality:
    @pytest.mark.contract
    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_random_text_never_raises(self, seed):
        rng = random.Random(seed)
        text = rng.randbytes(64 * 1024).decode("latin-1")

        for extractor in (JsonExtractor(), JsonExtractor(pair=ARRAY)):
            value = extractor.extract(text)
            assert value is None or isinstance(value, (dict, list))

    @pytest.mark.contract
    @pytest.mark.parametrize("seed", [0, 1])
    def test_structured_noise_never_raises(self, seed):
        rng = random.Random(seed)
        alphabet = '{}[]",:\\\' \nabc123'
        text = "".join(rng.choice(alphabet) for _ in range(4096))

        value = extract(text)

        assert value is None or isinstance(value, (dict, list))

    @pytest.mark.contract
    def test_one_megabyte_of_prose_finishes_quickly(self):
        rng = random.Random(42)
        words = ["score", "feedback", "alpha", "beta", "the", "answer", "is"]
        text = " ".join(rng.choice(words) for _ in range(200_000))[:999_000]

        started = time.monotonic()
        value = extract(text + ' {"a": 1}')
        elapsed = time.monotonic() - started

        assert value == {"a": 1}
        assert elapsed < 30

    @pytest.mark.contract
    def test_adversarial_nesting(self):
        result = JsonExtractor().run("{" * 50_000)

        assert result.value is None
        assert result.outcome.reason is FailureReason.TRUNCATED

        deep = "[" * 50_000 + "]" * 50_000
        value = extract(deep, "[", "]")
        assert value is None or isinstance(value, list)

    @pytest.mark.contract
    @pytest.mark.parametrize(
        ("text", "pair"),
        [
            ("[" * 200_000, ARRAY),
            ("strengths: [" * 50_000, OBJECT),
            ("strengths: [" * 50_000, ARRAY),
            ('{"feedback": "ok", "improvements": [' * 20_000, OBJECT),
        ],
    )
    def test_unclosed_brackets_stay_linear(self, text, pair):
        started = time.monotonic()
        value = JsonExtractor(pair=pair).extract(text)
        elapsed = time.monotonic() - started

        assert value is None or isinstance(value, (dict, list))
        assert elapsed < 10

    @pytest.mark.contract
    @pytest.mark.parametrize(
        "text", ["", "   ", "{", "}", "[", '"', "\\", "```", "```json\n```", "\x00￿"]
    )
    def test_degenerate_inputs(self, text):
        assert extract(text) is None


class TestDocumentedScenarios:
    @pytest.mark.contract
    def test_fence_tolerance(self):
        text = 'Here you go:\n```json\n{"a":1}\n```\nThanks!'

        assert extract(text, "{", "}") == {"a": 1}

    @pytest.mark.contract
    def test_trailing_comma_and_unquoted_keys(self):
        assert extract('{score: 85, feedback: "ok",}', "{", "}") == {
            "score": 85,
            "feedback": "ok",
        }

    @pytest.mark.contract
    def test_truncation_returns_none(self):
        assert extract('{"a": [1,2,3', "{", "}") is None

    @pytest.mark.contract
    def test_salvage_partial_recovery(self):
        text = 'garbage garbage "score": 72 more garbage "feedback": "solid" junk'

        assert extract(text, "{", "}") == {
            "score": 72,
            "feedback": "solid",
            "strengths": [],
            "improvements": [],
        }

    @pytest.mark.contract
    def test_array_fallback(self):
        text = 'noise ["Q1?", "Q2?", "Q3?"] trailing'

        assert extract(text, "[", "]") == ["Q1?", "Q2?", "Q3?"]

    @pytest.mark.contract
    def test_string_aware_depth(self):
        text = 'prefix {"text": "a } b"} suffix'

        assert extract(text, "{", "}") == {"text": "a } b"}



class TestConcurrency:
    @pytest.mark.contract
    def test_shared_extractor_across_threads_matches_serial_calls(self):
        inputs = [
            'Here you go:\n```json\n{"a": 1}\n```\nThanks!',
            "{score: 85, feedback: 'ok',}",
            'junk "score": 72 junk "feedback": "solid" junk',
            '{"a": [1,2,3',
            'Use {braces} like this: {"b": [1, {"c": "}"}]}',
            "no structure",
            None,
        ] * 25
        extractor = JsonExtractor()

        def summarize(text):
            result = extractor.run(text)
            return result.value, result.stage, result.source

        serial = [summarize(text) for text in inputs]
        with ThreadPoolExecutor(max_workers=8) as pool:
            concurrent = list(pool.map(summarize, inputs))

        assert concurrent == serial
