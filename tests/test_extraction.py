"""Unit tests for fence stripping, the strategy chain and the sanitizer."""

from __future__ import annotations

import re
import sys
import time
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from textgen.extraction import (
    EmbeddedObjectStrategy,
    MissingOutputField,
    NoEmbeddedObject,
    NoFieldMatch,
    OutputExtractor,
    OutputFieldPatternStrategy,
    RawTextStrategy,
    StrictJsonStrategy,
    extract,
    extract_output,
)
from textgen.sanitizer import sanitize
from textgen.utils import strip_json_code_fence


def test_strip_json_code_fence_removes_tagged_fence():
    assert strip_json_code_fence('```json\n{"output":"x"}\n```') == '{"output":"x"}'


def test_strip_json_code_fence_removes_untagged_fence():
    assert strip_json_code_fence("```\nplain\n```") == "\nplain"


@pytest.mark.parametrize("raw", ["", "no fences here", '{"output": "x"}'])
def test_strip_json_code_fence_is_noop_without_fence(raw):
    assert strip_json_code_fence(raw) == raw


FENCE_REGEX = re.compile(r"```json\s*|\s*```")


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"output":"x"}\n```',
        "```\nplain\n```",
        'Result:\n```json\n{"a": 1}\n```\nDone',
        'Answer: ```json {"output": "x"} ```',
        "````json\n``\n `` \t```json```",
        "a ` b `` c   \n",
        "  \n```",
    ],
)
def test_strip_json_code_fence_matches_fence_regex(raw):
    assert strip_json_code_fence(raw) == FENCE_REGEX.sub("", raw)


def test_sanitize_handles_empty_string():
    assert sanitize("") == ""


def test_sanitize_trims_and_collapses_horizontal_whitespace():
    assert sanitize("  hello   world  ") == "hello world"
    assert sanitize("a  \t b\nc") == "a b\nc"


@pytest.mark.parametrize("raw", ['"quoted"', "'quoted'"])
def test_sanitize_strips_one_pair_of_quotes(raw):
    assert sanitize(raw) == "quoted"


def test_sanitize_unescapes_quotes():
    assert sanitize('"He said \\"hi\\""') == 'He said "hi"'


def test_sanitize_turns_escaped_newlines_into_newlines():
    assert sanitize("line one\\nline two") == "line one\nline two"


def test_sanitize_strips_residual_json_wrapper():
    assert sanitize('{"output": "hello"}') == "hello"
    assert sanitize('{"note": 1, "output": "kept"}') == "kept"


@pytest.mark.parametrize(
    "raw",
    ["", "plain", "  hello   world  ", "line one\\nline two", "Para one.\n\nPara two."],
)
def test_sanitize_is_idempotent_for_ordinary_text(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


def test_extract_reads_output_from_strict_json():
    result = extract_output('{"output":"hello"}')

    assert result.text == "hello"
    assert result.strategy == "strict_json"
    assert result.is_strict
    assert len(result.attempts) == 1


def test_extract_finds_object_surrounded_by_prose():
    result = extract_output('Here is the result:\n{"output":"hello world"}\nHope that helps')

    assert result.text == "hello world"
    assert result.strategy == "embedded_object"
    assert [attempt.error for attempt in result.attempts] == ["MalformedJson", None]


def test_extract_returns_truncated_response_as_is():
    raw = 'almost json {"output": "partial'
    result = extract_output(raw)

    assert result.text == raw
    assert result.strategy == "raw_text"
    assert [attempt.error for attempt in result.attempts] == [
        "MalformedJson",
        "NoEmbeddedObject",
        "NoFieldMatch",
        None,
    ]


def test_extract_uses_pattern_when_value_is_complete():
    result = extract_output('Sure! {"output": "partial answer", "extra": ')

    assert result.text == "partial answer"
    assert result.strategy == "output_pattern"


def test_extract_pattern_capture_is_unescaped_by_sanitizer():
    assert extract('{"output": "line1\\nline2", broken') == "line1\nline2"


def test_extract_plain_text():
    assert extract("plain text with no JSON at all") == "plain text with no JSON at all"
    assert extract("  plain text  ") == "plain text"


def test_extract_strips_fence_before_parsing():
    result = extract_output('```json\n{"output":"x"}\n```')

    assert result.text == "x"
    assert result.strategy == "strict_json"


def test_extract_keeps_paragraph_breaks():
    assert extract('{"output": "Para one.\\n\\nPara two."}') == "Para one.\n\nPara two."


def test_extract_greedy_span_spans_concatenated_objects():
    # The span runs from the first "{" to the last "}", so two objects fail to
    # parse together and the pattern strategy picks the first value.
    result = extract_output('{"output": "first"} and {"output": "second"}')

    assert result.text == "first"
    assert result.strategy == "output_pattern"
    assert result.attempts[1].error == "EmbeddedParseFailure"


def test_extract_rejects_non_standard_json_constants():
    result = extract_output('{"output": "x", "score": NaN}')

    assert result.text == "x"
    assert result.strategy == "output_pattern"


def test_extract_falls_back_when_output_is_not_a_string():
    result = extract_output('{"output": 42}')

    assert result.text == '{"output": 42}'
    assert result.strategy == "raw_text"
    assert result.attempts[0].error == "MissingOutputField"


def test_extract_nested_output_found_by_pattern():
    result = extract_output('{"data": {"output": "x"}}')

    assert result.text == "x"
    assert result.strategy == "output_pattern"


def test_extract_empty_input():
    result = extract_output("")

    assert result.text == ""
    assert result.strategy == "raw_text"


def test_strict_strategy_requires_object_with_string_output():
    with pytest.raises(MissingOutputField):
        StrictJsonStrategy().extract("[1, 2]")


def test_embedded_strategy_requires_braces():
    with pytest.raises(NoEmbeddedObject):
        EmbeddedObjectStrategy().extract("no braces")


def test_pattern_strategy_ignores_empty_value():
    with pytest.raises(NoFieldMatch):
        OutputFieldPatternStrategy().extract('"output": ""')


def test_attempt_reports_failure_instead_of_raising():
    attempt = StrictJsonStrategy().attempt("not json", position=1)

    assert attempt.strategy == 1
    assert attempt.name == "strict_json"
    assert not attempt.succeeded
    assert attempt.candidate is None
    assert attempt.error == "MalformedJson"


def test_raw_strategy_always_succeeds():
    attempt = RawTextStrategy().attempt("anything", position=4)

    assert attempt.succeeded
    assert attempt.candidate == "anything"


def test_custom_chain_without_raw_fallback_still_returns_text():
    extractor = OutputExtractor([StrictJsonStrategy()])
    result = extractor.run("  not json  ")

    assert result.text == "not json"
    assert result.strategy == "raw_text"
    assert len(result.attempts) == 1


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("{" * 200_000, "{" * 200_000),
        (" " * 200_000 + "x", "x"),
        ("```" + " " * 200_000 + "x", "x"),
    ],
)
def test_extract_runs_in_linear_time_on_large_input(raw, expected):
    started = time.perf_counter()
    result = extract(raw)
    elapsed = time.perf_counter() - started

    assert result == expected
    assert elapsed < 2.0
