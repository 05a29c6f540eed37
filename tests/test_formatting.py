"""Tests for result formatting."""

from __future__ import annotations

import pytest

from literun.formatting import NO_OUTPUT, NO_VALUE, NOT_RAW, unquote
from literun.kinds import EmbedKind
from literun.results import EvaluationResult, OutputBlock, TypedValue


def plain(content: str, n: int) -> OutputBlock:
    return OutputBlock(content=content, media_kind="text/plain", sequence_number=n)


def html_block(content: str, n: int) -> OutputBlock:
    return OutputBlock(content=content, media_kind="text/html", sequence_number=n)


class TestTextKinds:
    def test_console_output_is_trimmed(self, formatter):
        result = EvaluationResult(console_output=" hello \n")
        assert formatter.format(result, EmbedKind.CONSOLE_OUTPUT, 4) == [plain("hello", 4)]

    def test_interpreter_output(self, formatter):
        result = EvaluationResult(interpreter_output="42\n")
        assert formatter.format(result, EmbedKind.INTERPRETER_OUTPUT, 1) == [plain("42", 1)]

    def test_merged_output(self, formatter):
        result = EvaluationResult(merged_output="a\n42\n")
        assert formatter.format(result, EmbedKind.MERGED_OUTPUT, 1) == [plain("a\n42", 1)]

    @pytest.mark.parametrize("kind", [EmbedKind.CONSOLE_OUTPUT, EmbedKind.INTERPRETER_OUTPUT, EmbedKind.MERGED_OUTPUT])
    def test_missing_text_has_default_message(self, formatter, kind):
        assert formatter.format(EvaluationResult(), kind, 2) == [plain(NO_OUTPUT, 2)]


class TestValueKinds:
    def test_explicit_value_plain_text(self, formatter):
        result = EvaluationResult(explicit_value=TypedValue.of([1, 2]))
        assert formatter.format(result, EmbedKind.EXPLICIT_VALUE, 3) == [plain("[1, 2]", 3)]

    def test_last_value_prefers_html(self, formatter, html):
        html.register_presenter(int, lambda n: f"<b>{n}</b>")
        result = EvaluationResult(last_value=TypedValue.of(1))
        assert formatter.format(result, EmbedKind.LAST_VALUE, 5) == [html_block("<b>1</b>", 5)]

    def test_empty_result_has_no_value(self, formatter):
        assert formatter.format(EvaluationResult(), EmbedKind.EXPLICIT_VALUE, 7) == [plain(NO_VALUE, 7)]

    def test_wrong_value_field_has_no_value(self, formatter):
        result = EvaluationResult(explicit_value=TypedValue.of(1))
        assert formatter.format(result, EmbedKind.LAST_VALUE, 1) == [plain(NO_VALUE, 1)]

    def test_registered_transformation_wins(self, formatter):
        def as_table(value, value_type, n):
            if value_type is dict:
                return [html_block("<table/>", n)]
            return None

        formatter.register_transformation(as_table)
        result = EvaluationResult(explicit_value=TypedValue.of({"a": 1}))
        assert formatter.format(result, EmbedKind.EXPLICIT_VALUE, 1) == [html_block("<table/>", 1)]

    def test_transformation_declining_falls_through(self, formatter):
        formatter.register_transformation(lambda value, value_type, n: None)
        result = EvaluationResult(explicit_value=TypedValue.of(9))
        assert formatter.format(result, EmbedKind.EXPLICIT_VALUE, 1) == [plain("9", 1)]

    def test_empty_transformation_result_has_no_value(self, formatter):
        formatter.register_transformation(lambda value, value_type, n: [])
        result = EvaluationResult(explicit_value=TypedValue.of(9))
        assert formatter.format(result, EmbedKind.EXPLICIT_VALUE, 1) == [plain(NO_VALUE, 1)]

    def test_transformation_may_emit_many_blocks(self, formatter):
        formatter.register_transformation(lambda value, value_type, n: [plain("a", n), plain("b", n)])
        result = EvaluationResult(explicit_value=TypedValue.of(9))
        assert formatter.format(result, EmbedKind.EXPLICIT_VALUE, 1) == [plain("a", 1), plain("b", 1)]


class TestRawValue:
    def test_string_quotes_are_stripped(self, formatter, html):
        html.register_presenter(str, lambda s: f'"{s}"')
        result = EvaluationResult(last_value=TypedValue.of("ok"))
        assert formatter.format(result, EmbedKind.LAST_VALUE_RAW, 2) == [html_block("ok", 2)]

    def test_non_string_passes_through(self, formatter, html):
        html.register_presenter(int, lambda n: f"<b>{n}</b>")
        result = EvaluationResult(last_value=TypedValue.of(1))
        assert formatter.format(result, EmbedKind.LAST_VALUE_RAW, 2) == [html_block("<b>1</b>", 2)]

    def test_unquoted_string_rendering_passes_through(self, formatter, html):
        html.register_presenter(str, lambda s: f"<p>{s}</p>")
        result = EvaluationResult(last_value=TypedValue.of("ok"))
        assert formatter.format(result, EmbedKind.LAST_VALUE_RAW, 2) == [html_block("<p>ok</p>", 2)]

    def test_no_html_presenter_cannot_be_raw(self, formatter):
        result = EvaluationResult(last_value=TypedValue.of("ok"))
        assert formatter.format(result, EmbedKind.LAST_VALUE_RAW, 2) == [plain(NOT_RAW, 2)]

    def test_raw_without_last_value(self, formatter):
        result = EvaluationResult(explicit_value=TypedValue.of("ok"))
        assert formatter.format(result, EmbedKind.LAST_VALUE_RAW, 2) == [plain(NO_VALUE, 2)]


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ('"ok"', "ok"),
        ("'ok'", "ok"),
        ('""', ""),
        ('"', '"'),
        ("", ""),
        ("ok", "ok"),
        ("'ok\"", "'ok\""),
    ],
)
def test_unquote(content, expected):
    assert unquote(content) == expected
