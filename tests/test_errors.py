"""
Tests for spans, source locations and diagnostic rendering.
"""

import json

import pytest

from booleval import (
    run, parse_source, format_error, display_width, locate,
    BoolEvalError, ParserError, EvalError, Diagnostic, Span,
)


def error_for(source: str) -> BoolEvalError:
    with pytest.raises(BoolEvalError) as exc_info:
        run(source)
    return exc_info.value


class TestSpan:
    """Test the byte span value type."""

    def test_merge(self):
        assert Span(4, 7).merge(Span(9, 10)) == Span(4, 10)
        assert Span(9, 10).merge(Span(4, 7)) == Span(4, 10)
        assert Span(2, 8).merge(Span(3, 4)) == Span(2, 8)

    def test_empty_span(self):
        span = Span(3, 3)
        assert len(span) == 0
        assert str(span) == "3..3"

    def test_invalid_span(self):
        with pytest.raises(ValueError):
            Span(5, 4)
        with pytest.raises(ValueError):
            Span(-1, 0)

    def test_immutable(self):
        span = Span(0, 1)
        with pytest.raises(AttributeError):
            span.start = 2

    def test_text_uses_byte_offsets(self):
        source = "\u00e9 and"
        assert Span(3, 6).text(source) == "and"
        assert Span(0, 2).text(source) == "\u00e9"


class TestLocate:
    """Test byte offset to line/column translation."""

    def test_first_line(self):
        loc = locate("1 2 A", 2)
        assert (loc.line, loc.column) == (1, 3)
        assert str(loc) == "1:3"

    def test_later_line(self):
        loc = locate("1 1\n  foo(A)", 6)
        assert (loc.line, loc.column) == (2, 3)

    def test_columns_count_characters(self):
        loc = locate("\u00e9 A", 3)
        assert loc.column == 3
        assert loc.offset == 3


class TestDisplayWidth:

    def test_ascii(self):
        assert display_width("and(A)") == 6

    def test_wide_characters(self):
        assert display_width("漢字") == 4

    def test_combining_marks(self):
        assert display_width("e\u0301") == 1

    def test_empty(self):
        assert display_width("") == 0

    def test_control_characters_take_no_columns(self):
        assert display_width("a\x07b") == 2


class TestErrorClasses:
    """Test the exception hierarchy."""

    def test_stage_classes(self):
        assert isinstance(error_for("1 2 A"), ParserError)
        assert isinstance(error_for("0 A"), EvalError)

    def test_properties_proxy_diagnostic(self):
        error = error_for("0 A")
        assert error.message == error.diagnostic.message
        assert error.span == error.diagnostic.span
        assert error.code == "E301"
        assert str(error) == "`A` is not defined"


class TestFormatError:
    """Test the human-readable rendering."""

    def test_invalid_bit(self):
        source = "1 2 A"
        assert format_error(error_for(source), source) == "\n".join([
            "error[E103]: invalid bit, must be `0` or `1` (at 2..3)",
            " --> 1:3",
            "  |",
            "1 | 1 2 A",
            "  |   ^",
        ])

    def test_zero_width_span_has_one_marker(self):
        source = "1 1 and(A"
        text = format_error(error_for(source), source)
        assert text.splitlines()[-1] == "  | " + " " * 9 + "^"

    def test_hints_are_rendered(self):
        source = "1 1\nfoo(A)"
        assert format_error(error_for(source), source) == "\n".join([
            "error[E303]: cannot call undefined function `foo` (at 4..7)",
            " --> 2:1",
            "  |",
            "2 | foo(A)",
            "  | ^^^",
            "  = hint: available functions: `not`, `and`, `or`",
        ])

    def test_wide_character_underline(self):
        source = "1 1 漢"
        text = format_error(error_for(source), source)
        lines = text.splitlines()
        assert lines[0] == (
            "error[E104]: expected token of kind `IDENT`, "
            "instead got `ERROR_UNEXPECTED('漢')` (at 4..7)"
        )
        assert lines[-1] == "  |     ^^"

    def test_multiline_span_is_clipped(self):
        source = "1 1 not(A,\nA)"
        lines = format_error(error_for(source), source).splitlines()
        assert lines[3] == "1 | 1 1 not(A,"
        assert lines[4] == "  |     ^^^^^^"

    def test_wide_gutter(self):
        source = "\n" * 9 + "1 2 A"
        lines = format_error(error_for(source), source).splitlines()
        assert lines[1] == "  --> 10:3"
        assert lines[3] == "10 | 1 2 A"
        assert lines[4] == "   |   ^"

    def test_tabs_are_kept_in_marker_line(self):
        source = "1 1\tfoo(A)"
        lines = format_error(error_for(source), source).splitlines()
        assert lines[4] == "  | " + "   \t" + "^^^"

    def test_without_source(self):
        diag = Diagnostic(code="E103", message="invalid bit", span=Span(2, 3))
        assert diag.format("1 2 A", show_source=False) == "error[E103]: invalid bit (at 2..3)"


class TestJson:
    """Test the tooling representation."""

    def test_to_json(self):
        error = error_for("1 1 foo(A)")
        data = error.diagnostic.to_json()
        assert data == {
            "code": "E303",
            "message": "cannot call undefined function `foo`",
            "severity": "error",
            "range": {"start": 4, "end": 7},
            "hints": ["available functions: `not`, `and`, `or`"],
        }
        assert json.loads(json.dumps(data)) == data

    def test_parser_error_json(self):
        data = error_for("27 A").diagnostic.to_json()
        assert data["code"] == "E101"
        assert data["range"] == {"start": 0, "end": 2}


class TestStyledText:
    """The styled rendering carries the same text as the plain one."""

    def test_plain_text_matches_format(self):
        source = "1 1\nfoo(A)"
        diag = error_for(source).diagnostic
        assert diag.to_text(source).plain == diag.format(source)

    def test_markers_are_styled(self):
        source = "1 2 A"
        text = error_for(source).diagnostic.to_text(source)
        styled = {text.plain[s.start:s.end]: str(s.style) for s in text.spans}
        assert styled["error[E103]"] == "bold red"
        assert styled["^"] == "bold red"
        assert styled["-->"] == "bold blue"
