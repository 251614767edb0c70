"""
Diagnostics and exceptions for booleval.

Every failure is a single positioned diagnostic: a code, a message and the
byte span of the offending source. Lexing never fails; parsing and
evaluation stop at the first problem.

Error code ranges:
- E1xx: Parser errors
- E3xx: Evaluation errors
"""

from dataclasses import dataclass, field
from typing import List

from rich.cells import cell_len
from rich.text import Text

from .tokens import Span, Token, TokenType, locate


# Styles used when a diagnostic is rendered in colour
ERROR_STYLE = "bold red"
GUTTER_STYLE = "bold blue"
HINT_STYLE = "bold cyan"


def display_width(text: str) -> int:
    """Number of terminal columns ``text`` occupies."""
    return cell_len(text)


def _pad_to(text: str) -> str:
    """Blank padding spanning the same columns as ``text``; tabs are kept."""
    return "".join("\t" if ch == "\t" else " " * cell_len(ch) for ch in text)


@dataclass
class Diagnostic:
    """A single error message anchored to a source span."""
    code: str                       # E101, E301, etc.
    message: str                    # Human-readable message
    span: Span
    hints: List[str] = field(default_factory=list)

    def format(self, source: str, show_source: bool = True) -> str:
        """Format the diagnostic for display against ``source``."""
        return self.to_text(source, show_source).plain

    def to_text(self, source: str, show_source: bool = True) -> Text:
        """Styled rendering of the diagnostic; ``format`` is its plain text."""
        text = Text()
        text.append(f"error[{self.code}]", style=ERROR_STYLE)
        text.append(f": {self.message} (at {self.span})", style="bold")

        if show_source:
            data = source.encode("utf-8")
            start = min(self.span.start, len(data))
            end = min(self.span.end, len(data))
            line_start = data.rfind(b"\n", 0, start) + 1
            line_end = data.find(b"\n", start)
            if line_end == -1:
                line_end = len(data)

            before = data[line_start:start].decode("utf-8", errors="replace")
            offending = data[start:min(end, line_end)].decode("utf-8", errors="replace")
            line_text = data[line_start:line_end].decode("utf-8", errors="replace")
            line_text = line_text.rstrip("\r")

            loc = locate(source, start)
            gutter = " " * len(str(loc.line))
            text.append(f"\n{gutter}")
            text.append("-->", style=GUTTER_STYLE)
            text.append(f" {loc}")
            text.append(f"\n{gutter} |", style=GUTTER_STYLE)
            text.append(f"\n{loc.line} |", style=GUTTER_STYLE)
            text.append(f" {line_text}")
            text.append(f"\n{gutter} |", style=GUTTER_STYLE)
            text.append(f" {_pad_to(before)}")
            text.append("^" * max(1, display_width(offending)), style=ERROR_STYLE)

        for hint in self.hints:
            text.append("\n  ")
            text.append("= hint:", style=HINT_STYLE)
            text.append(f" {hint}")

        return text

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": "error",
            "range": {
                "start": self.span.start,
                "end": self.span.end,
            },
            "hints": self.hints,
        }


class BoolEvalError(Exception):
    """Base exception for booleval errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def span(self) -> Span:
        return self.diagnostic.span

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.message


class ParserError(BoolEvalError):
    """Error during parsing (E1xx)."""
    pass


class EvalError(BoolEvalError):
    """Error during evaluation (E3xx)."""
    pass


def format_error(error: BoolEvalError, source: str) -> str:
    """Render ``error`` against the source it was produced from."""
    return error.diagnostic.format(source)


# --- Parser error codes ---

def error_too_many_params(limit: int, span: Span) -> ParserError:
    """E101: Declared argument count exceeds the variable letters."""
    diag = Diagnostic(
        code="E101",
        message=f"can't declare more than {limit} params",
        span=span,
        hints=[f"arguments are bound to the letters A..Z, so at most {limit} are allowed"],
    )
    return ParserError(diag)


def error_expected_bit(found: Token) -> ParserError:
    """E102: Bit list ended early."""
    diag = Diagnostic(
        code="E102",
        message=f"expected next bit, instead got token of kind `{found.describe()}`",
        span=found.span,
    )
    return ParserError(diag)


def error_invalid_bit(span: Span) -> ParserError:
    """E103: Bit literal other than 0 or 1."""
    diag = Diagnostic(
        code="E103",
        message="invalid bit, must be `0` or `1`",
        span=span,
    )
    return ParserError(diag)


def error_unexpected_token(expected: TokenType, found: Token) -> ParserError:
    """E104: Unexpected token."""
    diag = Diagnostic(
        code="E104",
        message=f"expected token of kind `{expected.name}`, instead got `{found.describe()}`",
        span=found.span,
    )
    return ParserError(diag)


def error_unexpected_token_of(expected: List[TokenType], found: Token) -> ParserError:
    """E105: Token is none of several acceptable kinds."""
    names = ", ".join(t.name for t in expected)
    diag = Diagnostic(
        code="E105",
        message=f"expected token of kind in `[{names}]`, instead got `{found.describe()}`",
        span=found.span,
    )
    return ParserError(diag)


def error_unparsable_number(span: Span) -> ParserError:
    """E106: Number literal out of range."""
    diag = Diagnostic(
        code="E106",
        message="unparsable number",
        span=span,
    )
    return ParserError(diag)


def error_nesting_too_deep(limit: int, span: Span) -> ParserError:
    """E107: Expression nested past the parser's depth limit."""
    diag = Diagnostic(
        code="E107",
        message=f"expression nested deeper than {limit} levels",
        span=span,
    )
    return ParserError(diag)


# --- Evaluation error codes ---

def error_undefined_variable(name: str, span: Span) -> EvalError:
    """E301: Variable not bound by the argument list."""
    diag = Diagnostic(
        code="E301",
        message=f"`{name}` is not defined",
        span=span,
    )
    return EvalError(diag)


def error_wrong_arity(name: str, arity: int, span: Span) -> EvalError:
    """E302: Fixed-arity builtin called with the wrong argument count."""
    if arity == 1:
        expected = "single argument"
    else:
        expected = f"{arity} arguments"
    diag = Diagnostic(
        code="E302",
        message=f"`{name}` requires {expected}",
        span=span,
    )
    return EvalError(diag)


def error_undefined_function(name: str, span: Span,
                             available: List[str]) -> EvalError:
    """E303: Call to an unknown function."""
    diag = Diagnostic(
        code="E303",
        message=f"cannot call undefined function `{name}`",
        span=span,
        hints=["available functions: " + ", ".join(f"`{n}`" for n in available)],
    )
    return EvalError(diag)
