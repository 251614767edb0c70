"""
Recursive descent parser for booleval programs.

Converts a token stream into a Program AST. Grammar:

    Program   := Number BitList Expr Eof
    BitList   := Number*            (exactly as many as the first Number)
    Expr      := Ident [ '(' ArgList? ')' ]
    ArgList   := Expr (',' Expr)*

The parser pulls tokens one at a time with a single token of lookahead, so
it can consume the lazy iterator returned by ``lex`` directly. Parsing stops
at the first error. Expressions may nest at most MAX_NESTING_DEPTH levels,
which keeps both parsing and evaluation within the interpreter's stack.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from .tokens import Token, TokenType, Span
from .ast import Expression, Ident, Var, App, Program
from .lexer import lex
from .errors import (
    error_too_many_params,
    error_expected_bit,
    error_invalid_bit,
    error_unexpected_token,
    error_unexpected_token_of,
    error_unparsable_number,
    error_nesting_too_deep,
)
from .runtime.context import MAX_ARG_COUNT


# Largest value a number literal may hold (unsigned 64-bit).
MAX_NUMBER = 2 ** 64 - 1

# Deepest expression nesting accepted; the root expression is level 1.
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Recursive descent parser for booleval programs.

    Usage:
        parser = Parser(source, lex(source))
        program = parser.parse_program()
    """

    def __init__(self, source: str, tokens: Iterable[Token]):
        self.source = source
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Optional[Token] = None
        end = len(source.encode("utf-8"))
        self._eof = Token(TokenType.EOF, None, "", Span(end, end))

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Peek at the next token without consuming it."""
        if self._lookahead is None:
            # A stream that ends without EOF behaves as if it had one.
            self._lookahead = next(self._tokens, self._eof)
        return self._lookahead

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise RuntimeError("parser advanced past end of input")
        self._lookahead = None
        return token

    def _expect(self, token_type: TokenType) -> None:
        """Raise unless the current token is of the given type."""
        if not self._check(token_type):
            raise error_unexpected_token(token_type, self._current())

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type, or raise error."""
        self._expect(token_type)
        if token_type == TokenType.EOF:
            return self._current()
        return self._advance()

    def _expect_of(self, *token_types: TokenType) -> TokenType:
        """Return the current token's type if it is one of ``token_types``."""
        token = self._current()
        if token.type not in token_types:
            raise error_unexpected_token_of(list(token_types), token)
        return token.type

    # =========================================================================
    # Terminals
    # =========================================================================

    def _parse_number(self) -> Tuple[int, Span]:
        """Parse a number literal into an unsigned integer."""
        token = self._consume(TokenType.NUMBER)
        try:
            value = int(token.lexeme)
        except ValueError:
            # Digit strings too long for int() conversion
            raise error_unparsable_number(token.span)
        if value > MAX_NUMBER:
            raise error_unparsable_number(token.span)
        return value, token.span

    def _parse_ident(self) -> Ident:
        token = self._consume(TokenType.IDENT)
        return Ident(span=token.span, name=token.lexeme)

    # =========================================================================
    # Arguments
    # =========================================================================

    def _parse_control(self) -> Tuple[List[bool], Span]:
        """Parse the argument count and the bit list that follows it."""
        arg_count, count_span = self._parse_number()
        if arg_count > MAX_ARG_COUNT:
            raise error_too_many_params(MAX_ARG_COUNT, count_span)

        args = []
        for _ in range(arg_count):
            if not self._check(TokenType.NUMBER):
                raise error_expected_bit(self._current())
            bit, span = self._parse_number()
            if bit not in (0, 1):
                raise error_invalid_bit(span)
            args.append(bit == 1)
        return args, count_span

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self, depth: int = 1) -> Expression:
        """Parse a variable reference or a function application."""
        ident = self._parse_ident()
        if depth > MAX_NESTING_DEPTH:
            raise error_nesting_too_deep(MAX_NESTING_DEPTH, ident.span)
        if self._check(TokenType.LPAREN):
            return self._parse_app(ident, depth)
        return Var(span=ident.span, ident=ident)

    def _parse_app(self, ident: Ident, depth: int) -> App:
        """Parse the parenthesized argument list of a call."""
        self._consume(TokenType.LPAREN)
        arguments = self._parse_arguments(depth + 1)
        rparen = self._consume(TokenType.RPAREN)
        return App(
            span=ident.span.merge(rparen.span),
            ident=ident,
            arguments=arguments,
        )

    def _parse_arguments(self, depth: int) -> List[Expression]:
        """Parse comma separated arguments up to (not including) ')'.

        Every comma must be followed by another argument, so ``and(A,)`` is
        rejected while ``and()`` is an empty argument list.
        """
        arguments: List[Expression] = []
        if self._check(TokenType.RPAREN):
            return arguments

        while True:
            arguments.append(self._parse_expression(depth))
            if self._expect_of(TokenType.COMMA, TokenType.RPAREN) == TokenType.RPAREN:
                return arguments
            self._advance()  # consume ','

    def parse_program(self) -> Program:
        """Parse a complete program."""
        args, count_span = self._parse_control()
        expr = self._parse_expression()
        self._consume(TokenType.EOF)
        return Program(
            span=count_span.merge(expr.span),
            expr=expr,
            args=args,
        )


def parse(source: str, tokens: Iterable[Token]) -> Program:
    """
    Convenience function to parse tokens into a program.

    Args:
        source: The source the tokens were produced from
        tokens: Tokens from the lexer, ending with EOF

    Returns:
        Parsed Program AST

    Raises:
        ParserError: If parsing fails
    """
    parser = Parser(source, tokens)
    return parser.parse_program()


def parse_source(source: str) -> Program:
    """Lex and parse ``source`` in one step."""
    return parse(source, lex(source))
