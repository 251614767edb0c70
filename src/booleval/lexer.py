"""
Lexer for booleval programs.

Converts source text into a stream of tokens for the parser.
Supports:
- Identifiers (runs of ASCII letters, no keywords)
- Numbers (runs of ASCII digits, converted later by the parser)
- Parentheses and commas
- Whitespace runs (emitted as WHITESPACE, filtered by ``lex``)

The lexer never fails. Characters it does not recognize become
ERROR_UNEXPECTED tokens and scanning continues; the parser reports them.
"""

from typing import Iterator, List

from .tokens import Token, TokenType, Span


_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
# Matches the ASCII whitespace class: no vertical tab.
_WHITESPACE = frozenset(" \t\n\r\x0c")


class Lexer:
    """
    Cursor over the source text producing one token per ``next_token`` call.

    Usage:
        lexer = Lexer(source)
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer(source):
            process(token)

    Iteration skips WHITESPACE tokens and stops after EOF. A lexer is a
    single-use cursor: tokens already produced are not replayed.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0            # Current character index
        self.offset = 0         # Current byte offset
        self.length = len(source.encode("utf-8"))
        self.done = False       # EOF already emitted

    def _peek(self) -> str:
        """Look at the current character without consuming it."""
        if self.pos >= len(self.source):
            return '\0'
        return self.source[self.pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        ch = self.source[self.pos]
        self.pos += 1
        self.offset += len(ch.encode("utf-8"))
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _make_token(self, token_type: TokenType, start_pos: int,
                    start_offset: int, value=None) -> Token:
        """Create a token covering everything consumed since the start."""
        lexeme = self.source[start_pos:self.pos]
        return Token(token_type, value, lexeme, Span(start_offset, self.offset))

    def _scan_run(self, charset: frozenset) -> None:
        """Consume a maximal run of characters from ``charset``."""
        while not self._is_at_end() and self._peek() in charset:
            self._advance()

    def next_token(self) -> Token:
        """
        Scan the next token, whitespace included.

        Returns EOF once the input is exhausted, and again on every later
        call.
        """
        if self._is_at_end():
            self.done = True
            return Token(TokenType.EOF, None, "", Span(self.length, self.length))

        start_pos, start_offset = self.pos, self.offset
        ch = self._peek()

        if ch in _LETTERS:
            self._scan_run(_LETTERS)
            return self._make_token(TokenType.IDENT, start_pos, start_offset,
                                    value=self.source[start_pos:self.pos])

        if ch in _DIGITS:
            self._scan_run(_DIGITS)
            return self._make_token(TokenType.NUMBER, start_pos, start_offset,
                                    value=self.source[start_pos:self.pos])

        if ch in _WHITESPACE:
            self._scan_run(_WHITESPACE)
            return self._make_token(TokenType.WHITESPACE, start_pos, start_offset)

        self._advance()

        single_char_tokens = {
            '(': TokenType.LPAREN,
            ')': TokenType.RPAREN,
            ',': TokenType.COMMA,
        }
        if ch in single_char_tokens:
            return self._make_token(single_char_tokens[ch], start_pos, start_offset)

        # Unknown character, reported later by the parser
        return self._make_token(TokenType.ERROR_UNEXPECTED, start_pos,
                                start_offset, value=ch)

    def tokenize(self, keep_whitespace: bool = False) -> List[Token]:
        """Tokenize the remaining source, returning a list ending in EOF."""
        tokens = []
        while not self.done:
            token = self.next_token()
            if token.type != TokenType.WHITESPACE or keep_whitespace:
                tokens.append(token)
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over significant tokens, ending with EOF."""
        while not self.done:
            token = self.next_token()
            if token.type != TokenType.WHITESPACE:
                yield token


def lex(source: str) -> Iterator[Token]:
    """
    Lazily tokenize source text.

    The returned iterator yields every non-whitespace token followed by
    exactly one EOF token and can only be consumed once.
    """
    return iter(Lexer(source))


def tokenize(source: str, keep_whitespace: bool = False) -> List[Token]:
    """
    Convenience function to tokenize source code eagerly.

    Args:
        source: The source code to tokenize
        keep_whitespace: Also return WHITESPACE tokens, so that the token
            spans tile the whole input

    Returns:
        List of tokens, the last one being EOF
    """
    return Lexer(source).tokenize(keep_whitespace)
