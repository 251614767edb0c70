"""
booleval - a small interpreter for boolean expressions.

A program declares how many boolean arguments it takes, lists them as bits
(bound to the variables A, B, C, ...), and ends with one expression built
from variables and the built-in functions ``not``, ``and`` and ``or``.

This module provides:
- Lexer: Tokenizes program text
- Parser: Builds a Program AST from tokens
- Interpreter: Reduces a Program to a boolean
- Diagnostics: Renders positioned errors against the source

Usage:
    from booleval import lex, parse, evaluate, format_error, BoolEvalError

    source = "2 1 0 and(A, not(B))"
    try:
        program = parse(source, lex(source))
        print(evaluate(program))            # True
    except BoolEvalError as e:
        print(format_error(e, source))
"""

from .tokens import (
    Token,
    TokenType,
    Span,
    SourceLocation,
    locate,
)

from .lexer import (
    Lexer,
    lex,
    tokenize,
)

from .parser import (
    Parser,
    MAX_NESTING_DEPTH,
    parse,
    parse_source,
)

from .ast import (
    AstNode,
    AstVisitor,
    Ident,
    Expression,
    Var,
    App,
    Program,
    children,
    walk,
    format_tree,
    print_ast,
)

from .errors import (
    BoolEvalError,
    ParserError,
    EvalError,
    Diagnostic,
    display_width,
    format_error,
)

from .runtime import (
    MAX_ARG_COUNT,
    Environment,
    build_env,
    BuiltinFunction,
    BuiltinRegistry,
    Interpreter,
    evaluate,
    run,
)

__version__ = "0.1.0"
