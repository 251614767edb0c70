#!/usr/bin/env python3
"""
CLI for the booleval interpreter.

Usage:
    python -m booleval eval "PROGRAM" [--json] [--color]
    python -m booleval run FILE [--json] [--color]
    python -m booleval repl [--prompt PROMPT] [--color]
    python -m booleval tokens "PROGRAM" [--all]
    python -m booleval tree "PROGRAM" [--color]

Examples:
    # Evaluate one program
    python -m booleval eval "2 1 0 and(A, B)"

    # Evaluate a program stored in a file
    python -m booleval run examples/majority.bool

    # Interactive session; a bad line prints its error and the loop goes on
    python -m booleval repl

    # Show how a program is tokenized / parsed
    python -m booleval tokens "1 1 not(A)"
    python -m booleval tree "2 1 0 or(A, not(B))"

The REPL prompt defaults to '>>> ' and can be set with BOOLEVAL_PROMPT.
Diagnostics are plain text unless --color is given.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from rich.console import Console

DEFAULT_PROMPT = ">>> "


def format_result(value: bool) -> str:
    return "true" if value else "false"


def normalize_source(text: str) -> str:
    """
    Make command line and terminal input safe to lex.

    Undecodable bytes (surrogate-escaped by the OS, or lone surrogates) are
    turned into U+FFFD so they reach the parser as unexpected characters.
    """
    try:
        data = text.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        data = text.encode("utf-8", errors="surrogatepass")
    return data.decode("utf-8", errors="replace")


def print_error(error, source: str, color: bool = False) -> None:
    from . import format_error

    if color:
        console = Console(force_terminal=True, color_system="standard", highlight=False)
        console.print(error.diagnostic.to_text(source), soft_wrap=True)
    else:
        print(format_error(error, source))


def evaluate_source(source: str, as_json: bool = False, color: bool = False) -> int:
    """Run the pipeline on ``source`` and print the result or the error."""
    from . import run, BoolEvalError

    source = normalize_source(source)
    try:
        value = run(source)
    except BoolEvalError as e:
        if as_json:
            print(json.dumps(e.diagnostic.to_json()))
        else:
            print_error(e, source, color)
        return 1

    if as_json:
        print(json.dumps({"result": value}))
    else:
        print(format_result(value))
    return 0


def cmd_eval(args):
    """Evaluate a program given on the command line."""
    return evaluate_source(args.program, args.json, args.color)


def cmd_run(args):
    """Evaluate a program read from a file."""
    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    try:
        source = source_path.read_text(encoding="utf-8").rstrip()
    except UnicodeDecodeError as e:
        print(f"Error: {source_path} is not valid UTF-8: {e}", file=sys.stderr)
        return 1
    return evaluate_source(source, args.json, args.color)


def cmd_repl(args):
    """Read programs line by line until end of input."""
    prompt = args.prompt
    if prompt is None:
        prompt = os.environ.get("BOOLEVAL_PROMPT", DEFAULT_PROMPT)

    # Invalid UTF-8 on a line becomes U+FFFD instead of ending the session
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(errors="replace")

    while True:
        print(prompt, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            print()
            return 0
        line = line.strip()
        if not line:
            continue
        evaluate_source(line, color=args.color)


def cmd_tokens(args):
    """Print the tokens of a program, one per line."""
    from . import tokenize, TokenType

    for token in tokenize(normalize_source(args.program), keep_whitespace=args.all):
        if token.type == TokenType.WHITESPACE:
            text = token.lexeme.encode("unicode_escape").decode("ascii")
        else:
            text = token.lexeme
        print(f"`{text}` :: {token.describe()}")
    return 0


def cmd_tree(args):
    """Print the parsed expression tree of a program."""
    from . import parse_source, format_tree, BoolEvalError
    from .runtime import variable_names

    source = normalize_source(args.program)
    try:
        program = parse_source(source)
    except BoolEvalError as e:
        print_error(e, source, args.color)
        return 1

    names = "".join(variable_names(len(program.args)))
    bits = " ".join(format_result(b) for b in program.args)
    print(f"args: {names or '-'} = {bits or '-'}")
    print(format_tree(program.expr))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m booleval',
        description='booleval boolean expression interpreter',
    )

    subparsers = parser.add_subparsers(dest='action', required=True)

    # eval command
    eval_parser = subparsers.add_parser('eval', help='Evaluate a program')
    eval_parser.add_argument('program', help='Program text, e.g. "2 1 0 and(A, B)"')
    eval_parser.add_argument('--json', action='store_true',
                             help='Print the result or error as JSON')
    eval_parser.add_argument('--color', action='store_true',
                             help='Colour diagnostics with ANSI escapes')

    # run command
    run_parser = subparsers.add_parser('run', help='Evaluate a program file')
    run_parser.add_argument('file', help='Program source file')
    run_parser.add_argument('--json', action='store_true',
                            help='Print the result or error as JSON')
    run_parser.add_argument('--color', action='store_true',
                            help='Colour diagnostics with ANSI escapes')

    # repl command
    repl_parser = subparsers.add_parser('repl', help='Interactive session')
    repl_parser.add_argument('--prompt', default=None,
                             help='Prompt string (default: $BOOLEVAL_PROMPT or ">>> ")')
    repl_parser.add_argument('--color', action='store_true',
                             help='Colour diagnostics with ANSI escapes')

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Show the tokens of a program')
    tokens_parser.add_argument('program', help='Program text')
    tokens_parser.add_argument('--all', action='store_true',
                               help='Include whitespace tokens')

    # tree command
    tree_parser = subparsers.add_parser('tree', help='Show the parsed expression tree')
    tree_parser.add_argument('program', help='Program text')
    tree_parser.add_argument('--color', action='store_true',
                             help='Colour diagnostics with ANSI escapes')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.action == 'eval':
        return cmd_eval(args)
    elif args.action == 'run':
        return cmd_run(args)
    elif args.action == 'repl':
        return cmd_repl(args)
    elif args.action == 'tokens':
        return cmd_tokens(args)
    elif args.action == 'tree':
        return cmd_tree(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
