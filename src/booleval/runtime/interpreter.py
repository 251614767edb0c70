"""
Tree-walking interpreter for booleval programs.

Reduces a parsed Program to a single boolean.
"""

from typing import List

from .context import Environment, build_env
from .builtins import BuiltinRegistry

from ..ast import Program, Expression, Var, App
from ..errors import (
    error_undefined_variable,
    error_wrong_arity,
    error_undefined_function,
)


class Interpreter:
    """
    Tree-walking interpreter for booleval programs.

    Evaluates AST nodes by dispatching on the expression variant. The first
    error aborts evaluation and propagates as an EvalError.

    Function arguments are always all evaluated, left to right, before the
    function is applied: ``or(A, Z)`` fails on an undefined ``Z`` even when
    ``A`` is true.
    """

    def __init__(self):
        self.builtins = BuiltinRegistry()

    def execute(self, program: Program) -> bool:
        """
        Evaluate a program.

        Args:
            program: The parsed program

        Returns:
            The value of the root expression

        Raises:
            EvalError: On an undefined variable or function, or a wrong arity
        """
        env = build_env(program.args)
        return self._evaluate(program.expr, env)

    def _evaluate(self, expr: Expression, env: Environment) -> bool:
        """Evaluate an expression to a boolean."""
        if isinstance(expr, Var):
            return self._eval_var(expr, env)
        elif isinstance(expr, App):
            return self._eval_app(expr, env)
        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_var(self, var: Var, env: Environment) -> bool:
        """Evaluate a variable reference."""
        value = env.get(var.ident.name)
        if value is None:
            raise error_undefined_variable(var.ident.name, var.ident.span)
        return value

    def _eval_app(self, app: App, env: Environment) -> bool:
        """Evaluate a function application."""
        name = app.ident.name
        func = self.builtins.get_function(name)
        if func is None:
            raise error_undefined_function(name, app.ident.span, self.builtins.names)
        if not func.accepts(len(app.arguments)):
            raise error_wrong_arity(name, func.arity, app.span)

        args: List[bool] = [self._evaluate(arg, env) for arg in app.arguments]
        return func.implementation(*args)


def evaluate(program: Program) -> bool:
    """
    Evaluate a parsed program.

    This is a convenience wrapper around Interpreter.execute().
    """
    return Interpreter().execute(program)


def run(source: str) -> bool:
    """
    High-level API to lex, parse and evaluate source in one call.

        from booleval import run

        run("2 1 0 and(A, B)")   # False

    Raises:
        ParserError: If the source is not a valid program
        EvalError: If evaluation fails
    """
    from ..lexer import lex
    from ..parser import parse

    program = parse(source, lex(source))
    return Interpreter().execute(program)
