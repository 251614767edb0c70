"""
booleval runtime - Tree-walking interpreter.

This module provides:
- Interpreter: Reduces a Program to a boolean
- Environment: Variable bindings built from the argument list
- BuiltinRegistry: The not/and/or implementations
"""

from .context import (
    VARIABLE_NAMES,
    MAX_ARG_COUNT,
    Environment,
    variable_names,
    build_env,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
)

from .interpreter import (
    Interpreter,
    evaluate,
    run,
)

__all__ = [
    "VARIABLE_NAMES",
    "MAX_ARG_COUNT",
    "Environment",
    "variable_names",
    "build_env",
    "BuiltinFunction",
    "BuiltinRegistry",
    "Interpreter",
    "evaluate",
    "run",
]
