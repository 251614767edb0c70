"""
Built-in function registry for the booleval interpreter.

Maps function names to their implementations. Implementations receive the
already evaluated argument values; arity is checked by the interpreter
before any argument is evaluated.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


@dataclass
class BuiltinFunction:
    """
    A built-in function with its implementation and arity.

    ``arity`` is None for functions accepting any number of arguments.
    """
    name: str
    arity: Optional[int]
    implementation: Callable[..., bool]
    doc: str = ""

    def accepts(self, count: int) -> bool:
        """Check whether ``count`` arguments satisfy the arity."""
        return self.arity is None or self.arity == count


def _not(value: bool) -> bool:
    return not value


def _and(*values: bool) -> bool:
    result = True
    for value in values:
        result = result and value
    return result


def _or(*values: bool) -> bool:
    result = False
    for value in values:
        result = result or value
    return result


class BuiltinRegistry:
    """
    Registry of all built-in functions.

    Each interpreter owns its own registry; there is no shared instance.
    """

    def __init__(self):
        self._functions: Dict[str, BuiltinFunction] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name."""
        return self._functions.get(name)

    def register(self, func: BuiltinFunction) -> None:
        """Register a function."""
        self._functions[func.name] = func

    @property
    def names(self) -> List[str]:
        return list(self._functions)

    def _register_all(self) -> None:
        """Register all built-in functions."""
        self.register(BuiltinFunction(
            "not", 1, _not,
            "Logical negation of its single argument.",
        ))
        self.register(BuiltinFunction(
            "and", None, _and,
            "True when every argument is true; and() is true.",
        ))
        self.register(BuiltinFunction(
            "or", None, _or,
            "True when any argument is true; or() is false.",
        ))
