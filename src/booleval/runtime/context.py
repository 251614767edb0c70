"""
Variable environment for the booleval interpreter.

Arguments are bound positionally to the uppercase letters A..Z, so a
program can declare at most 26 of them.
"""

import string
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence


VARIABLE_NAMES = string.ascii_uppercase
MAX_ARG_COUNT = len(VARIABLE_NAMES)


def variable_names(count: int) -> List[str]:
    """The first ``count`` variable names: A, B, C, ..."""
    if not 0 <= count <= MAX_ARG_COUNT:
        raise ValueError(f"cannot bind {count} arguments (max {MAX_ARG_COUNT})")
    return list(VARIABLE_NAMES[:count])


@dataclass
class Environment:
    """
    Name -> boolean bindings for a single evaluation.

    Built once from the program's arguments and never modified afterwards.
    """
    variables: Dict[str, bool] = field(default_factory=dict)

    def get(self, name: str) -> Optional[bool]:
        """Look up a variable, returning None when it is unbound."""
        return self.variables.get(name)

    def contains(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)


def build_env(args: Sequence[bool]) -> Environment:
    """
    Bind argument *i* to the *i*-th uppercase letter.

    Raises ValueError for more than MAX_ARG_COUNT arguments; the parser
    never produces such a program.
    """
    names = variable_names(len(args))
    return Environment(dict(zip(names, (bool(a) for a in args))))
