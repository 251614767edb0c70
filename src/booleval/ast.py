"""
Abstract Syntax Tree (AST) node definitions for booleval programs.

A program is a declared argument bit-vector plus one root expression.
Expressions form a closed set of two variants:

- Var: a reference to a variable bound by the argument list
- App: a call of a built-in function on zero or more argument expressions

Every node carries the byte span of the source it was parsed from.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple
from abc import ABC

from .tokens import Span


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""
    span: Span  # Source location for error reporting

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Nodes
# =============================================================================

@dataclass
class Ident(AstNode):
    """A variable or function name as written in the source."""
    name: str


@dataclass
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass
class Var(Expression):
    """A variable reference (e.g., A)."""
    ident: Ident


@dataclass
class App(Expression):
    """A function application (e.g., and(A, not(B)))."""
    ident: Ident
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class Program(AstNode):
    """A complete program.

    Syntax:
        <count> <bit>* <expression>

    e.g. ``2 1 0 and(A, B)`` binds A=true, B=false.
    """
    expr: Expression
    args: List[bool] = field(default_factory=list)


# =============================================================================
# Traversal Helpers
# =============================================================================

def children(expr: Expression) -> Tuple[Expression, ...]:
    """Direct sub-expressions of ``expr``, in evaluation order."""
    if isinstance(expr, App):
        return tuple(expr.arguments)
    if isinstance(expr, Var):
        return ()
    raise TypeError(f"not an expression: {expr.__class__.__name__}")


def walk(expr: Expression) -> Iterator[Expression]:
    """Yield ``expr`` and all of its descendants in pre-order."""
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))


class TreeFormatter(AstVisitor):
    """Renders an expression tree, one node per line."""

    def __init__(self, indent: int = 0):
        self.indent = indent
        self.lines: List[str] = []

    def _emit(self, text: str, node: Expression) -> None:
        self.lines.append(f"{'  ' * self.indent}{text} @ {node.span}")

    def visit_Var(self, node: Var) -> None:
        self._emit(f"VAR ({node.ident.name!r})", node)

    def visit_App(self, node: App) -> None:
        self._emit(f"APP ({node.ident.name!r})", node)
        self.indent += 1
        for child in children(node):
            child.accept(self)
        self.indent -= 1


def format_tree(expr: Expression) -> str:
    """Format an expression tree for debugging."""
    formatter = TreeFormatter()
    expr.accept(formatter)
    return "\n".join(formatter.lines)


def print_ast(expr: Expression) -> None:
    """Print an expression tree for debugging."""
    print(format_tree(expr))
