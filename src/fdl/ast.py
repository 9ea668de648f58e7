"""
Abstract Syntax Tree (AST) node definitions for FDL.

The AST is a closed hierarchy: five expression variants and one statement
variant. Nodes are immutable and compare by identity, so that two
structurally equal nodes at different positions in a listing remain
distinct keys in the resolver's path table.

    Patient["john"].name[0].family = "Doe";

parses to:

    ExpressionStatement
      Set(field=family, index=None)
        object: Get(field=name, index=Literal(0))
          object: Element(name=Patient, matcher=Literal('john'))
        value: Literal('Doe')
"""

from dataclasses import dataclass
from typing import Any, List, Optional
from abc import ABC, abstractmethod

from .tokens import Token
from .types import DeclaredType


# =============================================================================
# Base Classes
# =============================================================================

@dataclass(frozen=True, eq=False)
class AstNode(ABC):
    """Base class for all AST nodes."""

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True, eq=False)
class Expression(AstNode):
    """Base class for all expressions."""
    pass


@dataclass(frozen=True, eq=False)
class Element(Expression):
    """A declarable element, e.g. Patient or Patient["john"] or Patient[1]."""
    name: Token
    matcher: Optional[Expression] = None


@dataclass(frozen=True, eq=False)
class Get(Expression):
    """Field access, e.g. Patient.name[1]."""
    object: Expression
    field: Token
    index: Optional[Expression] = None


@dataclass(frozen=True, eq=False)
class Set(Expression):
    """Field assignment, e.g. Patient.gender = "male"."""
    object: Expression
    field: Token
    value: Expression
    index: Optional[Expression] = None


@dataclass(frozen=True, eq=False)
class Literal(Expression):
    """A string or number literal.

    declared_type is set only for explicit annotations such as
    ("10" as integer); an untyped string is left for the assignment
    to interpret.
    """
    value: Any
    token: Token
    declared_type: Optional[DeclaredType] = None


@dataclass(frozen=True, eq=False)
class Date(Expression):
    """A date annotation, e.g. ("8/27/1967" as date => "%m/%d/%Y")."""
    value: str
    token: Token
    format: Optional[str] = None


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True, eq=False)
class Statement(AstNode):
    """Base class for all statements."""
    pass


@dataclass(frozen=True, eq=False)
class ExpressionStatement(Statement):
    """A top-level expression terminated by ';'."""
    expression: Expression
    line: int


# =============================================================================
# Visitors
# =============================================================================

class AstVisitor(ABC):
    """Base class for AST visitors.

    Every expression variant has an abstract visit method, so a concrete
    visitor cannot be instantiated until it handles all of them.
    """

    @abstractmethod
    def visit_Element(self, node: Element) -> Any: ...

    @abstractmethod
    def visit_Get(self, node: Get) -> Any: ...

    @abstractmethod
    def visit_Set(self, node: Set) -> Any: ...

    @abstractmethod
    def visit_Literal(self, node: Literal) -> Any: ...

    @abstractmethod
    def visit_Date(self, node: Date) -> Any: ...

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> Any:
        return node.expression.accept(self)

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


class PrintVisitor(AstVisitor):
    """Debug visitor that renders the AST structure as indented lines."""

    def __init__(self, indent: int = 0, lines: Optional[List[str]] = None):
        self.indent = indent
        self.lines = lines if lines is not None else []

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self.indent + text)

    def _child(self, label: str, node: Optional[AstNode]) -> None:
        if node is None:
            return
        self._emit(f"  {label}:")
        node.accept(PrintVisitor(self.indent + 2, self.lines))

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> None:
        self._emit(f"ExpressionStatement (line {node.line})")
        node.expression.accept(PrintVisitor(self.indent + 1, self.lines))

    def visit_Element(self, node: Element) -> None:
        self._emit(f"Element({node.name.lexeme})")
        self._child("matcher", node.matcher)

    def visit_Get(self, node: Get) -> None:
        self._emit(f"Get({node.field.lexeme})")
        self._child("object", node.object)
        self._child("index", node.index)

    def visit_Set(self, node: Set) -> None:
        self._emit(f"Set({node.field.lexeme})")
        self._child("object", node.object)
        self._child("index", node.index)
        self._child("value", node.value)

    def visit_Literal(self, node: Literal) -> None:
        if node.declared_type is None:
            self._emit(f"Literal({node.value!r})")
        else:
            self._emit(f"Literal({node.value!r} as {node.declared_type.value})")

    def visit_Date(self, node: Date) -> None:
        if node.format is None:
            self._emit(f"Date({node.value!r})")
        else:
            self._emit(f"Date({node.value!r} => {node.format!r})")


def format_ast(nodes) -> str:
    """Render a node, or a list of statements, as an indented tree."""
    if isinstance(nodes, AstNode):
        nodes = [nodes]
    visitor = PrintVisitor()
    for node in nodes:
        node.accept(visitor)
    return "\n".join(visitor.lines)


def print_ast(nodes) -> None:
    """Print an AST node or statement list for debugging."""
    print(format_ast(nodes))
