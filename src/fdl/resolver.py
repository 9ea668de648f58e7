"""
Static path resolution for FDL.

Before anything is evaluated, every node of every statement gets a
canonical path: the concatenation of one "<name><matcher-or-index>."
segment per node from the statement root down to it.

    Patient["john"].name[1].family = "Doe";

    Element  Patient   -> Patientjohn.
    Get      name      -> Patientjohn.name1.
    Set      family    -> Patientjohn.name1.family0.
    Literal  "Doe"     -> Patientjohn.name1.family0.

Identical paths denote the same run-time object for the whole run, which
is how repeated references across statements are deduplicated. The value
of a Set is resolved one nesting level deeper, and an Element met below
level 0 is not appended to the path. The latter means a resource declared
on the right-hand side of an assignment can never be addressed again as a
root object; that limitation is kept as is.
"""

import logging
from typing import Dict, Iterator, List, Optional

from .ast import (
    AstNode, Expression, Element, Get, Set, Literal, Date,
    Statement, ExpressionStatement,
)

logger = logging.getLogger(__name__)


DEFAULT_POSITION = "0"


class PathTable:
    """Maps AST nodes (by identity) to their canonical paths."""

    def __init__(self):
        self._paths: Dict[AstNode, str] = {}

    def record(self, node: AstNode, path: str) -> None:
        """Record a node's path; each node is resolved exactly once."""
        if node in self._paths:
            raise RuntimeError(
                f"{node.__class__.__name__} node resolved twice "
                f"('{self._paths[node]}' then '{path}')")
        self._paths[node] = path

    def get(self, node: AstNode) -> Optional[str]:
        return self._paths.get(node)

    def __contains__(self, node: AstNode) -> bool:
        return node in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[AstNode]:
        return iter(self._paths)

    def paths(self) -> List[str]:
        """All recorded paths, in resolution order."""
        return list(self._paths.values())


def position_text(node: Optional[Expression]) -> str:
    """Render a matcher or index literal as a path segment suffix.

    A numeric 1 and a string "1" produce the same text, so both
    spellings address the same object.
    """
    if node is None:
        return DEFAULT_POSITION
    if isinstance(node, Literal):
        return str(node.value)
    raise TypeError(f"Unexpected position expression: {node.__class__.__name__}")


class PathResolver:
    """
    Computes canonical paths for a list of statements.

    Usage:
        table = PathTable()
        PathResolver(table).resolve(statements)
    """

    def __init__(self, table: PathTable):
        self.table = table

    def resolve(self, statements: List[Statement]) -> None:
        logger.debug("starting static analysis.")
        for statement in statements:
            self._resolve_statement(statement)
        logger.debug("static analysis complete; %d nodes resolved.", len(self.table))

    def _resolve_statement(self, statement: Statement) -> None:
        if isinstance(statement, ExpressionStatement):
            # Every statement starts from an empty path
            self._resolve(statement.expression, "", 0)
        else:
            raise RuntimeError(f"Unknown statement type: {type(statement).__name__}")

    def _record(self, node: AstNode, path: str) -> str:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("resolved %s to '%s'", node.__class__.__name__, path)
        self.table.record(node, path)
        return path

    def _resolve(self, expr: Expression, path: str, level: int) -> str:
        """Record the path of expr and its children; return expr's path."""
        if isinstance(expr, Element):
            if level != 0:
                return self._record(expr, path)
            segment = f"{expr.name.lexeme}{position_text(expr.matcher)}."
            return self._record(expr, path + segment)

        elif isinstance(expr, Get):
            base = self._resolve(expr.object, path, level)
            segment = f"{expr.field.lexeme}{position_text(expr.index)}."
            return self._record(expr, base + segment)

        elif isinstance(expr, Set):
            base = self._resolve(expr.object, path, level)
            segment = f"{expr.field.lexeme}{position_text(expr.index)}."
            own = self._record(expr, base + segment)
            self._resolve(expr.value, own, level + 1)
            return own

        elif isinstance(expr, (Literal, Date)):
            return self._record(expr, path)

        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")


def resolve(statements: List[Statement], table: Optional[PathTable] = None) -> PathTable:
    """
    Convenience function to resolve a statement list.

    Args:
        statements: Parsed statements
        table: Table to fill; a new one is created if omitted

    Returns:
        The filled path table
    """
    if table is None:
        table = PathTable()
    PathResolver(table).resolve(statements)
    return table
