"""
FDL exceptions and error reporting.

Two disjoint kinds of diagnostics are tracked:
- static: lexical and syntactic problems found before interpretation
- runtime: semantic problems found while evaluating statements

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Runtime errors
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .tokens import Token, TokenType


class DiagnosticKind(Enum):
    """Which phase produced a diagnostic."""
    STATIC = "static"
    RUNTIME = "runtime"


@dataclass(frozen=True)
class Diagnostic:
    """A single error found in an FDL listing."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    kind: DiagnosticKind
    line: int
    token: Optional[Token] = None   # Offending token, when known

    def format(self) -> str:
        """Format the diagnostic for display.

        Examples:
            [line 3] Error at 'name': expect ';' after expression.
            [line 4] Error at end: expect ';' after expression.
            [line 1] Error: unterminated string.
        """
        if self.token is not None and self.token.type == TokenType.EOF:
            where = " at end"
        elif self.token is not None:
            where = f" at '{self.token.lexeme}'"
        else:
            where = ""
        return f"[line {self.line}] Error{where}: {self.message}"

    def __str__(self) -> str:
        return self.format()

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "kind": self.kind.value,
            "line": self.line,
            "lexeme": self.token.lexeme if self.token is not None else None,
            "message": self.message,
        }


Where = Union[int, Token, None]


def make_diagnostic(kind: DiagnosticKind, code: str, where: Where, message: str) -> Diagnostic:
    """Build a diagnostic located either at a line number or at a token."""
    if isinstance(where, Token):
        return Diagnostic(code, message, kind, where.line, where)
    return Diagnostic(code, message, kind, where or 0)


class DslError(Exception):
    """Base exception for FDL errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(DslError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(DslError):
    """Error during parsing (E1xx).

    Raised as a local panic: the parser catches it at the statement boundary
    and resynchronizes on the next ';'.
    """
    pass


class FdlRuntimeError(DslError):
    """Error during interpretation (E3xx).

    Caught per statement by the interpreter, recorded, and evaluation goes on
    with the next statement.
    """

    def __init__(self, where: Where, message: str, code: str = "E301"):
        super().__init__(make_diagnostic(DiagnosticKind.RUNTIME, code, where, message))

    @property
    def token(self) -> Optional[Token]:
        return self.diagnostic.token


class CoercionError(ValueError):
    """A string could not be converted to the requested type."""
    pass


class FdlException(Exception):
    """Raised by the high-level API when a listing produced diagnostics."""

    def __init__(self, message: str, static_errors: Optional[List[Diagnostic]] = None,
                 runtime_errors: Optional[List[Diagnostic]] = None):
        super().__init__(message)
        self.static_errors = list(static_errors or [])
        self.runtime_errors = list(runtime_errors or [])


# --- Lexer error codes ---

def error_unexpected_character(char: str, line: int) -> LexerError:
    """E001: Unexpected character."""
    diag = make_diagnostic(DiagnosticKind.STATIC, "E001", line,
                           f"unexpected character '{char}'.")
    return LexerError(diag)


def error_unterminated_string(line: int) -> LexerError:
    """E002: Unterminated string literal."""
    diag = make_diagnostic(DiagnosticKind.STATIC, "E002", line, "unterminated string.")
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(token: Token, message: str) -> ParserError:
    """E101: Unexpected token."""
    diag = make_diagnostic(DiagnosticKind.STATIC, "E101", token, message)
    return ParserError(diag)


def error_invalid_assignment_target(equals: Token) -> ParserError:
    """E102: Left-hand side of '=' is not a field access."""
    diag = make_diagnostic(DiagnosticKind.STATIC, "E102", equals, "invalid assignment target.")
    return ParserError(diag)


class ErrorReporter:
    """Collects static and runtime diagnostics for one run."""

    def __init__(self):
        self._static: List[Diagnostic] = []
        self._runtime: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic to the list matching its kind."""
        if diagnostic.kind == DiagnosticKind.STATIC:
            self._static.append(diagnostic)
        else:
            self._runtime.append(diagnostic)

    def add_error(self, error: DslError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    def static_error(self, where: Where, message: str, code: str = "E101") -> None:
        """Record a static error at a line number or a token."""
        self.add(make_diagnostic(DiagnosticKind.STATIC, code, where, message))

    def runtime_error(self, where: Where, message: str, code: str = "E301") -> None:
        """Record a runtime error at a line number or a token."""
        self.add(make_diagnostic(DiagnosticKind.RUNTIME, code, where, message))

    @property
    def static_errors(self) -> List[Diagnostic]:
        return list(self._static)

    @property
    def runtime_errors(self) -> List[Diagnostic]:
        return list(self._runtime)

    @property
    def has_static_errors(self) -> bool:
        return bool(self._static)

    @property
    def has_runtime_errors(self) -> bool:
        return bool(self._runtime)

    @property
    def has_errors(self) -> bool:
        return self.has_static_errors or self.has_runtime_errors

    def format_all(self) -> str:
        """Format all diagnostics for display, static errors first."""
        parts = ["Static errors:"]
        parts.extend(d.format() for d in self._static)
        parts.append("")
        parts.append("Runtime errors:")
        parts.extend(d.format() for d in self._runtime)
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "static": [d.to_json() for d in self._static],
            "runtime": [d.to_json() for d in self._runtime],
        }
