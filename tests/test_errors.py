"""
Tests for diagnostics and the error reporter.
"""

import pytest
from fdl import (
    Token, TokenType, Diagnostic, DiagnosticKind, ErrorReporter,
    FdlRuntimeError, ParserError, DslError,
)
from fdl.tokens import make_eof


def ident(lexeme, line=1):
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


class TestDiagnosticFormat:
    """Test diagnostic rendering."""

    def test_at_token(self):
        """A token location names the lexeme."""
        diag = Diagnostic("E301", "bad.", DiagnosticKind.RUNTIME, 3, ident("name", 3))
        assert diag.format() == "[line 3] Error at 'name': bad."

    def test_at_end(self):
        """The EOF token is reported as 'at end'."""
        diag = Diagnostic("E101", "bad.", DiagnosticKind.STATIC, 4, make_eof(4))
        assert diag.format() == "[line 4] Error at end: bad."

    def test_line_only(self):
        """Without a token only the line is shown."""
        diag = Diagnostic("E002", "unterminated string.", DiagnosticKind.STATIC, 1)
        assert diag.format() == "[line 1] Error: unterminated string."
        assert str(diag) == diag.format()

    def test_to_json(self):
        """JSON form for tooling."""
        diag = Diagnostic("E301", "bad.", DiagnosticKind.RUNTIME, 2, ident("x", 2))
        assert diag.to_json() == {
            "code": "E301",
            "kind": "runtime",
            "line": 2,
            "lexeme": "x",
            "message": "bad.",
        }


class TestExceptions:
    """Test the exception hierarchy."""

    def test_runtime_error_at_token(self):
        """Runtime errors take their line from the token."""
        error = FdlRuntimeError(ident("family", 7), "oops.")
        assert error.token.lexeme == "family"
        assert error.diagnostic.line == 7
        assert error.diagnostic.kind == DiagnosticKind.RUNTIME
        assert error.diagnostic.code == "E301"
        assert str(error) == "[line 7] Error at 'family': oops."

    def test_runtime_error_at_line(self):
        """Runtime errors can be located by line only."""
        error = FdlRuntimeError(5, "oops.")
        assert error.token is None
        assert str(error) == "[line 5] Error: oops."

    def test_hierarchy(self):
        """All language errors derive from DslError."""
        assert issubclass(ParserError, DslError)
        assert issubclass(FdlRuntimeError, DslError)


class TestErrorReporter:
    """Test diagnostic collection."""

    def test_empty(self):
        """A new reporter has no errors."""
        reporter = ErrorReporter()
        assert not reporter.has_errors
        assert reporter.static_errors == []
        assert reporter.runtime_errors == []

    def test_kinds_are_separate(self):
        """Static and runtime diagnostics are tracked independently."""
        reporter = ErrorReporter()
        reporter.static_error(1, "first.")
        reporter.runtime_error(ident("f"), "second.")
        assert [d.message for d in reporter.static_errors] == ["first."]
        assert [d.message for d in reporter.runtime_errors] == ["second."]
        assert reporter.has_static_errors
        assert reporter.has_runtime_errors
        assert reporter.has_errors

    def test_add_error(self):
        """Exceptions are recorded by their diagnostic kind."""
        reporter = ErrorReporter()
        reporter.add_error(FdlRuntimeError(2, "oops."))
        assert not reporter.has_static_errors
        assert reporter.runtime_errors[0].line == 2

    def test_lists_are_copies(self):
        """Callers cannot mutate the reporter through its lists."""
        reporter = ErrorReporter()
        reporter.static_error(1, "x.")
        reporter.static_errors.clear()
        assert len(reporter.static_errors) == 1

    def test_order_preserved(self):
        """Diagnostics keep the order they were recorded in."""
        reporter = ErrorReporter()
        for line in (3, 1, 2):
            reporter.runtime_error(line, f"at {line}.")
        assert [d.line for d in reporter.runtime_errors] == [3, 1, 2]

    def test_format_all(self):
        """The report has a static and a runtime section."""
        reporter = ErrorReporter()
        reporter.static_error(1, "bad syntax.")
        reporter.runtime_error(ident("f", 2), "bad field.")
        assert reporter.format_all() == "\n".join([
            "Static errors:",
            "[line 1] Error: bad syntax.",
            "",
            "Runtime errors:",
            "[line 2] Error at 'f': bad field.",
        ])

    @pytest.mark.parametrize("code", ["E101", "E102"])
    def test_static_codes(self, code):
        """Static errors keep the given code."""
        reporter = ErrorReporter()
        reporter.static_error(1, "x.", code)
        assert reporter.to_json()["static"][0]["code"] == code
