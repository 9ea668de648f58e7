"""
Tests for static path resolution.
"""

import pytest
from fdl import tokenize, parse, resolve, PathResolver, PathTable, ErrorReporter


def parse_source(source):
    reporter = ErrorReporter()
    statements = parse(tokenize(source, reporter), reporter)
    assert not reporter.has_errors, reporter.format_all()
    return statements


def resolve_one(source):
    """Resolve a single statement; return (expression, table)."""
    statements = parse_source(source)
    table = resolve(statements)
    return statements[0].expression, table


class TestPaths:
    """Test canonical path computation."""

    def test_element_default_matcher(self):
        """A declaration without matcher gets position 0."""
        expr, table = resolve_one("A;")
        assert table.get(expr) == "A0."

    @pytest.mark.parametrize("source,path", [
        ("A[1];", "A1."),
        ('A["1"];', "A1."),
        ('A["x"];', "Ax."),
    ])
    def test_element_matcher(self, source, path):
        """Numeric and string matchers produce the same text."""
        expr, table = resolve_one(source)
        assert table.get(expr) == path

    def test_get_chain(self):
        """Each Get appends its field and index."""
        expr, table = resolve_one('Patient["john"].name[1].family;')
        assert table.get(expr) == "Patientjohn.name1.family0."
        assert table.get(expr.object) == "Patientjohn.name1."
        assert table.get(expr.object.object) == "Patientjohn."

    def test_set_and_value(self):
        """A Set records its own path; its literal shares it."""
        expr, table = resolve_one('Patient.name.given[2] = "J";')
        assert table.get(expr) == "Patient0.name0.given2."
        assert table.get(expr.value) == "Patient0.name0.given2."

    def test_typed_value_path(self):
        """Date and typed literal values take the enclosing path."""
        expr, table = resolve_one('A.b = ("1" as date);')
        assert table.get(expr.value) == "A0.b0."

    def test_nested_element_not_appended(self):
        """An element on the right-hand side takes the enclosing path."""
        expr, table = resolve_one('Observation.subject = Patient["john"];')
        assert table.get(expr) == "Observation0.subject0."
        assert table.get(expr.value) == "Observation0.subject0."

    def test_nested_chain(self):
        """Gets below a nested element extend the enclosing path."""
        expr, table = resolve_one('A.b = C.d = "x";')
        inner = expr.value
        assert table.get(inner.object) == "A0.b0."
        assert table.get(inner) == "A0.b0.d0."
        assert table.get(inner.value) == "A0.b0.d0."

    def test_string_receiver_path(self):
        """A string receiver resolves to the empty path."""
        expr, table = resolve_one('"abc".x;')
        assert table.get(expr.object) == ""
        assert table.get(expr) == "x0."

    def test_matchers_not_recorded(self):
        """Matcher and index literals are part of the parent's segment."""
        expr, table = resolve_one("A[3].b[4];")
        assert expr.index not in table
        assert expr.object.matcher not in table
        assert len(table) == 2


class TestStatements:
    """Test resolution across statements."""

    def test_fresh_path_per_statement(self):
        """Every statement starts from an empty path."""
        statements = parse_source("A.b; C.d;")
        table = resolve(statements)
        assert table.get(statements[1].expression) == "C0.d0."

    def test_identical_paths_across_statements(self):
        """Different nodes addressing the same object share a path."""
        statements = parse_source('A[1].b; A["1"].b;')
        table = resolve(statements)
        first, second = (s.expression for s in statements)
        assert first is not second
        assert table.get(first) == table.get(second) == "A1.b0."

    def test_paths_listing(self):
        """paths() lists every recorded path in resolution order."""
        table = resolve(parse_source("A; B.c;"))
        assert table.paths() == ["A0.", "B0.", "B0.c0."]

    def test_injected_table(self):
        """The resolver fills a table it is given."""
        table = PathTable()
        statements = parse_source("A;")
        PathResolver(table).resolve(statements)
        assert statements[0].expression in table

    def test_resolving_twice_is_an_error(self):
        """Each node is recorded exactly once."""
        statements = parse_source("A;")
        table = resolve(statements)
        with pytest.raises(RuntimeError, match="resolved twice"):
            resolve(statements, table)
