"""
Unit tests for the FDL lexer.
"""

import pytest
from fdl import tokenize, Lexer, TokenType, ErrorReporter


def types_of(source):
    return [t.type for t in tokenize(source)]


class TestLexerBasics:
    """Test basic lexer functionality."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        """Whitespace is insignificant."""
        assert types_of("  \t \r\n  ") == [TokenType.EOF]

    def test_simple_assignment(self):
        """Basic assignment statement tokenization."""
        assert types_of('Patient.gender = "male";') == [
            TokenType.ELEMENT,
            TokenType.DOT,
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.STRING_LITERAL,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_declaration_with_matcher(self):
        """Element with a bracketed matcher."""
        assert types_of('Patient["john"]') == [
            TokenType.ELEMENT,
            TokenType.LBRACKET,
            TokenType.STRING_LITERAL,
            TokenType.RBRACKET,
            TokenType.EOF,
        ]

    def test_typed_literal(self):
        """Parenthesized typed literal with a date format."""
        assert types_of('("1/2/2000" as date => "%d/%m/%Y")') == [
            TokenType.LPAREN,
            TokenType.STRING_LITERAL,
            TokenType.AS,
            TokenType.TYPE_DATE,
            TokenType.DOUBLE_ARROW,
            TokenType.STRING_LITERAL,
            TokenType.RPAREN,
            TokenType.EOF,
        ]

    def test_line_tracking(self):
        """Tokens carry the line they start on."""
        tokens = tokenize("A;\nB;\n\nC;")
        elements = [t for t in tokens if t.type == TokenType.ELEMENT]
        assert [t.line for t in elements] == [1, 2, 4]

    def test_eof_line(self):
        """EOF is reported on the last line."""
        tokens = tokenize("A;\nB;\n")
        assert tokens[-1].type == TokenType.EOF
        assert tokens[-1].line == 3

    def test_streaming(self):
        """Lexer can be iterated directly."""
        tokens = list(Lexer("A;"))
        assert [t.type for t in tokens] == [TokenType.ELEMENT, TokenType.SEMICOLON, TokenType.EOF]


class TestIdentifiers:
    """Test element and field identifiers."""

    def test_capitalized_is_element(self):
        """A capitalized identifier names an element."""
        token = tokenize("HumanName")[0]
        assert token.type == TokenType.ELEMENT
        assert token.lexeme == "HumanName"
        assert token.literal is None

    def test_lowercase_is_field(self):
        """A lowercase identifier names a field."""
        token = tokenize("birthDate")[0]
        assert token.type == TokenType.IDENTIFIER
        assert token.lexeme == "birthDate"

    def test_digits_in_identifier(self):
        """Identifiers may contain digits after the first character."""
        tokens = tokenize("A1 b2c")
        assert tokens[0].lexeme == "A1"
        assert tokens[1].lexeme == "b2c"

    @pytest.mark.parametrize("keyword,token_type", [
        ("as", TokenType.AS),
        ("boolean", TokenType.TYPE_BOOLEAN),
        ("integer", TokenType.TYPE_INTEGER),
        ("decimal", TokenType.TYPE_DECIMAL),
        ("date", TokenType.TYPE_DATE),
    ])
    def test_keywords(self, keyword, token_type):
        """Lowercase keywords get their own token types."""
        assert tokenize(keyword)[0].type == token_type

    def test_capitalized_keyword_is_element(self):
        """Keywords only apply to lowercase identifiers."""
        assert tokenize("Date")[0].type == TokenType.ELEMENT

    def test_keyword_prefix_is_identifier(self):
        """A keyword prefix does not split an identifier."""
        token = tokenize("dateOfBirth")[0]
        assert token.type == TokenType.IDENTIFIER
        assert token.lexeme == "dateOfBirth"


class TestLiterals:
    """Test string and number literals."""

    def test_string_literal(self):
        """String literal value excludes the quotes."""
        token = tokenize('"hello world"')[0]
        assert token.type == TokenType.STRING_LITERAL
        assert token.lexeme == '"hello world"'
        assert token.literal == "hello world"

    def test_empty_string(self):
        """Empty string literal."""
        assert tokenize('""')[0].literal == ""

    def test_no_escape_processing(self):
        """Backslashes are kept as written."""
        assert tokenize(r'"a\nb"')[0].literal == "a\\nb"

    def test_multibyte_string(self):
        """Non-ASCII characters inside strings are preserved."""
        assert tokenize('"José Müller"')[0].literal == "José Müller"

    def test_multiline_string(self):
        """A string may span lines; the line counter advances."""
        tokens = tokenize('"a\nb" C')
        assert tokens[0].literal == "a\nb"
        assert tokens[1].line == 2

    def test_integer_literal(self):
        """Integer literal value is an int."""
        token = tokenize("42")[0]
        assert token.type == TokenType.INT_LITERAL
        assert token.literal == 42

    def test_no_float_literal(self):
        """A fractional number lexes as number, dot, number."""
        assert types_of("1.5") == [
            TokenType.INT_LITERAL,
            TokenType.DOT,
            TokenType.INT_LITERAL,
            TokenType.EOF,
        ]


class TestComments:
    """Test comment handling."""

    def test_line_comment(self):
        """Line comments are skipped."""
        assert types_of("// a comment\nA;") == [
            TokenType.ELEMENT, TokenType.SEMICOLON, TokenType.EOF,
        ]

    def test_comment_at_end(self):
        """Comment after a statement."""
        assert types_of("A; // trailing") == [
            TokenType.ELEMENT, TokenType.SEMICOLON, TokenType.EOF,
        ]

    def test_comment_keeps_line_count(self):
        """The newline ending a comment still counts."""
        tokens = tokenize("// one\n// two\nA")
        assert tokens[0].line == 3


class TestOperators:
    """Test punctuation and operators."""

    @pytest.mark.parametrize("source,token_type", [
        (".", TokenType.DOT),
        ("=", TokenType.ASSIGN),
        ("[", TokenType.LBRACKET),
        ("]", TokenType.RBRACKET),
        ("(", TokenType.LPAREN),
        (")", TokenType.RPAREN),
        (";", TokenType.SEMICOLON),
        ("=>", TokenType.DOUBLE_ARROW),
    ])
    def test_punctuation(self, source, token_type):
        """Each punctuation mark has its own token type."""
        assert types_of(source) == [token_type, TokenType.EOF]

    def test_assign_then_arrow(self):
        """'==>' lexes as '=' followed by '=>'."""
        assert types_of("==>") == [TokenType.ASSIGN, TokenType.DOUBLE_ARROW, TokenType.EOF]


class TestLexerErrors:
    """Test lexer error reporting and recovery."""

    def test_unexpected_character(self):
        """An unknown character is reported and skipped."""
        reporter = ErrorReporter()
        tokens = tokenize("A@;", reporter)
        assert [t.type for t in tokens] == [TokenType.ELEMENT, TokenType.SEMICOLON, TokenType.EOF]
        assert len(reporter.static_errors) == 1
        diag = reporter.static_errors[0]
        assert diag.code == "E001"
        assert diag.message == "unexpected character '@'."
        assert diag.format() == "[line 1] Error: unexpected character '@'."

    def test_lone_slash(self):
        """A single '/' is not a comment."""
        reporter = ErrorReporter()
        tokenize("A / B", reporter)
        assert reporter.static_errors[0].message == "unexpected character '/'."

    def test_underscore_is_unexpected(self):
        """Identifiers are letters and digits only."""
        reporter = ErrorReporter()
        tokens = tokenize("birth_date", reporter)
        assert [t.lexeme for t in tokens[:2]] == ["birth", "date"]
        assert reporter.static_errors[0].message == "unexpected character '_'."

    def test_every_error_reported(self):
        """Scanning continues after each error."""
        reporter = ErrorReporter()
        tokenize("@\n#\n$", reporter)
        errors = reporter.static_errors
        assert [d.line for d in errors] == [1, 2, 3]

    def test_unterminated_string(self):
        """An unterminated string is reported, not tokenized."""
        reporter = ErrorReporter()
        tokens = tokenize('A.f = "abc', reporter)
        assert TokenType.STRING_LITERAL not in [t.type for t in tokens]
        assert len(reporter.static_errors) == 1
        diag = reporter.static_errors[0]
        assert diag.code == "E002"
        assert diag.message == "unterminated string."

    def test_unterminated_string_line(self):
        """The error is reported at the line where the input ended."""
        reporter = ErrorReporter()
        tokenize('"a\nb\nc', reporter)
        assert reporter.static_errors[0].line == 3

    def test_errors_are_static(self):
        """Lexer errors never show up as runtime errors."""
        reporter = ErrorReporter()
        tokenize("@", reporter)
        assert reporter.has_static_errors
        assert not reporter.has_runtime_errors
