"""
Lexer for FDL.

Converts source text into a stream of tokens for the parser.
Supports:
- Single-character punctuation: . = [ ] ( ) ;
- The date format arrow (=>)
- String literals (no escape sequences, may span lines)
- Integer literals (digits only, there is no float literal)
- Element identifiers (capitalized) and field identifiers (lowercase)
- Line comments (//)

Lexical errors never abort the scan: each one is recorded with the
ErrorReporter and scanning resumes with the next character.
"""

import logging
from typing import Iterator, List, Optional

from .tokens import Token, TokenType, KEYWORDS, make_eof
from .errors import (
    ErrorReporter,
    LexerError,
    error_unexpected_character,
    error_unterminated_string,
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Tokenizer for FDL.

    Usage:
        lexer = Lexer(source_code, reporter)
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer(source_code):
            process(token)
    """

    SINGLE_CHAR_TOKENS = {
        '.': TokenType.DOT,
        '[': TokenType.LBRACKET,
        ']': TokenType.RBRACKET,
        '(': TokenType.LPAREN,
        ')': TokenType.RPAREN,
        ';': TokenType.SEMICOLON,
    }

    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.start = 0          # Start of the lexeme being scanned
        self.pos = 0            # Current position in source
        self.line = 1           # Current line (1-indexed)

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume character if it matches expected."""
        if self._is_at_end() or self.source[self.pos] != expected:
            return False
        self.pos += 1
        return True

    def _is_at_end(self) -> bool:
        """Check if we've reached end of source."""
        return self.pos >= len(self.source)

    def _make_token(self, token_type: TokenType, literal=None) -> Token:
        """Create a token from the current lexeme."""
        return Token(token_type, self.source[self.start:self.pos], literal, self.line)

    def _report(self, error: LexerError) -> None:
        logger.debug("lexer error: %s", error)
        self.reporter.add_error(error)

    def _skip_comment(self) -> None:
        """Skip a line comment (// to end of line)."""
        while self._peek() != '\n' and not self._is_at_end():
            self._advance()

    def _scan_string(self) -> Optional[Token]:
        """Scan a string literal; the opening quote is already consumed."""
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\n':
                self.line += 1
            self._advance()

        if self._is_at_end():
            self._report(error_unterminated_string(self.line))
            return None

        self._advance()  # closing quote
        value = self.source[self.start + 1:self.pos - 1]
        return self._make_token(TokenType.STRING_LITERAL, value)

    def _scan_number(self) -> Token:
        """Scan an integer literal."""
        while _is_digit(self._peek()):
            self._advance()
        text = self.source[self.start:self.pos]
        return self._make_token(TokenType.INT_LITERAL, int(text))

    def _scan_identifier(self, capitalized: bool) -> Token:
        """Scan an element or field identifier."""
        while _is_alnum(self._peek()):
            self._advance()
        text = self.source[self.start:self.pos]
        if capitalized:
            return self._make_token(TokenType.ELEMENT)
        return self._make_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _scan_token(self) -> Optional[Token]:
        """Scan the next token; returns None for skipped input."""
        ch = self._advance()

        if ch in self.SINGLE_CHAR_TOKENS:
            return self._make_token(self.SINGLE_CHAR_TOKENS[ch])

        if ch == '=':
            if self._match('>'):
                return self._make_token(TokenType.DOUBLE_ARROW)
            return self._make_token(TokenType.ASSIGN)

        if ch == '/':
            if self._match('/'):
                self._skip_comment()
                return None
            self._report(error_unexpected_character(ch, self.line))
            return None

        if ch in ' \r\t':
            return None
        if ch == '\n':
            self.line += 1
            return None

        if ch == '"':
            return self._scan_string()
        if _is_digit(ch):
            return self._scan_number()
        if 'A' <= ch <= 'Z':
            return self._scan_identifier(capitalized=True)
        if 'a' <= ch <= 'z':
            return self._scan_identifier(capitalized=False)

        self._report(error_unexpected_character(ch, self.line))
        return None

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens, ending with EOF."""
        while not self._is_at_end():
            self.start = self.pos
            token = self._scan_token()
            if token is not None:
                yield token
        yield make_eof(self.line)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens."""
        logger.debug("starting token scan.")
        tokens = list(self)
        logger.debug("token scan complete; produced %d tokens.", len(tokens))
        return tokens


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_alnum(ch: str) -> bool:
    return _is_digit(ch) or 'a' <= ch <= 'z' or 'A' <= ch <= 'Z'


def tokenize(source: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize
        reporter: Collector for lexical errors; a private one is used if omitted

    Returns:
        List of tokens terminated by EOF
    """
    return Lexer(source, reporter).tokenize()
