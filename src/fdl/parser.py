"""
Recursive descent parser for FDL.

Converts a token stream into a list of statements. Grammar:

    program     := statement* EOF
    statement   := expression ';'
    expression  := assignment
    assignment  := deref ('=' primitive)?
    primitive   := '(' typed | assignment
    typed       := STRING 'as' (boolean | integer | decimal | date ('=>' STRING)?) ')'
    deref       := receiver ('.' IDENTIFIER ('[' NUMBER ']')?)*
    receiver    := declaration | STRING
    declaration := ELEMENT ('[' (NUMBER | STRING) ']')?

The parser never raises to its caller. A structural error is recorded with
the ErrorReporter and raised as a ParserError; the statement loop catches
it, skips to the token after the next ';' and carries on, so one run
reports every independent syntax error.
"""

import logging
from typing import List, Optional

from .tokens import Token, TokenType
from .ast import (
    Expression, Element, Get, Set, Literal, Date,
    Statement, ExpressionStatement,
)
from .types import DeclaredType
from .errors import (
    ErrorReporter,
    ParserError,
    error_unexpected_token,
    error_invalid_assignment_target,
)

logger = logging.getLogger(__name__)


TYPE_KEYWORDS = {
    TokenType.TYPE_BOOLEAN: DeclaredType.BOOLEAN,
    TokenType.TYPE_INTEGER: DeclaredType.INTEGER,
    TokenType.TYPE_DECIMAL: DeclaredType.DECIMAL,
}


class Parser:
    """
    Recursive descent parser for FDL.

    Usage:
        parser = Parser(tokens, reporter)
        statements = parser.parse()
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.pos = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def _is_at_end(self) -> bool:
        """Check if at end of tokens."""
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        if self._is_at_end():
            return False
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                return self._advance()
        return None

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type, or panic."""
        if self._check(token_type):
            return self._advance()
        self._error(self._current(), message)

    def _error(self, token: Token, message: str) -> None:
        """Record a static error and raise the statement-level panic."""
        error = error_unexpected_token(token, message)
        self.reporter.add_error(error)
        raise error

    def _synchronize(self) -> None:
        """Skip tokens up to and including the next ';'."""
        self._advance()
        while not self._is_at_end():
            if self._previous().type == TokenType.SEMICOLON:
                return
            self._advance()

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> Optional[Statement]:
        """Parse one statement, or return None after recovering from an error."""
        line = self._current().line
        try:
            expr = self._parse_expression()
            self._consume(TokenType.SEMICOLON, "expect ';' after expression.")
            return ExpressionStatement(expr, line)
        except ParserError as e:
            logger.debug("recovering from parse error: %s", e)
            self._synchronize()
            return None

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        return self._parse_assignment()

    def _parse_assignment(self) -> Expression:
        expr = self._parse_deref()

        equals = self._match(TokenType.ASSIGN)
        if equals is None:
            return expr

        value = self._parse_primitive()
        if isinstance(expr, Get):
            return Set(expr.object, expr.field, value, expr.index)

        # Reported without panicking: the rest of the statement is well formed
        self.reporter.add_error(error_invalid_assignment_target(equals))
        return expr

    def _parse_primitive(self) -> Expression:
        if self._match(TokenType.LPAREN):
            return self._parse_typed()
        return self._parse_assignment()

    def _parse_typed(self) -> Expression:
        """Parse the inside of ("value" as type) after the '('."""
        text = self._consume(TokenType.STRING_LITERAL, "expect a string after '('.")
        self._consume(TokenType.AS, "expect 'as' after type value.")

        type_token = self._current()
        if type_token.type == TokenType.TYPE_DATE:
            self._advance()
            fmt = None
            if self._match(TokenType.DOUBLE_ARROW):
                fmt = self._consume(TokenType.STRING_LITERAL, "expect format after '=>'.").literal
            value: Expression = Date(text.literal, text, fmt)
        elif type_token.type in TYPE_KEYWORDS:
            self._advance()
            value = Literal(text.literal, text, TYPE_KEYWORDS[type_token.type])
        else:
            self._error(type_token, "expect a valid type keyword.")

        self._consume(TokenType.RPAREN, "expect ')' after type definition.")
        return value

    def _parse_deref(self) -> Expression:
        expr = self._parse_receiver()

        while self._match(TokenType.DOT):
            name = self._consume(TokenType.IDENTIFIER, "expect a property after '.'.")
            index = None
            if self._match(TokenType.LBRACKET):
                index = self._parse_number()
                self._consume(TokenType.RBRACKET, "expect ']' after index.")
            expr = Get(expr, name, index)

        return expr

    def _parse_receiver(self) -> Expression:
        if self._check(TokenType.ELEMENT):
            return self._parse_declaration()
        string = self._consume(TokenType.STRING_LITERAL, "expect an element name or a string.")
        return Literal(string.literal, string)

    def _parse_declaration(self) -> Element:
        name = self._advance()
        matcher = None

        if self._match(TokenType.LBRACKET):
            matcher = self._parse_matcher()
            self._consume(TokenType.RBRACKET, "expect ']' after position matcher.")

        return Element(name, matcher)

    def _parse_matcher(self) -> Literal:
        token = self._match(TokenType.INT_LITERAL, TokenType.STRING_LITERAL)
        if token is None:
            self._error(self._current(), "expect an integer number or a string.")
        return Literal(token.literal, token)

    def _parse_number(self) -> Literal:
        token = self._consume(TokenType.INT_LITERAL, "expect a number.")
        return Literal(token.literal, token)

    # =========================================================================
    # Program
    # =========================================================================

    def parse(self) -> List[Statement]:
        """Parse the whole token list."""
        logger.debug("starting parsing %d tokens.", len(self.tokens))
        statements = []
        while not self._is_at_end():
            statement = self._parse_statement()
            if statement is not None:
                statements.append(statement)
        logger.debug("parsing complete; produced %d statements.", len(statements))
        return statements


def parse(tokens: List[Token], reporter: Optional[ErrorReporter] = None) -> List[Statement]:
    """
    Convenience function to parse tokens into statements.

    Args:
        tokens: List of tokens from the lexer
        reporter: Collector for static errors; a private one is used if omitted

    Returns:
        The statements that parsed cleanly, in source order
    """
    return Parser(tokens, reporter).parse()
