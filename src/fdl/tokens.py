"""
Token types for the FDL lexer.

FDL statements address domain elements and their fields:

    Patient["john"].name[0].family = "Doe";
    Patient["john"].birthDate = ("27/08/1967" as date => "%d/%m/%Y");
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """All token types recognized by the FDL lexer."""

    # --- Single-character tokens ---
    DOT = auto()                # .
    ASSIGN = auto()             # =
    LBRACKET = auto()           # [
    RBRACKET = auto()           # ]
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    SEMICOLON = auto()          # ; (statement terminator)

    # --- Two-character tokens ---
    DOUBLE_ARROW = auto()       # => (date format)

    # --- Literals ---
    INT_LITERAL = auto()        # 42 (no fractional part)
    STRING_LITERAL = auto()     # "hello" (no escape sequences)

    # --- Identifiers ---
    ELEMENT = auto()            # Patient, HumanName (capitalized)
    IDENTIFIER = auto()         # name, birthDate (lowercase first letter)

    # --- Keywords ---
    AS = auto()                 # as

    # --- Type keywords ---
    TYPE_BOOLEAN = auto()       # boolean
    TYPE_INTEGER = auto()       # integer
    TYPE_DECIMAL = auto()       # decimal
    TYPE_DATE = auto()          # date

    # --- Special ---
    EOF = auto()                # end of file


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    lexeme: str             # Source text as written
    literal: Any            # int for INT_LITERAL, str for STRING_LITERAL, else None
    line: int               # 1-indexed line number

    def __str__(self) -> str:
        if self.type in (TokenType.INT_LITERAL, TokenType.STRING_LITERAL):
            return f"{self.type.name}({self.literal!r})"
        if self.type in (TokenType.ELEMENT, TokenType.IDENTIFIER):
            return f"{self.type.name}({self.lexeme})"
        return self.type.name


# Keyword mapping - only consulted for lowercase identifiers
KEYWORDS: dict[str, TokenType] = {
    "as": TokenType.AS,
    "boolean": TokenType.TYPE_BOOLEAN,
    "integer": TokenType.TYPE_INTEGER,
    "decimal": TokenType.TYPE_DECIMAL,
    "date": TokenType.TYPE_DATE,
}


def make_eof(line: int) -> Token:
    """Create the end-of-file marker for the given line."""
    return Token(TokenType.EOF, "", None, line)
