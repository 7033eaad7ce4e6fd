"""Token kinds, token records and the fixed word and symbol tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

KEYWORDS: tuple[str, ...] = (
    "if", "else", "elif", "for", "while", "def", "return", "type", "import", "from", "as",
    "with", "try", "except", "finally", "raise", "pass", "break", "continue", "lambda",
    "yield", "global", "nonlocal", "assert", "del", "async", "await", "match", "case",
)

# Order matters: the first entry that matches at a position wins.
SYMBOLS: tuple[str, ...] = (
    "==",
    "=", "**=", "+=", "-=", "*=", "/=", "//=", "%=", "&=", "|=",
    "^=", "~=", "<<=", ">>=", "@=",
    "**", "+", "-", "*", "/", "//", "%", "&", "|", "^",
    "~", "<<", ">>", "@", "!=", ">=", "<=", ">", "<", ":=",
    "(", ")", "[", "]", "{", "}", ":", ",", ".", "!",
)

WORD_OPERATORS: tuple[str, ...] = ("in", "is", "not", "and", "or")

SYMBOLS_SET_OPERATOR = 15
SYMBOLS_OPERATOR = 35

# Sub-codes of operator tokens that the lexer produces by merging two words.
WORD_OPERATOR_OFFSET = 0x14
OPERATOR_NOT_IN = 0x1A
OPERATOR_IS_NOT = 0x1B

# String prefix flags carried in a string token's sub-code.
STRING_FLAG_NONE = 0x0
STRING_FLAG_F = 0x1
STRING_FLAG_RAW = 0x5


class TokenKind(IntEnum):
    """The category of a token, held in the low four bits of its packed code."""

    KEYWORD = 0x0
    BOOLEAN = 0x1
    OPERATOR = 0x2
    SET_OPERATOR = 0x3
    SYMBOL = 0x4
    LINE_BREAK = 0x5
    STRING = 0x6
    FSTRING_START = 0x7
    FSTRING_MIDDLE = 0x8
    FSTRING_END = 0x9
    IDENTIFIER = 0xA
    INTEGER = 0xB
    FLOAT = 0xC
    NONE = 0xD


@dataclass
class Token:
    """A token: its kind, a kind-specific sub-code, and its span in the source."""

    kind: TokenKind
    sub: int
    start: int
    end: int

    @property
    def packed(self) -> int:
        """The kind and sub-code combined into one integer."""
        return (self.sub << 4) | int(self.kind)

    def text(self, source: str) -> str:
        """Return the slice of ``source`` this token covers."""
        return source[self.start:self.end]

    def is_kind(self, kind: TokenKind) -> bool:
        """Tell whether this token is of the given kind."""
        return self.kind == kind


def symbol_token(index: int) -> tuple[TokenKind, int]:
    """Return the kind and sub-code for the symbol at ``index`` in SYMBOLS."""
    if not 0 <= index < len(SYMBOLS):
        raise IndexError(f"symbol index out of range: {index}")
    if index == 0:
        return TokenKind.OPERATOR, 0
    if index <= SYMBOLS_SET_OPERATOR:
        return TokenKind.SET_OPERATOR, index - 1
    if index <= SYMBOLS_OPERATOR:
        return TokenKind.OPERATOR, index - SYMBOLS_SET_OPERATOR
    return TokenKind.SYMBOL, index - SYMBOLS_OPERATOR - 1


def keyword_token(word: str) -> tuple[TokenKind, int] | None:
    """Return the kind and sub-code for a reserved word, or None for other words."""
    if word == "True":
        return TokenKind.BOOLEAN, 1
    if word == "False":
        return TokenKind.BOOLEAN, 0
    if word == "None":
        return TokenKind.NONE, 0
    try:
        return TokenKind.KEYWORD, KEYWORDS.index(word) + 1
    except ValueError:
        return None


def word_operator_token(word: str) -> tuple[TokenKind, int] | None:
    """Return the kind and sub-code for a word operator, or None."""
    try:
        return TokenKind.OPERATOR, WORD_OPERATORS.index(word) + WORD_OPERATOR_OFFSET
    except ValueError:
        return None