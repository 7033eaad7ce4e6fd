"""Turn source text into tokens and intern the values they carry."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import PycSyntaxError
from .tokens import (
    OPERATOR_IS_NOT,
    OPERATOR_NOT_IN,
    STRING_FLAG_F,
    STRING_FLAG_NONE,
    STRING_FLAG_RAW,
    SYMBOLS,
    Token,
    TokenKind,
    keyword_token,
    symbol_token,
    word_operator_token,
)

_DIGITS = "0123456789"
_BASE_PREFIXES = {"x": 16, "X": 16, "o": 8, "O": 8, "b": 2, "B": 2}
_BASE_DIGITS = {
    2: frozenset("01"),
    8: frozenset("01234567"),
    10: frozenset(_DIGITS),
    16: frozenset("0123456789abcdefABCDEF"),
}
_FLOAT_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_DECIMAL_CHUNK = 1000

_LEADING_ZEROS = (
    "SyntaxError: leading zeros in decimal integer literals "
    "are not permitted; use an 0o prefix for octal integers"
)
_INVALID_DECIMAL = "invalid decimal literal"
_INVALID_NUMBER = "invalid number literal"
_FLOAT_BASE = "SyntaxError: invalid float literal with base other than 10"
_INVALID_SYNTAX = "SyntaxError: invalid syntax"
_UNTERMINATED = "SyntaxError: unterminated string literal"

# Word that merges with the previous token's text into a two-word operator.
_MERGED_OPERATORS = {
    ("in", "not"): OPERATOR_NOT_IN,
    ("not", "is"): OPERATOR_IS_NOT,
}


class _FloatBaseError(ValueError):
    """A float literal written with a base prefix."""


def _parse_decimal(digits: str) -> int:
    value = 0
    for offset in range(0, len(digits), _DECIMAL_CHUNK):
        chunk = digits[offset:offset + _DECIMAL_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def parse_number(text: str, is_float: bool) -> int | float:
    """Parse a numeric literal; underscores are ignored and 0x/0o/0b set the base.

    Raises ValueError when the text is not a valid literal of the requested kind.
    """
    digits = text.replace("_", "")
    base = 10
    if len(text) > 2 and len(digits) >= 2 and digits[0] == "0":
        base = _BASE_PREFIXES.get(digits[1], 10)

    if is_float:
        if base != 10:
            raise _FloatBaseError(f"float literal with base {base}: {text!r}")
        if not _FLOAT_RE.fullmatch(digits):
            raise ValueError(f"invalid float literal: {text!r}")
        return float(digits)

    body = digits if base == 10 else digits[2:]
    if not body or not set(body) <= _BASE_DIGITS[base]:
        raise ValueError(f"invalid integer literal: {text!r}")
    return _parse_decimal(body) if base == 10 else int(body, base)


def _is_word_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_word_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


@dataclass
class _FString:
    is_triple: bool
    quote: str
    token: Token
    open: int


class Lexer:
    """Splits source code into tokens, keeping tables of identifiers and constants."""

    def __init__(self, code: str):
        self.code = code
        self.pos = 0
        self.tokens: list[Token] = []
        self.identifiers: list[str] = []
        self.integers: list[int] = []
        self.floats: list[float] = []
        self._identifier_index: dict[str, int] = {}
        self._integer_index: dict[int, int] = {}
        self._fstrings: list[_FString] = []

    def intern_identifier(self, start: int, end: int) -> int:
        """Return the table index of the identifier spanning ``start:end``."""
        name = self.code[start:end]
        index = self._identifier_index.get(name)
        if index is None:
            index = len(self.identifiers)
            self.identifiers.append(name)
            self._identifier_index[name] = index
        return index

    def intern_integer(self, value: int) -> int:
        """Return the table index of an integer constant."""
        index = self._integer_index.get(value)
        if index is None:
            index = len(self.integers)
            self.integers.append(value)
            self._integer_index[value] = index
        return index

    def intern_float(self, value: float) -> int:
        """Return the table index of a float constant, matching by equality."""
        for index, existing in enumerate(self.floats):
            if existing == value:
                return index
        self.floats.append(value)
        return len(self.floats) - 1

    def tokenize(self) -> list[Token]:
        """Read the rest of the source and return all tokens produced."""
        code = self.code
        n = len(code)
        while self.pos < n:
            c = code[self.pos]

            if c == "\r":
                self.pos += 1
                continue
            if c == "#":
                newline = code.find("\n", self.pos)
                self.pos = n if newline < 0 else newline
                continue
            if c == "\\":
                self._line_continuation()
                continue
            if c == "\n" or c == ";":
                if self.tokens:
                    sub = 0 if c == "\n" else 1
                    self._push(TokenKind.LINE_BREAK, sub, self.pos, self.pos + 1)
                self.pos += 1
                continue
            if c == " " or c == "\t":
                self.pos += 1
                continue
            if self._fstrings and self._fstring_resumes(c):
                continue
            if self._symbol(c):
                continue
            if _is_word_start(c):
                self._word()
                continue
            if c == "." or c in _DIGITS:
                self._number()
                continue
            if c == "'" or c == '"':
                self._string(c)
                continue
            raise self._error(self.pos, "invalid syntax")

        if self._fstrings:
            raise self._error(self._fstrings.pop().token.start, _UNTERMINATED)
        return self.tokens

    def _error(self, index: int, message: str, with_line: bool = False) -> PycSyntaxError:
        return PycSyntaxError(self.code, index, message, with_line)

    def _push(self, kind: TokenKind, sub: int, start: int, end: int) -> Token:
        token = Token(kind, sub, start, end)
        self.tokens.append(token)
        return token

    def _triple_at(self, index: int, quote: str) -> bool:
        code = self.code
        return index + 2 < len(code) and code[index + 1] == quote and code[index + 2] == quote

    def _line_continuation(self) -> None:
        code, n = self.code, len(self.code)
        self.pos += 1
        while self.pos < n and code[self.pos] == "\r":
            self.pos += 1
        if self.pos >= n or code[self.pos] != "\n":
            raise self._error(self.pos, _INVALID_SYNTAX)
        self.pos += 1

    def _scan_body(self, quote: str, is_triple: bool, formatted: bool, with_line: bool) -> bool:
        """Advance through string content; return True if it stopped at a '{'."""
        code, n = self.code, len(self.code)
        slash = False
        while self.pos < n:
            c = code[self.pos]
            if formatted and c == "{":
                if self.pos + 1 < n and code[self.pos + 1] == "{":
                    self.pos += 2
                    continue
                self.pos += 1
                return True
            if c == "\r":
                self.pos += 1
                continue
            if not slash and not is_triple and c == "\n":
                raise self._error(self.pos, _INVALID_SYNTAX, with_line)
            if c == "\\":
                slash = not slash
            elif not slash and c == quote:
                if not is_triple:
                    self.pos += 1
                    return False
                if self._triple_at(self.pos, quote):
                    self.pos += 3
                    return False
            else:
                slash = False
            self.pos += 1
        return False

    def _fstring_resumes(self, c: str) -> bool:
        state = self._fstrings[-1]
        if c == "{":
            state.open += 1
        if c != "}":
            return False
        state.open -= 1
        if state.open != 0:
            return False

        start = self.pos
        has_format = self._scan_body(state.quote, state.is_triple, True, False)
        if has_format:
            state.open += 1
            end = self.pos - 1
            self._push(TokenKind.FSTRING_MIDDLE, 0, start, end)
        else:
            end = self.pos - (3 if state.is_triple else 1)
            self._fstrings.pop()
            self._push(TokenKind.FSTRING_END, 0, start, end)
        return True

    def _symbol(self, c: str) -> bool:
        code, pos = self.code, self.pos
        if c == "." and pos + 1 < len(code) and code[pos + 1] in _DIGITS:
            return False
        for index, symbol in enumerate(SYMBOLS):
            if code.startswith(symbol, pos):
                kind, sub = symbol_token(index)
                self._push(kind, sub, pos, pos + len(symbol))
                self.pos = pos + len(symbol)
                return True
        return False

    def _word(self) -> None:
        code, n = self.code, len(self.code)
        start = self.pos
        while self.pos < n and _is_word_char(code[self.pos]):
            self.pos += 1
        word = code[start:self.pos]

        reserved = keyword_token(word)
        if reserved is not None:
            self._push(*reserved, start, self.pos)
            return

        operator = word_operator_token(word)
        if operator is None:
            sub = self.intern_identifier(start, self.pos)
            self._push(TokenKind.IDENTIFIER, sub, start, self.pos)
            return

        if self.tokens:
            previous = self.tokens[-1]
            merged = _MERGED_OPERATORS.get((word, previous.text(code)))
            if merged is not None:
                previous.kind = TokenKind.OPERATOR
                previous.sub = merged
                previous.end = self.pos
                return
        self._push(*operator, start, self.pos)

    def _number(self) -> None:
        code, n = self.code, len(self.code)
        start = pos = self.pos
        has_dot = code[pos] == "."
        has_exponent = False

        if has_dot:
            pos += 1
        elif code[pos] == "0":
            if pos + 1 < n and code[pos + 1] in _BASE_PREFIXES:
                pos += 2
            else:
                raise self._error(pos, _LEADING_ZEROS)

        while pos < n and code[pos] in "0123456789._":
            ch = code[pos]
            if ch == "_" and code[pos - 1] == "_":
                raise self._error(pos, _INVALID_DECIMAL)
            if ch == ".":
                if has_dot:
                    break
                if code[pos - 1] == "_" or (pos + 1 < n and code[pos + 1] == "_"):
                    raise self._error(pos, _INVALID_DECIMAL)
                has_dot = True
            pos += 1

        if pos < n and code[pos] in "eE":
            has_exponent = True
            pos += 1
            if pos < n and code[pos] in "+-":
                pos += 1
            if pos >= n or code[pos] not in _DIGITS:
                raise self._error(pos, _INVALID_DECIMAL)
            while pos < n and code[pos] in "0123456789_":
                if code[pos] == "_" and code[pos - 1] == "_":
                    raise self._error(pos, _INVALID_DECIMAL)
                pos += 1

        self.pos = pos
        is_float = has_dot or has_exponent
        try:
            value = parse_number(code[start:pos], is_float)
        except _FloatBaseError:
            raise self._error(start, _FLOAT_BASE) from None
        except ValueError:
            raise self._error(start, _INVALID_NUMBER) from None

        if code[pos - 1] == "_":
            raise self._error(pos - 1, _INVALID_NUMBER)

        if is_float:
            self._push(TokenKind.FLOAT, self.intern_float(value), start, pos)
        else:
            self._push(TokenKind.INTEGER, self.intern_integer(value), start, pos)

    def _string(self, quote: str) -> None:
        code = self.code
        start = self.pos
        is_triple = self._triple_at(start, quote)
        self.pos += 3 if is_triple else 1

        token_start = start
        flag = STRING_FLAG_NONE
        formatted = False
        prefix = self.tokens[-1] if self.tokens else None
        if (
            prefix is not None
            and prefix.kind is TokenKind.IDENTIFIER
            and prefix.sub == 0
            and prefix.end == start
        ):
            word = prefix.text(code)
            recognised = True
            if word == "f":
                flag = STRING_FLAG_F
            elif word in ("r", "b"):
                flag = STRING_FLAG_RAW
            elif word in ("rf", "fr"):
                flag = STRING_FLAG_RAW
                formatted = True
            else:
                recognised = False
            if recognised:
                token_start = prefix.start
                self.tokens.pop()

        has_format = self._scan_body(quote, is_triple, formatted, True)
        end = self.pos - 1
        if has_format:
            token = self._push(TokenKind.FSTRING_START, flag, token_start, end)
            self._fstrings.append(_FString(is_triple, quote, token, 1))
        else:
            self._push(TokenKind.STRING, flag, token_start, end)


def tokenize(code: str) -> list[Token]:
    """Tokenize ``code`` and return its tokens."""
    return Lexer(code).tokenize()