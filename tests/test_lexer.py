import pytest

from pycgen.errors import PycSyntaxError
from pycgen.lexer import Lexer, parse_number, tokenize
from pycgen.tokens import (
    OPERATOR_IS_NOT,
    OPERATOR_NOT_IN,
    STRING_FLAG_F,
    STRING_FLAG_RAW,
    SYMBOLS,
    TokenKind,
    keyword_token,
    symbol_token,
    word_operator_token,
)


def lex(code):
    lexer = Lexer(code)
    return lexer, lexer.tokenize()


def texts(code, tokens):
    return [t.text(code) for t in tokens]


def test_simple_assignment():
    code = "x = 1"
    lexer, tokens = lex(code)
    assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER, TokenKind.SET_OPERATOR, TokenKind.INTEGER]
    assert texts(code, tokens) == ["x", "=", "1"]
    assert lexer.integers[tokens[2].sub] == 1
    assert lexer.identifiers[tokens[0].sub] == "x"


def test_module_tokenize_matches_lexer():
    code = "a = b + 2.5"
    assert tokenize(code) == Lexer(code).tokenize()
    assert texts(code, tokenize(code)) == ["a", "=", "b", "+", "2.5"]


def test_not_in_merges():
    code = "a not in b"
    _, tokens = lex(code)
    assert len(tokens) == 3
    assert tokens[1].kind == TokenKind.OPERATOR
    assert tokens[1].sub == OPERATOR_NOT_IN
    assert tokens[1].text(code) == "not in"


def test_is_not_merges():
    code = "a is not b"
    _, tokens = lex(code)
    assert len(tokens) == 3
    assert tokens[1].sub == OPERATOR_IS_NOT
    assert tokens[1].text(code) == "is not"


def test_plain_word_operator():
    code = "not x"
    _, tokens = lex(code)
    assert (tokens[0].kind, tokens[0].sub) == word_operator_token("not")


def test_keywords_and_constants():
    code = "if True else None or False"
    _, tokens = lex(code)
    assert (tokens[0].kind, tokens[0].sub) == keyword_token("if")
    assert (tokens[1].kind, tokens[1].sub) == keyword_token("True")
    assert (tokens[2].kind, tokens[2].sub) == keyword_token("else")
    assert tokens[3].kind == TokenKind.NONE
    assert (tokens[4].kind, tokens[4].sub) == word_operator_token("or")
    assert (tokens[5].kind, tokens[5].sub) == keyword_token("False")


def test_line_breaks_skip_leading():
    code = "\n\nx\ny;z"
    _, tokens = lex(code)
    assert tokens[0].start == 2
    kinds = [t.kind for t in tokens]
    assert kinds == [
        TokenKind.IDENTIFIER, TokenKind.LINE_BREAK, TokenKind.IDENTIFIER,
        TokenKind.LINE_BREAK, TokenKind.IDENTIFIER,
    ]
    assert texts(code, tokens)[1::2] == ["\n", ";"]
    assert tokens[1].sub != tokens[3].sub


def test_comments_are_skipped():
    code = "x # note\ny"
    _, tokens = lex(code)
    assert texts(code, tokens) == ["x", "\n", "y"]


def test_line_continuation():
    code = "x \\\r\ny"
    _, tokens = lex(code)
    assert texts(code, tokens) == ["x", "y"]


def test_bad_backslash():
    with pytest.raises(PycSyntaxError) as info:
        tokenize("x \\ y")
    assert info.value.message == "SyntaxError: invalid syntax"


def test_dot_symbol_and_leading_dot_float():
    code = "a.b"
    _, tokens = lex(code)
    assert texts(code, tokens) == ["a", ".", "b"]
    lexer, tokens = lex(".5")
    assert tokens[0].kind == TokenKind.FLOAT
    assert lexer.floats[tokens[0].sub] == .5


def test_identifier_interning():
    code = "a = b; a"
    lexer, tokens = lex(code)
    assert tokens[0].sub == tokens[4].sub
    assert tokens[0].sub != tokens[2].sub
    assert lexer.identifiers == ["a", "b"]


def test_integer_interning():
    lexer, tokens = lex("7 + 7")
    assert tokens[0].sub == tokens[2].sub
    assert lexer.integers == [7]


def test_intern_methods():
    lexer = Lexer("ab ab")
    assert lexer.intern_identifier(0, 2) == lexer.intern_identifier(3, 5)
    assert lexer.intern_integer(5) == lexer.intern_integer(5)
    assert lexer.intern_integer(6) == lexer.intern_integer(5) + 1
    assert lexer.intern_float(0.0) == lexer.intern_float(-0.0)
    assert len(lexer.floats) == 1


def test_number_literals():
    code = "a = 0x10 + 0b101 + 0o17 + 1_000 + 2.5"
    lexer, tokens = lex(code)
    ints = [lexer.integers[t.sub] for t in tokens if t.kind == TokenKind.INTEGER]
    floats = [lexer.floats[t.sub] for t in tokens if t.kind == TokenKind.FLOAT]
    assert ints == [0x10, 0b101, 0o17, 1_000]
    assert floats == [2.5]


@pytest.mark.parametrize(
    "code, message",
    [
        ("x = 0", "SyntaxError: leading zeros in decimal integer literals are not permitted; "
                  "use an 0o prefix for octal integers"),
        ("1__0", "invalid decimal literal"),
        ("1e", "invalid decimal literal"),
        ("1._5", "invalid decimal literal"),
        ("0xff", "invalid number literal"),
        ("0x1.5", "SyntaxError: invalid float literal with base other than 10"),
        ("$", "invalid syntax"),
    ],
)
def test_lexing_errors(code, message):
    with pytest.raises(PycSyntaxError) as info:
        tokenize(code)
    assert info.value.message == message


def test_trailing_underscore_points_at_it():
    code = "x = 1_"
    with pytest.raises(PycSyntaxError) as info:
        tokenize(code)
    assert info.value.message == "invalid number literal"
    assert info.value.index == len(code) - 1


def test_plain_string_span():
    code = 'x = "abc"'
    _, tokens = lex(code)
    assert tokens[2].kind == TokenKind.STRING
    assert tokens[2].start == code.index('"')
    assert tokens[2].end == len(code) - 1


def test_triple_string_allows_newline():
    code = '"""a\nb"""'
    _, tokens = lex(code)
    assert len(tokens) == 1
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].start == 0


def test_newline_in_string_reports_line():
    with pytest.raises(PycSyntaxError) as info:
        tokenize('x = "ab\ncd"')
    assert info.value.with_line is True
    assert "on line 1" in info.value.report


@pytest.mark.parametrize("prefix", ["r", "b"])
def test_raw_and_bytes_prefix(prefix):
    code = f'{prefix}"a"'
    _, tokens = lex(code)
    assert len(tokens) == 1
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].sub == STRING_FLAG_RAW
    assert tokens[0].start == 0


def test_f_prefix_is_not_formatted():
    code = 'f"a{b}"'
    _, tokens = lex(code)
    assert len(tokens) == 1
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].sub == STRING_FLAG_F


def test_formatted_string():
    code = 'rf"a{x}b"'
    lexer, tokens = lex(code)
    assert [t.kind for t in tokens] == [
        TokenKind.FSTRING_START, TokenKind.IDENTIFIER, TokenKind.FSTRING_END,
    ]
    assert tokens[0].sub == STRING_FLAG_RAW
    assert tokens[0].start == 0
    assert lexer.identifiers[tokens[1].sub] == "x"
    assert tokens[2].start == code.index("}")


def test_formatted_string_with_middle():
    code = 'rf"{a}-{b}"'
    _, tokens = lex(code)
    assert [t.kind for t in tokens] == [
        TokenKind.FSTRING_START, TokenKind.IDENTIFIER, TokenKind.FSTRING_MIDDLE,
        TokenKind.IDENTIFIER, TokenKind.FSTRING_END,
    ]


def test_unterminated_formatted_string():
    with pytest.raises(PycSyntaxError) as info:
        tokenize('rf"a{x')
    assert info.value.message == "SyntaxError: unterminated string literal"
    assert info.value.index == 0


def test_token_spans_are_ordered():
    code = "def f(a):\n    return a + 1.5 * (a - 2)\n"
    tokens = tokenize(code)
    assert all(t.start < t.end for t in tokens)
    starts = [t.start for t in tokens]
    assert starts == sorted(set(starts))
    assert all(a.end <= b.start for a, b in zip(tokens, tokens[1:]))


def test_parse_number_values():
    assert parse_number("1_000", False) == 1_000
    assert parse_number("0x10", False) == 0x10
    assert parse_number("0b101", False) == 0b101
    assert parse_number("0o17", False) == 0o17
    assert parse_number("2.5", True) == 2.5
    assert parse_number("1e3", True) == 1e3


@pytest.mark.parametrize(
    "text, is_float",
    [("", False), ("1.5", False), ("0x1.5", True), ("abc", False), ("0b2", False), ("1e", True)],
)
def test_parse_number_rejects(text, is_float):
    with pytest.raises(ValueError):
        parse_number(text, is_float)