import pytest

from treelox.scanner import Scanner, scan
from treelox.tokens import Token, TokenType as T


def types(source, reporter):
    return [token.type for token in Scanner(source, reporter).scan_tokens()]


def test_empty_source_yields_only_eof(reporter):
    tokens = scan("", reporter)
    assert tokens == [Token(T.EOF, "", None, 1)]
    assert not reporter.had_error


@pytest.mark.parametrize("source, kind", [
    ("(", T.LEFT_PAREN), (")", T.RIGHT_PAREN),
    ("{", T.LEFT_BRACE), ("}", T.RIGHT_BRACE),
    (",", T.COMMA), (".", T.DOT), ("-", T.MINUS), ("+", T.PLUS),
    (";", T.SEMICOLON), ("/", T.SLASH), ("*", T.STAR),
    ("?", T.QUESTION), (":", T.COLON),
    ("!", T.BANG), ("!=", T.BANG_EQUAL),
    ("=", T.EQUAL), ("==", T.EQUAL_EQUAL),
    (">", T.GREATER), (">=", T.GREATER_EQUAL),
    ("<", T.LESS), ("<=", T.LESS_EQUAL),
    ("a", T.IDENTIFIER), ("_abc1", T.IDENTIFIER),
    ("\"\"", T.STRING), ("\"abc\"", T.STRING),
    ("1", T.NUMBER), ("0.0", T.NUMBER),
])
def test_single_token(source, kind, reporter):
    assert types(source, reporter) == [kind, T.EOF]
    assert not reporter.had_error


@pytest.mark.parametrize("keyword", [
    "and", "class", "else", "false", "fun", "for", "if", "nil", "or",
    "print", "return", "super", "this", "true", "var", "while",
])
def test_keywords(keyword, reporter):
    assert types(keyword, reporter) == [T[keyword.upper()], T.EOF]


def test_keyword_prefix_is_identifier(reporter):
    assert types("classy orchid", reporter) == [T.IDENTIFIER, T.IDENTIFIER, T.EOF]


@pytest.mark.parametrize("source, expected", [
    ("for (var ab = 123 )",
     [T.FOR, T.LEFT_PAREN, T.VAR, T.IDENTIFIER, T.EQUAL, T.NUMBER, T.RIGHT_PAREN]),
    ("-1", [T.MINUS, T.NUMBER]),
    ("while a;\n\nabcd > \"abc\"\n",
     [T.WHILE, T.IDENTIFIER, T.SEMICOLON, T.IDENTIFIER, T.GREATER, T.STRING]),
    ("a ? b : c", [T.IDENTIFIER, T.QUESTION, T.IDENTIFIER, T.COLON, T.IDENTIFIER]),
    ("!==", [T.BANG_EQUAL, T.EQUAL]),
])
def test_token_sequences(source, expected, reporter):
    assert types(source, reporter) == expected + [T.EOF]


def test_literals_and_lines(reporter):
    tokens = scan("var x = 12.5;\n\"two\nlines\" 7", reporter)
    assert tokens[3] == Token(T.NUMBER, "12.5", 12.5, 1)
    assert tokens[5] == Token(T.STRING, "\"two\nlines\"", "two\nlines", 3)
    assert tokens[6] == Token(T.NUMBER, "7", 7.0, 3)
    assert tokens[-1].line == 3


def test_number_needs_digit_after_dot(reporter):
    tokens = scan("1.", reporter)
    assert [token.type for token in tokens] == [T.NUMBER, T.DOT, T.EOF]
    assert tokens[0].literal == 1.0


def test_comments_are_dropped(reporter):
    assert types("// nothing here\n+ // trailing", reporter) == [T.PLUS, T.EOF]
    assert types("// comment at end of input", reporter) == [T.EOF]


def test_unterminated_string_is_reported_and_dropped(reporter):
    tokens = scan("print \"oops\n", reporter)
    assert [token.type for token in tokens] == [T.PRINT, T.EOF]
    assert reporter.events == [(2, "", "Unterminated string.")]


def test_unexpected_character_keeps_scanning(reporter):
    assert types("1 @ # 2", reporter) == [T.NUMBER, T.NUMBER, T.EOF]
    assert reporter.messages == ["Unexpected character.", "Unexpected character."]


def test_tokens_are_immutable():
    token = Token(T.NUMBER, "1", 1.0, 1)
    with pytest.raises(AttributeError):
        token.line = 2
    assert str(token) == "NUMBER 1 1.0"
