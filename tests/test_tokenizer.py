import pytest

from calcparser.tokenizer import END_LEXEME, Lexer, Token, TokenizerError, TokenType


def scan_all(code: str, ignore_sign: bool = False) -> list[Token]:
    lexer = Lexer(code)
    tokens = []
    while lexer.next_token(ignore_sign).type is not TokenType.EXPR_END:
        tokens.append(lexer.current)
    return tokens


def types_of(code: str, ignore_sign: bool = False) -> list[TokenType]:
    return [t.type for t in scan_all(code, ignore_sign)]


def test_initial_token_is_none() -> None:
    assert Lexer("1").current.type is TokenType.NONE


@pytest.mark.parametrize(
    "code, expected_type",
    [
        pytest.param("<=", TokenType.LESS_EQUAL),
        pytest.param(">=", TokenType.GREATER_EQUAL),
        pytest.param("==", TokenType.EQUAL_EQUAL),
        pytest.param("!=", TokenType.BANG_EQUAL),
        pytest.param("+=", TokenType.PLUS_EQUAL),
        pytest.param("-=", TokenType.MINUS_EQUAL),
        pytest.param("*=", TokenType.STAR_EQUAL),
        pytest.param("/=", TokenType.SLASH_EQUAL),
        pytest.param("&&", TokenType.AND_AND),
        pytest.param("||", TokenType.OR_OR),
        pytest.param("=", TokenType.EQUAL),
        pytest.param("<", TokenType.LEFT_ANGLE_BRACKET),
        pytest.param(">", TokenType.RIGHT_ANGLE_BRACKET),
        pytest.param("+", TokenType.PLUS),
        pytest.param("-", TokenType.MINUS),
        pytest.param("*", TokenType.STAR),
        pytest.param("/", TokenType.SLASH),
        pytest.param("^", TokenType.CARET),
        pytest.param("(", TokenType.BRACKET_OPEN),
        pytest.param(")", TokenType.BRACKET_CLOSE),
        pytest.param(",", TokenType.COMMA),
        pytest.param("!", TokenType.BANG),
    ],
)
def test_operator_tokens(code: str, expected_type: TokenType) -> None:
    token = Lexer(code).next_token(ignore_sign=False)
    assert token.type is expected_type
    assert token.lexeme == code


def test_composites_take_priority() -> None:
    assert types_of("a<=b") == [TokenType.IDENTIFIER, TokenType.LESS_EQUAL, TokenType.IDENTIFIER]
    assert types_of("a == !b") == [TokenType.IDENTIFIER, TokenType.EQUAL_EQUAL, TokenType.BANG, TokenType.IDENTIFIER]
    assert types_of("x+=-1") == [TokenType.IDENTIFIER, TokenType.PLUS_EQUAL, TokenType.NUMBER]


@pytest.mark.parametrize(
    "code, expected_value",
    [
        pytest.param("42", 42.0),
        pytest.param("3.25", 3.25),
        pytest.param(".5", 0.5),
        pytest.param("-.5", -0.5),
        pytest.param("+7", 7.0),
        pytest.param("1.53158e+15", 1.53158e15),
        pytest.param("6E-2", 0.06),
    ],
)
def test_numbers(code: str, expected_value: float) -> None:
    token = Lexer(code).next_token(ignore_sign=False)
    assert token.type is TokenType.NUMBER
    assert token.lexeme == code
    assert token.value == pytest.approx(expected_value)


def test_ignore_sign_splits_operator_from_number() -> None:
    assert types_of("-5", ignore_sign=False) == [TokenType.NUMBER]
    assert types_of("-5", ignore_sign=True) == [TokenType.MINUS, TokenType.NUMBER]


def test_number_takes_at_most_one_dot() -> None:
    tokens = scan_all("1.2.3")
    assert [t.value for t in tokens] == [1.2, 0.3]


def test_identifiers() -> None:
    tokens = scan_all("alpha _tmp1 Beta2")
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER] * 3
    assert [t.lexeme for t in tokens] == ["alpha", "_tmp1", "Beta2"]


def test_token_positions() -> None:
    tokens = scan_all("  ab + 12")
    assert [t.start for t in tokens] == [2, 5, 7]


def test_end_token() -> None:
    lexer = Lexer("   ")
    token = lexer.next_token(ignore_sign=False)
    assert token.type is TokenType.EXPR_END
    assert token.lexeme == END_LEXEME


def test_end_twice_is_an_error() -> None:
    lexer = Lexer("1")
    lexer.next_token(ignore_sign=False)
    lexer.next_token(ignore_sign=True)
    with pytest.raises(TokenizerError, match="Unexpected end of expression"):
        lexer.next_token(ignore_sign=True)


@pytest.mark.parametrize(
    "code, errmsg",
    [
        pytest.param("$", "Unexpected character '$'"),
        pytest.param("&", "Unexpected character '&'"),
        pytest.param("|", "Unexpected character '|'"),
        pytest.param("\x01", "Unexpected character 0x01"),
        pytest.param("1e", "Bad numeric literal: 1e"),
        pytest.param("2e+", "Bad numeric literal: 2e+"),
        pytest.param("-.", "Bad numeric literal: -."),
        pytest.param("a" * 256, "Name too long (more than 255 characters)"),
    ],
)
def test_tokenizer_errors(code: str, errmsg: str) -> None:
    with pytest.raises(TokenizerError) as exc_info:
        scan_all(code)
    assert exc_info.value.errmsg == errmsg


def test_tokenizer_error_points_at_character() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        scan_all("1 $ 2", ignore_sign=True)
    assert str(exc_info.value) == "[Tokenizer error] Unexpected character '$'\n1 $ 2\n  ^"
