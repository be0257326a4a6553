from calcparser.runtime import Session
from calcparser.tokenizer import Lexer, TokenType, TokenizerError
from calcparser.utils import format_number


def tokens_of(code: str) -> str:
    lexer = Lexer(code)
    tokens = []
    ignore_sign = False
    while lexer.next_token(ignore_sign).type is not TokenType.EXPR_END:
        tokens.append(str(lexer.current))
        # signs after an operand are binary operators
        ignore_sign = lexer.current.type in {TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.BRACKET_CLOSE}
    return " ".join(tokens)


session = Session(seed=0)

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "2 + 3 * 6",
    "1 + 10 ^ 2",
    "(2 + 3) * 6",
    "2 + 3 > 6 + 8",
    "a = 42, b = 6, a * b",
    "a /= 7",
    "dex = 10, dex += 22",
    "sqrt(64) + min(10, 20)",
    "if(1 < 2, 22, 33)",
    "1.53158e+15",
    "-.5 + .5",
    "roll(3, 6)",
    "sqrt(-1)",
    "2 / 0",
    "mod(7, 0)",
    "1 + 3 + )",
    "1 $ 2",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        print(f"tokens: {tokens_of(code)}")
    except TokenizerError as e:
        print(e)

    result = session.evaluate_result(code)
    print(f"result: {format_number(result.value)}")
    if result.error:
        print(f"error: {result.error}")

print(f"variables: { {name: session.lookup_symbol(name)[0] for name in session.symbols} }")
