# Levels, tightest first: primary, term (* / ^), add_subtract, comparison,
# expression (&& ||), comma_list. Each takes `get`: read a fresh token first.

import random
from dataclasses import dataclass
from typing import cast

from calcparser import config
from calcparser.builtins import BuiltinFunc, c_pow, lookup_builtin_func
from calcparser.errors import CalcError, CalcRuntimeError, DivideByZeroError, ParserError
from calcparser.symbols import StagedSymbols
from calcparser.tokenizer import ASSIGNMENT_TOKENS, Lexer, Token, TokenType

COMPARISONS = {
    TokenType.LEFT_ANGLE_BRACKET: lambda a, b: a < b,
    TokenType.RIGHT_ANGLE_BRACKET: lambda a, b: a > b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.EQUAL_EQUAL: lambda a, b: a == b,
    TokenType.BANG_EQUAL: lambda a, b: a != b,
}


def _truth(condition: bool) -> float:
    return 1.0 if condition else 0.0


@dataclass
class ExpressionParser:
    lexer: Lexer
    symbols: StagedSymbols
    rng: random.Random
    depth: int = 0

    @property
    def token(self) -> Token:
        return self.lexer.current

    def run(self) -> float:
        value = self.comma_list(True)
        if self.token.type is not TokenType.EXPR_END:
            raise self._error(ParserError, f"Unexpected text at end of expression: {self.lexer.rest()!r}")
        return value

    def _advance(self, ignore_sign: bool = True) -> Token:
        return self.lexer.next_token(ignore_sign)

    def _error(self, error_type: type[CalcError], errmsg: str) -> CalcError:
        return error_type(errmsg, code=self.lexer.code, error_char_idx=self.lexer.token_start)

    def _expect(self, expected: TokenType, char: str) -> None:
        if self.token.type is not expected:
            raise self._error(ParserError, f"Expected {char!r}")

    def _divide(self, left: float, right: float) -> float:
        if right == 0.0:
            raise self._error(DivideByZeroError, "Divide by zero")
        return left / right

    def primary(self, get: bool) -> float:
        if get:
            self._advance(ignore_sign=False)

        self.depth += 1
        try:
            if self.depth > config.MAX_NESTING_DEPTH:
                raise self._error(
                    ParserError, f"Expression nested too deeply (more than {config.MAX_NESTING_DEPTH} levels)"
                )
            token = self.token
            if token.type is TokenType.NUMBER:
                self._advance()
                return cast(float, token.value)
            elif token.type is TokenType.IDENTIFIER:
                self._advance()
                if self.token.type is TokenType.BRACKET_OPEN:
                    return self._call(token)
                return self._variable(token.lexeme)
            elif token.type is TokenType.MINUS:
                return -self.primary(True)
            elif token.type is TokenType.BANG:
                return 1.0 if self.primary(True) == 0.0 else 0.0
            elif token.type is TokenType.BRACKET_OPEN:
                value = self.comma_list(True)
                self._expect(TokenType.BRACKET_CLOSE, ")")
                self._advance()
                return value
            elif token.type is TokenType.EXPR_END:
                raise self._error(ParserError, "Unexpected end of expression")
            else:
                raise self._error(ParserError, f"Unexpected token: {token.lexeme!r}")
        finally:
            self.depth -= 1

    def _call(self, name: Token) -> float:
        func = lookup_builtin_func(name.lexeme)
        if func is None:
            raise CalcRuntimeError(
                f"Function {name.lexeme!r} not implemented", code=self.lexer.code, error_char_idx=name.start
            )
        args: list[float] = []
        for i in range(func.arity):
            if i > 0:
                self._expect(TokenType.COMMA, ",")
            args.append(self.expression(True))
        self._expect(TokenType.BRACKET_CLOSE, ")")
        self._advance()
        return self._apply(func, args)

    def _apply(self, func: BuiltinFunc, args: list[float]) -> float:
        try:
            return func(args, self.rng)
        except ZeroDivisionError as e:
            raise self._error(DivideByZeroError, str(e)) from None
        except ValueError as e:
            raise self._error(CalcRuntimeError, str(e)) from None

    def _variable(self, name: str) -> float:
        value, found = self.symbols.lookup(name)
        if not found:
            self.symbols.save(name, value)

        operator = self.token.type
        if operator not in ASSIGNMENT_TOKENS:
            return value

        right = self.expression(True)
        if operator is TokenType.EQUAL:
            value = right
        elif operator is TokenType.PLUS_EQUAL:
            value += right
        elif operator is TokenType.MINUS_EQUAL:
            value -= right
        elif operator is TokenType.STAR_EQUAL:
            value *= right
        elif operator is TokenType.SLASH_EQUAL:
            value = self._divide(value, right)
        self.symbols.save(name, value)
        return value

    def term(self, get: bool) -> float:
        left = self.primary(get)
        while True:
            if self.token.type is TokenType.CARET:
                left = c_pow(left, self.primary(True))
            elif self.token.type is TokenType.STAR:
                left *= self.primary(True)
            elif self.token.type is TokenType.SLASH:
                left = self._divide(left, self.primary(True))
            else:
                return left

    def add_subtract(self, get: bool) -> float:
        left = self.term(get)
        while True:
            if self.token.type is TokenType.PLUS:
                left += self.term(True)
            elif self.token.type is TokenType.MINUS:
                left -= self.term(True)
            else:
                return left

    def comparison(self, get: bool) -> float:
        left = self.add_subtract(get)
        while self.token.type in COMPARISONS:
            compare = COMPARISONS[self.token.type]
            left = _truth(compare(left, self.add_subtract(True)))
        return left

    def expression(self, get: bool) -> float:
        left = self.comparison(get)
        while True:
            # both sides are always evaluated, there is no short-circuit
            if self.token.type is TokenType.AND_AND:
                right = self.comparison(True)
                left = _truth(left != 0.0 and right != 0.0)
            elif self.token.type is TokenType.OR_OR:
                right = self.comparison(True)
                left = _truth(left != 0.0 or right != 0.0)
            else:
                return left

    def comma_list(self, get: bool) -> float:
        left = self.expression(get)
        while self.token.type is TokenType.COMMA:
            left = self.expression(True)
        return left


def evaluate_code(code: str, symbols: StagedSymbols, rng: random.Random) -> float:
    """Evaluates ``code``, writing assignments to ``symbols``.

    Raises a :class:`CalcError` subclass on the first syntax or runtime error.
    """
    return ExpressionParser(lexer=Lexer(code), symbols=symbols, rng=rng).run()
