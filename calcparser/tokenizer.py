import enum
import string
from dataclasses import dataclass, field
from typing import Optional

from calcparser import config
from calcparser.errors import TokenizerError
from calcparser.logging_config import get_logger
from calcparser.utils import PrintableEnum

logger = get_logger("tokenizer")


class TokenType(PrintableEnum):
    NONE = enum.auto()
    EXPR_END = enum.auto()
    NUMBER = enum.auto()
    IDENTIFIER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    CARET = enum.auto()
    EQUAL = enum.auto()
    BANG = enum.auto()
    COMMA = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    LEFT_ANGLE_BRACKET = enum.auto()
    RIGHT_ANGLE_BRACKET = enum.auto()
    # comparisons
    LESS_EQUAL = enum.auto()
    GREATER_EQUAL = enum.auto()
    EQUAL_EQUAL = enum.auto()
    BANG_EQUAL = enum.auto()
    # logical
    AND_AND = enum.auto()
    OR_OR = enum.auto()
    # compound assignment
    PLUS_EQUAL = enum.auto()
    MINUS_EQUAL = enum.auto()
    STAR_EQUAL = enum.auto()
    SLASH_EQUAL = enum.auto()


END_LEXEME = "<end of expression>"


@dataclass
class Token:
    type: TokenType
    lexeme: str
    start: int = 0
    value: Optional[float] = None

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "=": TokenType.EQUAL,
    "!": TokenType.BANG,
    ",": TokenType.COMMA,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "<": TokenType.LEFT_ANGLE_BRACKET,
    ">": TokenType.RIGHT_ANGLE_BRACKET,
}

# first character of a two-character token ending in "="
EQUAL_SUFFIXED_TOKENS = {
    "<": TokenType.LESS_EQUAL,
    ">": TokenType.GREATER_EQUAL,
    "=": TokenType.EQUAL_EQUAL,
    "!": TokenType.BANG_EQUAL,
    "+": TokenType.PLUS_EQUAL,
    "-": TokenType.MINUS_EQUAL,
    "*": TokenType.STAR_EQUAL,
    "/": TokenType.SLASH_EQUAL,
}

DOUBLED_TOKENS = {
    "&": TokenType.AND_AND,
    "|": TokenType.OR_OR,
}

ASSIGNMENT_TOKENS = {
    TokenType.EQUAL,
    TokenType.PLUS_EQUAL,
    TokenType.MINUS_EQUAL,
    TokenType.STAR_EQUAL,
    TokenType.SLASH_EQUAL,
}


def _is_digit(s: str) -> bool:
    return len(s) == 1 and s in string.digits


def _is_valid_in_identifier(s: str) -> bool:
    return len(s) == 1 and (s in string.ascii_letters or s in string.digits or s == "_")


def _is_identifier_start(s: str) -> bool:
    return len(s) == 1 and (s in string.ascii_letters or s == "_")


@dataclass
class Lexer:
    """Scans ``code`` one token at a time, on request of the parser.

    ``current`` is the most recently produced token, ``NONE`` before the first
    call to :meth:`next_token`.
    """

    code: str
    pos: int = 0
    token_start: int = 0
    current: Token = field(default_factory=lambda: Token(type=TokenType.NONE, lexeme=""))

    def next_token(self, ignore_sign: bool) -> Token:
        self.current = self._scan(ignore_sign)
        logger.debug("token %s at %d", self.current, self.current.start)
        return self.current

    def rest(self) -> str:
        """Unconsumed text, starting with the current token."""
        return self.code[self.token_start :]

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.code[i] if i < len(self.code) else ""

    def _error(self, errmsg: str) -> TokenizerError:
        return TokenizerError(errmsg, code=self.code, error_char_idx=self.token_start)

    def _make(self, type: TokenType, length: int) -> Token:
        lexeme = self.code[self.pos : self.pos + length]
        self.pos += length
        return Token(type=type, lexeme=lexeme, start=self.token_start)

    def _scan(self, ignore_sign: bool) -> Token:
        while self._peek() and self._peek().isspace():
            self.pos += 1
        self.token_start = self.pos

        first = self._peek()
        if not first:
            if self.current.type is TokenType.EXPR_END:
                raise self._error("Unexpected end of expression")
            return Token(type=TokenType.EXPR_END, lexeme=END_LEXEME, start=self.pos)

        following = self._peek(1)
        if (
            _is_digit(first)
            or (first == "." and _is_digit(following))
            or (not ignore_sign and first in "+-" and (_is_digit(following) or following == "."))
        ):
            return self._scan_number()

        if following == "=" and first in EQUAL_SUFFIXED_TOKENS:
            return self._make(EQUAL_SUFFIXED_TOKENS[first], 2)

        if first in DOUBLED_TOKENS and following == first:
            return self._make(DOUBLED_TOKENS[first], 2)

        if first in SINGLE_CHAR_TOKENS:
            return self._make(SINGLE_CHAR_TOKENS[first], 1)

        if _is_identifier_start(first):
            return self._scan_identifier()

        if first.isprintable():
            raise self._error(f"Unexpected character {first!r}")
        raise self._error(f"Unexpected character 0x{ord(first):02x}")

    def _scan_number(self) -> Token:
        end = self.pos
        if self.code[end] in "+-":
            end += 1
        seen_dot = False
        while end < len(self.code) and (_is_digit(self.code[end]) or (self.code[end] == "." and not seen_dot)):
            seen_dot = seen_dot or self.code[end] == "."
            end += 1

        # allow for 1.53158e+15
        if end < len(self.code) and self.code[end] in "eE":
            end += 1
            if end < len(self.code) and self.code[end] in "+-":
                end += 1
            while end < len(self.code) and _is_digit(self.code[end]):
                end += 1

        lexeme = self.code[self.pos : end]
        try:
            value = float(lexeme)
        except ValueError:
            raise self._error(f"Bad numeric literal: {lexeme}") from None
        self.pos = end
        return Token(type=TokenType.NUMBER, lexeme=lexeme, start=self.token_start, value=value)

    def _scan_identifier(self) -> Token:
        end = self.pos + 1
        while end < len(self.code) and _is_valid_in_identifier(self.code[end]):
            end += 1
        if end - self.pos > config.MAX_NAME_LENGTH:
            raise self._error(f"Name too long (more than {config.MAX_NAME_LENGTH} characters)")
        return self._make(TokenType.IDENTIFIER, end - self.pos)
