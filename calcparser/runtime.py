import math
import random
from dataclasses import dataclass
from typing import Optional

from calcparser import config
from calcparser.errors import CalcError
from calcparser.logging_config import get_logger
from calcparser.parser import evaluate_code
from calcparser.symbols import StagedSymbols, SymbolTable

logger = get_logger("runtime")

CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}


@dataclass(frozen=True)
class Evaluation:
    value: float
    error: str = ""
    exception: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.exception is None


class Session:
    """A symbol table and random generator shared by successive evaluations."""

    def __init__(
        self,
        symbols: Optional[SymbolTable] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.rng = rng if rng is not None else random.Random(seed if seed is not None else config.RANDOM_SEED)
        self.last: Evaluation = Evaluation(value=math.nan)

    def evaluate_result(self, code: str) -> Evaluation:
        for name, value in CONSTANTS.items():
            self.symbols.save(name, value)

        staged = StagedSymbols(self.symbols)
        try:
            value = evaluate_code(code, staged, self.rng)
        except CalcError as e:
            logger.debug("evaluation of %r failed: %s", code, e.message)
            self.last = Evaluation(value=math.nan, error=e.message, exception=e)
        else:
            staged.commit()
            logger.debug("evaluation of %r = %r", code, value)
            self.last = Evaluation(value=value)
        return self.last

    def evaluate(self, code: str) -> float:
        return self.evaluate_result(code).value

    def get_parser_err(self) -> str:
        return self.last.error

    def save_symbol(self, name: str, value: float) -> bool:
        return self.symbols.save(name, value)

    def lookup_symbol(self, name: str) -> tuple[float, bool]:
        return self.symbols.lookup(name)


default_session = Session()


def evaluate(code: str) -> float:
    return default_session.evaluate(code)


def evaluate_result(code: str) -> Evaluation:
    return default_session.evaluate_result(code)


def get_parser_err() -> str:
    return default_session.get_parser_err()


def save_symbol(name: str, value: float) -> bool:
    return default_session.save_symbol(name, value)


def lookup_symbol(name: str) -> tuple[float, bool]:
    return default_session.lookup_symbol(name)
