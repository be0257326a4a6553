import time
from dataclasses import dataclass, field
from typing import Callable, Iterator

from calcparser.logging_config import get_logger

logger = get_logger("symbols")


def _seconds(clock: Callable[[], float]) -> float:
    return float(int(clock()))


def _milliseconds(clock: Callable[[], float]) -> float:
    return clock() * 1000.0


# computed on every lookup, never stored
PSEUDO_SYMBOLS: dict[str, Callable[[Callable[[], float]], float]] = {
    "time": _seconds,
    "timems": _milliseconds,
}


@dataclass
class SymbolTable:
    """Named variables persisting across evaluations."""

    clock: Callable[[], float] = time.time
    _values: dict[str, float] = field(default_factory=dict, init=False)

    def save(self, name: str, value: float) -> bool:
        logger.debug("save %s = %r", name, value)
        self._values[name] = value
        return True

    def lookup(self, name: str) -> tuple[float, bool]:
        if name in PSEUDO_SYMBOLS:
            return PSEUDO_SYMBOLS[name](self.clock), True
        if name in self._values:
            return self._values[name], True
        return 0.0, False

    def __contains__(self, name: str) -> bool:
        return name in PSEUDO_SYMBOLS or name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class StagedSymbols:
    """Buffers the writes of one evaluation until it completes successfully."""

    table: SymbolTable
    pending: dict[str, float] = field(default_factory=dict)

    def save(self, name: str, value: float) -> bool:
        self.pending[name] = value
        return True

    def lookup(self, name: str) -> tuple[float, bool]:
        if name not in PSEUDO_SYMBOLS and name in self.pending:
            return self.pending[name], True
        return self.table.lookup(name)

    def commit(self) -> None:
        for name, value in self.pending.items():
            self.table.save(name, value)
        self.pending.clear()
