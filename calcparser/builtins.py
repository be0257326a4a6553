import math
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from calcparser import config


@dataclass(frozen=True)
class BuiltinFunc:
    name: str
    arity: int
    fn: Callable[..., float]
    uses_rng: bool = False

    def __call__(self, args: Sequence[float], rng: random.Random) -> float:
        if len(args) != self.arity:
            raise TypeError(f"{self.name!r} takes {self.arity} argument(s), got {len(args)}")
        if self.uses_rng:
            return self.fn(rng, *args)
        return self.fn(*args)


_TABLES: dict[int, dict[str, BuiltinFunc]] = {1: {}, 2: {}, 3: {}}


def register_builtin_func(name: str, arity: int = 1, uses_rng: bool = False):
    def decorator(fn: Callable[..., float]) -> Callable[..., float]:
        _TABLES[arity][name] = BuiltinFunc(name=name, arity=arity, fn=fn, uses_rng=uses_rng)
        return fn

    return decorator


def lookup_builtin_func(name: str) -> Optional[BuiltinFunc]:
    for arity in sorted(_TABLES):
        if name in _TABLES[arity]:
            return _TABLES[arity][name]
    return None


# C libm returns NaN or an infinity where math raises
def _libm(
    fn: Callable[[float], float],
    overflow: Callable[[float], float] = lambda x: math.inf,
    poles: Optional[Mapping[float, float]] = None,
) -> Callable[[float], float]:
    def call(x: float) -> float:
        try:
            return fn(x)
        except OverflowError:
            return overflow(x)
        except ValueError:
            if poles and x in poles:
                return poles[x]
            return math.nan

    return call


def _rounding(fn: Callable[[float], int]) -> Callable[[float], float]:
    def call(x: float) -> float:
        if not math.isfinite(x):
            return x
        return float(fn(x))

    return call


for _name, _fn in {
    "abs": math.fabs,
    "acos": _libm(math.acos),
    "asin": _libm(math.asin),
    "atan": math.atan,
    "atanh": _libm(math.atanh, poles={1.0: math.inf, -1.0: -math.inf}),
    "ceil": _rounding(math.ceil),
    "cos": _libm(math.cos),
    "cosh": _libm(math.cosh),
    "exp": _libm(math.exp),
    "floor": _rounding(math.floor),
    "log": _libm(math.log, poles={0.0: -math.inf}),
    "log10": _libm(math.log10, poles={0.0: -math.inf}),
    "sin": _libm(math.sin),
    "sinh": _libm(math.sinh, overflow=lambda x: math.copysign(math.inf, x)),
    "sqrt": _libm(math.sqrt),
    "tan": _libm(math.tan),
    "tanh": math.tanh,
    "int": _rounding(math.trunc),
}.items():
    register_builtin_func(_name)(_fn)


def _random_below(rng: random.Random, x: float) -> int:
    """Uniform integer in [0, trunc(x)), 0 when that range is empty."""
    if not math.isfinite(x) or x < 1:
        return 0
    return rng.randrange(math.trunc(x))


@register_builtin_func("rand", uses_rng=True)
def rand_(rng: random.Random, x: float) -> float:
    return float(_random_below(rng, x))


@register_builtin_func("percent", uses_rng=True)
def percent_(rng: random.Random, x: float) -> float:
    """1.0 with a probability of x percent, else 0.0."""
    if x >= 100:
        return 1.0
    if not x >= 1:
        return 0.0
    return 1.0 if rng.randrange(100) < math.trunc(x) else 0.0


@register_builtin_func("min", arity=2)
def min_(a: float, b: float) -> float:
    return a if a < b else b


@register_builtin_func("max", arity=2)
def max_(a: float, b: float) -> float:
    return a if a > b else b


@register_builtin_func("mod", arity=2)
def mod_(a: float, b: float) -> float:
    if b == 0.0:
        raise ZeroDivisionError("Divide by zero in mod")
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x == math.trunc(x) and math.trunc(x) % 2 == 1


def c_pow(a: float, b: float) -> float:
    """C's pow(): never raises, never returns a complex number."""
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0.0 and b < 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


@register_builtin_func("pow", arity=2)
def pow_(a: float, b: float) -> float:
    if math.isfinite(b) and b == math.trunc(b) and 0 < b <= config.POW_MULTIPLY_LIMIT:
        # repeated multiplication keeps full precision for small integer powers
        result = a
        for _ in range(int(b) - 1):
            result *= a
        return result
    return c_pow(a, b)


if config.ENABLE_ROLL:

    @register_builtin_func("roll", arity=2, uses_rng=True)
    def roll_(rng: random.Random, howmany: float, die: float) -> float:
        """Sum of ``howmany`` rolls of a ``die``-sided die."""
        if howmany > config.MAX_ROLL_COUNT:
            raise ValueError(f"Too many dice in roll (more than {config.MAX_ROLL_COUNT})")
        count = math.trunc(howmany) if math.isfinite(howmany) else 0
        return float(sum(_random_below(rng, die) + 1 for _ in range(count)))


@register_builtin_func("if", arity=3)
def if_(test: float, if_true: float, if_false: float) -> float:
    return if_true if test != 0.0 else if_false


BUILTIN_FUNCS: Mapping[int, Mapping[str, BuiltinFunc]] = MappingProxyType(
    {arity: MappingProxyType(table) for arity, table in _TABLES.items()}
)
