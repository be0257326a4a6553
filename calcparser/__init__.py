from calcparser import config
from calcparser.errors import CalcError, CalcRuntimeError, DivideByZeroError, ParserError, TokenizerError
from calcparser.runtime import (
    Evaluation,
    Session,
    default_session,
    evaluate,
    evaluate_result,
    get_parser_err,
    lookup_symbol,
    save_symbol,
)
from calcparser.symbols import SymbolTable

__version__ = config.VERSION

__all__ = [
    "__version__",
    "evaluate",
    "evaluate_result",
    "get_parser_err",
    "save_symbol",
    "lookup_symbol",
    "Session",
    "Evaluation",
    "SymbolTable",
    "default_session",
    "CalcError",
    "TokenizerError",
    "ParserError",
    "CalcRuntimeError",
    "DivideByZeroError",
]
