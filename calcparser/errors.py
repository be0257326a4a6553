from dataclasses import dataclass
from typing import ClassVar

from calcparser import config


@dataclass
class CalcError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    label: ClassVar[str] = "Error"

    @property
    def message(self) -> str:
        return config.ERROR_PREFIX + self.errmsg

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[{self.label}] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class TokenizerError(CalcError):
    label = "Tokenizer error"


class ParserError(CalcError):
    label = "Parser error"


class CalcRuntimeError(CalcError):
    label = "Runtime error"


class DivideByZeroError(CalcRuntimeError):
    pass
