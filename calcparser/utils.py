import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(value: float) -> str:
    """Formats a result the way C's %.16g would."""
    return f"{value:.16g}"
