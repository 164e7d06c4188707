"""
Formatting — текстовое представление значений

Закрытый набор форматов (FormatKind), диспетчеризуемый чистой функцией
format_value():

- DECIMAL:            [-]INT.FRAC (INT и FRAC никогда не пустые)
- SCIENTIFIC:         [-]D.DDDDeEXP (ровно одна цифра до точки)
- DEFAULT:            DECIMAL, если степень старшей цифры < 6, иначе SCIENTIFIC
- ROUNDED_DECIMAL:    округление до n дробных разрядов + дополнение нулями до n
- ROUNDED_SCIENTIFIC: округление до n цифр после старшей + дополнение нулями до n

Ноль в нерасширенных форматах всегда "0.0".
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final

from chunkdec.core.errors import InvalidConfiguration
from chunkdec.core.math.digit_ops import round_half_away
from chunkdec.core.math.partitions import DIGIT, Parts, digit_string, leading_exponent

# Порог DEFAULT: степень старшей цифры, начиная с которой выбирается SCIENTIFIC
SCIENTIFIC_THRESHOLD: Final[int] = 6

ZERO_TEXT: Final[str] = "0.0"


class FormatKind(str, Enum):
    """Вид текстового формата."""

    DEFAULT = "DEFAULT"
    DECIMAL = "DECIMAL"
    SCIENTIFIC = "SCIENTIFIC"
    ROUNDED_DECIMAL = "ROUNDED_DECIMAL"
    ROUNDED_SCIENTIFIC = "ROUNDED_SCIENTIFIC"


_ROUNDED_KINDS: Final[frozenset[FormatKind]] = frozenset(
    {FormatKind.ROUNDED_DECIMAL, FormatKind.ROUNDED_SCIENTIFIC}
)


@dataclass(frozen=True)
class Formatter:
    """
    Формат вывода.

    digits задаётся только для ROUNDED_* (количество дробных разрядов
    или разрядов мантиссы после точки).
    """

    kind: FormatKind = FormatKind.DEFAULT
    digits: int | None = None

    DEFAULT: ClassVar["Formatter"]
    DECIMAL: ClassVar["Formatter"]
    SCIENTIFIC: ClassVar["Formatter"]

    def __post_init__(self) -> None:
        if self.kind in _ROUNDED_KINDS:
            if self.digits is None or self.digits < 0:
                raise InvalidConfiguration(
                    f"{self.kind.value} requires non-negative digits, got {self.digits}"
                )
        elif self.digits is not None:
            raise InvalidConfiguration(
                f"{self.kind.value} does not take digits, got {self.digits}"
            )

    @classmethod
    def rounded_decimal(cls, digits: int) -> "Formatter":
        return cls(FormatKind.ROUNDED_DECIMAL, digits)

    @classmethod
    def rounded_scientific(cls, digits: int) -> "Formatter":
        return cls(FormatKind.ROUNDED_SCIENTIFIC, digits)


Formatter.DEFAULT = Formatter(FormatKind.DEFAULT)
Formatter.DECIMAL = Formatter(FormatKind.DECIMAL)
Formatter.SCIENTIFIC = Formatter(FormatKind.SCIENTIFIC)

DECIMAL_ROUNDED_TO_1: Final[Formatter] = Formatter.rounded_decimal(1)
DECIMAL_ROUNDED_TO_2: Final[Formatter] = Formatter.rounded_decimal(2)
DECIMAL_ROUNDED_TO_3: Final[Formatter] = Formatter.rounded_decimal(3)

SCIENTIFIC_ROUNDED_TO_1: Final[Formatter] = Formatter.rounded_scientific(1)
SCIENTIFIC_ROUNDED_TO_2: Final[Formatter] = Formatter.rounded_scientific(2)
SCIENTIFIC_ROUNDED_TO_3: Final[Formatter] = Formatter.rounded_scientific(3)


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def _sign_prefix(value: Parts) -> str:
    return "-" if value.negative else ""


def to_decimal(value: Parts) -> str:
    """
    Десятичная запись.

    Обход partitions от вершины целой части до низа дробной, каждая
    дополняется нулями до 6 разрядов; затем ведущие нули целой и хвостовые
    нули дробной части срезаются.

    Examples:
        >>> to_decimal(parse_decimal("-123.450"))
        '-123.45'
        >>> to_decimal(parse_decimal("1e7"))
        '10000000.0'
    """
    if value.sign == 0:
        return ZERO_TEXT

    low = min(value.offset, 0)
    high = max(value.upper, 0)

    int_part = "".join(
        f"{value.at(index):0{DIGIT}d}" for index in range(high - 1, -1, -1)
    ).lstrip("0") or "0"
    fraction_part = "".join(
        f"{value.at(index):0{DIGIT}d}" for index in range(-1, low - 1, -1)
    ).rstrip("0") or "0"

    return f"{_sign_prefix(value)}{int_part}.{fraction_part}"


def to_scientific(value: Parts) -> str:
    """
    Научная запись D.DDDDeEXP.

    Examples:
        >>> to_scientific(parse_decimal("123.45"))
        '1.2345e2'
        >>> to_scientific(parse_decimal("-0.001"))
        '-1.0e-3'
    """
    if value.sign == 0:
        return ZERO_TEXT

    digits = digit_string(value).strip("0")
    return (
        f"{_sign_prefix(value)}{digits[0]}.{digits[1:] or '0'}"
        f"e{leading_exponent(value)}"
    )


def to_default(value: Parts) -> str:
    if value.sign == 0:
        return ZERO_TEXT
    if leading_exponent(value) < SCIENTIFIC_THRESHOLD:
        return to_decimal(value)
    return to_scientific(value)


def _pad_fraction(text: str, digits: int) -> str:
    """Дополнение дробной части нулями до digits разрядов (минимум 1)."""
    fraction = text.partition(".")[2]
    return text + "0" * (max(digits, 1) - len(fraction))


def to_rounded_decimal(value: Parts, digits: int) -> str:
    """
    Округление до digits дробных разрядов + фиксированная ширина дробной части.

    Examples:
        >>> to_rounded_decimal(parse_decimal("3.14159"), 3)
        '3.142'
        >>> to_rounded_decimal(parse_decimal("2"), 2)
        '2.00'
    """
    return _pad_fraction(to_decimal(round_half_away(value, digits)), digits)


def to_rounded_scientific(value: Parts, digits: int) -> str:
    """
    Округление мантиссы до digits разрядов после точки.

    Examples:
        >>> to_rounded_scientific(parse_decimal("123456"), 2)
        '1.23e5'
        >>> to_rounded_scientific(parse_decimal("9.96"), 1)
        '1.0e1'
    """
    if value.sign == 0:
        return f"0.{'0' * max(digits, 1)}e0"

    rounded = round_half_away(value, digits - leading_exponent(value))
    mantissa_text, _, exponent_text = to_scientific(rounded).partition("e")
    return f"{_pad_fraction(mantissa_text, digits)}e{exponent_text}"


def format_value(value: Parts, formatter: Formatter) -> str:
    """Диспетчеризация по виду формата."""
    kind = formatter.kind
    if kind is FormatKind.DECIMAL:
        return to_decimal(value)
    if kind is FormatKind.SCIENTIFIC:
        return to_scientific(value)
    if kind is FormatKind.ROUNDED_DECIMAL:
        return to_rounded_decimal(value, formatter.digits or 0)
    if kind is FormatKind.ROUNDED_SCIENTIFIC:
        return to_rounded_scientific(value, formatter.digits or 0)
    return to_default(value)
