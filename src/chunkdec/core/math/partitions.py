"""
Partitions — представление числа группами по 6 десятичных разрядов

Число хранится как знак + последовательность partitions (little-endian,
индекс 0 — младшая группа) + offset (абсолютный индекс младшей группы):

    magnitude = Σ partitions[i] · BASE^(offset + i),  BASE = 1_000_000

Модуль содержит:
- Константы представления (BASE, DIGIT)
- Нормализацию (trim) к единственному каноническому виду
- Построение из int и из десятичной/научной строки

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нет ведущих и хвостовых нулевых partitions
2. Каждая partition лежит в [0, BASE)
3. Ноль — это partitions=(), offset=0, negative=False
"""

import re
from typing import Final, NamedTuple, Sequence

from chunkdec.core.errors import ParseError

# =============================================================================
# КОНСТАНТЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Основание одной partition (6 десятичных разрядов)
BASE: Final[int] = 1_000_000

# Количество десятичных разрядов в partition
DIGIT: Final[int] = 6

# Точность деления по умолчанию (десятичных разрядов частного)
DIV_PRECISION_DEFAULT: Final[int] = 100

# Грамматика: [-]digits[.digits][e|E[-]digits]
NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(-)?(\d+)(\.\d+)?(?:[eE](-?\d+))?"
)


# =============================================================================
# ПРЕДСТАВЛЕНИЕ
# =============================================================================


class Parts(NamedTuple):
    """
    Сырое представление числа.

    Всегда строится через build(), кроме случаев, когда инварианты
    гарантированы вызывающим кодом.
    """

    partitions: tuple[int, ...]
    offset: int
    negative: bool

    @property
    def upper(self) -> int:
        """Абсолютный индекс, следующий за старшей partition."""
        return self.offset + len(self.partitions)

    @property
    def sign(self) -> int:
        if not self.partitions:
            return 0
        return -1 if self.negative else 1

    def at(self, index: int) -> int:
        """Partition по абсолютному индексу; 0 вне хранимого диапазона."""
        local = index - self.offset
        if 0 <= local < len(self.partitions):
            return self.partitions[local]
        return 0

    def negated(self) -> "Parts":
        if not self.partitions:
            return self
        return self._replace(negative=not self.negative)

    def absolute(self) -> "Parts":
        return self._replace(negative=False)

    def shifted(self, count: int) -> "Parts":
        """Умножение на BASE^count (сдвиг offset)."""
        if not self.partitions:
            return self
        return self._replace(offset=self.offset + count)


ZERO: Final[Parts] = Parts((), 0, False)


def trim(partitions: Sequence[int], offset: int) -> tuple[tuple[int, ...], int]:
    """
    Удаление младших и старших нулевых partitions.

    Args:
        partitions: Группы (little-endian)
        offset: Абсолютный индекс partitions[0]

    Returns:
        (partitions, offset) в каноническом виде; для нуля — ((), 0)

    Examples:
        >>> trim([0, 0, 5, 7, 0], 1)
        ((5, 7), 3)
        >>> trim([0, 0], -4)
        ((), 0)
    """
    low = 0
    size = len(partitions)
    while low < size and partitions[low] == 0:
        low += 1
    if low == size:
        return (), 0

    high = size
    while partitions[high - 1] == 0:
        high -= 1

    return tuple(partitions[low:high]), offset + low


def build(partitions: Sequence[int], offset: int, negative: bool) -> Parts:
    """Каноническое представление из произвольных (нетримленных) групп."""
    trimmed, trimmed_offset = trim(partitions, offset)
    return Parts(trimmed, trimmed_offset, negative and bool(trimmed))


# =============================================================================
# ПОСТРОЕНИЕ
# =============================================================================


def parts_from_int(value: int) -> Parts:
    """
    Построение из целого: повторное деление модуля на BASE.

    Examples:
        >>> parts_from_int(-1_000_000)
        Parts(partitions=(1,), offset=1, negative=True)
    """
    magnitude = abs(value)
    partitions: list[int] = []
    while magnitude:
        magnitude, remainder = divmod(magnitude, BASE)
        partitions.append(remainder)
    return build(partitions, 0, value < 0)


def parse_decimal(text: str) -> Parts:
    """
    Разбор десятичной или научной записи.

    Алгоритм:
        1. digits = целая часть + дробная часть (без точки)
        2. exponent = явная экспонента − длина дробной части
        3. Дополнение нулями справа, пока exponent не кратен DIGIT
        4. Дополнение нулями слева до длины, кратной DIGIT
        5. Разбиение на группы по DIGIT, разворот в little-endian

    Args:
        text: Строка вида [-]digits[.digits][e|E[-]digits]

    Returns:
        Каноническое представление

    Raises:
        ParseError: Если строка не соответствует грамматике

    Examples:
        >>> parse_decimal("123.45")
        Parts(partitions=(450000, 123), offset=-1, negative=False)
        >>> parse_decimal("-0")
        Parts(partitions=(), offset=0, negative=False)
    """
    match = NUMBER_PATTERN.fullmatch(text)
    if match is None:
        raise ParseError(text)

    sign, int_digits, fraction, exponent_text = match.groups()
    fraction_digits = fraction[1:] if fraction else ""

    exponent = int(exponent_text or 0) - len(fraction_digits)
    pad_right = exponent % DIGIT
    digits = int_digits + fraction_digits + "0" * pad_right
    digits = "0" * (-len(digits) % DIGIT) + digits

    groups = [int(digits[i:i + DIGIT]) for i in range(0, len(digits), DIGIT)]
    groups.reverse()

    return build(groups, (exponent - pad_right) // DIGIT, sign == "-")


# =============================================================================
# ЦИФРЫ И МАНТИССА
# =============================================================================


def digit_at(value: Parts, exponent: int) -> int:
    """Десятичная цифра при 10^exponent (модуль значения)."""
    rem = exponent % DIGIT
    index = (exponent - rem) // DIGIT
    return value.at(index) // 10 ** rem % 10


def leading_exponent(value: Parts) -> int:
    """
    Десятичная степень старшей ненулевой цифры.

    Для нуля не определена (вызывающий код проверяет sign заранее).
    """
    return (value.upper - 1) * DIGIT + len(str(value.partitions[-1])) - 1


def mantissa(value: Parts) -> int:
    """Целая мантисса модуля: magnitude = mantissa · BASE^offset."""
    result = 0
    for partition in reversed(value.partitions):
        result = result * BASE + partition
    return result


def digit_string(value: Parts) -> str:
    """Все хранимые partitions одной строкой, от старшей к младшей."""
    return "".join(f"{partition:0{DIGIT}d}" for partition in reversed(value.partitions))
