"""
Digit Operations — floor / ceil / round на произвольной десятичной позиции

Позиция (position):
    0  — разряд единиц
    >0 — дробные разряды (position=2 оставляет сотые)
    <0 — старшие целые разряды (position=-3 оставляет тысячи)

Все три операции режут partition, содержащую позицию, маской 10^k,
склеивают её со старшими partitions и заново нормализуют.

Семантика:
- floor: к −∞ (для отрицательных с ненулевым остатком модуль +1 единица)
- ceil:  к +∞, ceil(x) = −floor(−x)
- round: half away from zero (следующая цифра ≥ 5 → модуль +1 единица)
"""

from chunkdec.core.math.arithmetic import add
from chunkdec.core.math.partitions import DIGIT, Parts, build, digit_at


def _splice(value: Parts, exponent: int) -> tuple[Parts, Parts]:
    """
    Усечение модуля до разрядов 10^exponent и старше.

    Returns:
        (truncated, unit) — усечённое значение (знак сохранён) и единица
        в позиции 10^exponent того же знака
    """
    rem = exponent % DIGIT
    index = (exponent - rem) // DIGIT
    mask = 10 ** rem

    sliced = value.at(index)
    head = sliced // mask * mask

    start = min(max(index + 1 - value.offset, 0), len(value.partitions))
    upper = (head,) + value.partitions[start:]

    truncated = build(upper, value.upper - len(upper), value.negative)
    unit = Parts((mask,), index, value.negative)
    return truncated, unit


def floor(value: Parts, position: int = 0) -> Parts:
    """
    Округление к −∞ с сохранением position дробных разрядов.

    Examples:
        >>> floor(parse_decimal("-5.5"), 0)
        Parts(partitions=(6,), offset=0, negative=True)
        >>> floor(parse_decimal("5.59"), 1)
        Parts(partitions=(500000, 5), offset=-1, negative=False)
    """
    truncated, unit = _splice(value, -position)
    if not value.negative or truncated == value:
        return truncated
    return add(truncated, unit)


def ceil(value: Parts, position: int = 0) -> Parts:
    """Округление к +∞: ceil(x, p) = −floor(−x, p)."""
    return floor(value.negated(), position).negated()


def round_half_away(value: Parts, position: int = 0) -> Parts:
    """
    Округление half away from zero.

    Знак сохраняется, модуль растёт при следующей цифре ≥ 5:
    2.5 → 3, −2.5 → −3.
    """
    exponent = -position
    truncated, unit = _splice(value, exponent)
    if digit_at(value, exponent - 1) < 5:
        return truncated
    return add(truncated, unit)
