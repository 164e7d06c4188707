"""
Arithmetic — сравнение и четыре действия над partitions

Все функции работают с каноническим представлением Parts и возвращают
новое каноническое Parts. Политика аппроксимации здесь НЕ применяется:
это делает value-тип ChunkDecimal.

Алгоритмы:
- compare: поразрядное сравнение от старшей partition вниз
- add/subtract: выровненное сложение с переносом / вычитание с заёмом
  (больший по модулю операнд всегда уменьшаемое — без отрицательных partitions)
- multiply: школьная свёртка с немедленным распространением переноса
- divide: деление столбиком с оценкой частного по 2 старшим partitions
  делителя и последующей нормализацией уже найденных partitions частного

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда нормализован через build()
2. Деление на ноль → DivisionByZero до начала вычислений
3. Число значащих разрядов частного ограничено precision
"""

import logging

from chunkdec.core.errors import DivisionByZero
from chunkdec.core.math.partitions import (
    BASE,
    DIGIT,
    DIV_PRECISION_DEFAULT,
    ZERO,
    Parts,
    build,
    parts_from_int,
)

logger = logging.getLogger(__name__)


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare_magnitude(a: Parts, b: Parts) -> int:
    """
    Сравнение модулей.

    Returns:
        -1 если |a| < |b|, 0 если равны, +1 если |a| > |b|
    """
    low = min(a.offset, b.offset)
    high = max(a.upper, b.upper)

    for index in range(high - 1, low - 1, -1):
        left = a.at(index)
        right = b.at(index)
        if left != right:
            return 1 if left > right else -1
    return 0


def compare(a: Parts, b: Parts) -> int:
    """
    Полный порядок над значениями.

    Знаки различаются → порядок по знаку (−1 < 0 < +1).
    Знаки совпадают → порядок по модулю, инвертированный для отрицательных.

    Examples:
        >>> compare(parse_decimal("-5"), parse_decimal("3"))
        -1
        >>> compare(parse_decimal("-5"), parse_decimal("-3"))
        -1
    """
    if a.sign != b.sign:
        return -1 if a.sign < b.sign else 1
    if a.sign == 0:
        return 0

    order = compare_magnitude(a, b)
    return -order if a.negative else order


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add(a: Parts, b: Parts) -> Parts:
    """
    Сложение.

    Разные знаки перенаправляются в subtract(a, -b).
    """
    if a.sign == 0:
        return b
    if b.sign == 0:
        return a
    if a.negative != b.negative:
        return subtract(a, b.negated())

    low = min(a.offset, b.offset)
    high = max(a.upper, b.upper)

    result: list[int] = []
    carry = 0
    for index in range(low, high):
        carry, partition = divmod(a.at(index) + b.at(index) + carry, BASE)
        result.append(partition)
    if carry:
        result.append(carry)

    return build(result, low, a.negative)


def subtract(a: Parts, b: Parts) -> Parts:
    """
    Вычитание.

    Разные знаки перенаправляются в add(a, -b). Для одинаковых знаков
    уменьшаемым всегда выбирается больший по модулю операнд, поэтому
    промежуточные partitions никогда не отрицательны.
    """
    if b.sign == 0:
        return a
    if a.sign == 0:
        return b.negated()
    if a.negative != b.negative:
        return add(a, b.negated())

    order = compare_magnitude(a, b)
    if order == 0:
        return ZERO
    minuend, subtrahend = (a, b) if order > 0 else (b, a)

    low = min(a.offset, b.offset)
    high = max(a.upper, b.upper)

    result: list[int] = []
    borrow = 0
    for index in range(low, high):
        diff = minuend.at(index) - subtrahend.at(index) - borrow
        if diff < 0:
            diff += BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)

    # |a| > |b| → знак a; иначе знак противоположен знаку a
    negative = a.negative if order > 0 else not a.negative
    return build(result, low, negative)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def multiply(a: Parts, b: Parts) -> Parts:
    """
    Умножение свёрткой partitions.

    Каждое произведение partitions[i] · partitions[j] накапливается в ячейку
    i + j, перенос немедленно распространяется в старшие ячейки.
    Длина результата не превышает len(a) + len(b).
    """
    if a.sign == 0 or b.sign == 0:
        return ZERO

    cells = [0] * (len(a.partitions) + len(b.partitions))
    for i, left in enumerate(a.partitions):
        for j, right in enumerate(b.partitions):
            index = i + j
            carry = left * right
            while carry:
                carry, cells[index] = divmod(cells[index] + carry, BASE)
                index += 1

    return build(cells, a.offset + b.offset, a.negative != b.negative)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def _normalize_quotient(quotient: list[int]) -> None:
    """
    Перенос/заём по уже найденным partitions частного (от старшей к младшей).

    Оценка очередной partition может выйти за [0, BASE) или быть
    отрицательной (после переоценки на предыдущем шаге); излишек
    переносится в более старшие partitions.
    """
    for index in range(len(quotient) - 1, 0, -1):
        if 0 <= quotient[index] < BASE:
            break
        carry, quotient[index] = divmod(quotient[index], BASE)
        quotient[index - 1] += carry

    while quotient[0] >= BASE:
        carry, quotient[0] = divmod(quotient[0], BASE)
        quotient.insert(0, carry)


def _significant_digits(quotient: list[int]) -> int:
    """Десятичные разряды частного, начиная со старшей ненулевой partition."""
    for index, partition in enumerate(quotient):
        if partition:
            return (len(quotient) - index) * DIGIT
    return 0


def divide(a: Parts, b: Parts, precision: int = DIV_PRECISION_DEFAULT) -> Parts:
    """
    Деление столбиком с ограничением точности.

    Алгоритм:
        1. div_head = top · BASE + second — оценка делителя по 2 старшим partitions
        2. На каждом шаге окно из 3 partitions остатка (со знаком остатка)
           делится на div_head → оценка очередной partition частного
        3. Нормализация частного переносами/заёмами
        4. remainder -= divisor · q · BASE^k
        5. Стоп: остаток равен нулю или найдено precision значащих разрядов
           (ведущие нулевые шаги оценки не считаются)
        6. Коррекция последней partition до усечения: остаток в [0, divisor · BASE^k)

    Args:
        a: Делимое
        b: Делитель
        precision: Максимум десятичных разрядов частного (ceil(precision / 6) partitions)

    Returns:
        Частное, усечённое к нулю на последней найденной partition
        (|q · b| <= |a|), без политики аппроксимации

    Raises:
        DivisionByZero: Если |b| == 0
    """
    if b.sign == 0:
        raise DivisionByZero("Division by zero")
    if a.sign == 0:
        return ZERO

    divisor = b.absolute()
    remainder = a.absolute()

    divisor_upper = divisor.upper
    top = divisor.partitions[-1]
    second = divisor.partitions[-2] if len(divisor.partitions) > 1 else 0
    div_head = top * BASE + second

    position = remainder.upper - divisor_upper + 1
    quotient: list[int] = []

    while remainder.sign != 0 and _significant_digits(quotient) < precision:
        position -= 1
        head = position + divisor_upper

        # Окно head+1..head-1; после недооценки при делителе вида 999999_999999...
        # остаток может занять ещё одну partition сверху, она тоже входит в окно
        window = 0
        for index in range(max(remainder.upper - 1, head + 1), head - 2, -1):
            window = window * BASE + remainder.at(index)
        estimate = window // div_head
        if remainder.negative:
            estimate = -estimate

        quotient.append(estimate)
        _normalize_quotient(quotient)

        if estimate:
            step = multiply(divisor, parts_from_int(estimate).shifted(position + 1))
            remainder = subtract(remainder, step)

    if remainder.sign != 0:
        # Оценка последней partition могла уйти на единицы вверх или вниз:
        # доводим частное до усечения, 0 <= remainder < divisor · BASE^(position+1)
        step = divisor.shifted(position + 1)
        while remainder.negative:
            quotient[-1] -= 1
            remainder = add(remainder, step)
        while compare_magnitude(remainder, step) >= 0:
            quotient[-1] += 1
            remainder = subtract(remainder, step)
        _normalize_quotient(quotient)

        logger.debug(
            "Division truncated at %d digits (%d significant digits computed)",
            precision,
            _significant_digits(quotient),
        )

    quotient.reverse()
    return build(quotient, position + 1, a.negative != b.negative)
