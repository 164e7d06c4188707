"""
Approximation — политика подавления хвостового «шума» после арифметики

Деление усекается по точности, а float → текст даёт хвосты вида
0.1000000000000000055511. Политика ROUND_IN_k_PARTITIONS схлопывает такие
хвосты:

- k подряд нулевых partitions → отбросить их и всё, что младше
- k подряд partitions, равных BASE − 1 (999999) → отбросить их и всё,
  что младше, и прибавить единицу в позиции сразу над серией

Серия ищется только среди дробных partitions (ниже разряда единиц), от
старшей к младшей; срабатывает первая (самая старшая) найденная серия.
Целые partitions не трогаются: сумма, разность и произведение целых
всегда точны.

Применяется после add/subtract/multiply/divide, но не после floor/ceil/round.
"""

import logging
from enum import Enum
from typing import Final

from chunkdec.core.math.arithmetic import add
from chunkdec.core.math.partitions import BASE, Parts, build

logger = logging.getLogger(__name__)


class ApproximationPolicy(str, Enum):
    """Политика аппроксимации результата арифметики."""

    NONE = "NONE"
    ROUND_IN_1_PARTITION = "ROUND_IN_1_PARTITION"
    ROUND_IN_2_PARTITIONS = "ROUND_IN_2_PARTITIONS"
    ROUND_IN_3_PARTITIONS = "ROUND_IN_3_PARTITIONS"

    @property
    def run_length(self) -> int:
        """Длина серии нулей/девяток, на которой срабатывает политика (0 — никогда)."""
        return _RUN_LENGTH[self]


_RUN_LENGTH: Final[dict[ApproximationPolicy, int]] = {
    ApproximationPolicy.NONE: 0,
    ApproximationPolicy.ROUND_IN_1_PARTITION: 1,
    ApproximationPolicy.ROUND_IN_2_PARTITIONS: 2,
    ApproximationPolicy.ROUND_IN_3_PARTITIONS: 3,
}

APPROXIMATION_DEFAULT: Final[ApproximationPolicy] = ApproximationPolicy.ROUND_IN_2_PARTITIONS


def approximate(value: Parts, policy: ApproximationPolicy) -> Parts:
    """
    Применение политики аппроксимации.

    Args:
        value: Каноническое значение
        policy: Политика

    Returns:
        Значение после схлопывания первой найденной серии (или value без изменений)

    Examples:
        >>> approximate(parse_decimal("1.000000000000000001"), ApproximationPolicy.ROUND_IN_2_PARTITIONS)
        Parts(partitions=(1,), offset=0, negative=False)
        >>> approximate(parse_decimal("2.999999999999999999"), ApproximationPolicy.ROUND_IN_2_PARTITIONS)
        Parts(partitions=(3,), offset=0, negative=False)
    """
    run = policy.run_length
    if run == 0 or value.sign == 0:
        return value

    partitions = value.partitions
    # Старшая дробная partition: абсолютный индекс -1
    top = min(len(partitions), -value.offset) - 1
    zeros = 0
    nines = 0
    for index in range(top, -1, -1):
        partition = partitions[index]
        zeros = zeros + 1 if partition == 0 else 0
        nines = nines + 1 if partition == BASE - 1 else 0

        if zeros < run and nines < run:
            continue

        keep_from = index + run
        kept = build(partitions[keep_from:], value.offset + keep_from, value.negative)

        if zeros >= run:
            logger.debug("Approximation dropped %d low partitions (zero run)", keep_from)
            return kept

        logger.debug("Approximation dropped %d low partitions (nines run)", keep_from)
        unit = Parts((1,), value.offset + keep_from, value.negative)
        return add(kept, unit)

    return value
