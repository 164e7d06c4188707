"""
Core math modules для chunkdec

Движок partitions: представление, арифметика, округление, аппроксимация.
"""

# Partitions (представление и построение)
from chunkdec.core.math.partitions import (
    BASE,
    DIGIT,
    DIV_PRECISION_DEFAULT,
    ZERO,
    Parts,
    build,
    digit_at,
    leading_exponent,
    parse_decimal,
    parts_from_int,
    trim,
)

# Arithmetic
from chunkdec.core.math.arithmetic import (
    add,
    compare,
    compare_magnitude,
    divide,
    multiply,
    subtract,
)

# Digit operations
from chunkdec.core.math.digit_ops import (
    ceil,
    floor,
    round_half_away,
)

# Approximation
from chunkdec.core.math.approximation import (
    APPROXIMATION_DEFAULT,
    ApproximationPolicy,
    approximate,
)

__all__ = [
    # Partitions — Constants
    "BASE",
    "DIGIT",
    "DIV_PRECISION_DEFAULT",
    "ZERO",
    # Partitions — Types
    "Parts",
    # Partitions — Functions
    "build",
    "digit_at",
    "leading_exponent",
    "parse_decimal",
    "parts_from_int",
    "trim",
    # Arithmetic
    "add",
    "compare",
    "compare_magnitude",
    "divide",
    "multiply",
    "subtract",
    # Digit operations
    "ceil",
    "floor",
    "round_half_away",
    # Approximation
    "APPROXIMATION_DEFAULT",
    "ApproximationPolicy",
    "approximate",
]
