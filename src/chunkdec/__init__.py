"""
chunkdec — arbitrary-precision signed decimal numbers

Число хранится группами по 6 десятичных разрядов (partitions); арифметика
точна для целых и управляется точностью деления и политикой аппроксимации
для дробных значений.

Examples:
    >>> from chunkdec import ChunkDecimal
    >>> ChunkDecimal("123.456") + ChunkDecimal("0.544") == 124
    True
"""

from chunkdec.core.context import (
    DEFAULT_CONTEXT,
    ArithmeticContext,
    get_context,
    local_context,
    reset_context,
    set_context,
    set_default_approximation,
    set_default_formatter,
    set_division_precision,
)
from chunkdec.core.domain import ChunkDecimal
from chunkdec.core.errors import (
    ChunkDecimalError,
    ConversionOverflow,
    DivisionByZero,
    InvalidConfiguration,
    ParseError,
    UnsupportedOperand,
)
from chunkdec.core.formatting import (
    DECIMAL_ROUNDED_TO_1,
    DECIMAL_ROUNDED_TO_2,
    DECIMAL_ROUNDED_TO_3,
    SCIENTIFIC_ROUNDED_TO_1,
    SCIENTIFIC_ROUNDED_TO_2,
    SCIENTIFIC_ROUNDED_TO_3,
    FormatKind,
    Formatter,
)
from chunkdec.core.math import ApproximationPolicy

__version__ = "1.0.0"

__all__ = [
    # Value type
    "ChunkDecimal",
    # Configuration
    "ArithmeticContext",
    "DEFAULT_CONTEXT",
    "get_context",
    "local_context",
    "reset_context",
    "set_context",
    "set_default_approximation",
    "set_default_formatter",
    "set_division_precision",
    # Policies
    "ApproximationPolicy",
    "FormatKind",
    "Formatter",
    "DECIMAL_ROUNDED_TO_1",
    "DECIMAL_ROUNDED_TO_2",
    "DECIMAL_ROUNDED_TO_3",
    "SCIENTIFIC_ROUNDED_TO_1",
    "SCIENTIFIC_ROUNDED_TO_2",
    "SCIENTIFIC_ROUNDED_TO_3",
    # Errors
    "ChunkDecimalError",
    "ConversionOverflow",
    "DivisionByZero",
    "InvalidConfiguration",
    "ParseError",
    "UnsupportedOperand",
]
