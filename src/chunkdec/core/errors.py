"""
Errors — иерархия исключений chunkdec

Все ошибки наследуют ChunkDecimalError и одновременно соответствующее
встроенное исключение Python, чтобы вызывающий код мог ловить их
привычным способом (ValueError, ZeroDivisionError, TypeError, OverflowError).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна операция не возвращает частичный результат при ошибке
2. Ошибки не перехватываются внутри движка и не ретраятся
"""


class ChunkDecimalError(Exception):
    """Базовое исключение для всех ошибок chunkdec."""


class ParseError(ChunkDecimalError, ValueError):
    """
    Строка не соответствует грамматике числа.

    Грамматика: (-)?(\\d+)(\\.\\d+)?([eE](-)?\\d+)?
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid number string: {text!r}")


class DivisionByZero(ChunkDecimalError, ZeroDivisionError):
    """Делитель имеет нулевую величину."""


class InvalidConfiguration(ChunkDecimalError, ValueError):
    """Невалидная конфигурация (например, неположительная точность деления)."""


class UnsupportedOperand(ChunkDecimalError, TypeError):
    """Операнд арифметики имеет неподдерживаемый тип."""

    def __init__(self, operand: object):
        self.operand = operand
        super().__init__(
            f"Unsupported operand type: {type(operand).__name__} "
            f"(expected ChunkDecimal, int or float)"
        )


class ConversionOverflow(ChunkDecimalError, OverflowError):
    """Значение не помещается в целевой нативный тип (int8..int64, float)."""
