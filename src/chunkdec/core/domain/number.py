"""
ChunkDecimal — знаковое десятичное число произвольной точности

Immutable value-тип поверх Parts. Каждая операция возвращает новый объект.

Арифметика:
- add/subtract/multiply/divide с явными policy=/context= или операторы
  + - * / (текущий контекст читается в момент вызова)
- Операнды: ChunkDecimal, int, float (float → кратчайший repr → разбор строки)
- После каждой арифметической операции применяется политика аппроксимации

Округление: floor/ceil/round на произвольной десятичной позиции
(без политики аппроксимации).

Interop:
- int(x) — усечение к нулю, без ограничения разрядности
- to_int8/16/32/64 — ConversionOverflow вне диапазона (никакого wrap)
- float(x) — корректное округление, ConversionOverflow вне диапазона float
"""

import math
import sys
from typing import Any, Union

from chunkdec.core import context as ctx
from chunkdec.core.errors import ConversionOverflow, UnsupportedOperand
from chunkdec.core.formatting import Formatter, format_value, to_decimal, to_scientific
from chunkdec.core.math import arithmetic, digit_ops
from chunkdec.core.math.approximation import ApproximationPolicy, approximate
from chunkdec.core.math.partitions import (
    BASE,
    DIGIT,
    ZERO,
    Parts,
    mantissa,
    parse_decimal,
    parts_from_int,
)

Operand = Union["ChunkDecimal", int, float]

# Числовой хэш Python: значение по модулю простого sys.hash_info.modulus
_HASH_MODULUS = sys.hash_info.modulus
_HASH_INVERSE_10 = pow(10, _HASH_MODULUS - 2, _HASH_MODULUS)


class ChunkDecimal:
    """
    Десятичное число произвольной точности.

    Examples:
        >>> ChunkDecimal("123.450") == ChunkDecimal("123.45")
        True
        >>> str(ChunkDecimal("10") / ChunkDecimal("4"))
        '2.5'
    """

    __slots__ = ("_parts",)

    _parts: Parts

    def __init__(self, value: Operand | str = 0):
        object.__setattr__(self, "_parts", _to_parts(value))

    @classmethod
    def _from_parts(cls, parts: Parts) -> "ChunkDecimal":
        instance = cls.__new__(cls)
        object.__setattr__(instance, "_parts", parts)
        return instance

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def from_int(cls, value: int) -> "ChunkDecimal":
        return cls._from_parts(parts_from_int(value))

    @classmethod
    def from_string(cls, text: str) -> "ChunkDecimal":
        """
        Разбор [-]digits[.digits][e|E[-]digits].

        Raises:
            ParseError: Если строка не соответствует грамматике
        """
        return cls._from_parts(parse_decimal(text))

    @classmethod
    def from_float(cls, value: float) -> "ChunkDecimal":
        """
        Конверсия float через кратчайший repr (0.1 → "0.1").

        Raises:
            ParseError: Для NaN/Inf
        """
        return cls._from_parts(_parts_from_float(value))

    @classmethod
    def zero(cls) -> "ChunkDecimal":
        return cls._from_parts(ZERO)

    # =========================================================================
    # СВОЙСТВА ПРЕДСТАВЛЕНИЯ
    # =========================================================================

    @property
    def partitions(self) -> tuple[int, ...]:
        return self._parts.partitions

    @property
    def offset(self) -> int:
        return self._parts.offset

    @property
    def negative(self) -> bool:
        return self._parts.negative

    @property
    def sign(self) -> int:
        """-1, 0 или 1."""
        return self._parts.sign

    def is_zero(self) -> bool:
        return self._parts.sign == 0

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(
        self,
        other: Operand,
        *,
        policy: ApproximationPolicy | None = None,
        context: ctx.ArithmeticContext | None = None,
    ) -> "ChunkDecimal":
        result = arithmetic.add(self._parts, _coerce(other))
        return self._approximated(result, policy, context)

    def subtract(
        self,
        other: Operand,
        *,
        policy: ApproximationPolicy | None = None,
        context: ctx.ArithmeticContext | None = None,
    ) -> "ChunkDecimal":
        result = arithmetic.subtract(self._parts, _coerce(other))
        return self._approximated(result, policy, context)

    def multiply(
        self,
        other: Operand,
        *,
        policy: ApproximationPolicy | None = None,
        context: ctx.ArithmeticContext | None = None,
    ) -> "ChunkDecimal":
        result = arithmetic.multiply(self._parts, _coerce(other))
        return self._approximated(result, policy, context)

    def divide(
        self,
        other: Operand,
        *,
        policy: ApproximationPolicy | None = None,
        context: ctx.ArithmeticContext | None = None,
        precision: int | None = None,
    ) -> "ChunkDecimal":
        """
        Деление с ограничением точности.

        Args:
            other: Делитель
            policy: Политика аппроксимации (по умолчанию из контекста)
            context: Явный контекст (по умолчанию текущий)
            precision: Явная точность в десятичных разрядах (по умолчанию из контекста)

        Raises:
            DivisionByZero: Если делитель равен нулю
            InvalidConfiguration: Если precision не положительное
        """
        active = context or ctx.get_context()
        if precision is not None:
            active = active.replace(division_precision=precision)
        result = arithmetic.divide(self._parts, _coerce(other), active.division_precision)
        return self._approximated(result, policy, active)

    def increment(self) -> "ChunkDecimal":
        return self.add(1)

    def decrement(self) -> "ChunkDecimal":
        return self.subtract(1)

    def _approximated(
        self,
        parts: Parts,
        policy: ApproximationPolicy | None,
        context: ctx.ArithmeticContext | None,
    ) -> "ChunkDecimal":
        if policy is None:
            policy = (context or ctx.get_context()).approximation
        return self._from_parts(approximate(parts, policy))

    def __add__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return ChunkDecimal(other).add(self)

    def __sub__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return ChunkDecimal(other).subtract(self)

    def __mul__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return ChunkDecimal(other).multiply(self)

    def __truediv__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Any) -> "ChunkDecimal":
        if not _is_operand(other):
            return NotImplemented
        return ChunkDecimal(other).divide(self)

    def __neg__(self) -> "ChunkDecimal":
        return self._from_parts(self._parts.negated())

    def __pos__(self) -> "ChunkDecimal":
        return self

    def __abs__(self) -> "ChunkDecimal":
        return self._from_parts(self._parts.absolute())

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare(self, other: Operand) -> int:
        """
        Полный порядок: -1, 0 или 1.

        float-операнд сравнивается после конверсии через repr.
        """
        return arithmetic.compare(self._parts, _coerce(other))

    def _compare_exact(self, other: Any) -> int | None:
        if isinstance(other, ChunkDecimal):
            return arithmetic.compare(self._parts, other._parts)
        if isinstance(other, int) and not isinstance(other, bool):
            return arithmetic.compare(self._parts, parts_from_int(other))
        return None

    def __eq__(self, other: object) -> bool:
        order = self._compare_exact(other)
        if order is None:
            return NotImplemented
        return order == 0

    def __lt__(self, other: Any) -> bool:
        order = self._compare_exact(other)
        if order is None:
            return NotImplemented
        return order < 0

    def __le__(self, other: Any) -> bool:
        order = self._compare_exact(other)
        if order is None:
            return NotImplemented
        return order <= 0

    def __gt__(self, other: Any) -> bool:
        order = self._compare_exact(other)
        if order is None:
            return NotImplemented
        return order > 0

    def __ge__(self, other: Any) -> bool:
        order = self._compare_exact(other)
        if order is None:
            return NotImplemented
        return order >= 0

    def __hash__(self) -> int:
        # Совпадает с hash(int) и hash(Fraction) того же значения
        scale = self.offset * DIGIT
        if scale >= 0:
            scale_hash = pow(10, scale, _HASH_MODULUS)
        else:
            scale_hash = pow(_HASH_INVERSE_10, -scale, _HASH_MODULUS)
        result = mantissa(self._parts) * scale_hash % _HASH_MODULUS
        if self.negative:
            result = -result
        return -2 if result == -1 else result

    def __bool__(self) -> bool:
        return not self.is_zero()

    # =========================================================================
    # ОКРУГЛЕНИЕ
    # =========================================================================

    def floor(self, position: int = 0) -> "ChunkDecimal":
        """Округление к −∞, position — число сохраняемых дробных разрядов."""
        return self._from_parts(digit_ops.floor(self._parts, position))

    def ceil(self, position: int = 0) -> "ChunkDecimal":
        """Округление к +∞."""
        return self._from_parts(digit_ops.ceil(self._parts, position))

    def round(self, position: int = 0) -> "ChunkDecimal":
        """Округление half away from zero."""
        return self._from_parts(digit_ops.round_half_away(self._parts, position))

    def __floor__(self) -> int:
        return int(self.floor())

    def __ceil__(self) -> int:
        return int(self.ceil())

    def __round__(self, ndigits: int | None = None) -> "int | ChunkDecimal":
        if ndigits is None:
            return int(self.round())
        return self.round(ndigits)

    def __trunc__(self) -> int:
        return int(self)

    # =========================================================================
    # ТЕКСТ
    # =========================================================================

    def to_string(self, formatter: Formatter | None = None) -> str:
        if formatter is None:
            formatter = ctx.get_context().formatter
        return format_value(self._parts, formatter)

    def to_decimal_string(self) -> str:
        return to_decimal(self._parts)

    def to_scientific_string(self) -> str:
        return to_scientific(self._parts)

    def __str__(self) -> str:
        return self.to_string()

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.to_decimal_string(),))

    def __repr__(self) -> str:
        return (
            f"ChunkDecimal(negative={self.negative}, offset={self.offset}, "
            f"partitions={list(self.partitions)})"
        )

    # =========================================================================
    # INTEROP
    # =========================================================================

    def to_int(self) -> int:
        """Целая часть (усечение к нулю), без ограничения разрядности."""
        parts = self._parts
        result = 0
        for index in range(parts.upper - 1, -1, -1):
            result = result * BASE + parts.at(index)
        return -result if parts.negative else result

    def __int__(self) -> int:
        return self.to_int()

    def _to_fixed_width(self, bits: int) -> int:
        value = self.to_int()
        limit = 1 << (bits - 1)
        if not -limit <= value < limit:
            raise ConversionOverflow(
                f"Value {self.to_decimal_string()} out of int{bits} range "
                f"[{-limit}, {limit - 1}]"
            )
        return value

    def to_int8(self) -> int:
        return self._to_fixed_width(8)

    def to_int16(self) -> int:
        return self._to_fixed_width(16)

    def to_int32(self) -> int:
        return self._to_fixed_width(32)

    def to_int64(self) -> int:
        return self._to_fixed_width(64)

    def to_float(self) -> float:
        """
        Ближайший float (корректное округление).

        Raises:
            ConversionOverflow: Если модуль превышает диапазон float
        """
        if self.is_zero():
            return 0.0
        text = f"{'-' if self.negative else ''}{mantissa(self._parts)}e{self.offset * DIGIT}"
        result = float(text)
        if math.isinf(result):
            raise ConversionOverflow(f"Value {self.to_scientific_string()} out of float range")
        return result

    def __float__(self) -> float:
        return self.to_float()


# =============================================================================
# КОНВЕРСИЯ ОПЕРАНДОВ
# =============================================================================


def _is_operand(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (ChunkDecimal, int, float))


def _parts_from_float(value: float) -> Parts:
    # repr даёт кратчайшую строку, однозначно восстанавливающую float;
    # экспонента вида "e+16" приводится к грамматике "e16"
    return parse_decimal(repr(value).replace("e+", "e"))


def _coerce(value: Any) -> Parts:
    """
    Приведение операнда арифметики к Parts.

    Raises:
        UnsupportedOperand: Для типов вне {ChunkDecimal, int, float}
    """
    if isinstance(value, ChunkDecimal):
        return value._parts
    if not _is_operand(value):
        raise UnsupportedOperand(value)
    if isinstance(value, int):
        return parts_from_int(value)
    return _parts_from_float(value)


def _to_parts(value: Any) -> Parts:
    if isinstance(value, str):
        return parse_decimal(value)
    return _coerce(value)
