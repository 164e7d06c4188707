"""
Тесты для Arithmetic — сравнение и четыре действия над partitions

Проверяет:
1. compare: порядок по знаку и по модулю, отсутствующие partitions = 0
2. add/subtract: перенос, заём, перенаправление по знакам
3. multiply: свёртка с переносом, знак
4. divide: точные частные, усечение по точности, деление на ноль,
   делители с partitions около BASE − 1 (нормализация оценки)
"""

import pytest

from chunkdec.core.errors import DivisionByZero
from chunkdec.core.math.arithmetic import (
    add,
    compare,
    compare_magnitude,
    divide,
    multiply,
    subtract,
)
from chunkdec.core.math.partitions import (
    BASE,
    ZERO,
    Parts,
    parse_decimal,
    parts_from_int,
)


def p(text: str) -> Parts:
    return parse_decimal(text)


def assert_canonical(value: Parts) -> None:
    """Инварианты представления: нет крайних нулевых partitions, все в [0, BASE)."""
    if not value.partitions:
        assert value == ZERO
        return
    assert value.partitions[0] != 0
    assert value.partitions[-1] != 0
    assert all(0 <= partition < BASE for partition in value.partitions)


# =============================================================================
# ТЕСТЫ: сравнение
# =============================================================================


class TestCompare:
    """Тесты compare / compare_magnitude."""

    def test_sign_decides_first(self) -> None:
        assert compare(p("-1000"), p("1")) == -1
        assert compare(p("0"), p("-0.0001")) == 1
        assert compare(p("0.0001"), p("0")) == 1

    def test_equal_values(self) -> None:
        assert compare(p("123.450"), p("123.45")) == 0
        assert compare(ZERO, p("-0")) == 0

    def test_positive_magnitude_order(self) -> None:
        assert compare(p("2"), p("1.999999999999")) == 1
        assert compare(p("0.000001"), p("0.0000011")) == -1

    def test_negative_order_is_flipped(self) -> None:
        assert compare(p("-2"), p("-1.5")) == -1
        assert compare(p("-1.5"), p("-2")) == 1

    def test_disjoint_partition_ranges(self) -> None:
        """Сравнение значений без общих индексов partitions."""
        assert compare(p("1e12"), p("0.000001")) == 1
        assert compare(p("0.000001"), p("1e12")) == -1

    def test_compare_magnitude_ignores_sign(self) -> None:
        assert compare_magnitude(p("-5"), p("3")) == 1
        assert compare_magnitude(p("-5"), p("5")) == 0


# =============================================================================
# ТЕСТЫ: сложение и вычитание
# =============================================================================


class TestAdd:
    """Тесты add."""

    def test_simple(self) -> None:
        assert add(p("1.5"), p("2.25")) == p("3.75")

    def test_carry_across_partitions(self) -> None:
        result = add(p("999999.999999"), p("0.000001"))
        assert result == parts_from_int(BASE)
        assert_canonical(result)

    def test_final_carry_appends_partition(self) -> None:
        result = add(parts_from_int(BASE - 1), parts_from_int(1))
        assert result == Parts((1,), 1, False)

    def test_fractional_sum_becomes_integer(self) -> None:
        """123.456 + 0.544 = 124 (хвостовые нули отброшены)."""
        result = add(p("123.456"), p("0.544"))
        assert result == p("124")
        assert result.offset == 0

    def test_zero_identity(self) -> None:
        assert add(ZERO, p("-7.5")) == p("-7.5")
        assert add(p("7.5"), ZERO) == p("7.5")

    def test_mixed_signs_redirect_to_subtract(self) -> None:
        assert add(p("5"), p("-8")) == p("-3")
        assert add(p("-5"), p("8")) == p("3")
        assert add(p("-5"), p("5")) == ZERO

    def test_both_negative(self) -> None:
        assert add(p("-1.25"), p("-2.75")) == p("-4")


class TestSubtract:
    """Тесты subtract."""

    def test_simple(self) -> None:
        assert subtract(p("5"), p("3")) == p("2")

    def test_result_sign_from_larger_magnitude(self) -> None:
        assert subtract(p("3"), p("5")) == p("-2")
        assert subtract(p("-3"), p("-5")) == p("2")
        assert subtract(p("-5"), p("-3")) == p("-2")

    def test_borrow_across_partitions(self) -> None:
        result = subtract(parts_from_int(BASE), p("0.000001"))
        assert result == p("999999.999999")
        assert_canonical(result)

    def test_long_borrow_chain(self) -> None:
        result = subtract(p("1e24"), p("1"))
        assert result == parts_from_int(10 ** 24 - 1)

    def test_equal_operands_give_zero(self) -> None:
        assert subtract(p("12.5"), p("12.50")) == ZERO

    def test_zero_minuend_negates(self) -> None:
        assert subtract(ZERO, p("4")) == p("-4")
        assert subtract(ZERO, p("-4")) == p("4")

    def test_mixed_signs_redirect_to_add(self) -> None:
        assert subtract(p("5"), p("-3")) == p("8")
        assert subtract(p("-5"), p("3")) == p("-8")


# =============================================================================
# ТЕСТЫ: умножение
# =============================================================================


class TestMultiply:
    """Тесты multiply."""

    def test_simple(self) -> None:
        assert multiply(p("1.5"), p("4")) == p("6")

    def test_max_partitions_carry(self) -> None:
        """(BASE − 1)² требует широкой промежуточной арифметики и переноса."""
        result = multiply(parts_from_int(BASE - 1), parts_from_int(BASE - 1))
        assert result == parts_from_int((BASE - 1) ** 2)
        assert_canonical(result)

    def test_multi_partition_product(self) -> None:
        a = 123_456_789_012_345
        b = 987_654_321_098
        assert multiply(parts_from_int(a), parts_from_int(b)) == parts_from_int(a * b)

    def test_sign_is_xor(self) -> None:
        assert multiply(p("-2"), p("3")) == p("-6")
        assert multiply(p("-2"), p("-3")) == p("6")
        assert multiply(p("2"), p("-3")) == p("-6")

    def test_fractional_offsets_add(self) -> None:
        assert multiply(p("0.001"), p("0.001")) == p("0.000001")
        assert multiply(p("1e6"), p("1e-6")) == p("1")

    def test_zero(self) -> None:
        assert multiply(ZERO, p("5")) == ZERO
        assert multiply(p("-5"), ZERO) == ZERO


# =============================================================================
# ТЕСТЫ: деление
# =============================================================================


class TestDivide:
    """Тесты divide."""

    def test_exact_fraction(self) -> None:
        """10 / 4 = 2.5 без усечения."""
        assert divide(p("10"), p("4")) == p("2.5")

    def test_exact_integer(self) -> None:
        assert divide(p("1000000000000"), p("1000")) == p("1000000000")

    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZero, match="Division by zero"):
            divide(p("1"), ZERO)

    def test_division_by_zero_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            divide(ZERO, ZERO)

    def test_zero_dividend(self) -> None:
        assert divide(ZERO, p("3")) == ZERO

    def test_sign_is_xor(self) -> None:
        assert divide(p("-10"), p("4")) == p("-2.5")
        assert divide(p("-10"), p("-4")) == p("2.5")
        assert divide(p("10"), p("-4")) == p("-2.5")

    def test_repeating_fraction_is_truncated(self) -> None:
        """1/3 усекается: не больше precision разрядов, только тройки."""
        result = divide(p("1"), p("3"), precision=30)
        assert result.negative is False
        assert result.offset < 0
        assert result.partitions == (333_333,) * 5
        assert compare(result, p("0.333333")) >= 0
        assert compare(result, p("0.34")) < 0

    def test_precision_counts_significant_digits(self) -> None:
        """Ведущие нулевые шаги оценки не расходуют точность."""
        assert divide(p("1"), p("7"), precision=12) == p("0.142857142857")
        assert len(divide(p("1"), p("7"), precision=60).partitions) == 10

    def test_precision_rounds_up_to_whole_partition(self) -> None:
        assert divide(p("2"), p("3"), precision=7) == p("0.666666666666")

    def test_fractional_operands(self) -> None:
        assert divide(p("0.75"), p("0.25")) == p("3")
        assert divide(p("1"), p("0.001")) == p("1000")
        assert divide(p("0.000001"), p("1e6")) == p("1e-12")

    def test_large_exact_quotient(self) -> None:
        a = 123_456_789_012_345_678_901_234_567_890
        b = 987_654_321
        result = divide(parts_from_int(a * b), parts_from_int(b))
        assert result == parts_from_int(a)

    @pytest.mark.parametrize(
        "divisor",
        [
            BASE ** 2 - 1,                # 999999_999999
            BASE ** 3 - 1,                # 999999_999999_999999
            BASE ** 3 - BASE,             # 999999_999999_000000
            (BASE - 1) * BASE ** 2 + 1,   # 999999_000000_000001
            BASE ** 2 + BASE - 1,         # 1_000000_999999 (оценка по 2 partitions занижена)
            BASE ** 4 - 2,
        ],
    )
    def test_divisor_near_base_boundaries_exact(self, divisor: int) -> None:
        """Точное деление при делителях, на которых оценка частного ошибается."""
        quotient = 314_159_265_358_979_323_846
        result = divide(parts_from_int(divisor * quotient), parts_from_int(divisor))
        assert result == parts_from_int(quotient)
        assert_canonical(result)

    @pytest.mark.parametrize(
        "dividend,divisor",
        [
            (BASE ** 5 - 1, BASE ** 3 - 1),
            (BASE ** 6, BASE ** 2 - 1),
            (2 * BASE ** 4 - 3, BASE ** 3 - BASE + 1),
            (10 ** 40 + 12345, 999_999_999_999_999_999),
        ],
    )
    def test_divisor_near_base_integer_part(self, dividend: int, divisor: int) -> None:
        """Целая часть частного совпадает с целочисленным делением."""
        result = divide(parts_from_int(dividend), parts_from_int(divisor), precision=60)
        expected = dividend // divisor
        assert compare(result, parts_from_int(expected)) >= 0
        assert compare(result, parts_from_int(expected + 1)) < 0
        assert_canonical(result)

    def test_truncation_at_cap_corrects_overestimate(self) -> None:
        """Переоценённая последняя partition понижается: 0.999997000007… → 0.999997."""
        dividend = p("999999")
        divisor = p("1000001.999999")
        result = divide(dividend, divisor, precision=6)
        assert result == p("0.999997")
        assert compare(multiply(result, divisor), dividend) <= 0

    @pytest.mark.parametrize(
        "dividend,divisor,precision",
        [
            ("999999", "1000001.999999", 6),
            ("-999999", "1000001.999999", 6),
            ("1", "1.000001999999", 6),
            ("2", "3", 7),
            ("7", "999999.999999000001", 12),
            ("123456789.123", "-0.000999999999", 18),
            ("1e30", "1000000999999.999999", 24),
            ("0.5", "999999999999.000001", 30),
        ],
    )
    def test_truncated_quotient_brackets_exact_value(
        self, dividend: str, divisor: str, precision: int
    ) -> None:
        """|q · b| <= |a| < (|q| + ulp) · |b| — частное усечено, а не округлено."""
        a = p(dividend)
        b = p(divisor)
        result = divide(a, b, precision=precision)
        magnitude = result.absolute()
        ulp = Parts((1,), magnitude.offset, False)

        assert compare_magnitude(multiply(magnitude, b), a) <= 0
        assert compare_magnitude(multiply(add(magnitude, ulp), b), a) > 0
        assert result.negative == (a.negative != b.negative)
        assert_canonical(result)
