"""
ArithmeticContext — конфигурация арифметики и форматирования

Три независимые настройки:
- formatter: формат по умолчанию для str()
- approximation: политика аппроксимации после арифметики
- division_precision: максимум десятичных разрядов частного

Контекст неизменяем (frozen pydantic модель). Текущий контекст хранится
в ContextVar, поэтому изменения изолированы по потокам и asyncio-задачам.
Явный context=/policy= в вызовах всегда имеет приоритет над текущим.

Удобный слой (set_default_formatter / set_default_approximation /
set_division_precision) меняет только текущий контекст вызывающего потока.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from chunkdec.core.errors import InvalidConfiguration
from chunkdec.core.formatting import Formatter
from chunkdec.core.math.approximation import APPROXIMATION_DEFAULT, ApproximationPolicy
from chunkdec.core.math.partitions import DIV_PRECISION_DEFAULT

logger = logging.getLogger(__name__)


class ArithmeticContext(BaseModel):
    """Неизменяемый набор настроек арифметики."""

    formatter: Formatter = Field(
        default=Formatter.DEFAULT, description="Формат по умолчанию для str()"
    )
    approximation: ApproximationPolicy = Field(
        default=APPROXIMATION_DEFAULT,
        description="Политика аппроксимации после add/subtract/multiply/divide",
    )
    division_precision: int = Field(
        default=DIV_PRECISION_DEFAULT,
        gt=0,
        description="Максимум десятичных разрядов частного",
    )

    model_config = {"frozen": True}

    @field_validator("division_precision", mode="before")
    @classmethod
    def reject_non_integer_precision(cls, value: Any) -> Any:
        """Точность — только целое (bool и float с дробной частью запрещены)."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"division_precision must be an integer, got {value!r}")
        return value

    def replace(self, **changes: Any) -> "ArithmeticContext":
        """
        Валидированная копия с изменёнными полями.

        Raises:
            InvalidConfiguration: Если новые значения невалидны
        """
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        try:
            return type(self)(**data)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc


DEFAULT_CONTEXT = ArithmeticContext()

_current_context: ContextVar[ArithmeticContext] = ContextVar(
    "chunkdec_context", default=DEFAULT_CONTEXT
)


# =============================================================================
# ТЕКУЩИЙ КОНТЕКСТ
# =============================================================================


def get_context() -> ArithmeticContext:
    """Текущий контекст вызывающего потока/задачи."""
    return _current_context.get()


def set_context(context: ArithmeticContext) -> None:
    """Замена текущего контекста."""
    _current_context.set(context)


@contextmanager
def local_context(**changes: Any) -> Iterator[ArithmeticContext]:
    """
    Временный контекст на время блока with.

    Examples:
        >>> with local_context(division_precision=10) as ctx:
        ...     ctx.division_precision
        10
    """
    context = get_context().replace(**changes)
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)


# =============================================================================
# УДОБНЫЙ СЛОЙ (process defaults)
# =============================================================================


def set_default_formatter(formatter: Formatter) -> None:
    context = get_context().replace(formatter=formatter)
    set_context(context)
    logger.info("Default formatter set to %s", context.formatter)


def set_default_approximation(policy: ApproximationPolicy) -> None:
    context = get_context().replace(approximation=policy)
    set_context(context)
    logger.info("Default approximation policy set to %s", context.approximation.value)


def set_division_precision(precision: int) -> None:
    """
    Установка точности деления.

    Raises:
        InvalidConfiguration: Если precision не положительное целое
            (текущая точность сохраняется)
    """
    set_context(get_context().replace(division_precision=precision))
    logger.info("Division precision set to %d", precision)


def reset_context() -> None:
    """Возврат к контексту по умолчанию."""
    set_context(DEFAULT_CONTEXT)
