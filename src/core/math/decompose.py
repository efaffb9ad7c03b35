"""
Decompose — разделение float на целую и дробную части

Целая часть всегда беззнаковая (модуль), дробная часть несёт знак исходного
значения:

    x = sign(x) * int_part + frac_part

Например, -9.1 → (9, -0.1).

Два варианта повторяют разрядность исходных операндов BigFloat:
- split_float: целая часть в диапазоне uint32 (коэффициенты, остатки)
- split_double: целая часть в диапазоне uint64 (промежуточные произведения)
"""

import math
from typing import Final, NamedTuple, Union

# Предел целой части для float (uint32) и double (uint64) вариантов
FLOAT_INT_LIMIT: Final[int] = 0xFFFFFFFF
DOUBLE_INT_LIMIT: Final[int] = 0xFFFFFFFFFFFFFFFF


class DecompositionError(ValueError):
    """Значение не может быть разделено (NaN или целая часть вне разрядности)."""


class Decomposition(NamedTuple):
    """Результат разделения: беззнаковая целая часть и знаковая дробная."""

    int_part: Union[float, int]
    frac_part: float


def _split(value: float, int_limit: int) -> Decomposition:
    if math.isnan(value):
        raise DecompositionError("Cannot split NaN into integer and fractional parts")

    frac_part, int_signed = math.modf(value)

    # Inf пропагирует как есть: вызывающий код обязан отсечь его заранее
    if math.isinf(int_signed):
        return Decomposition(int_part=math.inf, frac_part=frac_part)

    int_part = int(abs(int_signed))
    if int_part > int_limit:
        raise DecompositionError(
            f"Integer part {int_part} exceeds {int_limit:#x} for value {value!r}"
        )
    return Decomposition(int_part=int_part, frac_part=frac_part)


def split_float(value: float) -> Decomposition:
    """
    Разделение float на целую (uint32) и дробную части.

    Args:
        value: Исходное значение

    Returns:
        Decomposition(int_part, frac_part), где int_part = floor(|value|),
        frac_part = value - sign(value) * int_part

    Raises:
        DecompositionError: Если value is NaN или целая часть > FLOAT_INT_LIMIT

    Examples:
        >>> split_float(-9.5)
        Decomposition(int_part=9, frac_part=-0.5)
        >>> split_float(3.0)
        Decomposition(int_part=3, frac_part=0.0)
    """
    return _split(value, FLOAT_INT_LIMIT)


def split_double(value: float) -> Decomposition:
    """
    Разделение double на целую (uint64) и дробную части.

    Контракт идентичен split_float, но целая часть может занимать
    полный 64-битный диапазон.

    Raises:
        DecompositionError: Если value is NaN или целая часть > DOUBLE_INT_LIMIT
    """
    return _split(value, DOUBLE_INT_LIMIT)
