"""
BigFloat — модель аккумулятора с сохранением точности

Представление (sign-magnitude, mixed radix):

    magnitude = units * threshold + |remainder|
    value     = sign(remainder) * magnitude

- units: беззнаковый счётчик целых "порций" threshold (uint32)
- remainder: знаковый остаток; его sign bit — знак всего значения

threshold не хранится в модели: вызывающий код передаёт его в каждую
операцию и обязан использовать один и тот же threshold для одного
аккумулятора.

В отличие от остальных domain моделей, BigFloat изменяемый: все
примитивные операции (add_scalar, affine_transform, ...) обновляют его
на месте.
"""

import math
from typing import Final

from pydantic import BaseModel, Field, field_validator

# Максимум счётчика units (uint32)
UINT32_MAX: Final[int] = 0xFFFFFFFF

# Значение остатка по умолчанию при насыщении affine_transform.
# Узнаваемый "вне диапазона" маркер для журналов и аварийных консьюмеров.
DEFAULT_SATURATION_REMAINDER: Final[float] = 999999.99


class BigFloat(BaseModel):
    """
    Аккумулятор: unbounded-по-смыслу счётчик units + ограниченный остаток.

    Создаётся нулевым: BigFloat() == {units: 0, remainder: 0.0}.
    """

    units: int = Field(0, ge=0, le=UINT32_MAX, description="Счётчик порций threshold")
    remainder: float = Field(0.0, description="Знаковый остаток (|remainder| < threshold)")

    @field_validator("remainder")
    @classmethod
    def validate_remainder_finite(cls, v: float) -> float:
        """Остаток должен быть finite (NaN/Inf ломают нормализацию)."""
        if not math.isfinite(v):
            raise ValueError(f"remainder must be finite, got {v}")
        return v

    def assign(self, other: "BigFloat") -> None:
        """Скопировать состояние other в этот аккумулятор."""
        self.units = other.units
        self.remainder = other.remainder

    def is_saturated(self) -> bool:
        """True если счётчик units упёрся в UINT32_MAX."""
        return self.units == UINT32_MAX
