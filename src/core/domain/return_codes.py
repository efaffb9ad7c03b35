"""
ReturnCode — коды результата операций тоталайзера

Операции BigFloat не выбрасывают исключений для физически некорректных
входов: результат всегда возвращается явно и анализируется вызывающим кодом.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from src.core.domain.accumulator import BigFloat
    from src.totalization.directional import TotalizationMode


class ReturnCode(str, Enum):
    """Результат операции над BigFloat."""

    OK = "OK"
    INVALID_VALUE = "INVALID_VALUE"  # Операнд NaN/Inf
    MATH_ERROR = "MATH_ERROR"  # Результат не finite или деление на ноль
    RANGE_ERROR = "RANGE_ERROR"  # Переполнение счётчика units (uint32)
    MODE_ERROR = "MODE_ERROR"  # Неизвестный режим тотализации
    ARGUMENT_ERROR = "ARGUMENT_ERROR"  # Отсутствует обязательный аргумент

    @property
    def ok(self) -> bool:
        return self is ReturnCode.OK


@dataclass(frozen=True)
class CombineResult:
    """Результат add/subtract: новый BigFloat и код операции."""

    value: "BigFloat"
    code: ReturnCode

    @property
    def ok(self) -> bool:
        return self.code.ok


@dataclass(frozen=True)
class TotalizationResult:
    """Результат комбинирования двух направленных тоталов."""

    total: Optional["BigFloat"]
    code: ReturnCode
    mode: Optional[Union["TotalizationMode", str, int]]

    # Детали
    details: str = ""

    @property
    def ok(self) -> bool:
        return self.code.ok


@dataclass(frozen=True)
class AverageFlowResult:
    """Результат расчёта среднего расхода.

    При делении ненулевой дельты на нулевое время rate = ±inf и
    code = MATH_ERROR (best-effort значение для вызывающего кода).
    """

    rate: float
    code: ReturnCode

    # Детали
    details: str = ""

    @property
    def ok(self) -> bool:
        return self.code.ok
