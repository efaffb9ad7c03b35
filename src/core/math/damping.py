"""
Damping — сглаживание мгновенного расхода

Два фильтра для показаний расхода перед отображением и тотализацией:
- WindowDamping: скользящее среднее по последним N отсчётам (кольцевой буфер
  фиксированной ёмкости)
- MovingDamping: рекуррентное среднее
      avg = avg * (k - 1) / k + sample / k
  где k растёт до count_limit, после чего вес фиксируется

Некорректный отсчёт (NaN/Inf) не портит состояние фильтра: возвращается
NaN и код INVALID_VALUE.
"""

import math
from dataclasses import dataclass
from typing import List

from src.core.domain.return_codes import ReturnCode
from src.core.math.numerical_safeguards import is_valid_float


@dataclass(frozen=True)
class DampingSample:
    """Результат одного шага фильтра."""

    average: float
    code: ReturnCode

    # True если состояние фильтра было сброшено на этом шаге
    restarted: bool = False


class WindowDamping:
    """Скользящее среднее по окну из последних `window` отсчётов.

    Если отсчётов пока меньше окна, среднее считается по имеющимся.
    Смена размера окна между вызовами сбрасывает буфер.
    """

    def __init__(self, capacity: int):
        """
        Args:
            capacity: максимальный размер окна (ёмкость буфера), > 0
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self.capacity = capacity
        self._buffer: List[float] = [0.0] * capacity
        self._index = 0
        self._valid = 0
        self._window = 0

    def update(self, sample: float, window: int) -> DampingSample:
        """Добавить отсчёт и вернуть среднее по окну."""
        if not 0 <= window <= self.capacity:
            return DampingSample(average=math.nan, code=ReturnCode.RANGE_ERROR)
        if not is_valid_float(sample):
            return DampingSample(average=math.nan, code=ReturnCode.INVALID_VALUE)

        restarted = window != self._window
        if restarted:
            self._window = window
            self._index = 0
            self._valid = 0
            self._buffer = [0.0] * self.capacity

        self._buffer[self._index] = sample
        self._index += 1
        if self._index >= window:
            self._index = 0

        if self._valid < window:
            self._valid += 1

        if self._valid == 0:
            average = 0.0
        else:
            average = math.fsum(self._buffer[: self._valid]) / self._valid

        return DampingSample(average=average, code=ReturnCode.OK, restarted=restarted)


class MovingDamping:
    """Рекуррентное (moving) среднее с ограниченным весом памяти."""

    def __init__(self, count_limit: int):
        """
        Args:
            count_limit: предельный вес k (количество усредняемых отсчётов), >= 1
        """
        if count_limit < 1:
            raise ValueError(f"count_limit must be >= 1, got {count_limit}")

        self.count_limit = count_limit
        self._average = 0.0
        self._count = 0
        self._weight = 0.0
        self._reset_requested = False

    @property
    def average(self) -> float:
        return self._average

    def reset(self) -> None:
        """Запросить сброс: следующий отсчёт начнёт усреднение заново."""
        self._reset_requested = True

    def update(self, sample: float) -> DampingSample:
        """Добавить отсчёт и вернуть новое среднее."""
        if not is_valid_float(sample):
            return DampingSample(average=math.nan, code=ReturnCode.INVALID_VALUE)

        restarted = self._reset_requested
        if restarted:
            self._average = 0.0
            self._count = 0
            self._reset_requested = False

        if self._count != self.count_limit:
            self._count = min(self._count + 1, self.count_limit)
            self._weight = (self._count - 1) / self._count

        self._average = self._average * self._weight + sample / self._count
        return DampingSample(average=self._average, code=ReturnCode.OK, restarted=restarted)
