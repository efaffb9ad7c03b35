"""Bidirectional totalizer — два направленных BigFloat тотала расходомера.

Объём каждого измерения направляется в тотал своего направления:
положительный объём — в A→B, отрицательный (по модулю) — в B→A.
Итоговый тотал вычисляется через combine_directional в режиме
конфигурации (или явно указанном).

Синхронизация доступа из нескольких потоков — ответственность вызывающего
кода: тоталайзер не использует блокировки.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.accumulator import DEFAULT_SATURATION_REMAINDER, BigFloat
from src.core.domain.return_codes import (
    AverageFlowResult,
    ReturnCode,
    TotalizationResult,
)
from src.core.math.bigfloat import add_scalar, clear, scale, to_float
from src.core.math.numerical_safeguards import validate_threshold
from src.totalization.average_flow import average_flow
from src.totalization.directional import TotalizationMode, combine_directional

logger = logging.getLogger(__name__)


class TotalizationError(Exception):
    """
    Ошибка примитива BigFloat в strict режиме тоталайзера.

    Атрибут code содержит исходный ReturnCode операции.
    """

    def __init__(self, code: ReturnCode, message: str):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class TotalizerConfig:
    """Конфигурация тоталайзера.

    threshold — объём, после которого остаток переносится в счётчик units
    (например, 1 000 000 L). Должен быть постоянным на всё время жизни тотала.
    """

    threshold: float = 1_000_000.0
    mode: TotalizationMode = TotalizationMode.A_MINUS_B
    saturation_remainder: float = DEFAULT_SATURATION_REMAINDER
    strict: bool = False  # True → ошибки примитивов выбрасывают TotalizationError


@dataclass(frozen=True)
class TotalizerSnapshot:
    """Независимые копии направленных тоталов на момент снимка."""

    a_to_b: BigFloat
    b_to_a: BigFloat


class BidirectionalTotalizer:
    """Тоталайзер двунаправленного расходомера.

    Ошибки примитивов возвращаются как ReturnCode и логируются; в strict
    режиме вместо этого выбрасывается TotalizationError.
    """

    def __init__(self, config: Optional[TotalizerConfig] = None):
        """
        Args:
            config: конфигурация (по умолчанию TotalizerConfig())

        Raises:
            ValueError: если threshold <= 0 или NaN/Inf
        """
        self.config = config or TotalizerConfig()
        validate_threshold(self.config.threshold)

        self.a_to_b = BigFloat()
        self.b_to_a = BigFloat()

    def _check(self, code: ReturnCode, operation: str) -> ReturnCode:
        if code.ok:
            return code
        logger.warning("Totalizer %s failed: %s", operation, code.value)
        if self.config.strict:
            raise TotalizationError(code, f"{operation} failed with {code.value}")
        return code

    def record(self, volume: float) -> ReturnCode:
        """Учесть измеренный объём (знак определяет направление потока).

        Args:
            volume: объём с момента предыдущего измерения;
                > 0 — поток A→B, < 0 — поток B→A

        Returns:
            Код операции add_scalar
        """
        if volume < 0.0:
            code = add_scalar(self.b_to_a, -volume, self.config.threshold)
        else:
            code = add_scalar(self.a_to_b, volume, self.config.threshold)
        return self._check(code, "record")

    def apply_meter_factor(self, factor: float) -> ReturnCode:
        """Умножить оба направленных тотала на коэффициент (meter factor).

        Оба тотала масштабируются в копиях и фиксируются вместе: если
        масштабирование любого направления неуспешно (включая насыщение),
        ни один тотал не изменяется.
        """
        scaled = (BigFloat(), BigFloat())
        for dst, src in zip(scaled, (self.a_to_b, self.b_to_a)):
            code = scale(
                dst,
                src,
                factor,
                self.config.threshold,
                saturation_remainder=self.config.saturation_remainder,
            )
            if not code.ok:
                return self._check(code, "apply_meter_factor")

        self.a_to_b.assign(scaled[0])
        self.b_to_a.assign(scaled[1])
        return ReturnCode.OK

    def net_total(self, mode: Optional[TotalizationMode] = None) -> TotalizationResult:
        """Итоговый тотал в режиме mode (по умолчанию — режим конфигурации)."""
        result = combine_directional(
            self.a_to_b,
            self.b_to_a,
            mode if mode is not None else self.config.mode,
            self.config.threshold,
        )
        self._check(result.code, "net_total")
        return result

    def net_as_float(self, mode: Optional[TotalizationMode] = None) -> float:
        """Итоговый тотал как float (с потерей точности для больших тоталов)."""
        result = self.net_total(mode)
        if result.total is None:
            return float("nan")
        return to_float(result.total, self.config.threshold)

    def snapshot(self) -> TotalizerSnapshot:
        """Снимок обоих тоталов (копии, не связанные с тоталайзером)."""
        return TotalizerSnapshot(a_to_b=self.a_to_b.model_copy(), b_to_a=self.b_to_a.model_copy())

    def average_flow_since(
        self,
        snapshot: TotalizerSnapshot,
        elapsed_time: float,
        mode: Optional[TotalizationMode] = None,
    ) -> AverageFlowResult:
        """Средний расход итогового тотала со времени снимка.

        Args:
            snapshot: снимок, сделанный elapsed_time назад
            elapsed_time: прошедшее время
            mode: режим комбинирования (по умолчанию — режим конфигурации)
        """
        mode = mode if mode is not None else self.config.mode
        threshold = self.config.threshold

        start = combine_directional(snapshot.a_to_b, snapshot.b_to_a, mode, threshold)
        self._check(start.code, "average_flow_since")
        end = self.net_total(mode)
        if not start.ok or not end.ok:
            return AverageFlowResult(
                rate=float("nan"),
                code=start.code if not start.ok else end.code,
                details="Net totals could not be computed",
            )

        result = average_flow(start.total, end.total, threshold, elapsed_time)
        self._check(result.code, "average_flow_since")
        return result

    def reset(self) -> None:
        """Обнулить оба направленных тотала."""
        clear(self.a_to_b)
        clear(self.b_to_a)
        logger.info("Totalizer reset (threshold=%s)", self.config.threshold)
