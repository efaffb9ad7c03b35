"""Directional totalization — комбинирование тоталов двух направлений.

Расходомер имеет два присоединения (A и B), поток может идти в обе стороны.
Каждое направление накапливается в собственном BigFloat, итоговый тотал
вычисляется одним из четырёх режимов:
- A_ONLY: только поток A→B
- B_ONLY: только поток B→A
- A_MINUS_B: A→B положительный, B→A отрицательный
- B_MINUS_A: B→A положительный, A→B отрицательный
"""

import logging
from enum import Enum

from src.core.domain.accumulator import BigFloat
from src.core.domain.return_codes import ReturnCode, TotalizationResult
from src.core.math.bigfloat import subtract

logger = logging.getLogger(__name__)


class TotalizationMode(str, Enum):
    """Режим вычисления итогового тотала."""

    A_ONLY = "A_ONLY"
    B_ONLY = "B_ONLY"
    A_MINUS_B = "A_MINUS_B"
    B_MINUS_A = "B_MINUS_A"


def combine_directional(
    total_a_to_b: BigFloat,
    total_b_to_a: BigFloat,
    mode: TotalizationMode,
    threshold: float,
) -> TotalizationResult:
    """Вычисление итогового тотала по двум направленным тоталам.

    Входные тоталы не изменяются; результат — новый BigFloat.

    Args:
        total_a_to_b: тотал потока A→B
        total_b_to_a: тотал потока B→A
        mode: режим комбинирования
        threshold: порог переноса обоих тоталов

    Returns:
        TotalizationResult. Неизвестный mode → MODE_ERROR и total=None;
        отсутствующий тотал → ARGUMENT_ERROR. Код вычитания пробрасывается.
    """
    if total_a_to_b is None or total_b_to_a is None:
        return TotalizationResult(
            total=None,
            code=ReturnCode.ARGUMENT_ERROR,
            mode=mode,
            details="Both directional totals are required",
        )

    if mode == TotalizationMode.A_ONLY:
        return TotalizationResult(
            total=total_a_to_b.model_copy(),
            code=ReturnCode.OK,
            mode=mode,
            details="A->B only",
        )

    if mode == TotalizationMode.B_ONLY:
        return TotalizationResult(
            total=total_b_to_a.model_copy(),
            code=ReturnCode.OK,
            mode=mode,
            details="B->A only",
        )

    if mode == TotalizationMode.A_MINUS_B:
        combined = subtract(total_a_to_b, total_b_to_a, threshold)
        return TotalizationResult(
            total=combined.value,
            code=combined.code,
            mode=mode,
            details="A->B minus B->A",
        )

    if mode == TotalizationMode.B_MINUS_A:
        combined = subtract(total_b_to_a, total_a_to_b, threshold)
        return TotalizationResult(
            total=combined.value,
            code=combined.code,
            mode=mode,
            details="B->A minus A->B",
        )

    logger.error("Unrecognised totalization mode: %r", mode)
    return TotalizationResult(
        total=None,
        code=ReturnCode.MODE_ERROR,
        mode=mode,
        details=f"Unrecognised totalization mode: {mode!r}",
    )
