"""Average flow — средний расход между двумя снимками тотала.

    rate = (total_at_end - total_at_start) / elapsed

Единицы результата определяются вызывающим кодом: тоталы в [L] и время
в минутах дают расход в [L/min].
"""

import logging
import math

from src.core.domain.accumulator import BigFloat
from src.core.domain.return_codes import AverageFlowResult, ReturnCode
from src.core.math.bigfloat import subtract, to_float
from src.core.math.numerical_safeguards import is_valid_float

logger = logging.getLogger(__name__)


def average_flow(
    total_at_start: BigFloat,
    total_at_end: BigFloat,
    threshold: float,
    elapsed_time: float,
) -> AverageFlowResult:
    """Средний расход по дельте двух тоталов и прошедшему времени.

    Порядок:
    1. delta = total_at_end - total_at_start (BigFloat, без потери точности)
    2. delta → float
    3. elapsed_time != 0 → rate = delta / elapsed_time
    4. elapsed_time == 0:
       - delta == 0 → rate = 0, OK
       - иначе → rate = ±inf (знак delta), MATH_ERROR

    Args:
        total_at_start: тотал в начале периода
        total_at_end: тотал в конце периода
        threshold: порог переноса обоих тоталов
        elapsed_time: прошедшее время (в единицах вызывающего кода)

    Returns:
        AverageFlowResult. Невалидный threshold (NaN/Inf/0), NaN/Inf
        elapsed_time или отсутствующий тотал → RANGE_ERROR, rate = NaN.
    """
    if total_at_start is None or total_at_end is None:
        return AverageFlowResult(
            rate=math.nan,
            code=ReturnCode.RANGE_ERROR,
            details="Both totals are required",
        )
    if not is_valid_float(threshold) or threshold == 0.0:
        return AverageFlowResult(
            rate=math.nan,
            code=ReturnCode.RANGE_ERROR,
            details=f"Invalid threshold: {threshold!r}",
        )
    if not is_valid_float(elapsed_time):
        return AverageFlowResult(
            rate=math.nan,
            code=ReturnCode.RANGE_ERROR,
            details=f"Invalid elapsed time: {elapsed_time!r}",
        )

    delta = subtract(total_at_end, total_at_start, threshold)
    if not delta.ok:
        return AverageFlowResult(
            rate=math.nan,
            code=delta.code,
            details="Totalization delta could not be computed",
        )

    delta_as_float = to_float(delta.value, threshold)

    if elapsed_time != 0:
        return AverageFlowResult(rate=delta_as_float / elapsed_time, code=ReturnCode.OK)

    if delta_as_float == 0.0:
        return AverageFlowResult(rate=0.0, code=ReturnCode.OK)

    logger.warning(
        "Average flow over zero elapsed time with non-zero delta %r", delta_as_float
    )
    return AverageFlowResult(
        rate=math.copysign(math.inf, delta_as_float),
        code=ReturnCode.MATH_ERROR,
        details="Zero elapsed time with non-zero totalization delta",
    )
