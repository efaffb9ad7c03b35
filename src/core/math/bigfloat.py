"""
BigFloat — арифметика аккумулятора с сохранением точности

Тоталайзер расхода накапливает объём месяцами. Обычный float-аккумулятор
теряет значащие цифры: при большом тотале малое приращение округляется
до нуля. BigFloat хранит отдельно счётчик целых порций threshold (units)
и ограниченный знаковый остаток (remainder), поэтому приращение любого
размера сохраняется с точностью остатка независимо от величины тотала.

Операции:
- clear: обнуление
- add_scalar: сложение со скаляром (перенос/заём между разрядами)
- add / subtract: комбинирование двух аккумуляторов
- affine_transform: acc * angular + linear без потери точности
- scale: копия * factor
- are_equal / is_positive: предикаты
- to_float: преобразование в float (с потерей точности)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. После успешной операции |remainder| < threshold
   (исключение: насыщение affine_transform, сопровождается RANGE_ERROR)
2. units никогда не кодирует знак: знак значения — sign bit остатка
3. NaN/Inf операнды и threshold <= 0 отвергаются без изменения состояния
4. Ошибки возвращаются как ReturnCode, исключения не выбрасываются
"""

import logging
import math

from src.core.domain.accumulator import (
    DEFAULT_SATURATION_REMAINDER,
    UINT32_MAX,
    BigFloat,
)
from src.core.domain.return_codes import CombineResult, ReturnCode
from src.core.math.decompose import DecompositionError, split_double, split_float
from src.core.math.numerical_safeguards import (
    is_equal,
    is_sign_negative,
    is_valid_float,
    is_valid_threshold,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ВНУТРЕННИЕ ПОМОЩНИКИ
# =============================================================================


def _saturate(acc: BigFloat, negative: bool, saturation_remainder: float) -> None:
    """Перевести аккумулятор в состояние насыщения (маркер переполнения)."""
    acc.units = UINT32_MAX
    acc.remainder = -saturation_remainder if negative else saturation_remainder


def _borrow_into_positive(units: int, work: float, threshold: float) -> tuple[int, float]:
    """
    Заём порций из units, пока остаток не станет неотрицательным.

    Эквивалент цикла `while units and work < 0: work += threshold; units -= 1`,
    число итераций вычисляется сразу; добор цикла компенсирует округление.
    """
    ratio = -work / threshold
    borrowed = units if ratio >= units else math.ceil(ratio)
    work += borrowed * threshold
    units -= borrowed

    while units and work < 0.0:
        work += threshold
        units -= 1
    return units, work


def _borrow_into_negative(units: int, work: float, threshold: float) -> tuple[int, float]:
    """
    Заём порций из units, пока остаток не станет отрицательным.

    Эквивалент цикла `while units and work >= 0: work -= threshold; units -= 1`.
    """
    ratio = work / threshold
    borrowed = units if ratio + 1 >= units else math.floor(ratio) + 1
    work -= borrowed * threshold
    units -= borrowed

    while units and work >= 0.0:
        work -= threshold
        units -= 1
    return units, work


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


def clear(acc: BigFloat) -> ReturnCode:
    """Обнуление аккумулятора. Всегда успешно."""
    acc.units = 0
    acc.remainder = 0.0
    return ReturnCode.OK


def add_scalar(acc: BigFloat, delta: float, threshold: float) -> ReturnCode:
    """
    Сложение аккумулятора со скаляром: acc = acc + delta.

    Алгоритм (сложение "в столбик" с разрядом на границе threshold):
    1. Запоминаем знак аккумулятора до сложения
    2. remainder += delta
    3. Если знак остатка сменился — занимаем порции из units, пока знак
       не вернётся или units не исчерпается
    4. Если остаток стал не finite — MATH_ERROR, состояние не меняется
    5. |remainder| >= threshold → перенос целых порций в units
    6. Остаток получает знак рабочего значения

    Args:
        acc: Аккумулятор (изменяется на месте)
        delta: Знаковое приращение
        threshold: Порог переноса (> 0, finite)

    Returns:
        OK; INVALID_VALUE если delta/threshold невалидны;
        MATH_ERROR если результат не finite;
        RANGE_ERROR если units превысил бы UINT32_MAX.
        При ошибке аккумулятор не изменяется.

    Examples:
        >>> acc = BigFloat()
        >>> add_scalar(acc, 999.5, 1000.0), add_scalar(acc, 0.7, 1000.0)
        (<ReturnCode.OK: 'OK'>, <ReturnCode.OK: 'OK'>)
        >>> acc.units
        1
    """
    if not is_valid_float(delta) or not is_valid_threshold(threshold):
        logger.debug("add_scalar rejected: delta=%r threshold=%r", delta, threshold)
        return ReturnCode.INVALID_VALUE

    was_negative = is_sign_negative(acc.remainder)
    units = acc.units
    work = acc.remainder + delta

    if not is_valid_float(work):
        return ReturnCode.MATH_ERROR

    # Смена знака: заём из старшего разряда
    if not was_negative and is_sign_negative(work):
        units, work = _borrow_into_positive(units, work, threshold)
    elif was_negative and not is_sign_negative(work):
        units, work = _borrow_into_negative(units, work, threshold)

    abs_work = abs(work)
    if abs_work >= threshold:
        carry, abs_work = divmod(abs_work, threshold)
        units += int(carry)

    if units > UINT32_MAX:
        logger.warning(
            "add_scalar overflow: units would reach %d (> %d), delta=%r",
            units,
            UINT32_MAX,
            delta,
        )
        return ReturnCode.RANGE_ERROR

    acc.units = units
    acc.remainder = abs_work if work >= 0.0 else -abs_work
    return ReturnCode.OK


def add(a: BigFloat, b: BigFloat, threshold: float) -> CombineResult:
    """
    Сумма двух аккумуляторов: result = a + b.

    - Одинаковые знаки: units складываются, остаток b добавляется через
      add_scalar
    - Разные знаки: из большего units вычитается меньший (никогда не
      отрицательный), остаток большего остаётся базой, остаток меньшего
      добавляется через add_scalar (заём проводит результат через ноль)

    Args:
        a, b: Слагаемые (не изменяются)
        threshold: Порог переноса

    Returns:
        CombineResult(value, code). При RANGE_ERROR value насыщен
        (units = UINT32_MAX); при других ошибках value не нормализован.
    """
    a_negative = is_sign_negative(a.remainder)
    b_negative = is_sign_negative(b.remainder)

    if a_negative == b_negative:
        units = a.units + b.units
        base, value = a.remainder, b.remainder
    elif b.units > a.units:
        units = b.units - a.units
        base, value = b.remainder, a.remainder
    else:
        units = a.units - b.units
        base, value = a.remainder, b.remainder

    if units > UINT32_MAX:
        logger.warning("add overflow: units %d + %d exceed %d", a.units, b.units, UINT32_MAX)
        result = BigFloat()
        _saturate(result, a_negative, DEFAULT_SATURATION_REMAINDER)
        return CombineResult(value=result, code=ReturnCode.RANGE_ERROR)

    result = BigFloat.model_construct(units=units, remainder=base)

    code = add_scalar(result, value, threshold)
    if code is ReturnCode.RANGE_ERROR:
        _saturate(result, is_sign_negative(base), DEFAULT_SATURATION_REMAINDER)
    return CombineResult(value=result, code=code)


def subtract(a: BigFloat, b: BigFloat, threshold: float) -> CombineResult:
    """
    Разность двух аккумуляторов: result = a - b.

    Вычитание сводится к сумме с b, у которого инвертирован знак остатка
    (units беззнаковый и не инвертируется).
    """
    negated = BigFloat.model_construct(units=b.units, remainder=-b.remainder)
    return add(a, negated, threshold)


def affine_transform(
    acc: BigFloat,
    angular: float,
    linear: float,
    threshold: float,
    *,
    saturation_remainder: float = DEFAULT_SATURATION_REMAINDER,
) -> ReturnCode:
    """
    Линейное преобразование на месте: acc = acc * angular + linear.

    Прямое умножение units * threshold на angular во float уничтожило бы
    точность, поэтому умножение выполняется "в столбик":

    1. Знак произведения = sign(acc) XOR sign(angular), далее модули
    2. angular → (ang_int, ang_frac)
    3. units * ang_int (целое) + целая часть units * ang_frac (double)
       Если больше UINT32_MAX — насыщение и RANGE_ERROR
    4. Дробная часть units * ang_frac переносится в остаток (шаг 6)
    5. |remainder| → (rem_int, rem_frac); четыре частичных произведения,
       после каждого избыток >= threshold сразу переносится в units
    6. Остаток += дробный перенос * threshold, применяется знак
    7. add_scalar(linear) завершает преобразование и нормализует

    Args:
        acc: Аккумулятор (изменяется на месте)
        angular: Угловой коэффициент (множитель)
        linear: Линейный коэффициент (смещение)
        threshold: Порог переноса
        saturation_remainder: Модуль остатка в состоянии насыщения

    Returns:
        OK; INVALID_VALUE (без изменений) если коэффициенты/threshold
        невалидны; RANGE_ERROR с насыщением acc при переполнении units;
        MATH_ERROR (без изменений) если смещение даёт не finite остаток.
    """
    if not is_valid_float(angular) or not is_valid_float(linear):
        logger.debug("affine_transform rejected: angular=%r linear=%r", angular, linear)
        return ReturnCode.INVALID_VALUE
    if not is_valid_threshold(threshold):
        logger.debug("affine_transform rejected: threshold=%r", threshold)
        return ReturnCode.INVALID_VALUE

    negative = is_sign_negative(acc.remainder) != is_sign_negative(angular)

    try:
        ang_int, ang_frac = split_float(abs(angular))
        rem_int, rem_frac = split_float(abs(acc.remainder))
        units_carry_int, units_carry_frac = split_double(acc.units * ang_frac)
    except DecompositionError:
        units = UINT32_MAX + 1
    else:
        units = acc.units * ang_int + units_carry_int

    if units <= UINT32_MAX:
        work = 0.0
        for partial in (
            rem_int * ang_int,
            rem_frac * ang_int,
            rem_int * ang_frac,
            rem_frac * ang_frac,
        ):
            work += partial
            carry, work = divmod(work, threshold)
            units += int(carry)

    if units > UINT32_MAX:
        _saturate(acc, negative, saturation_remainder)
        logger.warning(
            "affine_transform saturated: angular=%r, units capped at %d, remainder=%r",
            angular,
            UINT32_MAX,
            acc.remainder,
        )
        return ReturnCode.RANGE_ERROR

    work += units_carry_frac * threshold

    transformed = BigFloat.model_construct(
        units=units, remainder=-work if negative else work
    )
    code = add_scalar(transformed, linear, threshold)
    if code is ReturnCode.RANGE_ERROR:
        _saturate(acc, is_sign_negative(transformed.remainder), saturation_remainder)
        return code
    if not code.ok:
        return code

    acc.assign(transformed)
    return code


def scale(
    dst: BigFloat,
    src: BigFloat,
    factor: float,
    threshold: float,
    *,
    saturation_remainder: float = DEFAULT_SATURATION_REMAINDER,
) -> ReturnCode:
    """Масштабирование: dst = src * factor (src не изменяется)."""
    dst.assign(src)
    return affine_transform(
        dst, factor, 0.0, threshold, saturation_remainder=saturation_remainder
    )


# =============================================================================
# ПРЕДИКАТЫ И ПРЕОБРАЗОВАНИЯ
# =============================================================================


def are_equal(a: BigFloat, b: BigFloat) -> bool:
    """
    Равенство аккумуляторов: units равны и остатки равны в пределах
    EQUALITY_TOLERANCE. Нормализация не выполняется.
    """
    return a.units == b.units and is_equal(a.remainder, b.remainder)


def is_positive(acc: BigFloat) -> bool:
    """
    Строго больше нуля (ноль не положителен).

    Examples:
        >>> is_positive(BigFloat(units=2, remainder=-0.0))
        False
        >>> is_positive(BigFloat(units=2, remainder=0.0))
        True
        >>> is_positive(BigFloat())
        False
    """
    if is_sign_negative(acc.remainder):
        return False
    if acc.remainder > 0.0:
        return True
    return acc.units > 0


def to_float(acc: BigFloat, threshold: float) -> float:
    """
    Преобразование в обычный float.

    ВНИМАНИЕ: операция с потерей точности — когда величина превышает
    разрядность мантиссы, младшие разряды остатка теряются.
    """
    magnitude = acc.units * threshold + abs(acc.remainder)
    return -magnitude if is_sign_negative(acc.remainder) else magnitude
