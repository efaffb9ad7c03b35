"""
Numerical Safeguards — примитивы безопасной float-арифметики

Модуль обеспечивает базовые проверки для всей арифметики тоталайзера:
- NaN/Inf детекция операндов
- Определение знака по sign bit (включая -0.0)
- Сравнение float с фиксированной и произвольной толерантностью
- Усечение до заданного количества знаков после запятой
- Валидация threshold (порога переноса BigFloat)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сравнения с толерантностью никогда не считают NaN/Inf равными
2. Знак -0.0 определяется как отрицательный (sign bit), как в IEEE 754
3. Все операции детерминированы и не имеют побочных эффектов
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность по умолчанию для сравнения float (абсолютная)
# Используется в is_equal и BigFloat.are_equal
EQUALITY_TOLERANCE: Final[float] = 1e-4

# Множители для усечения до N знаков после запятой (0..6)
TRUNCATE_FACTORS: Final[tuple[float, ...]] = (
    1.0,
    10.0,
    100.0,
    1000.0,
    10000.0,
    100000.0,
    1000000.0,
)


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_sign_negative(value: float) -> bool:
    """
    Проверка sign bit значения.

    В отличие от `value < 0`, возвращает True для -0.0. Знак BigFloat
    хранится исключительно в sign bit остатка, поэтому -0.0 значим.

    Examples:
        >>> is_sign_negative(-1.0)
        True
        >>> is_sign_negative(-0.0)
        True
        >>> is_sign_negative(0.0)
        False
    """
    return math.copysign(1.0, value) < 0.0


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_equal_arb(a: float, b: float, tol: float) -> bool:
    """
    Сравнение float с произвольной абсолютной толерантностью.

    Алгоритм:
        abs(a - b) <= tol

    Args:
        a: Первое значение
        b: Второе значение
        tol: Абсолютная толерантность

    Returns:
        True если значения близки. Если любой аргумент не finite — False.

    Examples:
        >>> is_equal_arb(1.0, 1.05, 0.1)
        True
        >>> is_equal_arb(1.0, 1.2, 0.1)
        False
        >>> is_equal_arb(float("inf"), float("inf"), 0.1)
        False
    """
    if not (is_valid_float(a) and is_valid_float(b) and is_valid_float(tol)):
        return False

    difference = a - b if a >= b else b - a
    return not difference > tol


def is_equal(a: float, b: float) -> bool:
    """
    Сравнение float с толерантностью по умолчанию (EQUALITY_TOLERANCE).

    Examples:
        >>> is_equal(0.2, 0.20005)
        True
        >>> is_equal(0.2, 0.2002)
        False
    """
    return is_equal_arb(a, b, EQUALITY_TOLERANCE)


# =============================================================================
# УСЕЧЕНИЕ
# =============================================================================


def truncate_to(value: float, decimal_places: int) -> float:
    """
    Усечение значения до заданного числа знаков после запятой.

    Усечение выполняется к нулю (не округление). Из-за конечной точности
    float результат — ближайшее представимое значение к ожидаемому.

    Args:
        value: Исходное значение
        decimal_places: Количество знаков после запятой (0..6)

    Returns:
        Усечённое значение

    Raises:
        ValueError: Если decimal_places вне поддерживаемого диапазона
            или value не finite

    Examples:
        >>> truncate_to(3.14159, 2)
        3.14
        >>> truncate_to(-2.789, 1)
        -2.7
    """
    if not 0 <= decimal_places < len(TRUNCATE_FACTORS):
        raise ValueError(
            f"decimal_places must be in [0, {len(TRUNCATE_FACTORS) - 1}], "
            f"got {decimal_places}"
        )
    if not is_valid_float(value):
        raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")

    factor = TRUNCATE_FACTORS[decimal_places]
    return math.trunc(value * factor) / factor


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_threshold(threshold: float) -> bool:
    """
    Проверка threshold BigFloat: finite и строго положительный.

    Args:
        threshold: Порог переноса остатка в счётчик units

    Returns:
        True если threshold пригоден для нормализации
    """
    return is_valid_float(threshold) and threshold > 0.0


def validate_threshold(threshold: float, name: str = "threshold") -> None:
    """
    Валидация threshold для конфигурации тоталайзера.

    Args:
        threshold: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если threshold <= 0 или NaN/Inf
    """
    if not is_valid_float(threshold):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {threshold}")

    if threshold <= 0.0:
        raise ValueError(f"{name} must be positive, got {threshold}")
