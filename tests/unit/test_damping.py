"""
Тесты для Damping — сглаживание мгновенного расхода

Проверяет:
1. WindowDamping: среднее по окну, сброс при смене окна
2. MovingDamping: рекуррентное среднее с ограниченным весом
3. Невалидные отсчёты не портят состояние фильтров
"""

import math

import pytest

from src.core.domain.return_codes import ReturnCode
from src.core.math.damping import MovingDamping, WindowDamping


class TestWindowDamping:
    """Тесты WindowDamping"""

    def test_average_over_partial_window(self) -> None:
        """Пока окно не заполнено — среднее по имеющимся отсчётам"""
        damping = WindowDamping(capacity=5)

        first = damping.update(1.0, 3)
        assert first.code == ReturnCode.OK
        assert first.average == 1.0
        assert first.restarted

        second = damping.update(2.0, 3)
        assert second.average == pytest.approx(1.5)
        assert not second.restarted

        assert damping.update(3.0, 3).average == pytest.approx(2.0)

    def test_oldest_sample_replaced(self) -> None:
        """Заполненное окно вытесняет старейший отсчёт"""
        damping = WindowDamping(capacity=5)
        for sample in (1.0, 2.0, 3.0):
            damping.update(sample, 3)

        assert damping.update(4.0, 3).average == pytest.approx(3.0)
        assert damping.update(5.0, 3).average == pytest.approx(4.0)

    def test_window_change_restarts(self) -> None:
        """Смена окна сбрасывает буфер"""
        damping = WindowDamping(capacity=5)
        for sample in (10.0, 20.0, 30.0):
            damping.update(sample, 3)

        result = damping.update(2.0, 2)
        assert result.restarted
        assert result.average == 2.0

    def test_window_out_of_range(self) -> None:
        """Окно больше ёмкости → RANGE_ERROR"""
        damping = WindowDamping(capacity=4)

        result = damping.update(1.0, 5)
        assert result.code == ReturnCode.RANGE_ERROR
        assert math.isnan(result.average)

    def test_invalid_sample_keeps_state(self) -> None:
        """NaN отсчёт → INVALID_VALUE, состояние сохраняется"""
        damping = WindowDamping(capacity=4)
        damping.update(2.0, 2)

        result = damping.update(math.nan, 2)
        assert result.code == ReturnCode.INVALID_VALUE
        assert math.isnan(result.average)

        assert damping.update(4.0, 2).average == pytest.approx(3.0)

    def test_invalid_capacity(self) -> None:
        """Ёмкость должна быть положительной"""
        with pytest.raises(ValueError, match="capacity"):
            WindowDamping(capacity=0)


class TestMovingDamping:
    """Тесты MovingDamping"""

    def test_recursive_average(self) -> None:
        """Вес растёт до count_limit, затем фиксируется"""
        damping = MovingDamping(count_limit=3)

        assert damping.update(3.0).average == pytest.approx(3.0)
        assert damping.update(6.0).average == pytest.approx(4.5)
        assert damping.update(9.0).average == pytest.approx(6.0)
        # вес зафиксирован на 2/3
        assert damping.update(12.0).average == pytest.approx(8.0)
        assert damping.average == pytest.approx(8.0)

    def test_reset(self) -> None:
        """reset: следующий отсчёт начинает усреднение заново"""
        damping = MovingDamping(count_limit=4)
        damping.update(100.0)
        damping.update(50.0)

        damping.reset()
        result = damping.update(10.0)
        assert result.restarted
        assert result.average == pytest.approx(10.0)

    def test_invalid_sample(self) -> None:
        """Inf отсчёт → INVALID_VALUE, среднее не меняется"""
        damping = MovingDamping(count_limit=2)
        damping.update(4.0)

        result = damping.update(math.inf)
        assert result.code == ReturnCode.INVALID_VALUE
        assert damping.average == pytest.approx(4.0)

    def test_invalid_count_limit(self) -> None:
        """count_limit >= 1"""
        with pytest.raises(ValueError, match="count_limit"):
            MovingDamping(count_limit=0)
