"""
Тесты для Pi Engine

Проверяет:
1. Точность: первые 100 знаков π
2. Шкалу результата (ровно num_digits знаков после запятой)
3. Монотонное уточнение при усечении: trunc(π(d), d') == π(d')
4. InvalidArgument для num_digits <= 0
5. Compute-once мемоизацию, в том числе при конкурентных запросах
6. Независимость от глобальной политики округления
"""

import decimal
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from src.core.errors import InvalidArgument
from src.core.math import pi as pi_module
from src.core.math.numerical_safeguards import truncate_to_scale
from src.core.math.pi import PiEngine, arccot_scaled, calculate_pi, pi_of_num_digits
from src.core.math.precision import set_precision_context

PI_100 = Decimal(
    "3.1415926535897932384626433832795028841971693993751"
    "058209749445923078164062862089986280348253421170679"
)


@pytest.fixture
def engine() -> PiEngine:
    return PiEngine()


# =============================================================================
# ТОЧНОСТЬ
# =============================================================================


class TestCalculatePi:
    """Тесты calculate_pi"""

    def test_five_digits(self) -> None:
        result = calculate_pi(5)
        assert result == Decimal("3.14159")
        assert str(result) == "3.14159"
        assert result.as_tuple().exponent == -5

    def test_one_digit(self) -> None:
        assert str(calculate_pi(1)) == "3.1"

    def test_hundred_digits(self) -> None:
        assert calculate_pi(100) == PI_100

    def test_matches_reference_for_every_prefix(self) -> None:
        for digits in range(1, 101):
            assert calculate_pi(digits) == truncate_to_scale(PI_100, digits)

    def test_truncates_not_rounds(self) -> None:
        """π = 3.14159265... → 4 знака: 3.1415 (не 3.1416)"""
        assert str(calculate_pi(4)) == "3.1415"

    def test_independent_of_global_rounding(self) -> None:
        set_precision_context({"significant_digits": 3, "rounding": "UP"})
        assert str(calculate_pi(10)) == "3.1415926535"

    def test_independent_of_thread_decimal_context(self) -> None:
        """Финальное усечение не зависит от decimal.getcontext()"""
        with decimal.localcontext() as ctx:
            ctx.prec = 3
            ctx.rounding = decimal.ROUND_CEILING
            assert calculate_pi(60) == truncate_to_scale(PI_100, 60)

    def test_arccot_series(self) -> None:
        """arccot(5) = 0.19739555984988..."""
        assert abs(arccot_scaled(5, 10) - 1973955598) <= 2
        assert abs(arccot_scaled(239, 10) - 41840760) <= 2


class TestPrecisionRefinement:
    """Монотонное уточнение: усечение π(d) до d' совпадает с π(d')"""

    def test_refinement_under_truncation(self, engine: PiEngine) -> None:
        reference = engine.of_num_digits(150)
        for digits in range(1, 150):
            assert truncate_to_scale(reference, digits) == engine.of_num_digits(digits)

    def test_large_digit_count(self, engine: PiEngine) -> None:
        result = engine.of_num_digits(1000)
        assert result.as_tuple().exponent == -1000
        assert truncate_to_scale(result, 100) == PI_100


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestInvalidDigits:
    """num_digits <= 0 → InvalidArgument"""

    @pytest.mark.parametrize("digits", [0, -1, -100])
    def test_non_positive_rejected(self, engine: PiEngine, digits: int) -> None:
        with pytest.raises(InvalidArgument, match="greater than zero"):
            engine.of_num_digits(digits)

    @pytest.mark.parametrize("digits", [2.0, "5", True, None])
    def test_non_integer_rejected(self, engine: PiEngine, digits) -> None:
        with pytest.raises(InvalidArgument):
            engine.of_num_digits(digits)

    def test_module_function_rejects_zero(self) -> None:
        with pytest.raises(InvalidArgument):
            pi_of_num_digits(0)

    def test_failed_request_not_cached(self, engine: PiEngine) -> None:
        with pytest.raises(InvalidArgument):
            engine.of_num_digits(0)
        assert engine.cached_digit_counts() == []
        assert engine.computation_count == 0


# =============================================================================
# МЕМОИЗАЦИЯ
# =============================================================================


class TestMemoization:
    """Compute-once кэш"""

    def test_repeated_requests_hit_cache(self, engine: PiEngine) -> None:
        first = engine.of_num_digits(30)
        second = engine.of_num_digits(30)
        assert first is second
        assert engine.computation_count == 1

    def test_distinct_keys_cached_separately(self, engine: PiEngine) -> None:
        engine.of_num_digits(10)
        engine.of_num_digits(20)
        engine.of_num_digits(10)
        assert engine.cached_digit_counts() == [10, 20]
        assert engine.computation_count == 2

    def test_concurrent_same_key_computed_once(
        self, engine: PiEngine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls = []
        original = pi_module.calculate_pi

        def counting_calculate_pi(num_digits: int) -> Decimal:
            calls.append(num_digits)
            return original(num_digits)

        monkeypatch.setattr(pi_module, "calculate_pi", counting_calculate_pi)

        n_callers = 16
        barrier = threading.Barrier(n_callers)

        def worker() -> Decimal:
            barrier.wait()
            return engine.of_num_digits(50)

        with ThreadPoolExecutor(max_workers=n_callers) as pool:
            results = [f.result() for f in [pool.submit(worker) for _ in range(n_callers)]]

        assert all(result == results[0] for result in results)
        assert all(str(result) == str(results[0]) for result in results)
        assert calls == [50]
        assert engine.computation_count == 1

    def test_concurrent_distinct_keys(self, engine: PiEngine) -> None:
        keys = [5, 10, 15, 20, 25, 30, 35, 40] * 4
        barrier = threading.Barrier(len(keys))

        def worker(digits: int) -> Decimal:
            barrier.wait()
            return engine.of_num_digits(digits)

        with ThreadPoolExecutor(max_workers=len(keys)) as pool:
            results = list(pool.map(worker, keys))

        for digits, result in zip(keys, results):
            assert result == truncate_to_scale(PI_100, digits)
        assert engine.computation_count == 8
