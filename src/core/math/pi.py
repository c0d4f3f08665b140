"""
Pi — вычисление π с произвольной точностью (формула Мэчина)

    π = 4 · (4 · arccot(5) − arccot(239))
    arccot(x) = Σ_{k≥0} (−1)^k / ((2k+1) · x^(2k+1))

Вычисление ведётся в fixed-point с working_precision(num_digits) дробными
разрядами (num_digits + GUARD_DIGITS). Каждое промежуточное деление
усекается к нулю независимо от глобальной политики округления
PrecisionContext. Итоговый результат усекается ровно до num_digits знаков.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. num_digits <= 0 → InvalidArgument
2. Кэш append-only: значение для ключа, однажды установленное, не меняется
3. Compute-once: для одного ключа вычисление выполняется не более одного раза,
   даже при конкурентных запросах; разные ключи вычисляются параллельно
"""

import logging
import threading
from decimal import Decimal

from src.core.math.numerical_safeguards import (
    decimal_from_scaled_int,
    truncate_to_scale,
    validate_positive_int,
)
from src.core.math.precision import working_precision

logger = logging.getLogger(__name__)


# =============================================================================
# MACHIN SERIES
# =============================================================================


def arccot_scaled(x: int, digits: int) -> int:
    """
    arccot(x) в fixed-point: результат, умноженный на 10^digits.

    Все деления — целочисленные (усечение к нулю для положительных операндов).
    Ряд останавливается, когда член становится меньше 10^(-digits),
    т.е. обращается в ноль в fixed-point представлении.

    Args:
        x: Целый аргумент, |x| > 1
        digits: Количество дробных разрядов

    Returns:
        round_down(arccot(x) * 10^digits)
    """
    unity = 10**digits
    x_squared = x * x

    total = unity // x
    x_power = total
    n = 3
    add = False
    n_terms = 0

    logger.debug("arccot: argument=%d (near_zero=1E-%d)", x, digits)
    while True:
        x_power //= x_squared
        term = x_power // n
        if term == 0:
            break
        total = total + term if add else total - term
        add = not add
        n += 2
        n_terms += 1

    logger.debug("arccot: done. n_terms=%d", n_terms)
    return total


def calculate_pi(num_digits: int) -> Decimal:
    """
    π, усечённое до num_digits знаков после запятой.

    Args:
        num_digits: Количество знаков после запятой (> 0)

    Returns:
        Decimal с exponent == -num_digits

    Raises:
        InvalidArgument: Если num_digits <= 0
    """
    validate_positive_int(num_digits, "num_digits")
    calc_digits = working_precision(num_digits)

    pi_scaled = 4 * (4 * arccot_scaled(5, calc_digits) - arccot_scaled(239, calc_digits))

    # Guard-разряды отбрасываются усечением к нулю
    return truncate_to_scale(decimal_from_scaled_int(pi_scaled, calc_digits), num_digits)


# =============================================================================
# ENGINE
# =============================================================================


class PiEngine:
    """
    Мемоизация π по количеству знаков.

    Глобальный lock защищает только словарь per-key локов; само вычисление
    выполняется под локом своего ключа, поэтому запросы разных ключей
    не блокируют друг друга.

    Attributes:
        computation_count: Сколько раз выполнялось вычисление ряда
            (instrumentation counter)
    """

    def __init__(self):
        self._cache: dict[int, Decimal] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[int, threading.Lock] = {}
        self.computation_count = 0

    def of_num_digits(self, num_digits: int) -> Decimal:
        """
        π с num_digits знаками после запятой (усечение к нулю).

        Examples:
            >>> PiEngine().of_num_digits(5)
            Decimal('3.14159')

        Raises:
            InvalidArgument: Если num_digits <= 0
        """
        validate_positive_int(num_digits, "num_digits")

        cached = self._cache.get(num_digits)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._key_locks.setdefault(num_digits, threading.Lock())

        with key_lock:
            cached = self._cache.get(num_digits)
            if cached is not None:
                return cached

            logger.debug("Pi cache miss: num_digits=%d", num_digits)
            value = calculate_pi(num_digits)
            with self._lock:
                self._cache[num_digits] = value
                self.computation_count += 1
                self._key_locks.pop(num_digits, None)
            return value

    def cached_digit_counts(self) -> list[int]:
        """Ключи, для которых π уже вычислено."""
        with self._lock:
            return sorted(self._cache)


# Глобальный экземпляр
_PI_ENGINE = PiEngine()


def pi_of_num_digits(num_digits: int) -> Decimal:
    """π с num_digits знаками после запятой из процессного кэша."""
    return _PI_ENGINE.of_num_digits(num_digits)
