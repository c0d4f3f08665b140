"""
Numerical Safeguards — проверки аргументов и безопасное усечение Decimal

Модуль обеспечивает:
- Валидацию целочисленных параметров точности (digits, significant_digits)
- Усечение Decimal к заданному количеству знаков после запятой (toward zero)
  без зависимости от глобального decimal-контекста

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bool никогда не принимается в качестве целого числа
2. Усечение никогда не округляет вверх и никогда не теряет старшие разряды
3. Все операции детерминированы и воспроизводимы
"""

from decimal import ROUND_DOWN, Context, Decimal
from typing import Final

from src.core.errors import InvalidArgument

# Запас разрядов для контекста quantize (знак + возможный перенос)
QUANTIZE_PREC_MARGIN: Final[int] = 2


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_strict_int(value: object) -> bool:
    """
    Проверка, что значение является int, но не bool.

    Args:
        value: Проверяемое значение

    Returns:
        True если value — int (bool исключён)
    """
    return isinstance(value, int) and not isinstance(value, bool)


def validate_positive_int(value: object, name: str) -> int:
    """
    Валидация, что значение — положительное целое.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidArgument: Если value не int или value <= 0

    Examples:
        >>> validate_positive_int(5, "num_digits")
        5
        >>> validate_positive_int(0, "num_digits")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        InvalidArgument: num_digits is required to be greater than zero, got 0
    """
    if not is_strict_int(value):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")

    if value <= 0:
        raise InvalidArgument(f"{name} is required to be greater than zero, got {value}")

    return value


# =============================================================================
# УСЕЧЕНИЕ DECIMAL
# =============================================================================


def truncate_to_scale(value: Decimal, digits: int) -> Decimal:
    """
    Усечение Decimal до digits знаков после запятой (round toward zero).

    Контекст quantize подбирается по величине значения, поэтому глобальная
    точность decimal не влияет на результат.

    Args:
        value: Исходное конечное значение
        digits: Количество знаков после запятой (>= 0)

    Returns:
        Decimal с exponent == -digits

    Raises:
        InvalidArgument: Если digits < 0 или value не конечен

    Examples:
        >>> truncate_to_scale(Decimal("3.14159"), 2)
        Decimal('3.14')
        >>> truncate_to_scale(Decimal("-2.999"), 1)
        Decimal('-2.9')
    """
    if not is_strict_int(digits) or digits < 0:
        raise InvalidArgument(f"digits must be a non-negative integer, got {digits!r}")

    if not value.is_finite():
        raise InvalidArgument(f"Cannot truncate non-finite value {value}")

    integer_digits = max(value.adjusted() + 1, 1)
    context = Context(prec=integer_digits + digits + QUANTIZE_PREC_MARGIN, rounding=ROUND_DOWN)
    return value.quantize(Decimal(1).scaleb(-digits), context=context)


def decimal_from_scaled_int(scaled: int, digits: int) -> Decimal:
    """
    Точное построение Decimal из fixed-point целого: scaled * 10^(-digits).

    Не использует decimal-контекст (никакого округления).

    Args:
        scaled: Целое в fixed-point представлении
        digits: Количество дробных разрядов (>= 0)

    Returns:
        Decimal с exponent == -digits

    Examples:
        >>> decimal_from_scaled_int(314159, 5)
        Decimal('3.14159')
    """
    sign = 1 if scaled < 0 else 0
    coefficient = tuple(int(ch) for ch in str(abs(scaled)))
    return Decimal((sign, coefficient, -digits))
