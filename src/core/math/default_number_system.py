"""
DefaultNumberSystem — NumberSystem произвольной точности по умолчанию

Представление значений:
- Точные: int и fractions.Fraction (Fraction со знаменателем 1 сужается до int)
- Неточные: decimal.Decimal (результат округлён по PrecisionContext)
- float принимается на входе и переводится в Decimal через кратчайший repr

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операции над точными значениями остаются точными (int/Fraction)
2. Любая операция с неточным операндом выполняется в Decimal под
   активным PrecisionContext (точность + политика округления)
3. sqrt точен для полных квадратов рациональных чисел
4. Ошибки примитивов (ZeroDivisionError, decimal.InvalidOperation) не подавляются
"""

import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import Any

from src.core.errors import InvalidArgument
from src.core.math.number_system import NumberSystem
from src.core.math.numerical_safeguards import decimal_from_scaled_int
from src.core.math.precision import PrecisionContext, resolve_precision_context

DEFAULT_NUMBER_SYSTEM_NAME = "default"


# =============================================================================
# HELPERS
# =============================================================================


def check_number(x: Any) -> None:
    """
    Проверка, что значение — поддерживаемое число.

    Raises:
        InvalidArgument: Для bool и нечисловых типов
    """
    if isinstance(x, bool) or not isinstance(x, (int, Fraction, Decimal, float)):
        raise InvalidArgument(f"Unsupported numeric value {x!r} ({type(x).__name__})")


def check_comparable(x: Any) -> None:
    """
    Проверка, что значение можно упорядочить (число и не NaN).

    Raises:
        InvalidArgument: Для NaN, bool и нечисловых типов
    """
    check_number(x)
    if (isinstance(x, float) and math.isnan(x)) or (isinstance(x, Decimal) and x.is_nan()):
        raise InvalidArgument(f"Cannot compare NaN value {x!r}")


def is_exact_value(x: Any) -> bool:
    """True для int/Fraction (bool исключён)."""
    return isinstance(x, (int, Fraction)) and not isinstance(x, bool)


def to_decimal(x: Any, ctx: decimal.Context) -> Decimal:
    """
    Перевод значения в Decimal.

    int и Decimal переводятся без округления; Fraction делится под ctx;
    float переводится через кратчайший repr.
    """
    check_number(x)
    if isinstance(x, Decimal):
        return x
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, Fraction):
        return ctx.divide(Decimal(x.numerator), Decimal(x.denominator))
    return Decimal(repr(x))


def terminating_decimal(value: Fraction) -> Decimal | None:
    """
    Точное десятичное представление дроби, если оно конечно.

    Returns:
        Decimal или None, если знаменатель содержит множители кроме 2 и 5
    """
    denominator = value.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return None

    scale = max(twos, fives)
    scaled = value.numerator * (10**scale // value.denominator)
    return decimal_from_scaled_int(scaled, scale)


# =============================================================================
# NUMBER SYSTEM
# =============================================================================


class DefaultNumberSystem(NumberSystem):
    """
    Точная рациональная арифметика с переходом в Decimal для неточных операций.

    Examples:
        >>> ns = DefaultNumberSystem()
        >>> ns.divide(1, 3)
        Fraction(1, 3)
        >>> ns.multiply(Fraction(3, 2), 2)
        3
    """

    name = DEFAULT_NUMBER_SYSTEM_NAME

    def _binary(self, x: Any, y: Any, exact_op, decimal_op: str, context: PrecisionContext | None) -> Any:
        check_number(x)
        check_number(y)
        if is_exact_value(x) and is_exact_value(y):
            return self.narrow(exact_op(Fraction(x), Fraction(y)))

        ctx = resolve_precision_context(context).to_decimal_context()
        return getattr(ctx, decimal_op)(to_decimal(x, ctx), to_decimal(y, ctx))

    def add(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        return self._binary(x, y, lambda a, b: a + b, "add", context)

    def subtract(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        return self._binary(x, y, lambda a, b: a - b, "subtract", context)

    def multiply(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        return self._binary(x, y, lambda a, b: a * b, "multiply", context)

    def divide(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        return self._binary(x, y, lambda a, b: a / b, "divide", context)

    def power(self, x: Any, exponent: Any, context: PrecisionContext | None = None) -> Any:
        """
        x ** exponent.

        Целый показатель над точным основанием даёт точный результат
        (в том числе отрицательный показатель); остальные случаи
        вычисляются в Decimal.
        """
        check_number(x)
        check_number(exponent)
        integral_exponent = is_exact_value(exponent) and Fraction(exponent).denominator == 1

        if integral_exponent and is_exact_value(x):
            return self.narrow(Fraction(x) ** int(exponent))

        ctx = resolve_precision_context(context).to_decimal_context()
        if integral_exponent:
            return ctx.power(to_decimal(x, ctx), int(exponent))
        return ctx.power(to_decimal(x, ctx), to_decimal(exponent, ctx))

    def sqrt(self, x: Any, context: PrecisionContext | None = None) -> Any:
        check_number(x)
        if is_exact_value(x) and x >= 0:
            value = Fraction(x)
            root_num = math.isqrt(value.numerator)
            root_den = math.isqrt(value.denominator)
            if root_num * root_num == value.numerator and root_den * root_den == value.denominator:
                return self.narrow(Fraction(root_num, root_den))

        ctx = resolve_precision_context(context).to_decimal_context()
        return ctx.sqrt(to_decimal(x, ctx))

    def compare(self, x: Any, y: Any) -> int:
        a = self._comparable(x)
        b = self._comparable(y)
        return (a > b) - (a < b)

    def _comparable(self, x: Any) -> Fraction | Decimal:
        check_comparable(x)
        if isinstance(x, float):
            x = Decimal(repr(x))
        if isinstance(x, Decimal) and not x.is_finite():
            return x
        return Fraction(x)

    def is_exact(self, x: Any) -> bool:
        check_number(x)
        return is_exact_value(x)

    def narrow(self, x: Any) -> Any:
        if isinstance(x, Fraction) and x.denominator == 1:
            return int(x)
        return x

    def to_decimal_string(self, x: Any, context: PrecisionContext | None = None) -> str:
        check_number(x)
        if isinstance(x, int):
            return str(x)
        if isinstance(x, Fraction):
            exact = terminating_decimal(x)
            if exact is not None:
                return format(exact, "f")
        ctx = resolve_precision_context(context).to_decimal_context()
        return format(to_decimal(x, ctx), "f")

    def from_decimal_string(self, text: str) -> Any:
        """
        Разбор десятичного текста в точное значение.

        Examples:
            >>> DefaultNumberSystem().from_decimal_string("1.50")
            Fraction(3, 2)
            >>> DefaultNumberSystem().from_decimal_string("2.0")
            2
        """
        if not isinstance(text, str):
            raise InvalidArgument(f"Decimal text must be a string, got {type(text).__name__}")
        try:
            value = Decimal(text.strip())
        except decimal.InvalidOperation as e:
            raise InvalidArgument(f"Invalid decimal text {text!r}") from e

        if not value.is_finite():
            return value
        return self.narrow(Fraction(value))
