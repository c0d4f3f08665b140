"""
Альтернативные NumberSystem, поставляемые как плагины

- DecimalNumberSystem ("decimal"): каждое значение — Decimal, округлённый
  по активному PrecisionContext
- FloatNumberSystem ("float"): IEEE-754 binary64, PrecisionContext игнорируется

Обе реализации публикуются через entry-point группу
units_calculus.number_systems и не подключаются к реестру напрямую.
"""

import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import Any, Final

from src.core.errors import InvalidArgument
from src.core.math.default_number_system import check_comparable, check_number, to_decimal
from src.core.math.number_system import NumberSystem
from src.core.math.precision import PrecisionContext, resolve_precision_context

# Наибольшее целое, точно представимое в binary64
FLOAT_EXACT_INT_LIMIT: Final[int] = 2**53


class DecimalNumberSystem(NumberSystem):
    """Decimal-арифметика с фиксированной значащей точностью."""

    name = "decimal"

    def _context(self, context: PrecisionContext | None) -> decimal.Context:
        return resolve_precision_context(context).to_decimal_context()

    def _binary(self, op: str, x: Any, y: Any, context: PrecisionContext | None) -> Decimal:
        ctx = self._context(context)
        return getattr(ctx, op)(to_decimal(x, ctx), to_decimal(y, ctx))

    def add(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Decimal:
        return self._binary("add", x, y, context)

    def subtract(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Decimal:
        return self._binary("subtract", x, y, context)

    def multiply(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Decimal:
        return self._binary("multiply", x, y, context)

    def divide(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Decimal:
        return self._binary("divide", x, y, context)

    def power(self, x: Any, exponent: Any, context: PrecisionContext | None = None) -> Decimal:
        return self._binary("power", x, exponent, context)

    def sqrt(self, x: Any, context: PrecisionContext | None = None) -> Decimal:
        ctx = self._context(context)
        return ctx.sqrt(to_decimal(x, ctx))

    def compare(self, x: Any, y: Any) -> int:
        # Сравнение без округления: Fraction-операнды сравниваются точно
        check_comparable(x)
        check_comparable(y)
        a = Decimal(repr(x)) if isinstance(x, float) else x
        b = Decimal(repr(y)) if isinstance(y, float) else y
        return (a > b) - (a < b)

    def is_exact(self, x: Any) -> bool:
        """Целое конечное значение."""
        check_number(x)
        if isinstance(x, (int, Fraction)):
            return Fraction(x).denominator == 1
        value = Decimal(repr(x)) if isinstance(x, float) else x
        return value.is_finite() and value == value.to_integral_value()

    def to_decimal_string(self, x: Any, context: PrecisionContext | None = None) -> str:
        ctx = self._context(context)
        return format(to_decimal(x, ctx), "f")

    def from_decimal_string(self, text: str) -> Decimal:
        if not isinstance(text, str):
            raise InvalidArgument(f"Decimal text must be a string, got {type(text).__name__}")
        ctx = self._context(None)
        try:
            return ctx.create_decimal(text.strip())
        except decimal.InvalidOperation as e:
            raise InvalidArgument(f"Invalid decimal text {text!r}") from e


class FloatNumberSystem(NumberSystem):
    """Арифметика двойной точности (binary64)."""

    name = "float"

    @staticmethod
    def _float(x: Any) -> float:
        check_number(x)
        return float(x)

    def add(self, x: Any, y: Any, context: PrecisionContext | None = None) -> float:
        return self._float(x) + self._float(y)

    def subtract(self, x: Any, y: Any, context: PrecisionContext | None = None) -> float:
        return self._float(x) - self._float(y)

    def multiply(self, x: Any, y: Any, context: PrecisionContext | None = None) -> float:
        return self._float(x) * self._float(y)

    def divide(self, x: Any, y: Any, context: PrecisionContext | None = None) -> float:
        return self._float(x) / self._float(y)

    def power(self, x: Any, exponent: Any, context: PrecisionContext | None = None) -> float:
        return math.pow(self._float(x), self._float(exponent))

    def sqrt(self, x: Any, context: PrecisionContext | None = None) -> float:
        return math.sqrt(self._float(x))

    def compare(self, x: Any, y: Any) -> int:
        a = self._float(x)
        b = self._float(y)
        # NaN неупорядочен: без проверки (a > b) - (a < b) дало бы 0
        check_comparable(a)
        check_comparable(b)
        return (a > b) - (a < b)

    def is_exact(self, x: Any) -> bool:
        """Целое значение, точно представимое в binary64."""
        value = self._float(x)
        return value.is_integer() and abs(value) <= FLOAT_EXACT_INT_LIMIT

    def to_decimal_string(self, x: Any, context: PrecisionContext | None = None) -> str:
        return format(Decimal(repr(self._float(x))), "f")

    def from_decimal_string(self, text: str) -> float:
        if not isinstance(text, str):
            raise InvalidArgument(f"Decimal text must be a string, got {type(text).__name__}")
        try:
            return float(text.strip())
        except ValueError as e:
            raise InvalidArgument(f"Invalid decimal text {text!r}") from e
