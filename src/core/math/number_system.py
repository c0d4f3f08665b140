"""
NumberSystem — абстракция арифметики над подключаемым числовым представлением

Стратегия, предоставляющая арифметические примитивы над абстрактным
числовым значением. Реализации обнаруживаются через реестр
(см. src.core.math.registry) и идентифицируются строкой name.

Обязательные возможности:
- add / subtract / multiply / divide / power / sqrt
- compare / is_exact
- to_decimal_string / from_decimal_string (канонический десятичный текст)

Производные операции (negate, abs, reciprocal, signum, is_zero, is_one,
is_less_than_one, narrow) выражены через обязательные и могут быть
переопределены реализацией.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from src.core.math.precision import PrecisionContext


class NumberSystem(ABC):
    """
    Базовый класс стратегии арифметики.

    Все неточные операции принимают необязательный context (локальный
    override точности); без него используется процессный PrecisionContext.
    Ошибки примитивов (деление на ноль, переполнение) не подавляются.
    """

    name: ClassVar[str]

    # -------------------------------------------------------------------------
    # Обязательные возможности
    # -------------------------------------------------------------------------

    @abstractmethod
    def add(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        """x + y"""

    @abstractmethod
    def subtract(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        """x - y"""

    @abstractmethod
    def multiply(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        """x * y"""

    @abstractmethod
    def divide(self, x: Any, y: Any, context: PrecisionContext | None = None) -> Any:
        """x / y (ZeroDivisionError при y == 0)"""

    @abstractmethod
    def power(self, x: Any, exponent: Any, context: PrecisionContext | None = None) -> Any:
        """x ** exponent"""

    @abstractmethod
    def sqrt(self, x: Any, context: PrecisionContext | None = None) -> Any:
        """Квадратный корень x (x >= 0)"""

    @abstractmethod
    def compare(self, x: Any, y: Any) -> int:
        """-1 если x < y, 0 если x == y, +1 если x > y (NaN → InvalidArgument)"""

    @abstractmethod
    def is_exact(self, x: Any) -> bool:
        """True если значение представлено без погрешности округления"""

    @abstractmethod
    def to_decimal_string(self, x: Any, context: PrecisionContext | None = None) -> str:
        """Канонический десятичный текст (plain notation, без экспоненты)"""

    @abstractmethod
    def from_decimal_string(self, text: str) -> Any:
        """Разбор канонического десятичного текста (InvalidArgument при ошибке)"""

    # -------------------------------------------------------------------------
    # Производные операции
    # -------------------------------------------------------------------------

    def zero(self) -> Any:
        return self.from_decimal_string("0")

    def one(self) -> Any:
        return self.from_decimal_string("1")

    def negate(self, x: Any) -> Any:
        return self.subtract(self.zero(), x)

    def abs(self, x: Any) -> Any:
        return self.negate(x) if self.signum(x) < 0 else x

    def reciprocal(self, x: Any, context: PrecisionContext | None = None) -> Any:
        return self.divide(self.one(), x, context)

    def signum(self, x: Any) -> int:
        return self.compare(x, self.zero())

    def is_zero(self, x: Any) -> bool:
        return self.compare(x, self.zero()) == 0

    def is_one(self, x: Any) -> bool:
        return self.compare(x, self.one()) == 0

    def is_less_than_one(self, x: Any) -> bool:
        """|x| < 1"""
        return self.compare(self.abs(x), self.one()) < 0

    def narrow(self, x: Any) -> Any:
        """Наиболее компактное представление того же значения."""
        return x

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
