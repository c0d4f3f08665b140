"""
PrecisionContext — глобальная конфигурация точности и округления

Процессный singleton, который читает каждая неточная арифметическая операция
(если не передан локальный override). Замена контекста — атомарный swap
одного слота: читатели всегда видят полностью построенный контекст.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. significant_digits > 0 (иначе InvalidConfiguration, прежний контекст остаётся)
2. Истории версий нет: set() просто заменяет значение
3. Вызов, прочитавший контекст на входе, использует его до конца, даже если
   параллельный writer уже заменил контекст (документированная гонка)
"""

import decimal
import logging
import threading
from collections.abc import Mapping
from typing import Any, Final

import jsonschema
from pydantic import BaseModel, Field, ValidationError

from src.core.config import get_settings
from src.core.contracts import validate_precision_context
from src.core.errors import InvalidConfiguration
from src.core.rounding import RoundingPolicy

logger = logging.getLogger(__name__)

# =============================================================================
# GUARD DIGITS
# =============================================================================

# Запас разрядов сверх запрошенной точности для промежуточных вычислений.
# Эвристика без доказанной оценки ошибки: поглощает ошибку усечения ряда
# и ошибки округления промежуточных делений.
GUARD_DIGITS: Final[int] = 10

# IEEE 754 decimal128
DECIMAL128_DIGITS: Final[int] = 34


def working_precision(digits: int) -> int:
    """Рабочая точность для запроса digits знаков: digits + GUARD_DIGITS."""
    return digits + GUARD_DIGITS


# =============================================================================
# MODEL
# =============================================================================


class PrecisionContext(BaseModel):
    """
    Точность и политика округления для неточной арифметики.

    Immutable: изменить активный контекст можно только заменой через set().
    """

    significant_digits: int = Field(..., gt=0, strict=True, description="Значащие десятичные разряды")
    rounding: RoundingPolicy = Field(RoundingPolicy.HALF_EVEN, description="Политика округления")

    model_config = {"frozen": True}

    def to_decimal_context(self) -> decimal.Context:
        """Новый decimal.Context с той же точностью и округлением."""
        return decimal.Context(prec=self.significant_digits, rounding=self.rounding.decimal_rounding)


DECIMAL128 = PrecisionContext(significant_digits=DECIMAL128_DIGITS, rounding=RoundingPolicy.HALF_EVEN)


def default_precision_context() -> PrecisionContext:
    """
    Контекст по умолчанию из настроек (decimal128, если не переопределено).

    Raises:
        InvalidConfiguration: Если переменные окружения UNITS_CALCULUS_PRECISION_*
            не проходят валидацию
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid precision settings in environment: {e}") from e
    return PrecisionContext(
        significant_digits=settings.precision_significant_digits,
        rounding=settings.precision_rounding,
    )


def coerce_precision_context(context: PrecisionContext | Mapping[str, Any]) -> PrecisionContext:
    """
    Приведение аргумента set() к PrecisionContext.

    Mapping проверяется по контракту precision_context, затем строится модель.

    Raises:
        InvalidConfiguration: Если контекст не соответствует контракту
    """
    if isinstance(context, PrecisionContext):
        return context

    if not isinstance(context, Mapping):
        raise InvalidConfiguration(
            f"Precision context must be a PrecisionContext or a mapping, got {type(context).__name__}"
        )

    data = dict(context)
    try:
        validate_precision_context(data)
        return PrecisionContext.model_validate(data)
    except (jsonschema.ValidationError, ValidationError) as e:
        raise InvalidConfiguration(f"Invalid precision context {data!r}: {e}") from e


# =============================================================================
# HOLDER
# =============================================================================


class PrecisionContextHolder:
    """
    Single-slot holder активного PrecisionContext.

    Ленивая инициализация значением по умолчанию при первом get(),
    затем атомарная замена через set().
    """

    def __init__(self, initial: PrecisionContext | None = None):
        self._lock = threading.Lock()
        self._context: PrecisionContext | None = initial

    def get(self) -> PrecisionContext:
        """Активный контекст."""
        context = self._context
        if context is None:
            with self._lock:
                if self._context is None:
                    self._context = default_precision_context()
                    logger.debug("Precision context initialised to %s", self._context)
                context = self._context
        return context

    def set(self, context: PrecisionContext | Mapping[str, Any]) -> PrecisionContext:
        """
        Замена активного контекста для всех последующих вызовов.

        Args:
            context: PrecisionContext или mapping
                {"significant_digits": int, "rounding": str}

        Returns:
            Установленный контекст

        Raises:
            InvalidConfiguration: Если significant_digits <= 0 или данные
                не соответствуют контракту (прежний контекст остаётся активным)
        """
        new_context = coerce_precision_context(context)
        with self._lock:
            self._context = new_context
        logger.debug("Precision context set to %s", new_context)
        return new_context

    def reset(self) -> None:
        """Сброс к значению по умолчанию (будет вычислено при следующем get())."""
        with self._lock:
            self._context = None


# Глобальный экземпляр
_PRECISION = PrecisionContextHolder()


def get_precision_context() -> PrecisionContext:
    """Активный процессный PrecisionContext."""
    return _PRECISION.get()


def set_precision_context(context: PrecisionContext | Mapping[str, Any]) -> PrecisionContext:
    """Атомарная замена процессного PrecisionContext (см. PrecisionContextHolder.set)."""
    return _PRECISION.set(context)


def reset_precision_context() -> None:
    """Сброс процессного PrecisionContext к значению по умолчанию."""
    _PRECISION.reset()


def resolve_precision_context(context: PrecisionContext | None = None) -> PrecisionContext:
    """Локальный override, если передан, иначе активный процессный контекст."""
    if context is not None:
        return context
    return get_precision_context()
