"""
Calculus — фасад внутренней числовой арифметики

Единственные точки входа для внешнего кода (форматирование/разбор величин,
упрощение композиции конвертеров). Фасад делегирует процессным singleton-ам
ядра и никогда не вызывает внешний код обратно.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from src.core.domain.converter_kind import ConverterKind
from src.core.domain.converter_kind import get_normal_form_order as _get_normal_form_order
from src.core.math import precision as _precision
from src.core.math.number_system import NumberSystem
from src.core.math.pi import pi_of_num_digits
from src.core.math.precision import PrecisionContext
from src.core.math.registry import get_registry


# =============================================================================
# NUMBER SYSTEMS
# =============================================================================


def get_available_number_systems() -> list[NumberSystem]:
    """Все доступные NumberSystem (обнаруживаются заново при каждом вызове)."""
    return get_registry().list_available()


def current_number_system() -> NumberSystem:
    """Текущий NumberSystem для арифметики над числами."""
    return get_registry().current()


def set_current_number_system(system: NumberSystem) -> None:
    """Замена текущего NumberSystem (см. current_number_system)."""
    get_registry().set_current(system)


def get_number_system(name: str) -> NumberSystem:
    """
    NumberSystem по имени.

    Raises:
        NotFound: Если система с таким именем не обнаружена
    """
    return get_registry().lookup(name)


# =============================================================================
# PRECISION
# =============================================================================


def get_precision_context() -> PrecisionContext:
    return _precision.get_precision_context()


def set_precision_context(context: PrecisionContext | Mapping[str, Any]) -> PrecisionContext:
    """
    Raises:
        InvalidConfiguration: Если significant_digits <= 0
    """
    return _precision.set_precision_context(context)


# =============================================================================
# PI
# =============================================================================


class Pi:
    """π с мемоизацией по количеству знаков."""

    def __init__(self):
        raise TypeError("Pi is a utility class and cannot be instantiated")

    @staticmethod
    def of_num_digits(num_digits: int) -> Decimal:
        """
        π, усечённое к нулю до num_digits знаков после запятой.

        Raises:
            InvalidArgument: Если num_digits <= 0
        """
        return pi_of_num_digits(num_digits)


# =============================================================================
# NORMAL FORM TABLE OF COMPOSITION
# =============================================================================


def get_normal_form_order() -> Mapping[ConverterKind, int]:
    """Неизменяемая таблица канонического порядка видов конвертеров."""
    return _get_normal_form_order()
