"""
ConverterKind — канонический порядок видов конвертеров (normal form)

Фиксированная классификация видов элементарных конвертеров единиц в
целочисленные ранги. Проход упрощения композиции (внешний) сортирует
цепочку шагов по рангу, чтобы привести её к канонической форме без
изменения итогового преобразования.

Таблица рангов:
    IDENTITY             0
    INTEGER_POWER_SCALE  1
    RATIONAL_SCALE       2
    PI_POWER_SCALE       3
    FLOATING_MULTIPLY    4
    ADDITIVE_SHIFT       5
    LOGARITHMIC          6
    EXPONENTIAL          7
    COMPOSITE_PAIR      99

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица заполняется ровно один раз (first call wins), затем неизменна
2. rank() — чистая функция; is_reordering_barrier() — отдельный предикат
3. COMPOSITE_PAIR — барьер: шаги не переставляются через него, его
   внутренние шаги не ранжируются
4. Сортировка стабильна: равные ранги сохраняют исходный порядок
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final, TypeVar

from src.core.errors import InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# ENUMS
# =============================================================================


class ConverterKind(str, Enum):
    """Вид элементарного конвертера"""

    IDENTITY = "IDENTITY"
    INTEGER_POWER_SCALE = "INTEGER_POWER_SCALE"
    RATIONAL_SCALE = "RATIONAL_SCALE"
    PI_POWER_SCALE = "PI_POWER_SCALE"
    FLOATING_MULTIPLY = "FLOATING_MULTIPLY"
    ADDITIVE_SHIFT = "ADDITIVE_SHIFT"
    LOGARITHMIC = "LOGARITHMIC"
    EXPONENTIAL = "EXPONENTIAL"
    COMPOSITE_PAIR = "COMPOSITE_PAIR"


_RANKS: Final[tuple[tuple[ConverterKind, int], ...]] = (
    (ConverterKind.IDENTITY, 0),
    (ConverterKind.INTEGER_POWER_SCALE, 1),
    (ConverterKind.RATIONAL_SCALE, 2),
    (ConverterKind.PI_POWER_SCALE, 3),
    (ConverterKind.FLOATING_MULTIPLY, 4),
    (ConverterKind.ADDITIVE_SHIFT, 5),
    (ConverterKind.LOGARITHMIC, 6),
    (ConverterKind.EXPONENTIAL, 7),
    (ConverterKind.COMPOSITE_PAIR, 99),
)


# =============================================================================
# ORDER TABLE
# =============================================================================


class NormalFormOrderTable:
    """
    Лениво заполняемая таблица рангов.

    Первый вызов get() заполняет таблицу под локом; все последующие
    возвращают тот же read-only MappingProxyType.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._view: Mapping[ConverterKind, int] | None = None

    def get(self) -> Mapping[ConverterKind, int]:
        view = self._view
        if view is None:
            with self._lock:
                if self._view is None:
                    self._view = MappingProxyType(dict(_RANKS))
                    logger.debug("Normal form order table populated with %d kinds", len(_RANKS))
                view = self._view
        return view


# Глобальный экземпляр
_NORMAL_FORM_ORDER = NormalFormOrderTable()


def get_normal_form_order() -> Mapping[ConverterKind, int]:
    """Неизменяемая таблица ConverterKind → ранг (один и тот же экземпляр)."""
    return _NORMAL_FORM_ORDER.get()


def as_converter_kind(kind: ConverterKind | str) -> ConverterKind:
    """
    Приведение значения к ConverterKind.

    Raises:
        InvalidArgument: Если значение не является видом конвертера
    """
    try:
        return ConverterKind(kind)
    except ValueError as e:
        raise InvalidArgument(f"Unknown converter kind {kind!r}") from e


def rank(kind: ConverterKind) -> int:
    """Ранг вида конвертера (InvalidArgument для неизвестного вида)."""
    return get_normal_form_order()[as_converter_kind(kind)]


def is_reordering_barrier(kind: ConverterKind) -> bool:
    """True для непрозрачной пары (COMPOSITE_PAIR): через неё шаги не переставляются."""
    return as_converter_kind(kind) is ConverterKind.COMPOSITE_PAIR


# =============================================================================
# NORMALIZATION
# =============================================================================


def sort_by_normal_form(
    steps: Iterable[T],
    kind_of: Callable[[T], ConverterKind] = lambda step: step,
) -> list[T]:
    """
    Приведение цепочки шагов к канонической форме.

    Цепочка делится барьерами на сегменты; каждый сегмент стабильно
    сортируется по рангу; барьеры остаются на своих местах, их содержимое
    не анализируется.

    Args:
        steps: Последовательность шагов (ConverterKind или произвольные объекты)
        kind_of: Извлечение ConverterKind из шага (default: сам шаг)

    Returns:
        Новый список шагов в канонической форме

    Examples:
        >>> sort_by_normal_form([ConverterKind.LOGARITHMIC, ConverterKind.IDENTITY])
        [<ConverterKind.IDENTITY: 'IDENTITY'>, <ConverterKind.LOGARITHMIC: 'LOGARITHMIC'>]
    """
    result: list[T] = []
    segment: list[T] = []

    for step in steps:
        kind = kind_of(step)
        if is_reordering_barrier(kind):
            result.extend(sorted(segment, key=lambda s: rank(kind_of(s))))
            result.append(step)
            segment = []
        else:
            segment.append(step)

    result.extend(sorted(segment, key=lambda s: rank(kind_of(s))))
    return result
