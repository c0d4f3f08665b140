"""Calculus — публичный фасад numeric kernel.

- NumberSystem: текущая система, поиск по имени, список доступных
- PrecisionContext: get/set глобальной точности
- Pi.of_num_digits: π с произвольной точностью
- get_normal_form_order: канонический порядок видов конвертеров
"""

from src.core.errors import CalculusError, InvalidArgument, InvalidConfiguration, NotFound

from .facade import (
    Pi,
    current_number_system,
    get_available_number_systems,
    get_normal_form_order,
    get_number_system,
    get_precision_context,
    pi_of_num_digits,
    set_current_number_system,
    set_precision_context,
)

__all__ = [
    # Errors
    "CalculusError",
    "InvalidArgument",
    "InvalidConfiguration",
    "NotFound",
    # Facade
    "Pi",
    "current_number_system",
    "get_available_number_systems",
    "get_normal_form_order",
    "get_number_system",
    "get_precision_context",
    "pi_of_num_digits",
    "set_current_number_system",
    "set_precision_context",
]
