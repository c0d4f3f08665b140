"""
Core math modules для units-calculus

Точность, подключаемые числовые системы и вычисление π.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    decimal_from_scaled_int,
    is_strict_int,
    truncate_to_scale,
    validate_positive_int,
)

# Precision Context
from src.core.math.precision import (
    DECIMAL128,
    DECIMAL128_DIGITS,
    GUARD_DIGITS,
    PrecisionContext,
    PrecisionContextHolder,
    get_precision_context,
    reset_precision_context,
    resolve_precision_context,
    set_precision_context,
    working_precision,
)

# Number Systems
from src.core.math.number_system import NumberSystem
from src.core.math.default_number_system import DEFAULT_NUMBER_SYSTEM_NAME, DefaultNumberSystem
from src.core.math.registry import (
    ENTRY_POINT_GROUP,
    NumberSystemRegistry,
    discover_plugin_number_systems,
    get_registry,
)

# Pi
from src.core.math.pi import PiEngine, calculate_pi, pi_of_num_digits

__all__ = [
    # Numerical Safeguards
    "decimal_from_scaled_int",
    "is_strict_int",
    "truncate_to_scale",
    "validate_positive_int",
    # Precision Context — Constants
    "DECIMAL128",
    "DECIMAL128_DIGITS",
    "GUARD_DIGITS",
    # Precision Context — Types
    "PrecisionContext",
    "PrecisionContextHolder",
    # Precision Context — Functions
    "get_precision_context",
    "reset_precision_context",
    "resolve_precision_context",
    "set_precision_context",
    "working_precision",
    # Number Systems
    "DEFAULT_NUMBER_SYSTEM_NAME",
    "ENTRY_POINT_GROUP",
    "DefaultNumberSystem",
    "NumberSystem",
    "NumberSystemRegistry",
    "discover_plugin_number_systems",
    "get_registry",
    # Pi
    "PiEngine",
    "calculate_pi",
    "pi_of_num_digits",
]
