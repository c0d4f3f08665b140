"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации numeric kernel.
"""

from .validators import (
    ContractValidator,
    PrecisionContextValidator,
    SchemaLoader,
    validate_precision_context,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PrecisionContextValidator",
    # Functions
    "validate_precision_context",
]
