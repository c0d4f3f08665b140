"""
RoundingPolicy — политики округления decimal-арифметики
"""

import decimal
from enum import Enum


class RoundingPolicy(str, Enum):
    """Политика округления PrecisionContext"""

    HALF_UP = "HALF_UP"
    HALF_EVEN = "HALF_EVEN"
    DOWN = "DOWN"
    UP = "UP"
    CEILING = "CEILING"
    FLOOR = "FLOOR"

    @property
    def decimal_rounding(self) -> str:
        """Соответствующая константа модуля decimal (ROUND_*)."""
        return _DECIMAL_ROUNDING[self]


_DECIMAL_ROUNDING = {
    RoundingPolicy.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingPolicy.HALF_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingPolicy.DOWN: decimal.ROUND_DOWN,
    RoundingPolicy.UP: decimal.ROUND_UP,
    RoundingPolicy.CEILING: decimal.ROUND_CEILING,
    RoundingPolicy.FLOOR: decimal.ROUND_FLOOR,
}
