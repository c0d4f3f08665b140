"""
Общие fixtures для тестов numeric kernel.

Процессные singleton-ы (PrecisionContext, текущий NumberSystem, настройки)
сбрасываются до и после каждого теста.
"""

import pytest

from src.core.config import get_settings
from src.core.math.precision import reset_precision_context
from src.core.math.registry import get_registry


@pytest.fixture(autouse=True)
def reset_process_state():
    """Чистое процессное состояние для каждого теста."""
    get_settings.cache_clear()
    reset_precision_context()
    get_registry().reset()
    yield
    get_settings.cache_clear()
    reset_precision_context()
    get_registry().reset()
