"""
NumberSystemRegistry — обнаружение и выбор текущего NumberSystem

Провайдеры обнаруживаются через entry-point группу
units_calculus.number_systems (importlib.metadata). Встроенный
DefaultNumberSystem всегда идёт первым. Источник провайдеров инжектируется,
поэтому тесты подставляют собственный список.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. list_available() заново опрашивает источник при каждом вызове
2. current() лениво разрешает систему по умолчанию один раз и возвращает
   тот же экземпляр до явной замены через set_current()
3. lookup() детерминирован для фиксированного набора провайдеров:
   при дубликатах имени выигрывает первый обнаруженный
"""

import logging
import threading
from collections.abc import Callable, Iterable
from importlib.metadata import entry_points
from typing import Final

from src.core.config import get_settings
from src.core.errors import InvalidArgument, NotFound
from src.core.math.default_number_system import DefaultNumberSystem
from src.core.math.number_system import NumberSystem

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP: Final[str] = "units_calculus.number_systems"

ProviderSource = Callable[[], Iterable[NumberSystem]]


# =============================================================================
# DISCOVERY
# =============================================================================


def discover_plugin_number_systems(group: str = ENTRY_POINT_GROUP) -> list[NumberSystem]:
    """
    Загрузка и инстанцирование NumberSystem из entry points группы.

    Порядок — по имени entry point. Ошибки загрузки плагина пропагируют.

    Raises:
        InvalidArgument: Если entry point не является NumberSystem
    """
    systems: list[NumberSystem] = []
    for ep in sorted(entry_points(group=group), key=lambda e: e.name):
        provider = ep.load()
        system = provider() if isinstance(provider, type) else provider
        if not isinstance(system, NumberSystem):
            raise InvalidArgument(f"Entry point {ep.name!r} in {group} does not provide a NumberSystem")
        systems.append(system)
    return systems


def default_provider_source() -> list[NumberSystem]:
    """Встроенный DefaultNumberSystem + все обнаруженные плагины."""
    return [DefaultNumberSystem(), *discover_plugin_number_systems()]


# =============================================================================
# REGISTRY
# =============================================================================


class NumberSystemRegistry:
    """
    Реестр NumberSystem с кэшем текущего выбора.

    Args:
        provider_source: Callable, возвращающий обнаруженных провайдеров
            (default: entry points)
        default_name: Имя системы, выбираемой при первом current()
            (default: настройка default_number_system)
    """

    def __init__(
        self,
        provider_source: ProviderSource | None = None,
        default_name: str | None = None,
    ):
        self._provider_source = provider_source or default_provider_source
        self._default_name = default_name
        self._lock = threading.Lock()
        self._current: NumberSystem | None = None

    @property
    def default_name(self) -> str:
        return self._default_name or get_settings().default_number_system

    def list_available(self) -> list[NumberSystem]:
        """Все обнаруживаемые сейчас провайдеры (без кэширования)."""
        return list(self._provider_source())

    def lookup(self, name: str) -> NumberSystem:
        """
        Провайдер с точным совпадением name.

        Raises:
            NotFound: Если ни один провайдер не совпал
        """
        for system in self._provider_source():
            if system.name == name:
                return system
        raise NotFound(f"NumberSystem {name} not found")

    def current(self) -> NumberSystem:
        """Текущий NumberSystem (лениво разрешается по default_name)."""
        system = self._current
        if system is None:
            with self._lock:
                if self._current is None:
                    self._current = self.lookup(self.default_name)
                    logger.debug("Current number system resolved to %r", self._current)
                system = self._current
        return system

    def set_current(self, system: NumberSystem) -> None:
        """
        Замена текущего NumberSystem.

        Raises:
            InvalidArgument: Если system не является NumberSystem
        """
        if not isinstance(system, NumberSystem):
            raise InvalidArgument(f"Expected a NumberSystem, got {type(system).__name__}")
        with self._lock:
            self._current = system
        logger.debug("Current number system set to %r", system)

    def reset(self) -> None:
        """Сброс выбора: следующий current() снова разрешит систему по умолчанию."""
        with self._lock:
            self._current = None


# Глобальный экземпляр
_REGISTRY = NumberSystemRegistry()


def get_registry() -> NumberSystemRegistry:
    """Процессный реестр NumberSystem."""
    return _REGISTRY
