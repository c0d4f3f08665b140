"""
Тесты для NumberSystemRegistry

Проверяет:
1. list_available() заново опрашивает источник провайдеров
2. Ленивое разрешение системы по умолчанию и кэш текущего выбора
3. set_current() / lookup() / NotFound / дубликаты имён
4. Обнаружение плагинов через entry points
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from importlib.metadata import EntryPoint

import pytest

from src.core.config import get_settings
from src.core.errors import InvalidArgument, NotFound
from src.core.math import registry as registry_module
from src.core.math.default_number_system import DefaultNumberSystem
from src.core.math.registry import (
    ENTRY_POINT_GROUP,
    NumberSystemRegistry,
    default_provider_source,
    discover_plugin_number_systems,
)
from src.core.math.simple_number_systems import DecimalNumberSystem, FloatNumberSystem


class CountingSource:
    """Инжектируемый источник провайдеров со счётчиком вызовов."""

    def __init__(self, *factories):
        self.factories = list(factories)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return [factory() for factory in self.factories]


def _entry_point(name: str, value: str) -> EntryPoint:
    return EntryPoint(name=name, value=value, group=ENTRY_POINT_GROUP)


# =============================================================================
# LISTING / LOOKUP
# =============================================================================


class TestListAvailable:
    """Тесты list_available"""

    def test_requeries_source_every_call(self) -> None:
        source = CountingSource(DefaultNumberSystem)
        registry = NumberSystemRegistry(source)

        assert [ns.name for ns in registry.list_available()] == ["default"]

        source.factories.append(FloatNumberSystem)
        assert [ns.name for ns in registry.list_available()] == ["default", "float"]
        assert source.calls == 2


class TestLookup:
    """Тесты lookup"""

    def test_exact_name_match(self) -> None:
        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem, DecimalNumberSystem))
        assert isinstance(registry.lookup("decimal"), DecimalNumberSystem)

    def test_unknown_name_raises_not_found(self) -> None:
        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem))
        with pytest.raises(NotFound, match="NumberSystem does-not-exist not found"):
            registry.lookup("does-not-exist")

    def test_name_match_is_case_sensitive(self) -> None:
        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem))
        with pytest.raises(NotFound):
            registry.lookup("Default")

    def test_first_discovered_wins_on_duplicates(self) -> None:
        first = DefaultNumberSystem()
        second = DefaultNumberSystem()
        registry = NumberSystemRegistry(lambda: [first, second])
        assert registry.lookup("default") is first

    def test_not_found_is_lookup_error(self) -> None:
        registry = NumberSystemRegistry(CountingSource())
        with pytest.raises(LookupError):
            registry.lookup("default")


# =============================================================================
# CURRENT SELECTION
# =============================================================================


class TestCurrent:
    """Тесты current / set_current"""

    def test_lazy_default_resolution(self) -> None:
        source = CountingSource(DefaultNumberSystem, FloatNumberSystem)
        registry = NumberSystemRegistry(source, default_name="default")
        assert source.calls == 0

        system = registry.current()
        assert isinstance(system, DefaultNumberSystem)
        assert registry.current() is system
        assert source.calls == 1

    def test_set_current_then_current_returns_same_instance(self) -> None:
        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem))
        system = FloatNumberSystem()
        registry.set_current(system)
        assert registry.current() is system

    def test_set_current_rejects_non_number_system(self) -> None:
        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem))
        with pytest.raises(InvalidArgument, match="Expected a NumberSystem"):
            registry.set_current(object())

    def test_missing_default_raises_not_found(self) -> None:
        registry = NumberSystemRegistry(CountingSource(FloatNumberSystem), default_name="default")
        with pytest.raises(NotFound):
            registry.current()

        system = FloatNumberSystem()
        registry.set_current(system)
        assert registry.current() is system

    def test_reset_resolves_again(self) -> None:
        source = CountingSource(DefaultNumberSystem)
        registry = NumberSystemRegistry(source)
        first = registry.current()
        registry.reset()
        second = registry.current()
        assert first is not second
        assert source.calls == 2

    def test_default_name_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UNITS_CALCULUS_DEFAULT_NUMBER_SYSTEM", "decimal")
        get_settings.cache_clear()

        registry = NumberSystemRegistry(CountingSource(DefaultNumberSystem, DecimalNumberSystem))
        assert registry.default_name == "decimal"
        assert isinstance(registry.current(), DecimalNumberSystem)

    def test_concurrent_first_access_resolves_once(self) -> None:
        source = CountingSource(DefaultNumberSystem)
        registry = NumberSystemRegistry(source)
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            return registry.current()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = [f.result() for f in [pool.submit(worker) for _ in range(8)]]

        assert all(result is results[0] for result in results)
        assert source.calls == 1


# =============================================================================
# PLUGIN DISCOVERY
# =============================================================================


class TestPluginDiscovery:
    """Тесты обнаружения плагинов через entry points"""

    def test_entry_points_loaded_sorted_by_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps = [
            _entry_point("float", "src.core.math.simple_number_systems:FloatNumberSystem"),
            _entry_point("decimal", "src.core.math.simple_number_systems:DecimalNumberSystem"),
        ]
        monkeypatch.setattr(registry_module, "entry_points", lambda group: eps)

        systems = discover_plugin_number_systems()
        assert [type(ns) for ns in systems] == [DecimalNumberSystem, FloatNumberSystem]

    def test_default_source_puts_builtin_first(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps = [_entry_point("float", "src.core.math.simple_number_systems:FloatNumberSystem")]
        monkeypatch.setattr(registry_module, "entry_points", lambda group: eps)

        systems = default_provider_source()
        assert [ns.name for ns in systems] == ["default", "float"]

    def test_non_number_system_entry_point_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps = [_entry_point("broken", "builtins:dict")]
        monkeypatch.setattr(registry_module, "entry_points", lambda group: eps)

        with pytest.raises(InvalidArgument, match="does not provide a NumberSystem"):
            discover_plugin_number_systems()

    def test_plugin_load_errors_propagate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps = [_entry_point("missing", "no_such_module_for_units_calculus:Thing")]
        monkeypatch.setattr(registry_module, "entry_points", lambda group: eps)

        with pytest.raises(ModuleNotFoundError):
            discover_plugin_number_systems()

    def test_registry_reflects_plugins_registered_later(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps: list[EntryPoint] = []
        monkeypatch.setattr(registry_module, "entry_points", lambda group: list(eps))
        registry = NumberSystemRegistry()

        assert [ns.name for ns in registry.list_available()] == ["default"]

        eps.append(_entry_point("decimal", "src.core.math.simple_number_systems:DecimalNumberSystem"))
        assert [ns.name for ns in registry.list_available()] == ["default", "decimal"]
