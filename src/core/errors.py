"""
Errors — таксономия ошибок numeric kernel

Все ошибки поднимаются синхронно к непосредственному вызывающему коду.
Ошибки нижележащих числовых примитивов (ZeroDivisionError, сигналы decimal,
OverflowError) НЕ оборачиваются и пропагируют без изменений.
"""


class CalculusError(Exception):
    """Базовый класс для всех ошибок numeric kernel."""


class InvalidArgument(CalculusError, ValueError):
    """
    Недопустимый аргумент операции.

    Например: запрос π с num_digits <= 0.
    """


class NotFound(CalculusError, LookupError):
    """
    Запрошенный NumberSystem не найден среди обнаруженных провайдеров.
    """


class InvalidConfiguration(CalculusError, ValueError):
    """
    Недопустимая конфигурация точности (significant_digits <= 0 и т.п.).

    При возникновении предыдущий PrecisionContext остаётся активным.
    """
