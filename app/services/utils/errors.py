# app/services/utils/errors.py


class ScheduleError(Exception):
    """Базовое исключение сервиса расписания."""


class FeedFormatError(ScheduleError):
    """Ответ сервера не похож ни на один из известных форматов расписания."""


class ScheduleFetchError(ScheduleError):
    """Не удалось получить расписание от сервера (сеть, HTTP-код, битый JSON)."""


class BaselineMissingError(ScheduleError):
    """Дата начала семестра отсутствует или не распознана."""
