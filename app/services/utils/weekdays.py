# app/services/utils/weekdays.py

from typing import Optional, Tuple

from .enums import DayNameStyle


# Воскресенье нужно только для показа текущей даты, в сетку расписания оно не попадает
DAYS_RU = ["Понедельник", "Вторник", "Среда", "Четверг", "Пятница", "Суббота", "Воскресенье"]
DAYS_EN = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

STUDY_DAYS_COUNT = 6

_NAMES_BY_STYLE = {
    DayNameStyle.RU: tuple(DAYS_RU[:STUDY_DAYS_COUNT]),
    DayNameStyle.EN: tuple(DAYS_EN),
}


def canonical_day_names(style: DayNameStyle = DayNameStyle.RU) -> Tuple[str, ...]:
    """Шесть учебных дней (Пн-Сб) в каноническом порядке."""
    return _NAMES_BY_STYLE[style]


def resolve_day_name(weekday: int, style: DayNameStyle = DayNameStyle.RU) -> Optional[str]:
    """
    Переводит номер дня (1 - понедельник ... 6 - суббота) в название.
    Возвращает None, если номер вне диапазона.
    """
    if isinstance(weekday, bool) or not isinstance(weekday, int):
        return None
    if 1 <= weekday <= STUDY_DAYS_COUNT:
        return _NAMES_BY_STYLE[style][weekday - 1]
    return None


def weekday_number(day_name: str) -> Optional[int]:
    """Обратный поиск: название дня в любом из словарей -> номер 1..6."""
    clean_name = str(day_name).strip()
    for names in _NAMES_BY_STYLE.values():
        for index, name in enumerate(names, start=1):
            if name.lower() == clean_name.lower():
                return index
    return None


def day_style_from_config(value: str) -> DayNameStyle:
    """Значение DAY_NAME_STYLE из конфига -> DayNameStyle."""
    try:
        return DayNameStyle(str(value).strip().lower())
    except ValueError:
        return DayNameStyle.RU
