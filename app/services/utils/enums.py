# app/services/utils/enums.py

from enum import Enum, IntEnum, auto


class WeekParity(IntEnum):
    """Один из четырёх повторяющихся типов учебной недели (числитель/знаменатель × 1/2)."""
    FIRST = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3


class FeedVariant(Enum):
    """Определяет формат "сырых" данных, пришедших от сервера расписания."""
    FLAT = auto()
    NESTED = auto()


class DayNameStyle(Enum):
    """Словарь названий дней недели, которым подписывается расписание."""
    RU = 'ru'
    EN = 'en'
