import re
from datetime import date, datetime, time
from typing import Optional


def parse_time_str(time_str) -> Optional[time]:
    """
    Парсит время из строки.
    Понимает "9:00", "09.00" и ISO-формат даты-времени "0001-01-01T09:00:00".
    """
    if isinstance(time_str, time):
        return time_str
    if isinstance(time_str, datetime):
        return time_str.time()

    raw = str(time_str).strip()
    # У ISO-строки берём только часть после 'T'
    if 'T' in raw:
        raw = raw.split('T', 1)[1]
    match = re.match(r'(\d{1,2})[.:](\d{2})', raw)
    if match:
        h, m = map(int, match.groups())
        if 0 <= h < 24 and 0 <= m < 60:
            return time(h, m)
    return None


def parse_iso_date(date_str) -> Optional[date]:
    """Парсит дату в формате yyyy-MM-dd. Возвращает None, если дату распознать не удалось."""
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    if not date_str:
        return None
    try:
        return datetime.strptime(str(date_str).strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


def extract_lesson_type(subject_name: str) -> Optional[str]:
    """
    Достаёт тип занятия из квадратных скобок в конце названия предмета.
    Пример: 'Физика [Лаб]' -> 'Лаб'. Если скобок в конце нет, возвращает None.
    """
    match = re.search(r'\[([^\[\]]*)\]\s*$', str(subject_name))
    if match:
        return match.group(1).strip()
    return None


def format_time(value: time) -> str:
    """time -> 'HH:MM'."""
    return value.strftime('%H:%M')
