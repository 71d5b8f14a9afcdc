# app/services/core/lesson_progress.py

import logging
from datetime import datetime, time
from typing import Union

from app.services.utils.data_validator import parse_time_str
from app.services.utils.enums import DayNameStyle
from app.services.utils.weekdays import DAYS_EN, DAYS_RU

log = logging.getLogger(__name__)


def progress(time_start: Union[str, time], time_end: Union[str, time], is_today: bool, now: datetime) -> float:
    """
    Доля прошедшего времени пары, от 0.0 до 1.0.
    Для пар не сегодняшнего дня всегда 0.0. Битое время тоже даёт 0.0.
    """
    if not is_today:
        return 0.0

    start_t, end_t = parse_time_str(time_start), parse_time_str(time_end)
    if not start_t or not end_t:
        log.debug(f"Не удалось распознать время пары {time_start!r}-{time_end!r}")
        return 0.0

    start_dt = datetime.combine(now.date(), start_t)
    end_dt = datetime.combine(now.date(), end_t)
    current_dt = now.replace(tzinfo=None)

    total = (end_dt - start_dt).total_seconds()
    if total <= 0:
        return 0.0
    if current_dt < start_dt:
        return 0.0
    if current_dt > end_dt:
        return 1.0
    return (current_dt - start_dt).total_seconds() / total


def is_today(day_name: str, now: datetime, day_style: DayNameStyle = DayNameStyle.RU) -> bool:
    """Совпадает ли день расписания с сегодняшним днём недели."""
    index = now.weekday()
    if day_style is DayNameStyle.EN:
        return index < len(DAYS_EN) and DAYS_EN[index] == day_name
    return DAYS_RU[index] == day_name
