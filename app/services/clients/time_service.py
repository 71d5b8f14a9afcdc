# app/services/clients/time_service.py

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from app.services.utils.weekdays import DAYS_RU


log = logging.getLogger(__name__)


MONTHS_RU = [
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря"
]


@dataclass(frozen=True)
class CurrentTimeInfo:
    """Структура для хранения информации о текущем времени."""
    now: datetime
    day_name: str
    date_str_display: str  # '17 октября 2025 г.'
    time_obj: time


def get_current_time_info(now: Optional[datetime] = None) -> CurrentTimeInfo:
    """
    Определяет текущий день недели, дату и время по часам устройства.
    Это единственное место, где читаются часы; дальше "сейчас" передаётся явно.
    """
    local_datetime = now or datetime.now()

    day_name = DAYS_RU[local_datetime.weekday()]
    date_str_display = f"{local_datetime.day} {MONTHS_RU[local_datetime.month - 1]} {local_datetime.year} г."

    log.debug(f"Текущее время: {day_name}, {local_datetime.strftime('%H:%M:%S')}")

    return CurrentTimeInfo(
        now=local_datetime,
        day_name=day_name,
        date_str_display=date_str_display,
        time_obj=local_datetime.time()
    )
