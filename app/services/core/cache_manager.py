# app/services/core/cache_manager.py

import logging
import time
from datetime import datetime
from threading import Lock
from typing import Any, Dict, Tuple

from config import Config

from app.services.clients import schedule_client
from app.services.parsers.feed_parser import parse_feed
from app.services.parsers.schedule_normalizer import normalize
from app.services.utils.errors import ScheduleError
from app.services.utils.weekdays import day_style_from_config


log = logging.getLogger(__name__)
thread_lock = Lock()

# {имя группы: (время обновления по time.monotonic(), данные)}
_cache: Dict[str, Tuple[float, Dict[str, Any]]] = {}


def _is_stale(cached) -> bool:
    if cached is None:
        return True
    return (time.monotonic() - cached[0]) > Config.CACHE_DURATION


def get_schedule_data(group: str, force_update: bool = False) -> dict:
    """
    Главная функция. Получает расписание из кэша в памяти или запускает его обновление.

    :param group: Имя группы из конфига.
    :param force_update: Флаг для принудительного обновления, игнорируя CACHE_DURATION.
    """
    if group not in Config.GROUPS:
        return {"error": "Schedule not found"}

    # Дальше работаем только с локальной ссылкой на запись
    cached = _cache.get(group)
    if _is_stale(cached) or force_update:
        if force_update:
            log.warning(f"Принудительное обновление кэша для '{group}' инициировано.")

        with thread_lock:
            # Повторно проверяем, не обновил ли кто-то кэш, пока мы ждали блокировку.
            cached = _cache.get(group)
            if _is_stale(cached) or force_update:
                log.info(f"Блокировка получена. Начинаю обновление кэша для '{group}'.")
                success, message = _update_cache(group)
                cached = _cache.get(group)
                if not success:
                    if cached is None:
                        return {"error": message}
                    log.warning(f"Не удалось обновить '{group}'. Используются ранее полученные данные.")
            else:
                log.info("Блокировка получена, но кэш уже обновлен другим потоком. Обновление пропущено.")

    log.info(f"Загрузка данных для '{group}' из кэша.")
    return cached[1]


def _update_cache(group: str) -> Tuple[bool, str]:
    """
    Внутренняя функция: скачивает, разбирает и нормализует расписание группы.
    Запись в кэше заменяется целиком, старый результат не изменяется.
    """
    try:
        payload = schedule_client.fetch_raw_schedule(group)
        timetable = schedule_client.fetch_timetable()
        feed = parse_feed(payload, timetable)
    except ScheduleError as e:
        log.error(f"Ошибка при обновлении '{group}': {e}")
        return False, str(e)

    schedule = normalize(feed.entries, day_style_from_config(Config.DAY_NAME_STYLE))
    _cache[group] = (time.monotonic(), {
        "schedule": schedule,
        "semester": feed.semester,
        "variant": feed.variant.name,
        "last_updated": datetime.now().strftime('%Y-%m-%dT%H:%M'),
        "skipped": feed.skipped + schedule.skipped,
    })

    msg = f"Кэш для '{group}' успешно обновлен: {schedule.lesson_count()} пар."
    log.info(msg)
    return True, msg


def clear_cache() -> None:
    """Сбрасывает весь кэш."""
    with thread_lock:
        _cache.clear()
