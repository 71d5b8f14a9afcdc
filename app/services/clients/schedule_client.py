# app/services/clients/schedule_client.py

import logging
from typing import Any, Dict, Optional

import requests

from config import Config
from app.services.utils.data_validator import parse_iso_date
from app.services.utils.errors import ScheduleFetchError
from app.services.utils.pair_timetable import Pair, parse_timetable

log = logging.getLogger(__name__)

HEADERS = {
    'Accept': 'application/json',
    'User-Agent': 'group-schedule-service/0.1',
}


def _get_json(url: str, params: Optional[Dict[str, str]] = None) -> Any:
    response = requests.get(url, params=params, headers=HEADERS, timeout=Config.REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


def fetch_raw_schedule(group: str) -> Any:
    """
    Получает "сырое" расписание группы с сервера.
    Повторных попыток не делает: при ошибке бросает ScheduleFetchError.
    """
    log.info(f"Запрос расписания группы '{group}' с {Config.SCHEDULE_API_URL}...")
    try:
        payload = _get_json(Config.SCHEDULE_API_URL, params={'group': group})
    except requests.exceptions.HTTPError as e:
        raise ScheduleFetchError(f"HTTP ошибка при запросе расписания '{group}': {e}") from e
    except requests.exceptions.RequestException as e:
        raise ScheduleFetchError(f"Сетевая ошибка при запросе расписания '{group}': {e}") from e
    except ValueError as e:
        raise ScheduleFetchError(f"Сервер вернул некорректный JSON для '{group}': {e}") from e

    log.info(f"Расписание группы '{group}' успешно получено.")
    return payload


def fetch_timetable() -> Optional[Dict[int, Pair]]:
    """Сетка пар с сервера. None, если адрес не задан или запрос не удался."""
    if not Config.TIMETABLE_API_URL:
        return None
    try:
        pairs = parse_timetable(_get_json(Config.TIMETABLE_API_URL))
    except (requests.exceptions.RequestException, ValueError) as e:
        log.warning(f"Не удалось получить сетку пар ({e}). Используется сетка по умолчанию.")
        return None
    return pairs or None


def get_semester_start() -> Optional[str]:
    """
    Дата начала семестра в формате yyyy-MM-dd.
    Сначала спрашиваем сервер (если задан SEMESTER_META_URL), затем берём SEMESTER_START из .env.
    """
    if Config.SEMESTER_META_URL:
        try:
            meta = _get_json(Config.SEMESTER_META_URL)
            semester_start = meta.get('semester_start') if isinstance(meta, dict) else None
            if parse_iso_date(semester_start):
                return semester_start
            log.warning(f"В ответе {Config.SEMESTER_META_URL} нет корректного 'semester_start': {meta!r}")
        except (requests.exceptions.RequestException, ValueError) as e:
            log.warning(f"Не удалось получить дату начала семестра ({e}).")

    return Config.SEMESTER_START or None
