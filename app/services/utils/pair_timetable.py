# app/services/utils/pair_timetable.py

import logging
from dataclasses import dataclass
from datetime import time
from typing import Dict, Optional

from .data_validator import parse_time_str

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pair:
    """Представляет одну пару с номером, временем начала и окончания."""
    code: int
    start_time: time
    end_time: time


PAIRS: Dict[int, Pair] = {
    1: Pair(code=1, start_time=time(9, 0), end_time=time(10, 20)),
    2: Pair(code=2, start_time=time(10, 30), end_time=time(11, 50)),
    3: Pair(code=3, start_time=time(12, 0), end_time=time(13, 20)),
    4: Pair(code=4, start_time=time(13, 30), end_time=time(14, 50)),
    5: Pair(code=5, start_time=time(15, 0), end_time=time(16, 20)),
    6: Pair(code=6, start_time=time(16, 30), end_time=time(17, 50)),
    7: Pair(code=7, start_time=time(18, 0), end_time=time(19, 20)),
}


def get_pair_by_code(code, timetable: Optional[Dict[int, Pair]] = None) -> Optional[Pair]:
    """
    Возвращает объект Pair по номеру пары.
    Если передана сетка, полученная с сервера, ищем в ней, иначе в сетке по умолчанию.
    """
    try:
        num = int(float(code))
    except (ValueError, TypeError):
        return None

    return (timetable or PAIRS).get(num)


def parse_timetable(payload: dict) -> Dict[int, Pair]:
    """
    Разбирает сетку пар в формате {"1": ["09:00", "10:20"], ...}.
    Строки, которые не удалось разобрать, пропускаются.
    """
    pairs: Dict[int, Pair] = {}
    if not isinstance(payload, dict):
        log.warning(f"Сетка пар имеет неожиданный формат: {type(payload).__name__}")
        return pairs

    for raw_code, bounds in payload.items():
        try:
            code = int(raw_code)
            start_raw, end_raw = bounds[0], bounds[1]
        except (ValueError, TypeError, IndexError, KeyError):
            log.warning(f"Пропуск строки сетки пар '{raw_code}': {bounds!r}")
            continue

        start_t, end_t = parse_time_str(start_raw), parse_time_str(end_raw)
        if not start_t or not end_t or start_t >= end_t:
            log.warning(f"Пропуск пары {code}: некорректное время {start_raw!r}-{end_raw!r}")
            continue
        pairs[code] = Pair(code=code, start_time=start_t, end_time=end_t)

    return pairs
