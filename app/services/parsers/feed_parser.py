# app/services/parsers/feed_parser.py

import logging
from typing import Any, Dict, List, Optional

from .common_structs import ParsedFeed, RawEntry

from app.services.utils.data_validator import parse_time_str
from app.services.utils.enums import FeedVariant
from app.services.utils.errors import FeedFormatError
from app.services.utils.pair_timetable import Pair, get_pair_by_code


log = logging.getLogger(__name__)

FLAT_REQUIRED_KEYS = {'name', 'day', 'class', 'week'}


class SkipRecord(Exception):
    """Запись не может быть приведена к RawEntry и будет пропущена."""


# Вспомогательные функции, которые нужны именно этому парсеру
def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise SkipRecord(f"поле '{field_name}' не является числом: {value!r}")
    try:
        return int(value)
    except (ValueError, TypeError):
        raise SkipRecord(f"поле '{field_name}' не является числом: {value!r}")


def _as_str(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _resolve_times(slot_code: int, raw_start: Any, raw_end: Any,
                   timetable: Optional[Dict[int, Pair]]):
    """Время из записи, а если его нет - из сетки пар по номеру пары."""
    if raw_start in (None, '') and raw_end in (None, ''):
        pair = get_pair_by_code(slot_code, timetable)
        if not pair:
            raise SkipRecord(f"нет времени и пара {slot_code} отсутствует в сетке")
        return pair.start_time, pair.end_time

    start_t, end_t = parse_time_str(raw_start), parse_time_str(raw_end)
    if not start_t or not end_t:
        raise SkipRecord(f"не удалось распознать время {raw_start!r}-{raw_end!r}")
    if start_t >= end_t:
        raise SkipRecord(f"время начала {start_t} не раньше времени окончания {end_t}")
    return start_t, end_t


def _entry_from_flat(record: Dict[str, Any], timetable: Optional[Dict[int, Pair]]) -> RawEntry:
    """
    Плоский формат: {name, type, day, class, week, week_recurrence, location, teacher}.
    День в нём считается с нуля, поэтому сдвигаем его на единицу.
    """
    missing = FLAT_REQUIRED_KEYS - set(record)
    if missing:
        raise SkipRecord(f"нет полей {sorted(missing)}")

    slot_code = _as_int(record['class'], 'class')
    time_start, time_end = _resolve_times(slot_code, record.get('time_start'), record.get('time_end'), timetable)
    teacher = _as_str(record.get('teacher'))

    return RawEntry(
        subject_name=_as_str(record['name']),
        lesson_type=_as_str(record.get('type')),
        weekday=_as_int(record['day'], 'day') + 1,
        slot_code=slot_code,
        week_parity=_as_int(record['week'], 'week'),
        room=_as_str(record.get('location')),
        teacher=teacher,
        teacher_full=teacher,
        time_start=time_start,
        time_end=time_end,
    )


def _entry_from_nested(record: Dict[str, Any], timetable: Optional[Dict[int, Pair]]) -> RawEntry:
    """
    Вложенный формат: {Day, DayNumber, Time: {Time, Code, TimeFrom, TimeTo},
    Class: {Code, Name, TeacherFull, Teacher, Form}, Group, Room}.
    DayNumber здесь - это тип недели, а Day - номер дня с единицы.
    """
    time_info = record.get('Time')
    class_info = record.get('Class')
    if not isinstance(time_info, dict) or not isinstance(class_info, dict):
        raise SkipRecord("нет блоков 'Time' или 'Class'")
    if 'Day' not in record or 'DayNumber' not in record:
        raise SkipRecord("нет полей 'Day' или 'DayNumber'")

    slot_code = _as_int(time_info.get('Code'), 'Time.Code')
    time_start, time_end = _resolve_times(slot_code, time_info.get('TimeFrom'), time_info.get('TimeTo'), timetable)

    room = record.get('Room')
    group = record.get('Group')
    teacher = _as_str(class_info.get('Teacher'))

    return RawEntry(
        subject_name=_as_str(class_info.get('Name')),
        lesson_type=_as_str(class_info.get('Form')),
        weekday=_as_int(record['Day'], 'Day'),
        slot_code=slot_code,
        week_parity=_as_int(record['DayNumber'], 'DayNumber'),
        room=_as_str(room.get('Name') if isinstance(room, dict) else room),
        teacher=teacher,
        teacher_full=_as_str(class_info.get('TeacherFull')) or teacher,
        time_start=time_start,
        time_end=time_end,
        group=_as_str(group.get('Name') if isinstance(group, dict) else group),
    )


_ADAPTERS = {
    FeedVariant.FLAT: _entry_from_flat,
    FeedVariant.NESTED: _entry_from_nested,
}


def detect_feed_variant(payload: Any) -> FeedVariant:
    """Определяет, в каком из двух форматов пришёл ответ сервера."""
    if isinstance(payload, dict) and isinstance(payload.get('Data'), list):
        return FeedVariant.NESTED
    if isinstance(payload, list):
        if not payload:
            # Пустой список - законный ответ для группы без занятий
            return FeedVariant.FLAT
        # Хватает одной полной записи, битые потом пропустит адаптер
        if any(FLAT_REQUIRED_KEYS.issubset(item) for item in payload if isinstance(item, dict)):
            return FeedVariant.FLAT
    raise FeedFormatError(f"Неизвестный формат расписания: {type(payload).__name__}")


# --- Главная функция парсера ---

def parse_feed(payload: Any, timetable: Optional[Dict[int, Pair]] = None) -> ParsedFeed:
    """
    Приводит ответ сервера к списку RawEntry.
    Битые записи пропускаются с предупреждением в логе, остальные обрабатываются.
    """
    variant = detect_feed_variant(payload)
    records: List[Any] = payload['Data'] if variant is FeedVariant.NESTED else payload
    adapter = _ADAPTERS[variant]

    entries: List[RawEntry] = []
    skipped = 0
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            log.warning(f"  [✗] Пропуск записи #{index}: ожидался объект, получено {type(record).__name__}")
            skipped += 1
            continue
        try:
            entries.append(adapter(record, timetable))
        except SkipRecord as e:
            log.warning(f"  [✗] Пропуск записи #{index}: {e}")
            skipped += 1

    semester = _as_str(payload.get('Semestr')) if variant is FeedVariant.NESTED else ''
    log.info(f"Разобрано записей: {len(entries)}, пропущено: {skipped} (формат {variant.name}).")
    return ParsedFeed(variant=variant, entries=entries, semester=semester, skipped=skipped)
