# app/services/parsers/schedule_normalizer.py

import logging
from typing import Dict, Iterable

from .common_structs import GroupedSchedule, LessonView, RawEntry, WeekSchedule

from app.services.utils.data_validator import extract_lesson_type, format_time
from app.services.utils.enums import DayNameStyle, WeekParity
from app.services.utils.weekdays import resolve_day_name


log = logging.getLogger(__name__)


def build_lesson_view(entry: RawEntry) -> LessonView:
    """
    Проекция RawEntry в LessonView.
    Тип занятия берётся из скобок в конце названия ('Физика [Лаб]' -> 'Лаб'),
    само название при этом остаётся целиком, вместе со скобками.
    """
    lesson_type = extract_lesson_type(entry.subject_name)
    return LessonView(
        name=entry.subject_name,
        classroom=entry.room,
        teacher=entry.teacher,
        teacher_full=entry.teacher_full,
        type=lesson_type if lesson_type is not None else entry.lesson_type,
        time_start=format_time(entry.time_start),
        time_end=format_time(entry.time_end),
    )


def normalize(entries: Iterable[RawEntry], day_style: DayNameStyle = DayNameStyle.RU) -> GroupedSchedule:
    """
    Группирует плоский список занятий: тип недели -> день -> номер пары.
    Записи с неверным днём или типом недели пропускаются, при совпадении ключей
    побеждает последняя запись.
    """
    weeks: Dict[WeekParity, WeekSchedule] = {parity: {} for parity in WeekParity}
    skipped = 0

    for entry in entries:
        day_name = resolve_day_name(entry.weekday, day_style)
        if day_name is None:
            log.warning(f"Пропуск '{entry.subject_name}': неверный день недели {entry.weekday!r}")
            skipped += 1
            continue

        try:
            parity = WeekParity(entry.week_parity)
        except ValueError:
            log.warning(f"Пропуск '{entry.subject_name}': неверный тип недели {entry.week_parity!r}")
            skipped += 1
            continue

        slot_key = str(entry.slot_code)
        day_lessons = weeks[parity].setdefault(day_name, {})
        if slot_key in day_lessons:
            log.debug(f"Дубликат пары {int(parity)}/{day_name}/{slot_key}: "
                      f"'{day_lessons[slot_key].name}' заменена на '{entry.subject_name}'")
        day_lessons[slot_key] = build_lesson_view(entry)

    if skipped:
        log.info(f"Нормализация завершена, пропущено записей: {skipped}.")
    return GroupedSchedule(weeks=weeks, day_style=day_style, skipped=skipped)
