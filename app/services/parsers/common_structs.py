# app/services/parsers/common_structs.py

from dataclasses import dataclass, field, asdict
from datetime import time
from typing import Dict, List, Tuple

from app.services.utils.enums import DayNameStyle, FeedVariant, WeekParity
from app.services.utils.weekdays import canonical_day_names


@dataclass(frozen=True)
class RawEntry:
    """
    Каноническая структура одного занятия, к которой приводятся оба формата
    ответа сервера. День недели всегда считается с единицы (1 - понедельник).
    """
    subject_name: str
    lesson_type: str
    weekday: int
    slot_code: int
    week_parity: int
    room: str
    teacher: str
    teacher_full: str
    time_start: time
    time_end: time
    group: str = ''


@dataclass(frozen=True)
class LessonView:
    """Готовая к показу пара: название, аудитория, преподаватель, тип и время 'HH:MM'."""
    name: str
    classroom: str
    teacher: str
    teacher_full: str
    type: str
    time_start: str
    time_end: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


DaySchedule = Dict[str, LessonView]
WeekSchedule = Dict[str, DaySchedule]


def _empty_weeks() -> Dict[WeekParity, WeekSchedule]:
    return {parity: {} for parity in WeekParity}


@dataclass(frozen=True)
class GroupedSchedule:
    """
    Расписание группы: тип недели -> день -> номер пары -> LessonView.
    Все четыре типа недели присутствуют всегда, даже пустые.
    skipped - сколько записей отброшено при группировке (неверный день или тип недели).
    """
    weeks: Dict[WeekParity, WeekSchedule] = field(default_factory=_empty_weeks)
    day_style: DayNameStyle = DayNameStyle.RU
    skipped: int = 0

    @property
    def day_names(self) -> Tuple[str, ...]:
        return canonical_day_names(self.day_style)

    def lessons_for(self, parity, day_name: str) -> List[Tuple[str, LessonView]]:
        """Пары дня, отсортированные по номеру пары (как числа, а не строки)."""
        day = self.weeks[WeekParity(parity)].get(day_name, {})
        return sorted(day.items(), key=lambda item: int(item[0]))

    def lesson_count(self) -> int:
        return sum(len(day) for week in self.weeks.values() for day in week.values())

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Dict[str, str]]]]:
        """Внешний формат: ключи "0".."3", названия дней, номера пар строками."""
        return {
            str(int(parity)): {
                day_name: {slot: lesson.to_dict() for slot, lesson in lessons.items()}
                for day_name, lessons in week.items()
            }
            for parity, week in sorted(self.weeks.items())
        }


@dataclass(frozen=True)
class ParsedFeed:
    """Результат разбора ответа сервера."""
    variant: FeedVariant
    entries: List[RawEntry]
    semester: str = ''
    skipped: int = 0
