# app/services/core/week_state.py

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from app.services.utils.data_validator import parse_iso_date
from app.services.utils.enums import DayNameStyle
from app.services.utils.errors import BaselineMissingError
from app.services.utils.weekdays import canonical_day_names

log = logging.getLogger(__name__)

PARITY_CYCLE = 4
SUNDAY = 6  # date.weekday(): понедельник - 0, воскресенье - 6


@dataclass(frozen=True)
class WeekState:
    """Номер учебной недели, её тип (0..3) и дни, которые ещё стоит показывать."""
    week_number: int
    current_week_parity: int
    valid_weekdays: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'week_number': self.week_number,
            'current_week_parity': self.current_week_parity,
            'valid_weekdays': list(self.valid_weekdays),
        }


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def _next_occurrence(today: date, weekday_index: int) -> date:
    """Ближайшая дата с днём недели weekday_index (0 - Пн), включая сегодняшнюю."""
    return today + timedelta(days=(weekday_index - today.weekday()) % 7)


def get_valid_weekdays(now: Union[date, datetime],
                       day_style: DayNameStyle = DayNameStyle.RU) -> Tuple[str, ...]:
    """
    Дни, которые ещё не прошли на этой неделе.
    В воскресенье неделя считается начавшейся заново, и показываются все шесть дней.
    """
    today = _as_date(now)
    day_names = canonical_day_names(day_style)
    if today.weekday() == SUNDAY:
        return day_names

    # Конец недели - ближайшее воскресенье, с него начинается следующая неделя
    week_end = today + timedelta(days=SUNDAY - today.weekday())
    return tuple(
        name for index, name in enumerate(day_names)
        if _next_occurrence(today, index) < week_end
    )


def compute_week_state(semester_start: Union[str, date, None], now: Union[date, datetime],
                       day_style: DayNameStyle = DayNameStyle.RU) -> WeekState:
    """
    Считает номер недели от даты начала семестра.
    Разница берётся в календарных днях, а не через длительность, чтобы перевод
    часов не сдвигал границу недели.
    """
    start_date = parse_iso_date(semester_start)
    if start_date is None:
        raise BaselineMissingError(f"Не удалось распознать дату начала семестра: {semester_start!r}")

    today = _as_date(now)
    elapsed_days = (today - start_date).days
    week_number = (elapsed_days + 1) // 7 + 1

    return WeekState(
        week_number=week_number,
        current_week_parity=(week_number - 1) % PARITY_CYCLE,
        valid_weekdays=get_valid_weekdays(today, day_style),
    )


def compute_week_state_or_default(semester_start: Union[str, date, None], now: Union[date, datetime],
                                  day_style: DayNameStyle = DayNameStyle.RU) -> Tuple[WeekState, bool]:
    """
    То же, что compute_week_state, но без даты начала семестра не падает:
    возвращает первый тип недели и все шесть дней.
    Второй элемент кортежа - признак того, что сработал запасной вариант.
    """
    try:
        return compute_week_state(semester_start, now, day_style), False
    except BaselineMissingError as e:
        log.warning(f"{e}. Используется тип недели 0 и все дни недели.")
        return WeekState(week_number=1, current_week_parity=0,
                         valid_weekdays=canonical_day_names(day_style)), True
