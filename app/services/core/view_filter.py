# app/services/core/view_filter.py

import logging
from datetime import datetime
from typing import Any, Dict

from app.services.core.lesson_progress import is_today, progress
from app.services.core.week_state import WeekState
from app.services.parsers.common_structs import GroupedSchedule

log = logging.getLogger(__name__)


def build_week_view(schedule: GroupedSchedule, week_state: WeekState, now: datetime) -> Dict[str, Any]:
    """
    Собирает расписание текущей недели для показа.
    Берётся только текущий тип недели и только ещё не прошедшие дни,
    к каждой паре добавляется доля прошедшего времени.
    """
    days = []
    for day_name in week_state.valid_weekdays:
        lessons = schedule.lessons_for(week_state.current_week_parity, day_name)
        if not lessons:
            continue

        today = is_today(day_name, now, schedule.day_style)
        day_rows = []
        for slot, lesson in lessons:
            row = {'slot': slot, **lesson.to_dict()}
            row['progress'] = progress(lesson.time_start, lesson.time_end, today, now)
            day_rows.append(row)

        days.append({'day_name': day_name, 'is_today': today, 'lessons': day_rows})

    log.debug(f"Неделя {week_state.week_number} (тип {week_state.current_week_parity}): дней к показу {len(days)}")
    return {
        'week_number': week_state.week_number,
        'week_parity': week_state.current_week_parity,
        'days': days,
    }
