"""Tests for week number, week parity and the list of days still to show."""
from datetime import date, datetime

import pytest

from app.services.core.week_state import (
    WeekState,
    compute_week_state,
    compute_week_state_or_default,
    get_valid_weekdays,
)
from app.services.utils.enums import DayNameStyle
from app.services.utils.errors import BaselineMissingError

ALL_DAYS = ("Понедельник", "Вторник", "Среда", "Четверг", "Пятница", "Суббота")


def test_first_day_of_semester_is_week_one() -> None:
    """The semester start itself is week 1 with parity 0."""
    state = compute_week_state("2025-02-10", date(2025, 2, 10))
    assert state.week_number == 1
    assert state.current_week_parity == 0


def test_seven_days_later_is_week_two() -> None:
    """A week after the start the counter and parity move by one."""
    state = compute_week_state("2025-02-10", date(2025, 2, 17))
    assert state.week_number == 2
    assert state.current_week_parity == 1


def test_parity_cycles_through_four_buckets() -> None:
    """Week 5 starts the parity cycle again."""
    parities = [compute_week_state("2025-02-10", date(2025, 2, 10 + 7 * i)).current_week_parity
                for i in range(3)]
    assert parities == [0, 1, 2]
    assert compute_week_state("2025-02-10", date(2025, 3, 10)).current_week_parity == 0


def test_sunday_already_belongs_to_next_week() -> None:
    """Sunday rolls the week over: next week number and all six days."""
    state = compute_week_state("2025-02-10", date(2025, 2, 16))
    assert state.week_number == 2
    assert state.valid_weekdays == ALL_DAYS


def test_accepts_datetime_and_date_baseline() -> None:
    """'now' may carry a time of day, the baseline may already be a date."""
    state = compute_week_state(date(2025, 2, 10), datetime(2025, 2, 17, 23, 59))
    assert state == WeekState(week_number=2, current_week_parity=1, valid_weekdays=ALL_DAYS)


def test_before_semester_start_parity_stays_in_range() -> None:
    """Dates before the baseline use floor division and still give parity 0..3."""
    state = compute_week_state("2025-02-10", date(2025, 2, 5))
    assert state.week_number == 0
    assert state.current_week_parity == 3


def test_monday_shows_whole_week() -> None:
    assert get_valid_weekdays(date(2025, 2, 10)) == ALL_DAYS


def test_wednesday_hides_passed_days() -> None:
    """Monday and Tuesday are already over on Wednesday."""
    assert get_valid_weekdays(date(2025, 2, 12)) == ("Среда", "Четверг", "Пятница", "Суббота")


def test_saturday_shows_only_saturday() -> None:
    assert get_valid_weekdays(datetime(2025, 2, 15, 18, 0)) == ("Суббота",)


def test_english_day_codes() -> None:
    assert get_valid_weekdays(date(2025, 2, 14), DayNameStyle.EN) == ("friday", "saturday")


@pytest.mark.parametrize("baseline", [None, "", "10.02.2025", "not a date"])
def test_unparseable_baseline_raises(baseline) -> None:
    with pytest.raises(BaselineMissingError):
        compute_week_state(baseline, date(2025, 2, 10))


def test_missing_baseline_falls_back_to_parity_zero() -> None:
    """Without a baseline the view degrades to parity 0 and all six days."""
    state, fallback_used = compute_week_state_or_default(None, date(2025, 2, 12))
    assert fallback_used is True
    assert state.current_week_parity == 0
    assert state.valid_weekdays == ALL_DAYS


def test_default_helper_passes_through_valid_baseline() -> None:
    state, fallback_used = compute_week_state_or_default("2025-02-10", date(2025, 2, 17))
    assert fallback_used is False
    assert state.current_week_parity == 1


def test_to_dict() -> None:
    state = compute_week_state("2025-02-10", date(2025, 2, 15))
    assert state.to_dict() == {"week_number": 1, "current_week_parity": 0, "valid_weekdays": ["Суббота"]}
