"""Tests for small parsing helpers, weekday names and the pair timetable."""
from datetime import date, datetime, time

import pytest

from app.services.utils.data_validator import extract_lesson_type, parse_iso_date, parse_time_str
from app.services.utils.enums import DayNameStyle
from app.services.utils.pair_timetable import PAIRS, get_pair_by_code, parse_timetable
from app.services.utils.weekdays import (
    canonical_day_names,
    day_style_from_config,
    resolve_day_name,
    weekday_number,
)


@pytest.mark.parametrize("raw, expected", [
    ("09:00", time(9, 0)),
    ("9.05", time(9, 5)),
    ("0001-01-01T13:30:00", time(13, 30)),
    (time(8, 15), time(8, 15)),
    (datetime(2025, 2, 10, 18, 0), time(18, 0)),
    ("24:00", None),
    ("", None),
    (None, None),
])
def test_parse_time_str(raw, expected) -> None:
    assert parse_time_str(raw) == expected


def test_parse_iso_date() -> None:
    assert parse_iso_date("2025-02-10") == date(2025, 2, 10)
    assert parse_iso_date("2025-02-10T00:00:00") == date(2025, 2, 10)
    assert parse_iso_date(datetime(2025, 2, 10, 12, 0)) == date(2025, 2, 10)
    assert parse_iso_date("2025-13-40") is None
    assert parse_iso_date(None) is None


def test_extract_lesson_type() -> None:
    assert extract_lesson_type("Физика [Лаб]") == "Лаб"
    assert extract_lesson_type("Физика [Пр] ") == "Пр"
    assert extract_lesson_type("Физика") is None


def test_resolve_day_name() -> None:
    assert resolve_day_name(1) == "Понедельник"
    assert resolve_day_name(6) == "Суббота"
    assert resolve_day_name(1, DayNameStyle.EN) == "monday"
    assert resolve_day_name(0) is None
    assert resolve_day_name(7) is None
    assert resolve_day_name(True) is None


def test_weekday_number_and_names() -> None:
    assert weekday_number("Среда") == 3
    assert weekday_number("saturday") == 6
    assert weekday_number("Воскресенье") is None
    assert len(canonical_day_names()) == len(canonical_day_names(DayNameStyle.EN)) == 6


def test_day_style_from_config() -> None:
    assert day_style_from_config("EN") is DayNameStyle.EN
    assert day_style_from_config("xx") is DayNameStyle.RU


def test_default_pairs() -> None:
    assert get_pair_by_code(1) == PAIRS[1]
    assert get_pair_by_code("7").end_time == time(19, 20)
    assert get_pair_by_code(8) is None
    assert get_pair_by_code("первая") is None


def test_parse_timetable_skips_bad_rows() -> None:
    pairs = parse_timetable({
        "1": ["09:00", "10:20"],
        "2": ["10:30"],
        "x": ["12:00", "13:20"],
        "4": ["14:50", "13:30"],
    })
    assert list(pairs) == [1]
    assert parse_timetable(["09:00"]) == {}
