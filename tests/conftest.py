"""Shared fixtures for the test suite."""
from datetime import datetime, time

import pytest

from config import Config
from app import create_app
from app.services.clients import schedule_client, time_service
from app.services.core import cache_manager
from app.services.parsers.common_structs import RawEntry

GROUP = "МП-21"


class TestingConfig(Config):
    TESTING = True


def make_entry(**overrides) -> RawEntry:
    """RawEntry with sensible defaults."""
    fields = dict(
        subject_name="Математический анализ [Лек]",
        lesson_type="Лек",
        weekday=1,
        slot_code=1,
        week_parity=0,
        room="3103",
        teacher="Иванов И.И.",
        teacher_full="Иванов Иван Иванович",
        time_start=time(9, 0),
        time_end=time(10, 20),
    )
    fields.update(overrides)
    return RawEntry(**fields)


def nested_record(day: int, week: int, code: int, name: str, time_from: str = "0001-01-01T09:00:00",
                  time_to: str = "0001-01-01T10:20:00") -> dict:
    """One record of the nested {Day, DayNumber, Time, Class, Group, Room} feed."""
    return {
        "Day": day,
        "DayNumber": week,
        "Time": {"Time": f"{code} пара", "Code": code, "TimeFrom": time_from, "TimeTo": time_to},
        "Class": {"Code": "01", "Name": name, "TeacherFull": "Петров Пётр Петрович",
                  "Teacher": "Петров П.П.", "Form": ""},
        "Group": {"Name": GROUP, "Code": "1"},
        "Room": {"Name": "4201"},
    }


@pytest.fixture(autouse=True)
def clean_cache():
    cache_manager.clear_cache()
    yield
    cache_manager.clear_cache()


@pytest.fixture
def groups(monkeypatch):
    monkeypatch.setattr(Config, "GROUPS", [GROUP])
    monkeypatch.setattr(Config, "DAY_NAME_STYLE", "ru")
    monkeypatch.setattr(Config, "CACHE_DURATION", 600)
    return [GROUP]


@pytest.fixture
def frozen_now(monkeypatch):
    """Freeze the service clock at Wednesday 2025-02-12 09:40."""
    fixed = datetime(2025, 2, 12, 9, 40)
    original = time_service.get_current_time_info
    monkeypatch.setattr(time_service, "get_current_time_info", lambda now=None: original(fixed))
    return fixed


@pytest.fixture
def fake_feed(monkeypatch):
    """Replace the network client: serve a given payload and count requests."""
    state = {"payload": {"Semestr": "Весна 2025", "Data": []}, "calls": 0, "error": None}

    def fetch_raw_schedule(group):
        state["calls"] += 1
        if state["error"] is not None:
            raise state["error"]
        return state["payload"]

    monkeypatch.setattr(schedule_client, "fetch_raw_schedule", fetch_raw_schedule)
    monkeypatch.setattr(schedule_client, "fetch_timetable", lambda: None)
    monkeypatch.setattr(schedule_client, "get_semester_start", lambda: "2025-02-10")
    return state


@pytest.fixture
def client(groups):
    app = create_app(TestingConfig)
    return app.test_client()
