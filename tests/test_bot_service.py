"""Tests for the admin bot helpers that do not need Telegram."""
import asyncio
from types import SimpleNamespace

from conftest import GROUP, nested_record

from bot import bot_service
from config import Config


def test_admin_filter(monkeypatch) -> None:
    monkeypatch.setattr(Config, "TELEGRAM_ADMIN_IDS", ["42"])
    admin_filter = bot_service.AdminFilter()

    assert asyncio.run(admin_filter(SimpleNamespace(from_user=SimpleNamespace(id=42)))) is True
    assert asyncio.run(admin_filter(SimpleNamespace(from_user=SimpleNamespace(id=7)))) is False
    assert asyncio.run(admin_filter(SimpleNamespace())) is False


def test_menu_has_button_per_group() -> None:
    markup = bot_service.build_menu_keyboard(["А-1", "Б-2", "В-3"])
    callbacks = [button.callback_data for row in markup.inline_keyboard for button in row]
    assert callbacks == ["refresh:А-1", "refresh:Б-2", "refresh:В-3", "refresh:__all__", "week"]


def test_week_state_message(fake_feed, frozen_now) -> None:
    text = bot_service.format_week_state_message()
    assert "Неделя: <b>1</b>" in text
    assert "тип недели: <b>0</b>" in text
    assert "Среда, Четверг, Пятница, Суббота" in text


def test_refresh_group_reports_lesson_count(groups, fake_feed) -> None:
    fake_feed["payload"] = {"Data": [nested_record(1, 0, 1, "Математика")]}
    line = asyncio.run(bot_service.refresh_group(GROUP))
    assert line.startswith("✅")
    assert "1 пар" in line
