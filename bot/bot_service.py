import asyncio
import logging
from typing import Dict, List

from aiogram import Bot, Dispatcher, F, Router, types
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import BaseFilter, Command, CommandStart
from aiogram.types import BotCommand, CallbackQuery, Message
from aiogram.utils.keyboard import InlineKeyboardBuilder

from config import Config

from app.services.clients import schedule_client, time_service
from app.services.core.cache_manager import get_schedule_data
from app.services.core.week_state import compute_week_state_or_default
from app.services.utils.weekdays import day_style_from_config

log = logging.getLogger(__name__)

router = Router(name="schedule_admin")

REFRESH_ALL = "__all__"

# Последнее отправленное меню в каждом чате {chat_id: message_id}
menu_messages: Dict[int, int] = {}


class AdminFilter(BaseFilter):
    """Пропускает только пользователей из TELEGRAM_ADMIN_IDS."""

    async def __call__(self, event: types.TelegramObject) -> bool:
        user = getattr(event, "from_user", None)
        return user is not None and str(user.id) in Config.TELEGRAM_ADMIN_IDS


# --- ХЕЛПЕРЫ ---

def build_close_keyboard() -> types.InlineKeyboardMarkup:
    builder = InlineKeyboardBuilder()
    builder.button(text="❌ Закрыть", callback_data="close")
    return builder.as_markup()


def build_menu_keyboard(groups: List[str]) -> types.InlineKeyboardMarkup:
    """Кнопка обновления на каждую группу, общая кнопка и текущая неделя."""
    builder = InlineKeyboardBuilder()
    for group in groups:
        builder.button(text=f"🔄 {group}", callback_data=f"refresh:{group}")
    builder.button(text="💥 Все группы", callback_data=f"refresh:{REFRESH_ALL}")
    builder.button(text="📅 Неделя", callback_data="week")
    builder.adjust(2)
    return builder.as_markup()


def format_week_state_message() -> str:
    """Текст с номером недели, её типом и днями, которые ещё впереди."""
    time_info = time_service.get_current_time_info()
    week_state, baseline_missing = compute_week_state_or_default(
        schedule_client.get_semester_start(), time_info.now, day_style_from_config(Config.DAY_NAME_STYLE)
    )
    lines = [
        f"📅 <b>{time_info.date_str_display}</b> ({time_info.day_name})",
        f"Неделя: <b>{week_state.week_number}</b>, тип недели: <b>{week_state.current_week_parity}</b>",
        "Дни к показу: " + ", ".join(week_state.valid_weekdays),
    ]
    if baseline_missing:
        lines.append("⚠️ Дата начала семестра не задана, показан тип недели 0.")
    return "\n".join(lines)


async def refresh_group(group: str) -> str:
    """Принудительно обновляет кэш группы в отдельном потоке и описывает результат одной строкой."""
    log.info(f"Бот: обновление расписания '{group}'...")
    result = await asyncio.to_thread(get_schedule_data, group, True)
    if result.get("error"):
        return f"❌ <b>{group}</b>: <code>{result['error']}</code>"
    return (f"✅ <b>{group}</b>: {result['schedule'].lesson_count()} пар, "
            f"пропущено записей: {result['skipped']}, обновлено {result['last_updated']}")


async def _drop_previous_menu(bot: Bot, chat_id: int) -> None:
    message_id = menu_messages.pop(chat_id, None)
    if message_id is None:
        return
    try:
        await bot.delete_message(chat_id=chat_id, message_id=message_id)
    except TelegramBadRequest as e:
        log.warning(f"Не удалось удалить старое меню в чате {chat_id}: {e}")


async def send_menu(message: Message, bot: Bot) -> None:
    await _drop_previous_menu(bot, message.chat.id)
    sent = await message.answer("Панель управления расписаниями", reply_markup=build_menu_keyboard(Config.GROUPS))
    menu_messages[message.chat.id] = sent.message_id


# --- КОМАНДЫ ---

@router.message(CommandStart())
async def on_start(message: Message):
    if not await AdminFilter()(message):
        log.warning(f"Неавторизованный доступ от пользователя {message.from_user.id} ({message.from_user.full_name})")
        await message.answer("ℹ️ Этот бот предназначен только для администраторов расписания.")
        return
    await message.answer(f"👋 Привет, {message.from_user.first_name}! Команды: /menu, /week")


@router.message(Command("menu"), AdminFilter())
async def on_menu(message: Message, bot: Bot):
    await send_menu(message, bot)


@router.message(Command("week"), AdminFilter())
async def on_week(message: Message):
    await message.answer(format_week_state_message(), parse_mode="HTML", reply_markup=build_close_keyboard())


# --- КНОПКИ ---

@router.callback_query(F.data == "week", AdminFilter())
async def on_week_button(callback: CallbackQuery):
    await callback.answer()
    await callback.message.answer(format_week_state_message(), parse_mode="HTML",
                                  reply_markup=build_close_keyboard())


@router.callback_query(F.data.startswith("refresh:"), AdminFilter())
async def on_refresh_button(callback: CallbackQuery, bot: Bot):
    target = callback.data.split(":", 1)[1]
    await _drop_previous_menu(bot, callback.message.chat.id)

    groups = Config.GROUPS if target == REFRESH_ALL else [target]
    await callback.answer("🚀 Обновляю...", show_alert=False)
    results = await asyncio.gather(*(refresh_group(group) for group in groups))
    await callback.message.answer("\n".join(results), parse_mode="HTML", reply_markup=build_close_keyboard())


@router.callback_query(F.data == "close", AdminFilter())
async def on_close_button(callback: CallbackQuery):
    try:
        await callback.message.delete()
        await callback.answer()
    except TelegramBadRequest as e:
        await callback.answer("Сообщение уже удалено.", show_alert=True)
        log.warning(f"Не удалось удалить сообщение для {callback.from_user.id}: {e}")


# --- ЗАПУСК ---

async def set_main_menu(bot: Bot):
    """Команды, видимые в кнопке 'Меню' клиента."""
    await bot.set_my_commands([
        BotCommand(command="/start", description="👋 Перезапустить бота"),
        BotCommand(command="/menu", description="⚙️ Обновление расписаний"),
        BotCommand(command="/week", description="📅 Текущая учебная неделя"),
    ])


async def main() -> None:
    """Точка входа для запуска бота."""
    log.info("Запуск Telegram-бота...")
    bot = Bot(token=Config.TELEGRAM_BOT_TOKEN)
    dp = Dispatcher()
    dp.include_router(router)

    await set_main_menu(bot)
    await bot.delete_webhook(drop_pending_updates=True)
    await dp.start_polling(bot)
