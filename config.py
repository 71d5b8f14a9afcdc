import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # Источник "сырых" данных расписания группы
    SCHEDULE_API_URL = os.getenv('SCHEDULE_API_URL', 'https://miet.ru/schedule/data')
    # Необязательные источники: сетка пар и дата начала семестра
    TIMETABLE_API_URL = os.getenv('TIMETABLE_API_URL')
    SEMESTER_META_URL = os.getenv('SEMESTER_META_URL')
    SEMESTER_START = os.getenv('SEMESTER_START')

    # --- СПИСОК ГРУПП: SCHEDULE_GROUP_1, SCHEDULE_GROUP_2, ... ---
    GROUPS = []
    i = 1
    while True:
        group_name = os.getenv(f'SCHEDULE_GROUP_{i}')
        if not group_name:
            break
        GROUPS.append(group_name.strip())
        i += 1
    del i

    # 'ru' - русские названия дней, 'en' - коды monday..saturday
    DAY_NAME_STYLE = os.getenv('DAY_NAME_STYLE', 'ru').strip().lower()

    # --- Telegram Bot Configuration ---
    TELEGRAM_BOT_TOKEN = os.getenv('TELEGRAM_BOT_TOKEN')

    # Читаем строку из .env, разделяем по запятой и убираем пустые элементы
    TELEGRAM_ADMIN_IDS = [
        admin_id.strip() for admin_id in os.getenv('TELEGRAM_ADMIN_IDS', '').split(',') if admin_id.strip()
    ]

    CACHE_DURATION = int(os.getenv('CACHE_DURATION', 600))
    REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', 10))
    PROGRESS_REFRESH_INTERVAL = int(os.getenv('PROGRESS_REFRESH_INTERVAL', 30))

    # Проверка, что ключевые переменные загрузились
    if DAY_NAME_STYLE not in ('ru', 'en'):
        raise ValueError("DAY_NAME_STYLE в файле .env должен быть 'ru' или 'en'")
