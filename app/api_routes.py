# app/api_routes.py

import logging
from flask import Blueprint, jsonify, request
from config import Config

from app.utils import make_json_serializable
from .services.clients import schedule_client, time_service
from .services.core import cache_manager, view_filter
from .services.core.lesson_progress import progress
from .services.core.week_state import compute_week_state_or_default
from .services.utils.weekdays import day_style_from_config


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


def _current_week_state(now):
    semester_start = schedule_client.get_semester_start()
    return compute_week_state_or_default(semester_start, now, day_style_from_config(Config.DAY_NAME_STYLE))


@bp.route('/groups')
def get_groups():
    """Список групп из конфига."""
    return jsonify({"groups": Config.GROUPS})


@bp.route('/schedule/<group>')
def get_schedule(group):
    """Отдает сгруппированное расписание группы в JSON: тип недели -> день -> пара."""
    log.info(f"API request for schedule: '{group}'")
    if group not in Config.GROUPS:
        return jsonify({"error": "Schedule not found"}), 404

    all_data = cache_manager.get_schedule_data(group)
    if all_data.get("error"):
        return jsonify({"error": "Failed to get schedule data"}), 500

    log.info(f"API: Расписание '{group}' успешно отправлено.")
    return jsonify(make_json_serializable({
        "group": group,
        "semester": all_data["semester"],
        "last_updated": all_data["last_updated"],
        "week_type": all_data["schedule"],
    }))


@bp.route('/week_state')
def get_week_state():
    """Текущая учебная неделя, её тип и дни, которые ещё стоит показывать."""
    time_info = time_service.get_current_time_info()
    week_state, baseline_missing = _current_week_state(time_info.now)
    return jsonify({**week_state.to_dict(), "baseline_missing": baseline_missing})


@bp.route('/week/<group>')
def get_week_view(group):
    """Расписание текущей недели с прогрессом пар - то, что нужно экрану прямо сейчас."""
    log.info(f"API request for current week: '{group}'")
    if group not in Config.GROUPS:
        return jsonify({"error": "Schedule not found"}), 404

    all_data = cache_manager.get_schedule_data(group)
    if all_data.get("error"):
        return jsonify({"error": "Failed to get schedule data"}), 500

    time_info = time_service.get_current_time_info()
    week_state, baseline_missing = _current_week_state(time_info.now)
    week_view = view_filter.build_week_view(all_data["schedule"], week_state, time_info.now)

    return jsonify({
        **week_view,
        "group": group,
        "current_date": time_info.date_str_display,
        "current_time": time_info.time_obj.strftime('%H:%M:%S'),
        "baseline_missing": baseline_missing,
        "refresh_interval": Config.PROGRESS_REFRESH_INTERVAL,
    })


@bp.route('/progress')
def get_progress():
    """Прогресс одной пары: ?start=09:00&end=10:20&today=1."""
    time_info = time_service.get_current_time_info()
    is_today = request.args.get('today', '0').lower() in ('1', 'true', 'yes')
    value = progress(request.args.get('start', ''), request.args.get('end', ''), is_today, time_info.now)
    return jsonify({"progress": value})


@bp.route('/refresh/<group>', methods=['POST'])
def refresh_schedule(group):
    """Принудительно обновляет кэш группы."""
    log.info(f"API request for refresh: '{group}'")
    if group not in Config.GROUPS:
        return jsonify({"error": "Schedule not found"}), 404

    all_data = cache_manager.get_schedule_data(group, force_update=True)
    if all_data.get("error"):
        return jsonify({"error": all_data["error"]}), 500
    return jsonify({"group": group, "last_updated": all_data["last_updated"], "skipped": all_data["skipped"]})
