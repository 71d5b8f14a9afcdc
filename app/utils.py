# app/utils.py

from datetime import date, time as time_obj
from dataclasses import is_dataclass, asdict
from enum import Enum


def make_json_serializable(data):
    """
    Рекурсивно преобразует объекты, которые не сериализуются в JSON,
    в подходящий формат (строки, словари, списки).
    """
    # У структур расписания свой формат выдачи, он важнее asdict
    if hasattr(data, 'to_dict'):
        return make_json_serializable(data.to_dict())
    if is_dataclass(data):
        return make_json_serializable(asdict(data))

    if isinstance(data, Enum):
        return data.value
    if isinstance(data, dict):
        return {str(make_json_serializable(k)): make_json_serializable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [make_json_serializable(i) for i in data]
    if isinstance(data, time_obj):
        return data.strftime('%H:%M')
    if isinstance(data, date):
        return data.isoformat()

    return data
