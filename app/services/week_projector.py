import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, List, Sequence, Union

from app.models.workout import Workout
from app.models.workout_log import WorkoutLog
from app.services.day_resolver import DayResult, resolve_day
from app.services.schedule import parse_date, to_utc_date

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7


def normalize_start(start: Union[str, date, datetime], tz: tzinfo = timezone.utc) -> date:
    """Привести начало недели к дате (полночь в опорном часовом поясе)."""
    if isinstance(start, str):
        return parse_date(start)
    if isinstance(start, datetime):
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        return start.astimezone(tz).date()
    return start


def group_logs_by_day(logs: Sequence[WorkoutLog]) -> Dict[date, List[WorkoutLog]]:
    grouped: Dict[date, List[WorkoutLog]] = defaultdict(list)
    for log in sorted(logs, key=lambda item: item.date):
        grouped[to_utc_date(log.date)].append(log)
    return grouped


def resolve_week(
    workouts: Sequence[Workout],
    logs: Sequence[WorkoutLog],
    start: Union[str, date, datetime],
    tz: tzinfo = timezone.utc,
) -> List[DayResult]:
    """Ровно 7 дней начиная со start, включая дни отдыха, по возрастанию даты.

    Каждый день вычисляется независимо и дополняется логами за этот день.
    """
    first_day = normalize_start(start, tz)
    logs_by_day = group_logs_by_day(logs)

    week = []
    for offset in range(DAYS_IN_WEEK):
        current = first_day + timedelta(days=offset)
        result = resolve_day(workouts, current)
        week.append(replace(result, logs=logs_by_day.get(current, [])))

    logger.debug(f"Неделя с {first_day.isoformat()}: {sum(1 for d in week if not d.is_rest)} тренировочных дней")
    return week
