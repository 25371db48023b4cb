"""
Правило расписания тренировки и проверка, приходится ли тренировка на дату.

Дни недели нумеруются от воскресенья: 0 = Sunday ... 6 = Saturday.
День недели всегда считается в UTC, чтобы переход на летнее время
не сдвигал тренировку на соседний день.

Строковое представление "1,3,5" существует только на границе с БД
(encode_days / decode_days); внутри правила дни хранятся кортежем.
"""
import enum
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, List, Tuple, Union

from app.core.exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DAYS_PATTERN = re.compile(r"^\d(,\d)*$")

DateLike = Union[date, datetime]


class ScheduleType(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"


def to_utc_date(value: DateLike) -> date:
    """Календарная дата в UTC. Наивный datetime считается уже приведённым к UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def weekday_index(value: DateLike) -> int:
    # date.weekday(): 0 = понедельник; переводим в 0 = воскресенье
    return (to_utc_date(value).weekday() + 1) % 7


def parse_date(value: str, field: str = "date") -> date:
    """Разобрать строку YYYY-MM-DD. Формат проверяется регуляркой до разбора."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValidationError("Invalid date format. Please use YYYY-MM-DD format.", field=field)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Invalid date. Please provide a valid date.", field=field)


def encode_days(days: Iterable[int]) -> str:
    return ",".join(str(day) for day in days)


def decode_days(raw: str) -> List[int]:
    if raw is None or raw == "":
        return []
    if not DAYS_PATTERN.match(raw):
        raise ValidationError(f"Malformed schedule days: {raw!r}", field="scheduleDays")
    return [int(day) for day in raw.split(",")]


@dataclass(frozen=True)
class ScheduleRule:
    type: ScheduleType
    days: Tuple[int, ...] = ()
    frequency: int = 1

    @classmethod
    def build(cls, type: str, days: Iterable[int] = (), frequency: int = 1) -> "ScheduleRule":
        """Создать правило с проверкой входных данных.

        Raises:
            ValidationError: поле field указывает на некорректный параметр.
        """
        try:
            schedule_type = ScheduleType(type)
        except ValueError:
            raise ValidationError(
                f"Schedule type must be one of: {', '.join(t.value for t in ScheduleType)}",
                field="schedule.type",
            )

        if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 1:
            raise ValidationError("Frequency must be a positive integer", field="schedule.frequency")

        if schedule_type is ScheduleType.daily:
            return cls(type=schedule_type, days=(), frequency=frequency)

        days = tuple(days or ())
        if not days:
            raise ValidationError("Weekly schedule needs at least one day", field="schedule.days")
        for day in days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise ValidationError(f"Weekday must be an integer 0-6, got {day!r}", field="schedule.days")
        if len(set(days)) != len(days):
            raise ValidationError("Schedule days must not repeat", field="schedule.days")

        return cls(type=schedule_type, days=days, frequency=frequency)

    @classmethod
    def from_storage(cls, schedule_type: str, schedule_days: str, frequency: int = 1) -> "ScheduleRule":
        """Правило из строки БД, без проверок build: frequency в разрешении дня не участвует,
        weekly без дней просто ни с чем не совпадает."""
        schedule_type = ScheduleType(schedule_type)
        if schedule_type is ScheduleType.daily:
            return cls(type=schedule_type, days=(), frequency=frequency)
        return cls(type=schedule_type, days=tuple(decode_days(schedule_days)), frequency=frequency)

    @property
    def stored_days(self) -> str:
        return encode_days(self.days)

    def matches(self, value: DateLike) -> bool:
        if self.type is ScheduleType.daily:
            return True
        return weekday_index(value) in self.days


def matches(rule: ScheduleRule, value: DateLike) -> bool:
    return rule.matches(value)


def rule_for(workout) -> ScheduleRule:
    """ScheduleRule из строки таблицы workouts."""
    return ScheduleRule.from_storage(workout.schedule_type, workout.schedule_days or "", workout.frequency)
