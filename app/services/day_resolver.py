from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from app.models.workout import Workout, Exercise
from app.models.workout_log import WorkoutLog
from app.services.schedule import DateLike, rule_for, to_utc_date

REST_CATEGORY = "Rest"


@dataclass(frozen=True)
class DayResult:
    """Итог для одной календарной даты: подходящая тренировка или день отдыха."""
    date: date
    workout: Optional[Workout] = None
    logs: List[WorkoutLog] = field(default_factory=list)

    @property
    def is_rest(self) -> bool:
        return self.workout is None

    @property
    def workout_id(self) -> Optional[int]:
        return None if self.workout is None else self.workout.id

    @property
    def category(self) -> str:
        return REST_CATEGORY if self.workout is None else self.workout.category

    @property
    def name(self) -> Optional[str]:
        return None if self.workout is None else self.workout.name

    @property
    def exercises(self) -> List[Exercise]:
        return [] if self.workout is None else list(self.workout.exercises)


def resolve_day(workouts: Sequence[Workout], day: DateLike) -> DayResult:
    """Первая по порядку тренировка, чьё расписание совпадает с датой.

    Порядок workouts считается стабильным (репозиторий отдаёт их по id),
    поэтому при пересечении расписаний побеждает более ранняя тренировка.
    """
    target = to_utc_date(day)
    for workout in workouts:
        if rule_for(workout).matches(target):
            return DayResult(date=target, workout=workout)
    return DayResult(date=target)
