"""
Журнал выполненных тренировок.

- log_session: записать сессию по своей тренировке (снимок результатов, дата от клиента)
- logs_for_date: логи за календарный день включительно, с name/category тренировки
- logs_for_workout: логи одной тренировки, новые сверху
- logs_for_user: вся история пользователя, новые сверху
"""
import logging
import re
from datetime import date, datetime, time, timezone
from typing import List, Sequence, Tuple, Union

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.models.workout_log import WorkoutLog
from app.repositories.workout_log_repository import WorkoutLogRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import ExerciseResult
from app.services.schedule import DATE_PATTERN, parse_date

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def day_window(day: Union[str, date]) -> Tuple[datetime, datetime]:
    """Границы дня [00:00:00.000, 23:59:59.999], обе включительно."""
    if isinstance(day, str):
        day = parse_date(day)
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def parse_log_date(value: Union[str, date, datetime]) -> datetime:
    """Дата сессии от клиента -> наивный datetime в UTC.

    Принимает YYYY-MM-DD (полночь) или полный ISO-8601 с часовым поясом.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and DATE_PATTERN.match(value):
        parsed = datetime.combine(parse_date(value), time.min)
    else:
        try:
            parsed = datetime.fromisoformat(re.sub(r"Z$", "+00:00", str(value)))
        except ValueError:
            raise ValidationError("Invalid date. Use YYYY-MM-DD or an ISO-8601 timestamp.", field="date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    # точность до миллисекунд, иначе 23:59:59.9995 не попадает ни в один day_window
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


class LogReconciler:
    def __init__(self, workouts: WorkoutRepository, logs: WorkoutLogRepository):
        self.workouts = workouts
        self.logs = logs

    async def log_session(
        self,
        user_id: int,
        workout_id: int,
        log_date: Union[str, date, datetime],
        exercise_results: Sequence[ExerciseResult],
    ) -> WorkoutLog:
        session_date = parse_log_date(log_date)

        workout = await self.workouts.get_by_id(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        if workout.user_id != user_id:
            raise AuthorizationError(
                f"user {user_id} tried to log workout {workout_id} owned by {workout.user_id}",
                public_message="Workout not found",
            )

        # копия результатов, а не ссылки на упражнения шаблона
        snapshot = [result.model_dump(exclude_none=True) for result in exercise_results]

        log = WorkoutLog(
            user_id=user_id,
            workout_id=workout.id,
            date=session_date,
            exercises=snapshot,
            workout=workout,
        )
        log = await self.logs.create(log)
        logger.info(f"Лог тренировки {workout.id} пользователя {user_id} на {session_date.isoformat()}")
        return log

    async def logs_for_date(self, user_id: int, day: Union[str, date]) -> List[WorkoutLog]:
        start, end = day_window(day)
        return await self.logs.list_for_user(user_id, start=start, end=end)

    async def logs_for_workout(self, user_id: int, workout_id: int) -> List[WorkoutLog]:
        return await self.logs.list_for_user(user_id, workout_id=workout_id)

    async def logs_for_user(self, user_id: int) -> List[WorkoutLog]:
        return await self.logs.list_for_user(user_id)
