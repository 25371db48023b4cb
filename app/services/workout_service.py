import logging
from datetime import date, datetime, timedelta
from typing import List, Union

from app.core.exceptions import AuthorizationError, NotFoundError
from app.models.workout import Workout, Exercise
from app.repositories.workout_log_repository import WorkoutLogRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import WorkoutCreate, ExerciseUpdate
from app.services.day_resolver import DayResult, resolve_day
from app.services.log_reconciler import day_window
from app.services.schedule import ScheduleRule, parse_date
from app.services.week_projector import DAYS_IN_WEEK, normalize_start, resolve_week

logger = logging.getLogger(__name__)


class WorkoutService:
    def __init__(self, workouts: WorkoutRepository, logs: WorkoutLogRepository):
        self.workouts = workouts
        self.logs = logs

    async def list_workouts(self, user_id: int) -> List[Workout]:
        return await self.workouts.list_for_user(user_id)

    async def get_workout(self, user_id: int, workout_id: int) -> Workout:
        workout = await self.workouts.get_by_id(workout_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        if workout.user_id != user_id:
            raise AuthorizationError(
                f"user {user_id} requested workout {workout_id} owned by {workout.user_id}",
                public_message="Workout not found",
            )
        return workout

    async def create_workout(self, user_id: int, payload: WorkoutCreate) -> Workout:
        rule = ScheduleRule.build(
            payload.schedule.type,
            payload.schedule.days,
            payload.schedule.frequency,
        )

        workout = Workout(
            user_id=user_id,
            name=payload.name,
            category=payload.category.value,
            schedule_type=rule.type.value,
            schedule_days=rule.stored_days,
            frequency=rule.frequency,
            created_at=datetime.utcnow(),
            exercises=[
                Exercise(
                    name=ex.name,
                    sets=ex.sets,
                    reps=ex.reps,
                    weight=ex.weight,
                    progress=0,
                    notes=ex.notes,
                )
                for ex in payload.exercises
            ],
        )
        workout = await self.workouts.create(workout)
        logger.info(f"Создана тренировка {workout.id} ({rule.type.value}) пользователя {user_id}")
        return workout

    async def delete_workout(self, user_id: int, workout_id: int) -> None:
        await self.get_workout(user_id, workout_id)
        await self.workouts.delete_cascade(workout_id)
        logger.info(f"Удалена тренировка {workout_id} вместе с упражнениями и логами")

    async def workout_for_date(self, user_id: int, day: Union[str, date]) -> DayResult:
        if isinstance(day, str):
            day = parse_date(day)
        workouts = await self.workouts.list_for_user(user_id)
        return resolve_day(workouts, day)

    async def week_for(self, user_id: int, start: Union[str, date]) -> List[DayResult]:
        first_day = normalize_start(start)
        window_start, _ = day_window(first_day)
        _, window_end = day_window(first_day + timedelta(days=DAYS_IN_WEEK - 1))

        workouts = await self.workouts.list_for_user(user_id)
        logs = await self.logs.list_for_user(user_id, start=window_start, end=window_end, newest_first=False)
        return resolve_week(workouts, logs, first_day)

    async def update_exercise(self, user_id: int, exercise_id: int, payload: ExerciseUpdate) -> Exercise:
        exercise = await self.workouts.get_exercise_for_user(exercise_id, user_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("progress") is None:
            changes.pop("progress", None)
        for field, value in changes.items():
            setattr(exercise, field, value)
        return await self.workouts.save_exercise(exercise)

    async def delete_exercise(self, user_id: int, exercise_id: int) -> None:
        exercise = await self.workouts.get_exercise_for_user(exercise_id, user_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        await self.workouts.delete_exercise(exercise)
