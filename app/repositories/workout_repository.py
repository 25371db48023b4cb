import logging
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.workout import Workout, Exercise
from app.models.workout_log import WorkoutLog

logger = logging.getLogger(__name__)


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: int) -> List[Workout]:
        """Тренировки пользователя в порядке создания (id по возрастанию)."""
        result = await self.db.execute(
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.id.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, workout_id: int) -> Optional[Workout]:
        result = await self.db.execute(select(Workout).where(Workout.id == workout_id))
        return result.scalar_one_or_none()

    async def create(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.db.commit()
        await self.db.refresh(workout)
        return workout

    async def delete_cascade(self, workout_id: int) -> None:
        """Удалить логи, упражнения и саму тренировку одной транзакцией."""
        try:
            await self.db.execute(delete(WorkoutLog).where(WorkoutLog.workout_id == workout_id))
            await self.db.execute(delete(Exercise).where(Exercise.workout_id == workout_id))
            await self.db.execute(delete(Workout).where(Workout.id == workout_id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.error(f"Откат удаления тренировки {workout_id}")
            raise

    async def get_exercise_for_user(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        result = await self.db.execute(
            select(Exercise)
            .join(Workout, Exercise.workout_id == Workout.id)
            .where(Exercise.id == exercise_id, Workout.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def save_exercise(self, exercise: Exercise) -> Exercise:
        await self.db.commit()
        await self.db.refresh(exercise)
        return exercise

    async def delete_exercise(self, exercise: Exercise) -> None:
        await self.db.delete(exercise)
        await self.db.commit()
