from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.workout_log import WorkoutLog


class WorkoutLogRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, log: WorkoutLog) -> WorkoutLog:
        self.db.add(log)
        await self.db.commit()
        await self.db.refresh(log, attribute_names=["id", "created_at"])
        return log

    async def list_for_user(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        workout_id: Optional[int] = None,
        newest_first: bool = True,
    ) -> List[WorkoutLog]:
        """Логи пользователя; границы start/end включительные."""
        query = (
            select(WorkoutLog)
            .options(selectinload(WorkoutLog.workout))
            .where(WorkoutLog.user_id == user_id)
        )
        if start is not None:
            query = query.where(WorkoutLog.date >= start)
        if end is not None:
            query = query.where(WorkoutLog.date <= end)
        if workout_id is not None:
            query = query.where(WorkoutLog.workout_id == workout_id)

        order = WorkoutLog.date.desc() if newest_first else WorkoutLog.date.asc()
        result = await self.db.execute(query.order_by(order, WorkoutLog.id))
        return list(result.scalars().all())
