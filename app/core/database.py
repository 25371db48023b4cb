import logging

from app.core.config import settings
from app.core.base import Base
from app.core.db import engine

# Модели должны быть импортированы до create_all, иначе таблицы не попадут в metadata
from app.models.user import User
from app.models.workout import Workout, Exercise
from app.models.workout_log import WorkoutLog

logger = logging.getLogger(__name__)


async def init_database():
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)
        logger.info("Таблицы БД созданы/проверены")
