from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.repositories.workout_log_repository import WorkoutLogRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service
from app.services.log_reconciler import LogReconciler
from app.services.workout_service import WorkoutService


security = HTTPBearer()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория — инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_workout_log_repository(db: AsyncSession = Depends(get_db)) -> WorkoutLogRepository:
    return WorkoutLogRepository(db)


def get_workout_service(
        workouts: WorkoutRepository = Depends(get_workout_repository),
        logs: WorkoutLogRepository = Depends(get_workout_log_repository),
) -> WorkoutService:
    return WorkoutService(workouts, logs)


def get_log_reconciler(
        workouts: WorkoutRepository = Depends(get_workout_repository),
        logs: WorkoutLogRepository = Depends(get_workout_log_repository),
) -> LogReconciler:
    return LogReconciler(workouts, logs)


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Невалидный токен доступа",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = auth_service.decode_access_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = await repo.get_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user
