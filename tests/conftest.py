"""
Общие фикстуры для всех тестов.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Репозитории (UserRepository, WorkoutRepository, WorkoutLogRepository) заменяются
  на AsyncMock через dependency_overrides, get_current_user — на лямбду с нужным пользователем.
- Обработчики доменных ошибок регистрируются так же, как в app.main.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator, List, Optional

from app.api.router import api_router
from app.core.exceptions import register_exception_handlers
from app.models.user import User
from app.models.workout import Workout, Exercise
from app.models.workout_log import WorkoutLog
from app.services.auth_service import auth_service
from app.services.schedule import encode_days
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.repositories.workout_log_repository import WorkoutLogRepository
from app.core.dependencies import (
    get_current_user,
    get_user_repository,
    get_workout_repository,
    get_workout_log_repository,
)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="Workout Tracker Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    return {"Authorization": f"Bearer {auth_service.issue_token(user)}"}


def make_exercise(exercise_id: int = 1, workout_id: int = 1, name: str = "Bench", **overrides) -> Exercise:
    values = dict(sets=3, reps=10, weight=80.0, progress=0, notes=None)
    values.update(overrides)
    return Exercise(id=exercise_id, workout_id=workout_id, name=name, **values)


def make_workout(
    workout_id: int = 1,
    user_id: int = 1,
    category: str = "Push",
    schedule_type: str = "weekly",
    days: Optional[List[int]] = None,
    exercises: Optional[List[Exercise]] = None,
    name: Optional[str] = None,
) -> Workout:
    if days is None:
        days = [1, 3, 5] if schedule_type == "weekly" else []
    if exercises is None:
        exercises = [make_exercise(exercise_id=workout_id * 10, workout_id=workout_id)]
    return Workout(
        id=workout_id,
        user_id=user_id,
        name=name or f"{category} day",
        category=category,
        schedule_type=schedule_type,
        schedule_days=encode_days(days),
        frequency=1,
        created_at=datetime(2024, 1, 1, 9, 0),
        exercises=exercises,
    )


def make_log(
    log_id: int = 1,
    user_id: int = 1,
    workout: Optional[Workout] = None,
    workout_id: Optional[int] = None,
    date: datetime = datetime(2024, 3, 15),
    exercises: Optional[list] = None,
) -> WorkoutLog:
    log = WorkoutLog(
        id=log_id,
        user_id=user_id,
        workout_id=workout.id if workout is not None else workout_id,
        date=date,
        exercises=exercises if exercises is not None else [
            {"name": "Bench", "sets": 3, "reps": 10, "weight": 80.0}
        ],
        created_at=datetime(2024, 3, 15, 18, 30),
    )
    if workout is not None:
        log.workout = workout
    return log


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь."""
    return User(
        id=1,
        email="test@example.com",
        name="Tester",
        password=auth_service.hash_password("password123"),
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_user_fixture() -> User:
    """Второй пользователь — владелец «чужих» тренировок."""
    return User(
        id=2,
        email="other@example.com",
        name="Other",
        password=auth_service.hash_password("password456"),
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_workout_repo() -> AsyncMock:
    repo = AsyncMock(spec=WorkoutRepository)
    repo.list_for_user.return_value = []
    repo.get_by_id.return_value = None
    repo.get_exercise_for_user.return_value = None
    return repo


@pytest.fixture
def mock_log_repo() -> AsyncMock:
    repo = AsyncMock(spec=WorkoutLogRepository)
    repo.list_for_user.return_value = []
    return repo


def build_app(mock_repo, mock_workout_repo, mock_log_repo, user: Optional[User] = None) -> FastAPI:
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_repository] = lambda: mock_workout_repo
    app.dependency_overrides[get_workout_log_repository] = lambda: mock_log_repo
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    return app


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo, mock_workout_repo, mock_log_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подмены пользователя.
    Используется для auth-эндпоинтов и проверки запросов без токена.
    """
    app = build_app(mock_repo, mock_workout_repo, mock_log_repo)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(
    user_fixture, mock_repo, mock_workout_repo, mock_log_repo
) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture, репозитории → AsyncMock.
    """
    app = build_app(mock_repo, mock_workout_repo, mock_log_repo, user=user_fixture)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
