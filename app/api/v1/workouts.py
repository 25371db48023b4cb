from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.dependencies import get_current_user, get_workout_service, get_log_reconciler
from app.models.user import User
from app.schemas.workout import (
    WorkoutCreate,
    WorkoutRead,
    WorkoutLogCreate,
    WorkoutLogRead,
    WorkoutSessionLog,
    DayRead,
    WeekDayRead,
    MessageResponse,
)
from app.services.log_reconciler import LogReconciler
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["workouts"])


# ==========================
# ТРЕНИРОВКИ
# ==========================

@router.get("", response_model=List[WorkoutRead])
async def list_workouts(
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Все тренировки пользователя в порядке создания, с упражнениями и расписанием."""
    workouts = await service.list_workouts(current_user.id)
    return [WorkoutRead.from_workout(w) for w in workouts]


@router.post("", response_model=WorkoutRead)
async def create_workout(
    payload: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = await service.create_workout(current_user.id, payload)
    return WorkoutRead.from_workout(workout)


@router.get("/date/{date}", response_model=DayRead)
async def get_workout_for_date(
    date: str,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Тренировка на дату; если ничего не запланировано — день отдыха (category="Rest")."""
    result = await service.workout_for_date(current_user.id, date)
    return DayRead.from_result(result)


@router.get("/week/{date}", response_model=List[WeekDayRead])
async def get_week(
    date: str,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """7 дней начиная с date (YYYY-MM-DD), вместе с записанными за каждый день логами."""
    week = await service.week_for(current_user.id, date)
    return [WeekDayRead.from_result(day) for day in week]


# ==========================
# ЛОГИ
# ==========================

@router.get("/logs", response_model=List[WorkoutLogRead])
async def get_logs(
    date: Optional[str] = Query(None, description="YYYY-MM-DD; без параметра — вся история"),
    current_user: User = Depends(get_current_user),
    reconciler: LogReconciler = Depends(get_log_reconciler),
):
    if date is None:
        return await reconciler.logs_for_user(current_user.id)
    return await reconciler.logs_for_date(current_user.id, date)


@router.get("/logs/{date}", response_model=List[WorkoutLogRead])
async def get_logs_for_date(
    date: str,
    current_user: User = Depends(get_current_user),
    reconciler: LogReconciler = Depends(get_log_reconciler),
):
    return await reconciler.logs_for_date(current_user.id, date)


@router.post("/logs", response_model=WorkoutLogRead)
async def create_log(
    payload: WorkoutLogCreate,
    current_user: User = Depends(get_current_user),
    reconciler: LogReconciler = Depends(get_log_reconciler),
):
    return await reconciler.log_session(
        current_user.id, payload.workout_id, payload.date, payload.exercises
    )


# ==========================
# ОТДЕЛЬНАЯ ТРЕНИРОВКА
# ==========================

@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    workout = await service.get_workout(current_user.id, workout_id)
    return WorkoutRead.from_workout(workout)


@router.post("/{workout_id}/log", response_model=WorkoutLogRead)
async def log_workout(
    workout_id: int,
    payload: WorkoutSessionLog,
    current_user: User = Depends(get_current_user),
    reconciler: LogReconciler = Depends(get_log_reconciler),
):
    return await reconciler.log_session(
        current_user.id, workout_id, payload.date, payload.exercises
    )


@router.get("/{workout_id}/logs", response_model=List[WorkoutLogRead])
async def get_workout_logs(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    reconciler: LogReconciler = Depends(get_log_reconciler),
):
    return await reconciler.logs_for_workout(current_user.id, workout_id)


@router.delete("/{workout_id}", response_model=MessageResponse)
async def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Удаляет тренировку, её упражнения и логи одной транзакцией."""
    await service.delete_workout(current_user.id, workout_id)
    return MessageResponse(message="Workout deleted successfully")
