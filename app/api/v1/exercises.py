from fastapi import APIRouter, Depends, Response, status

from app.core.dependencies import get_current_user, get_workout_service
from app.models.user import User
from app.schemas.workout import ExerciseRead, ExerciseUpdate
from app.services.workout_service import WorkoutService

router = APIRouter(tags=["exercises"])


@router.put("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Обновить упражнение в шаблоне своей тренировки. Уже записанные логи не меняются."""
    return await service.update_exercise(current_user.id, exercise_id, payload)


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: int,
    current_user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_exercise(current_user.id, exercise_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
