"""
Интеграционные тесты эндпоинтов /api/v1/exercises/*.

- PUT /exercises/{id}: обновление упражнения своей тренировки
- DELETE /exercises/{id}: 204
- чужое или несуществующее упражнение → 404
"""

import pytest

from tests.conftest import make_exercise

pytestmark = pytest.mark.integration

UPDATE = {"name": "Incline Bench", "sets": 4, "reps": 8, "weight": 72.5, "notes": "slow eccentric"}


async def test_update_exercise(user_client, mock_workout_repo):
    exercise = make_exercise(exercise_id=3, workout_id=1)
    mock_workout_repo.get_exercise_for_user.return_value = exercise
    mock_workout_repo.save_exercise.side_effect = lambda e: e

    response = await user_client.put("/api/v1/exercises/3", json={**UPDATE, "progress": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Incline Bench"
    assert data["weight"] == 72.5
    assert data["progress"] == 2
    assert data["notes"] == "slow eccentric"
    mock_workout_repo.get_exercise_for_user.assert_awaited_once_with(3, 1)


async def test_update_exercise_invalid_body_returns_400(user_client, mock_workout_repo):
    response = await user_client.put("/api/v1/exercises/3", json={"name": "Bench"})
    assert response.status_code == 400
    mock_workout_repo.save_exercise.assert_not_awaited()


async def test_update_foreign_exercise_returns_404(user_client, mock_workout_repo):
    mock_workout_repo.get_exercise_for_user.return_value = None

    response = await user_client.put("/api/v1/exercises/3", json=UPDATE)

    assert response.status_code == 404
    assert response.json() == {"error": "Exercise not found"}


async def test_delete_exercise_returns_204(user_client, mock_workout_repo):
    exercise = make_exercise(exercise_id=3)
    mock_workout_repo.get_exercise_for_user.return_value = exercise

    response = await user_client.delete("/api/v1/exercises/3")

    assert response.status_code == 204
    assert response.content == b""
    mock_workout_repo.delete_exercise.assert_awaited_once_with(exercise)


async def test_delete_missing_exercise_returns_404(user_client, mock_workout_repo):
    response = await user_client.delete("/api/v1/exercises/3")
    assert response.status_code == 404
    mock_workout_repo.delete_exercise.assert_not_awaited()
