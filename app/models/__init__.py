from app.models.user import User
from app.models.workout import Workout, Exercise, WorkoutCategory
from app.models.workout_log import WorkoutLog

__all__ = [
    "User",
    "Workout", "Exercise", "WorkoutCategory",
    "WorkoutLog",
]
