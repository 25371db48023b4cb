import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.models.workout import WorkoutCategory
from app.services.schedule import decode_days


class CamelModel(BaseModel):
    """На проводе поля в camelCase (workoutId, userId), в коде — snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ==========================
# ВХОДНЫЕ СХЕМЫ
# ==========================

class ExerciseInput(CamelModel):
    name: str = Field(min_length=1)
    sets: int = Field(ge=0)
    reps: int = Field(ge=0)
    weight: float = Field(ge=0)
    notes: Optional[str] = None


class ExerciseUpdate(ExerciseInput):
    progress: Optional[int] = Field(default=None, ge=0)


class ScheduleInput(CamelModel):
    # тип и дни проверяет ScheduleRule.build, чтобы ошибка указывала на конкретное поле
    type: str
    days: List[int] = []
    frequency: int = 1


class WorkoutCreate(CamelModel):
    name: str = Field(min_length=1)
    category: WorkoutCategory
    exercises: List[ExerciseInput]
    schedule: ScheduleInput


class ExerciseResult(CamelModel):
    """Фактически выполненное упражнение в логе."""
    name: str
    sets: int = Field(ge=0)
    reps: int = Field(ge=0)
    weight: float = Field(ge=0)
    notes: Optional[str] = None


class WorkoutSessionLog(CamelModel):
    date: str
    exercises: List[ExerciseResult]


class WorkoutLogCreate(WorkoutSessionLog):
    workout_id: int


# ==========================
# ОТВЕТЫ
# ==========================

class ExerciseRead(CamelModel):
    id: int
    workout_id: int
    name: str
    sets: int
    reps: int
    weight: float
    progress: int = 0
    notes: Optional[str] = None


class WorkoutRead(CamelModel):
    id: int
    user_id: int
    name: str
    category: str
    type: str
    days: List[int]
    frequency: int
    created_at: Optional[dt.datetime] = None
    exercises: List[ExerciseRead]

    @classmethod
    def from_workout(cls, workout) -> "WorkoutRead":
        return cls(
            id=workout.id,
            user_id=workout.user_id,
            name=workout.name,
            category=workout.category,
            type=workout.schedule_type,
            days=decode_days(workout.schedule_days),
            frequency=workout.frequency,
            created_at=workout.created_at,
            exercises=[ExerciseRead.model_validate(e) for e in workout.exercises],
        )


class WorkoutSummary(CamelModel):
    name: str
    category: str


class WorkoutLogRead(CamelModel):
    id: int
    user_id: int
    workout_id: int
    date: dt.datetime
    exercises: List[ExerciseResult]
    created_at: Optional[dt.datetime] = None
    workout: Optional[WorkoutSummary] = None


class DayRead(CamelModel):
    id: Optional[int] = None
    date: dt.date
    category: str
    name: Optional[str] = None
    exercises: List[ExerciseRead]

    @classmethod
    def from_result(cls, result) -> "DayRead":
        return cls(
            id=result.workout_id,
            date=result.date,
            category=result.category,
            name=result.name,
            exercises=[ExerciseRead.model_validate(e) for e in result.exercises],
        )


class WeekDayRead(DayRead):
    logs: List[WorkoutLogRead] = []

    @classmethod
    def from_result(cls, result) -> "WeekDayRead":
        day = DayRead.from_result(result)
        return cls(
            **day.model_dump(),
            logs=[WorkoutLogRead.model_validate(log) for log in result.logs],
        )


class MessageResponse(BaseModel):
    message: str
