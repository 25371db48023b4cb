import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Text
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutCategory(str, enum.Enum):
    push = "Push"
    pull = "Pull"
    legs = "Legs"
    upper = "Upper"
    lower = "Lower"


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    schedule_type = Column(String, nullable=False)
    # "1,3,5": дни недели через запятую, 0 = воскресенье; пустая строка для daily
    schedule_days = Column(String, nullable=False, default="")
    frequency = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.id",
        lazy="selectin",
    )
    logs = relationship("WorkoutLog", back_populates="workout", passive_deletes=True)


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    sets = Column(Integer, nullable=False)
    reps = Column(Integer, nullable=False)
    weight = Column(Float, default=0, nullable=False)
    progress = Column(Integer, default=0, nullable=False)
    notes = Column(Text, nullable=True)

    workout = relationship("Workout", back_populates="exercises")
