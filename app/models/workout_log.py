from datetime import datetime

from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutLog(Base):
    """Снимок выполненной тренировки.

    exercises хранит копию результатов ([{name, sets, reps, weight, notes?}]),
    а не ссылки на строки Exercise: правка шаблона не меняет историю.
    """
    __tablename__ = "workout_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    exercises = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="workout_logs")
    workout = relationship("Workout", back_populates="logs")
