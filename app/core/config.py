from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://fit_user:fit_password@db:5432/fit_db"
    SECRET_KEY: str = "SECRET_KEY_FOR_WORKOUT_TRACKER"
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    ALGORITHM: str = "HS256"
    # 7 дней
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
