import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import init_database
from app.core.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Workout Tracker - schedules and workout logs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено")


@app.get("/")
async def root():
    return {
        "app": "Workout Tracker",
        "links": {
            "workouts": "/api/v1/workouts",
            "week": "/api/v1/workouts/week/{YYYY-MM-DD}",
            "logs": "/api/v1/workouts/logs",
            "docs": "/docs",
        }
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
