# reviews/main.py
"""
FastAPI приложение с роутером отзывов
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import select
from sqlalchemy.orm import Session

from .config import settings
from .database import create_tables
from .dependencies import get_db_session
from .routers import reviews_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    logger.info("Starting reviews service...")
    create_tables()
    yield
    logger.info("Stopping reviews service...")


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="Reviews API",
        description="Полиморфные отзывы для любых моделей",
        version="1.0.0",
        lifespan=lifespan
    )
    app.include_router(reviews_router, prefix="/api/v1")

    @app.get("/health")
    def health_check(db: Session = Depends(get_db_session)):
        """Проверка работоспособности сервиса"""
        db.execute(select(1))
        return {"status": "healthy", "database": "connected"}

    return app


app = create_app()
