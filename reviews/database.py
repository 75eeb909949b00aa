# reviews/database.py
"""
Подключение к базе данных, сессии и создание таблиц
"""

import logging
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # Без этого SQLite игнорирует ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: Optional[str] = None, **kwargs) -> Engine:
    """Создать движок; для SQLite включаются внешние ключи"""
    url = url or settings.DATABASE_URL
    kwargs.setdefault("echo", settings.DATABASE_ECHO)
    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, expire_on_commit=False)


# ========== ПОДКЛЮЧЕНИЕ К БАЗЕ ДАННЫХ ==========

engine = make_engine()

SessionLocal = make_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """Зависимость для получения сессии базы данных"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables(bind: Optional[Engine] = None) -> None:
    """Создать таблицы (отзывы и модели приложения на том же Base)"""
    bind = bind or engine
    Base.metadata.create_all(bind)
    logger.info(f"Tables created: {', '.join(sorted(Base.metadata.tables))}")


def drop_tables(bind: Optional[Engine] = None) -> None:
    bind = bind or engine
    Base.metadata.drop_all(bind)
    logger.info("Tables dropped")


__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'get_db',
    'make_engine',
    'make_session_factory',
    'create_tables',
    'drop_tables',
]
