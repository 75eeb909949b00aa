# reviews/models/base.py
from sqlalchemy import BigInteger, Column, DateTime, Integer
from sqlalchemy.orm import Session, declarative_base, object_session
from sqlalchemy.sql import func

from ..exceptions import ReviewsConfigurationError

Base = declarative_base()

# BIGINT на SQLite не становится автоинкрементным rowid
BigIntegerKey = BigInteger().with_variant(Integer(), "sqlite")


class TimestampMixin:
    """Миксин для добавления временных меток"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


def require_session(entity, session: Session = None) -> Session:
    """Явно переданная сессия или сессия, к которой привязана сущность"""
    session = session or object_session(entity)
    if session is None:
        raise ReviewsConfigurationError(
            f"`{type(entity).__name__}` is not attached to a session; pass `session=` explicitly"
        )
    return session
