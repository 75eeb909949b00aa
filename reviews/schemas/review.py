# reviews/schemas/review.py
from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import Field, field_validator
from .base import BaseSchema, ReviewableSchema

class ReviewCreate(BaseSchema):
    """Схема для создания/обновления отзыва"""
    # Диапазон оценки не ограничиваем, только размер SMALLINT
    value: int = Field(..., ge=-32768, le=32767)
    title: Optional[str] = None
    body: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "body")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return v
        return v.strip() or None

class ReviewResponse(ReviewableSchema):
    """Схема ответа с отзывом"""
    id: int
    user_id: int
    value: int
    title: Optional[str]
    body: Optional[str]
    extra: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime | None = None

class ReviewSummary(ReviewableSchema):
    """Агрегаты по отзывам сущности"""
    average: Optional[float] = None
    extra_key: Optional[str] = None
    total: int

class ReviewExists(BaseSchema):
    exists: bool
