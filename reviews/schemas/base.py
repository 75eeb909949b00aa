# reviews/schemas/base.py
from pydantic import BaseModel, ConfigDict

class BaseSchema(BaseModel):
    """Базовая схема с настройками"""
    model_config = ConfigDict(from_attributes=True)

class ReviewableSchema(BaseSchema):
    """Полиморфная ссылка на сущность"""
    reviewable_type: str
    reviewable_id: int

