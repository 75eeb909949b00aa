# reviews/schemas/__init__.py
from .base import BaseSchema, ReviewableSchema
from .review import ReviewCreate, ReviewResponse, ReviewSummary, ReviewExists

__all__ = [
    'BaseSchema',
    'ReviewableSchema',
    'ReviewCreate',
    'ReviewResponse',
    'ReviewSummary',
    'ReviewExists',
]
