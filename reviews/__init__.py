# reviews/__init__.py
"""
Полиморфные отзывы для SQLAlchemy-моделей
"""

from .config import settings
from .exceptions import ReviewsError, ReviewsConfigurationError, UnknownReviewableKind
from .models import Base, Review, Reviewable, Reviewer
from .registry import ReviewableRef, get_reviewable_model, is_reviewable, reviewable_kind
from .repository import ReviewRepository
from .builder import ReviewBuilder, review

__all__ = [
    'settings',
    'ReviewsError',
    'ReviewsConfigurationError',
    'UnknownReviewableKind',
    'Base',
    'Review',
    'Reviewable',
    'Reviewer',
    'ReviewableRef',
    'get_reviewable_model',
    'is_reviewable',
    'reviewable_kind',
    'ReviewRepository',
    'ReviewBuilder',
    'review',
]
