# reviews/models/__init__.py
from .base import Base, TimestampMixin
from .review import Review
from .mixins import Reviewable, Reviewer

__all__ = [
    'Base',
    'TimestampMixin',
    'Review',
    'Reviewable',
    'Reviewer',
]
