# reviews/routers/__init__.py
"""
FastAPI роутеры
"""

from .reviews import router as reviews_router

__all__ = [
    'reviews_router',
]
