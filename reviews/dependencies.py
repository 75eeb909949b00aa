# reviews/dependencies.py
"""
Зависимости FastAPI: сессия БД, текущий автор, reviewable-сущность
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Path, status
from sqlalchemy.orm import Session

from .database import get_db
from .exceptions import UnknownReviewableKind
from .registry import ReviewableRef


def get_db_session(db: Session = Depends(get_db)) -> Session:
    """Сессия базы данных на запрос"""
    return db


def get_current_reviewer_id(
    x_reviewer_id: Optional[int] = Header(default=None, alias="X-Reviewer-Id"),
) -> int:
    """Идентификатор автора из заголовка X-Reviewer-Id"""
    if x_reviewer_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Reviewer-Id header is required"
        )
    return x_reviewer_id


def get_reviewable(
    kind: str = Path(...),
    reviewable_id: int = Path(...),
    db: Session = Depends(get_db_session),
):
    """Найти reviewable-сущность по (kind, id)"""
    try:
        entity = ReviewableRef(kind, reviewable_id).resolve(db)
    except UnknownReviewableKind:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown reviewable type `{kind}`"
        )

    if entity is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{kind} {reviewable_id} not found"
        )
    return entity
