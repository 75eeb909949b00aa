# reviews/routers/reviews.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..builder import ReviewBuilder
from ..dependencies import get_current_reviewer_id, get_db_session, get_reviewable
from ..registry import reviewable_kind
from ..repository import ReviewRepository
from ..schemas.review import ReviewCreate, ReviewExists, ReviewResponse, ReviewSummary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reviews", tags=["Reviews"])


def _builder(reviewable, reviewer_id: int, review_data: ReviewCreate, db: Session) -> ReviewBuilder:
    return ReviewBuilder(reviewable, reviewer=reviewer_id, session=db).extra(review_data.extra)


@router.get("/by-reviewer/{reviewer_id}", response_model=List[ReviewResponse])
def get_reviews_by_reviewer(
    reviewer_id: int,
    db: Session = Depends(get_db_session)
):
    """Получить отзывы автора"""
    reviews = ReviewRepository(db).list_by_reviewer(reviewer_id)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.get("/{kind}/{reviewable_id}", response_model=List[ReviewResponse])
def get_reviews(
    reviewable=Depends(get_reviewable),
    db: Session = Depends(get_db_session)
):
    """Получить отзывы сущности"""
    reviews = ReviewRepository(db).list_for(reviewable)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.post("/{kind}/{reviewable_id}", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def publish_review(
    review_data: ReviewCreate,
    response: Response,
    reviewable=Depends(get_reviewable),
    reviewer_id: int = Depends(get_current_reviewer_id),
    db: Session = Depends(get_db_session)
):
    """Создать отзыв: 201 для нового, 200 если перезаписан отзыв автора"""
    builder = _builder(reviewable, reviewer_id, review_data, db)
    if builder.exists():
        response.status_code = status.HTTP_200_OK

    review = builder.publish(
        review_data.value, title=review_data.title, body=review_data.body
    )
    return ReviewResponse.model_validate(review)


@router.patch("/{kind}/{reviewable_id}", response_model=ReviewResponse)
def update_review(
    review_data: ReviewCreate,
    reviewable=Depends(get_reviewable),
    reviewer_id: int = Depends(get_current_reviewer_id),
    db: Session = Depends(get_db_session)
):
    """Обновить отзыв, extra сливается с сохранённым"""
    review = _builder(reviewable, reviewer_id, review_data, db).update(
        review_data.value, title=review_data.title, body=review_data.body
    )
    return ReviewResponse.model_validate(review)


@router.delete("/{kind}/{reviewable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    reviewable=Depends(get_reviewable),
    reviewer_id: int = Depends(get_current_reviewer_id),
    db: Session = Depends(get_db_session)
):
    """Удалить отзыв текущего автора"""
    deleted = ReviewBuilder(reviewable, reviewer=reviewer_id, session=db).delete()

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{kind}/{reviewable_id}/exists", response_model=ReviewExists)
def review_exists(
    reviewable=Depends(get_reviewable),
    reviewer_id: int = Depends(get_current_reviewer_id),
    db: Session = Depends(get_db_session)
):
    """Оставлял ли текущий автор отзыв"""
    exists = ReviewBuilder(reviewable, reviewer=reviewer_id, session=db).exists()
    return ReviewExists(exists=exists)


@router.get("/{kind}/{reviewable_id}/summary", response_model=ReviewSummary)
def review_summary(
    extra: Optional[str] = Query(None, description="Ключ extra для среднего"),
    precision: Optional[int] = Query(None, ge=0, le=10),
    reviewable=Depends(get_reviewable),
    db: Session = Depends(get_db_session)
):
    """Средняя оценка и количество отзывов"""
    builder = ReviewBuilder(reviewable, session=db)
    return ReviewSummary(
        reviewable_type=reviewable_kind(reviewable),
        reviewable_id=reviewable.id,
        average=builder.average(extra, precision),
        extra_key=extra,
        total=builder.total(),
    )
