# reviews/repository.py
"""
Запросы к отзывам, привязанные к reviewable-сущности и автору.

Все изменения сразу коммитятся. Операции вида "найти, потом записать"
(create_or_update, upsert_with_merge) выполняются без блокировок: два
параллельных запроса по одной паре (reviewable, reviewer) могут оба не найти
отзыв и оба попытаться вставить строку. От дубля защищает только уникальное
ограничение в БД (REVIEWS_UNIQUE_PER_REVIEWER), тогда второй запрос получит
IntegrityError.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from .config import settings
from .models.review import Review
from .registry import ReviewableRef

logger = logging.getLogger(__name__)


class ReviewRepository:
    """CRUD и агрегаты по отзывам"""

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _scope(reviewable) -> tuple:
        ref = ReviewableRef.of(reviewable)
        return (
            Review.reviewable_type == ref.kind,
            Review.reviewable_id == ref.id,
        )

    def _scope_reviewer(self, reviewable, reviewer_id) -> tuple:
        return self._scope(reviewable) + (Review.user_id == reviewer_id,)

    def _commit(self, review: Optional[Review] = None) -> None:
        try:
            self.session.flush()
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error saving review: {e}")
            raise

        if review is not None:
            # Подтягиваем created_at/updated_at, выставленные базой
            self.session.refresh(review)

    def find(self, reviewable, reviewer_id: Any) -> Optional[Review]:
        result = self.session.execute(
            select(Review).where(*self._scope_reviewer(reviewable, reviewer_id))
        )
        return result.scalars().first()

    def exists(self, reviewable, reviewer_id: Any) -> bool:
        result = self.session.execute(
            select(Review.id).where(*self._scope_reviewer(reviewable, reviewer_id)).limit(1)
        )
        return result.first() is not None

    def create_or_update(
        self,
        reviewable,
        reviewer_id: Any,
        value: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
        extra: Optional[dict] = None,
    ) -> Review:
        """Создать отзыв или перезаписать существующий отзыв автора (extra заменяется целиком)"""
        review = self.find(reviewable, reviewer_id)
        created = review is None

        if created:
            ref = ReviewableRef.of(reviewable)
            review = Review(
                reviewable_type=ref.kind,
                reviewable_id=ref.id,
                user_id=reviewer_id,
            )
            self.session.add(review)

        review.value = value
        review.title = title
        review.body = body
        review.extra = dict(extra or {})

        self._commit(review)
        logger.info(
            f"Review {'created' if created else 'updated'}: "
            f"{review.reviewable_type}:{review.reviewable_id}, user={reviewer_id}, value={value}"
        )
        return review

    def upsert_with_merge(
        self,
        reviewable,
        reviewer_id: Any,
        value: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
        extra: Optional[dict] = None,
    ) -> Review:
        """Обновить отзыв: value/title/body заменяются, extra сливается поверх старого"""
        review = self.find(reviewable, reviewer_id)

        if review is None:
            return self.create_or_update(reviewable, reviewer_id, value, title, body, extra)

        review.value = value
        review.title = title
        review.body = body
        # Новый dict, иначе изменение JSON-колонки не будет замечено
        review.extra = {**(review.extra or {}), **(extra or {})}

        self._commit(review)
        logger.info(
            f"Review merged: {review.reviewable_type}:{review.reviewable_id}, "
            f"user={reviewer_id}, value={value}"
        )
        return review

    def delete(self, reviewable, reviewer_id: Any) -> bool:
        result = self.session.execute(
            delete(Review).where(*self._scope_reviewer(reviewable, reviewer_id))
        )
        self._commit()

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Review deleted: {ReviewableRef.of(reviewable)}, user={reviewer_id}")
        return deleted

    def average(self, reviewable, extra_key: Optional[str] = None, precision: Optional[int] = None) -> Optional[float]:
        """
        Среднее по value (или по extra[extra_key]).

        Если отзывов нет, возвращает None.
        """
        column = Review.value if extra_key is None else Review.extra[extra_key].as_float()
        avg = self.session.execute(
            select(func.avg(column)).where(*self._scope(reviewable))
        ).scalar()

        if avg is None:
            return None

        if precision is None:
            precision = settings.REVIEWS_AVERAGE_PRECISION
        return round(float(avg), precision)

    def count(self, reviewable) -> int:
        result = self.session.execute(
            select(func.count(Review.id)).where(
                *self._scope(reviewable),
                Review.with_type(reviewable),
            )
        )
        return result.scalar()

    def list_for(self, reviewable) -> List[Review]:
        """Отзывы сущности, новые первыми"""
        result = self.session.execute(
            select(Review)
            .where(*self._scope(reviewable))
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return list(result.scalars().all())

    def list_by_reviewer(self, reviewer_id: Any) -> List[Review]:
        result = self.session.execute(
            select(Review)
            .where(Review.user_id == reviewer_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return list(result.scalars().all())
