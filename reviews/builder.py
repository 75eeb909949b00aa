# reviews/builder.py
"""
Fluent-построитель отзыва для одной reviewable-сущности.

    review(place).by(user).with_extra("service", 5).publish(4, title="Неплохо")

Построитель можно использовать повторно: publish/update не "закрывают" его.
"""

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from .exceptions import ReviewsConfigurationError
from .models.base import require_session
from .models.review import Review
from .registry import is_reviewable, reviewer_id_of
from .repository import ReviewRepository

logger = logging.getLogger(__name__)


class ReviewBuilder:
    """Накопитель полей отзыва: автор и extra"""

    def __init__(self, reviewable, reviewer=None, session: Optional[Session] = None):
        if not is_reviewable(reviewable):
            raise ReviewsConfigurationError(
                f"Model `{type(reviewable).__name__}` is not reviewable. "
                f"Are you sure you added the `Reviewable` mixin to the model?"
            )

        self.reviewable = reviewable
        self.reviewer_id = reviewer_id_of(reviewer) if reviewer is not None else None
        self.data = {"extra": {}}
        self._session = session

    @property
    def repository(self) -> ReviewRepository:
        return ReviewRepository(require_session(self.reviewable, self._session))

    def by(self, reviewer) -> "ReviewBuilder":
        """Автор отзыва: сущность или её id"""
        self.reviewer_id = reviewer_id_of(reviewer)
        return self

    def extra(self, extra: dict) -> "ReviewBuilder":
        self.data["extra"] = dict(extra)
        return self

    def with_extra(self, key: str, value: Any) -> "ReviewBuilder":
        self.data["extra"][key] = value
        return self

    def _require_reviewer(self) -> Any:
        if self.reviewer_id is None:
            raise ValueError("Reviewer is not set. Call `.by(reviewer)` or pass `reviewer=`")
        return self.reviewer_id

    def publish(self, value: int, title: Optional[str] = None, body: Optional[str] = None) -> Review:
        """Создать отзыв (или перезаписать отзыв этого автора)"""
        return self.repository.create_or_update(
            self.reviewable,
            self._require_reviewer(),
            value,
            title=title,
            body=body,
            extra=self.data["extra"],
        )

    def update(self, value: int, title: Optional[str] = None, body: Optional[str] = None) -> Review:
        """Обновить отзыв со слиянием extra; если отзыва нет, создать"""
        return self.repository.upsert_with_merge(
            self.reviewable,
            self._require_reviewer(),
            value,
            title=title,
            body=body,
            extra=self.data["extra"],
        )

    def exists(self) -> bool:
        return self.repository.exists(self.reviewable, self._require_reviewer())

    def delete(self) -> bool:
        return self.repository.delete(self.reviewable, self._require_reviewer())

    def average(self, extra_key: Optional[str] = None, precision: Optional[int] = None) -> Optional[float]:
        # По всем отзывам сущности, автор не учитывается
        return self.repository.average(self.reviewable, extra_key, precision)

    def total(self) -> int:
        return self.repository.count(self.reviewable)


def review(reviewable, reviewer=None, session: Optional[Session] = None) -> ReviewBuilder:
    """Построитель отзыва для сущности"""
    return ReviewBuilder(reviewable, reviewer=reviewer, session=session)
