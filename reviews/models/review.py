# reviews/models/review.py
from sqlalchemy import Column, String, Text, SmallInteger, ForeignKey, JSON, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Session

from ..config import settings
from ..registry import ReviewableRef, get_reviewer_model, reviewable_kind
from .base import Base, BigIntegerKey, TimestampMixin, require_session


def _table_args():
    table = settings.REVIEWS_TABLE
    args = [
        Index(f"ix_{table}_reviewable", "reviewable_type", "reviewable_id"),
    ]
    if settings.REVIEWS_UNIQUE_PER_REVIEWER:
        # Без ограничения два параллельных create_or_update могут создать дубль
        args.append(UniqueConstraint(
            "reviewable_type", "reviewable_id", "user_id",
            name=f"uq_{table}_reviewable_user"
        ))
    return tuple(args)


class Review(Base, TimestampMixin):
    """Модель отзыва"""
    __tablename__ = settings.REVIEWS_TABLE

    id = Column(BigIntegerKey, primary_key=True, autoincrement=True)
    reviewable_type = Column(String(255), nullable=False)
    reviewable_id = Column(BigIntegerKey, nullable=False)
    user_id = Column(
        BigIntegerKey,
        ForeignKey(settings.users_foreign_key, ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    value = Column(SmallInteger, nullable=False)
    title = Column(Text)
    body = Column(Text)
    extra = Column(JSON().with_variant(JSONB(), "postgresql"), default=dict)

    __table_args__ = _table_args()

    @classmethod
    def with_type(cls, kind_or_model):
        """Условие на тип reviewable (строка kind, модель или сущность)"""
        kind = kind_or_model if isinstance(kind_or_model, str) else reviewable_kind(kind_or_model)
        return cls.reviewable_type == kind

    @property
    def reviewable_ref(self) -> ReviewableRef:
        return ReviewableRef(self.reviewable_type, self.reviewable_id)

    @property
    def reviewable(self):
        """Сущность, к которой относится отзыв"""
        return self.reviewable_ref.resolve(require_session(self))

    @property
    def reviewer(self):
        """Автор отзыва"""
        return require_session(self).get(get_reviewer_model(), self.user_id)

    def load_reviewable(self, session: Session):
        """То же, что reviewable, но через переданную сессию (для отсоединённых отзывов)"""
        return self.reviewable_ref.resolve(session)

    def __repr__(self):
        return f"<Review(id={self.id}, {self.reviewable_type}:{self.reviewable_id}, user={self.user_id}, value={self.value})>"
