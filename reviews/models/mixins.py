# reviews/models/mixins.py
"""
Миксины для моделей приложения: Reviewable (сущность, на которую пишут отзывы)
и Reviewer (автор отзывов).

Модели приложения должны наследоваться от reviews.models.Base,
иначе внешний ключ user_id не найдёт таблицу авторов.
"""

from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.orm import declared_attr, foreign, relationship, remote
from sqlalchemy.sql import Select

from ..registry import register_reviewable, register_reviewer, reviewable_kind, reviewer_id_of
from .base import require_session
from .review import Review


def _is_mapped_subclass(cls, *markers) -> bool:
    if cls.__dict__.get("__abstract__", False):
        return False
    return any(getattr(cls, name, None) for name in ("__tablename__",) + markers)


class Reviewable:
    """
    Сущность, которой можно оставлять отзывы.

    Тип в reviewable_type по умолчанию равен __tablename__,
    переопределяется атрибутом __reviewable_kind__. Промежуточные
    немаппированные классы (без обоих атрибутов) не регистрируются.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if _is_mapped_subclass(cls, "__reviewable_kind__"):
            register_reviewable(cls)

    @declared_attr
    def reviews(cls):
        kind = reviewable_kind(cls)
        return relationship(
            Review,
            primaryjoin=lambda: and_(
                cls.id == foreign(remote(Review.reviewable_id)),
                Review.reviewable_type == kind,
            ),
            order_by=lambda: Review.id,
            viewonly=True,
        )

    def review(
        self,
        value: Optional[int] = None,
        title: Optional[str] = None,
        body: Optional[str] = None,
        extra: Optional[dict] = None,
        reviewer=None,
        session=None,
    ):
        """
        Без value возвращает ReviewBuilder для этой сущности,
        с value сразу создаёт или перезаписывает отзыв автора.
        """
        from ..builder import ReviewBuilder

        builder = ReviewBuilder(self, reviewer=reviewer, session=session)
        if value is None:
            return builder

        if extra is not None:
            builder.extra(extra)
        return builder.publish(value, title=title, body=body)

    # ========== ЗАПРОСЫ ==========

    @classmethod
    def _review_avg_column(cls, extra_key: Optional[str] = None):
        if extra_key is None:
            column, label = Review.value, "reviews_avg_value"
        else:
            column, label = Review.extra[extra_key].as_float(), f"reviews_avg_extra_{extra_key}"

        return (
            select(func.avg(column))
            .where(
                Review.reviewable_type == reviewable_kind(cls),
                Review.reviewable_id == cls.id,
            )
            .correlate(cls)
            .scalar_subquery()
            .label(label)
        )

    @classmethod
    def with_review_avg_value(cls, stmt: Optional[Select] = None) -> Select:
        """Добавить к выборке колонку reviews_avg_value"""
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(cls._review_avg_column())

    @classmethod
    def order_by_review_value(cls, stmt: Optional[Select] = None) -> Select:
        column = cls._review_avg_column()
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(column).order_by(column.asc())

    @classmethod
    def order_by_review_value_desc(cls, stmt: Optional[Select] = None) -> Select:
        column = cls._review_avg_column()
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(column).order_by(column.desc())

    @classmethod
    def with_review_avg_extra(cls, key: str, stmt: Optional[Select] = None) -> Select:
        """Добавить к выборке колонку reviews_avg_extra_<key>"""
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(cls._review_avg_column(key))

    @classmethod
    def order_by_review_extra(cls, key: str, stmt: Optional[Select] = None) -> Select:
        column = cls._review_avg_column(key)
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(column).order_by(column.asc())

    @classmethod
    def order_by_review_extra_desc(cls, key: str, stmt: Optional[Select] = None) -> Select:
        column = cls._review_avg_column(key)
        stmt = select(cls) if stmt is None else stmt
        return stmt.add_columns(column).order_by(column.desc())


class Reviewer:
    """Автор отзывов (обычно модель пользователя)"""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if _is_mapped_subclass(cls):
            register_reviewer(cls)

    @declared_attr
    def authored_reviews(cls):
        # Удаление автора каскадно удаляет отзывы на уровне БД (ON DELETE CASCADE)
        return relationship(
            Review,
            primaryjoin=lambda: cls.id == foreign(Review.user_id),
            order_by=lambda: Review.id,
            viewonly=True,
        )

    def reviews_count(self, session=None) -> int:
        session = require_session(self, session)
        return session.execute(
            select(func.count(Review.id)).where(Review.user_id == reviewer_id_of(self))
        ).scalar()
