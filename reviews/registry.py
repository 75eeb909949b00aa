# reviews/registry.py
"""
Реестр полиморфных моделей.

Вместо имени класса в reviewable_type хранится короткий "kind"
(по умолчанию __tablename__ модели). Реестр сопоставляет kind с моделью
и умеет загрузить сущность по паре (kind, id).
"""

import logging
from typing import Any, Dict, NamedTuple, Optional, Type

from sqlalchemy import inspect

from .exceptions import ReviewsConfigurationError, UnknownReviewableKind

logger = logging.getLogger(__name__)

_reviewables: Dict[str, type] = {}
_reviewer: Optional[type] = None


class ReviewableRef(NamedTuple):
    """Ссылка на reviewable-сущность: дискриминатор + идентификатор"""
    kind: str
    id: Any

    @classmethod
    def of(cls, entity) -> "ReviewableRef":
        return cls(reviewable_kind(entity), entity.id)

    def resolve(self, session):
        """Загрузить сущность через зарегистрированную модель"""
        return session.get(get_reviewable_model(self.kind), self.id)


def _model_of(model_or_entity) -> type:
    return model_or_entity if isinstance(model_or_entity, type) else type(model_or_entity)


def register_reviewable(model: type, kind: Optional[str] = None) -> str:
    kind = kind or getattr(model, "__reviewable_kind__", None) or getattr(model, "__tablename__", None)
    if not kind:
        raise ReviewsConfigurationError(
            f"Model `{model.__name__}` has neither `__reviewable_kind__` nor `__tablename__`"
        )

    registered = _reviewables.get(kind)
    if registered is not None and registered is not model:
        # Наследник с той же таблицей (single table inheritance) остаётся под родителем
        if issubclass(model, registered):
            return kind
        raise ReviewsConfigurationError(
            f"Reviewable kind `{kind}` is already registered for `{registered.__name__}`"
        )

    _reviewables[kind] = model
    model.__reviewable_kind__ = kind
    logger.debug(f"Registered reviewable model {model.__name__} as `{kind}`")
    return kind


def register_reviewer(model: type) -> None:
    global _reviewer
    if _reviewer is not None and _reviewer is not model and not issubclass(model, _reviewer):
        raise ReviewsConfigurationError(
            f"Reviewer model is already registered: `{_reviewer.__name__}`"
        )
    if _reviewer is None:
        _reviewer = model


def is_reviewable(model_or_entity) -> bool:
    model = _model_of(model_or_entity)
    kind = getattr(model, "__reviewable_kind__", None)
    return kind is not None and issubclass(model, _reviewables.get(kind, ()))


def reviewable_kind(model_or_entity) -> str:
    model = _model_of(model_or_entity)
    if not is_reviewable(model):
        raise ReviewsConfigurationError(
            f"Model `{model.__name__}` is not reviewable. "
            f"Are you sure you added the `Reviewable` mixin to the model?"
        )
    return model.__reviewable_kind__


def get_reviewable_model(kind: str) -> type:
    try:
        return _reviewables[kind]
    except KeyError:
        raise UnknownReviewableKind(kind) from None


def get_reviewer_model() -> Type:
    if _reviewer is None:
        raise ReviewsConfigurationError("No reviewer model registered. Add the `Reviewer` mixin to your user model")
    return _reviewer


def reviewer_id_of(reviewer) -> Any:
    """Принимает сущность автора или сырой идентификатор"""
    state = inspect(reviewer, raiseerr=False)
    if state is not None and getattr(state, "mapper", None) is not None:
        return reviewer.id
    return reviewer
