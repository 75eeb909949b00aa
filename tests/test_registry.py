"""
Тесты реестра reviewable-моделей и полиморфных ссылок.
"""

import pytest
from sqlalchemy import select

from reviews import ReviewableRef, ReviewsConfigurationError, UnknownReviewableKind
from reviews.models import Review
from reviews.registry import (
    get_reviewable_model,
    get_reviewer_model,
    is_reviewable,
    register_reviewable,
    reviewable_kind,
    reviewer_id_of,
)
from tests.models import Article, Movie, Place, Rated, Tag, User


def test_kind_defaults_to_tablename():
    assert reviewable_kind(Place) == "places"
    assert get_reviewable_model("places") is Place


def test_kind_can_be_overridden():
    assert reviewable_kind(Article) == "article"
    assert get_reviewable_model("article") is Article


def test_is_reviewable():
    assert is_reviewable(Place)
    assert is_reviewable(Place(name="x"))
    assert not is_reviewable(Tag)
    assert not is_reviewable(User)


def test_reviewable_kind_of_plain_model_raises():
    with pytest.raises(ReviewsConfigurationError, match="Tag"):
        reviewable_kind(Tag)


def test_unknown_kind():
    with pytest.raises(UnknownReviewableKind) as exc_info:
        get_reviewable_model("spaceships")
    assert exc_info.value.kind == "spaceships"


def test_duplicate_kind_is_rejected():
    class Impostor:
        __tablename__ = "impostors"

    with pytest.raises(ReviewsConfigurationError, match="already registered"):
        register_reviewable(Impostor, kind="article")


def test_reviewer_model_registered():
    assert get_reviewer_model() is User


def test_reviewer_id_of(user):
    assert reviewer_id_of(user) == user.id
    assert reviewer_id_of(42) == 42


def test_ref_of_and_resolve(db, place, article):
    ref = ReviewableRef.of(article)

    assert ref == ReviewableRef("article", article.id)
    assert ref.resolve(db) is article
    assert ReviewableRef("places", place.id).resolve(db) is place
    assert ReviewableRef("places", 12345).resolve(db) is None


def test_review_with_type_clause(db, place, article, user):
    place.review(2, reviewer=user)
    article.review(3, reviewer=user)

    values = db.scalars(select(Review.value).where(Review.with_type(Article))).all()
    assert values == [3]
    assert len(db.scalars(select(Review.id).where(Review.with_type("places"))).all()) == 1


def test_unmapped_intermediate_class_is_not_registered():
    assert not is_reviewable(Rated)
    assert reviewable_kind(Movie) == "movies"
    assert get_reviewable_model("movies") is Movie


def test_intermediate_mixin_subclass_gets_reviews(db, user):
    movie = Movie(title="Solaris")
    db.add(movie)
    db.commit()

    movie.review(5, reviewer=user)

    assert movie.stars() == 5.0
    assert [r.reviewable_type for r in movie.reviews] == ["movies"]
