"""
Тесты fluent-построителя ReviewBuilder.
"""

import pytest

from reviews import ReviewBuilder, ReviewsConfigurationError, review
from tests.models import Tag


def test_builder_rejects_non_reviewable_entity(db):
    """Модель без Reviewable падает при создании построителя, до запросов к БД"""
    tag = Tag(label="misc")

    with pytest.raises(ReviewsConfigurationError, match="Tag"):
        ReviewBuilder(tag)

    with pytest.raises(ReviewsConfigurationError, match="Tag"):
        review(tag)


def test_publish_with_reviewer_entity_and_extra(place, user):
    builder = review(place).by(user).extra({"service": 5}).with_extra("food", 3)

    published = builder.publish(4, title="Nice", body="Would come back")

    assert published.user_id == user.id
    assert published.value == 4
    assert published.title == "Nice"
    assert published.body == "Would come back"
    assert published.extra == {"service": 5, "food": 3}


def test_by_accepts_raw_id(place, user):
    published = review(place).by(user.id).publish(2)
    assert published.user_id == user.id


def test_extra_replaces_whole_mapping(place, user):
    builder = review(place, reviewer=user).with_extra("a", 1).extra({"b": 2})
    assert builder.publish(1).extra == {"b": 2}


def test_update_merges_extra(place, user):
    review(place, reviewer=user).extra({"a": 1}).publish(3)

    updated = review(place, reviewer=user).with_extra("b", 2).update(5, title="Changed")

    assert updated.value == 5
    assert updated.title == "Changed"
    assert updated.extra == {"a": 1, "b": 2}


def test_builder_is_reusable(place, user):
    builder = review(place, reviewer=user)

    first = builder.publish(1)
    second = builder.publish(2)

    assert first.id == second.id
    assert builder.total() == 1
    assert builder.exists() is True


def test_exists_and_delete(place, user, other_user):
    review(place, reviewer=user).publish(4)

    assert review(place, reviewer=user).exists() is True
    assert review(place, reviewer=other_user).exists() is False

    assert review(place, reviewer=user).delete() is True
    assert review(place, reviewer=user).exists() is False


def test_average_and_total_ignore_builder_reviewer(place, user, other_user):
    review(place, reviewer=user).extra({"color": 4}).publish(3)
    review(place, reviewer=other_user).extra({"color": 2}).publish(5)

    builder = review(place, reviewer=user)
    assert builder.total() == 2
    assert builder.average() == 4.0
    assert builder.average("color") == 3.0


def test_publish_without_reviewer_raises(place):
    with pytest.raises(ValueError):
        review(place).publish(5)


def test_detached_entity_needs_session(user):
    from tests.models import Place

    detached = Place(id=99, name="Nowhere")
    builder = review(detached, reviewer=user)

    with pytest.raises(ReviewsConfigurationError, match="session"):
        builder.publish(3)


def test_explicit_session_for_detached_entity(db, user):
    from tests.models import Place

    place = Place(name="Transient")
    db.add(place)
    db.commit()
    db.expunge(place)

    published = review(place, reviewer=user, session=db).publish(3)
    assert published.reviewable_id == place.id


def test_exists_and_delete_without_reviewer_raise(place, user):
    review(place, reviewer=user).publish(4)

    with pytest.raises(ValueError):
        review(place).exists()
    with pytest.raises(ValueError):
        review(place).delete()

    assert review(place, reviewer=user).exists() is True
