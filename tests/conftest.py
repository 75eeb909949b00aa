# tests/conftest.py
import pytest
from sqlalchemy.pool import StaticPool

from reviews.database import create_tables, drop_tables, make_engine, make_session_factory
from tests.models import Article, Place, User


@pytest.fixture
def engine():
    engine = make_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_tables(engine)
    yield engine
    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(name="user"):
        user = User(name=name)
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def other_user(make_user):
    return make_user("bob")


@pytest.fixture
def make_place(db):
    def _make(name="place"):
        place = Place(name=name)
        db.add(place)
        db.commit()
        return place
    return _make


@pytest.fixture
def place(make_place):
    return make_place("Central Perk")


@pytest.fixture
def article(db):
    article = Article(title="On reviews")
    db.add(article)
    db.commit()
    return article
