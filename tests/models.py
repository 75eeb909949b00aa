# tests/models.py
"""
Модели "приложения" для тестов
"""

from sqlalchemy import Column, Integer, String

from reviews.models import Base, Reviewable, Reviewer


class User(Base, Reviewer):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100))


class Place(Base, Reviewable):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)


class Article(Base, Reviewable):
    __tablename__ = "articles"
    __reviewable_kind__ = "article"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)


class Tag(Base):
    """Обычная модель без отзывов"""
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    label = Column(String(50))


class Rated(Reviewable):
    """Промежуточный миксин без таблицы"""

    def stars(self):
        return self.review().average()


class Movie(Base, Rated):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
