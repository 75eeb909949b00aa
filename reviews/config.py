# reviews/config.py
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field

# Корень проекта (там же ищем .env)
PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    #  Database
    DATABASE_URL: str = Field(
        default="sqlite:///./reviews.db",
        validation_alias="DATABASE_URL"
    )
    DATABASE_ECHO: bool = Field(default=False, validation_alias="DATABASE_ECHO")

    #  Reviews
    REVIEWS_TABLE: str = Field(default="reviews", validation_alias="REVIEWS_TABLE")
    # Таблица авторов отзывов (на неё ссылается user_id)
    REVIEWS_USERS_TABLE: str = Field(default="users", validation_alias="REVIEWS_USERS_TABLE")
    # Один отзыв на пару (reviewable, reviewer) на уровне БД
    REVIEWS_UNIQUE_PER_REVIEWER: bool = Field(
        default=True,
        validation_alias="REVIEWS_UNIQUE_PER_REVIEWER"
    )
    REVIEWS_AVERAGE_PRECISION: int = Field(
        default=2,
        validation_alias="REVIEWS_AVERAGE_PRECISION"
    )

    #  Logging
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    class Config:
        env_file = PROJECT_ROOT / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def users_foreign_key(self) -> str:
        return f"{self.REVIEWS_USERS_TABLE}.id"


# Единый экземпляр для всего проекта
settings = Settings()
