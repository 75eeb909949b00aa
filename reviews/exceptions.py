# reviews/exceptions.py
"""
Исключения пакета отзывов.

Ошибки хранилища (IntegrityError, OperationalError и т.д.) сюда не
заворачиваются и пробрасываются как есть.
"""


class ReviewsError(Exception):
    """Базовое исключение пакета"""


class ReviewsConfigurationError(ReviewsError):
    """Модель не подключена к отзывам или подключена неправильно"""


class UnknownReviewableKind(ReviewsConfigurationError):
    """Для типа reviewable не зарегистрирована модель"""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No reviewable model registered for kind `{kind}`")
