"""Пакет доменных моделей.

Предоставляет модели товара и состояния сессии:
    from src.models import ProductRecord, SessionState, ScrapeResult
"""

from src.models.product import (
    PRICE_UNAVAILABLE,
    RATING_NOT_FOUND,
    REVIEWS_NOT_FOUND,
    UNKNOWN_ASIN,
    ProductRecord,
)
from src.models.session import (
    ScrapeResult,
    ScrapeSummary,
    SessionState,
    TerminationReason,
)

__all__ = [
    "PRICE_UNAVAILABLE",
    "RATING_NOT_FOUND",
    "REVIEWS_NOT_FOUND",
    "UNKNOWN_ASIN",
    "ProductRecord",
    "ScrapeResult",
    "ScrapeSummary",
    "SessionState",
    "TerminationReason",
]
