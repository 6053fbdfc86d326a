"""Доменная модель товара из поисковой выдачи Amazon.

ProductRecord создаётся экстрактором без позиционных полей, затем
агрегатор проставляет номер страницы и позицию на странице, а после
завершения обхода — сквозной номер в сессии. Запись иммутабельна:
каждое проставление возвращает новый экземпляр.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any

# Маркеры «значение не найдено на странице». Отличаются от настоящих
# нулей и пустых строк, поэтому хранятся как текст.
PRICE_UNAVAILABLE = "No featured offers/Item not available"
RATING_NOT_FOUND = "No rating found"
REVIEWS_NOT_FOUND = "No reviews found"
UNKNOWN_ASIN = "Unknown"


@dataclass(frozen=True)
class ProductRecord:
    """Один товар, извлечённый из карточки поисковой выдачи.

    Attributes:
        asin: Идентификатор товара Amazon (атрибут data-asin).
        title: Название товара. Обязательное поле.
        price: Цена числом или PRICE_UNAVAILABLE.
        currency_symbol: Символ валюты, пустой если цены нет.
        rating: Рейтинг 0–5 или RATING_NOT_FOUND.
        review_count: Количество отзывов или REVIEWS_NOT_FOUND.
        url: Абсолютная ссылка на товар или пустая строка.
        page: Номер страницы выдачи (с 1).
        index_on_page: Позиция в пакете своей страницы (с 1).
        global_index: Позиция во всей сессии (с 1).
    """

    asin: str
    title: str
    price: int | float | str = PRICE_UNAVAILABLE
    currency_symbol: str = ""
    rating: float | str = RATING_NOT_FOUND
    review_count: int | str = REVIEWS_NOT_FOUND
    url: str = ""
    page: int | None = None
    index_on_page: int | None = None
    global_index: int | None = None

    @property
    def has_price(self) -> bool:
        return self.price != PRICE_UNAVAILABLE

    def with_position(self, page: int, index_on_page: int) -> "ProductRecord":
        """Возвращает копию с номером страницы и позицией на ней."""
        return replace(self, page=page, index_on_page=index_on_page)

    def with_global_index(self, global_index: int) -> "ProductRecord":
        """Возвращает копию со сквозным номером в сессии."""
        return replace(self, global_index=global_index)

    def to_dict(self) -> dict[str, Any]:
        """Плоский словарь со всеми полями для сериализации."""
        return asdict(self)
