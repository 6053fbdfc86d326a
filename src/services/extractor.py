"""Извлечение товаров из HTML поисковой выдачи Amazon.

Разбор выполняется чистой функцией над разметкой (BeautifulSoup),
поэтому его можно проверять на статических HTML-фикстурах без
браузера. Все CSS-селекторы сайта собраны в этом модуле.
"""

import math
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from playwright.async_api import Page

from src.config import get_logger
from src.models import (
    PRICE_UNAVAILABLE,
    RATING_NOT_FOUND,
    REVIEWS_NOT_FOUND,
    UNKNOWN_ASIN,
    ProductRecord,
)

logger = get_logger("extractor")


def _to_number(text: str) -> int | float | None:
    """Преобразует строку в int, а при ненулевой дробной части в float.

    Returns:
        Число или None, если строка не является конечным числом.
    """
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def _text(card: Tag, selector: str) -> str | None:
    """Текст первого элемента по селектору или None, если его нет."""
    element = card.select_one(selector)
    if element is None:
        return None
    return element.get_text().strip()


class PageExtractor:
    """Разбирает карточки товаров на текущей странице выдачи.

    Каждое поле карточки разрешается независимо, с собственным
    значением по умолчанию. Карточки без названия отбрасываются.

    Attributes:
        _base_url: Origin сайта для построения абсолютных ссылок.
    """

    # Карточки выдачи: только настоящие товары с непустым data-asin
    RESULT_ITEM_SELECTOR = ".s-result-item"
    PRODUCT_CARD = '.s-result-item[data-asin]:not([data-asin=""])'
    TITLE = "h2 span"
    PRICE_WHOLE = ".a-price-whole"
    PRICE_FRACTION = ".a-price-fraction"
    PRICE_SYMBOL = ".a-price-symbol"
    RATING = ".a-icon-star-small"
    REVIEW_COUNT = ".a-size-base.s-underline-text"
    LINK = ".a-link-normal"

    # Пагинация
    NEXT_PAGE_SELECTOR = ".s-pagination-next"
    NEXT_PAGE_ENABLED_SELECTOR = (
        ".s-pagination-next:not(.s-pagination-disabled)"
    )

    DEFAULT_CURRENCY = "$"
    RATING_SUFFIX = "out of 5 stars"

    def __init__(self, base_url: str = "https://www.amazon.com") -> None:
        self._base_url = base_url

    async def extract(self, page: Page) -> list[ProductRecord]:
        """Извлекает товары из текущего состояния страницы.

        Только чтение: навигации и изменений DOM нет.

        Args:
            page: Активная страница Playwright.

        Returns:
            Товары в порядке карточек на странице, без позиционных полей.
        """
        html = await page.content()
        return self.parse_products(html)

    async def has_next_page(self, page: Page) -> bool:
        """Проверяет наличие активной кнопки перехода на следующую страницу."""
        button = await page.query_selector(self.NEXT_PAGE_ENABLED_SELECTOR)
        return button is not None

    def parse_products(self, html: str) -> list[ProductRecord]:
        """Разбирает HTML выдачи в список товаров.

        Args:
            html: Разметка страницы.

        Returns:
            Товары в порядке карточек. Карточки без названия пропущены.
        """
        soup = BeautifulSoup(html, "html.parser")
        cards = soup.select(self.PRODUCT_CARD)

        products: list[ProductRecord] = []
        skipped = 0
        for card in cards:
            product = self._parse_card(card)
            if product is None:
                skipped += 1
                continue
            products.append(product)

        logger.debug(
            "cards_parsed",
            cards=len(cards),
            products=len(products),
            skipped_without_title=skipped,
        )
        return products

    def _parse_card(self, card: Tag) -> ProductRecord | None:
        title = _text(card, self.TITLE)
        if not title:
            return None

        price, currency_symbol = self._parse_price(card)

        return ProductRecord(
            asin=card.get("data-asin") or UNKNOWN_ASIN,
            title=title,
            price=price,
            currency_symbol=currency_symbol,
            rating=self._parse_rating(card),
            review_count=self._parse_review_count(card),
            url=self._parse_url(card),
        )

    def _parse_price(self, card: Tag) -> tuple[int | float | str, str]:
        """Цена как число из склеенных целой и дробной частей.

        Части склеиваются строками без разделителя: "29" и "99"
        дают 2999. Если целая часть уже содержит точку ("29."),
        получается 29.99.

        Returns:
            Пара (цена, символ валюты). Без целой части —
            (PRICE_UNAVAILABLE, "").
        """
        whole = _text(card, self.PRICE_WHOLE)
        if whole is None:
            return PRICE_UNAVAILABLE, ""

        fraction = _text(card, self.PRICE_FRACTION) or ""
        symbol = _text(card, self.PRICE_SYMBOL) or self.DEFAULT_CURRENCY

        value = _to_number(whole.replace(",", "") + fraction)
        if value is None:
            logger.debug(
                "price_unparseable",
                asin=card.get("data-asin"),
                whole=whole,
                fraction=fraction,
            )
            return PRICE_UNAVAILABLE, ""
        return value, symbol

    def _parse_rating(self, card: Tag) -> float | str:
        text = _text(card, self.RATING)
        if text is None:
            return RATING_NOT_FOUND
        try:
            rating = float(text.replace(self.RATING_SUFFIX, "").strip())
        except ValueError:
            return RATING_NOT_FOUND
        return rating if math.isfinite(rating) else RATING_NOT_FOUND

    def _parse_review_count(self, card: Tag) -> int | str:
        text = _text(card, self.REVIEW_COUNT)
        if text is None:
            return REVIEWS_NOT_FOUND
        try:
            return int(text.replace(",", ""))
        except ValueError:
            return REVIEWS_NOT_FOUND

    def _parse_url(self, card: Tag) -> str:
        link = card.select_one(self.LINK)
        if link is None:
            return ""
        href = link.get("href")
        if not href:
            return ""
        return urljoin(self._base_url, href)
