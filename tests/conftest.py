"""Общие фикстуры: настройки, политика пауз, контроллер."""

import random

import pytest

from fakes import BASE_URL, RecordingSleep
from src.config import BrowserSettings, HumanizationSettings, ScraperSettings
from src.services import (
    HumanizationPolicy,
    PageExtractor,
    PaginationController,
    ResultAggregator,
)


@pytest.fixture
def browser_settings() -> BrowserSettings:
    return BrowserSettings(
        headless=True,
        navigation_timeout=60000,
        results_timeout=15000,
        next_button_timeout=10000,
    )


@pytest.fixture
def scraper_settings() -> ScraperSettings:
    return ScraperSettings(
        base_url=BASE_URL,
        search_query="laptop",
        max_pages=3,
        screenshot_dir="",
    )


@pytest.fixture
def humanization_settings() -> HumanizationSettings:
    return HumanizationSettings(
        min_delay=2000,
        max_delay=5000,
        short_min_delay=1000,
        short_max_delay=2000,
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def humanizer(
    humanization_settings: HumanizationSettings, sleep: RecordingSleep
) -> HumanizationPolicy:
    return HumanizationPolicy(
        humanization_settings, sleep=sleep, rng=random.Random(42)
    )


@pytest.fixture
def extractor() -> PageExtractor:
    return PageExtractor(base_url=BASE_URL)


@pytest.fixture
def make_controller(extractor, humanizer, browser_settings, scraper_settings):
    """Фабрика контроллера с переопределяемым лимитом страниц."""

    def factory(
        max_pages: int = 3,
        screenshot_dir: str = "",
        page_extractor: PageExtractor | None = None,
    ) -> PaginationController:
        settings = ScraperSettings(
            base_url=scraper_settings.base_url,
            search_query=scraper_settings.search_query,
            max_pages=max_pages,
            screenshot_dir=screenshot_dir,
        )
        return PaginationController(
            extractor=page_extractor or extractor,
            humanizer=humanizer,
            aggregator=ResultAggregator(),
            scraper_settings=settings,
            browser_settings=browser_settings,
        )

    return factory
