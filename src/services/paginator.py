"""Контроллер обхода страниц поисковой выдачи.

Конечный автомат над SessionState:

    LOADING_PAGE -> EXTRACTING -> DECIDING -> NAVIGATING -> LOADING_PAGE
    (любое состояние) -> TERMINATED

Любой сбой на странице (таймаут, пустая выдача, ошибка навигации)
переводит автомат в TERMINATED с сохранением уже собранных записей.
Повторных попыток нет.
"""

from enum import Enum
from pathlib import Path

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.config import BrowserSettings, ScraperSettings, get_logger
from src.models import SessionState, TerminationReason
from src.services.aggregator import ResultAggregator
from src.services.extractor import PageExtractor
from src.services.humanizer import HumanizationPolicy

logger = get_logger("paginator")


class PaginationState(str, Enum):
    """Состояния автомата обхода."""

    LOADING_PAGE = "loading_page"
    EXTRACTING = "extracting"
    DECIDING = "deciding"
    NAVIGATING = "navigating"
    TERMINATED = "terminated"


class PaginationController:
    """Обходит страницы выдачи и собирает товары в SessionState.

    Единственный владелец страницы браузера на время обхода:
    экстрактор читает её только по вызову контроллера.

    Attributes:
        _extractor: Разбор карточек и селекторы сайта.
        _humanizer: Паузы и имитация прокрутки.
        _aggregator: Проставление позиций записям страницы.
        _scraper_settings: Лимит страниц и каталог скриншотов.
        _browser_settings: Таймауты ожидания.
    """

    def __init__(
        self,
        extractor: PageExtractor,
        humanizer: HumanizationPolicy,
        aggregator: ResultAggregator,
        scraper_settings: ScraperSettings,
        browser_settings: BrowserSettings,
    ) -> None:
        self._extractor = extractor
        self._humanizer = humanizer
        self._aggregator = aggregator
        self._scraper_settings = scraper_settings
        self._browser_settings = browser_settings

    async def run(self, page: Page) -> SessionState:
        """Обходит страницы, начиная с уже открытой первой.

        Ошибки отдельных шагов не выбрасываются: они завершают обход,
        а собранные записи остаются в возвращаемом состоянии.

        Args:
            page: Страница Playwright с загруженной первой страницей поиска.

        Returns:
            Состояние завершённой сессии.
        """
        state = SessionState()
        handlers = {
            PaginationState.LOADING_PAGE: self._load_page,
            PaginationState.EXTRACTING: self._extract,
            PaginationState.DECIDING: self._decide,
            PaginationState.NAVIGATING: self._navigate,
        }

        step = PaginationState.LOADING_PAGE
        while step is not PaginationState.TERMINATED:
            try:
                step = await handlers[step](page, state)
            except Exception as e:
                logger.error(
                    "page_processing_failed",
                    exc_info=True,
                    page_number=state.current_page,
                    step=step.value,
                    error=str(e),
                )
                logger.info(
                    "continuing_with_collected",
                    total_items=len(state.collected),
                )
                state.terminate(
                    TerminationReason.PAGE_ERROR, has_more_pages=False
                )
                step = PaginationState.TERMINATED

        logger.info(
            "pagination_finished",
            last_page=state.current_page,
            total_items=len(state.collected),
            has_more_pages=state.has_more_pages,
            reason=(
                state.termination_reason.value
                if state.termination_reason
                else None
            ),
        )
        return state

    async def _load_page(
        self, page: Page, state: SessionState
    ) -> PaginationState:
        """Ждёт появления карточек выдачи на текущей странице."""
        timeout = self._browser_settings.results_timeout
        try:
            await page.wait_for_selector(
                self._extractor.RESULT_ITEM_SELECTOR,
                timeout=timeout,
            )
        except PlaywrightTimeoutError as e:
            logger.warning(
                "results_not_loaded",
                page_number=state.current_page,
                timeout_ms=timeout,
                error=str(e),
            )
            state.terminate(
                TerminationReason.PAGE_LOAD_TIMEOUT, has_more_pages=False
            )
            return PaginationState.TERMINATED

        logger.info("page_loaded", page_number=state.current_page)
        await self._capture_screenshot(page, state.current_page)
        return PaginationState.EXTRACTING

    async def _extract(
        self, page: Page, state: SessionState
    ) -> PaginationState:
        """Извлекает товары страницы и дописывает их в состояние."""
        batch = await self._extractor.extract(page)
        logger.info(
            "page_extracted",
            page_number=state.current_page,
            items_on_page=len(batch),
        )

        if not batch:
            # Пустая выдача: блокировка или конец результатов, не ошибка
            logger.warning(
                "no_items_on_page",
                page_number=state.current_page,
                hint="blocked_or_end_of_results",
            )
            state.terminate(
                TerminationReason.EMPTY_PAGE, has_more_pages=False
            )
            return PaginationState.TERMINATED

        state.append_batch(
            self._aggregator.tag_batch(batch, state.current_page)
        )
        logger.info(
            "page_scraped",
            page_number=state.current_page,
            total_items=len(state.collected),
        )
        return PaginationState.DECIDING

    async def _decide(
        self, page: Page, state: SessionState
    ) -> PaginationState:
        """Решает, переходить ли на следующую страницу."""
        max_pages = self._scraper_settings.max_pages
        if state.current_page >= max_pages:
            logger.info("max_pages_reached", max_pages=max_pages)
            state.terminate(TerminationReason.MAX_PAGES_REACHED)
            return PaginationState.TERMINATED

        if not await self._extractor.has_next_page(page):
            logger.info("no_more_pages", last_page=state.current_page)
            state.terminate(
                TerminationReason.NO_NEXT_PAGE, has_more_pages=False
            )
            return PaginationState.TERMINATED

        return PaginationState.NAVIGATING

    async def _navigate(
        self, page: Page, state: SessionState
    ) -> PaginationState:
        """Переходит на следующую страницу; неудача завершает обход."""
        target_page = state.current_page + 1
        logger.info("next_page_navigating", target_page=target_page)

        if not await self._go_to_next_page(page):
            logger.info(
                "pagination_stopped",
                reason="navigation_failed",
                target_page=target_page,
            )
            state.terminate(
                TerminationReason.NAVIGATION_FAILED, has_more_pages=False
            )
            return PaginationState.TERMINATED

        await self._humanizer.random_delay()
        state.current_page = target_page
        return PaginationState.LOADING_PAGE

    async def _go_to_next_page(self, page: Page) -> bool:
        """Кликает «Next», дожидается навигации и прокручивает страницу.

        Returns:
            True если переход выполнен; False при любой ошибке.
        """
        next_selector = self._extractor.NEXT_PAGE_SELECTOR
        try:
            await self._humanizer.short_delay()

            await page.wait_for_selector(
                self._extractor.NEXT_PAGE_ENABLED_SELECTOR,
                state="visible",
                timeout=self._browser_settings.next_button_timeout,
            )

            async with page.expect_navigation(
                wait_until="networkidle",
                timeout=self._browser_settings.navigation_timeout,
            ):
                await page.click(next_selector)

            await self._humanizer.random_delay()
            await self._humanizer.simulate_reading(page)
            return True

        except Exception as e:
            logger.error(
                "navigation_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    async def _capture_screenshot(self, page: Page, page_number: int) -> None:
        """Сохраняет скриншот страницы, если задан каталог скриншотов."""
        screenshot_dir = self._scraper_settings.screenshot_dir
        if not screenshot_dir:
            return

        path = Path(screenshot_dir) / f"amazon-page-{page_number}.png"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(path))
            logger.debug("screenshot_saved", path=str(path))
        except Exception as e:
            logger.warning(
                "screenshot_failed",
                page_number=page_number,
                error=str(e),
            )
