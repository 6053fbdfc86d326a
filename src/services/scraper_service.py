"""Сервис сессии парсинга поисковой выдачи Amazon.

Связывает браузер, политику «очеловечивания», контроллер пагинации
и агрегатор в один сценарий: выбрать User-Agent, открыть первую
страницу поиска, пройти страницы и собрать итог.
"""

from src.config import ScraperSettings, get_logger
from src.models import ScrapeResult
from src.services.aggregator import ResultAggregator
from src.services.browser_service import BrowserService
from src.services.humanizer import HumanizationPolicy
from src.services.paginator import PaginationController

logger = get_logger("scraper_service")


class ScraperService:
    """Сценарий одной сессии парсинга.

    Attributes:
        _browser_service: Сервис управления браузером.
        _humanizer: Паузы, User-Agent и прокрутка.
        _controller: Контроллер обхода страниц.
        _aggregator: Итоговая нумерация и сводка.
        _settings: Параметры сессии (запрос, лимит страниц).
    """

    def __init__(
        self,
        browser_service: BrowserService,
        humanizer: HumanizationPolicy,
        controller: PaginationController,
        aggregator: ResultAggregator,
        settings: ScraperSettings,
    ) -> None:
        self._browser_service = browser_service
        self._humanizer = humanizer
        self._controller = controller
        self._aggregator = aggregator
        self._settings = settings

    async def scrape(self) -> ScrapeResult:
        """Проходит страницы выдачи и возвращает пронумерованный итог.

        Ошибка открытия первой страницы не перехватывается: без неё
        сессия не имеет результатов. Сбои на последующих страницах
        завершают обход с сохранением собранного.

        Returns:
            Записи со сквозными номерами и сводка сессии.

        Raises:
            InitialNavigationError: Если первая страница не открылась.
            RuntimeError: Если браузер не запустился.
        """
        user_agent = self._humanizer.select_identity()
        await self._browser_service.launch(user_agent)

        logger.info(
            "scraping_started",
            search_query=self._settings.search_query,
            max_pages=self._settings.max_pages,
        )

        page = await self._browser_service.open_search(
            self._settings.search_url
        )
        await self._humanizer.random_delay()
        await self._humanizer.simulate_reading(page)

        state = await self._controller.run(page)
        result = self._aggregator.finalize(state, self._settings.search_query)

        logger.info(
            "scraping_completed",
            total_items=result.summary.total_records,
            pages_visited=result.summary.pages_visited,
        )
        return result
