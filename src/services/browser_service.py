"""Сервис управления Playwright-браузером.

Запуск Chromium с антидетект-флагами, создание контекста с выбранным
User-Agent, заголовками и cookie сессии, открытие первой страницы
поиска и закрытие всех ресурсов.
"""

import time

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from src.config import BrowserSettings, get_logger

logger = get_logger("browser_service")

# JavaScript для сокрытия признаков автоматизации
STEALTH_SCRIPT: str = """
    Object.defineProperty(navigator, 'webdriver', {
        get: () => false,
    });

    window.chrome = {
        runtime: {
            onConnect: null,
            onMessage: null
        }
    };

    Object.defineProperty(navigator, 'plugins', {
        get: () => [1, 2, 3, 4, 5]
    });

    Object.defineProperty(navigator, 'languages', {
        get: () => ['en-US', 'en']
    });
"""

# Аргументы запуска Chromium
BROWSER_ARGS: list[str] = [
    "--window-size=1920,1080",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--disable-blink-features=AutomationControlled",
]

EXTRA_HTTP_HEADERS: dict[str, str] = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Encoding": "gzip, deflate, br",
}

SESSION_COOKIE_DOMAIN = ".amazon.com"


class InitialNavigationError(Exception):
    """Не удалось открыть первую страницу поиска.

    Фатальная ошибка сессии: собранных записей ещё нет.
    """


class BrowserService:
    """Жизненный цикл браузера для одной сессии парсинга.

    Attributes:
        _settings: Настройки браузера из конфигурации.
        _playwright: Запущенный экземпляр Playwright.
        _browser: Экземпляр запущенного браузера.
        _context: Контекст браузера с настройками.
        _page: Активная страница.
    """

    def __init__(self, settings: BrowserSettings) -> None:
        self._settings = settings
        self._playwright: object | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    async def launch(self, user_agent: str) -> Page:
        """Запускает браузер, создаёт контекст и страницу.

        Args:
            user_agent: User-Agent, выбранный на всю сессию.

        Returns:
            Готовая к использованию страница Playwright.

        Raises:
            RuntimeError: Если не удалось запустить браузер.
        """
        try:
            pw = await async_playwright().start()
            self._playwright = pw

            self._browser = await pw.chromium.launch(
                headless=self._settings.headless,
                args=BROWSER_ARGS,
            )

            self._context = await self._browser.new_context(
                user_agent=user_agent,
                viewport={"width": 1920, "height": 1080},
                locale="en-US",
                extra_http_headers=EXTRA_HTTP_HEADERS,
            )
            await self._context.add_cookies(
                [
                    {
                        "name": "session-id",
                        "value": str(int(time.time() * 1000)),
                        "domain": SESSION_COOKIE_DOMAIN,
                        "path": "/",
                    }
                ]
            )
            self._context.set_default_navigation_timeout(
                self._settings.navigation_timeout
            )

            self._page = await self._context.new_page()
            await self._page.add_init_script(STEALTH_SCRIPT)

            logger.info(
                "browser_launched",
                headless=self._settings.headless,
                user_agent=user_agent[:60],
                timeout=self._settings.navigation_timeout,
            )

            return self._page

        except Exception as e:
            logger.error(
                "browser_launch_failed",
                exc_info=True,
                error=str(e),
            )
            await self.close()
            raise RuntimeError(f"Не удалось запустить браузер: {e}") from e

    async def open_search(self, url: str) -> Page:
        """Открывает первую страницу поиска и ждёт затишья сети.

        Args:
            url: URL страницы поиска.

        Returns:
            Страница с загруженной выдачей.

        Raises:
            InitialNavigationError: Если браузер не запущен или
                навигация завершилась ошибкой.
        """
        if self._page is None:
            raise InitialNavigationError("Браузер не запущен")

        logger.info("search_navigation_started", url=url)
        try:
            await self._page.goto(
                url,
                wait_until="networkidle",
                timeout=self._settings.navigation_timeout,
            )
        except Exception as e:
            logger.error(
                "search_navigation_failed",
                url=url,
                error=str(e),
            )
            raise InitialNavigationError(
                f"Не удалось открыть страницу поиска {url}: {e}"
            ) from e

        logger.info("search_navigation_success", current_url=self._page.url)
        return self._page

    async def close(self) -> None:
        """Закрывает контекст, браузер и Playwright в правильном порядке.

        Ошибки при закрытии логируются и не выбрасываются.
        """
        try:
            if self._context is not None:
                await self._context.close()
                self._context = None

            if self._browser is not None:
                await self._browser.close()
                self._browser = None

            if self._playwright is not None:
                await self._playwright.stop()  # type: ignore[attr-defined]
                self._playwright = None

            self._page = None
            logger.info("browser_closed")

        except Exception as e:
            logger.warning(
                "browser_close_error",
                error=str(e),
            )
