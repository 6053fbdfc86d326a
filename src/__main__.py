"""Точка входа парсера поисковой выдачи Amazon.

Связывает все компоненты системы и запускает полный цикл:
1. Загрузка конфигурации и инициализация логирования.
2. Обход страниц выдачи и сбор товаров.
3. Экспорт результатов в JSON, текстовый отчёт и (по желанию) Excel.

Запуск: python -m src
"""

import asyncio
import sys

from src.config import (
    ConfigValidationError,
    Settings,
    get_logger,
    load_settings,
    set_session_id,
    setup_logging,
)
from src.models import ScrapeResult
from src.services import (
    BrowserService,
    ExportService,
    HumanizationPolicy,
    PageExtractor,
    PaginationController,
    ResultAggregator,
    ScraperService,
)

logger = get_logger("main")


def create_browser_service(settings: Settings) -> BrowserService:
    return BrowserService(settings=settings.browser)


def create_humanizer(settings: Settings) -> HumanizationPolicy:
    return HumanizationPolicy(settings=settings.humanization)


def create_scraper_service(
    browser_service: BrowserService,
    humanizer: HumanizationPolicy,
    settings: Settings,
) -> ScraperService:
    """Собирает сервис сессии со всеми зависимостями.

    Args:
        browser_service: Сервис браузера.
        humanizer: Политика пауз и User-Agent.
        settings: Настройки приложения.

    Returns:
        Экземпляр ScraperService.
    """
    aggregator = ResultAggregator()
    controller = PaginationController(
        extractor=PageExtractor(base_url=settings.scraper.base_url),
        humanizer=humanizer,
        aggregator=aggregator,
        scraper_settings=settings.scraper,
        browser_settings=settings.browser,
    )
    return ScraperService(
        browser_service=browser_service,
        humanizer=humanizer,
        controller=controller,
        aggregator=aggregator,
        settings=settings.scraper,
    )


def create_export_service(settings: Settings) -> ExportService:
    return ExportService(settings=settings.export)


async def run_session(settings: Settings) -> ScrapeResult:
    """Запускает сессию парсинга и экспорт результатов.

    Браузер закрывается в любом случае через try/finally.

    Args:
        settings: Полностью валидированные настройки приложения.

    Returns:
        Итог сессии.
    """
    browser_service = create_browser_service(settings)
    humanizer = create_humanizer(settings)

    try:
        scraper_service = create_scraper_service(
            browser_service=browser_service,
            humanizer=humanizer,
            settings=settings,
        )
        result = await scraper_service.scrape()

        export_service = create_export_service(settings)
        export_service.export(result)
        return result

    finally:
        await browser_service.close()


def main() -> None:
    """Главная функция приложения.

    Загружает конфигурацию, настраивает логирование, назначает
    session_id и запускает асинхронную сессию. Обрабатывает все
    верхнеуровневые ошибки.
    """
    try:
        settings = load_settings()
    except ConfigValidationError as e:
        print(f"\n[ОШИБКА КОНФИГУРАЦИИ]\n{e}")
        print("\nПроверьте файл .env (см. .env.example для справки).")
        sys.exit(1)

    setup_logging(
        level=settings.log.level,
        log_file_path=settings.log.file_path,
    )

    session_id = set_session_id()

    logger.info(
        "application_started",
        session_id=session_id,
        search_query=settings.scraper.search_query,
        max_pages=settings.scraper.max_pages,
    )

    try:
        result = asyncio.run(run_session(settings))
    except KeyboardInterrupt:
        logger.info("application_interrupted_by_user")
        print("\nПрограмма остановлена пользователем (Ctrl+C).")
        return
    except Exception as e:
        logger.critical(
            "application_fatal_error",
            exc_info=True,
            error=str(e),
            error_type=type(e).__name__,
        )
        print(f"\nКритическая ошибка: {e}")
        sys.exit(1)

    print("\n=== SCRAPING SUMMARY ===")
    print(
        f"Total products scraped: {result.summary.total_records} "
        f"across {result.summary.pages_visited} pages"
    )

    logger.info("application_finished", session_id=session_id)


if __name__ == "__main__":
    main()
