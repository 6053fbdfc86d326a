"""Пакет сервисов.

Предоставляет компоненты сессии парсинга:
    from src.services import (
        BrowserService,
        HumanizationPolicy,
        PageExtractor,
        PaginationController,
        ResultAggregator,
        ScraperService,
        ExportService,
    )
"""

from src.services.aggregator import ResultAggregator
from src.services.browser_service import BrowserService, InitialNavigationError
from src.services.export_service import ExportService
from src.services.extractor import PageExtractor
from src.services.humanizer import USER_AGENTS, HumanizationPolicy
from src.services.paginator import PaginationController, PaginationState
from src.services.scraper_service import ScraperService

__all__ = [
    "USER_AGENTS",
    "BrowserService",
    "ExportService",
    "HumanizationPolicy",
    "InitialNavigationError",
    "PageExtractor",
    "PaginationController",
    "PaginationState",
    "ResultAggregator",
    "ScraperService",
]
