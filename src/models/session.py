"""Состояние сессии обхода выдачи и итоговые структуры.

SessionState принадлежит контроллеру пагинации: создаётся на каждый
запуск, передаётся между шагами конечного автомата явно и
возвращается вызывающему коду после завершения обхода.
"""

from dataclasses import dataclass, field
from enum import Enum

from src.models.product import ProductRecord


class TerminationReason(str, Enum):
    """Причина, по которой обход страниц остановлен."""

    MAX_PAGES_REACHED = "max_pages_reached"
    NO_NEXT_PAGE = "no_next_page"
    EMPTY_PAGE = "empty_page"
    PAGE_LOAD_TIMEOUT = "page_load_timeout"
    NAVIGATION_FAILED = "navigation_failed"
    PAGE_ERROR = "page_error"


@dataclass
class SessionState:
    """Изменяемое состояние одной сессии обхода.

    Attributes:
        current_page: Номер обрабатываемой страницы (с 1).
        has_more_pages: Есть ли смысл переходить дальше.
        collected: Записи всех обработанных страниц в порядке
            (page, index_on_page). Только дописывается.
        termination_reason: Причина остановки, None пока обход идёт.
    """

    current_page: int = 1
    has_more_pages: bool = True
    collected: list[ProductRecord] = field(default_factory=list)
    termination_reason: TerminationReason | None = None

    def append_batch(self, batch: list[ProductRecord]) -> None:
        """Дописывает пакет страницы, сохраняя порядок (page, index).

        Raises:
            ValueError: Если пакет нарушает порядок уже собранных записей.
        """
        last_key = (
            (self.collected[-1].page, self.collected[-1].index_on_page)
            if self.collected
            else (0, 0)
        )
        for record in batch:
            key = (record.page, record.index_on_page)
            if record.page is None or record.index_on_page is None:
                raise ValueError(
                    f"Запись {record.asin} без позиции на странице"
                )
            if key <= last_key:
                raise ValueError(
                    f"Нарушен порядок записей: {key} после {last_key}"
                )
            last_key = key
        self.collected.extend(batch)

    def terminate(
        self, reason: TerminationReason, has_more_pages: bool | None = None
    ) -> None:
        self.termination_reason = reason
        if has_more_pages is not None:
            self.has_more_pages = has_more_pages


@dataclass(frozen=True)
class ScrapeSummary:
    """Сводка по завершённой сессии.

    Attributes:
        search_query: Поисковый запрос сессии.
        total_records: Количество собранных записей.
        pages_visited: Максимальный номер страницы среди записей.
        termination_reason: Причина остановки обхода.
    """

    search_query: str
    total_records: int
    pages_visited: int
    termination_reason: TerminationReason | None = None


@dataclass(frozen=True)
class ScrapeResult:
    """Итог сессии: записи со сквозными номерами и сводка."""

    records: list[ProductRecord]
    summary: ScrapeSummary
