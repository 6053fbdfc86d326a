"""Сборка итогового набора записей сессии.

Агрегатор проставляет позиции записям каждой страницы, а после
завершения обхода нумерует весь набор сквозным индексом и считает
сводку. Порядок записей не меняется.
"""

from src.config import get_logger
from src.models import (
    ProductRecord,
    ScrapeResult,
    ScrapeSummary,
    SessionState,
)

logger = get_logger("aggregator")


class ResultAggregator:
    """Нумерация записей и итоговая сводка сессии."""

    def tag_batch(
        self, batch: list[ProductRecord], page_number: int
    ) -> list[ProductRecord]:
        """Проставляет номер страницы и позицию (с 1) каждой записи пакета.

        Args:
            batch: Записи в порядке извлечения со страницы.
            page_number: Номер страницы выдачи (с 1).

        Returns:
            Новые записи с заполненными page и index_on_page.
        """
        return [
            record.with_position(page_number, index)
            for index, record in enumerate(batch, start=1)
        ]

    def finalize(
        self, state: SessionState, search_query: str
    ) -> ScrapeResult:
        """Нумерует собранные записи и формирует сводку.

        Вызывается один раз после завершения обхода. Сквозной номер
        совпадает с позицией записи в state.collected.

        Args:
            state: Состояние завершённой сессии.
            search_query: Поисковый запрос для сводки.

        Returns:
            Записи с global_index и сводка сессии.
        """
        records = [
            record.with_global_index(index)
            for index, record in enumerate(state.collected, start=1)
        ]
        pages_visited = max(
            (record.page for record in records if record.page is not None),
            default=0,
        )

        summary = ScrapeSummary(
            search_query=search_query,
            total_records=len(records),
            pages_visited=pages_visited,
            termination_reason=state.termination_reason,
        )

        logger.info(
            "results_aggregated",
            total_records=summary.total_records,
            pages_visited=summary.pages_visited,
            termination_reason=(
                state.termination_reason.value
                if state.termination_reason
                else None
            ),
        )

        return ScrapeResult(records=records, summary=summary)
