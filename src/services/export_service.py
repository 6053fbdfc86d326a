"""Сервис экспорта результатов сессии.

Записывает итоговый набор товаров в трёх видах:
    - JSON: массив объектов со всеми полями записи;
    - текстовый отчёт: сводка и блок на каждый товар;
    - Excel (по желанию): одна таблица с автофильтром и ссылками.
Порядок записей во всех форматах совпадает с порядком сессии.
"""

import json
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from src.config import ExportSettings, get_logger
from src.models import ProductRecord, ScrapeResult

logger = get_logger("export_service")

REPORT_WIDTH: int = 80

# Столбцы таблицы: (заголовок, поле записи, ширина в символах)
REPORT_COLUMNS: list[tuple[str, str, int]] = [
    ("#", "global_index", 6),
    ("Page", "page", 6),
    ("Item", "index_on_page", 6),
    ("ASIN", "asin", 14),
    ("Title", "title", 60),
    ("Currency", "currency_symbol", 9),
    ("Price", "price", 14),
    ("Rating", "rating", 10),
    ("Reviews", "review_count", 12),
    ("URL", "url", 60),
]


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


class ExportService:
    """Сохраняет результат сессии в файлы.

    Attributes:
        _settings: Пути к выходным файлам.
    """

    def __init__(self, settings: ExportSettings) -> None:
        self._settings = settings

    def export(self, result: ScrapeResult) -> list[str]:
        """Записывает все включённые форматы.

        Args:
            result: Итог сессии с пронумерованными записями.

        Returns:
            Абсолютные пути созданных файлов.
        """
        logger.info(
            "export_started",
            products_count=len(result.records),
        )

        written = [
            self.write_json(result, self._settings.json_path),
            self.write_text_report(result, self._settings.text_path),
        ]
        if self._settings.excel_path:
            written.append(
                self.write_workbook(result, self._settings.excel_path)
            )

        logger.info("export_completed", files=written)
        return written

    def write_json(self, result: ScrapeResult, path: str) -> str:
        output_path = Path(path)
        _ensure_parent(output_path)

        payload = [record.to_dict() for record in result.records]
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

        absolute_path = str(output_path.resolve())
        logger.info("json_saved", path=absolute_path, records=len(payload))
        return absolute_path

    def write_text_report(self, result: ScrapeResult, path: str) -> str:
        output_path = Path(path)
        _ensure_parent(output_path)
        output_path.write_text(self.render_text_report(result), encoding="utf-8")

        absolute_path = str(output_path.resolve())
        logger.info("text_report_saved", path=absolute_path)
        return absolute_path

    def render_text_report(self, result: ScrapeResult) -> str:
        """Формирует текстовый отчёт: шапка со сводкой и блоки товаров.

        Args:
            result: Итог сессии.

        Returns:
            Текст отчёта.
        """
        summary = result.summary
        lines = [
            f"AMAZON {summary.search_query.upper()} SEARCH RESULTS",
            "=" * REPORT_WIDTH,
            "",
            f"Total products found: {summary.total_records} "
            f"across {summary.pages_visited} pages",
            "",
        ]
        for record in result.records:
            lines.extend(self._render_record(record))
        return "\n".join(lines) + "\n"

    def _render_record(self, record: ProductRecord) -> list[str]:
        return [
            f"Product #{record.global_index} "
            f"(Page {record.page}, Item {record.index_on_page})",
            "-" * REPORT_WIDTH,
            f"ASIN: {record.asin}",
            f"Title: {record.title}",
            f"Price: {record.currency_symbol}{record.price}",
            f"Rating: {record.rating} out of 5 stars",
            f"Reviews: {record.review_count}",
            f"URL: {record.url}",
            "",
        ]

    def write_workbook(self, result: ScrapeResult, path: str) -> str:
        """Сохраняет записи в Excel-таблицу с фиксированной шапкой.

        Args:
            result: Итог сессии.
            path: Путь к .xlsx файлу.

        Returns:
            Абсолютный путь к сохранённому файлу.
        """
        wb = Workbook()
        ws = wb.active
        if ws is None:
            ws = wb.create_sheet()
        ws.title = "Amazon results"

        self._write_header(ws)
        for row_index, record in enumerate(result.records, start=2):
            self._write_row(ws, row_index, record)
        self._apply_formatting(ws, len(result.records))

        output_path = Path(path)
        _ensure_parent(output_path)
        wb.save(str(output_path))

        absolute_path = str(output_path.resolve())
        logger.info("workbook_saved", path=absolute_path)
        return absolute_path

    def _write_header(self, ws: Worksheet) -> None:
        header_font = Font(name="Calibri", bold=True, size=11, color="FFFFFF")
        header_fill = PatternFill(
            start_color="232F3E",
            end_color="232F3E",
            fill_type="solid",
        )
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_index, (title, _, _) in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col_index, value=title)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    def _write_row(
        self, ws: Worksheet, row_index: int, record: ProductRecord
    ) -> None:
        values = record.to_dict()
        link_font = Font(name="Calibri", size=10, color="0563C1", underline="single")

        for col_index, (_, field_name, _) in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(
                row=row_index,
                column=col_index,
                value=values[field_name],
            )
            if field_name == "url" and record.url:
                cell.hyperlink = record.url
                cell.font = link_font

    def _apply_formatting(self, ws: Worksheet, data_rows: int) -> None:
        for col_index, (_, _, width) in enumerate(REPORT_COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(col_index)].width = width

        last_col_letter = get_column_letter(len(REPORT_COLUMNS))
        ws.auto_filter.ref = f"A1:{last_col_letter}{data_rows + 1}"
        ws.freeze_panes = "A2"
