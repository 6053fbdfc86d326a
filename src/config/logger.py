"""JSON-журнал сессии парсинга.

Каждая запись — одна JSON-строка с session_id текущего запуска,
поэтому журналы нескольких запусков в одном файле легко разделить.
События именуются в snake_case, детали передаются ключевыми
аргументами:

    logger = get_logger("paginator")
    logger.info("page_extracted", page_number=2, items_on_page=18)
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


# Идентификатор текущей сессии парсинга. Все записи одного запуска
# получают одинаковый session_id без явной передачи через вызовы.
_session_id_var: ContextVar[str] = ContextVar("session_id", default="")


def set_session_id(session_id: str | None = None) -> str:
    """Устанавливает session_id для текущего контекста выполнения.

    Args:
        session_id: Идентификатор сессии. Если None — генерируется
            автоматически (UUID4, первые 8 символов).

    Returns:
        Установленный session_id.
    """
    if session_id is None:
        session_id = uuid.uuid4().hex[:8]
    _session_id_var.set(session_id)
    return session_id


def get_session_id() -> str:
    """Возвращает session_id текущего контекста (или пустую строку)."""
    return _session_id_var.get()


class JSONFormatter(logging.Formatter):
    """Форматирует лог-записи в одну JSON-строку.

    Поля записи: timestamp (ISO 8601, UTC), level, message,
    session_id, logger и context — дополнительные поля из вызова
    логгера плюс тип и текст исключения, если оно передано.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "session_id": get_session_id(),
            "logger": record.name,
        }

        context: dict[str, Any] = dict(getattr(record, "context_data", {}))

        if record.exc_info and record.exc_info[1] is not None:
            context["exception_type"] = type(record.exc_info[1]).__name__
            context["exception_message"] = str(record.exc_info[1])
            context["traceback"] = self.formatException(record.exc_info)

        if context:
            log_entry["context"] = context

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ContextLogger:
    """Обёртка над стандартным логгером с контекстными полями.

    Именованные аргументы методов логирования попадают в поле
    context JSON-вывода:
        logger.warning("navigation_failed", page=3, error="Timeout")

    Attributes:
        _logger: Внутренний экземпляр стандартного логгера.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra: dict[str, Any] = {"context_data": kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, exc_info=exc_info, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, exc_info=exc_info, **kwargs)


# Одна обёртка ContextLogger на каждое имя логгера.
_loggers: dict[str, ContextLogger] = {}


def setup_logging(level: str = "INFO", log_file_path: str = "") -> None:
    """Направляет все записи приложения в JSON на stdout и в файл.

    Форматтер вешается на корневой логгер, поэтому записи компонентов
    (paginator, extractor, browser_service и др.) выводятся одинаково.
    Старые хендлеры корня снимаются перед установкой новых.

    Args:
        level: Минимальный уровень записей; неизвестное имя даёт INFO.
        log_file_path: Файл для копии журнала сессии. Каталоги
            создаются при необходимости. Пустая строка отключает файл.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    json_formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(json_formatter)
    root_logger.addHandler(console_handler)

    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> ContextLogger:
    """Логгер компонента парсера, общий для всех вызовов с этим именем."""
    if name not in _loggers:
        _loggers[name] = ContextLogger(logging.getLogger(name))
    return _loggers[name]
