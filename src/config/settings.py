"""Модуль конфигурации приложения.

Загружает переменные окружения из .env файла, валидирует параметры
сессии парсинга и предоставляет единый объект Settings для доступа
ко всем настройкам приложения. Обязательных переменных нет: у каждого
параметра есть значение по умолчанию.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv


def _load_env() -> None:
    """Загружает переменные окружения из .env файла.

    Ищет .env файл в корне проекта (два уровня вверх от этого модуля).
    Если файл не найден, переменные берутся из системного окружения.
    """
    project_root = Path(__file__).resolve().parent.parent.parent
    env_path = project_root / ".env"
    load_dotenv(dotenv_path=env_path)


class ConfigValidationError(Exception):
    """Ошибка валидации конфигурации.

    Выбрасывается при некорректных значениях параметров
    (не число, отрицательное значение, перепутанные границы задержки).
    """


@dataclass(frozen=True)
class BrowserSettings:
    """Настройки Playwright-браузера.

    Attributes:
        headless: Запуск без графического интерфейса.
        navigation_timeout: Таймаут навигации в миллисекундах.
        results_timeout: Таймаут ожидания карточек выдачи (мс).
        next_button_timeout: Таймаут ожидания кнопки «Next» (мс).
    """

    headless: bool
    navigation_timeout: int
    results_timeout: int
    next_button_timeout: int


@dataclass(frozen=True)
class ScraperSettings:
    """Настройки сессии парсинга поисковой выдачи.

    Attributes:
        base_url: Origin сайта, относительно которого строятся ссылки.
        search_query: Поисковый запрос.
        max_pages: Максимальное число страниц выдачи (больше нуля).
        screenshot_dir: Каталог для скриншотов страниц
            (пустая строка — скриншоты отключены).
    """

    base_url: str
    search_query: str
    max_pages: int
    screenshot_dir: str

    @property
    def search_url(self) -> str:
        """URL первой страницы поиска с экранированным запросом."""
        return f"{self.base_url.rstrip('/')}/s?k={quote(self.search_query)}"


@dataclass(frozen=True)
class HumanizationSettings:
    """Окна случайных задержек между действиями (в миллисекундах).

    Attributes:
        min_delay: Нижняя граница паузы между страницами.
        max_delay: Верхняя граница паузы между страницами.
        short_min_delay: Нижняя граница паузы перед кликом пагинации.
        short_max_delay: Верхняя граница паузы перед кликом пагинации.
    """

    min_delay: int
    max_delay: int
    short_min_delay: int
    short_max_delay: int


@dataclass(frozen=True)
class ExportSettings:
    """Настройки выходных файлов.

    Attributes:
        json_path: Путь к JSON-файлу с записями.
        text_path: Путь к текстовому отчёту.
        excel_path: Путь к Excel-файлу (пустая строка — не создавать).
    """

    json_path: str
    text_path: str
    excel_path: str


@dataclass(frozen=True)
class LogSettings:
    """Настройки логирования.

    Attributes:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_path: Путь к файлу логов (пустая строка — только консоль).
    """

    level: str
    file_path: str


@dataclass(frozen=True)
class Settings:
    """Корневой объект конфигурации приложения.

    Attributes:
        browser: Настройки браузера.
        scraper: Параметры сессии парсинга.
        humanization: Окна случайных задержек.
        export: Настройки выходных файлов.
        log: Настройки логирования.
    """

    browser: BrowserSettings
    scraper: ScraperSettings
    humanization: HumanizationSettings
    export: ExportSettings
    log: LogSettings


def _parse_bool(value: str) -> bool:
    """Преобразует строковое значение в bool.

    Args:
        value: Строка для преобразования.

    Returns:
        True если значение 'true', '1', 'yes' (регистронезависимо).
    """
    return value.strip().lower() in ("true", "1", "yes")


def _parse_int(value: str, param_name: str) -> int:
    """Преобразует строковое значение в int с валидацией.

    Args:
        value: Строка для преобразования.
        param_name: Имя параметра для сообщения об ошибке.

    Returns:
        Целочисленное значение.

    Raises:
        ConfigValidationError: Если значение не является целым числом.
    """
    try:
        return int(value)
    except ValueError:
        raise ConfigValidationError(
            f"Параметр '{param_name}' должен быть целым числом, "
            f"получено: '{value}'"
        )


def _validate_not_blank(value: str, param_name: str) -> str:
    """Проверяет, что строковый параметр не пуст.

    Raises:
        ConfigValidationError: Если значение пустое или из пробелов.
    """
    if value.strip() == "":
        raise ConfigValidationError(
            f"Параметр '{param_name}' не может быть пустым."
        )
    return value.strip()


def _validate_log_level(value: str) -> str:
    """Проверяет корректность уровня логирования.

    Args:
        value: Строковое значение уровня.

    Returns:
        Валидный уровень логирования в верхнем регистре.

    Raises:
        ConfigValidationError: Если уровень не входит в допустимые.
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    normalized = value.strip().upper()
    if normalized not in valid_levels:
        raise ConfigValidationError(
            f"Уровень логирования '{value}' недопустим. "
            f"Допустимые значения: {', '.join(valid_levels)}"
        )
    return normalized


def _validate_positive_int(value: int, param_name: str) -> int:
    """Проверяет, что число положительное.

    Raises:
        ConfigValidationError: Если значение не положительное.
    """
    if value <= 0:
        raise ConfigValidationError(
            f"Параметр '{param_name}' должен быть положительным числом, "
            f"получено: {value}"
        )
    return value


def _validate_non_negative_int(value: int, param_name: str) -> int:
    """Проверяет, что число неотрицательное.

    Raises:
        ConfigValidationError: Если значение отрицательное.
    """
    if value < 0:
        raise ConfigValidationError(
            f"Параметр '{param_name}' не может быть отрицательным, "
            f"получено: {value}"
        )
    return value


def _read_int(
    name: str,
    default: int,
    errors: list[str],
    allow_zero: bool = False,
) -> int:
    """Читает целочисленную переменную окружения с валидацией.

    Ошибка не выбрасывается сразу, а добавляется в errors, чтобы
    пользователь увидел все проблемы конфигурации за один запуск.

    Args:
        name: Имя переменной окружения.
        default: Значение по умолчанию (и при ошибке).
        errors: Накопитель сообщений об ошибках.
        allow_zero: Допускать ли ноль.

    Returns:
        Прочитанное значение или default.
    """
    validate = (
        _validate_non_negative_int if allow_zero else _validate_positive_int
    )
    try:
        return validate(_parse_int(os.getenv(name, str(default)), name), name)
    except ConfigValidationError as e:
        errors.append(str(e))
        return default


def _validate_window(
    min_value: int,
    max_value: int,
    min_name: str,
    max_name: str,
    errors: list[str],
) -> None:
    """Проверяет, что нижняя граница окна не больше верхней."""
    if min_value > max_value:
        errors.append(
            f"Параметр '{min_name}' ({min_value}) не может быть больше "
            f"'{max_name}' ({max_value})"
        )


def load_settings() -> Settings:
    """Загружает и валидирует все настройки приложения.

    Читает переменные окружения из .env файла, парсит типы и
    возвращает иммутабельный объект Settings.

    Returns:
        Полностью валидированный объект Settings.

    Raises:
        ConfigValidationError: Если значения параметров некорректны.
    """
    _load_env()

    errors: list[str] = []

    # --- Скрапер ---
    try:
        search_query = _validate_not_blank(
            os.getenv("SEARCH_QUERY", "laptop"), "SEARCH_QUERY"
        )
    except ConfigValidationError as e:
        errors.append(str(e))
        search_query = "laptop"

    try:
        base_url = _validate_not_blank(
            os.getenv("BASE_URL", "https://www.amazon.com"), "BASE_URL"
        )
    except ConfigValidationError as e:
        errors.append(str(e))
        base_url = "https://www.amazon.com"

    max_pages = _read_int("MAX_PAGES", 3, errors)
    screenshot_dir = os.getenv("SCREENSHOT_DIR", "screenshots").strip()

    # --- Задержки ---
    min_delay = _read_int("MIN_DELAY_MS", 2000, errors, allow_zero=True)
    max_delay = _read_int("MAX_DELAY_MS", 5000, errors, allow_zero=True)
    short_min_delay = _read_int(
        "SHORT_MIN_DELAY_MS", 1000, errors, allow_zero=True
    )
    short_max_delay = _read_int(
        "SHORT_MAX_DELAY_MS", 2000, errors, allow_zero=True
    )
    _validate_window(
        min_delay, max_delay, "MIN_DELAY_MS", "MAX_DELAY_MS", errors
    )
    _validate_window(
        short_min_delay,
        short_max_delay,
        "SHORT_MIN_DELAY_MS",
        "SHORT_MAX_DELAY_MS",
        errors,
    )

    # --- Браузер ---
    headless = _parse_bool(os.getenv("HEADLESS_MODE", "true"))
    nav_timeout = _read_int("NAVIGATION_TIMEOUT", 60000, errors)
    results_timeout = _read_int("RESULTS_TIMEOUT", 15000, errors)
    next_button_timeout = _read_int("NEXT_BUTTON_TIMEOUT", 10000, errors)

    # --- Экспорт ---
    json_path = os.getenv(
        "JSON_EXPORT_PATH", "data/amazon-search-results.json"
    )
    text_path = os.getenv(
        "TEXT_EXPORT_PATH", "data/amazon-search-results.txt"
    )
    excel_path = os.getenv("EXCEL_EXPORT_PATH", "").strip()

    # --- Логирование ---
    log_level_raw = os.getenv("LOG_LEVEL", "INFO")
    log_file_path = os.getenv("LOG_FILE_PATH", "")

    try:
        log_level = _validate_log_level(log_level_raw)
    except ConfigValidationError as e:
        errors.append(str(e))
        log_level = "INFO"

    # --- Все ошибки выбрасываются разом ---
    if errors:
        error_message = "Ошибки конфигурации:\n" + "\n".join(
            f"  - {err}" for err in errors
        )
        raise ConfigValidationError(error_message)

    return Settings(
        browser=BrowserSettings(
            headless=headless,
            navigation_timeout=nav_timeout,
            results_timeout=results_timeout,
            next_button_timeout=next_button_timeout,
        ),
        scraper=ScraperSettings(
            base_url=base_url,
            search_query=search_query,
            max_pages=max_pages,
            screenshot_dir=screenshot_dir,
        ),
        humanization=HumanizationSettings(
            min_delay=min_delay,
            max_delay=max_delay,
            short_min_delay=short_min_delay,
            short_max_delay=short_max_delay,
        ),
        export=ExportSettings(
            json_path=json_path,
            text_path=text_path,
            excel_path=excel_path,
        ),
        log=LogSettings(
            level=log_level,
            file_path=log_file_path,
        ),
    )
