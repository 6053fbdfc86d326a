import pytest

from src.config import ConfigValidationError, load_settings

ENV_VARS = (
    "SEARCH_QUERY",
    "MAX_PAGES",
    "BASE_URL",
    "MIN_DELAY_MS",
    "MAX_DELAY_MS",
    "SHORT_MIN_DELAY_MS",
    "SHORT_MAX_DELAY_MS",
    "HEADLESS_MODE",
    "NAVIGATION_TIMEOUT",
    "RESULTS_TIMEOUT",
    "NEXT_BUTTON_TIMEOUT",
    "SCREENSHOT_DIR",
    "JSON_EXPORT_PATH",
    "TEXT_EXPORT_PATH",
    "EXCEL_EXPORT_PATH",
    "LOG_LEVEL",
    "LOG_FILE_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("src.config.settings._load_env", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_session_constants():
    settings = load_settings()

    assert settings.scraper.search_query == "laptop"
    assert settings.scraper.max_pages == 3
    assert settings.scraper.search_url == "https://www.amazon.com/s?k=laptop"
    assert settings.humanization.min_delay == 2000
    assert settings.humanization.max_delay == 5000
    assert settings.humanization.short_min_delay == 1000
    assert settings.humanization.short_max_delay == 2000
    assert settings.browser.headless is True
    assert settings.browser.navigation_timeout == 60000
    assert settings.browser.results_timeout == 15000
    assert settings.browser.next_button_timeout == 10000
    assert settings.export.excel_path == ""
    assert settings.log.level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SEARCH_QUERY", "usb c hub")
    monkeypatch.setenv("MAX_PAGES", "5")
    monkeypatch.setenv("HEADLESS_MODE", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("EXCEL_EXPORT_PATH", "data/report.xlsx")

    settings = load_settings()

    assert settings.scraper.max_pages == 5
    assert settings.scraper.search_url == "https://www.amazon.com/s?k=usb%20c%20hub"
    assert settings.browser.headless is False
    assert settings.log.level == "DEBUG"
    assert settings.export.excel_path == "data/report.xlsx"


@pytest.mark.parametrize("value", ["0", "-1", "three"])
def test_invalid_max_pages_rejected(monkeypatch, value):
    monkeypatch.setenv("MAX_PAGES", value)

    with pytest.raises(ConfigValidationError, match="MAX_PAGES"):
        load_settings()


def test_inverted_delay_window_rejected(monkeypatch):
    monkeypatch.setenv("MIN_DELAY_MS", "6000")

    with pytest.raises(ConfigValidationError, match="MIN_DELAY_MS"):
        load_settings()


def test_all_errors_reported_together(monkeypatch):
    monkeypatch.setenv("MAX_PAGES", "x")
    monkeypatch.setenv("RESULTS_TIMEOUT", "0")
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    monkeypatch.setenv("SEARCH_QUERY", "   ")

    with pytest.raises(ConfigValidationError) as exc_info:
        load_settings()

    message = str(exc_info.value)
    for name in ("MAX_PAGES", "RESULTS_TIMEOUT", "LOUD", "SEARCH_QUERY"):
        assert name in message
