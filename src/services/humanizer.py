"""Политика «очеловечивания» действий браузера.

Случайные паузы между действиями, выбор User-Agent из фиксированного
пула и плавная прокрутка страницы вниз и обратно наверх. Функция сна
и генератор случайных чисел передаются снаружи, поэтому тесты
проверяют последовательность пауз без реального ожидания.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable

from playwright.async_api import Page

from src.config import HumanizationSettings, get_logger

logger = get_logger("humanizer")

# Пул User-Agent; выбирается один раз на сессию
USER_AGENTS: list[str] = [
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/96.0.4664.110 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/97.0.4692.71 Safari/537.36"
    ),
    (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) "
        "Version/15.2 Safari/605.1.15"
    ),
    (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:96.0) "
        "Gecko/20100101 Firefox/96.0"
    ),
]

# Шаг прокрутки в пикселях и пауза между шагами в секундах
SCROLL_STEP_MIN: int = 100
SCROLL_STEP_MAX: int = 300
SCROLL_PAUSE_MIN: float = 0.1
SCROLL_PAUSE_MAX: float = 0.4

SleepFunc = Callable[[float], Awaitable[None]]


class HumanizationPolicy:
    """Случайные задержки, ротация User-Agent и имитация чтения.

    Attributes:
        _settings: Окна задержек из конфигурации.
        _sleep: Корутина сна, принимает секунды.
        _rng: Источник случайных чисел.
    """

    def __init__(
        self,
        settings: HumanizationSettings,
        sleep: SleepFunc = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def random_delay(
        self,
        min_ms: int | None = None,
        max_ms: int | None = None,
    ) -> int:
        """Ждёт равномерно случайное число миллисекунд из [min_ms, max_ms].

        Без аргументов используется окно пауз между страницами
        из конфигурации.

        Args:
            min_ms: Нижняя граница в миллисекундах.
            max_ms: Верхняя граница в миллисекундах.

        Returns:
            Фактическая длительность паузы в миллисекундах.

        Raises:
            ValueError: Если min_ms больше max_ms.
        """
        low = self._settings.min_delay if min_ms is None else min_ms
        high = self._settings.max_delay if max_ms is None else max_ms
        if low > high:
            raise ValueError(
                f"Некорректное окно задержки: {low} > {high}"
            )

        delay_ms = self._rng.randint(low, high)
        logger.info(
            "delay_started",
            delay_ms=delay_ms,
            window=f"{low}-{high}",
        )
        await self._sleep(delay_ms / 1000)
        return delay_ms

    async def short_delay(self) -> int:
        """Короткая пауза перед кликом по пагинации."""
        return await self.random_delay(
            self._settings.short_min_delay,
            self._settings.short_max_delay,
        )

    def select_identity(self) -> str:
        """Выбирает User-Agent из пула равновероятно."""
        user_agent = self._rng.choice(USER_AGENTS)
        logger.info("identity_selected", user_agent=user_agent[:60])
        return user_agent

    async def simulate_reading(self, page: Page) -> None:
        """Прокручивает страницу до конца и возвращается наверх.

        Шаги и паузы случайные, как при чтении выдачи человеком.
        Ошибки Playwright не перехватываются: решение об остановке
        принимает вызывающий код.

        Args:
            page: Активная страница Playwright.
        """
        total_height = await page.evaluate("document.body.scrollHeight")
        current_position = 0
        steps = 0

        while current_position < total_height:
            current_position = min(
                current_position
                + self._rng.randint(SCROLL_STEP_MIN, SCROLL_STEP_MAX),
                total_height,
            )
            await page.evaluate(f"window.scrollTo(0, {current_position})")
            await self._sleep(
                self._rng.uniform(SCROLL_PAUSE_MIN, SCROLL_PAUSE_MAX)
            )
            steps += 1

        await page.evaluate("window.scrollTo(0, 0)")

        logger.debug(
            "scroll_completed",
            total_height=total_height,
            steps=steps,
        )
