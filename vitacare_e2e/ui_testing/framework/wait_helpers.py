# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Settle and polling utilities for pages that update asynchronously without an
# observable completion signal.
#
# Key Features:
#   - Named minimum settle delays (coupon applied, dropdown option picked, ...)
#   - Optional poll-until-condition after the minimum, with an explicit bound
#   - Injectable sleep/clock so tests never depend on real time
#
# Usage:
#   settler = Settler.from_config(ConfigLoader())
#   await settler.settle("coupon")
#   reached = await settler.settle("checkout_navigation", until=is_checkout)
#
# ================================================================================

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger


Condition = Callable[[], Awaitable[bool]]
SleepFn = Callable[[float], Awaitable[Any]]
ClockFn = Callable[[], float]


# Minimum settle delays in milliseconds, used when the config has no `settle.delays`
DEFAULT_SETTLE_DELAYS: Dict[str, int] = {
    "location_option": 50,
    "location_dialog": 100,
    "overlay_dismiss": 200,
    "search_reload": 500,
    "profile_hover": 300,
    "product_page": 500,
    "add_to_cart": 200,
    "quantity_click": 150,
    "cart_view": 1000,
    "checkout_navigation": 1000,
    "pickup": 500,
    "coupon": 1000,
    "confirm_order": 2000,
}


@dataclass
class SettleConfig:
    """
    Configuration for settle operations.

    Attributes:
        delays: Minimum settle delay per named scenario, in milliseconds
        poll_interval_ms: Interval between condition checks
        max_wait_ms: Upper bound for condition polling after the minimum delay
    """
    delays: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_SETTLE_DELAYS))
    poll_interval_ms: int = 100
    max_wait_ms: int = 5000

    def delay_for(self, name: str) -> int:
        return int(self.delays.get(name, 0))


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""
    pass


class Settler:
    """Applies named settle delays and bounded condition polling."""

    def __init__(
        self,
        config: Optional[SettleConfig] = None,
        sleep: Optional[SleepFn] = None,
        clock: Optional[ClockFn] = None,
    ):
        self.config = config or SettleConfig()
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or time.monotonic

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "Settler":
        """Build from a ConfigLoader-like object exposing `get(key, default)`."""
        delays = dict(DEFAULT_SETTLE_DELAYS)
        delays.update(config.get("settle.delays", {}) or {})
        settle_config = SettleConfig(
            delays=delays,
            poll_interval_ms=config.get("settle.poll_interval", 100),
            max_wait_ms=config.get("settle.max_wait", 5000),
        )
        return cls(settle_config, **kwargs)

    def now(self) -> float:
        """Current reading of the (possibly injected) clock, in seconds."""
        return self._clock()

    async def pause(self, ms: float) -> None:
        if ms > 0:
            await self._sleep(ms / 1000)

    async def settle(
        self,
        name: str,
        until: Optional[Condition] = None,
        max_wait_ms: Optional[int] = None,
    ) -> bool:
        """
        Wait at least the named minimum delay, then optionally poll a condition.

        Args:
            name: Settle scenario (see DEFAULT_SETTLE_DELAYS)
            until: Optional async condition polled after the minimum delay
            max_wait_ms: Polling bound, defaults to config.max_wait_ms

        Returns:
            True when no condition was given or it became true within the bound
        """
        await self.pause(self.config.delay_for(name))
        if until is None:
            return True

        reached = await self.poll_until(
            until,
            timeout_ms=max_wait_ms if max_wait_ms is not None else self.config.max_wait_ms,
            description=name,
            raise_on_timeout=False,
        )
        return reached

    async def poll_until(
        self,
        condition: Condition,
        timeout_ms: int,
        description: str = "condition",
        interval_ms: Optional[int] = None,
        raise_on_timeout: bool = True,
    ) -> bool:
        """
        Poll an async condition until it is true or the bound is reached.

        Raises:
            WaitTimeoutError: On timeout when `raise_on_timeout` is set
        """
        interval = interval_ms if interval_ms is not None else self.config.poll_interval_ms
        deadline = self._clock() + timeout_ms / 1000
        attempt = 0

        while True:
            attempt += 1
            if await condition():
                logger.debug(f"Condition '{description}' met after {attempt} checks")
                return True

            if self._clock() >= deadline:
                message = f"Timeout after {timeout_ms}ms waiting for: {description}"
                if raise_on_timeout:
                    logger.error(message)
                    raise WaitTimeoutError(message)
                logger.warning(message)
                return False

            await self.pause(interval)


__all__ = [
    "DEFAULT_SETTLE_DELAYS",
    "SettleConfig",
    "Settler",
    "WaitTimeoutError",
]
