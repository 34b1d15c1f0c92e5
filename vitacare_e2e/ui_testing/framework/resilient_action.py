"""
================================================================================
Resilient Action
================================================================================

Primary-then-fallbacks execution for interactions that fail on small page
drifts (a popup covering a button, an overlay intercepting clicks, a search
box missing after a redirect).

    result = await ResilientAction("search").perform(
        primary=submit_search,
        fallbacks=[
            dismiss_overlays_then(page, submit_search),
            reload_then(page, home_url, submit_search),
        ],
    )

Each strategy runs at most once per `perform`; when every one of them fails
a single FallbacksExhausted error names the last strategy attempted.

Probe helpers (`try_dismiss`, `probe_click`, `probe_visible`) return explicit
booleans/counts for optional UI such as "close the alert if there is one".

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .element_actions import InteractionResult
from .errors import FallbacksExhausted
from .wait_helpers import Settler


Attempt = Callable[[], Awaitable[Any]]

# Close buttons of popups known to cover the storefront after navigation
DEFAULT_OVERLAY_SELECTORS = (
    "#close-push-notification",
    ".popup-notification .close",
    ".newsletter-popup .close",
    "button.close",
    "span[title='Close']",
    ".modal-dialog .close",
)


@dataclass(frozen=True)
class Strategy:
    """A named attempt."""
    name: str
    run: Attempt


def _as_strategy(item: Union[Strategy, Attempt], default_name: str) -> Strategy:
    if isinstance(item, Strategy):
        return item
    return Strategy(getattr(item, "__name__", default_name), item)


class ResilientAction:
    """Runs a primary attempt and an ordered, bounded list of fallbacks."""

    def __init__(self, description: str):
        self.description = description

    async def perform(
        self,
        primary: Union[Strategy, Attempt],
        fallbacks: Sequence[Union[Strategy, Attempt]] = (),
    ) -> InteractionResult:
        """
        Execute `primary`, then each fallback in order until one succeeds.

        An attempt fails when it raises or returns a falsy InteractionResult /
        `False`. Any other return value counts as success.

        Returns:
            InteractionResult naming the strategy that succeeded

        Raises:
            FallbacksExhausted: When every strategy failed (chained to the last error)
        """
        strategies: List[Strategy] = [_as_strategy(primary, "primary")]
        strategies.extend(
            _as_strategy(fb, f"fallback_{i}") for i, fb in enumerate(fallbacks, start=1)
        )

        last_error: Optional[BaseException] = None
        for index, strategy in enumerate(strategies):
            try:
                outcome = await strategy.run()
            except Exception as e:
                last_error = e
                logger.warning(
                    f"'{self.description}' strategy {index} ({strategy.name}) failed: "
                    f"{str(e).splitlines()[0] if str(e) else type(e).__name__}"
                )
                continue

            if outcome is False or (isinstance(outcome, InteractionResult) and not outcome):
                last_error = getattr(outcome, "error", None)
                logger.warning(
                    f"'{self.description}' strategy {index} ({strategy.name}) reported failure"
                )
                continue

            if index > 0:
                logger.info(f"'{self.description}' recovered via {strategy.name}")
            return InteractionResult(True, index, strategy.name)

        error = FallbacksExhausted(self.description, strategies[-1].name, len(strategies))
        logger.error(str(error))
        raise error from last_error


# =============================================================================
# Probes
# =============================================================================

async def probe_visible(locator: Locator) -> bool:
    """Non-waiting visibility check that treats lookup errors as 'not visible'."""
    try:
        return await locator.is_visible()
    except PlaywrightError:
        return False


async def probe_click(locator: Locator, timeout: int = 1000) -> bool:
    """Click if possible; return whether the click happened."""
    try:
        await locator.click(timeout=timeout)
        return True
    except PlaywrightError as e:
        logger.debug(f"Probe click skipped: {str(e).splitlines()[0]}")
        return False


async def try_dismiss(
    page: Page,
    selectors: Sequence[str] = DEFAULT_OVERLAY_SELECTORS,
    timeout: int = 1000,
    settler: Optional[Settler] = None,
) -> int:
    """
    Click every visible close control among `selectors`.

    Returns:
        Number of overlays dismissed (0 means nothing was in the way)
    """
    dismissed = 0
    for selector in selectors:
        target = page.locator(selector).first
        if not await probe_visible(target):
            continue
        if await probe_click(target, timeout=timeout):
            dismissed += 1
            logger.debug(f"Dismissed overlay: {selector}")
            if settler is not None:
                await settler.settle("overlay_dismiss")
    return dismissed


async def try_press_escape(page: Page) -> bool:
    try:
        await page.keyboard.press("Escape")
        return True
    except PlaywrightError:
        return False


# =============================================================================
# Fallback catalogue
# =============================================================================

def dismiss_overlays_then(
    page: Page,
    retry: Attempt,
    selectors: Sequence[str] = DEFAULT_OVERLAY_SELECTORS,
    settler: Optional[Settler] = None,
) -> Strategy:
    """Dismiss known overlays and retry the primary once."""

    async def run() -> Any:
        await try_dismiss(page, selectors, settler=settler)
        await try_press_escape(page)
        return await retry()

    return Strategy("dismiss_overlays", run)


def press_escape(page: Page) -> Strategy:
    """Send Escape as a cheap dismissal."""

    async def run() -> None:
        await page.keyboard.press("Escape")

    return Strategy("press_escape", run)


def js_click(locator: Locator) -> Strategy:
    """Re-issue a click as a DOM event instead of a pointer event."""

    async def run() -> None:
        await locator.evaluate("el => el.click()")

    return Strategy("js_click", run)


def reload_then(
    page: Page,
    url: str,
    retry: Attempt,
    settler: Optional[Settler] = None,
    timeout: int = 60000,
) -> Strategy:
    """Reload the originating page once and retry the whole operation."""

    async def run() -> Any:
        logger.info(f"Reloading {url} to recover missing element")
        await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
        if settler is not None:
            await settler.settle("search_reload")
        await try_dismiss(page, settler=settler)
        await try_press_escape(page)
        return await retry()

    return Strategy("reload_and_retry", run)


def goto_fallback(page: Page, url: str, timeout: int = 60000) -> Strategy:
    """Navigate straight to a URL when the UI route to it fails."""

    async def run() -> None:
        await page.goto(url, wait_until="domcontentloaded", timeout=timeout)

    return Strategy("direct_navigation", run)


__all__ = [
    "DEFAULT_OVERLAY_SELECTORS",
    "ResilientAction",
    "Strategy",
    "dismiss_overlays_then",
    "goto_fallback",
    "js_click",
    "press_escape",
    "probe_click",
    "probe_visible",
    "reload_then",
    "try_dismiss",
    "try_press_escape",
]
