"""
================================================================================
Smart Locator
================================================================================

Element location with ordered fallback strategies:
    - Each logical element is an `ElementRef` (name + ordered selectors)
    - Resolution picks the first selector with a visible match at query time,
      polling all of them against a single deadline
    - Nothing is cached, so a navigation never leaves a stale handle behind
    - Fallback usage is recorded for a locator health report

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .errors import ElementNotInteractable
from .wait_helpers import Settler


@dataclass(frozen=True)
class ElementRef:
    """
    Logical UI element.

    Attributes:
        name: Human-readable element name used in logs and Allure steps
        strategies: Selector expressions (CSS, XPath, text=...) tried in order
    """
    name: str
    strategies: Tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.strategies, str):
            object.__setattr__(self, "strategies", (self.strategies,))
        else:
            object.__setattr__(self, "strategies", tuple(self.strategies))
        if not self.strategies:
            raise ValueError(f"ElementRef '{self.name}' needs at least one strategy")

    @classmethod
    def of(cls, name: str, *selectors: str) -> "ElementRef":
        return cls(name=name, strategies=selectors)

    @property
    def primary(self) -> str:
        return self.strategies[0]


@dataclass(frozen=True)
class ResolvedElement:
    """A locator bound to the strategy that produced it."""
    ref: ElementRef
    locator: Locator
    index: int
    # Settler clock reading after which the resolution budget is spent
    deadline: float = 0.0

    @property
    def selector(self) -> str:
        return self.ref.strategies[self.index]

    @property
    def used_fallback(self) -> bool:
        return self.index > 0


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_index: Position of the fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_index: Optional[int] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Resolves `ElementRef`s against a Playwright page.

    All strategies share one deadline: each pass checks them in order without
    waiting, and passes repeat every `settle.poll_interval` until one is
    visible or the timeout is spent.

    Usage:
        >>> smart = SmartLocator(page, settler)
        >>> search = ElementRef.of("search_input", "#small-searchterms", "input[name='q']")
        >>> locator = await smart.locate(search, timeout=5000)
    """

    def __init__(self, page: Page, settler: Optional[Settler] = None):
        self.page = page
        self.settler = settler or Settler()
        self._fallback_used: Dict[str, LocatorHealth] = {}

    async def _first_visible(
        self,
        ref: ElementRef,
        problems: Dict[int, str],
    ) -> Optional[Tuple[int, Locator]]:
        for index, selector in enumerate(ref.strategies):
            locator = self.page.locator(selector).first
            try:
                if await locator.is_visible():
                    return index, locator
            except PlaywrightError as e:
                problems[index] = str(e).splitlines()[0][:80]
        return None

    async def resolve(self, ref: ElementRef, timeout: int = 5000) -> ResolvedElement:
        """
        Resolve an element using its strategies in order.

        Args:
            ref: Element to resolve
            timeout: Total time in milliseconds for all strategies together

        Returns:
            ResolvedElement for the first strategy with a visible match

        Raises:
            ElementNotInteractable: When no strategy yields a visible element in time
        """
        deadline = self.settler.now() + timeout / 1000
        interval = max(self.settler.config.poll_interval_ms, 1)
        problems: Dict[int, str] = {}

        while True:
            hit = await self._first_visible(ref, problems)
            if hit is not None:
                index, locator = hit
                self._record(ref, index)
                return ResolvedElement(ref=ref, locator=locator, index=index, deadline=deadline)

            left_ms = (deadline - self.settler.now()) * 1000
            if left_ms <= 0:
                break
            await self.settler.pause(min(interval, left_ms))

        error_msg = f"No visible match for '{ref.name}' within {timeout}ms:\n" + "\n".join(
            f"  - [{index}] {selector} -> {problems.get(index, 'not visible')}"
            for index, selector in enumerate(ref.strategies)
        )
        logger.debug(error_msg)
        raise ElementNotInteractable(ref.name, error_msg)

    async def locate(self, ref: ElementRef, timeout: int = 5000) -> Locator:
        """Resolve and return only the locator."""
        return (await self.resolve(ref, timeout)).locator

    def remaining_ms(self, resolved: ResolvedElement) -> int:
        """Budget left before the resolution deadline (at least 1 ms, never 'no timeout')."""
        return max(1, round((resolved.deadline - self.settler.now()) * 1000))

    def _record(self, ref: ElementRef, index: int) -> None:
        if index == 0:
            logger.debug(f"Element '{ref.name}' found: {ref.primary}")
            return

        logger.warning(f"Element '{ref.name}' used fallback #{index}: {ref.strategies[index]}")
        self._fallback_used[ref.name] = LocatorHealth(
            element_name=ref.name,
            primary_selector=ref.primary,
            used_fallback=True,
            fallback_index=index,
            fallback_selector=ref.strategies[index],
        )

    @property
    def fallback_usage(self) -> Dict[str, LocatorHealth]:
        return dict(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed a fallback selector (maintenance candidates).
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: #{health.fallback_index} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "ElementRef",
    "ResolvedElement",
    "LocatorHealth",
    "SmartLocator",
]
