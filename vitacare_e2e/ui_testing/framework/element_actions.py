# ================================================================================
# Element Actions Module
# ================================================================================
#
# Bounded-timeout interactions on a single logical element with a uniform
# error contract:
#
#   - click / fill raise ElementNotInteractable when the element never becomes
#     visible and enabled within the timeout (never a silent no-op)
#   - one timeout covers locating and acting: the action only gets what
#     resolution left over
#   - fill always clears before writing, so repeating it is idempotent
#   - is_visible is a probe and never raises
#   - every interaction is an Allure step and is logged with Loguru
#
# ================================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .errors import ElementNotInteractable
from .smart_locator import ElementRef, ResolvedElement, SmartLocator


DEFAULT_ACTION_TIMEOUT = 5000
DEFAULT_ELEMENT_TIMEOUT = 8000

# Element names containing these fragments are masked in logs and reports
_SENSITIVE_NAMES = ("otp", "password")


@dataclass
class InteractionResult:
    """
    Outcome of one interaction.

    Attributes:
        succeeded: Whether the interaction reached its goal
        strategy_used: Index of the locator strategy / fallback that succeeded
        strategy_name: Human-readable name of that strategy
        error: Last error seen, if any
    """
    succeeded: bool
    strategy_used: int = 0
    strategy_name: str = "primary"
    error: Optional[BaseException] = None

    def __bool__(self) -> bool:
        return self.succeeded


def _display_value(ref: ElementRef, value: str) -> str:
    if any(fragment in ref.name.lower() for fragment in _SENSITIVE_NAMES):
        return "*" * len(value)
    return value


class ElementInteractor:
    """
    Interaction layer between page objects and Playwright locators.

    Example:
        actions = ElementInteractor(page)
        await actions.fill(ElementRef.of("phone_input", "#otp_login_Phone"), "017...")
        await actions.click(ElementRef.of("send_otp", "#btnOtpSendPopup"))
    """

    def __init__(
        self,
        page: Page,
        smart: Optional[SmartLocator] = None,
        default_timeout: int = DEFAULT_ACTION_TIMEOUT,
    ):
        """
        Initialize ElementInteractor.

        Args:
            page: Playwright Page object
            smart: Shared SmartLocator (created if omitted)
            default_timeout: Default timeout for operations in milliseconds
        """
        self.page = page
        self.smart = smart or SmartLocator(page)
        self.default_timeout = default_timeout

    async def _interactable(self, ref: ElementRef, timeout: int) -> ResolvedElement:
        resolved = await self.smart.resolve(ref, timeout=timeout)
        if not await resolved.locator.is_enabled():
            raise ElementNotInteractable(ref.name, f"Element '{ref.name}' is disabled")
        return resolved

    async def click(
        self,
        ref: ElementRef,
        timeout: Optional[int] = None,
        **kwargs: Any,
    ) -> InteractionResult:
        """
        Click an element.

        Args:
            ref: Element to click
            timeout: Total budget in milliseconds for locating and clicking
            **kwargs: Additional Playwright click options

        Raises:
            ElementNotInteractable: Element not visible/enabled or click rejected
        """
        timeout = timeout or self.default_timeout
        with allure.step(f"Click: {ref.name}"):
            resolved = await self._interactable(ref, timeout)
            try:
                await resolved.locator.click(timeout=self.smart.remaining_ms(resolved), **kwargs)
            except PlaywrightError as e:
                raise ElementNotInteractable(ref.name, f"Click on '{ref.name}' failed: {e}") from e
            logger.debug(f"Clicked: {ref.name}")
            return InteractionResult(True, resolved.index, resolved.selector)

    async def fill(
        self,
        ref: ElementRef,
        value: str,
        timeout: Optional[int] = None,
    ) -> InteractionResult:
        """
        Clear an input and type a value into it.

        Args:
            ref: Input element
            value: Text to enter
            timeout: Timeout in milliseconds

        Raises:
            ElementNotInteractable: Element not visible/enabled or not editable
        """
        timeout = timeout or self.default_timeout
        shown = _display_value(ref, value)
        with allure.step(f"Fill {ref.name}: {shown}"):
            resolved = await self._interactable(ref, timeout)
            try:
                await resolved.locator.clear(timeout=self.smart.remaining_ms(resolved))
                await resolved.locator.fill(value, timeout=self.smart.remaining_ms(resolved))
            except PlaywrightError as e:
                raise ElementNotInteractable(ref.name, f"Fill on '{ref.name}' failed: {e}") from e
            logger.debug(f"Filled {ref.name} with '{shown}'")
            return InteractionResult(True, resolved.index, resolved.selector)

    async def read(self, ref: ElementRef, timeout: Optional[int] = None) -> str:
        """Return the text content of an element ('' when empty)."""
        locator = await self.smart.locate(ref, timeout=timeout or self.default_timeout)
        return await locator.text_content() or ""

    async def read_value(self, ref: ElementRef, timeout: Optional[int] = None) -> str:
        """Return the current value of an input element."""
        locator = await self.smart.locate(ref, timeout=timeout or self.default_timeout)
        return await locator.input_value()

    async def is_visible(self, ref: ElementRef, timeout: Optional[int] = None) -> bool:
        """Return True if any strategy of the element becomes visible within the timeout."""
        try:
            await self.smart.resolve(ref, timeout=timeout or self.default_timeout)
            return True
        except ElementNotInteractable:
            return False

    async def wait_visible(self, ref: ElementRef, timeout: Optional[int] = None) -> Locator:
        """Wait for the element and return its locator (raises ElementNotInteractable)."""
        return await self.smart.locate(ref, timeout=timeout or self.default_timeout)

    async def hover(self, ref: ElementRef, timeout: Optional[int] = None) -> InteractionResult:
        timeout = timeout or self.default_timeout
        resolved = await self.smart.resolve(ref, timeout=timeout)
        try:
            await resolved.locator.hover(timeout=self.smart.remaining_ms(resolved))
        except PlaywrightError as e:
            raise ElementNotInteractable(ref.name, f"Hover on '{ref.name}' failed: {e}") from e
        return InteractionResult(True, resolved.index, resolved.selector)

    async def press(
        self,
        ref: ElementRef,
        key: str,
        timeout: Optional[int] = None,
    ) -> InteractionResult:
        timeout = timeout or self.default_timeout
        resolved = await self._interactable(ref, timeout)
        try:
            await resolved.locator.press(key, timeout=self.smart.remaining_ms(resolved))
        except PlaywrightError as e:
            raise ElementNotInteractable(ref.name, f"Key '{key}' on '{ref.name}' failed: {e}") from e
        return InteractionResult(True, resolved.index, resolved.selector)

    async def select_label(
        self,
        ref: ElementRef,
        label: str,
        timeout: Optional[int] = None,
    ) -> InteractionResult:
        """Select a native <select> option by its visible label."""
        timeout = timeout or self.default_timeout
        with allure.step(f"Select '{label}' in {ref.name}"):
            resolved = await self._interactable(ref, timeout)
            try:
                await resolved.locator.select_option(
                    label=label, timeout=self.smart.remaining_ms(resolved)
                )
            except PlaywrightError as e:
                raise ElementNotInteractable(
                    ref.name, f"Selecting '{label}' in '{ref.name}' failed: {e}"
                ) from e
            logger.debug(f"Selected '{label}' in {ref.name}")
            return InteractionResult(True, resolved.index, resolved.selector)


__all__ = [
    "DEFAULT_ACTION_TIMEOUT",
    "DEFAULT_ELEMENT_TIMEOUT",
    "ElementInteractor",
    "InteractionResult",
]
