"""
================================================================================
Base Page Object
================================================================================

Common ground for the storefront page objects.

Provides:
    - Element interaction through ElementInteractor / SmartLocator
    - Named settle delays through Settler
    - Navigation helpers bound to the configured storefront URL
    - Screenshot and failure-capture utilities for Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Page

from .config_loader import ConfigLoader
from .element_actions import ElementInteractor
from .smart_locator import ElementRef, SmartLocator
from .wait_helpers import Settler


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent.parent.parent / "reports" / "screenshots"


@dataclass(frozen=True)
class Timeouts:
    """Interaction timeouts in milliseconds."""
    element: int = 8000
    click: int = 5000
    visibility: int = 5000
    probe: int = 1000
    popup: int = 1500
    search_click: int = 3000
    profile_load: int = 20000
    page_load: int = 60000

    @classmethod
    def from_config(cls, config: Any) -> "Timeouts":
        defaults = cls()
        values = {
            name: int(config.get(f"timeouts.{name}", getattr(defaults, name)))
            for name in cls.__dataclass_fields__
        }
        return cls(**values)


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare their elements as `ElementRef` class attributes and
    expose page-level operations that return the page object of the screen
    they end on.

    Usage:
        class LoginPage(BasePage):
            PHONE_INPUT = ElementRef.of("phone_input", "#otp_login_Phone")

            async def enter_phone_number(self, phone: str) -> "LoginPage":
                await self.actions.fill(self.PHONE_INPUT, phone)
                return self
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        config: Optional[ConfigLoader] = None,
        settler: Optional[Settler] = None,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            config: Configuration source (process-wide ConfigLoader by default)
            settler: Settle/poll helper shared along a workflow
            base_url: Storefront base URL, defaults to `site.base_url`
        """
        self.page = page
        self.config = config or ConfigLoader()
        self.settler = settler or Settler.from_config(self.config)
        self.timeouts = Timeouts.from_config(self.config)
        base_url = base_url or self.config.get("site.base_url", "https://vitacare.nop-station.com/")
        self.base_url = base_url.rstrip("/")
        self.smart = SmartLocator(page, self.settler)
        self.actions = ElementInteractor(page, self.smart, default_timeout=self.timeouts.click)

    def _next(self, page_cls: type, **kwargs: Any) -> Any:
        """Build the page object for the screen reached by a transition."""
        return page_cls(
            self.page,
            config=self.config,
            settler=self.settler,
            base_url=self.base_url,
            **kwargs,
        )

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.base_url}{self.URL_PATH}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def get_current_url(self) -> str:
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    async def navigate_to(
        self,
        url: str,
        wait_for: str = "domcontentloaded",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Navigate to an absolute URL.

        Args:
            url: Target URL
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
            timeout: Navigation timeout in milliseconds
        """
        with allure.step(f"Navigate to {url}"):
            await self.page.goto(url, wait_until=wait_for, timeout=timeout or self.timeouts.page_load)
            logger.debug(f"Navigated to: {url}")

    async def wait_for_page_load(
        self,
        state: str = "domcontentloaded",
        timeout: int = 15000,
    ) -> None:
        """Wait for the page to reach a stable load state."""
        await self.page.wait_for_load_state(state, timeout=timeout)

    async def is_displayed(self, ref: ElementRef, timeout: Optional[int] = None) -> bool:
        return await self.actions.is_visible(ref, timeout or self.timeouts.visibility)

    async def count(self, selector: str) -> int:
        """Number of elements currently matching a selector (no waiting)."""
        return await self.page.locator(selector).count()

    # =========================================================================
    # Failure evidence
    # =========================================================================

    @property
    def screenshot_dir(self) -> Path:
        configured = self.config.get("browser.screenshot_dir", "")
        return Path(configured) if configured else SCREENSHOT_DIR

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Save a PNG under the screenshot directory and attach it to Allure.

        `name` is used as the file stem with a timestamp suffix; characters
        outside [A-Za-z0-9_-] become underscores (pytest node names carry
        brackets and slashes).
        """
        stem = re.sub(r"[^A-Za-z0-9_-]+", "_", name).strip("_") or "page"
        target = self.screenshot_dir / f"{stem}_{datetime.now():%Y%m%d_%H%M%S}.png"
        target.parent.mkdir(parents=True, exist_ok=True)

        image = await self.page.screenshot(path=str(target), full_page=full_page)
        if attach_to_allure:
            allure.attach(image, name=name, attachment_type=allure.attachment_type.PNG)

        logger.debug(f"Screenshot written to {target}")
        return target

    async def capture_failure(
        self,
        test_name: str,
        captured_responses: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        """
        Attach everything needed to diagnose a failed step: a full-page
        screenshot, the URL, the locator health report and the last ten
        XHR/fetch responses.
        """
        with allure.step(f"Failure evidence for {test_name}"):
            await self.screenshot(f"failure_{test_name}", full_page=True)

            text = allure.attachment_type.TEXT
            allure.attach(self.page.url, name="Current URL", attachment_type=text)
            allure.attach(self.get_locator_health_report(), name="Locator Health", attachment_type=text)

            if captured_responses:
                allure.attach(
                    json.dumps(captured_responses[-10:], indent=2),
                    name="Recent Responses",
                    attachment_type=allure.attachment_type.JSON,
                )

    def get_locator_health_report(self) -> str:
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
    "Timeouts",
]
