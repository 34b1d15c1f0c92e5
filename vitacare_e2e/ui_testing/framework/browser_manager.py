"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - Single browser instance per session
    - Context creation with viewport, default timeouts and video recording
    - Optional Playwright tracing saved when a context closes
    - XHR/fetch response capture for failure reports

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Response,
)

from .config_loader import ConfigLoader, ConfigurationError


REPORTS_DIR = Path(__file__).parent.parent.parent.parent / "reports"

MAX_CAPTURED_RESPONSES = 20

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages the browser instance and its contexts.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("https://vitacare.nop-station.com/")
    """

    # Chromium-only switches; the storefront asks for push-notification permission
    CHROMIUM_ARGS = ("--ignore-certificate-errors", "--disable-notifications")

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Args:
            headless: Run browser in headless mode (defaults to `browser.headless`)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to `browser.type`)
            config: Configuration source
        """
        self.config = config or ConfigLoader()
        self.headless = self.config.get("browser.headless", True) if headless is None else headless
        self.browser_type = browser_type or self.config.get("browser.type", "chromium")
        self.slow_mo = self.config.get("browser.slow_mo", 0)
        self.record_video = self.config.get("browser.record_video", True)
        self.trace = self.config.get("browser.trace", False)
        self.video_dir = Path(self.config.get("browser.video_dir", str(REPORTS_DIR / "videos")))
        self.trace_dir = Path(self.config.get("browser.trace_dir", str(REPORTS_DIR / "traces")))

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """
        Launch the configured browser engine.

        Raises:
            ConfigurationError: `browser.type` is not a Playwright engine
        """
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser.type '{self.browser_type}' "
                f"(expected one of: {', '.join(SUPPORTED_BROWSERS)})"
            )

        self._playwright = await async_playwright().start()
        engine = getattr(self._playwright, self.browser_type)
        self._browser = await engine.launch(**self.launch_options())
        logger.info(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless}, video={self.record_video}, trace={self.trace})"
        )

    def launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": self.headless, "slow_mo": self.slow_mo}
        if self.browser_type == "chromium":
            options["args"] = list(self.CHROMIUM_ARGS)
        return options

    def context_options(self, **overrides: Any) -> Dict[str, Any]:
        viewport = self.config.get_section("browser").get("viewport") or {"width": 1280, "height": 720}
        options: Dict[str, Any] = {
            "viewport": viewport,
            "ignore_https_errors": True,
        }
        if self.record_video:
            self.video_dir.mkdir(parents=True, exist_ok=True)
            options["record_video_dir"] = str(self.video_dir)
            options["record_video_size"] = viewport
        options.update(overrides)
        return options

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context with configured defaults.

        Each context is isolated - separate cookies, localStorage, etc.
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**self.context_options(**options))
        context.set_default_navigation_timeout(self.config.get("browser.navigation_timeout", 15000))
        context.set_default_timeout(self.config.get("browser.action_timeout", 8000))

        if self.trace:
            await context.tracing.start(screenshots=True, snapshots=True, sources=True)

        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """Create new page in new or existing context."""
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()

    async def close_context(self, context: BrowserContext) -> None:
        """Close a context, saving its trace first when tracing is on."""
        if self.trace:
            self.trace_dir.mkdir(parents=True, exist_ok=True)
            trace_path = self.trace_dir / f"trace_{datetime.now().strftime('%Y%m%d_%H%M%S')}.zip"
            await context.tracing.stop(path=str(trace_path))
            logger.info(f"Trace saved: {trace_path}")
        await context.close()
        if context in self._contexts:
            self._contexts.remove(context)

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in list(self._contexts):
            await self.close_context(context)

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


def attach_response_recorder(page: Page) -> List[Dict[str, Any]]:
    """
    Record the most recent XHR/fetch responses of a page.

    Returns:
        The live list the recorder appends to (oldest entries dropped)
    """
    captured: List[Dict[str, Any]] = []

    async def capture_response(response: Response) -> None:
        if response.request.resource_type not in ("xhr", "fetch"):
            return
        captured.append({
            "timestamp": datetime.now().isoformat(),
            "url": response.url,
            "status": response.status,
        })
        if len(captured) > MAX_CAPTURED_RESPONSES:
            captured.pop(0)

    page.on("response", capture_response)
    return captured


__all__ = [
    "BrowserManager",
    "attach_response_recorder",
]
