"""
In-memory stand-ins for the Playwright Page/Locator surface used by the
page objects. Each selector maps to a list of FakeElement; lookups that
find nothing visible raise Playwright's own TimeoutError.
"""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from vitacare_e2e.ui_testing.framework.wait_helpers import Settler, SettleConfig


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class FakeElement:
    def __init__(
        self,
        text: str = "",
        value: str = "",
        visible: bool = True,
        enabled: bool = True,
        options: Tuple[str, ...] = (),
        on_click: Optional[Callable[[], Any]] = None,
        click_error: bool = False,
    ):
        self.text = text
        self.value = value
        self.visible = visible
        self.enabled = enabled
        self.options = options
        self.on_click = on_click
        self.click_error = click_error
        self.clicks = 0
        self.js_clicks = 0
        self.hovers = 0
        self.fills: List[str] = []
        self.pressed: List[str] = []
        self.selected: Optional[str] = None


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self.page = page
        self.selector = selector
        self.index = index

    def _elements(self) -> List[FakeElement]:
        return self.page.elements.get(self.selector, [])

    def _target(self) -> Optional[FakeElement]:
        elements = self._elements()
        i = self.index or 0
        return elements[i] if i < len(elements) else None

    def _require(self, timeout: Optional[int] = None, action: str = "") -> FakeElement:
        if action:
            self.page.timeouts.append((action, timeout))
        element = self._target()
        if element is None or not element.visible:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for locator('{self.selector}')"
            )
        return element

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, index)

    async def count(self) -> int:
        return len(self._elements())

    async def is_visible(self) -> bool:
        element = self._target()
        return element is not None and element.visible

    async def is_enabled(self) -> bool:
        return self._require().enabled

    async def click(self, timeout: Optional[int] = None, **kwargs: Any) -> None:
        element = self._require(timeout, "click")
        if element.click_error:
            raise PlaywrightError(f"Element intercepts pointer events: {self.selector}")
        element.clicks += 1
        self.page.actions.append(("click", self.selector))
        if element.on_click is not None:
            await _maybe_await(element.on_click())

    async def evaluate(self, expression: str) -> None:
        element = self._require()
        element.js_clicks += 1
        self.page.actions.append(("js_click", self.selector))
        if element.on_click is not None:
            await _maybe_await(element.on_click())

    async def clear(self, timeout: Optional[int] = None) -> None:
        self._require(timeout, "clear").value = ""

    async def fill(self, value: str, timeout: Optional[int] = None) -> None:
        element = self._require(timeout, "fill")
        element.value = value
        element.fills.append(value)
        self.page.actions.append(("fill", self.selector))

    async def text_content(self) -> Optional[str]:
        element = self._target()
        return element.text if element is not None else None

    async def input_value(self) -> str:
        return self._require().value

    async def hover(self, timeout: Optional[int] = None) -> None:
        self._require(timeout, "hover").hovers += 1
        self.page.actions.append(("hover", self.selector))

    async def press(self, key: str, timeout: Optional[int] = None) -> None:
        self._require(timeout, "press").pressed.append(key)
        self.page.actions.append(("press", key))

    async def select_option(self, label: Optional[str] = None, timeout: Optional[int] = None) -> None:
        element = self._require(timeout, "select")
        if label not in element.options:
            raise PlaywrightError(f"No option with label '{label}'")
        element.selected = label


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page
        self.pressed: List[str] = []

    async def press(self, key: str) -> None:
        self.pressed.append(key)
        self.page.actions.append(("key", key))
        if self.page.on_key is not None:
            await _maybe_await(self.page.on_key(key))


class FakePage:
    def __init__(self, url: str = "https://vitacare.nop-station.com/", title: str = "Home page"):
        self.url = url
        self.page_title = title
        self.elements: Dict[str, List[FakeElement]] = {}
        self.actions: List[Tuple[str, str]] = []
        # (action, timeout ms) for every locator action, in call order
        self.timeouts: List[Tuple[str, Optional[int]]] = []
        self.visits: List[str] = []
        self.keyboard = FakeKeyboard(self)
        self.on_goto: Optional[Callable[[str], Any]] = None
        self.on_key: Optional[Callable[[str], Any]] = None
        self.handlers: Dict[str, List[Callable[..., Any]]] = {}

    def add(self, selector: str, *elements: FakeElement) -> FakeElement:
        """Register elements for a selector; returns the first one."""
        elements = elements or (FakeElement(),)
        self.elements.setdefault(selector, []).extend(elements)
        return elements[0]

    def remove(self, selector: str) -> None:
        self.elements.pop(selector, None)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def clicks_on(self, selector: str) -> int:
        return sum(1 for action, target in self.actions if action == "click" and target == selector)

    async def title(self) -> str:
        return self.page_title

    async def goto(self, url: str, wait_until: Optional[str] = None, timeout: Optional[int] = None) -> None:
        self.visits.append(url)
        self.url = url
        if self.on_goto is not None:
            await _maybe_await(self.on_goto(url))

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        return None

    async def content(self) -> str:
        return "<html><body></body></html>"

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        image = b"\x89PNG fake"
        if path:
            Path(path).write_bytes(image)
        return image

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.handlers.setdefault(event, []).append(handler)


class FakeClock:
    """Clock and sleep pair for Settler; sleeping advances the clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []
        self.on_tick: Optional[Callable[[float], Any]] = None

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self.on_tick is not None:
            self.on_tick(self.now)

    @property
    def slept_ms(self) -> int:
        return round(sum(self.sleeps) * 1000)


class DummyConfig:
    """Flat dict-backed replacement for ConfigLoader."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values = {
            "site.base_url": "https://vitacare.nop-station.com/",
            "site.domain_token": "vitacare",
            **(values or {}),
        }

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        prefix = f"{section}."
        return {k[len(prefix):]: v for k, v in self.values.items() if k.startswith(prefix)}


def make_settler(clock: FakeClock, **config: Any) -> Settler:
    return Settler(SettleConfig(**config), sleep=clock.sleep, clock=clock)
