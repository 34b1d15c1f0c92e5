"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the live storefront journey.

Key Features:
- Session-wide browser, one context/page per journey class
- Journey state shared by the serial steps of a class
- Login/profile fixture data
- Screenshot, URL and recent responses attached to Allure on failure

================================================================================
"""

from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, Dict, List, Optional

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Page

from vitacare_e2e.ui_testing.framework.browser_manager import (
    BrowserManager,
    attach_response_recorder,
)
from vitacare_e2e.ui_testing.framework.config_loader import ConfigLoader
from vitacare_e2e.ui_testing.framework.fixture_data import (
    LoginData,
    ProfileData,
    load_login_data,
    load_profile_data,
)
from vitacare_e2e.ui_testing.framework.page_base import BasePage
from vitacare_e2e.ui_testing.framework.wait_helpers import Settler
from vitacare_e2e.ui_testing.modules import WorkflowContext


# ================================================================================
# Journey State
# ================================================================================

@dataclass
class JourneyState:
    """Carries the workflow context from one serial step to the next."""
    page: Page
    config: ConfigLoader
    settler: Settler
    responses: List[Dict[str, Any]] = field(default_factory=list)
    ctx: Optional[WorkflowContext] = None
    failed: bool = False

    def require_ctx(self) -> WorkflowContext:
        if self.failed or self.ctx is None:
            pytest.skip("Previous journey step did not complete")
        return self.ctx


# ================================================================================
# Configuration / Data Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def base_url(ui_config: ConfigLoader) -> str:
    return ui_config.get("site.base_url", "https://vitacare.nop-station.com/")


@pytest.fixture(scope="session")
def journey_data(ui_config: ConfigLoader) -> Dict[str, Any]:
    """Language, location, products and codes used by the purchase journey."""
    return ui_config.get_section("journey")


@pytest.fixture(scope="session")
def login_data() -> LoginData:
    return load_login_data()


@pytest.fixture(scope="session")
def profile_data() -> ProfileData:
    return load_profile_data()


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(ui_config: ConfigLoader) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    A single browser is launched for the whole session.
    """
    async with BrowserManager(config=ui_config) as manager:
        yield manager


@pytest_asyncio.fixture(scope="class", loop_scope="session")
async def journey(
    browser_manager: BrowserManager,
    ui_config: ConfigLoader,
) -> AsyncGenerator[JourneyState, None]:
    """
    One browser context and page shared by every step of a journey class.
    """
    context = await browser_manager.new_context()
    page = await context.new_page()
    state = JourneyState(
        page=page,
        config=ui_config,
        settler=Settler.from_config(ui_config),
        responses=attach_response_recorder(page),
    )
    yield state
    await browser_manager.close_context(context)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for the failure-capture fixture."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest_asyncio.fixture(autouse=True, loop_scope="session")
async def capture_on_failure(request) -> AsyncGenerator[None, None]:
    """
    Attach a full-page screenshot, the URL and recent API responses to Allure
    when a journey step fails.
    """
    yield

    report = getattr(request.node, "rep_call", None)
    if report is None or not report.failed or "journey" not in request.fixturenames:
        return

    state: JourneyState = request.getfixturevalue("journey")
    state.failed = True
    page_object = BasePage(state.page, config=state.config, settler=state.settler)
    try:
        await page_object.capture_failure(request.node.name, state.responses)
    except Exception as e:
        logger.warning(f"Failed to capture failure details: {e}")
    else:
        allure.attach(
            report.longreprtext,
            name="Failure",
            attachment_type=allure.attachment_type.TEXT,
        )
