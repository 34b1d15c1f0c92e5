"""
================================================================================
Auth Module
================================================================================

Sequences the page objects for opening the storefront and signing in with
an OTP. Holds no page logic of its own.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from vitacare_e2e.ui_testing.framework.config_loader import ConfigLoader
from vitacare_e2e.ui_testing.framework.errors import NavigationMismatch
from vitacare_e2e.ui_testing.framework.wait_helpers import Settler
from vitacare_e2e.ui_testing.pages import HomePage

from .workflow_context import FlowState, WorkflowContext


class AuthModule:
    """
    Usage:
        auth = AuthModule(page)
        ctx = await auth.launch_and_prepare(url, "EN", "Dhaka", "Banasree")
        ctx = await auth.login_with_otp(ctx, phone, otp)
        await auth.verify_authenticated(ctx)
    """

    def __init__(
        self,
        page: Page,
        config: Optional[ConfigLoader] = None,
        settler: Optional[Settler] = None,
    ):
        self.page = page
        self.config = config or ConfigLoader()
        self.settler = settler or Settler.from_config(self.config)

    @allure.step("Launch storefront and prepare session")
    async def launch_and_prepare(
        self,
        url: str,
        language: str,
        city: str,
        area: str,
    ) -> WorkflowContext:
        """Open the home page, close the alert, pick language and location."""
        home = HomePage(self.page, config=self.config, settler=self.settler, base_url=url)
        ctx = WorkflowContext.start(await home.navigate_to_home(url))

        await home.close_alert()
        ctx = ctx.advance(FlowState.LANGUAGE_SELECTED, await home.select_language(language))
        ctx = ctx.advance(
            FlowState.LOCATION_SELECTED,
            await home.select_location_and_continue(city, area),
        )
        logger.info(f"Storefront prepared: language={language}, location={city}/{area}")
        return ctx

    @allure.step("Login with OTP")
    async def login_with_otp(self, ctx: WorkflowContext, phone: str, otp: str) -> WorkflowContext:
        home = ctx.page_as(HomePage)
        login = await home.click_login()
        ctx = ctx.advance(FlowState.AUTH_PROMPT, await login.enter_phone_number(phone))
        ctx = ctx.advance(FlowState.OTP_SENT, await login.send_otp())
        await login.enter_otp(otp)
        return ctx.advance(FlowState.AUTHENTICATED, await login.verify_otp())

    @allure.step("Verify authenticated session")
    async def verify_authenticated(
        self,
        ctx: WorkflowContext,
        domain_token: Optional[str] = None,
    ) -> WorkflowContext:
        """
        Raises:
            NavigationMismatch: URL off-domain or logout link missing
        """
        home = ctx.page_as(HomePage)
        token = domain_token or self.config.get("site.domain_token", "vitacare")
        current_url = home.get_current_url()

        if token not in current_url:
            raise NavigationMismatch(f"a page on '{token}'", current_url)
        if not await home.is_logged_in():
            raise NavigationMismatch("an authenticated page (logout link visible)", current_url)

        logger.info("Authenticated session verified")
        return ctx


__all__ = [
    "AuthModule",
]
