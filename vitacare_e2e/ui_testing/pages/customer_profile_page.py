"""
================================================================================
Customer Profile Page
================================================================================

Customer info form: open it from the account menu (or by URL), write the
editable fields, save, and read them back.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.errors import FallbacksExhausted, NavigationMismatch
from vitacare_e2e.ui_testing.framework.fixture_data import ProfileData
from vitacare_e2e.ui_testing.framework.resilient_action import ResilientAction, Strategy
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .storefront_page import StorefrontPage


class CustomerProfilePage(StorefrontPage):
    """Page Object for /customer/info."""

    URL_PATH = "/customer/info"

    USER_MENU = ElementRef.of("user_menu", ".header-links li.user-dropdown > span")
    CUSTOMER_INFO_LINK = ElementRef.of(
        "customer_info_link",
        "li.user-dropdown li.customer-info > a",
        "a[href='/customer/info']",
    )

    FIRST_NAME = ElementRef.of("first_name_input", "#FirstName")
    LAST_NAME = ElementRef.of("last_name_input", "#LastName")
    EMAIL = ElementRef.of("email_input", "#Email")
    COMPANY = ElementRef.of("company_input", "#Company")
    SAVE_BUTTON = ElementRef.of("save_profile_button", "#save-info-button")

    async def is_profile_page_loaded(self) -> bool:
        return await self.is_displayed(self.FIRST_NAME)

    async def _wait_until_profile_loaded(self) -> bool:
        loaded = await self.actions.is_visible(self.FIRST_NAME, timeout=self.timeouts.profile_load)
        if not loaded:
            content = await self.page.content()
            logger.warning(
                f"Profile form not visible at {self.page.url} (page content length: {len(content)})"
            )
        return loaded

    @allure.step("Open customer info")
    async def go_to_customer_info(self) -> "CustomerProfilePage":
        """
        Reach the profile form via the account menu, falling back to its URL.

        Raises:
            NavigationMismatch: The form did not load through either route
        """
        async def via_menu() -> bool:
            await self.actions.hover(self.USER_MENU, timeout=self.timeouts.element)
            await self.settler.settle("profile_hover")
            await self.actions.click(self.CUSTOMER_INFO_LINK, timeout=self.timeouts.element)
            return await self._wait_until_profile_loaded()

        async def via_url() -> bool:
            path = self.config.get("site.customer_info_path", self.URL_PATH)
            await self.navigate_to(self.url_for(path), timeout=self.timeouts.page_load)
            return await self._wait_until_profile_loaded()

        try:
            await ResilientAction("open customer info").perform(
                primary=Strategy("account_menu", via_menu),
                fallbacks=[Strategy("direct_navigation", via_url)],
            )
        except FallbacksExhausted as e:
            raise NavigationMismatch("customer info page", self.page.url) from e
        return self

    @allure.step("Update profile information")
    async def update_profile_info(self, profile: ProfileData) -> "CustomerProfilePage":
        await self.actions.fill(self.FIRST_NAME, profile.first_name)
        await self.actions.fill(self.LAST_NAME, profile.last_name)
        await self.actions.fill(self.EMAIL, profile.email)
        await self.actions.fill(self.COMPANY, profile.company_name)
        await self.actions.click(self.SAVE_BUTTON, timeout=self.timeouts.click)
        await self.wait_for_page_load()
        logger.info("Profile saved")
        return self

    async def get_first_name(self) -> str:
        return await self.actions.read_value(self.FIRST_NAME)

    async def get_last_name(self) -> str:
        return await self.actions.read_value(self.LAST_NAME)

    async def get_email(self) -> str:
        return await self.actions.read_value(self.EMAIL)

    async def get_company_name(self) -> str:
        return await self.actions.read_value(self.COMPANY)

    async def read_profile(self) -> ProfileData:
        """Read the form's current values."""
        return ProfileData(
            first_name=await self.get_first_name(),
            last_name=await self.get_last_name(),
            email=await self.get_email(),
            company_name=await self.get_company_name(),
        )


__all__ = [
    "CustomerProfilePage",
]
