"""
================================================================================
Home Page
================================================================================

Storefront entry point: language and delivery-location selection, the
login link and the authenticated marker.

Transitions:
    Entry --navigate_to_home--> Entry
    Entry --select_language--> LanguageSelected
    LanguageSelected --select_location_and_continue--> LocationSelected
    LocationSelected --click_login--> LoginPage

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.candidate_matcher import normalize
from vitacare_e2e.ui_testing.framework.errors import OptionNotFound
from vitacare_e2e.ui_testing.framework.resilient_action import (
    ResilientAction,
    Strategy,
    js_click,
)
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .storefront_page import StorefrontPage

if TYPE_CHECKING:
    from .login_page import LoginPage


class HomePage(StorefrontPage):
    """
    Page Object for the storefront home page.

    Usage:
        home = HomePage(page)
        await home.navigate_to_home()
        await home.close_alert()
        await home.select_language("EN")
        await home.select_location_and_continue("Dhaka", "Banasree")
        login = await home.click_login()
    """

    URL_PATH = "/"
    PAGE_TITLE = "Home page"

    LANGUAGE_DROPDOWN = ElementRef.of("language_dropdown", "#customerlanguage")
    LOGIN_LINK = ElementRef.of("login_link", "#login-link", "a.ico-login")

    # Location popup (select2 widgets)
    LOCATION_LABEL = ElementRef.of(
        "location_label",
        ".location-select label, .select-location label",
        "text=\"Select Location\"",
    )
    CITY_DROPDOWN = ElementRef.of("city_dropdown", "#select2-SelectedCityId-container")
    AREA_DROPDOWN = ElementRef.of("area_dropdown", "#select2-SelectedAreaId-container")
    SELECT2_RESULTS = ElementRef.of("select2_results", ".select2-results__options")
    SELECT2_OPTION = ".select2-results__option"
    CONTINUE_BUTTON = ElementRef.of("location_continue_button", "#saveButton")

    @allure.step("Navigate to home page")
    async def navigate_to_home(self, url: Optional[str] = None) -> "HomePage":
        await self.navigate_to(url or self.url, timeout=self.timeouts.page_load)
        return self

    async def is_home_page_loaded(self) -> bool:
        expected = self.config.get("site.home_title", self.PAGE_TITLE)
        return expected in await self.title()

    @allure.step("Select language: {language}")
    async def select_language(self, language: str) -> "HomePage":
        await self.actions.select_label(self.LANGUAGE_DROPDOWN, language, timeout=self.timeouts.element)
        logger.info(f"Language selected: {language}")
        return self

    @allure.step("Select location {city} / {area}")
    async def select_location_and_continue(self, city: str, area: str) -> "HomePage":
        """
        Open the location popup, pick city and area, and confirm.

        Raises:
            OptionNotFound: City or area has no exact (case-insensitive) option
            FallbacksExhausted: Location popup could not be opened
        """
        fallback_label = self.page.locator("text=\"Select Location\"").first

        async def open_popup():
            return await self.actions.click(self.LOCATION_LABEL, timeout=self.timeouts.click)

        await ResilientAction("open location popup").perform(
            primary=Strategy("location_label", open_popup),
            fallbacks=[js_click(fallback_label)],
        )
        await self.settler.settle("location_dialog")

        await self._select_from_select2(self.CITY_DROPDOWN, city)
        await self._select_from_select2(self.AREA_DROPDOWN, area)

        await self.actions.click(self.CONTINUE_BUTTON, timeout=self.timeouts.click)
        await self.settler.settle("location_dialog")
        logger.info(f"Location selected: {city} / {area}")
        return self

    async def _select_from_select2(self, trigger: ElementRef, visible_text: str) -> None:
        """Open a select2 dropdown and click the option whose text equals `visible_text`."""
        await self.actions.click(trigger, timeout=self.timeouts.click)
        await self.actions.wait_visible(self.SELECT2_RESULTS, timeout=self.timeouts.element)

        options = self.page.locator(self.SELECT2_OPTION)
        wanted = normalize(visible_text)
        seen: List[str] = []

        for i in range(await options.count()):
            option = options.nth(i)
            text = (await option.text_content() or "").strip()
            seen.append(text)
            if normalize(text) != wanted:
                continue

            async def click_option(target=option):
                await target.click(timeout=self.timeouts.click)

            await ResilientAction(f"select option '{visible_text}'").perform(
                primary=Strategy("pointer_click", click_option),
                fallbacks=[js_click(option)],
            )
            await self.settler.settle("location_option")
            logger.debug(f"Selected select2 option: {text}")
            return

        raise OptionNotFound(visible_text, tuple(seen))

    @allure.step("Click login link")
    async def click_login(self) -> "LoginPage":
        from .login_page import LoginPage

        await self.actions.click(self.LOGIN_LINK, timeout=self.timeouts.click)
        return self._next(LoginPage)


__all__ = [
    "HomePage",
]
