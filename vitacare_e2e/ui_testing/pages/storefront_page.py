"""
================================================================================
Storefront Page (shared header)
================================================================================

Every storefront screen carries the same header: push-notification alert,
search box, cart link, account menu. Operations on it live here so that any
authenticated screen can search, open the cart or open the profile.

Transitions:
    any --search_product(query)--> SearchResultsPage
    any --view_cart()-----------> CartPage
    any --open_customer_info()--> CustomerProfilePage

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.errors import ElementNotInteractable
from vitacare_e2e.ui_testing.framework.page_base import BasePage
from vitacare_e2e.ui_testing.framework.resilient_action import (
    DEFAULT_OVERLAY_SELECTORS,
    ResilientAction,
    Strategy,
    dismiss_overlays_then,
    goto_fallback,
    reload_then,
    try_dismiss,
    try_press_escape,
)
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

if TYPE_CHECKING:
    from .cart_page import CartPage
    from .customer_profile_page import CustomerProfilePage
    from .search_results_page import SearchResultsPage


class StorefrontPage(BasePage):
    """Base for pages rendered inside the storefront layout."""

    CLOSE_ALERT = ElementRef.of("close_alert_button", "#close-push-notification")
    LOGOUT_LINK = ElementRef.of("logout_link", "a.ico-logout")
    SEARCH_INPUT = ElementRef.of(
        "search_input",
        "#small-searchterms",
        "#small-search-box-form input[name='q']",
    )
    CART_LINK = ElementRef.of(
        "cart_link",
        "li#topcartlink a",
        "a[href='/cart']",
        "//span[normalize-space()='Shopping cart']",
        ".cart-label",
    )

    @allure.step("Close alert notification if present")
    async def close_alert(self) -> bool:
        """
        Dismiss the push-notification alert.

        Returns:
            True if an alert was closed, False if none was shown
        """
        try:
            await self.actions.click(self.CLOSE_ALERT, timeout=self.timeouts.click)
        except ElementNotInteractable:
            logger.info("No alert notification present to close")
            return False
        logger.info("Alert notification closed")
        return True

    async def dismiss_blocking_elements(self) -> int:
        """Close known popups/overlays and press Escape; returns how many were closed."""
        dismissed = await try_dismiss(
            self.page,
            DEFAULT_OVERLAY_SELECTORS,
            timeout=self.timeouts.probe,
            settler=self.settler,
        )
        await try_press_escape(self.page)
        return dismissed

    async def is_logged_in(self) -> bool:
        return await self.is_displayed(self.LOGOUT_LINK)

    @allure.step("Search product: {query}")
    async def search_product(self, query: str) -> "SearchResultsPage":
        """
        Submit a search from the header search box.

        Falls back to dismissing overlays, then to reloading the home page
        once, when the search box is hidden or covered.

        Raises:
            FallbacksExhausted: Search box unusable after every fallback
        """
        from .search_results_page import SearchResultsPage

        await self.dismiss_blocking_elements()

        async def submit() -> None:
            await self.actions.click(self.SEARCH_INPUT, timeout=self.timeouts.search_click)
            await self.actions.fill(self.SEARCH_INPUT, query)
            await self.actions.press(self.SEARCH_INPUT, "Enter")

        await ResilientAction(f"search '{query}'").perform(
            primary=Strategy("search_box", submit),
            fallbacks=[
                dismiss_overlays_then(self.page, submit, settler=self.settler),
                reload_then(
                    self.page,
                    self.url_for("/"),
                    submit,
                    settler=self.settler,
                    timeout=self.timeouts.page_load,
                ),
            ],
        )
        return self._next(SearchResultsPage)

    @allure.step("View cart")
    async def view_cart(self) -> "CartPage":
        """Open the cart from the header, or navigate to it directly."""
        from .cart_page import CartPage

        cart_url = self.url_for(self.config.get("site.cart_path", "/cart"))

        async def click_cart_link() -> None:
            await self.actions.click(self.CART_LINK, timeout=self.timeouts.click)

        await ResilientAction("open cart").perform(
            primary=Strategy("cart_link", click_cart_link),
            fallbacks=[goto_fallback(self.page, cart_url, timeout=self.timeouts.page_load)],
        )
        await self.settler.settle("cart_view")
        return self._next(CartPage)

    async def open_customer_info(self) -> "CustomerProfilePage":
        """Open the customer info (profile) form."""
        from .customer_profile_page import CustomerProfilePage

        profile = self._next(CustomerProfilePage)
        return await profile.go_to_customer_info()


__all__ = [
    "StorefrontPage",
]
