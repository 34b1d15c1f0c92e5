"""
================================================================================
Product Details Page
================================================================================

Single product view: loaded check and add-to-cart with popup dismissal.

Adding to the cart keeps the user on the product page. The returned
AddToCartOutcome tells callers whether a confirmation popup was shown.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, TYPE_CHECKING

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from vitacare_e2e.ui_testing.framework.resilient_action import (
    ResilientAction,
    Strategy,
    press_escape,
)
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .storefront_page import StorefrontPage

if TYPE_CHECKING:
    from .cart_page import CartPage


class AddToCartOutcome(str, Enum):
    POPUP_DISMISSED = "popup_dismissed"
    NO_POPUP = "no_popup"


class ProductDetailsPage(StorefrontPage):
    """Page Object for a product details page."""

    URL_PATH = "/product"

    ADD_TO_CART_BUTTON = ElementRef.of(
        "add_to_cart_button",
        "[id*='add-to-cart-button']:not([onclick*='catalog'])",
    )
    POPUP_CONTENT = ElementRef.of("add_to_cart_popup", "#bar-notification .content")
    CLOSE_POPUP_BUTTON = ElementRef.of(
        "close_popup_button",
        "//span[@title='Close']",
        "#bar-notification .close",
    )
    PRODUCT_TITLE = ElementRef.of(
        "product_title",
        "h1, .product-name, .product-title, [data-testid='product-title']",
    )

    SHOPPING_CART_LINK = ElementRef.of(
        "shopping_cart_link",
        "//span[normalize-space()='Shopping cart']",
        "li#topcartlink a",
    )

    # URL fragments that identify a product page
    PRODUCT_URL_MARKERS = ("product", "item", "/p/")

    async def is_product_details_page_loaded(self, expected_name: Optional[str] = None) -> bool:
        """
        Loaded when any of these holds:
            - one of the first three words of `expected_name` is in the body text or title
            - the add-to-cart button is visible
            - the URL looks like a product URL
        """
        await self.settler.settle("product_page")
        try:
            if expected_name:
                keywords = expected_name.lower().split()[:3]
                body = (await self.page.locator("body").text_content() or "").lower()
                title = (await self.title()).lower()
                if any(k in body or k in title for k in keywords):
                    return True

            if await self.actions.is_visible(self.ADD_TO_CART_BUTTON, timeout=self.timeouts.probe):
                return True

            url = self.page.url.lower()
            return any(marker in url for marker in self.PRODUCT_URL_MARKERS)
        except PlaywrightError as e:
            logger.warning(f"Product page check failed: {e}")
            return False

    async def get_product_title(self) -> str:
        return (await self.actions.read(self.PRODUCT_TITLE)).strip()

    async def is_add_to_cart_button_visible(self) -> bool:
        return await self.is_displayed(self.ADD_TO_CART_BUTTON)

    async def is_popup_visible(self) -> bool:
        return await self.actions.is_visible(self.POPUP_CONTENT, timeout=self.timeouts.popup)

    async def wait_for_popup_to_appear(self) -> None:
        await self.actions.wait_visible(self.POPUP_CONTENT, timeout=self.timeouts.element)

    async def close_popup(self) -> None:
        """Close the add-to-cart confirmation, pressing Escape if the close icon fails."""
        async def click_close():
            return await self.actions.click(self.CLOSE_POPUP_BUTTON, timeout=self.timeouts.probe)

        await ResilientAction("close add-to-cart popup").perform(
            primary=Strategy("close_icon", click_close),
            fallbacks=[press_escape(self.page)],
        )

    @allure.step("Add product to cart")
    async def add_to_cart(self) -> AddToCartOutcome:
        """
        Click add-to-cart and dismiss the confirmation popup if one appears.

        Raises:
            ElementNotInteractable: Add-to-cart button missing or disabled
            FallbacksExhausted: Popup shown but could not be dismissed
        """
        await self.actions.click(self.ADD_TO_CART_BUTTON, timeout=self.timeouts.click)

        if await self.is_popup_visible():
            await self.close_popup()
            outcome = AddToCartOutcome.POPUP_DISMISSED
        else:
            logger.info("No add-to-cart popup detected, continuing")
            outcome = AddToCartOutcome.NO_POPUP

        await self.settler.settle("add_to_cart")
        logger.info(f"Add to cart finished: {outcome.value}")
        return outcome

    @allure.step("Open shopping cart")
    async def open_shopping_cart(self) -> "CartPage":
        """Open the cart through the "Shopping cart" header link."""
        from .cart_page import CartPage

        await self.actions.click(self.SHOPPING_CART_LINK, timeout=self.timeouts.click)
        await self.settler.settle("cart_view")
        return self._next(CartPage)


__all__ = [
    "AddToCartOutcome",
    "ProductDetailsPage",
]
