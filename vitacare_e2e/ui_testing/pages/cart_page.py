"""
================================================================================
Cart Page
================================================================================

Shopping cart: quantity adjustment and the route to checkout.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.errors import NavigationMismatch
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .checkout_page import CheckoutPage
from .storefront_page import StorefrontPage


class CartPage(StorefrontPage):
    """Page Object for /cart."""

    URL_PATH = "/cart"

    CART_MARKERS = ".cart, #shopping-cart-form, .page-shopping-cart, .cart-items"
    QTY_MINUS_BUTTONS = ".qty-btn.qty-minus"
    QTY_PLUS_BUTTONS = ".qty-btn.qty-plus"
    GO_TO_CHECKOUT_BUTTON = ElementRef.of(
        "go_to_checkout_button",
        "//button[normalize-space()='Go to cart']",
    )
    CHECKOUT_MARKERS = ".page-checkout, .checkout-page, #checkout"

    @staticmethod
    def decrease_button(item_id: str) -> ElementRef:
        return ElementRef.of(
            f"decrease_item_{item_id}",
            f"div[id='shoppingCartItem_{item_id}'] button[name='decrease']",
        )

    async def has_items(self) -> bool:
        return await self.count(self.CART_MARKERS) > 0

    @allure.step("Decrease quantity of item {item_id} by {clicks}")
    async def decrease_item_quantity(self, item_id: str, clicks: int = 1) -> "CartPage":
        button = self.decrease_button(item_id)
        await self.actions.wait_visible(button, timeout=self.timeouts.click)
        for _ in range(clicks):
            await self.actions.click(button, timeout=self.timeouts.click)
            await self.settler.settle("quantity_click")
        logger.info(f"Decreased item {item_id} quantity {clicks} time(s)")
        return self

    async def _click_each(self, selector: str, clicks_per_item: int) -> int:
        buttons = self.page.locator(selector)
        total = await buttons.count()
        for i in range(total):
            for _ in range(clicks_per_item):
                await buttons.nth(i).click(timeout=self.timeouts.click)
                await self.settler.settle("quantity_click")
        return total

    @allure.step("Adjust cart quantities")
    async def adjust_quantities(
        self,
        minus_clicks_per_item: int = 3,
        plus_clicks_per_item: int = 1,
    ) -> "CartPage":
        """Click every minus button, then every plus button, the given number of times."""
        minus_items = await self._click_each(self.QTY_MINUS_BUTTONS, minus_clicks_per_item)
        plus_items = await self._click_each(self.QTY_PLUS_BUTTONS, plus_clicks_per_item)
        logger.info(
            f"Adjusted quantities: -{minus_clicks_per_item} on {minus_items} item(s), "
            f"+{plus_clicks_per_item} on {plus_items} item(s)"
        )
        return self

    async def is_on_checkout(self) -> bool:
        url = self.page.url.lower()
        if "checkout" in url or "onepage" in url:
            return True
        return await self.count(self.CHECKOUT_MARKERS) > 0

    @allure.step("Proceed to checkout")
    async def proceed_to_checkout(self) -> CheckoutPage:
        """
        Raises:
            NavigationMismatch: Checkout page not reached after clicking the button
        """
        await self.actions.click(self.GO_TO_CHECKOUT_BUTTON, timeout=self.timeouts.click)
        if not await self.settler.settle("checkout_navigation", until=self.is_on_checkout):
            raise NavigationMismatch("checkout page", self.page.url)
        logger.info("Reached checkout")
        return self._next(CheckoutPage)


__all__ = [
    "CartPage",
]
