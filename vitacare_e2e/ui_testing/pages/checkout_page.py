"""
================================================================================
Checkout Page
================================================================================

One-page checkout: discount and gift-card codes, pickup shipping option and
order confirmation.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.page_base import BasePage
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .order_completed_page import OrderCompletedPage


class CheckoutPage(BasePage):
    """Page Object for /onepagecheckout."""

    URL_PATH = "/onepagecheckout"

    DISCOUNT_INPUT = ElementRef.of("discount_code_input", "#discountcouponcode")
    APPLY_DISCOUNT_BUTTON = ElementRef.of("apply_discount_button", "#applydiscountcouponcode")
    GIFT_CARD_INPUT = ElementRef.of("gift_card_input", "#giftcardcouponcode")
    APPLY_GIFT_CARD_BUTTON = ElementRef.of("apply_gift_card_button", "#applygiftcardcouponcode")
    PICKUP_OPTION = ElementRef.of(
        "pickup_option",
        "//label[normalize-space()='Pickup']",
        "label[for*='PickupInStore']",
    )
    CONFIRM_ORDER_BUTTON = ElementRef.of("confirm_order_button", "#confirm-order-button")

    async def _apply_code(self, field: ElementRef, button: ElementRef, code: str) -> None:
        await self.actions.fill(field, code, timeout=self.timeouts.click)
        await self.actions.click(button, timeout=self.timeouts.click)
        await self.settler.settle("coupon")

    @allure.step("Apply discount code: {code}")
    async def apply_discount(self, code: str) -> "CheckoutPage":
        await self._apply_code(self.DISCOUNT_INPUT, self.APPLY_DISCOUNT_BUTTON, code)
        logger.info(f"Discount code applied: {code}")
        return self

    @allure.step("Apply gift card: {code}")
    async def apply_gift_card(self, code: str) -> "CheckoutPage":
        await self._apply_code(self.GIFT_CARD_INPUT, self.APPLY_GIFT_CARD_BUTTON, code)
        logger.info(f"Gift card applied: {code}")
        return self

    @allure.step("Select pickup")
    async def select_pickup(self) -> "CheckoutPage":
        await self.actions.click(self.PICKUP_OPTION, timeout=self.timeouts.click)
        await self.settler.settle("pickup")
        return self

    async def has_discount_field(self) -> bool:
        return await self.actions.is_visible(self.DISCOUNT_INPUT, timeout=self.timeouts.probe)

    async def has_gift_card_field(self) -> bool:
        return await self.actions.is_visible(self.GIFT_CARD_INPUT, timeout=self.timeouts.probe)

    @allure.step("Confirm order")
    async def confirm_order(self) -> OrderCompletedPage:
        await self.actions.click(self.CONFIRM_ORDER_BUTTON, timeout=self.timeouts.click)
        await self.settler.settle("confirm_order")
        logger.info("Order confirmation submitted")
        return self._next(OrderCompletedPage)


__all__ = [
    "CheckoutPage",
]
