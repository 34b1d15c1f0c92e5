"""
================================================================================
Checkout Module
================================================================================

Cart and checkout sequencing: quantities, coupon codes, pickup and order
confirmation.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

import allure
from loguru import logger

from vitacare_e2e.ui_testing.pages import CartPage, CheckoutPage, StorefrontPage

from .workflow_context import FlowState, WorkflowContext


@dataclass(frozen=True)
class QuantityAdjustOptions:
    minus_clicks_per_item: int = 3
    plus_clicks_per_item: int = 1


class CheckoutModule:

    @allure.step("Go to cart")
    async def go_to_cart(self, ctx: WorkflowContext) -> WorkflowContext:
        storefront = ctx.page_as(StorefrontPage)
        return ctx.advance(FlowState.CART_OPEN, await storefront.view_cart())

    async def decrease_item_quantity(
        self,
        ctx: WorkflowContext,
        item_id: str,
        clicks: int,
    ) -> WorkflowContext:
        cart = ctx.page_as(CartPage)
        return ctx.advance(FlowState.CART_OPEN, await cart.decrease_item_quantity(item_id, clicks))

    async def adjust_quantities(
        self,
        ctx: WorkflowContext,
        options: QuantityAdjustOptions = QuantityAdjustOptions(),
    ) -> WorkflowContext:
        cart = ctx.page_as(CartPage)
        await cart.adjust_quantities(options.minus_clicks_per_item, options.plus_clicks_per_item)
        return ctx

    @allure.step("Go to checkout")
    async def go_to_checkout_via_button(self, ctx: WorkflowContext) -> WorkflowContext:
        """
        Raises:
            NavigationMismatch: Checkout not reached
        """
        cart = ctx.page_as(CartPage)
        return ctx.advance(FlowState.CHECKOUT, await cart.proceed_to_checkout())

    async def apply_discount(
        self,
        ctx: WorkflowContext,
        code: str,
        required: bool = True,
    ) -> WorkflowContext:
        """
        Args:
            required: When False, a checkout without a discount field is
                skipped with a warning instead of failing

        Raises:
            ElementNotInteractable: Field or apply button missing while required
        """
        checkout = ctx.page_as(CheckoutPage)
        if not required and not await checkout.has_discount_field():
            logger.warning(f"No discount field on checkout; code {code} not applied")
            return ctx
        await checkout.apply_discount(code)
        return ctx

    async def apply_gift_card(
        self,
        ctx: WorkflowContext,
        code: str,
        required: bool = True,
    ) -> WorkflowContext:
        checkout = ctx.page_as(CheckoutPage)
        if not required and not await checkout.has_gift_card_field():
            logger.warning(f"No gift card field on checkout; code {code} not applied")
            return ctx
        await checkout.apply_gift_card(code)
        return ctx

    async def select_pickup(self, ctx: WorkflowContext) -> WorkflowContext:
        await ctx.page_as(CheckoutPage).select_pickup()
        return ctx

    @allure.step("Confirm order")
    async def confirm_order(self, ctx: WorkflowContext) -> WorkflowContext:
        checkout = ctx.page_as(CheckoutPage)
        return ctx.advance(FlowState.ORDER_CONFIRMED, await checkout.confirm_order())


__all__ = [
    "CheckoutModule",
    "QuantityAdjustOptions",
]
