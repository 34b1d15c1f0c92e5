"""
================================================================================
Catalog Module
================================================================================

Search, open and add products to the cart.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Sequence

import allure
from loguru import logger

from vitacare_e2e.ui_testing.pages import AddToCartOutcome, ProductDetailsPage, StorefrontPage

from .workflow_context import FlowState, WorkflowContext


class CatalogModule:

    @allure.step("Search and open product: {name}")
    async def search_and_open_product(self, ctx: WorkflowContext, name: str) -> WorkflowContext:
        """
        Raises:
            ProductNotFound: No search result matches `name`
        """
        storefront = ctx.page_as(StorefrontPage)
        results = await storefront.search_product(name)
        ctx = ctx.advance(FlowState.SEARCH_RESULTS, results)
        product = await results.click_on_best_matching_product(name)
        return ctx.advance(FlowState.ITEM_OPEN, product)

    @allure.step("Add product to cart: {name}")
    async def add_product_to_cart(self, ctx: WorkflowContext, name: str) -> WorkflowContext:
        ctx = await self.search_and_open_product(ctx, name)
        product = ctx.page_as(ProductDetailsPage)

        outcome = await product.add_to_cart()
        if outcome is AddToCartOutcome.NO_POPUP:
            logger.warning(f"'{name}': add to cart showed no confirmation popup")
        allure.attach(
            outcome.value,
            name=f"Add to cart: {name}",
            attachment_type=allure.attachment_type.TEXT,
        )
        return ctx

    async def add_multiple_products(
        self,
        ctx: WorkflowContext,
        names: Sequence[str],
    ) -> WorkflowContext:
        """Add each product in order; the first failure propagates and stops the run."""
        for name in names:
            ctx = await self.add_product_to_cart(ctx, name)
        logger.info(f"Added {len(names)} product(s) to cart")
        return ctx


__all__ = [
    "CatalogModule",
]
