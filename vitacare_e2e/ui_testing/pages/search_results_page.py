"""
================================================================================
Search Results Page
================================================================================

Lists the product titles returned by a search and opens one of them,
either by exact title or by best token match against the search term.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.candidate_matcher import CandidateMatcher, normalize
from vitacare_e2e.ui_testing.framework.errors import ProductNotFound
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

from .product_details_page import ProductDetailsPage
from .storefront_page import StorefrontPage


class SearchResultsPage(StorefrontPage):
    """Page Object for /search results."""

    URL_PATH = "/search"

    PRODUCT_TITLES = ".product-title"
    FIRST_PRODUCT_TITLE = ElementRef.of("product_title", ".product-title")

    matcher = CandidateMatcher()

    async def _wait_for_results(self) -> None:
        await self.actions.wait_visible(self.FIRST_PRODUCT_TITLE, timeout=self.timeouts.element)

    async def get_all_product_titles(self) -> List[str]:
        """Non-empty, trimmed product titles in page order."""
        await self._wait_for_results()
        titles = self.page.locator(self.PRODUCT_TITLES)
        result = []
        for i in range(await titles.count()):
            text = (await titles.nth(i).text_content() or "").strip()
            if text:
                result.append(text)
        return result

    async def is_product_displayed(self, product_name: str) -> bool:
        wanted = normalize(product_name)
        return any(normalize(title) == wanted for title in await self.get_all_product_titles())

    @allure.step("Open product: {product_name}")
    async def click_on_product_title(self, product_name: str) -> ProductDetailsPage:
        """
        Click the result whose title equals `product_name` (case-insensitive).

        Raises:
            ProductNotFound: No result carries that title
        """
        await self._wait_for_results()
        titles = self.page.locator(self.PRODUCT_TITLES)
        wanted = normalize(product_name)

        for i in range(await titles.count()):
            title = titles.nth(i)
            if normalize(await title.text_content() or "") == wanted:
                await title.click(timeout=self.timeouts.click)
                logger.info(f"Opened product: {product_name}")
                return self._next(ProductDetailsPage)

        raise ProductNotFound(product_name)

    async def find_best_matching_product(self, search_term: str) -> Optional[str]:
        titles = await self.get_all_product_titles()
        logger.debug(f"Search results for '{search_term}': {titles}")
        return self.matcher.best_match(search_term, titles)

    @allure.step("Open best match for: {search_term}")
    async def click_on_best_matching_product(self, search_term: str) -> ProductDetailsPage:
        """
        Open the result scoring highest against `search_term`.

        Raises:
            ProductNotFound: No result shares a token with the term
        """
        best = await self.find_best_matching_product(search_term)
        if best is None:
            raise ProductNotFound(search_term)
        logger.info(f"Best match for '{search_term}': {best}")
        return await self.click_on_product_title(best)


__all__ = [
    "SearchResultsPage",
]
