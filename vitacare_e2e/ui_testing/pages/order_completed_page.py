"""
================================================================================
Order Completed Page
================================================================================

Terminal screen of the purchase journey.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from vitacare_e2e.ui_testing.framework.page_base import BasePage


class OrderCompletedPage(BasePage):
    URL_PATH = "/checkout/completed"

    COMPLETED_MARKERS = ".order-completed, .checkout-completed-page"

    async def is_order_confirmed(self) -> bool:
        if "completed" in self.page.url.lower():
            return True
        return await self.count(self.COMPLETED_MARKERS) > 0


__all__ = [
    "OrderCompletedPage",
]
