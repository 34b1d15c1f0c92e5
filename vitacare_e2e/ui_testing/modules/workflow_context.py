"""
================================================================================
Workflow Context
================================================================================

Immutable (state, page) pair threaded through the workflow modules. Each
module operation takes a context and returns the next one.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Tuple, Type, TypeVar, Union

from vitacare_e2e.ui_testing.framework.errors import NavigationMismatch
from vitacare_e2e.ui_testing.pages import (
    CartPage,
    CheckoutPage,
    CustomerProfilePage,
    HomePage,
    LoginPage,
    OrderCompletedPage,
    ProductDetailsPage,
    SearchResultsPage,
)


class FlowState(str, Enum):
    ENTRY = "entry"
    LANGUAGE_SELECTED = "language_selected"
    LOCATION_SELECTED = "location_selected"
    AUTH_PROMPT = "auth_prompt"
    OTP_SENT = "otp_sent"
    AUTHENTICATED = "authenticated"
    PROFILE_OPEN = "profile_open"
    SEARCH_RESULTS = "search_results"
    ITEM_OPEN = "item_open"
    CART_OPEN = "cart_open"
    CHECKOUT = "checkout"
    ORDER_CONFIRMED = "order_confirmed"


PageState = Union[
    HomePage,
    LoginPage,
    CustomerProfilePage,
    SearchResultsPage,
    ProductDetailsPage,
    CartPage,
    CheckoutPage,
    OrderCompletedPage,
]

# Page object class each state is observed on
STATE_PAGES: Dict[FlowState, Tuple[type, ...]] = {
    FlowState.ENTRY: (HomePage,),
    FlowState.LANGUAGE_SELECTED: (HomePage,),
    FlowState.LOCATION_SELECTED: (HomePage,),
    FlowState.AUTH_PROMPT: (LoginPage,),
    FlowState.OTP_SENT: (LoginPage,),
    FlowState.AUTHENTICATED: (HomePage,),
    FlowState.PROFILE_OPEN: (CustomerProfilePage,),
    FlowState.SEARCH_RESULTS: (SearchResultsPage,),
    FlowState.ITEM_OPEN: (ProductDetailsPage,),
    FlowState.CART_OPEN: (CartPage,),
    FlowState.CHECKOUT: (CheckoutPage,),
    FlowState.ORDER_CONFIRMED: (OrderCompletedPage,),
}

P = TypeVar("P")


@dataclass(frozen=True)
class WorkflowContext:
    """
    Current journey state and the page object it is observed on.

    Usage:
        ctx = WorkflowContext.start(HomePage(page))
        ctx = ctx.advance(FlowState.LANGUAGE_SELECTED, ctx.page)
        home = ctx.page_as(HomePage)
    """

    state: FlowState
    page: PageState

    def __post_init__(self) -> None:
        expected = STATE_PAGES[self.state]
        if not isinstance(self.page, expected):
            raise TypeError(
                f"State {self.state.value} requires {' or '.join(c.__name__ for c in expected)}, "
                f"got {type(self.page).__name__}"
            )

    @classmethod
    def start(cls, home: HomePage) -> "WorkflowContext":
        return cls(FlowState.ENTRY, home)

    def advance(self, state: FlowState, page: PageState) -> "WorkflowContext":
        return replace(self, state=state, page=page)

    def page_as(self, page_cls: Type[P]) -> P:
        """
        Return the current page as `page_cls`.

        Raises:
            NavigationMismatch: The journey is on a different screen
        """
        if not isinstance(self.page, page_cls):
            raise NavigationMismatch(
                f"{page_cls.__name__} (journey is at {self.state.value})",
                self.page.get_current_url(),
            )
        return self.page


__all__ = [
    "FlowState",
    "PageState",
    "STATE_PAGES",
    "WorkflowContext",
]
