"""
================================================================================
Page Objects
================================================================================

One class per storefront screen. Each transition returns the page object of
the screen it ends on.

Author: Automation Team
License: MIT
================================================================================
"""

from .storefront_page import StorefrontPage
from .home_page import HomePage
from .login_page import LoginPage
from .customer_profile_page import CustomerProfilePage
from .product_details_page import AddToCartOutcome, ProductDetailsPage
from .search_results_page import SearchResultsPage
from .order_completed_page import OrderCompletedPage
from .checkout_page import CheckoutPage
from .cart_page import CartPage

__all__ = [
    "AddToCartOutcome",
    "CartPage",
    "CheckoutPage",
    "CustomerProfilePage",
    "HomePage",
    "LoginPage",
    "OrderCompletedPage",
    "ProductDetailsPage",
    "SearchResultsPage",
    "StorefrontPage",
]
