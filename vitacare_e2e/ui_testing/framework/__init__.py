"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based page-object framework for the storefront suite.

Components:
    - smart_locator: Ordered locator strategies per logical element
    - element_actions: Bounded-timeout click/fill/read/visibility operations
    - resilient_action: Primary-then-fallbacks execution and dismissal probes
    - candidate_matcher: Best-match resolution of search results
    - wait_helpers: Minimum settle delays and bounded condition polling
    - page_base: Base page object
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    ElementNotInteractable,
    FallbacksExhausted,
    NavigationMismatch,
    OptionNotFound,
    ProductNotFound,
    ProfileMismatch,
    UIFlowError,
)
from .smart_locator import ElementRef, SmartLocator
from .element_actions import ElementInteractor, InteractionResult
from .resilient_action import ResilientAction, Strategy
from .candidate_matcher import CandidateMatcher, best_match
from .wait_helpers import Settler, SettleConfig
from .page_base import BasePage
from .browser_manager import BrowserManager

__all__ = [
    "BasePage",
    "BrowserManager",
    "CandidateMatcher",
    "ElementInteractor",
    "ElementNotInteractable",
    "ElementRef",
    "FallbacksExhausted",
    "InteractionResult",
    "NavigationMismatch",
    "OptionNotFound",
    "ProductNotFound",
    "ProfileMismatch",
    "ResilientAction",
    "SettleConfig",
    "Settler",
    "SmartLocator",
    "Strategy",
    "UIFlowError",
    "best_match",
]
