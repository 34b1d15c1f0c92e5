"""
================================================================================
UI Flow Errors
================================================================================

Failure taxonomy raised by page objects and workflow modules.

    UIFlowError
      ├── ElementNotInteractable   element never became visible/enabled in time
      ├── FallbacksExhausted       every strategy of a ResilientAction failed
      ├── OptionNotFound           exact-label dropdown selection found nothing
      ├── ProductNotFound          best-match search resolution found nothing
      ├── NavigationMismatch       the expected screen was not reached
      └── ProfileMismatch          saved profile fields did not read back

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple


class UIFlowError(Exception):
    """Base class for every failure surfaced by the UI layer."""
    pass


class ElementNotInteractable(UIFlowError):
    """Raised when an element is not visible/enabled within its timeout."""

    def __init__(self, element_name: str, message: str = ""):
        self.element_name = element_name
        super().__init__(message or f"Element '{element_name}' is not interactable")


class FallbacksExhausted(UIFlowError):
    """Raised when the primary strategy and every fallback failed."""

    def __init__(self, action: str, last_strategy: str, attempts: int):
        self.action = action
        self.last_strategy = last_strategy
        self.attempts = attempts
        super().__init__(
            f"All {attempts} strategies failed for '{action}' "
            f"(last attempted: {last_strategy})"
        )


class OptionNotFound(UIFlowError):
    """Raised when a dropdown has no option whose label equals the requested one."""

    def __init__(self, label: str, available: Tuple[str, ...] = ()):
        self.label = label
        self.available = available
        super().__init__(f"Option not found in dropdown: {label}")


class ProductNotFound(UIFlowError):
    """Raised when no search result matches the requested product name."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No matching product found for search term: {query}")


class NavigationMismatch(UIFlowError):
    """Raised when a post-action check shows the expected screen was not reached."""

    def __init__(self, expected: str, current_url: Optional[str] = None):
        self.expected = expected
        self.current_url = current_url
        detail = f" (current URL: {current_url})" if current_url else ""
        super().__init__(f"Expected to reach {expected}{detail}")


class ProfileMismatch(UIFlowError):
    """Raised when profile fields read back differ from the submitted values."""

    def __init__(self, mismatches: Dict[str, Tuple[str, str]]):
        # field -> (expected, actual)
        self.mismatches = mismatches
        details = ", ".join(
            f"{field}: expected '{expected}', got '{actual}'"
            for field, (expected, actual) in mismatches.items()
        )
        super().__init__(f"Profile verification failed: {details}")

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self.mismatches)


__all__ = [
    "UIFlowError",
    "ElementNotInteractable",
    "FallbacksExhausted",
    "OptionNotFound",
    "ProductNotFound",
    "NavigationMismatch",
    "ProfileMismatch",
]
