"""
Workflow modules: multi-page sequences threaded through a WorkflowContext.
"""

from .workflow_context import FlowState, PageState, WorkflowContext
from .auth_module import AuthModule
from .profile_module import ProfileModule
from .catalog_module import CatalogModule
from .checkout_module import CheckoutModule, QuantityAdjustOptions

__all__ = [
    "AuthModule",
    "CatalogModule",
    "CheckoutModule",
    "FlowState",
    "PageState",
    "ProfileModule",
    "QuantityAdjustOptions",
    "WorkflowContext",
]
