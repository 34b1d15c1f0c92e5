"""
================================================================================
Profile Module
================================================================================

Update and verify the customer info form.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Dict, Tuple

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.errors import ProfileMismatch
from vitacare_e2e.ui_testing.framework.fixture_data import ProfileData
from vitacare_e2e.ui_testing.pages import CustomerProfilePage, StorefrontPage

from .workflow_context import FlowState, WorkflowContext


class ProfileModule:

    @allure.step("Update profile")
    async def update_profile(self, ctx: WorkflowContext, data: ProfileData) -> WorkflowContext:
        storefront = ctx.page_as(StorefrontPage)
        profile = await storefront.open_customer_info()
        await profile.update_profile_info(data)
        return ctx.advance(FlowState.PROFILE_OPEN, profile)

    @allure.step("Verify profile")
    async def verify_profile(self, ctx: WorkflowContext, data: ProfileData) -> WorkflowContext:
        """
        Compare the form's values with `data`.

        Raises:
            ProfileMismatch: Naming every field that differs
        """
        profile = ctx.page_as(CustomerProfilePage)
        actual = (await profile.read_profile()).editable_fields()

        mismatches: Dict[str, Tuple[str, str]] = {
            field: (expected, actual[field])
            for field, expected in data.editable_fields().items()
            if actual[field] != expected
        }
        if mismatches:
            raise ProfileMismatch(mismatches)

        logger.info("Profile verified")
        return ctx


__all__ = [
    "ProfileModule",
]
