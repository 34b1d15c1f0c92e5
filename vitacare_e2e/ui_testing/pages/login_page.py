"""
================================================================================
Login Page
================================================================================

OTP login popup: phone number, send code, enter code, verify.

Transitions:
    AuthPrompt --send_otp--> OtpSent
    OtpSent --verify_otp--> HomePage (authenticated)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger

from vitacare_e2e.ui_testing.framework.page_base import BasePage
from vitacare_e2e.ui_testing.framework.smart_locator import ElementRef

if TYPE_CHECKING:
    from .home_page import HomePage


class LoginPage(BasePage):
    """Page Object for the OTP login popup."""

    URL_PATH = "/login"

    PHONE_INPUT = ElementRef.of("phone_input", "#otp_login_Phone")
    SEND_OTP_BUTTON = ElementRef.of("send_otp_button", "#btnOtpSendPopup")
    OTP_INPUT = ElementRef.of("otp_input", "#otp_login_Otp")
    VERIFY_OTP_BUTTON = ElementRef.of("verify_otp_button", "#btnVerifyOtpPopup")

    async def is_login_page_loaded(self) -> bool:
        return await self.is_displayed(self.PHONE_INPUT)

    async def enter_phone_number(self, phone: str) -> "LoginPage":
        await self.actions.fill(self.PHONE_INPUT, phone, timeout=self.timeouts.element)
        return self

    @allure.step("Send OTP")
    async def send_otp(self) -> "LoginPage":
        """Request the code and wait for the OTP field to appear."""
        await self.actions.click(self.SEND_OTP_BUTTON, timeout=self.timeouts.click)
        await self.actions.wait_visible(self.OTP_INPUT, timeout=self.timeouts.element)
        logger.info("OTP requested")
        return self

    async def is_otp_field_visible(self) -> bool:
        return await self.is_displayed(self.OTP_INPUT)

    async def enter_otp(self, otp: str) -> "LoginPage":
        await self.actions.fill(self.OTP_INPUT, otp, timeout=self.timeouts.element)
        return self

    @allure.step("Verify OTP")
    async def verify_otp(self) -> "HomePage":
        from .home_page import HomePage

        await self.actions.click(self.VERIFY_OTP_BUTTON, timeout=self.timeouts.click)
        await self.wait_for_page_load()
        logger.info("OTP submitted")
        return self._next(HomePage)

    async def get_phone_input_value(self) -> str:
        return await self.actions.read_value(self.PHONE_INPUT)

    async def get_otp_input_value(self) -> str:
        return await self.actions.read_value(self.OTP_INPUT)


__all__ = [
    "LoginPage",
]
