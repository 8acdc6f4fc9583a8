"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login screen of the HRM application.

Design:
  - Bound to one DriverSession; holds nothing else but its element lookup
  - Element lookup is composed (SmartLocator), not inherited
  - Every interaction waits for its element with the configured timeout

================================================================================
"""

from __future__ import annotations

from typing import Dict, List, Optional

import allure
from loguru import logger

from hrm_testsuites.ui_testing.framework.capabilities import ElementLookup
from hrm_testsuites.ui_testing.framework.driver_session import DriverSession
from hrm_testsuites.ui_testing.framework.smart_locator import SmartLocator


class LoginPage:
    """Login page object (async)."""

    PAGE_TITLE = "Login"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "username_input": {
            "primary": "input[name='username']",
            "fallback_1": "input[placeholder='Username']",
            "fallback_2": "form input[type='text']",
        },
        "password_input": {
            "primary": "input[name='password']",
            "fallback_1": "input[placeholder='Password']",
            "fallback_2": "form input[type='password']",
        },
        "submit_button": {
            "primary": "button[type='submit']",
            "fallback_1": "button:has-text('Login')",
            "fallback_2": ".orangehrm-login-button",
        },
        "error_alert": {
            "primary": ".oxd-alert-content-text",
            "fallback_1": "[role='alert']",
        },
        "required_message": {
            "primary": ".oxd-input-field-error-message",
            "fallback_1": ".oxd-input-group__message",
        },
    }

    def __init__(self, session: DriverSession, elements: Optional[ElementLookup] = None):
        self.session = session
        self.elements: ElementLookup = elements or SmartLocator(
            session,
            self.LOCATORS,
            wait_config=session.settings.wait_config("element"),
        )

    @property
    def url(self) -> str:
        return self.session.settings.login_url

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login screen and wait for the form."""
        await self.session.open(self.url)
        await self.elements.locate("username_input")
        return self

    async def is_form_displayed(self, timeout: float = 2.0) -> bool:
        """True when username, password and submit controls are all visible."""
        for name in ("username_input", "password_input", "submit_button"):
            if not await self.elements.is_visible(name, timeout=timeout):
                return False
        return True

    async def login(self, username: str, password: str) -> None:
        """
        Fill username, fill password, then submit, in that order.

        The resulting navigation or error message is observed by the caller.
        """
        with allure.step(f"Log in as '{username}'"):
            await self.elements.fill("username_input", username)
            await self.elements.fill("password_input", password)
            await self.elements.click("submit_button")
        logger.info(f"Submitted login form for user '{username}'")

    async def error_message(self, timeout: float = 2.0) -> str:
        """Text of the login alert, or an empty string if none is shown."""
        if not await self.elements.is_visible("error_alert", timeout=timeout):
            return ""
        return await self.elements.get_text("error_alert")

    async def required_field_errors(self, timeout: float = 2.0) -> List[str]:
        """Inline required-field messages currently shown under the inputs."""
        if not await self.elements.is_visible("required_message", timeout=timeout):
            return []
        return await self.elements.get_all_texts("required_message")
