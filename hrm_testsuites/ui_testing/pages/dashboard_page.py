"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Landing screen after a successful login. Used to confirm the post-login
state and to log out again.

================================================================================
"""

from __future__ import annotations

from typing import Dict, Optional

import allure

from hrm_testsuites.ui_testing.framework.capabilities import ElementLookup
from hrm_testsuites.ui_testing.framework.driver_session import DriverSession
from hrm_testsuites.ui_testing.framework.smart_locator import SmartLocator
from hrm_testsuites.ui_testing.framework.waits import wait_until


class DashboardPage:
    """Dashboard page object (async)."""

    PAGE_TITLE = "Dashboard"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "header_title": {
            "primary": ".oxd-topbar-header-breadcrumb h6",
            "fallback_1": "header h6",
        },
        "user_menu": {
            "primary": ".oxd-userdropdown-tab",
            "fallback_1": ".oxd-userdropdown-name",
        },
        "logout_link": {
            "primary": "a[href*='/auth/logout']",
            "fallback_1": "a:has-text('Logout')",
        },
    }

    def __init__(self, session: DriverSession, elements: Optional[ElementLookup] = None):
        self.session = session
        self.elements: ElementLookup = elements or SmartLocator(
            session,
            self.LOCATORS,
            wait_config=session.settings.wait_config("element"),
        )

    async def header_text(self) -> str:
        return await self.elements.get_text("header_title")

    @allure.step("Verify dashboard loaded")
    async def wait_until_loaded(self) -> None:
        """Wait until the top bar shows the dashboard title."""
        await wait_until(
            self.header_text,
            config=self.session.settings.wait_config("navigation"),
            description="dashboard header",
        )

    @allure.step("Logout")
    async def logout(self) -> None:
        """Open the user menu, choose Logout and wait for the login screen."""
        await self.elements.click("user_menu")
        await self.elements.click("logout_link")
        login_path = self.session.settings.login_path
        await wait_until(
            lambda: login_path in self.session.current_url,
            config=self.session.settings.wait_config("navigation"),
            description=f"URL containing {login_path}",
        )
