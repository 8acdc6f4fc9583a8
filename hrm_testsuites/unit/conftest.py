"""
Fixtures for offline framework tests.

`fake_playwright` patches `async_playwright` in the driver session module so a
DriverSession drives an in-memory page instead of a real browser.
"""

import pytest

from hrm_testsuites.ui_testing.framework.driver_session import DriverSession, SessionRegistry
from hrm_testsuites.ui_testing.framework.settings import Credentials, UiSettings

from fakes import FakePage, FakePlaywright, FakePlaywrightStarter


DASHBOARD_URL = "https://hrm.example.test/web/index.php/dashboard/index"


@pytest.fixture
def fake_playwright(monkeypatch) -> FakePlaywright:
    playwright = FakePlaywright()
    monkeypatch.setattr(
        "hrm_testsuites.ui_testing.framework.driver_session.async_playwright",
        lambda: FakePlaywrightStarter(playwright),
    )
    return playwright


@pytest.fixture
def settings(tmp_path) -> UiSettings:
    return UiSettings(
        base_url="https://hrm.example.test",
        element_timeout=0.2,
        assertion_timeout=0.2,
        navigation_timeout=0.5,
        poll_interval=0.01,
        screenshot_dir=tmp_path / "screenshots",
        credentials={
            "valid": Credentials("Admin", "admin123"),
            "invalid": Credentials("invalidUser", "invalidPass"),
            "empty": Credentials("", ""),
        },
    )


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def login_form(fake_playwright: FakePlaywright) -> FakePage:
    """A fake login screen that behaves like the demo target."""
    page = fake_playwright.page
    page.visible.update({
        "input[name='username']",
        "input[name='password']",
        "button[type='submit']",
    })

    def submit(p: FakePage) -> None:
        username = p.values.get("input[name='username']", "")
        password = p.values.get("input[name='password']", "")
        if not username or not password:
            p.visible.add(".oxd-input-field-error-message")
            p.texts[".oxd-input-field-error-message"] = "Required"
            p.html = "<span class='oxd-input-field-error-message'>Required</span>"
        elif (username, password) == ("Admin", "admin123"):
            p.url = DASHBOARD_URL
            p.html = "<h6>Dashboard</h6>"
        else:
            p.visible.add(".oxd-alert-content-text")
            p.texts[".oxd-alert-content-text"] = "Invalid credentials"
            p.html = "<p class='oxd-alert-content-text'>Invalid credentials</p>"

    page.on_click["button[type='submit']"] = submit
    return page


@pytest.fixture
async def session(fake_playwright: FakePlaywright, settings: UiSettings, registry: SessionRegistry):
    """A started DriverSession on the fake page, closed after the test."""
    driver = DriverSession(settings, owner="unit", registry=registry)
    await driver.start()
    yield driver
    await driver.close()
