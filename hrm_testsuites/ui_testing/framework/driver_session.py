"""
================================================================================
Driver Session
================================================================================

One controllable browser instance, exclusively owned by one test.

A DriverSession owns the whole Playwright stack (driver, browser, context,
page). It is started once, navigated with `open()`, and released with
`close()`, which is idempotent.

Usage:
    async with DriverSession(settings, owner="test_login") as session:
        await session.open(settings.login_url)
        print(session.current_url)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from hrm_testsuites.report_tools.allure_utils import attach_png

from .errors import LifecycleError, NavigationError, ResourceLeakError
from .settings import UiSettings


class SessionRegistry:
    """
    Tracks open driver sessions per owning test.

    A test may hold at most one open session; a session still registered after
    its test finished is a leak.
    """

    def __init__(self) -> None:
        self._open: List["DriverSession"] = []

    def register(self, session: "DriverSession") -> None:
        if session in self._open:
            return
        if session.owner:
            for other in self._open:
                if other.owner == session.owner:
                    raise LifecycleError(
                        f"Test {session.owner!r} already owns an open driver session"
                    )
        self._open.append(session)

    def unregister(self, session: "DriverSession") -> None:
        if session in self._open:
            self._open.remove(session)

    def open_sessions(self, owner: Optional[str] = None) -> List["DriverSession"]:
        if owner is None:
            return list(self._open)
        return [s for s in self._open if s.owner == owner]

    def assert_no_leaks(self, owner: Optional[str] = None) -> None:
        """Raise ResourceLeakError if any (owner's) session is still open."""
        leaked = self.open_sessions(owner)
        if leaked:
            owners = ", ".join(s.owner or "<anonymous>" for s in leaked)
            raise ResourceLeakError(f"{len(leaked)} driver session(s) left open: {owners}")


SESSION_REGISTRY = SessionRegistry()


class DriverSession:
    """
    Handle to one browser instance.

    Attributes:
        settings: Resolved UI settings
        owner: Identifier of the owning test (pytest node id)
        close_count: Number of times resources were actually released (0 or 1)
    """

    # Default browser launch arguments (chromium only)
    CHROMIUM_ARGS: List[str] = [
        "--ignore-certificate-errors",
    ]

    def __init__(
        self,
        settings: UiSettings,
        owner: str = "",
        registry: Optional[SessionRegistry] = None,
    ):
        self.settings = settings
        self.owner = owner
        self._registry = registry if registry is not None else SESSION_REGISTRY

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._started = False
        self._closed = False
        self.close_count = 0

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("open" if self._started else "new")
        return f"<DriverSession owner={self.owner!r} browser={self.settings.browser} {state}>"

    async def __aenter__(self) -> "DriverSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _uses_window_size(self) -> bool:
        # A maximized window only exists for headed chromium.
        return (
            self.settings.maximize
            and not self.settings.headless
            and self.settings.browser == "chromium"
        )

    def _launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "headless": self.settings.headless,
            "slow_mo": self.settings.slow_mo,
        }
        if self.settings.browser == "chromium":
            args = list(self.CHROMIUM_ARGS)
            if self.settings.maximize:
                args.append("--start-maximized")
            options["args"] = args
        return options

    def _context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"ignore_https_errors": True}
        if self._uses_window_size():
            options["no_viewport"] = True
        else:
            options["viewport"] = self.settings.viewport
        return options

    async def start(self) -> "DriverSession":
        """
        Launch the browser and open a maximized page.

        Raises:
            NavigationError: the browser could not be started
            LifecycleError: the session was already closed
        """
        if self._closed:
            raise LifecycleError("Cannot restart a closed driver session")
        if self._started:
            return self

        self._registry.register(self)
        try:
            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self.settings.browser)
            self._browser = await launcher.launch(**self._launch_options())
            self._context = await self._browser.new_context(**self._context_options())
            self._context.set_default_timeout(self.settings.element_timeout * 1000)
            self._context.set_default_navigation_timeout(self.settings.navigation_timeout * 1000)
            self._page = await self._context.new_page()
        except PlaywrightError as e:
            await self._release()
            self._registry.unregister(self)
            raise NavigationError(f"Browser session could not be created: {e}") from e
        except BaseException:
            await self._release()
            self._registry.unregister(self)
            raise

        self._started = True
        logger.debug(
            f"Driver session started: {self.settings.browser} "
            f"(headless={self.settings.headless}, owner={self.owner or '-'})"
        )
        return self

    async def open(self, target_url: str) -> None:
        """
        Navigate to `target_url`. Single attempt, no retries.

        Raises:
            NavigationError: target unreachable or answered with an HTTP error
        """
        page = self.page
        with allure.step(f"Open {target_url}"):
            try:
                response = await page.goto(
                    target_url,
                    wait_until="domcontentloaded",
                    timeout=self.settings.navigation_timeout * 1000,
                )
            except PlaywrightError as e:
                raise NavigationError(f"Could not reach {target_url}: {e}", url=target_url) from e

            if response is not None and response.status >= 400:
                raise NavigationError(
                    f"{target_url} answered with HTTP {response.status}",
                    url=target_url,
                )
        logger.info(f"Navigated to: {target_url}")

    async def close(self) -> None:
        """Release every browser resource. Safe to call more than once."""
        if self._closed:
            logger.debug(f"Driver session already closed (owner={self.owner or '-'})")
            return
        self._closed = True
        try:
            await self._release()
        finally:
            self._registry.unregister(self)
            self.close_count += 1
        logger.debug(f"Driver session closed (owner={self.owner or '-'})")

    async def _release(self) -> None:
        for name in ("_page", "_context", "_browser"):
            resource = getattr(self, name)
            if resource is None:
                continue
            try:
                await resource.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close {name.lstrip('_')}: {e}")
            setattr(self, name, None)

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Failed to stop Playwright: {e}")
            self._playwright = None

    # =========================================================================
    # Observable state
    # =========================================================================

    @property
    def page(self) -> Page:
        """The live Playwright page. Raises LifecycleError when not running."""
        if self._closed:
            raise LifecycleError("Driver session is closed")
        if self._page is None:
            raise LifecycleError("Driver session not started. Call start() first.")
        return self._page

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def current_url(self) -> str:
        """Current page URL, or an empty string when no page is open."""
        if self._page is None or self._closed:
            return ""
        return self._page.url

    @property
    def viewport(self) -> Optional[Dict[str, int]]:
        """Viewport size; None when the page follows the (maximized) window."""
        if self._page is None or self._closed:
            return None
        return self._page.viewport_size

    async def content(self) -> str:
        """Rendered HTML of the current page."""
        return await self.page.content()

    async def screenshot(self, name: str, full_page: bool = True, attach: bool = True) -> Path:
        """
        Save a PNG screenshot and optionally attach it to Allure.

        Returns:
            Path to the saved screenshot
        """
        directory = self.settings.screenshot_dir
        directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in name)
        filepath = directory / f"{safe_name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach:
            attach_png(filepath, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath


__all__ = [
    "DriverSession",
    "SessionRegistry",
    "SESSION_REGISTRY",
]
