"""
================================================================================
Login Test Lifecycle
================================================================================

Per-test context object and the setup/teardown that surrounds it.

State machine (one per test):

    INIT -> SESSION_READY -> PAGE_READY -> ACTION_PERFORMED -> ASSERTED
    (any state) -> TORN_DOWN

`login_lifecycle()` creates the driver session, opens the login screen,
binds the LoginPage and yields a LoginTestContext. The session is closed
when the block exits, whatever happened inside it.

================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Dict, FrozenSet, List, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from hrm_testsuites.report_tools.allure_utils import attach_html, attach_json, attach_text
from hrm_testsuites.ui_testing.framework.driver_session import (
    SESSION_REGISTRY,
    DriverSession,
    SessionRegistry,
)
from hrm_testsuites.ui_testing.framework.errors import (
    AssertionFailure,
    LifecycleError,
    WaitTimeoutError,
)
from hrm_testsuites.ui_testing.framework.settings import Credentials, UiSettings
from hrm_testsuites.ui_testing.framework.waits import wait_until
from hrm_testsuites.ui_testing.pages.login_page import LoginPage


class LifecycleState(str, Enum):
    INIT = "INIT"
    SESSION_READY = "SESSION_READY"
    PAGE_READY = "PAGE_READY"
    ACTION_PERFORMED = "ACTION_PERFORMED"
    ASSERTED = "ASSERTED"
    TORN_DOWN = "TORN_DOWN"


# Forward transitions; TORN_DOWN is reachable from every non-terminal state.
_TRANSITIONS: Dict[LifecycleState, FrozenSet[LifecycleState]] = {
    LifecycleState.INIT: frozenset({LifecycleState.SESSION_READY}),
    LifecycleState.SESSION_READY: frozenset({LifecycleState.PAGE_READY}),
    LifecycleState.PAGE_READY: frozenset({LifecycleState.ACTION_PERFORMED}),
    LifecycleState.ACTION_PERFORMED: frozenset({LifecycleState.ASSERTED}),
    LifecycleState.ASSERTED: frozenset(),
    LifecycleState.TORN_DOWN: frozenset(),
}


@dataclass
class LoginTestContext:
    """
    Everything one login test owns: its settings, session, page and state.

    Created by `login_lifecycle()`; never shared between tests.
    """

    settings: UiSettings
    owner: str = ""
    session: Optional[DriverSession] = None
    page: Optional[LoginPage] = None
    state: LifecycleState = LifecycleState.INIT
    history: List[LifecycleState] = field(default_factory=lambda: [LifecycleState.INIT])

    def advance(self, new_state: LifecycleState) -> None:
        """Move to `new_state`, rejecting illegal transitions."""
        allowed = _TRANSITIONS[self.state]
        if self.state is LifecycleState.TORN_DOWN or (
            new_state is not LifecycleState.TORN_DOWN and new_state not in allowed
        ):
            raise LifecycleError(f"Illegal lifecycle transition {self.state.value} -> {new_state.value}")
        logger.debug(f"[{self.owner or 'test'}] {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def _require(self, state: LifecycleState) -> None:
        if self.state is not state:
            raise LifecycleError(f"Expected state {state.value}, current state is {self.state.value}")

    # =========================================================================
    # Action
    # =========================================================================

    async def login(self, credentials: Credentials) -> None:
        """Submit the login form once with the given credential pair."""
        self._require(LifecycleState.PAGE_READY)
        await self.page.login(credentials.username, credentials.password)
        self.advance(LifecycleState.ACTION_PERFORMED)

    # =========================================================================
    # Assertions (one per test)
    # =========================================================================

    async def assert_url_contains(self, fragment: str, timeout: Optional[float] = None) -> None:
        """
        Wait for the session URL to contain `fragment`.

        Raises:
            AssertionFailure: the URL did not contain `fragment` within the timeout
        """
        self._require(LifecycleState.ACTION_PERFORMED)
        with allure.step(f"Assert URL contains '{fragment}'"):
            try:
                await wait_until(
                    lambda: fragment in self.session.current_url,
                    config=self.settings.wait_config("assertion").with_timeout(timeout),
                    description=f"URL containing {fragment!r}",
                )
            except WaitTimeoutError as e:
                observed = self.session.current_url
                raise AssertionFailure(
                    f"Expected URL to contain {fragment!r}, got {observed!r}",
                    expected=fragment,
                    observed=observed,
                ) from e
        self.advance(LifecycleState.ASSERTED)

    async def assert_content_contains(self, fragment: str, timeout: Optional[float] = None) -> None:
        """
        Wait for the rendered page content to contain `fragment`.

        Raises:
            AssertionFailure: the content did not contain `fragment` within the timeout
        """
        self._require(LifecycleState.ACTION_PERFORMED)

        async def _contains() -> bool:
            return fragment in await self.session.content()

        with allure.step(f"Assert page content contains '{fragment}'"):
            try:
                await wait_until(
                    _contains,
                    config=self.settings.wait_config("assertion").with_timeout(timeout),
                    description=f"page content containing {fragment!r}",
                )
            except WaitTimeoutError as e:
                raise AssertionFailure(
                    f"Expected page content to contain {fragment!r} "
                    f"(url: {self.session.current_url!r})",
                    expected=fragment,
                    observed=self.session.current_url,
                ) from e
        self.advance(LifecycleState.ASSERTED)

    # =========================================================================
    # Failure capture
    # =========================================================================

    async def capture_failure(self, name: str) -> None:
        """Attach screenshot, URL and HTML of the current page to the report."""
        session = self.session
        if session is None or session.is_closed or not session.is_started:
            return
        with allure.step("Capture failure details"):
            attach_text(session.current_url, name="Current URL")
            attach_json(
                {"owner": self.owner, "history": [s.value for s in self.history]},
                name="Lifecycle",
            )
            try:
                await session.screenshot(f"failure_{name}")
                attach_html(await session.content(), name="Page HTML")
            except PlaywrightError as e:
                logger.warning(f"Failed to capture failure details: {e}")


@asynccontextmanager
async def login_lifecycle(
    settings: UiSettings,
    owner: str = "",
    registry: Optional[SessionRegistry] = None,
) -> AsyncIterator[LoginTestContext]:
    """
    Set up a login test and guarantee teardown.

    INIT -> SESSION_READY: start a maximized session, open the login screen.
    SESSION_READY -> PAGE_READY: bind a LoginPage to the session.
    Any state -> TORN_DOWN: close the session on every exit path.
    """
    registry = registry if registry is not None else SESSION_REGISTRY
    ctx = LoginTestContext(settings=settings, owner=owner)
    ctx.session = DriverSession(settings, owner=owner, registry=registry)
    try:
        with allure.step("Start browser session"):
            await ctx.session.start()
            await ctx.session.open(settings.login_url)
        ctx.advance(LifecycleState.SESSION_READY)

        ctx.page = LoginPage(ctx.session)
        ctx.advance(LifecycleState.PAGE_READY)

        yield ctx
    except Exception:
        await ctx.capture_failure(owner.rsplit("::", 1)[-1] or "test")
        raise
    finally:
        with allure.step("Close browser session"):
            await ctx.session.close()
        ctx.advance(LifecycleState.TORN_DOWN)


__all__ = [
    "LifecycleState",
    "LoginTestContext",
    "login_lifecycle",
]
