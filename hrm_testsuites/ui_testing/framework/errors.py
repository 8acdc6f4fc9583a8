"""
================================================================================
Framework Errors
================================================================================

Exception hierarchy shared by the driver session, page objects and the
per-test lifecycle.

    AutomationError
      +-- NavigationError        target unreachable / session creation failed
      +-- WaitTimeoutError       poll-until-condition expired
      |     +-- ElementNotFoundError
      +-- AssertionFailure       observed state mismatch (also AssertionError)
      +-- ResourceLeakError      session still open after its test finished
      +-- LifecycleError         illegal lifecycle state transition
      +-- ConfigurationError     invalid configuration file or value

None of these are recovered locally. They surface as failed tests.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class AutomationError(Exception):
    """Base class for all framework errors."""
    pass


class NavigationError(AutomationError):
    """Raised when the target URL is unreachable or the browser cannot start."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class WaitTimeoutError(AutomationError):
    """
    Raised when a poll-until-condition wait runs out of time.

    Attributes:
        description: What was being waited for
        timeout: Timeout in seconds
        last_error: Last exception raised by the condition (if any)
        last_result: Last falsy value returned by the condition
    """

    def __init__(
        self,
        description: str,
        timeout: float,
        last_error: Optional[BaseException] = None,
        last_result: Any = None,
    ):
        message = f"Timed out after {timeout:.1f}s waiting for {description}"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)
        self.description = description
        self.timeout = timeout
        self.last_error = last_error
        self.last_result = last_result


class ElementNotFoundError(WaitTimeoutError):
    """Raised when no locator strategy for an element became visible in time."""
    pass


class AssertionFailure(AssertionError, AutomationError):
    """Observed session state did not contain the expected fragment."""

    def __init__(self, message: str, expected: str = "", observed: str = ""):
        super().__init__(message)
        self.expected = expected
        self.observed = observed


class ResourceLeakError(AutomationError):
    """A driver session outlived the test that owned it."""
    pass


class LifecycleError(AutomationError):
    """A test context was driven through an illegal state transition."""
    pass


class ConfigurationError(AutomationError):
    """Raised when configuration loading or access fails."""
    pass


__all__ = [
    "AutomationError",
    "NavigationError",
    "WaitTimeoutError",
    "ElementNotFoundError",
    "AssertionFailure",
    "ResourceLeakError",
    "LifecycleError",
    "ConfigurationError",
]
