"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based building blocks for the login suite.

Components:
    - errors: exception hierarchy
    - waits: poll-until-condition primitive
    - config_loader / settings: YAML + env configuration
    - capabilities: ElementLookup / PageObject protocols
    - smart_locator: session-scoped element lookup with fallbacks
    - driver_session: one exclusively owned browser instance

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    AssertionFailure,
    AutomationError,
    ConfigurationError,
    ElementNotFoundError,
    LifecycleError,
    NavigationError,
    ResourceLeakError,
    WaitTimeoutError,
)
from .waits import WaitConfig, wait_until
from .config_loader import ConfigLoader
from .settings import Credentials, UiSettings
from .capabilities import ElementLookup, PageObject
from .smart_locator import SmartLocator
from .driver_session import DriverSession, SessionRegistry, SESSION_REGISTRY

__all__ = [
    "AssertionFailure",
    "AutomationError",
    "ConfigurationError",
    "ElementNotFoundError",
    "LifecycleError",
    "NavigationError",
    "ResourceLeakError",
    "WaitTimeoutError",
    "WaitConfig",
    "wait_until",
    "ConfigLoader",
    "Credentials",
    "UiSettings",
    "ElementLookup",
    "PageObject",
    "SmartLocator",
    "DriverSession",
    "SessionRegistry",
    "SESSION_REGISTRY",
]
