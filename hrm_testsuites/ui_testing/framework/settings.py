"""
================================================================================
UI Settings
================================================================================

Typed view over ConfigLoader for everything the browser suite needs:
target URLs, browser launch options, timeouts, credentials and expected
page fragments.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .config_loader import ConfigLoader
from .errors import ConfigurationError
from .waits import WaitConfig


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

# How the target answers a submit with both fields empty.
#   pending              - not yet observed against the live system; test is skipped
#   rejected             - form stays on the login page with required-field messages
#   invalid_credentials  - the invalid-credentials alert is shown
EMPTY_CREDENTIALS_EXPECTATIONS = ("pending", "rejected", "invalid_credentials")

DEFAULT_SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


@dataclass(frozen=True)
class Credentials:
    """A (username, password) pair. The password never appears in repr."""
    username: str
    password: str = field(repr=False)

    def masked(self) -> str:
        return f"{self.username}/{'*' * len(self.password)}"


@dataclass(frozen=True)
class UiSettings:
    """Resolved UI configuration. Timeouts are in seconds."""

    base_url: str = "https://opensource-demo.orangehrmlive.com"
    login_path: str = "/web/index.php/auth/login"
    browser: str = "chromium"
    headless: bool = True
    maximize: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    slow_mo: int = 0
    navigation_timeout: float = 30.0
    element_timeout: float = 10.0
    assertion_timeout: float = 10.0
    poll_interval: float = 0.25
    screenshot_dir: Path = DEFAULT_SCREENSHOT_DIR
    success_url_fragment: str = "/dashboard"
    invalid_credentials_message: str = "Invalid credentials"
    required_field_message: str = "Required"
    empty_credentials_expectation: str = "pending"
    credentials: Dict[str, Credentials] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser {self.browser!r}; "
                f"expected one of {', '.join(SUPPORTED_BROWSERS)}"
            )
        if self.empty_credentials_expectation not in EMPTY_CREDENTIALS_EXPECTATIONS:
            raise ConfigurationError(
                f"Unknown empty credentials expectation "
                f"{self.empty_credentials_expectation!r}; "
                f"expected one of {', '.join(EMPTY_CREDENTIALS_EXPECTATIONS)}"
            )

    @property
    def login_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.login_path}"

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def wait_config(self, kind: str = "element") -> WaitConfig:
        """WaitConfig for 'element', 'navigation' or 'assertion' waits."""
        timeouts = {
            "element": self.element_timeout,
            "navigation": self.navigation_timeout,
            "assertion": self.assertion_timeout,
        }
        if kind not in timeouts:
            raise ConfigurationError(f"Unknown wait kind: {kind}")
        return WaitConfig(timeout=timeouts[kind], interval=self.poll_interval)

    def credential(self, name: str) -> Credentials:
        """Look up a named credential pair ('valid', 'invalid', 'empty')."""
        try:
            return self.credentials[name]
        except KeyError:
            raise ConfigurationError(f"No credentials configured under {name!r}") from None

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "UiSettings":
        """Build settings from YAML + environment overrides."""
        config = config or ConfigLoader()
        defaults = cls()

        def _get(key: str, default: Any) -> Any:
            return config.get(key, default)

        credentials: Dict[str, Credentials] = {}
        for name in (config.get_section("credentials") or {}):
            credentials[name] = Credentials(
                username=str(_get(f"credentials.{name}.username", "") or ""),
                password=str(_get(f"credentials.{name}.password", "") or ""),
            )

        overridden = config.overrides()
        if overridden:
            logger.info(f"Configuration overridden from environment: {overridden}")

        screenshot_dir = _get("ui.screenshot_dir", "")
        return cls(
            base_url=str(_get("ui.base_url", defaults.base_url)),
            login_path=str(_get("ui.login_path", defaults.login_path)),
            browser=str(_get("ui.browser", defaults.browser)).lower(),
            headless=bool(_get("ui.headless", defaults.headless)),
            maximize=bool(_get("ui.maximize", defaults.maximize)),
            viewport_width=int(_get("ui.viewport.width", defaults.viewport_width)),
            viewport_height=int(_get("ui.viewport.height", defaults.viewport_height)),
            slow_mo=int(_get("ui.slow_mo", defaults.slow_mo)),
            navigation_timeout=float(_get("timeouts.navigation", defaults.navigation_timeout)),
            element_timeout=float(_get("timeouts.element", defaults.element_timeout)),
            assertion_timeout=float(_get("timeouts.assertion", defaults.assertion_timeout)),
            poll_interval=float(_get("timeouts.poll_interval", defaults.poll_interval)),
            screenshot_dir=Path(screenshot_dir) if screenshot_dir else defaults.screenshot_dir,
            success_url_fragment=str(_get("login.success_url_fragment", defaults.success_url_fragment)),
            invalid_credentials_message=str(
                _get("login.invalid_credentials_message", defaults.invalid_credentials_message)
            ),
            required_field_message=str(
                _get("login.required_field_message", defaults.required_field_message)
            ),
            empty_credentials_expectation=str(
                _get("login.empty_credentials_expectation", defaults.empty_credentials_expectation)
            ).lower(),
            credentials=credentials,
        )


__all__ = [
    "Credentials",
    "UiSettings",
    "SUPPORTED_BROWSERS",
    "EMPTY_CREDENTIALS_EXPECTATIONS",
]
