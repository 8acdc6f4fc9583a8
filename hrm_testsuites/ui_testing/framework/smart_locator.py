"""
================================================================================
Smart Locator
================================================================================

Session-scoped element lookup with fallback strategies.

    - Each element is a map of strategy -> selector ("primary", "fallback_1", ...)
    - Lookup polls every strategy until one is visible or the wait expires
    - Fallback usage is recorded for a locator health report

SmartLocator implements the ElementLookup capability; page objects compose it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.async_api import Locator

from .errors import ElementNotFoundError
from .waits import WaitConfig, get_wait_config, wait_until

if TYPE_CHECKING:
    from .driver_session import DriverSession


@dataclass
class LocatorHealth:
    """
    Tracks which strategy resolved an element.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


def _mask(element_name: str, value: str) -> str:
    if "password" in element_name.lower():
        return "*" * len(value)
    return value


class SmartLocator:
    """
    Named element lookup with fallback strategies, bound to one DriverSession.

    Usage:
        >>> elements = SmartLocator(session, {
        ...     "username_input": {"primary": "input[name='username']"},
        ... })
        >>> await elements.fill("username_input", "Admin")
    """

    def __init__(
        self,
        session: "DriverSession",
        locators: Dict[str, Dict[str, str]],
        wait_config: Optional[WaitConfig] = None,
    ):
        """
        Args:
            session: Driver session whose page is searched
            locators: element name -> {strategy_name: selector}
            wait_config: Wait used for every lookup (timeout can be overridden per call)
        """
        self.session = session
        self._locators: Dict[str, Dict[str, str]] = {
            name: dict(strategies) for name, strategies in locators.items()
        }
        self.wait_config = wait_config or get_wait_config("element")
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}
        self._resolved: Dict[str, str] = {}

    @property
    def names(self) -> List[str]:
        return list(self._locators)

    def selectors(self, name: str) -> Dict[str, str]:
        try:
            return self._locators[name]
        except KeyError:
            raise KeyError(f"No locators registered for element: {name}") from None

    async def _probe(self, name: str) -> Optional[Tuple[str, str, Locator]]:
        page = self.session.page
        for strategy_name, selector in self.selectors(name).items():
            locator = page.locator(selector).first
            if await locator.is_visible():
                return strategy_name, selector, locator
        return None

    async def locate(self, name: str, timeout: Optional[float] = None) -> Locator:
        """
        Locate a visible element, trying each strategy on every poll.

        Raises:
            KeyError: element name not registered
            ElementNotFoundError: no strategy became visible in time
        """
        locators = self.selectors(name)

        strategy_name, selector, locator = await wait_until(
            lambda: self._probe(name),
            config=self.wait_config.with_timeout(timeout),
            description=f"element '{name}' to be visible",
            error_cls=ElementNotFoundError,
        )

        used_fallback = strategy_name != "primary"
        health = LocatorHealth(
            element_name=name,
            primary_selector=locators.get("primary", selector),
            used_fallback=used_fallback,
            fallback_name=strategy_name if used_fallback else None,
            fallback_selector=selector if used_fallback else None,
        )
        self._health_records.append(health)
        self._resolved[name] = selector

        if used_fallback:
            logger.warning(f"Element '{name}' used fallback: {strategy_name} -> {selector}")
            self._fallback_used[name] = health
        else:
            logger.debug(f"Element '{name}' found: {selector}")

        return locator

    async def click(self, name: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        """Click a named element once it is visible."""
        locator = await self.locate(name, timeout=timeout)
        logger.debug(f"Click: {name}")
        await locator.click(**kwargs)

    async def fill(
        self,
        name: str,
        value: str,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """Fill a named input once it is visible. Password values are masked in logs."""
        locator = await self.locate(name, timeout=timeout)
        logger.debug(f"Fill {name}: {_mask(name, value)!r}")
        await locator.fill(value, **kwargs)

    async def get_text(self, name: str, timeout: Optional[float] = None) -> str:
        locator = await self.locate(name, timeout=timeout)
        return (await locator.text_content() or "").strip()

    async def get_all_texts(self, name: str, timeout: Optional[float] = None) -> List[str]:
        """Stripped, non-empty texts of every match of the strategy that resolved."""
        await self.locate(name, timeout=timeout)
        texts = await self.session.page.locator(self._resolved[name]).all_text_contents()
        return [t.strip() for t in texts if t.strip()]

    async def is_visible(self, name: str, timeout: Optional[float] = None) -> bool:
        """True if the element becomes visible within `timeout` (default 2s)."""
        try:
            await self.locate(name, timeout=2.0 if timeout is None else timeout)
        except ElementNotFoundError:
            return False
        return True

    def register_locator(self, name: str, locators: Dict[str, str]) -> None:
        """Register (or replace) an element at runtime for this instance only."""
        self._locators[name] = dict(locators)
        logger.debug(f"Registered locator: {name}")

    def get_health_report(self) -> str:
        """Summarise elements that needed a fallback selector."""
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
        ]
        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "LocatorHealth",
    "ElementNotFoundError",
]
