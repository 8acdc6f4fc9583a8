"""
================================================================================
Page Object Capabilities
================================================================================

Structural interfaces for page objects. A page object does not inherit from a
framework base class; it holds a DriverSession and composes an ElementLookup
(normally a SmartLocator scoped to that session).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

from playwright.async_api import Locator

if TYPE_CHECKING:
    from .driver_session import DriverSession


@runtime_checkable
class ElementLookup(Protocol):
    """Supports named element lookup scoped to one driver session."""

    async def locate(self, name: str, timeout: Optional[float] = None) -> Locator:
        ...

    async def fill(self, name: str, value: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        ...

    async def click(self, name: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        ...

    async def get_text(self, name: str, timeout: Optional[float] = None) -> str:
        ...

    async def get_all_texts(self, name: str, timeout: Optional[float] = None) -> List[str]:
        ...

    async def is_visible(self, name: str, timeout: Optional[float] = None) -> bool:
        ...


@runtime_checkable
class PageObject(Protocol):
    """A screen of the target application bound to one driver session."""

    session: "DriverSession"
    elements: ElementLookup


__all__ = [
    "ElementLookup",
    "PageObject",
]
