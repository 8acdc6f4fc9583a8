# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Poll-until-condition primitive used by every interactive browser operation:
# element lookup, URL checks and content checks all go through `wait_until`.
#
# Key Features:
#   - Configurable timeout and polling interval
#   - Optional interval growth (multiplier capped by max_interval)
#   - Sync or async condition callables
#   - Distinct WaitTimeoutError (or subclass) on expiry
#
# Usage:
#   await wait_until(lambda: "/dashboard" in session.current_url,
#                    config=WaitConfig(timeout=10),
#                    description="dashboard URL")
#
# ================================================================================

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar, Union

from loguru import logger

from .errors import WaitTimeoutError


T = TypeVar("T")

Condition = Callable[[], Union[T, Awaitable[T]]]


@dataclass(frozen=True)
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Total timeout in seconds
        interval: Initial polling interval in seconds
        multiplier: Growth factor applied to the interval after each poll
        max_interval: Upper bound for the polling interval
    """
    timeout: float = 10.0
    interval: float = 0.25
    multiplier: float = 1.0
    max_interval: float = 2.0

    def with_timeout(self, timeout: Optional[float]) -> "WaitConfig":
        """Return a copy with a different timeout (None keeps the current one)."""
        if timeout is None:
            return self
        return replace(self, timeout=timeout)


# Pre-configured wait strategies
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),
    "element": WaitConfig(timeout=10.0, interval=0.2),
    "navigation": WaitConfig(timeout=30.0, interval=0.5, multiplier=1.5, max_interval=2.0),
    "assertion": WaitConfig(timeout=10.0, interval=0.25),
}


def get_wait_config(scenario: str) -> WaitConfig:
    """Get wait configuration for a scenario, or the default one."""
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


async def wait_until(
    condition: Condition,
    config: Optional[WaitConfig] = None,
    description: str = "condition",
    scenario: str = "default",
    error_cls: Type[WaitTimeoutError] = WaitTimeoutError,
) -> Any:
    """
    Poll `condition` until it returns a truthy value or the timeout expires.

    The condition is evaluated at least once, even with a zero timeout.
    Exceptions raised by the condition are remembered and polling continues;
    the last one is attached to the timeout error.

    Args:
        condition: Sync or async callable returning a value
        config: WaitConfig (overrides scenario)
        description: Human-readable description for logs and errors
        scenario: Predefined scenario name
        error_cls: WaitTimeoutError subclass raised on expiry

    Returns:
        The first truthy value returned by the condition

    Raises:
        WaitTimeoutError: (or `error_cls`) when the timeout is reached
    """
    if config is None:
        config = get_wait_config(scenario)

    loop = asyncio.get_running_loop()
    deadline = loop.time() + config.timeout
    interval = config.interval
    attempt = 0
    last_result: Any = None
    last_error: Optional[BaseException] = None

    while True:
        attempt += 1
        try:
            result = condition()
            if inspect.isawaitable(result):
                result = await result
            last_result = result
            if result:
                if attempt > 1:
                    logger.debug(f"Wait satisfied after {attempt} polls: {description}")
                return result
        except Exception as e:
            last_error = e
            logger.debug(f"Poll {attempt} for {description} raised: {e}")

        remaining = deadline - loop.time()
        if remaining <= 0:
            error = error_cls(
                description,
                config.timeout,
                last_error=last_error,
                last_result=last_result,
            )
            logger.warning(str(error))
            raise error

        await asyncio.sleep(min(interval, remaining))
        interval = min(interval * config.multiplier, config.max_interval)


__all__ = [
    "WaitConfig",
    "WAIT_SCENARIOS",
    "get_wait_config",
    "wait_until",
]
