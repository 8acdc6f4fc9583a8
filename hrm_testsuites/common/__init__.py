"""
================================================================================
Common Utilities
================================================================================

Shared logging setup for the suite and the test runner.

Usage:
    from hrm_testsuites.common import init_logger

    init_logger()

================================================================================
"""

from .global_config import get_logger, init_logger

__all__ = [
    "get_logger",
    "init_logger",
]
