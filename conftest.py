"""
Repository-level pytest configuration.

  - `--run-e2e` opt-in for tests that drive a real browser against the
    live demo site (RUN_E2E=1 does the same, e.g. in CI)
  - Loguru initialised once per run from the suite configuration
"""

from __future__ import annotations

import os

import pytest

from hrm_testsuites.common import init_logger


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser tests against the live target (also RUN_E2E=1)",
    )


def pytest_configure(config):
    init_logger()


def _e2e_enabled(config) -> bool:
    if config.getoption("--run-e2e"):
        return True
    return os.getenv("RUN_E2E", "").strip().lower() in ("1", "true", "yes", "on")


def pytest_collection_modifyitems(config, items):
    if _e2e_enabled(config):
        return
    skip_e2e = pytest.mark.skip(reason="live browser test; use --run-e2e or RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)
