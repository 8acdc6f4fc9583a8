"""
================================================================================
Suite Pytest Configuration
================================================================================

Marker registry, directory-based tagging and the run header.

================================================================================
"""

import pytest

from hrm_testsuites.ui_testing.framework.config_loader import ConfigLoader
from hrm_testsuites.ui_testing.framework.settings import UiSettings


MARKERS = {
    # priority
    "P0": "login must work; blocks a release",
    "P1": "core flows around login",
    "P2": "edge cases",
    # scope
    "smoke": "quick check of the happy path",
    "regression": "full regression run",
    "e2e": "drives a real browser against the target site",
    "unit": "offline tests of the framework",
    # area
    "ui": "browser UI tests",
    "auth": "authentication scenarios",
}

# Path component -> markers applied to every test below it
DIRECTORY_MARKERS = {
    "ui_testing": ("ui", "e2e"),
    "unit": ("unit",),
}


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config, items):
    """Tag by directory before the e2e opt-in filter runs."""
    for item in items:
        parts = set(item.path.parts)
        for directory, names in DIRECTORY_MARKERS.items():
            if directory in parts:
                for name in names:
                    item.add_marker(getattr(pytest.mark, name))


def pytest_report_header(config):
    settings = UiSettings.from_config(ConfigLoader())
    return [
        f"hrm target: {settings.login_url}",
        f"hrm browser: {settings.browser} (headless={settings.headless})",
    ]
