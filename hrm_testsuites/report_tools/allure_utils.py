"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers for the Allure report and the environment widget written
into the results directory before report generation.

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """Attach text content to the Allure report."""
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_json(data: Any, name: str = "Data"):
    """Attach JSON-serialisable data to the Allure report."""
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_html(html: str, name: str = "HTML"):
    """Attach an HTML snapshot to the Allure report."""
    allure.attach(
        html,
        name=name,
        attachment_type=allure.attachment_type.HTML
    )


def attach_png(source: Union[bytes, Path, str], name: str = "Screenshot"):
    """
    Attach a PNG image.

    Args:
        source: Raw PNG bytes or a path to a PNG file
        name: Attachment name
    """
    if isinstance(source, (bytes, bytearray)):
        allure.attach(
            bytes(source),
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
    else:
        allure.attach.file(
            str(source),
            name=name,
            attachment_type=allure.attachment_type.PNG
        )


# ================================================================================
# Environment Widget
# ================================================================================

def write_environment_properties(
    results_dir: Union[Path, str],
    properties: Mapping[str, Any],
) -> Path:
    """
    Write `environment.properties` for the Allure environment widget.

    Args:
        results_dir: Allure results directory
        properties: Key/value pairs to display

    Returns:
        Path to the written file
    """
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    path = results_dir / "environment.properties"

    lines = []
    for key, value in properties.items():
        safe_key = str(key).replace(" ", "_").replace("=", "_")
        lines.append(f"{safe_key}={value}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    logger.debug(f"Allure environment written: {path}")
    return path


def environment_from_settings(settings) -> Dict[str, Any]:
    """Environment widget values for a UiSettings instance (no secrets)."""
    return {
        "Base.URL": settings.base_url,
        "Login.Path": settings.login_path,
        "Browser": settings.browser,
        "Headless": settings.headless,
        "Element.Timeout.s": settings.element_timeout,
        "Navigation.Timeout.s": settings.navigation_timeout,
    }


__all__ = [
    "attach_text",
    "attach_json",
    "attach_html",
    "attach_png",
    "write_environment_properties",
    "environment_from_settings",
]
