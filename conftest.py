"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers, the end-of-run summary plugin and the
`--run-e2e` switch that gates the live storefront journey.

Offline unit tests under `vitacare_e2e/unit` always run. The journey under
`vitacare_e2e/ui_testing/tests` drives a real browser against the public
storefront and is skipped unless `--run-e2e` is given or RUN_E2E=1 is set.

================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from vitacare_e2e.ui_testing.framework.config_loader import get_config
from vitacare_e2e.ui_testing.framework.logger import init_logger
from vitacare_e2e.ui_testing.framework.summary_reporter import SummaryReporter


MARKERS = {
    # Priority markers
    "P0": "Critical priority tests - must pass for deployment",
    "P1": "High priority tests - important functionality",
    "P2": "Medium priority tests - edge cases and minor features",
    "P3": "Low priority tests - extensive validation",
    # Test type markers
    "smoke": "Quick verification tests",
    "regression": "Full regression test suite",
    "e2e": "End-to-end tests driving the live storefront",
    # Domain markers
    "unit": "Offline tests against fake pages",
    "ui": "UI-specific tests",
}


def pytest_addoption(parser):
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run the live storefront journey (needs network and installed browsers)",
    )


def pytest_configure(config):
    """Configure pytest with project-wide markers, logging and the summary plugin."""
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")

    init_logger()

    if not config.pluginmanager.has_plugin("vitacare-summary"):
        video_dir = get_config("browser.video_dir", "")
        config.pluginmanager.register(
            SummaryReporter(video_dir=Path(video_dir) if video_dir else None),
            "vitacare-summary",
        )


def _e2e_enabled(config) -> bool:
    return config.getoption("--run-e2e") or os.environ.get("RUN_E2E") == "1"


def pytest_collection_modifyitems(config, items):
    """
    Add domain markers by location and skip the journey unless it was requested.
    """
    skip_e2e = pytest.mark.skip(reason="live journey disabled (use --run-e2e or RUN_E2E=1)")
    run_e2e = _e2e_enabled(config)

    for item in items:
        path = str(item.fspath)
        if f"vitacare_e2e{os.sep}unit" in path:
            item.add_marker(pytest.mark.unit)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        if item.get_closest_marker("e2e") and not run_e2e:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "VitaCare Storefront Automation",
        f"Target: {get_config('site.base_url', '')}",
        f"Live journey: {'enabled' if _e2e_enabled(config) else 'skipped'}",
        "=" * 60,
        "",
    ]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
