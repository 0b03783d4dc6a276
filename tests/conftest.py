"""Test-layer conftest: markers and logging setup."""

from __future__ import annotations

import os

from storefront_e2e.utils.logging_utils import configure_logging


# ---------------------------------------------------------------------------
# Pytest configuration hook - wire up markers and the log sink
# ---------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom markers so --strict-markers does not complain."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no browser)")
    config.addinivalue_line("markers", "e2e: End-to-end Playwright scenarios")
    config.addinivalue_line("markers", "a11y: Accessibility scans")
    config.addinivalue_line("markers", "slow: Slow-running tests")

    configure_logging(
        os.environ.get("STOREFRONT_LOG_LEVEL", "INFO"),
        serialize=os.environ.get("STOREFRONT_LOG_JSON", "").lower() in {"1", "true", "yes"},
    )
