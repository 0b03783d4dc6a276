"""Per-test browser context with screenshot, trace and video retention.

Each test gets a fresh context. On teardown the context is always closed,
even when capturing evidence from a crashed page fails.
"""

from __future__ import annotations

import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from playwright.sync_api import Browser, Page
from playwright.sync_api import Error as PlaywrightError

from storefront_e2e.utils.config import Settings
from storefront_e2e.utils.logging_utils import get_logger

logger = get_logger("recording")

VIEWPORT = {"width": 1440, "height": 900}
RETAIN_ON_FAILURE = "retain-on-failure"

SCREENSHOT_FILE = "failure.png"
TRACE_FILE = "trace.zip"
VIDEO_DIR = "video"


def capture_screenshot(page: Page, path: Path) -> bool:
    """Save a full-page screenshot; a closed or crashed page only logs."""
    try:
        page.screenshot(path=str(path), full_page=True)
    except PlaywrightError as exc:
        logger.warning("Could not capture failure screenshot: %s", exc.message)
        return False
    return True


def prune_artifacts(artifacts: Path, settings: Settings, failed: bool) -> None:
    """Drop evidence a passing test does not need, then the empty directory."""
    if not failed and settings.video == RETAIN_ON_FAILURE:
        shutil.rmtree(artifacts / VIDEO_DIR, ignore_errors=True)
    if artifacts.is_dir() and not any(artifacts.iterdir()):
        artifacts.rmdir()


@contextmanager
def recorded_page(
    browser: Browser,
    settings: Settings,
    artifacts: Path,
    failed: Callable[[], bool],
) -> Iterator[Page]:
    """Yield a page in a new context, recording per ``settings.video``/``settings.trace``.

    ``failed`` is called once at teardown; on failure the screenshot, trace
    and video stay in ``artifacts``.
    """
    record_video = settings.video != "off"
    context = browser.new_context(
        viewport=VIEWPORT,
        record_video_dir=str(artifacts / VIDEO_DIR) if record_video else None,
    )
    context.set_default_timeout(settings.timeout_ms)
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)

    tracing = False
    page = None
    try:
        if settings.trace != "off":
            context.tracing.start(screenshots=True, snapshots=True, sources=True)
            tracing = True
        page = context.new_page()
        yield page
    finally:
        has_failed = failed()
        if has_failed and page is not None:
            capture_screenshot(page, artifacts / SCREENSHOT_FILE)
        try:
            if tracing:
                keep_trace = has_failed or settings.trace == "on"
                context.tracing.stop(path=str(artifacts / TRACE_FILE) if keep_trace else None)
        finally:
            # Video files are finalised on close.
            context.close()
        if has_failed:
            logger.warning("Scenario failed; evidence saved to %s", artifacts)

    prune_artifacts(artifacts, settings, has_failed)
