"""Pytest configuration for E2E tests with Playwright.

One browser per worker process, one fresh context per test.
Contexts are never reused, so cookies and local storage cannot leak
between scenarios. On failure the screenshot, trace and video are kept
under ``<artifacts>/<test-id>/``.
"""

from __future__ import annotations

import logging

import pytest
from playwright.sync_api import sync_playwright

from storefront_e2e.data_factory import factory_from_settings
from storefront_e2e.recording import recorded_page
from storefront_e2e.utils import artifact_dir_for, load_settings
from tests.e2e.pages import AccountPage, HomePage, LoginPage, RegistrationPage

logger = logging.getLogger("storefront-e2e.fixtures")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (``item.rep_setup`` etc.)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _failed(request) -> bool:
    for phase in ("setup", "call"):
        report = getattr(request.node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False


@pytest.fixture(scope="session")
def settings():
    return load_settings()


@pytest.fixture(scope="session")
def base_url(settings):
    """Base URL for the storefront."""
    return settings.base_url


@pytest.fixture(scope="session")
def browser(settings):
    """Launch the configured browser once per worker."""
    with sync_playwright() as p:
        launcher = getattr(p, settings.browser)
        browser = launcher.launch(headless=settings.headless, slow_mo=settings.slow_mo)
        logger.info("Launched %s (headless=%s)", settings.browser, settings.headless)
        yield browser
        browser.close()


@pytest.fixture(scope="function")
def page(browser, settings, request):
    """Create an isolated context and page for each test."""
    artifacts = artifact_dir_for(settings.artifacts_dir, request.node.nodeid)
    with recorded_page(browser, settings, artifacts, lambda: _failed(request)) as page:
        yield page


@pytest.fixture(scope="session")
def data_factory(settings, worker_id):
    # worker_id is pytest-xdist's fixture ("master" when not distributed).
    return factory_from_settings(settings, worker=worker_id)


@pytest.fixture
def home(page, settings):
    hp = HomePage(page, settings.base_url, settings.timeout_ms)
    hp.navigate()
    return hp


@pytest.fixture
def login_page(page, settings):
    lp = LoginPage(page, settings.base_url, settings.timeout_ms)
    lp.navigate()
    return lp


@pytest.fixture
def registration_page(page, settings):
    return RegistrationPage(page, settings.base_url, settings.timeout_ms)


@pytest.fixture
def account(page, settings, data_factory):
    """Credentials of an account that exists on the storefront.

    Uses ``STOREFRONT_USERNAME``/``STOREFRONT_PASSWORD`` when set; otherwise
    registers a fresh account and signs out again, leaving the page at the
    login form's origin with no session.
    """
    if settings.has_account:
        return settings.username, settings.password

    record = data_factory.registration_record()
    registration = RegistrationPage(page, settings.base_url, settings.timeout_ms)
    registration.register(record)
    registration.expect_registered()
    AccountPage(page, settings.base_url, settings.timeout_ms).logout()
    page.context.clear_cookies()
    return record.username, record.password
