"""
Conftest for UI scenarios.

Scenarios run against the static demo UI under tests/fixtures/neobank, served on
an ephemeral localhost port, unless a deployed UI is named with --base-url or
NEOBANK_BASE_URL. UI tests are skipped when Playwright, its browser binaries, or
the external UI are unavailable.
"""

import os
import socket
from pathlib import Path
from urllib.parse import urlparse

import pytest

from neobank_e2e.config.settings import load_settings
from neobank_e2e.data.random_generator import BankingDataGenerator
from neobank_e2e.pages.banking_page import BankingPage
from tests.utils.demo_server import DemoServer

try:
    from playwright.sync_api import sync_playwright
    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    PLAYWRIGHT_AVAILABLE = False


def _external_base_url(config):
    return config.getoption("base_url", default=None) or os.getenv("NEOBANK_BASE_URL")


def check_web_server(url: str) -> bool:
    """Check if the external UI accepts connections"""
    parsed = urlparse(url)
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    try:
        with socket.create_connection((parsed.hostname, port), timeout=1):
            return True
    except OSError:
        return False


def check_playwright_browsers(browser_names) -> bool:
    """Check if the selected Playwright browsers are installed"""
    if not PLAYWRIGHT_AVAILABLE:
        return False
    with sync_playwright() as p:
        return all(Path(getattr(p, name).executable_path).exists() for name in browser_names)


def pytest_collection_modifyitems(config, items):
    """Skip UI tests if Playwright browsers or the configured UI are unavailable"""
    ui_tests = [item for item in items if item.get_closest_marker("ui")]
    if not ui_tests:
        return

    browser_names = config.getoption("browser", default=None) or ["chromium"]
    try:
        browsers_installed = check_playwright_browsers(browser_names)
    except Exception:
        browsers_installed = False

    external = _external_base_url(config)
    server_available = check_web_server(external) if external else True

    for item in ui_tests:
        if not PLAYWRIGHT_AVAILABLE:
            item.add_marker(pytest.mark.skip(reason="Playwright not available"))
        elif not browsers_installed:
            item.add_marker(pytest.mark.skip(reason="Playwright browsers not installed. Run 'playwright install'"))
        elif not server_available:
            item.add_marker(pytest.mark.skip(reason=f"Banking UI not accessible at {external}"))


@pytest.fixture(scope="session")
def base_url(pytestconfig):
    """Deployed UI when configured, otherwise the bundled demo UI."""
    external = _external_base_url(pytestconfig)
    if external:
        yield external.rstrip("/")
        return
    with DemoServer() as server:
        yield server.url


@pytest.fixture(scope="session")
def suite_settings(base_url):
    """Settings from NEOBANK_* configuration, pointed at the active UI."""
    return load_settings().model_copy(update={"base_url": base_url})


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """Browser context arguments for Playwright tests"""
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args, suite_settings):
    """NEOBANK_HEADLESS=false opens a window even without --headed"""
    if suite_settings.headless:
        return browser_type_launch_args
    return {**browser_type_launch_args, "headless": False}


@pytest.fixture
def banking_page(page, suite_settings) -> BankingPage:
    """Page object on a fresh browser context, not yet logged in."""
    page.set_default_timeout(suite_settings.timeouts.action_ms)
    return BankingPage(page, suite_settings)


@pytest.fixture
def dashboard(banking_page) -> BankingPage:
    """Page object logged in as the configured demo user."""
    result = banking_page.login()
    assert result.succeeded, f"Login failed: {result.message!r}"
    return banking_page


@pytest.fixture
def data_generator() -> BankingDataGenerator:
    seed = os.getenv("NEOBANK_SEED")
    return BankingDataGenerator(seed=int(seed) if seed else None)
