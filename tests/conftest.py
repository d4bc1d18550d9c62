"""
Test configuration shared by unit tests and UI scenarios.
"""

import logging
import os
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from neobank_e2e.config.settings import SuiteSettings

# Set up logging for tests
logging.basicConfig(
    level=os.getenv("TEST_LOG_LEVEL", "INFO"),
    format=os.getenv("TEST_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)
logger = logging.getLogger(__name__)


@pytest.fixture
def default_settings() -> SuiteSettings:
    """Settings built from model defaults only, independent of the environment."""
    return SuiteSettings()


def pytest_configure(config):
    """Register custom markers to satisfy strict marker checks."""
    config.addinivalue_line("markers", "ui: Browser scenarios against the NeoBank UI")
    config.addinivalue_line("markers", "smoke: Smoke tests")
    config.addinivalue_line("markers", "auth: Login and logout scenarios")
    config.addinivalue_line("markers", "transactions: Deposit, debit and balance scenarios")
    config.addinivalue_line("markers", "advanced: Multi-step and boundary transaction scenarios")
    config.addinivalue_line("markers", "crud: Beneficiary create/read/update/delete scenarios")
    config.addinivalue_line("markers", "random: Tests driven by generated data")


def pytest_runtest_setup(item):
    """Log test start."""
    logger.info(f"Starting test: {item.name}")


def pytest_runtest_teardown(item, nextitem):
    """Log test completion."""
    logger.info(f"Completed test: {item.name}")
