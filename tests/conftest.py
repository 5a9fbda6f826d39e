"""
Pytest configuration and fixtures for the translator suite.

Provides the session configuration, logging, custom markers, the focus
guard, and browser fixtures for both the live suite and the offline
harness tests.
"""

import logging
import os
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError

from singlish_e2e.config import SwiftTranslatorConfig, get_config, get_test_config, set_config
from singlish_e2e.logging_config import setup_logging
from singlish_e2e.playwright_client import TranslatorClient
from singlish_e2e.runner import apply_focus

from pages import STAND_IN_URL

TEST_OUTPUT_DIR = Path(__file__).parent / 'test_output'


@pytest.fixture(scope='session', autouse=True)
def test_config():
    """
    Set up test configuration for the entire test session.

    Logs go to tests/test_output/logs/. Screenshots go to
    tests/test_output/screenshots/ unless SINGLISH_E2E_SCREENSHOT_DIR is set
    (the CLI sets it so live evidence survives the run).
    """
    config = get_config()

    # One log file per xdist worker
    worker = os.getenv('PYTEST_XDIST_WORKER', 'main')
    log_file = config.get_log_path(f'test_session_{worker}.log')
    setup_logging(level='DEBUG', use_colors=True, log_to_file=True, log_file=str(log_file))

    logger = logging.getLogger('singlish_e2e.test')
    logger.info("=" * 80)
    logger.info("Translator Test Session Started")
    logger.info("=" * 80)
    logger.info(f"Target URL: {config.target_url}")
    logger.info(f"Profile: {config.profile.name}")
    logger.info(f"Screenshots directory: {config.screenshot_dir}")
    logger.info(f"Log file: {log_file}")

    yield config

    logger.info("=" * 80)
    logger.info("Translator Test Session Complete")
    logger.info("=" * 80)


@pytest_asyncio.fixture
async def translator_client(test_config):
    """Browser for one live scenario, closed afterwards."""
    async with TranslatorClient(test_config) as client:
        yield client


@pytest.fixture
def local_config(tmp_path) -> SwiftTranslatorConfig:
    """Configuration pointing at the stand-in pages with short timeouts."""
    return SwiftTranslatorConfig(
        target_url=STAND_IN_URL,
        wait_until='load',
        navigation_timeout=5000,
        navigation_attempts=3,
        navigation_retry_delay=50,
        settle_delay=50,
        output_timeout=1500,
        stabilization_delay=50,
        headless=True,
        slow_mo=0,
        ci=False,
        screenshot_dir=tmp_path / 'screenshots',
        log_dir=tmp_path / 'logs'
    )


@pytest_asyncio.fixture
async def local_client(local_config):
    """Browser for offline harness tests; skips when the engine is missing."""
    client = TranslatorClient(local_config)
    try:
        await client.launch()
    except PlaywrightError as e:
        pytest.skip(f"{local_config.browser_type} is not installed: {e.message}")

    yield client

    await client.close()


@pytest_asyncio.fixture
async def local_page(local_client):
    return await local_client.new_page()


def pytest_configure(config):
    """Install the session configuration and register custom markers."""
    set_config(get_test_config(TEST_OUTPUT_DIR))

    config.addinivalue_line(
        "markers", "live: runs a scenario against the live translator site"
    )
    config.addinivalue_line(
        "markers", "integration: needs a locally installed browser engine"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "only: focus on this test (rejected in the CI profile)"
    )


def pytest_collection_modifyitems(config, items):
    """Mark browser-backed tests and apply the focus guard."""
    for item in items:
        if "local_client" in item.fixturenames or "local_page" in item.fixturenames:
            item.add_marker(pytest.mark.integration)

    selected, deselected = apply_focus(items, forbid_only=get_config().profile.forbid_only)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected
