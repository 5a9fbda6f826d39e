"""
Playwright harness for the Singlish-to-Sinhala translator.

Each scenario runs the same sequence against a fresh page:
navigate (with retry) -> locate input -> inject text -> settle ->
wait for output -> read output -> compare -> screenshot.

Key Design:
- The target site is an uncontrolled black box. The input surface is
  found by trying several structurally different selectors, and the
  injection protocol is picked from the kind of element found.
- The output is read from one container selector; when it never fills,
  a missing container (stale selector) is reported separately from an
  empty one (translator timeout).
- Every scenario leaves exactly one screenshot named by its id, whether
  it passed, mismatched, or failed before comparison.
"""

import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, NamedTuple, Optional, Sequence

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Locator,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import SwiftTranslatorConfig, get_config
from .errors import (
    HarnessError,
    InputNotFoundError,
    NavigationError,
    OutputSelectorNotFoundError,
    OutputTimeoutError,
)
from .logging_config import log_harness_action, log_scenario_status
from .models import InputKind, Scenario, ScenarioResult

logger = logging.getLogger(__name__)


OUTPUT_READY_JS = """
(sel) => {
    const el = document.querySelector(sel);
    return !!(el && el.innerText && el.innerText.trim().length > 0);
}
"""

OUTPUT_EXISTS_JS = "(sel) => document.querySelector(sel) !== null"

# null when the container is gone; never waits
OUTPUT_TEXT_JS = """
(sel) => {
    const el = document.querySelector(sel);
    return el ? el.innerText : null;
}
"""

TAG_NAME_JS = "(el) => el.tagName.toLowerCase()"

BLUR_JS = "(el) => el.blur()"

# Assigning innerText does not fire the page's listeners, so the input
# event is dispatched by hand.
SET_EDITABLE_TEXT_JS = """
(el, value) => {
    el.innerText = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
}
"""


class InputTarget(NamedTuple):
    selector: str
    kind: InputKind
    locator: Locator


# ============================================================================
# NAVIGATOR
# ============================================================================

async def navigate(page: Page, config: SwiftTranslatorConfig) -> int:
    """
    Load the target page, retrying transient failures.

    Args:
        page: Fresh page for this scenario
        config: Harness configuration (URL, readiness condition, budget)

    Returns:
        The 1-based attempt number that succeeded

    Raises:
        NavigationError: every attempt failed; chained to the last error
    """
    attempts = config.navigation_attempts
    last_error: Optional[PlaywrightError] = None

    for attempt in range(1, attempts + 1):
        try:
            await page.goto(
                config.target_url,
                wait_until=config.wait_until,
                timeout=config.navigation_timeout
            )
            log_harness_action(
                'navigate',
                f"{config.target_url} (attempt {attempt}/{attempts})",
                logger=logger
            )
            return attempt

        except PlaywrightError as nav_error:
            last_error = nav_error
            logger.warning(f"Attempt {attempt} to navigate failed: {nav_error.message}")
            if attempt < attempts:
                await page.wait_for_timeout(config.navigation_retry_delay)

    log_harness_action('navigate', f"{config.target_url} unreachable", success=False, logger=logger)
    raise NavigationError(config.target_url, attempts, last_error) from last_error


# ============================================================================
# INPUT LOCATOR
# ============================================================================

async def locate_input(page: Page, selectors: Sequence[str]) -> InputTarget:
    """
    Find the input surface using the first selector that matches.

    Args:
        page: Page showing the translator
        selectors: Strategies in priority order

    Returns:
        InputTarget for the first element matched by the winning selector

    Raises:
        InputNotFoundError: no selector matched anything
    """
    for selector in selectors:
        candidate = page.locator(selector).first
        if await candidate.count() > 0:
            tag = await candidate.evaluate(TAG_NAME_JS)
            kind = InputKind.from_tag(tag)
            log_harness_action('locate', f"{selector} -> <{tag}> ({kind.value})", logger=logger)
            return InputTarget(selector, kind, candidate)

        logger.debug(f"    -> No match for input selector: {selector}")

    log_harness_action('locate', "no input surface", success=False, logger=logger)
    raise InputNotFoundError(selectors)


# ============================================================================
# INPUT INJECTOR
# ============================================================================

async def _inject_value_field(locator: Locator, text: str):
    await locator.fill('')
    await locator.fill(text)
    # Losing focus fires any change listeners bound by the page
    await locator.evaluate(BLUR_JS)


async def _inject_editable_region(locator: Locator, text: str):
    await locator.click()
    await locator.evaluate(SET_EDITABLE_TEXT_JS, text)


_INJECTORS: Dict[InputKind, Callable[[Locator, str], Awaitable[None]]] = {
    InputKind.VALUE_FIELD: _inject_value_field,
    InputKind.EDITABLE_REGION: _inject_editable_region,
}


async def inject_input(target: InputTarget, text: str):
    """
    Write text into the input surface, replacing whatever was there.

    Args:
        target: Surface returned by locate_input
        text: Scenario input
    """
    await _INJECTORS[target.kind](target.locator, text)
    log_harness_action('inject', f"{len(text)} chars via {target.kind.value}", logger=logger)


async def read_input(target: InputTarget) -> str:
    """Read the input surface back (field value or region text)."""
    if target.kind == InputKind.VALUE_FIELD:
        return await target.locator.input_value()
    return await target.locator.inner_text()


# ============================================================================
# OUTPUT OBSERVER
# ============================================================================

async def wait_for_output(page: Page, config: SwiftTranslatorConfig) -> str:
    """
    Wait until the output container holds text, then read it.

    Args:
        page: Page after injection and settle delay
        config: Output selector, timeout and stabilization delay

    Returns:
        Trimmed text of the output container

    Raises:
        OutputSelectorNotFoundError: container never appeared or vanished
            before it could be read
        OutputTimeoutError: container appeared but stayed empty
    """
    selector = config.output_selector

    try:
        await page.wait_for_function(
            OUTPUT_READY_JS,
            arg=selector,
            timeout=config.output_timeout
        )
    except PlaywrightTimeoutError as wait_error:
        selector_exists = await page.evaluate(OUTPUT_EXISTS_JS, selector)
        if not selector_exists:
            log_harness_action('observe', f"{selector} missing", success=False, logger=logger)
            raise OutputSelectorNotFoundError(selector) from wait_error

        log_harness_action('observe', f"{selector} empty after {config.output_timeout}ms", success=False, logger=logger)
        raise OutputTimeoutError(selector, config.output_timeout) from wait_error

    await page.wait_for_timeout(config.stabilization_delay)

    text = await page.evaluate(OUTPUT_TEXT_JS, selector)
    if text is None:
        log_harness_action('observe', f"{selector} detached after stabilization", success=False, logger=logger)
        raise OutputSelectorNotFoundError(selector)

    log_harness_action('observe', f"{selector} -> {len(text.strip())} chars", logger=logger)
    return text.strip()


# ============================================================================
# EVIDENCE
# ============================================================================

async def capture_evidence(
    page: Page,
    scenario_id: str,
    config: SwiftTranslatorConfig
) -> Optional[Path]:
    """
    Save the scenario's screenshot, replacing one from an earlier run.

    Screenshot problems are logged and swallowed so they never hide the
    scenario's own outcome.

    Returns:
        Path of the written screenshot, or None if capture failed
    """
    screenshot_path = config.get_screenshot_path(scenario_id)

    try:
        screenshot_path.parent.mkdir(parents=True, exist_ok=True)
        await page.screenshot(
            path=str(screenshot_path),
            full_page=config.full_page_screenshots
        )
        logger.debug(f"  ->  Screenshot saved: {screenshot_path.name}")
        return screenshot_path

    except (PlaywrightError, OSError) as e:
        logger.warning(f"  ->  Screenshot failed for {scenario_id}: {e}")
        return None


# ============================================================================
# SCENARIO FLOW
# ============================================================================

async def run_scenario(
    page: Page,
    scenario: Scenario,
    config: SwiftTranslatorConfig
) -> ScenarioResult:
    """
    Run one scenario end to end and return what the translator produced.

    The comparison result is on ``ScenarioResult.matched``; asserting on it
    is left to the caller. Harness failures propagate after the screenshot
    has been taken.

    Raises:
        HarnessError: navigation, setup or output-timeout failure
    """
    logger.info("=" * 70)
    logger.info(f" {scenario.title}")
    logger.info("=" * 70)

    screenshot: Optional[Path] = None
    try:
        attempts = await navigate(page, config)

        target = await locate_input(page, config.input_selectors)
        await inject_input(target, scenario.input)
        injected = await read_input(target)

        await page.wait_for_timeout(config.settle_delay)

        actual = await wait_for_output(page, config)

    except HarnessError as e:
        logger.error(f"TC ID: {scenario.id} | {e.kind} failure | {e}")
        raise

    except PlaywrightError as e:
        logger.error(f"TC ID: {scenario.id} | browser failure | {e.message}")
        raise

    finally:
        screenshot = await capture_evidence(page, scenario.id, config)

    result = ScenarioResult(
        scenario=scenario,
        actual=actual,
        injected=injected,
        input_selector=target.selector,
        input_kind=target.kind,
        navigation_attempts=attempts,
        screenshot=screenshot
    )
    log_scenario_status(result, logger=logger)
    return result


# ============================================================================
# BROWSER LIFECYCLE
# ============================================================================

class TranslatorClient:
    """
    Browser owner for scenario runs.

    One browser per client; every scenario gets its own context and page
    so nothing (cookies, storage, DOM state) leaks between scenarios.
    """

    def __init__(self, config: Optional[SwiftTranslatorConfig] = None):
        """
        Initialize Playwright client.

        Args:
            config: Harness configuration (uses global config if None)
        """
        self.config = config or get_config()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self._contexts: list = []

    async def launch(self) -> Browser:
        """Launch the configured browser engine (idempotent)."""
        if self.browser:
            return self.browser

        self.playwright = await async_playwright().start()

        if self.config.browser_type == "firefox":
            browser_engine = self.playwright.firefox
        elif self.config.browser_type == "webkit":
            browser_engine = self.playwright.webkit
        else:
            browser_engine = self.playwright.chromium

        try:
            self.browser = await browser_engine.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo
            )
        except PlaywrightError:
            await self.playwright.stop()
            self.playwright = None
            raise

        logger.info(
            f"Browser launched: {self.config.browser_type} "
            f"(headless={self.config.headless}, viewport={self.config.viewport_width}x{self.config.viewport_height})"
        )
        return self.browser

    async def new_page(self) -> Page:
        """Create an isolated context and page for one scenario."""
        browser = await self.launch()
        context: BrowserContext = await browser.new_context(
            viewport=self.config.viewport_size
        )
        self._contexts.append(context)
        return await context.new_page()

    async def run(self, scenario: Scenario) -> ScenarioResult:
        """Run one scenario on a fresh page, closing its context afterwards."""
        page = await self.new_page()
        try:
            return await run_scenario(page, scenario, self.config)
        finally:
            await self._close_context(page.context)

    async def _close_context(self, context: BrowserContext):
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    async def close(self):
        """Close every open context, the browser and Playwright."""
        try:
            for context in list(self._contexts):
                await self._close_context(context)

            if self.browser:
                await self.browser.close()
                logger.info("Browser closed")

            if self.playwright:
                await self.playwright.stop()

        except PlaywrightError as e:
            logger.warning(f"Error closing browser: {e}")

        finally:
            self._contexts = []
            self.browser = None
            self.playwright = None

    async def __aenter__(self):
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
