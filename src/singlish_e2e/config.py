"""
Configuration management for the Singlish-to-Sinhala browser test suite.

Loads configuration from environment variables with sensible defaults.
One settings object is built at process start and passed down to the
harness; the execution profile (local vs CI) is derived from it once.
"""

import os
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_INPUT_SELECTORS = [
    'textarea',
    'input[type="text"]',
    '[contenteditable="true"]',
    '[placeholder*="Singlish"]',
    'div[role="textbox"]',
]

# The only handle on the translator's result. Tied to the site's utility
# classes, so it breaks whenever the target restyles its output panel.
DEFAULT_OUTPUT_SELECTOR = 'div.whitespace-pre-wrap.overflow-y-auto'


class ExecutionProfile(BaseModel):
    """How the suite is scheduled: parallel for local runs, sequential in CI."""

    model_config = ConfigDict(frozen=True)

    name: Literal["local", "ci"]
    workers: Union[int, Literal["auto"]]
    retries: int = Field(ge=0)
    forbid_only: bool

    @property
    def parallel(self) -> bool:
        return self.workers != 1


LOCAL_PROFILE = ExecutionProfile(name="local", workers="auto", retries=0, forbid_only=False)
CI_PROFILE = ExecutionProfile(name="ci", workers=1, retries=2, forbid_only=True)


class SwiftTranslatorConfig(BaseSettings):
    """Configuration for the translator test harness."""

    # Target site
    target_url: str = Field(
        default="https://www.swifttranslator.com/",
        description="Page hosting the Singlish input and the Sinhala output"
    )

    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="load",
        description="Page readiness condition for each navigation attempt"
    )

    # Navigation (in milliseconds)
    navigation_timeout: int = Field(
        default=90000,
        ge=1000,
        le=300000,
        description="Timeout for a single navigation attempt"
    )

    navigation_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total navigation attempts before the scenario fails"
    )

    navigation_retry_delay: int = Field(
        default=3000,
        ge=0,
        le=60000,
        description="Pause between navigation attempts"
    )

    # Element discovery
    input_selectors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INPUT_SELECTORS),
        min_length=1,
        description="Input surface strategies, tried in order"
    )

    output_selector: str = Field(
        default=DEFAULT_OUTPUT_SELECTOR,
        description="Container whose text is read as the translation"
    )

    # Output polling (in milliseconds)
    settle_delay: int = Field(
        default=2000,
        ge=0,
        le=60000,
        description="Pause after injection before polling for output"
    )

    output_timeout: int = Field(
        default=60000,
        ge=100,
        le=300000,
        description="Maximum time to wait for non-empty output"
    )

    stabilization_delay: int = Field(
        default=500,
        ge=0,
        le=10000,
        description="Pause after output appears, covers debounced re-renders"
    )

    # Browser Configuration
    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine"
    )

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode"
    )

    slow_mo: int = Field(
        default=0,
        ge=0,
        le=5000,
        description="Slow down browser actions by N milliseconds (for debugging)"
    )

    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=900, ge=320, le=2160)

    # Execution profile
    ci: Optional[bool] = Field(
        default=None,
        description="Use the CI profile (sequential, retries, no focused tests); unset falls back to CI"
    )

    workers: Optional[Union[int, Literal["auto"]]] = Field(
        default=None,
        description="Override the profile's worker count"
    )

    retries: Optional[int] = Field(
        default=None,
        ge=0,
        le=5,
        description="Override the profile's retry count"
    )

    # Paths
    workspace_root: Optional[Path] = Field(default=None)
    screenshot_dir: Optional[Path] = Field(
        default=None,
        description="Evidence directory, one screenshot per scenario id"
    )
    log_dir: Optional[Path] = Field(default=None)
    scenarios_file: Optional[Path] = Field(
        default=None,
        description="JSON file replacing the built-in scenario table"
    )

    full_page_screenshots: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="SINGLISH_E2E_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create necessary directories."""
        super().__init__(**kwargs)

        # CI providers export a bare CI variable; it only applies when no
        # source (kwargs, environment, .env) set the prefixed toggle.
        if self.ci is None:
            self.ci = os.getenv('CI', '').strip().lower() not in ('0', 'false', 'no', '')

        if self.workspace_root is None:
            self.workspace_root = Path.cwd()

        if self.screenshot_dir is None:
            self.screenshot_dir = self.workspace_root / "screenshots"

        if self.log_dir is None:
            self.log_dir = self.workspace_root / "logs"

        self._create_directories()

    def _create_directories(self):
        """Create necessary directories if they don't exist."""
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def profile(self) -> ExecutionProfile:
        """
        Execution profile for this run.

        Explicit ``workers``/``retries`` settings win over the profile
        defaults; ``forbid_only`` always follows the profile.
        """
        base = CI_PROFILE if self.ci else LOCAL_PROFILE
        updates = {}
        if self.workers is not None:
            updates['workers'] = self.workers
        if self.retries is not None:
            updates['retries'] = self.retries
        return base.model_copy(update=updates) if updates else base

    @property
    def viewport_size(self) -> dict:
        return {
            'width': self.viewport_width,
            'height': self.viewport_height
        }

    def get_screenshot_path(self, scenario_id: str) -> Path:
        """
        Get the evidence path for a scenario.

        Args:
            scenario_id: Stable scenario identifier (e.g. "Pos_Fun_0001")

        Returns:
            Path to ``<screenshot_dir>/<scenario_id>.png``
        """
        return self.screenshot_dir / f"{scenario_id}.png"

    def get_log_path(self, log_name: str = "singlish_e2e.log") -> Path:
        return self.log_dir / log_name


# Global configuration instance
_config: Optional[SwiftTranslatorConfig] = None


def get_config() -> SwiftTranslatorConfig:
    """
    Get the global configuration instance.

    Returns:
        SwiftTranslatorConfig instance
    """
    global _config
    if _config is None:
        _config = SwiftTranslatorConfig()
    return _config


def reload_config() -> SwiftTranslatorConfig:
    """Reload configuration from environment."""
    global _config
    _config = SwiftTranslatorConfig()
    return _config


def set_config(config: SwiftTranslatorConfig):
    """
    Set the global configuration instance.

    Args:
        config: SwiftTranslatorConfig instance to set
    """
    global _config
    _config = config


# Convenience functions for common configurations

def get_local_config() -> SwiftTranslatorConfig:
    """Local development run: parallel workers, no retries."""
    return SwiftTranslatorConfig(ci=False)


def get_ci_config() -> SwiftTranslatorConfig:
    """CI run: headless, sequential, bounded retries."""
    return SwiftTranslatorConfig(ci=True, headless=True, slow_mo=0)


def get_test_config(temp_dir: Path) -> SwiftTranslatorConfig:
    """
    Get test configuration.

    Loads settings from a .env file first, then lets environment variables
    override them.

    Args:
        temp_dir: Directory for logs and screenshots. An explicit
            SINGLISH_E2E_SCREENSHOT_DIR still wins for screenshots, so live
            evidence launched from the CLI lands where the user expects.

    Returns:
        SwiftTranslatorConfig for the test session
    """
    from dotenv import load_dotenv
    env_file = Path.cwd() / '.env'
    if env_file.exists():
        load_dotenv(env_file)

    screenshot_dir_env = os.getenv('SINGLISH_E2E_SCREENSHOT_DIR')
    screenshot_dir = Path(screenshot_dir_env) if screenshot_dir_env else temp_dir / "screenshots"

    return SwiftTranslatorConfig(
        workspace_root=temp_dir,
        screenshot_dir=screenshot_dir,
        log_dir=temp_dir / "logs"
    )
