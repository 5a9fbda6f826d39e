"""
Browser test suite for the Singlish-to-Sinhala web translator.

Drives the live translator with Playwright and compares its output with
the expected Sinhala text, one independent scenario at a time.
"""

__version__ = "1.0.0"

from .config import get_config, SwiftTranslatorConfig
from .models import InputKind, Scenario, ScenarioResult
from .playwright_client import TranslatorClient, run_scenario
from .scenarios import SCENARIOS, load_scenarios

__all__ = [
    "get_config",
    "SwiftTranslatorConfig",
    "InputKind",
    "Scenario",
    "ScenarioResult",
    "TranslatorClient",
    "run_scenario",
    "SCENARIOS",
    "load_scenarios",
]
