"""
Test configuration loading from different sources.

SwiftTranslatorConfig loads from:
1. Constructor arguments (highest priority)
2. Environment variables (SINGLISH_E2E_*, plus the bare CI flag)
3. .env file
4. Default values (lowest priority)
"""

import pytest

from singlish_e2e.config import (
    CI_PROFILE,
    DEFAULT_INPUT_SELECTORS,
    DEFAULT_OUTPUT_SELECTOR,
    LOCAL_PROFILE,
    SwiftTranslatorConfig,
    get_ci_config,
    get_config,
    get_local_config,
    get_test_config,
    reload_config,
    set_config,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no profile variables set and no .env file in reach."""
    for name in ("CI", "SINGLISH_E2E_CI", "SINGLISH_E2E_WORKERS", "SINGLISH_E2E_RETRIES",
                 "SINGLISH_E2E_BROWSER_TYPE", "SINGLISH_E2E_HEADLESS", "SINGLISH_E2E_SCREENSHOT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults_follow_target_site(clean_env):
    config = SwiftTranslatorConfig()

    assert config.target_url == "https://www.swifttranslator.com/"
    assert config.wait_until == "load"
    assert config.navigation_attempts == 3
    assert config.navigation_timeout == 90000
    assert config.navigation_retry_delay == 3000
    assert config.settle_delay == 2000
    assert config.output_timeout == 60000
    assert config.stabilization_delay == 500
    assert config.input_selectors == DEFAULT_INPUT_SELECTORS
    assert config.output_selector == DEFAULT_OUTPUT_SELECTOR == 'div.whitespace-pre-wrap.overflow-y-auto'


def test_directories_created_on_demand(clean_env, tmp_path):
    config = SwiftTranslatorConfig()

    assert config.screenshot_dir == tmp_path / "screenshots"
    assert config.screenshot_dir.is_dir()
    assert config.log_dir.is_dir()
    assert config.get_screenshot_path("Pos_Fun_0001") == tmp_path / "screenshots" / "Pos_Fun_0001.png"


def test_local_profile_by_default(clean_env):
    profile = SwiftTranslatorConfig().profile

    assert profile == LOCAL_PROFILE
    assert profile.parallel
    assert profile.retries == 0
    assert not profile.forbid_only


@pytest.mark.parametrize("value", ["true", "1", "yes"])
def test_bare_ci_variable_selects_ci_profile(clean_env, value):
    clean_env.setenv("CI", value)

    profile = SwiftTranslatorConfig().profile

    assert profile == CI_PROFILE
    assert profile.workers == 1
    assert not profile.parallel
    assert profile.retries == 2
    assert profile.forbid_only


def test_bare_ci_false_keeps_local_profile(clean_env):
    clean_env.setenv("CI", "false")

    assert SwiftTranslatorConfig().profile == LOCAL_PROFILE


def test_prefixed_variable_wins_over_bare_ci(clean_env):
    clean_env.setenv("CI", "true")
    clean_env.setenv("SINGLISH_E2E_CI", "false")

    assert SwiftTranslatorConfig().ci is False


def test_env_file_ci_false_wins_over_bare_ci(clean_env, tmp_path):
    (tmp_path / ".env").write_text("SINGLISH_E2E_CI=false\n", encoding="utf-8")
    clean_env.setenv("CI", "true")

    config = SwiftTranslatorConfig()

    assert config.ci is False
    assert config.profile == LOCAL_PROFILE


def test_env_file_ci_true_without_bare_ci(clean_env, tmp_path):
    (tmp_path / ".env").write_text("SINGLISH_E2E_CI=true\n", encoding="utf-8")

    assert SwiftTranslatorConfig().profile == CI_PROFILE


def test_unset_ci_resolves_to_bool(clean_env):
    assert SwiftTranslatorConfig().ci is False


def test_profile_overrides(clean_env):
    clean_env.setenv("SINGLISH_E2E_CI", "true")
    clean_env.setenv("SINGLISH_E2E_RETRIES", "0")

    profile = SwiftTranslatorConfig().profile

    assert profile.name == "ci"
    assert profile.retries == 0
    assert profile.workers == 1
    assert profile.forbid_only


def test_config_overrides_with_env_vars(clean_env):
    clean_env.setenv("SINGLISH_E2E_BROWSER_TYPE", "webkit")
    clean_env.setenv("SINGLISH_E2E_HEADLESS", "false")

    config = SwiftTranslatorConfig()

    assert config.browser_type == "webkit"
    assert config.headless is False


def test_config_loads_from_env_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text("SINGLISH_E2E_OUTPUT_TIMEOUT=30000\n", encoding="utf-8")

    assert SwiftTranslatorConfig().output_timeout == 30000


def test_config_overrides_with_constructor(clean_env):
    clean_env.setenv("SINGLISH_E2E_BROWSER_TYPE", "webkit")

    config = SwiftTranslatorConfig(browser_type="firefox", ci=True)

    assert config.browser_type == "firefox"
    assert config.profile == CI_PROFILE


def test_invalid_values_rejected(clean_env):
    with pytest.raises(ValueError):
        SwiftTranslatorConfig(navigation_attempts=0)
    with pytest.raises(ValueError):
        SwiftTranslatorConfig(wait_until="whenever")
    with pytest.raises(ValueError):
        SwiftTranslatorConfig(input_selectors=[])


def test_preset_configs(clean_env):
    assert get_local_config().profile.name == "local"

    ci_config = get_ci_config()
    assert ci_config.profile.name == "ci"
    assert ci_config.headless is True


def test_test_config_keeps_output_under_temp_dir(clean_env, tmp_path):
    config = get_test_config(tmp_path / "out")

    assert config.screenshot_dir == tmp_path / "out" / "screenshots"
    assert config.log_dir == tmp_path / "out" / "logs"
    assert config.log_dir.is_dir()
    # nothing lands in the working directory
    assert sorted(p.name for p in tmp_path.iterdir()) == ["out"]


def test_test_config_honours_screenshot_dir_variable(clean_env, tmp_path):
    clean_env.setenv("SINGLISH_E2E_SCREENSHOT_DIR", str(tmp_path / "evidence"))

    config = get_test_config(tmp_path / "out")

    assert config.screenshot_dir == tmp_path / "evidence"
    assert config.screenshot_dir.is_dir()
    assert config.log_dir == tmp_path / "out" / "logs"


def test_global_config_accessors(clean_env):
    original = get_config()
    try:
        custom = SwiftTranslatorConfig(output_timeout=1234)
        set_config(custom)
        assert get_config() is custom

        reloaded = reload_config()
        assert reloaded is get_config()
        assert reloaded.output_timeout == 60000
    finally:
        set_config(original)
