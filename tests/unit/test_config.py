"""Unit tests for configuration module."""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from modulekit.assembly import assemble_module
from modulekit.core.config import (
    EnvironmentContext,
    Settings,
    configure_logging,
    load_environment,
)
from modulekit.core.domain import ModuleDescriptor, Product
from modulekit.core.domain.targets import Destination


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep host variables and .env files out of settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CI", raising=False)
    load_environment.cache_clear()
    yield
    load_environment.cache_clear()


class TestSettings:
    """Test cases for generator settings."""

    def test_default_settings(self) -> None:
        """Test default settings values."""
        settings = Settings()

        assert settings.organization_name == "com.example"
        assert settings.destination == Destination.IPHONE
        assert settings.deployment_targets == {"iOS": "18.0"}
        assert settings.base_settings == {}
        assert settings.log_level == "INFO"

    def test_ci_absent_is_false(self) -> None:
        """Test that a missing CI variable means local mode."""
        assert Settings().is_ci() is False

    def test_ci_one_is_true(self) -> None:
        """Test CI detection with the exact value "1"."""
        with patch.dict("os.environ", {"CI": "1"}):
            assert Settings().is_ci() is True

    @pytest.mark.parametrize("value", ["true", "0", "yes", "", "1 "])
    def test_ci_other_values_are_false(self, value: str) -> None:
        """Test that anything but "1" leaves CI mode off."""
        with patch.dict("os.environ", {"CI": value}):
            assert Settings().is_ci() is False

    @patch.dict("os.environ", {
        "MODULEKIT_ORGANIZATION_NAME": "io.acme",
        "MODULEKIT_DESTINATION": "iPad",
        "MODULEKIT_DEPLOYMENT_TARGETS": '{"iOS": "17.0"}',
        "MODULEKIT_BASE_SETTINGS": '{"SWIFT_VERSION": "6.0"}',
    })
    def test_custom_environment_variables(self) -> None:
        """Test custom environment variable loading."""
        settings = Settings()

        assert settings.organization_name == "io.acme"
        assert settings.destination == Destination.IPAD
        assert settings.deployment_targets == {"iOS": "17.0"}
        assert settings.base_settings == {"SWIFT_VERSION": "6.0"}

    def test_code_sign_settings_without_team(self) -> None:
        """Test code signing defaults."""
        assert Settings().code_sign_settings == {"CODE_SIGN_STYLE": "Automatic"}

    def test_code_sign_settings_with_team(self) -> None:
        """Test that a development team is added when configured."""
        with patch.dict("os.environ", {"MODULEKIT_DEVELOPMENT_TEAM": "ABCDE12345"}):
            assert Settings().code_sign_settings == {
                "CODE_SIGN_STYLE": "Automatic",
                "DEVELOPMENT_TEAM": "ABCDE12345",
            }


class TestEnvironmentContext:
    """Test cases for the frozen environment context."""

    def test_from_settings(self) -> None:
        """Test freezing settings into a context."""
        with patch.dict("os.environ", {"CI": "1", "MODULEKIT_PROJECT_NAME": "Shop"}):
            env = EnvironmentContext.from_settings(Settings())

        assert env.name == "Shop"
        assert env.organization_name == "com.example"
        assert env.is_ci is True
        assert env.code_sign_settings == {"CODE_SIGN_STYLE": "Automatic"}
        assert env.shared_xcconfig == "XCConfig/Shared.xcconfig"

    def test_context_is_immutable(self) -> None:
        """Test that context fields cannot be reassigned."""
        env = EnvironmentContext(organization_name="com.example")

        with pytest.raises(ValidationError):
            env.is_ci = True  # type: ignore[misc]

    def test_context_mappings_are_read_only(self) -> None:
        """Test that the settings mappings cannot be changed in place."""
        env = EnvironmentContext(
            organization_name="com.example",
            deployment_targets={"iOS": "18.0"},
            base_settings={"SWIFT_VERSION": "6.0"},
        )

        with pytest.raises(TypeError):
            env.base_settings["SWIFT_VERSION"] = "5.0"  # type: ignore[index]
        with pytest.raises(TypeError):
            env.deployment_targets["iOS"] = "1.0"  # type: ignore[index]
        with pytest.raises(TypeError):
            env.code_sign_settings["CODE_SIGN_STYLE"] = "Manual"  # type: ignore[index]

        assert env.base_settings == {"SWIFT_VERSION": "6.0"}
        assert env.deployment_targets == {"iOS": "18.0"}

    def test_context_copies_caller_mappings(self) -> None:
        """Test that later changes to the input dicts do not leak into the context."""
        base_settings = {"SWIFT_VERSION": "6.0"}
        env = EnvironmentContext(organization_name="com.example", base_settings=base_settings)
        descriptor = ModuleDescriptor(name="Login", product=Product.FRAMEWORK)

        first = assemble_module(descriptor, env)
        base_settings["SWIFT_VERSION"] = "5.0"
        second = assemble_module(descriptor, env)

        assert env.base_settings["SWIFT_VERSION"] == "6.0"
        assert first == second

    def test_ci_flag_not_reevaluated(self) -> None:
        """Test that CI detection happens once, at construction."""
        env = EnvironmentContext.from_settings(Settings())

        with patch.dict("os.environ", {"CI": "1"}):
            assert env.is_ci is False

    def test_load_environment_is_cached(self) -> None:
        """Test that the process-wide context is built once."""
        first = load_environment()

        with patch.dict("os.environ", {"CI": "1"}):
            second = load_environment()

        assert first is second
        assert second.is_ci is False


class TestConfigureLogging:
    """Test cases for logging setup."""

    def test_configure_logging_uses_level(self) -> None:
        """Test that the configured log level is passed to basicConfig."""
        with patch.dict("os.environ", {"MODULEKIT_LOG_LEVEL": "debug"}):
            settings = Settings()

        with patch("modulekit.core.config.logging.basicConfig") as basic_config:
            configure_logging(settings)

        basic_config.assert_called_once()
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_configure_logging_unknown_level_falls_back(self) -> None:
        """Test that an unknown level name falls back to INFO."""
        with patch.dict("os.environ", {"MODULEKIT_LOG_LEVEL": "chatty"}):
            settings = Settings()

        with patch("modulekit.core.config.logging.basicConfig") as basic_config:
            configure_logging(settings)

        assert basic_config.call_args.kwargs["level"] == logging.INFO
