"""
Test environment-specific configurations
"""

import pytest

from config.environments import get_environment_config
from config.environments.development import get_development_config
from config.environments.production import get_production_config


class TestEnvironmentConfigs:
    """Test environment-specific configuration loading"""

    def test_development_config(self):
        """Test development configuration"""
        config = get_development_config()

        assert config.environment == "development"
        assert config.debug is True
        assert config.logging.level == "DEBUG"
        assert "DEV" in config.ui.app_title
        assert "dev" in config.logging.log_file

    def test_production_config(self):
        """Test production configuration"""
        config = get_production_config()

        assert config.environment == "production"
        assert config.debug is False
        assert config.logging.level == "INFO"
        assert "DEV" not in config.ui.app_title
        assert config.session.default_page_size == 50

    @pytest.mark.parametrize("env,debug", [("development", True), ("production", False)])
    def test_environment_selection(self, monkeypatch, env, debug):
        """Test environment selection through APP_ENV"""
        monkeypatch.setenv("APP_ENV", env)

        config = get_environment_config()

        assert config.environment == env
        assert config.debug is debug

    def test_default_environment(self, monkeypatch):
        """Test default environment when APP_ENV is not set"""
        monkeypatch.delenv("APP_ENV", raising=False)

        assert get_environment_config().environment == "development"

    def test_unknown_environment_uses_base_config(self, monkeypatch):
        """Test fallback to the base configuration"""
        monkeypatch.setenv("APP_ENV", "staging")

        config = get_environment_config()

        assert config.environment == "staging"
        assert config.ui.app_title == "Lingua Practice"

    def test_config_validation(self, tmp_path):
        """Test that all environment configs pass validation"""
        for config in (get_development_config(), get_production_config()):
            config.logging.log_file = str(tmp_path / "logs" / "app.log")
            assert config.validate() == []
