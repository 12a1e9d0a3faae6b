"""
Unified Configuration System for the Lingua practice client

This module provides a centralized configuration system that consolidates all client settings,
supports environment-based overrides, and provides type-safe configuration access.
"""

from dataclasses import dataclass, field
from typing import Optional, List
import streamlit as st
import os
from pathlib import Path


DEFAULT_API_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class APIConfig:
    """Remote service connection settings"""
    base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> 'APIConfig':
        """Load API config from environment variables"""
        return cls(
            base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL),
            timeout_seconds=float(os.getenv("API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
        )

    @classmethod
    def from_secrets(cls) -> 'APIConfig':
        """Load API config from Streamlit secrets"""
        # In test environment, prefer environment variables
        if os.getenv("PYTEST_CURRENT_TEST") is not None:
            return cls.from_env()

        try:
            return cls(
                base_url=st.secrets.get("API_BASE_URL", DEFAULT_API_BASE_URL),
                timeout_seconds=float(st.secrets.get("API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS))
            )
        except Exception:
            # Fallback to environment variables if secrets not available
            return cls.from_env()


@dataclass
class StorageConfig:
    """Credential storage; the token lives in the browser session state"""
    credential_key: str = "token"


@dataclass
class NavigationConfig:
    """Route names used by the composition root"""
    login_route: str = "login"
    home_route: str = "dialogue"


@dataclass
class SessionConfig:
    """Defaults for dialogue, records and word lookup requests"""
    default_target_lang: str = "en"
    default_page_size: int = 20
    default_source_lang: str = "en"
    default_word_target_lang: str = "zh"


@dataclass
class UIConfig:
    """User interface configuration"""
    app_title: str = "Lingua Practice"


@dataclass
class LoggingConfig:
    """Logging and monitoring configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    enable_file_logging: bool = True
    log_file: str = "logs/app.log"


@dataclass
class AppConfig:
    """Main application configuration"""
    api: APIConfig = field(default_factory=APIConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Environment settings
    environment: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load configuration with environment overrides"""
        config = cls()

        # Load API configuration from secrets/environment
        config.api = APIConfig.from_secrets()

        # Apply environment-specific overrides
        if config.environment == "production":
            config.debug = False
            config.logging.level = "WARNING"
        elif config.environment == "development":
            config.debug = True
            config.logging.level = "DEBUG"

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if not self.api.base_url:
            errors.append("API base URL is required")

        if self.api.timeout_seconds <= 0:
            errors.append("API timeout must be positive")

        if self.session.default_page_size < 1:
            errors.append("Default page size must be at least 1")

        if not self.storage.credential_key:
            errors.append("Credential storage key is required")

        # Check file paths exist
        if self.logging.enable_file_logging:
            log_dir = Path(self.logging.log_file).parent
            if not log_dir.exists():
                log_dir.mkdir(parents=True, exist_ok=True)

        return errors


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = AppConfig.load()

        # Validate configuration
        errors = _config.validate()
        if errors:
            import warnings
            for error in errors:
                warnings.warn(f"Configuration error: {error}")

    return _config


def reload_config() -> AppConfig:
    """Reload configuration (useful for testing)"""
    global _config
    _config = None
    return get_config()
