"""
Production environment configuration overrides
"""

from dataclasses import dataclass
from config.app_config import AppConfig, APIConfig


@dataclass
class ProductionConfig(AppConfig):
    """Production environment configuration"""

    def __post_init__(self):
        self.api = APIConfig.from_secrets()

        # Production-specific overrides
        self.environment = "production"
        self.debug = False

        # Production logging - less verbose, focus on errors
        self.logging.level = "INFO"
        self.logging.enable_file_logging = True
        self.logging.log_file = "logs/prod-app.log"

        self.ui.app_title = "Lingua Practice"

        # Larger record pages on production dashboards
        self.session.default_page_size = 50


def get_production_config() -> ProductionConfig:
    """Get production-specific configuration"""
    return ProductionConfig()
