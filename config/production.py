"""Production environment configuration."""

import logging

from config.base import BaseConfig

logger = logging.getLogger(__name__)


class ProductionConfig(BaseConfig):
    """Configuration for production environment."""

    def _setup_environment(self):
        """Setup production-specific configuration."""
        self.debug = False
        self.environment = "production"

        # DEBUG logs every mutation; keep production quieter
        if self.logging.repository_level == "DEBUG":
            logger.warning("Repository DEBUG logging requested in production, using INFO")
            self.logging.repository_level = "INFO"

    def validate(self):
        """Production validation also requires an absolute data directory."""
        errors = super().validate()

        if not self.storage.path_for("").is_absolute():
            errors.append(f"Data directory must be absolute in production: {self.storage.data_dir}")

        return errors
