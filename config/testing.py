"""Testing environment configuration."""

from config.base import BaseConfig, StorageConfig


class TestingConfig(BaseConfig):
    """Configuration for testing environment."""

    def _setup_environment(self):
        """Setup testing-specific configuration."""
        self.debug = True
        self.environment = "testing"

        # Compact snapshots keep fixture files small
        self.storage = StorageConfig(
            data_dir=self.storage.data_dir,
            inventory_file=self.storage.inventory_file,
            accounts_file=self.storage.accounts_file,
            transactions_file=self.storage.transactions_file,
            students_file=self.storage.students_file,
            report_file=self.storage.report_file,
            encoding=self.storage.encoding,
            json_indent=None,
        )
