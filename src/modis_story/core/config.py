"""
Configuration module for the MODIS state data story.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # Data sources
        if os.getenv("RECORDS_PATH"):
            self.config.setdefault("data", {})["records_path"] = os.getenv("RECORDS_PATH")

        if os.getenv("BOUNDARIES_URL"):
            self.config.setdefault("data", {})["boundaries_url"] = os.getenv("BOUNDARIES_URL")

        if os.getenv("BOUNDARIES_PATH"):
            self.config.setdefault("data", {})["boundaries_path"] = os.getenv("BOUNDARIES_PATH")

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "data": ["records_path"],
            "api": ["timeout", "max_retries"],
            "processing": ["timezone"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        # Boundaries come from exactly one place: a local file wins over the URL
        data = self.config["data"]
        if not data.get("boundaries_path") and not data.get("boundaries_url"):
            data["boundaries_url"] = constants.DEFAULT_BOUNDARIES_URL

        month = self.get("story.month")
        if month is not None and not 1 <= int(month) <= 12:
            raise ValueError(f"Invalid story.month: {month} (must be 1-12)")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'data.records_path')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def records_path(self) -> str:
        """Get tabular dataset location (file path or http(s) URL)."""
        return self.get("data.records_path", "")

    @property
    def boundaries_url(self) -> Optional[str]:
        """Get boundary topology URL."""
        return self.get("data.boundaries_url")

    @property
    def boundaries_path(self) -> Optional[str]:
        """Get local boundary topology path."""
        return self.get("data.boundaries_path")

    @property
    def boundaries_object(self) -> str:
        """Get name of the topology object holding state geometries."""
        return self.get("data.boundaries_object", constants.BOUNDARIES_OBJECT)

    @property
    def api_timeout(self) -> int:
        """Get HTTP timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum HTTP retry attempts."""
        return self.get("api.max_retries", 3)

    @property
    def api_verify_ssl(self) -> bool:
        """Get HTTP SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", "UTC")

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    @property
    def log_console_level(self) -> str:
        """Get minimum level echoed to the console."""
        return self.get("logging.console_level", "INFO")

    @property
    def default_variable(self) -> str:
        """Get variable shown when the story opens."""
        return self.get("story.variable", constants.DEFAULT_VARIABLE)

    @property
    def default_year(self) -> int:
        """Get year shown when the story opens."""
        return int(self.get("story.year", constants.DEFAULT_YEAR))

    @property
    def default_month(self) -> int:
        """Get month shown when the story opens."""
        return int(self.get("story.month", constants.DEFAULT_MONTH))

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
