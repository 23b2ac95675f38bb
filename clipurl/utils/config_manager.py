"""Configuration management module"""

import copy
import os
import yaml
from typing import Dict, Any, Optional
from loguru import logger

from ..core.errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    'clipboard': {
        'poll_interval_milliseconds': 5000,
    },
    'storage': {
        'links_db_file': None,
        'log_file': None,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


class ConfigManager:
    """Manages application configuration"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Optional path to a YAML configuration file
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_config()

    def _load_defaults(self):
        """Load default configuration"""
        self.config = copy.deepcopy(DEFAULT_CONFIG)

    def _load_config(self):
        """Load user configuration"""
        if self.config_path is None:
            return

        if not os.path.exists(self.config_path):
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config {self.config_path}") from e

        if not isinstance(user_config, dict):
            raise ConfigError(f"Config file must contain a mapping: {self.config_path}")

        # Merge with defaults
        self._merge_config(self.config, user_config)
        logger.info(f"Loaded user configuration from {self.config_path}")

    def _merge_config(self, base: Dict, updates: Dict):
        """
        Recursively merge configuration dictionaries

        Args:
            base: Base configuration
            updates: Updates to apply
        """
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value

        Args:
            key: Configuration key (dot notation supported)
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        # Navigate to the parent
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        logger.debug(f"Set config: {key} = {value}")

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration"""
        return copy.deepcopy(self.config)

    def validate(self) -> None:
        """
        Validate configuration

        Raises:
            ConfigError: If a value is missing or out of range
        """
        interval = self.get('clipboard.poll_interval_milliseconds')
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise ConfigError(f"Poll interval must be a positive integer, got {interval!r}")

        db_file = self.get('storage.links_db_file')
        log_file = self.get('storage.log_file')
        if bool(db_file) == bool(log_file):
            raise ConfigError("Exactly one of storage.links_db_file and storage.log_file must be set")

        level = self.get('logging.level')
        try:
            logger.level(str(level).upper())
        except ValueError as e:
            raise ConfigError(f"Unknown log level: {level!r}") from e
