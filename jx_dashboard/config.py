"""
Configuration management for jx-dashboard

Supports configuration from:
1. Default values (code)
2. Config file (~/.jx-dashboard/config.yaml)
3. Environment variables (JX_DASHBOARD_*)
4. Command-line arguments (highest priority)

Configuration precedence (highest to lowest):
CLI args > ENV vars > Config file > Defaults
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from .models import DEFAULT_SECRET_NAME, DEFAULT_SERVICE_NAME

logger = structlog.get_logger(__name__)

ENV_PREFIX = "JX_DASHBOARD_"


class Config:
    """Configuration manager for jx-dashboard"""

    # Default configuration
    DEFAULTS = {
        # Which objects the dashboard command reads
        "dashboard": {
            "service_name": DEFAULT_SERVICE_NAME,
            "secret_name": DEFAULT_SECRET_NAME,
        },
        "kubectl": {
            "timeout_seconds": 10.0,
        },
        "output": {
            "colors_enabled": True,
        },
        "logging": {
            "enabled": True,
            "level": "INFO",  # DEBUG, INFO, WARNING, ERROR
            "file": None,
            "max_size_mb": 10,
            "backup_count": 3,
        },
    }

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration

        Args:
            config_file: Path to config file (default: ~/.jx-dashboard/config.yaml)
        """
        self.config_file = config_file or self._get_default_config_path()
        self.config = self._load_configuration()

    def _get_default_config_path(self) -> str:
        """Get default config file path"""
        return str(Path.home() / ".jx-dashboard" / "config.yaml")

    def _load_configuration(self) -> Dict[str, Any]:
        """Load configuration from all sources

        Returns:
            Merged configuration dictionary
        """
        config = copy.deepcopy(self.DEFAULTS)

        file_config = self._load_from_file()
        if file_config:
            config = self._deep_merge(config, file_config)

        env_config = self._load_from_env()
        config = self._deep_merge(config, env_config)

        return config

    def _load_from_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from YAML file

        Returns:
            Configuration dictionary or None if file doesn't exist or is unreadable
        """
        config_path = Path(self.config_file).expanduser()

        if not config_path.exists():
            logger.debug("Config file not found", path=self.config_file)
            return None

        try:
            with open(config_path, "r") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config file", path=self.config_file, error=str(e))
            return None

        if config is not None and not isinstance(config, dict):
            logger.error("Config file must contain a mapping", path=self.config_file)
            return None

        logger.debug("Loaded configuration from file", path=self.config_file)
        return config or {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables

        Environment variables use the format JX_DASHBOARD_SECTION_KEY=value,
        e.g. JX_DASHBOARD_DASHBOARD_SERVICE_NAME=my-dashboard

        Only known sections are read so that flags such as JX_DASHBOARD_DEBUG
        do not leak into the configuration.
        """
        config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            section, _, setting = key[len(ENV_PREFIX):].lower().partition("_")
            if section not in self.DEFAULTS or not setting:
                continue

            config.setdefault(section, {})[setting] = self._parse_env_value(value)

        return config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to bool, int, float or str"""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(self, base: Dict, overlay: Dict) -> Dict:
        """Deep merge two dictionaries (overlay takes precedence)"""
        result = copy.deepcopy(base)

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with dot notation

        Args:
            key: Configuration key (e.g., "dashboard.service_name")
            default: Default value if key not found
        """
        value = self.config

        try:
            for k in key.split("."):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with dot notation"""
        keys = key.split(".")
        config = self.config

        for k in keys[:-1]:
            config = config.setdefault(k, {})

        config[keys[-1]] = value


# Global config instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get global config instance"""
    global _global_config
    if _global_config is None:
        _global_config = Config()
    return _global_config


def reload_config() -> Config:
    """Reload configuration from all sources"""
    global _global_config
    _global_config = Config()
    return _global_config
