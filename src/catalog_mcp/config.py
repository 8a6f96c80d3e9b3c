"""
Configuration management for catalog-mcp.

Settings come from an optional YAML file and are overridden by environment
variables.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from catalog_mcp.errors import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "catalog-mcp.yaml"

STRATEGIES = ("direct", "cached", "batched")
DISCOVERY_MODES = ("static", "directory")
ERROR_FORMATS = ("standard", "simple")

DEFAULTS: Dict[str, Any] = {
    "base_url": None,
    "token": None,
    "strategy": "direct",
    "cache_ttl": 300.0,
    "cache_max_entries": None,
    "batch_flush_delay": 0.0,
    "discovery": "static",
    "tools_dir": None,
    "error_format": "standard",
    "require_auth": False,
    "log_level": "INFO",
}

ENV_VARS = {
    "BACKSTAGE_BASE_URL": "base_url",
    "BACKSTAGE_TOKEN": "token",
    "CATALOG_MCP_STRATEGY": "strategy",
    "CATALOG_MCP_CACHE_TTL": "cache_ttl",
    "CATALOG_MCP_CACHE_MAX_ENTRIES": "cache_max_entries",
    "CATALOG_MCP_BATCH_FLUSH_DELAY": "batch_flush_delay",
    "CATALOG_MCP_DISCOVERY": "discovery",
    "CATALOG_MCP_TOOLS_DIR": "tools_dir",
    "CATALOG_MCP_ERROR_FORMAT": "error_format",
    "CATALOG_MCP_REQUIRE_AUTH": "require_auth",
    "LOG_LEVEL": "log_level",
}


class Config:
    """Manages configuration for the catalog-mcp server."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the configuration.

        Args:
            config_file: Path to a YAML file (uses catalog-mcp.yaml in the working directory if None)
            environ: Environment mapping (uses os.environ if None)
        """
        self.config_file = Path(config_file) if config_file else Path(DEFAULT_CONFIG_FILE)
        self.config: Dict[str, Any] = dict(DEFAULTS)
        self.config.update(self._load_config())
        self.load_from_env(os.environ if environ is None else environ)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file."""
        if not self.config_file.exists():
            log.debug(f"No config file at {self.config_file}, using defaults")
            return {}
        try:
            with open(self.config_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            log.error(f"Error parsing YAML config file {self.config_file}: {e}")
            return {}
        except OSError as e:
            log.error(f"Error loading config file {self.config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            log.error(f"Config file {self.config_file} must contain a mapping")
            return {}

        unknown = set(data) - set(DEFAULTS)
        if unknown:
            log.warning(f"Ignoring unknown config keys in {self.config_file}: {', '.join(sorted(unknown))}")
        return {key: value for key, value in data.items() if key in DEFAULTS}

    def load_from_env(self, environ: Mapping[str, str]) -> None:
        """Load configuration from environment variables."""
        for env_name, key in ENV_VARS.items():
            value = environ.get(env_name)
            if value is not None and value != "":
                self.config[key] = value

    def get_setting(self, setting: str, default: Any = None) -> Any:
        """Get a specific setting."""
        value = self.config.get(setting)
        return default if value is None else value

    @property
    def base_url(self) -> Optional[str]:
        return self.config.get("base_url")

    @property
    def token(self) -> Optional[str]:
        return self.config.get("token")

    def require_base_url(self) -> str:
        if not self.base_url:
            raise ConfigurationError("BACKSTAGE_BASE_URL is not configured")
        return self.base_url

    @property
    def strategy(self) -> str:
        return self._choice("strategy", STRATEGIES)

    @property
    def discovery(self) -> str:
        return self._choice("discovery", DISCOVERY_MODES)

    @property
    def error_format(self) -> str:
        return self._choice("error_format", ERROR_FORMATS)

    @property
    def cache_ttl(self) -> float:
        return self._number("cache_ttl", float)

    @property
    def cache_max_entries(self) -> Optional[int]:
        if self.config.get("cache_max_entries") is None:
            return None
        return self._number("cache_max_entries", int)

    @property
    def batch_flush_delay(self) -> float:
        return self._number("batch_flush_delay", float)

    @property
    def tools_dir(self) -> Optional[Path]:
        value = self.config.get("tools_dir")
        return Path(value) if value else None

    @property
    def require_auth(self) -> bool:
        value = self.config.get("require_auth")
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    @property
    def log_level(self) -> str:
        return str(self.config.get("log_level") or "INFO").upper()

    def _choice(self, key: str, choices: tuple) -> str:
        value = str(self.config.get(key)).strip().lower()
        if value not in choices:
            raise ConfigurationError(
                f"Invalid value for {key}: '{self.config.get(key)}' (expected one of: {', '.join(choices)})"
            )
        return value

    def _number(self, key: str, kind: type) -> Any:
        try:
            return kind(self.config.get(key))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid value for {key}: '{self.config.get(key)}'") from e
