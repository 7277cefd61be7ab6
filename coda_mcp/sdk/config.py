"""Configuration management for coda-mcp.

Settings come from ~/.config/coda-mcp/config.yaml (optional) with the process
environment taking precedence:

    CODA_API_TOKEN      API token (required to talk to Coda)
    CODA_API_BASE_URL   Override for the API base URL
    LOG_LEVEL           Root log level (DEBUG, INFO, ...)
"""

import os
import sys
import yaml
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://coda.io/apis/v1"
TOKEN_ENV_VAR = "CODA_API_TOKEN"
BASE_URL_ENV_VAR = "CODA_API_BASE_URL"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    env_path = os.getenv("CODA_MCP_CONFIG_DIR")
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "coda-mcp"


def get_config_file_path() -> Path:
    """
    Get the path to the config file, respecting the CODA_MCP_CONFIG_FILE env var.
    """
    env_path = os.getenv("CODA_MCP_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return get_config_dir() / "config.yaml"


DEFAULT_CONFIG = {
    "api": {
        "token": None,
        "base_url": DEFAULT_BASE_URL,
        "timeout": 30.0,
    },
    "logging": {
        "level": "INFO",
    },
}


def _defaults() -> dict:
    return _deep_merge({}, DEFAULT_CONFIG)


def load_config() -> dict:
    """Load the coda-mcp configuration from the config file."""
    config_file = get_config_file_path()
    if not config_file.exists():
        logger.debug(f"Config file not found at {config_file}, using default config.")
        return _defaults()

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error loading config file {config_file}: {e}")
        return _defaults()
    except OSError as e:
        logger.error(f"Could not read config file {config_file}: {e}")
        return _defaults()

    if not isinstance(config, dict):
        return _defaults()
    return _deep_merge(_defaults(), config)


def get_config_value(key: str, default: Any = None, config: Optional[dict] = None) -> Any:
    """Retrieve a configuration value using a dot-separated key."""
    config_data = config if config is not None else load_config()
    keys = key.split('.')
    value = config_data
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def _deep_merge(base: dict, new: dict) -> dict:
    """Recursively merge dictionary `new` into `base`."""
    for k, v in new.items():
        if isinstance(v, dict):
            existing = base.get(k)
            base[k] = _deep_merge(existing if isinstance(existing, dict) else {}, v)
        else:
            base[k] = v
    return base


@dataclass(frozen=True)
class Settings:
    """Effective settings after merging the config file and environment."""
    api_token: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    log_level: str = "INFO"

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigurationError(
                f"{TOKEN_ENV_VAR} environment variable is required. "
                "Get your API token from: https://coda.io/account"
            )
        return self.api_token

    @property
    def masked_token(self) -> Optional[str]:
        if not self.api_token:
            return None
        return f"{self.api_token[:4]}...{self.api_token[-4:]}" if len(self.api_token) > 12 else "****"


def load_settings() -> Settings:
    """Build Settings from the config file, overridden by the environment."""
    config = load_config()

    timeout = get_config_value("api.timeout", config=config)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid api.timeout value {timeout!r}")
        timeout = DEFAULT_CONFIG["api"]["timeout"]

    base_url = os.getenv(BASE_URL_ENV_VAR) or get_config_value("api.base_url", config=config) or DEFAULT_BASE_URL
    log_level = os.getenv(LOG_LEVEL_ENV_VAR) or get_config_value("logging.level", config=config) or "INFO"

    return Settings(
        api_token=os.getenv(TOKEN_ENV_VAR) or get_config_value("api.token", config=config),
        base_url=str(base_url).rstrip("/"),
        timeout=timeout,
        log_level=str(log_level).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the process.

    Logs go to stderr because stdout carries the MCP stdio transport.
    """
    if not logging.root.handlers:
        logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                            format='%(asctime)s - %(levelname)s - %(message)s',
                            stream=sys.stderr)
    # Suppress per-request INFO logs from the HTTP stack
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
