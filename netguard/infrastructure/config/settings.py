"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a
dedicated configuration file (~/.netguard/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Dict

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".netguard"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "NETGUARD_"

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_API_TIMEOUT_S = 15.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_MAX_DELAY_MS = 10000
DEFAULT_HEALTH_TIMEOUT_S = 5.0
DEFAULT_HEALTH_PATH = "/health"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys (api: {base_url: x} -> api.base_url)."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def env_var_name(key: str) -> str:
    """Environment variable consulted for a dotted key: api.base_url -> NETGUARD_API_BASE_URL."""
    return f"{ENV_PREFIX}{key.upper().replace('.', '_')}"


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False): # override=False: ENV VARS take precedence
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.info("Configuration loading process completed.")


def _convert(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dotted key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (NETGUARD_ prefixed)
    3. YAML config / set_config
    4. Default value

    Args:
        key: The configuration key, e.g. 'retry.max_retries'
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _convert(os.environ[env_key])

    if key in _config:
        return _config[key]

    return default


def set_config(key: str, value: Any) -> None:
    """Sets a configuration value for the running process.

    Args:
        key: Configuration key (e.g., 'logging.level')
        value: Value to set
    """
    logger.debug(f"Setting config: {key} = {value}")
    _config[key] = value
    # Keep a stale environment value from shadowing the new one
    os.environ.pop(env_var_name(key), None)


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _get_number(key: str, default: float, cast: type) -> Any:
    value = get_config(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {key}: {value!r}. Using default {default}.")
        return cast(default)

# --- Convenience Functions ---

def get_base_url() -> str:
    """Backend root URL used by the API client and the health probe."""
    return str(get_config('api.base_url', DEFAULT_BASE_URL))

def get_api_timeout() -> float:
    return _get_number('api.timeout_seconds', DEFAULT_API_TIMEOUT_S, float)

def get_api_token() -> Optional[str]:
    token = get_config('api.token')
    return str(token) if token else None

def get_max_retries() -> int:
    retries = _get_number('retry.max_retries', DEFAULT_MAX_RETRIES, int)
    if retries < 0:
        logger.warning(f"retry.max_retries must be >= 0, got {retries}. Using default {DEFAULT_MAX_RETRIES}.")
        return DEFAULT_MAX_RETRIES
    return retries

def get_backoff_delays() -> tuple:
    """Returns (base_delay_ms, max_delay_ms)."""
    return (
        _get_number('retry.base_delay_ms', DEFAULT_BASE_DELAY_MS, int),
        _get_number('retry.max_delay_ms', DEFAULT_MAX_DELAY_MS, int),
    )

def get_health_timeout() -> float:
    return _get_number('health.timeout_seconds', DEFAULT_HEALTH_TIMEOUT_S, float)

def get_health_path() -> str:
    return str(get_config('health.path', DEFAULT_HEALTH_PATH))


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
