"""
Configuration Module for Netflex Foundation.

This module provides configuration loading for the Netflex helpers.
Configuration is loaded from config.yml and supports Docker secrets
for the API key pair.

Usage:
    >>> from config import load_config
    >>> config = load_config()
    >>> config.get("netflex", {}).get("url")
    'https://api.netflexapp.com/v1'
"""
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml


logger = logging.getLogger(__name__)
DEFAULT_API_URL = "https://api.netflexapp.com/v1"
DEFAULT_TIMEOUT = 30


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from config.yml file.

    Args:
        config_path: Path to config.yml file. If None, looks in current directory
                    and parent directories.

    Returns:
        Dictionary containing configuration settings. Missing sections are
        filled in from get_default_config().

    Example:
        >>> config = load_config()
        >>> timeout = config["netflex"]["timeout"]
    """
    if config_path is None:
        # Try to find config.yml in current directory or parent directories
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            candidate = parent / "config.yml"
            if candidate.exists():
                config_path = str(candidate)
                break

        # If still not found, check the project root (where this file is located)
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            candidate = project_root / "config.yml"
            if candidate.exists():
                config_path = str(candidate)

    if config_path is None:
        logger.warning("config.yml not found, using default configuration")
        return get_default_config()

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Configuration file not found: {config_path}")
        return get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing configuration file: {e}")
        return get_default_config()

    if not isinstance(config, dict):
        logger.warning("Configuration root must be a mapping, using default configuration")
        return get_default_config()

    logger.info(f"Loaded configuration from {config_path}")
    return _merge_defaults(config)


def get_default_config() -> Dict[str, Any]:
    """Return default configuration when config.yml is not available.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "netflex": {
            "url": DEFAULT_API_URL,
            "timeout": DEFAULT_TIMEOUT,
            "public_key_file": "/run/secrets/netflex_public_key",
            "private_key_file": "/run/secrets/netflex_private_key"
        }
    }


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in any section missing from a loaded config with its defaults."""
    merged = get_default_config()
    for section, values in config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def read_secret_file(filepath: str) -> Optional[str]:
    """Read a Docker secret from a file.

    Docker secrets are mounted as files in /run/secrets/ directory.
    This function reads the content of the secret file.

    Args:
        filepath: Path to the secret file

    Returns:
        Content of the secret file (stripped of whitespace), or None if file doesn't exist

    Example:
        >>> key = read_secret_file("/run/secrets/netflex_private_key")
    """
    try:
        with open(filepath, "r") as f:
            return f.read().strip()
    except FileNotFoundError:
        logger.debug(f"Secret file not found: {filepath}")
        return None
    except OSError as e:
        logger.error(f"Error reading secret file {filepath}: {e}")
        return None
