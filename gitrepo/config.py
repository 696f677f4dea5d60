#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import toml
import yaml

from .exceptions import ConfigError

logger = logging.getLogger("gitrepo")

CONFIG_ENV_VAR = "GITREPO_CONFIG"
ENV_PREFIX = "GITREPO_"
CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_dir():
    """Get the directory holding the gitrepo configuration."""
    return Path.home() / '.gitrepo'


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITREPO_CONFIG environment variable
    2. ~/.gitrepo/config.{json,toml,yaml,yml}

    Falls back to ~/.gitrepo/config.json, which is where save_config writes.
    """
    if CONFIG_ENV_VAR in os.environ:
        path = Path(os.environ[CONFIG_ENV_VAR])
        if path.exists():
            return path
        logger.debug(f"{CONFIG_ENV_VAR} points at missing file {path}, ignoring")

    config_dir = get_config_dir()
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    return config_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "git": {
            "executable": "git",
            "default_remote": "origin",
            "primary_branch": "master",
        },
        "logging": {
            "level": "WARNING",
            "format": "%(levelname)s: %(message)s",
        },
    }


def _read_config_file(config_path):
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                return tomllib.load(f)
        if suffix in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                return yaml.safe_load(f) or {}
        with open(config_path, 'r') as f:
            return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}", str(config_path)) from e


def load_config():
    """Load configuration from file.

    Starts from get_default_config(), merges the config file on top of it
    when one exists, then applies GITREPO_* environment overrides.

    Raises:
        ConfigError: If the config file exists but cannot be parsed.
    """
    config_path = get_config_path()
    config = get_default_config()

    if config_path.exists():
        file_config = _read_config_file(config_path)
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping", str(config_path))
        config = merge_configs(config, file_config)
        logger.debug(f"Loaded config from {config_path}")

    return apply_env_overrides(config)


def save_config(config):
    """Save configuration to file.

    The format follows the suffix of get_config_path().

    Returns:
        Path the configuration was written to.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif suffix in ['.yaml', '.yml']:
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _coerce_env_value(value):
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITREPO_SECTION_KEY
    For example: GITREPO_GIT_DEFAULT_REMOTE=upstream

    Keys may themselves contain underscores, so the longest matching key
    wins at each level. Unknown keys are ignored.
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == CONFIG_ENV_VAR:
            continue

        key_parts = env_key[len(ENV_PREFIX):].lower().split('_')
        typed_value = _coerce_env_value(value)

        current_level = config
        i = 0
        while i < len(key_parts):
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i:i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if not isinstance(current_level[matched_key], dict):
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


def configure_logging(config=None):
    """Attach a stderr handler to the gitrepo logger.

    The library never configures logging on import; applications that want
    gitrepo's log output call this once.

    Returns:
        The configured "gitrepo" logger.
    """
    if config is None:
        config = load_config()
    logging_config = config.get("logging", {})

    level = logging_config.get("level", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_gitrepo_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(logging_config.get("format", "%(levelname)s: %(message)s")))
    handler._gitrepo_handler = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
