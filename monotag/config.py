#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Optional

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("monotag")

CONFIG_FILENAMES = ['.monotag.json', '.monotag.toml', '.monotag.yaml', '.monotag.yml']


def get_config_path(search_dir: str = '.') -> Optional[Path]:
    """Get the path to the configuration file.

    Checks in order:
    1. MONOTAG_CONFIG environment variable
    2. .monotag.{json,toml,yaml,yml} in search_dir

    Returns None when there is no config file.
    """
    if 'MONOTAG_CONFIG' in os.environ:
        path = Path(os.environ['MONOTAG_CONFIG']).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file from MONOTAG_CONFIG not found: {path}")
        return path

    for filename in CONFIG_FILENAMES:
        path = Path(search_dir) / filename
        if path.exists():
            return path

    return None


def read_config_file(config_path: Path) -> dict:
    """Read a JSON, TOML or YAML config file into a dict."""
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        else:
            # Default to JSON format
            with open(config_path, 'r') as f:
                file_config = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return file_config


def load_config(config_path: Optional[str] = None, search_dir: str = '.'):
    """Load configuration from file.

    Args:
        config_path: Explicit config file (overrides discovery)
        search_dir: Directory searched for .monotag.* files
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = get_config_path(search_dir)

    # Start with default config
    config = get_default_config()

    if path is not None:
        logger.debug(f"Loading config from {path}")
        config = merge_configs(config, read_config_file(path))

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    if not isinstance(config.get('tagging'), dict):
        raise ConfigError("'tagging' config section must be a mapping")

    return config


def get_default_config():
    """Get default configuration."""
    return {
        "tagging": {
            "repository_path": ".",
            "projects": "**/*.csproj",
            "tag_prefix": "v",
            "create_global_tags": False,
            "global_tag_strategy": "major-only",
            "tag_message_template": "Release {type} {version}",
            "dry_run": False,
            "fail_on_existing": False,
            "include_test_projects": False,
            "include_non_packable": False,
            "only_changed": True,
            "sign_tags": False
        },
        "resolver": {
            "command": "mr-version",
            "timeout": None
        },
        "git": {
            "timeout": None
        },
        "identity": {
            "name": "GitHub Actions",
            "email": "actions@github.com"
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        }
    }


def configure_logging(config: dict, debug: bool = False) -> None:
    """Apply the logging section (or --debug) to the package logger."""
    logging_config = config.get('logging', {})
    level_name = 'DEBUG' if debug else str(logging_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    fmt = logging_config.get('format')
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Merge override_config into a copy of base_config, recursing into sections."""
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


TRUE_VALUES = ('true', 'yes', 'on')
FALSE_VALUES = ('false', 'no', 'off')


def parse_bool(value, name: str = 'value') -> bool:
    """
    Interpret a config or input value as a boolean.

    Accepts real booleans and the strings true/yes/on and false/no/off
    (any case).

    Raises:
        ConfigError: for anything else
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ConfigError(f"'{name}' must be a boolean (true/false), got {value!r}")


def coerce_setting(name: str, value, default):
    """
    Coerce a config value to the type of its default.

    Strings accept numbers (``tag_prefix: 2`` becomes ``"2"``), booleans
    go through parse_bool. Other types pass through unchanged.

    Raises:
        ConfigError: if the value cannot be converted
    """
    if isinstance(default, bool):
        return parse_bool(value, name)
    if isinstance(default, str):
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise ConfigError(f"'{name}' must be a string, got {value!r}")
    return value


def _env_value(value: str):
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    if value.isdigit():
        return int(value)
    return value


def _match_key(section: dict, parts: list):
    """Longest key of section whose underscore-split form prefixes parts."""
    best = None
    for key in section:
        key_parts = key.split('_')
        if parts[:len(key_parts)] == key_parts and (best is None or len(key_parts) > len(best.split('_'))):
            best = key
    return best


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.

    Variables follow the pattern MONOTAG_<SECTION>_<KEY>, e.g.
    MONOTAG_TAGGING_DRY_RUN=true or MONOTAG_RESOLVER_TIMEOUT=60. Keys may
    contain underscores themselves; the longest existing key wins.
    Variables that name no existing key are ignored.
    """
    env_prefix = "MONOTAG_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        parts = env_key[len(env_prefix):].lower().split('_')
        section = config
        while parts:
            key = _match_key(section, parts)
            if key is None:
                break
            parts = parts[len(key.split('_')):]
            if not parts:
                section[key] = _env_value(value)
            elif isinstance(section[key], dict):
                section = section[key]
            else:
                break

    return config
