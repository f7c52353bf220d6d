"""Utility functions for application configuration management.

Configuration is read from a local YAML file selected by the current
application environment (`APP_ENV`) and merged over built-in defaults:

    config/
    ├── local.yaml
    ├── dev.yaml
    └── prod.yaml

An explicit file can be chosen with the `LINKSHORTENER_CONFIG` environment
variable. A config file follows this structure (every key is optional):

    storage:
      backend: file           # memory | file
      path: data/shortened_urls.json   # file backend, relative to the project root
    registry:
      max_batch_size: 5
      default_validity_minutes: 30
      shortcode_length: 6
      user_agent: Unknown
    geolocation:
      enabled: true
      url: https://ipapi.co/json/
      timeout: 3.0

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    default_config() -> dict
        Return a fresh copy of the built-in configuration.

    load_config(path=None) -> dict
        Load the YAML configuration for the current environment and merge it
        over the built-in defaults.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['storage']['backend']
    'file'
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.constants import (
    APP_ENV_ENV,
    PROJECT_ROOT_ENV,
    CONFIG_PATH_ENV,
    MAX_BATCH_SIZE,
    DEFAULT_VALIDITY_MINUTES,
    DEFAULT_SHORTCODE_LENGTH,
    DEFAULT_STORAGE_FILE,
    DEFAULT_GEOLOCATION_URL,
    DEFAULT_GEOLOCATION_TIMEOUT,
    UNKNOWN_USER_AGENT,
)


logger = logging.getLogger(__name__)

STORAGE_BACKENDS = frozenset({'memory', 'file'})

_DEFAULT_CONFIG: dict[str, Any] = {
    'storage': {
        'backend': 'file',
        'path': DEFAULT_STORAGE_FILE,
    },
    'registry': {
        'max_batch_size': MAX_BATCH_SIZE,
        'default_validity_minutes': DEFAULT_VALIDITY_MINUTES,
        'shortcode_length': DEFAULT_SHORTCODE_LENGTH,
        'user_agent': UNKNOWN_USER_AGENT,
    },
    'geolocation': {
        'enabled': True,
        'url': DEFAULT_GEOLOCATION_URL,
        'timeout': DEFAULT_GEOLOCATION_TIMEOUT,
    },
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable, falling back to the current
    working directory.

    Returns:
        Path:
            Absolute path to the project root directory.
    """
    return Path(os.environ.get(PROJECT_ROOT_ENV, os.getcwd())).resolve()


def default_config() -> dict[str, Any]:
    """Return a fresh (deep) copy of the built-in configuration"""
    return copy.deepcopy(_DEFAULT_CONFIG)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge `override` into `base` (in place) and return `base`"""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _config_path(path: str | os.PathLike | None) -> Path:
    if path is not None:
        return Path(path)
    if os.environ.get(CONFIG_PATH_ENV):
        return Path(os.environ[CONFIG_PATH_ENV])
    return project_root() / 'config' / f'{app_env()}.yaml'


def load_config(path: str | os.PathLike | None = None) -> dict[str, Any]:
    """Load the application configuration

    The file is looked up in this order:
        1. the explicit `path` argument;
        2. the `LINKSHORTENER_CONFIG` environment variable;
        3. `<project root>/config/<APP_ENV>.yaml`.

    A missing file is not an error: the built-in defaults are returned.

    Args:
        path (str | os.PathLike | None):
            Optional explicit path to a YAML config file.

    Returns:
        dict: configuration with 'storage', 'registry' and 'geolocation' sections.

    Raises:
        BadConfigurationError:
            If the file is not valid YAML, is not a mapping, holds a
            section that is not a mapping (e.g. an empty `registry:`), or
            names an unknown storage backend.

    Example:
        >>> config = load_config('config/dev.yaml')
        >>> config['storage']['path']
        'data/shortened_urls.json'
    """
    config = default_config()
    config_path = _config_path(path)

    try:
        with config_path.open('r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug('No config file found. Using defaults.', extra={'configPath': str(config_path)})
        document = None
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Malformed YAML in config file {config_path}.') from e

    if document is not None:
        if not isinstance(document, dict):
            raise BadConfigurationError(f'Config file {config_path} must contain a mapping at the top level.')
        _merge(config, document)
        logger.debug('Loaded config file.', extra={'configPath': str(config_path), 'appEnv': app_env()})

    for section in _DEFAULT_CONFIG:
        if not isinstance(config[section], dict):
            raise BadConfigurationError(f"Section '{section}' in config file {config_path} must be a mapping.")

    backend = config['storage'].get('backend')
    if backend not in STORAGE_BACKENDS:
        raise BadConfigurationError(
            f'Unknown storage backend {backend!r} (expected one of: {", ".join(sorted(STORAGE_BACKENDS))}).'
        )

    return config
