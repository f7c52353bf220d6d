"""Registry wiring from application configuration

Functions:
    create_storage(storage_config: dict) -> StorageBaseDAO
        Build the Storage DAO named by the 'storage' config section.
    create_geolocator(geolocation_config: dict) -> BaseGeolocator | None
        Build the geolocation lookup named by the 'geolocation' config section.
    create_registry(config: dict | None = None, rng: random.Random | None = None) -> Registry
        Build a ready-to-use Registry.

Example:
    Typical start-up of a view layer:

        >>> from linkshortener.app import create_registry
        >>> from linkshortener.utils import initialize_logging
        >>> log_buffer = initialize_logging()
        >>> registry = create_registry()
        >>> registry.statistics()
        {'total_links': 0, 'active_links': 0, 'expired_links': 0, 'total_clicks': 0}
"""

import random
import logging
from pathlib import Path

from beartype.roar import BeartypeCallHintViolation

from linkshortener.registry import Registry
from linkshortener.geolocation import BaseGeolocator, IpApiGeolocator
from linkshortener.dao.base import StorageBaseDAO
from linkshortener.dao.memory import MemoryStorageDAO
from linkshortener.dao.file import FileStorageDAO
from linkshortener.exceptions import BadConfigurationError
from linkshortener.types import AppConfiguration, StorageConfiguration
from linkshortener.utils.config import load_config, project_root
from linkshortener.utils.constants import DEFAULT_STORAGE_FILE


logger = logging.getLogger(__name__)


def _section(value: object, name: str) -> dict:
    if not isinstance(value, dict):
        raise BadConfigurationError(f"Config section '{name}' must be a mapping, got {type(value).__name__}.")
    return value


def create_storage(storage_config: StorageConfiguration) -> StorageBaseDAO:
    """Build the Storage DAO named by the 'storage' config section

    Args:
        storage_config (dict):
            The 'storage' section of the application configuration.

    Returns:
        StorageBaseDAO: a memory or file backed DAO.

    Raises:
        BadConfigurationError:
            If the section is not a mapping or the backend is unknown.
    """
    backend = _section(storage_config, 'storage').get('backend')

    if backend == 'memory':
        return MemoryStorageDAO()

    if backend == 'file':
        path = Path(storage_config.get('path') or DEFAULT_STORAGE_FILE)
        if not path.is_absolute():
            path = project_root() / path
        return FileStorageDAO(path=path)

    raise BadConfigurationError(f'Unknown storage backend {backend!r}.')


def create_geolocator(geolocation_config: AppConfiguration) -> BaseGeolocator | None:
    """Build the geolocation lookup, or None when geolocation is disabled"""
    if not _section(geolocation_config, 'geolocation').get('enabled', True):
        return None

    try:
        return IpApiGeolocator(url=geolocation_config['url'], timeout=geolocation_config['timeout'])
    except (KeyError, TypeError, ValueError, BeartypeCallHintViolation) as e:
        raise BadConfigurationError(f'Invalid geolocation configuration: {e}') from e


def create_registry(config: AppConfiguration | None = None, rng: random.Random | None = None) -> Registry:
    """Build a ready-to-use Registry

    This function follows this procedure:
    - Step 1: Load application config (unless given)
    - Step 2: Build the Storage DAO
    - Step 3: Build the geolocation lookup
    - Step 4: Build the Registry (which loads the stored collection)

    Args:
        config (dict | None):
            Application configuration as returned by load_config().
            Loaded from the environment if None.
        rng (random.Random | None):
            Random source for shortcodes and ids (seed it for deterministic output).

    Returns:
        Registry: registry holding the stored collection.

    Raises:
        BadConfigurationError:
            If the configuration is invalid.
    """
    # 1- Get application's config
    config = config if config is not None else load_config()

    # 2- Build the Storage DAO
    storage = create_storage(config.get('storage'))
    logger.debug('Using %s storage backend.', config['storage']['backend'])

    # 3- Build the geolocation lookup
    geolocator = create_geolocator(config.get('geolocation'))

    # 4- Build the Registry
    registry_config = _section(config.get('registry'), 'registry')
    try:
        return Registry(
            storage=storage,
            geolocator=geolocator,
            rng=rng,
            max_batch_size=registry_config['max_batch_size'],
            default_validity_minutes=registry_config['default_validity_minutes'],
            shortcode_length=registry_config['shortcode_length'],
            user_agent=registry_config['user_agent'],
        )
    except (KeyError, TypeError, ValueError, BeartypeCallHintViolation) as e:
        raise BadConfigurationError(f'Invalid registry configuration: {e}') from e
