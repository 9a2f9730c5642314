"""Composition root for postalcodes.

Wires settings, logging, the local file system adapter, the file cache and
the query service together. Explicit arguments override configuration.
"""

import logging
from pathlib import Path
from typing import Optional

from postalcodes.core.services.region_service import PostalCodeService
from postalcodes.domain.errors import ConfigurationError
from postalcodes.infrastructure.cache.file_cache_manager import FileCacheManager
from postalcodes.infrastructure.config.settings import (
    DEFAULT_CONFIG_FILE,
    get_cache_max_size,
    get_config,
    get_data_directory,
    get_default_country,
    load_configuration,
)
from postalcodes.infrastructure.filesystem.local_fs import LocalFileSystem
from postalcodes.infrastructure.monitoring.logger_setup import (
    DEFAULT_LOG_FORMAT,
    parse_log_level,
    setup_logging,
)

logger = logging.getLogger(__name__)


def create_postal_code_service(
    default_country: Optional[str] = None,
    directory: Optional[str] = None,
    max_cache_size: Optional[int] = None,
    configure_logging: bool = False,
    config_file: Path = DEFAULT_CONFIG_FILE,
) -> PostalCodeService:
    """Builds a ready-to-use PostalCodeService with its own cache.

    Raises:
        ConfigurationError: If no default country is given or configured,
            or the cache size is not positive.
    """
    load_configuration(config_file=config_file)

    if configure_logging:
        setup_logging(
            log_level=parse_log_level(get_config('logging.level', 'INFO')),
            log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
            log_file=get_config('logging.file'),
        )

    country = default_country or get_default_country()
    if not country:
        raise ConfigurationError("A default country is required.")

    cache = FileCacheManager(
        file_system=LocalFileSystem(),
        max_size=max_cache_size if max_cache_size is not None else get_cache_max_size(),
    )
    service = PostalCodeService(
        default_country=country,
        directory=directory or get_data_directory(),
        cache=cache,
    )
    logger.info(f"PostalCodeService ready (country={country}, directory={service.directory})")
    return service
