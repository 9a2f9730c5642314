"""postalcodes: hierarchical postal-code lookup backed by per-country JSON files.

Typical use goes through the composition root::

    service = create_postal_code_service(default_country="romania")
    await service.get_regions_by_postal_code("407055")
"""

from postalcodes.core.services.region_service import PostalCodeService
from postalcodes.domain.errors import ConfigurationError, DataAccessError, PostalCodeError
from postalcodes.domain.models.regions import DataKind
from postalcodes.factory import create_postal_code_service
from postalcodes.infrastructure.cache.file_cache_manager import FileCacheManager
from postalcodes.utils.string_utils import normalize_string

__all__ = [
    "ConfigurationError",
    "DataAccessError",
    "DataKind",
    "FileCacheManager",
    "PostalCodeError",
    "PostalCodeService",
    "create_postal_code_service",
    "normalize_string",
]
