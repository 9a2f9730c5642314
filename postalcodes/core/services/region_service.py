"""Core service answering region and postal-code questions for a country.

Country data comes in two files per country, both read through the
injected FileCache:

- ``{country}-postal-codes.json``: the nested region tree.
- ``{country}-lookup.json``: the flat postal code -> region lookup table.

Every query returns None when nothing can be answered. Whether that was
because the data could not be loaded or because the term had no match is
logged, not raised.
"""

import logging
import os
from typing import Any, List, Optional, Union

# Domain Layer Imports
from postalcodes.domain.errors import ConfigurationError
from postalcodes.domain.interfaces.cache import FileCache
from postalcodes.domain.models.common import CountryName, DirectoryPath, LookupTable, PostalCode
from postalcodes.domain.models.regions import (
    DataKind,
    QueryOutcome,
    RegionNode,
    RegionTree,
    is_subtree,
)
from postalcodes.core.services import region_traversal
from postalcodes.utils.string_utils import normalize_string

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIRECTORY = "src/data"

KindArg = Union[DataKind, str]


class PostalCodeService:
    """Orchestrates region lookups over cached per-country data files."""

    def __init__(
        self,
        default_country: Optional[str] = None,
        directory: Optional[str] = None,
        cache: Optional[FileCache] = None,
    ):
        """Initializes the PostalCodeService.

        Args:
            default_country: Country used when a query does not name one. Required.
            directory: Directory holding the country JSON files.
            cache: FileCache to read through. A private FileCacheManager by default.

        Raises:
            ConfigurationError: If no default country is given.
        """
        if not default_country:
            raise ConfigurationError("A default country is required.")

        self.default_country = CountryName(default_country)
        self.directory = DirectoryPath(directory or DEFAULT_DATA_DIRECTORY)
        if cache is None:
            from postalcodes.infrastructure.cache.file_cache_manager import FileCacheManager
            cache = FileCacheManager()
        self.cache = cache
        logger.debug(
            f"PostalCodeService initialized (default_country={self.default_country}, "
            f"directory={self.directory})"
        )

    # --- Data access ---

    @staticmethod
    def file_name_for(country_name: str, kind: KindArg = DataKind.POSTAL_CODES) -> str:
        """Builds ``{normalized-country}-{kind}.json``."""
        try:
            data_kind = DataKind(kind)
        except ValueError:
            raise ValueError(
                f"Unknown data kind {kind!r}; expected one of {[k.value for k in DataKind]}"
            ) from None
        return f"{normalize_string(country_name)}-{data_kind.value}.json"

    async def _read_data_from_file(self, file_name: str) -> Optional[Any]:
        try:
            return await self.cache.get_file_contents(self.directory, file_name)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading file {file_name} in {self.directory}: {e}")
            return None

    def _target(self, country_name: Optional[str]) -> str:
        return country_name if country_name is not None else self.default_country

    def _log_outcome(self, operation: str, term: str, country: str, outcome: QueryOutcome) -> None:
        if outcome is QueryOutcome.NO_DATA:
            logger.info(f"{operation}({term!r}): no data available for country {country!r}")
        elif outcome is QueryOutcome.NOT_FOUND:
            logger.debug(f"{operation}({term!r}): not found in {country!r}")

    async def get_country(
        self,
        country_name: Optional[str] = None,
        kind: KindArg = DataKind.POSTAL_CODES,
    ) -> Optional[Union[RegionTree, LookupTable]]:
        """Loads the raw region tree or lookup table for a country.

        Returns:
            The parsed document, or None if it could not be read.

        Raises:
            ValueError: If `kind` is neither "postal-codes" nor "lookup".
                A misspelt kind is a caller bug, so it is not folded into None.
        """
        file_name = self.file_name_for(self._target(country_name), kind)
        return await self._read_data_from_file(file_name)

    async def _get_region_tree(self, country_name: str) -> Optional[RegionTree]:
        tree = await self.get_country(country_name, DataKind.POSTAL_CODES)
        if tree is not None and not is_subtree(tree):
            logger.error(f"Region tree for {country_name!r} is not a JSON object; ignoring it.")
            return None
        return tree

    async def _get_lookup_table(self, country_name: str) -> Optional[LookupTable]:
        table = await self.get_country(country_name, DataKind.LOOKUP)
        if table is None:
            return None
        if not is_subtree(table) or not is_subtree(table.get("postalCodeMap")):
            logger.error(f"Lookup table for {country_name!r} has no postalCodeMap object; ignoring it.")
            return None
        return table

    # --- Queries ---

    async def get_region_by_country(
        self, region_name: str, country_name: Optional[str] = None
    ) -> Optional[RegionNode]:
        """Returns the sub-tree or postal-code list for a region.

        Asking for the country itself returns the whole tree.
        """
        target_country = self._target(country_name)
        tree = await self._get_region_tree(target_country)
        if tree is None:
            self._log_outcome("get_region_by_country", region_name, target_country, QueryOutcome.NO_DATA)
            return None
        if region_name == target_country:
            return tree

        region = region_traversal.find_region(region_name, tree)
        if region is None:
            self._log_outcome("get_region_by_country", region_name, target_country, QueryOutcome.NOT_FOUND)
        return region

    async def get_regions_by_postal_code(
        self, postal_code: str, country_name: Optional[str] = None
    ) -> Optional[List[str]]:
        """Maps a postal code to its hierarchy, e.g. ``["California", "Los Angeles"]``."""
        target_country = self._target(country_name)
        table = await self._get_lookup_table(target_country)
        if table is None:
            self._log_outcome("get_regions_by_postal_code", postal_code, target_country, QueryOutcome.NO_DATA)
            return None

        region_id = table["postalCodeMap"].get(PostalCode(postal_code))
        regions = table.get("regions")
        if not isinstance(region_id, str) or not is_subtree(regions) or region_id not in regions:
            self._log_outcome("get_regions_by_postal_code", postal_code, target_country, QueryOutcome.NOT_FOUND)
            return None
        return regions[region_id]

    async def get_subregions_of_region(
        self, region_name: str, country_name: Optional[str] = None
    ) -> Optional[List[str]]:
        """Immediate child names of a region. None for leaves and unknown regions."""
        region = await self.get_region_by_country(region_name, country_name)
        return region_traversal.list_subregions(region)

    async def get_postal_codes_by_region(
        self, region_name: str, country_name: Optional[str] = None
    ) -> Optional[List[str]]:
        """Every postal code beneath a region, depth-first in document order."""
        region = await self.get_region_by_country(region_name, country_name)
        if region is None:
            return None
        return region_traversal.collect_postal_codes(region)

    async def validate_postal_code(
        self, postal_code: str, country_name: Optional[str] = None
    ) -> bool:
        """True if the postal code exists in the country's lookup table.

        Always a bool; unreadable data counts as invalid.
        """
        table = await self._get_lookup_table(self._target(country_name))
        if table is None:
            return False
        return postal_code in table["postalCodeMap"]

    async def get_region_hierarchy(
        self, region_name: str, country_name: Optional[str] = None
    ) -> Optional[List[str]]:
        """Path of names from the tree root down to the region, inclusive."""
        target_country = self._target(country_name)
        tree = await self._get_region_tree(target_country)
        if tree is None:
            self._log_outcome("get_region_hierarchy", region_name, target_country, QueryOutcome.NO_DATA)
            return None

        path = region_traversal.find_region_path(region_name, tree)
        if path is None:
            self._log_outcome("get_region_hierarchy", region_name, target_country, QueryOutcome.NOT_FOUND)
        return path

    async def search_regions(
        self, substring: str, country_name: Optional[str] = None
    ) -> Optional[List[str]]:
        """Region names containing `substring` (normalized), in discovery order."""
        target_country = self._target(country_name)
        tree = await self._get_region_tree(target_country)
        if tree is None:
            self._log_outcome("search_regions", substring, target_country, QueryOutcome.NO_DATA)
            return None

        matches = region_traversal.collect_region_names(substring, tree)
        if not matches:
            self._log_outcome("search_regions", substring, target_country, QueryOutcome.NOT_FOUND)
            return None
        return matches

    async def get_all_postal_codes(self, country_name: Optional[str] = None) -> Optional[List[str]]:
        """Every postal code known to the country's lookup table."""
        target_country = self._target(country_name)
        table = await self._get_lookup_table(target_country)
        if table is None:
            self._log_outcome("get_all_postal_codes", "*", target_country, QueryOutcome.NO_DATA)
            return None
        return list(table["postalCodeMap"].keys())

    # --- Cache control ---

    def invalidate_country(self, country_name: Optional[str] = None, kind: Optional[KindArg] = None) -> int:
        """Drops cached files for a country so the next query re-reads them.

        Args:
            country_name: Defaults to the configured default country.
            kind: Only drop this file kind; both kinds when None.

        Returns:
            Number of cache entries removed.
        """
        target_country = self._target(country_name)
        kinds = [DataKind(kind)] if kind is not None else list(DataKind)
        removed = 0
        for data_kind in kinds:
            path = os.path.join(self.directory, self.file_name_for(target_country, data_kind))
            if self.cache.invalidate_entry(path):
                removed += 1
        logger.debug(f"Invalidated {removed} cached file(s) for {target_country!r}")
        return removed

    def clear_cache(self) -> None:
        """Drops every cached file."""
        self.cache.clear_cache()
