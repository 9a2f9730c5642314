"""Defines common Value Objects used across different domain contexts.

These objects represent simple values like file paths, country names,
postal codes and region identifiers, ensuring consistency and type safety.
"""

from typing import NewType, List, Dict, TypedDict

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
FilePath = NewType("FilePath", str)           # Path to a data file
DirectoryPath = NewType("DirectoryPath", str)  # Directory holding data files
CountryName = NewType("CountryName", str)      # e.g. "romania", "United States"
PostalCode = NewType("PostalCode", str)        # Kept as string, leading zeros matter
RegionId = NewType("RegionId", str)            # Opaque id used by lookup tables

# === Caching Context ===
CacheKey = NewType("CacheKey", str)            # Normalized file path

# --- Structured Data ---
class LookupTable(TypedDict):
    """Flat postal-code lookup document for one country.

    Keys mirror the JSON document so the raw table can be handed back as-is.
    """
    postalCodeMap: Dict[PostalCode, RegionId]  # postal code -> region id
    regions: Dict[RegionId, List[str]]         # region id -> [state, county, city, ...]
