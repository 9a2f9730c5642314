"""Region tree model and query vocabulary.

A region tree is the parsed `{country}-postal-codes.json` document: an
insertion-ordered mapping from region name to either a nested tree or a
list of postal codes (a leaf). Python dicts keep JSON key order, so the
parsed document is used directly; `is_leaf` / `is_subtree` are the only
places the node kind is decided.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Union

# Recursive alias: name -> sub-tree | postal codes
RegionTree = Dict[str, Any]
RegionNode = Union[RegionTree, List[str]]


class DataKind(str, enum.Enum):
    """Which per-country file a request needs. Value doubles as the file suffix."""

    POSTAL_CODES = "postal-codes"
    LOOKUP = "lookup"


class QueryOutcome(str, enum.Enum):
    """Internal result classification, kept for logging."""

    NOT_FOUND = "not_found"  # data loaded, term had no match
    NO_DATA = "no_data"      # data could not be loaded


def is_leaf(node: Any) -> bool:
    """True if the node is a postal-code list."""
    return isinstance(node, list)


def is_subtree(node: Any) -> bool:
    """True if the node is a nested region mapping."""
    return isinstance(node, dict)


@dataclass
class CacheEntry:
    """A cached, parsed file plus the metadata used to validate it."""

    path: str
    mtime_ns: int
    data: Any
    size: int  # bytes of the compact JSON serialization of `data`


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time snapshot of cache counters."""

    hits: int
    misses: int
    evictions: int
    entries: int
    current_size: int
    max_size: int
