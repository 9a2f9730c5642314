"""Read-only walks over region trees.

Every walk is pre-order over the tree's insertion order: a key is tested
before its value is descended into, so the first match in document order
wins. Names are compared by their `normalize_string` form on both sides.
"""

from typing import Any, List, Optional

from postalcodes.domain.models.regions import RegionNode, RegionTree, is_leaf, is_subtree
from postalcodes.utils.string_utils import normalize_string


def find_region(region_name: str, tree: RegionTree) -> Optional[RegionNode]:
    """Returns the value (sub-tree or postal codes) of the first matching key."""
    target = normalize_string(region_name)
    return _find_region(target, tree)


def _find_region(target: str, tree: RegionTree) -> Optional[RegionNode]:
    for key, value in tree.items():
        if normalize_string(key) == target:
            return value
        if is_subtree(value):
            found = _find_region(target, value)
            if found is not None:
                return found
    return None


def find_region_path(region_name: str, tree: RegionTree) -> Optional[List[str]]:
    """Returns the keys from the root down to and including the first match."""
    target = normalize_string(region_name)
    return _find_region_path(target, tree, [])


def _find_region_path(target: str, tree: RegionTree, path: List[str]) -> Optional[List[str]]:
    for key, value in tree.items():
        current = path + [key]
        if normalize_string(key) == target:
            return current
        if is_subtree(value):
            found = _find_region_path(target, value, current)
            if found is not None:
                return found
    return None


def collect_postal_codes(node: Any) -> List[str]:
    """Flattens every leaf beneath `node`, depth-first in key order."""
    if is_leaf(node):
        return list(node)
    codes: List[str] = []
    if is_subtree(node):
        for value in node.values():
            codes.extend(collect_postal_codes(value))
    return codes


def collect_region_names(substring: str, tree: RegionTree) -> List[str]:
    """Returns every key containing `substring`, de-duplicated in discovery order."""
    needle = normalize_string(substring)
    matches: List[str] = []
    seen = set()

    def walk(node: RegionTree) -> None:
        for key, value in node.items():
            if needle in normalize_string(key) and key not in seen:
                seen.add(key)
                matches.append(key)
            if is_subtree(value):
                walk(value)

    walk(tree)
    return matches


def list_subregions(node: Any) -> Optional[List[str]]:
    """Immediate child names of a sub-tree; None for leaves and missing nodes."""
    if is_subtree(node):
        return list(node.keys())
    return None
