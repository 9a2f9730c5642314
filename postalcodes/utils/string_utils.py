"""Name normalization used for every region and country comparison."""

import re
import unicodedata

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9.-]")


def normalize_string(value: str) -> str:
    """Folds a name into its comparison form.

    Trims, lower-cases, strips decomposed accent marks, turns whitespace runs
    into single hyphens and drops anything outside ``[a-z0-9.-]``.

    >>> normalize_string("  Bistrița Năsăud ")
    'bistrita-nasaud'
    """
    folded = unicodedata.normalize("NFD", value.strip().lower())
    folded = _COMBINING_MARKS.sub("", folded)
    folded = _WHITESPACE.sub("-", folded)
    return _DISALLOWED.sub("", folded)
