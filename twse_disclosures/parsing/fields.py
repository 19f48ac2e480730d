"""
Field key normalization for MOPS listing rows.

MOPS returns upper snake case keys (CO_ID, HYPERLINK, ...). Everything past
this module refers to canonical camelCase names (coId, hyperlink, companyId).
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

_SEPARATORS = re.compile(r"[-_\s]+")


def to_camel_case(key: str) -> str:
    """
    Convert a field key to canonical camelCase.

    Examples:
        >>> to_camel_case("CO_ID")
        'coId'
        >>> to_camel_case("SUBJECT")
        'subject'
        >>> to_camel_case("companyId")
        'companyId'
    """
    segments = [s for s in _SEPARATORS.split(str(key)) if s]
    if not segments:
        return ""

    if len(segments) == 1:
        word = segments[0]
        if word.isupper() or word.islower():
            return word.lower()
        # Already mixed case: only the leading character is canonicalized
        return word[0].lower() + word[1:]

    head, *rest = segments
    return head.lower() + "".join(s[0].upper() + s[1:].lower() for s in rest)


def normalize_keys(row: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rewrite every key of a row to camelCase. Values are not touched.

    If two keys collapse to the same canonical name, the first one wins.
    """
    normalized: dict[str, Any] = {}
    for key, value in row.items():
        normalized.setdefault(to_camel_case(key), value)
    return normalized


def normalize_records(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Normalize the keys of every row, preserving row order."""
    return [normalize_keys(row) for row in rows]
