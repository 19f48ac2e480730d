"""
Record matching: stock id -> listing record.

The listing is order-preserving, so when a company id appears more than
once the first row is the one that counts.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from twse_disclosures.domain.models import DisclosureRecord

logger = logging.getLogger(__name__)


def to_records(rows: Iterable[Mapping[str, Any]]) -> list[DisclosureRecord]:
    """Wrap normalized rows as DisclosureRecords, in listing order."""
    return [DisclosureRecord.from_fields(dict(row)) for row in rows]


def build_record_index(records: Iterable[DisclosureRecord]) -> dict[str, DisclosureRecord]:
    """
    Index records by company id.

    First occurrence wins; later duplicates are dropped (and logged).
    """
    index: dict[str, DisclosureRecord] = {}
    for record in records:
        if record.company_id in index:
            logger.debug(f"Ignoring duplicate listing row for {record.company_id}")
            continue
        index[record.company_id] = record
    return index


def match_record(
    records: Iterable[DisclosureRecord] | Mapping[str, DisclosureRecord],
    stock_id: str,
) -> DisclosureRecord | None:
    """
    Find the record for a stock id (exact, case-sensitive).

    Args:
        records: Records in listing order, or an index from build_record_index
        stock_id: Stock id to look up

    Returns:
        The first matching record, or None
    """
    if isinstance(records, Mapping):
        return records.get(stock_id)
    for record in records:
        if record.company_id == stock_id:
            return record
    return None
