"""
Data models for disclosure records and per-stock resolution results.

These dataclasses represent a listing row after field normalization,
the outcome of a detail page fetch, and the final result for a stock id.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from twse_disclosures.constants import COMPANY_ID_KEY, HYPERLINK_KEY


@dataclass(frozen=True)
class DisclosureRecord:
    """One row of the bulk listing, keyed by canonical field names."""

    company_id: str
    hyperlink: str
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_fields(cls, fields: dict[str, Any]) -> "DisclosureRecord":
        """
        Build a record from an already-normalized row.

        Args:
            fields: Row mapping with canonical (camelCase) keys

        Returns:
            DisclosureRecord; missing companyId/hyperlink become empty strings
        """
        company_id = fields.get(COMPANY_ID_KEY)
        hyperlink = fields.get(HYPERLINK_KEY)
        return cls(
            company_id="" if company_id is None else str(company_id),
            hyperlink="" if hyperlink is None else str(hyperlink),
            fields=dict(fields),
        )


@dataclass(frozen=True)
class DetailPage:
    """Result of fetching a detail page. markup is None when there is no data."""

    address: str
    markup: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.markup is not None


class ResolutionStatus(str, Enum):
    """How a stock id was resolved."""

    MATCHED = "matched"  # record found, detail table extracted
    NO_DETAIL = "no_detail"  # record found, no detail table
    UNMATCHED = "unmatched"  # no record in the listing


@dataclass(frozen=True)
class ResolutionResult:
    """Final result for one stock id, at its position in the input list."""

    stock_id: str
    status: ResolutionStatus
    index: int = 0
    detail_fragment: str | None = None

    @classmethod
    def matched(cls, stock_id: str, detail_fragment: str, index: int = 0) -> "ResolutionResult":
        return cls(stock_id, ResolutionStatus.MATCHED, index, detail_fragment)

    @classmethod
    def no_detail(cls, stock_id: str, index: int = 0) -> "ResolutionResult":
        return cls(stock_id, ResolutionStatus.NO_DETAIL, index)

    @classmethod
    def unmatched(cls, stock_id: str, index: int = 0) -> "ResolutionResult":
        return cls(stock_id, ResolutionStatus.UNMATCHED, index)

    @property
    def has_detail(self) -> bool:
        return self.status is ResolutionStatus.MATCHED and self.detail_fragment is not None
