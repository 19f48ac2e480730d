"""
Domain models for disclosure records and resolution results.
"""

from twse_disclosures.domain.models import (
    DetailPage,
    DisclosureRecord,
    ResolutionResult,
    ResolutionStatus,
)

__all__ = [
    "DetailPage",
    "DisclosureRecord",
    "ResolutionResult",
    "ResolutionStatus",
]
