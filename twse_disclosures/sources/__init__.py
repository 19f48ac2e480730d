"""
Remote data sources.

- mops: TWSE Market Observation Post System listing and detail pages
"""

from twse_disclosures.sources.mops import encode_form, fetch_detail_page, fetch_listing

__all__ = [
    "encode_form",
    "fetch_listing",
    "fetch_detail_page",
]
