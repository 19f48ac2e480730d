"""
TWSE Market Observation Post System (MOPS) client.

Two requests per run shape:
- one bulk listing POST (fatal on failure)
- one detail page GET per matched record (never raises)
"""

import logging
from typing import Any
from urllib.parse import quote

import requests

from twse_disclosures.constants import (
    DETAIL_TIMEOUT,
    FORM_CONTENT_TYPE,
    LISTING_DEFAULT_PARAMS,
    LISTING_TIMEOUT,
    LISTING_URL,
    USER_AGENT,
)
from twse_disclosures.domain.models import DetailPage
from twse_disclosures.exceptions import FetchError

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone (besides alphanumerics)
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_form(params: dict[str, Any]) -> str:
    """
    Form-encode params the way the MOPS web front end does.

    Keys are used as-is; values are percent-encoded (UTF-8) with the
    encodeURIComponent safe set. Pairs are joined with "&" in dict order.

    Example:
        >>> encode_form({"SUBJECT": "自結", "lang": "TW"})
        'SUBJECT=%E8%87%AA%E7%B5%90&lang=TW'
    """
    return "&".join(
        f"{key}={quote(str(value), safe=_URI_COMPONENT_SAFE)}" for key, value in params.items()
    )


def listing_params(start_date: str, end_date: str) -> dict[str, Any]:
    """Fixed listing query with the run's date range filled in."""
    params = dict(LISTING_DEFAULT_PARAMS)
    params["SDATE"] = start_date
    params["EDATE"] = end_date
    return params


def fetch_listing(
    session: requests.Session,
    start_date: str,
    end_date: str,
    url: str = LISTING_URL,
    timeout: float = LISTING_TIMEOUT,
) -> list[dict[str, Any]]:
    """
    Fetch the disclosure listing for a date range.

    Args:
        session: HTTP session for requests
        start_date: SDATE, in the service's date format
        end_date: EDATE, in the service's date format
        url: Listing endpoint
        timeout: Request timeout in seconds

    Returns:
        Raw row mappings (keys in the service's own casing)

    Raises:
        FetchError: On transport errors, non-success status, or a body
            without a list of rows under "data". Not retried.
    """
    body = encode_form(listing_params(start_date, end_date))
    headers = {
        "User-Agent": USER_AGENT,
        "Content-Type": FORM_CONTENT_TYPE,
    }

    logger.info(f"Fetching data for date range: {start_date} to {end_date}")
    try:
        response = session.post(url, data=body.encode("utf-8"), headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Listing request to {url} failed: {e}")
        raise FetchError(f"Failed to fetch data: {e}") from e

    rows = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise FetchError("Failed to fetch data: response has no 'data' row list")

    bad_rows = [i for i, row in enumerate(rows) if not isinstance(row, dict)]
    if bad_rows:
        raise FetchError(f"Failed to fetch data: rows {bad_rows[:5]} are not mappings")

    logger.debug(f"Listing returned {len(rows)} rows")
    return rows


def fetch_detail_page(
    session: requests.Session,
    address: str,
    timeout: float = DETAIL_TIMEOUT,
) -> DetailPage:
    """
    Fetch a detail page.

    Args:
        session: HTTP session for requests
        address: Fully-formed detail page URL
        timeout: Request timeout in seconds

    Returns:
        DetailPage with markup, or with markup=None and the error text
    """
    try:
        response = session.get(address, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Error fetching detail data from {address}: {e}")
        return DetailPage(address, error=str(e))

    # MOPS pages are UTF-8 but do not always say so
    if not response.encoding or response.encoding.lower() == "iso-8859-1":
        response.encoding = "utf-8"
    return DetailPage(address, markup=response.text)
