"""
Detail page address building and disclosure table extraction.

A listing record's hyperlink carries the endpoint and query parameters of its
detail page. They are merged over a fixed parameter template; the page's
content lives in the first table with class "hasBorder".
"""

import logging
from urllib.parse import quote_plus, urljoin

import requests
from bs4 import BeautifulSoup

from twse_disclosures.constants import (
    DETAIL_BASE_URL,
    DETAIL_DEFAULT_PARAMS,
    DETAIL_TABLE_SELECTOR,
    DETAIL_TIMEOUT,
)
from twse_disclosures.sources.mops import fetch_detail_page

logger = logging.getLogger(__name__)


def split_hyperlink(hyperlink: str) -> tuple[str, str]:
    """
    Split a record's hyperlink into (path, query).

    A bare query string ("a=1&b=2", "?a=1", "&a=1") has an empty path; a
    partial or absolute URL ("/mops/web/t05st01?a=1") keeps its path.
    """
    link = (hyperlink or "").split("#", 1)[0]
    if "?" in link:
        path, query = link.split("?", 1)
    elif "=" in link:
        path, query = "", link
    else:
        path, query = link, ""
    return path, query.lstrip("&")


def parse_hyperlink(hyperlink: str) -> dict[str, str]:
    """
    Parse the query parameters carried by a record's hyperlink.

    Values are kept exactly as they appear in the hyperlink (still
    percent-encoded), so escapes in any charset pass through untouched.
    Blank values are kept.
    """
    _, query = split_hyperlink(hyperlink)
    if "=" not in query:
        return {}
    params: dict[str, str] = {}
    for token in query.split("&"):
        if not token:
            continue
        key, _, value = token.partition("=")
        params[key] = value
    return params


def build_detail_address(base_url: str, hyperlink: str) -> str:
    """
    Build the full detail page URL for a record.

    Args:
        base_url: Detail endpoint without a query string
        hyperlink: The record's hyperlink field

    Returns:
        The hyperlink's endpoint (resolved against base_url) or base_url, then
        "?" and the template params overridden by the hyperlink's params
    """
    path, _ = split_hyperlink(hyperlink)
    endpoint = urljoin(base_url, path) if path else base_url
    params = {key: quote_plus(value) for key, value in DETAIL_DEFAULT_PARAMS.items()}
    params.update(parse_hyperlink(hyperlink))
    query = "&".join(f"{key}={value}" for key, value in params.items())
    return f"{endpoint}?{query}"


def extract_fragment(markup: str | None) -> str | None:
    """
    Extract the disclosure table from detail page markup.

    Returns:
        Serialized markup of the first table.hasBorder (tags included), or None
    """
    if not markup:
        return None
    try:
        # html.parser keeps stray text inside <table> where MOPS puts it
        soup = BeautifulSoup(markup, "html.parser")
        table = soup.select_one(DETAIL_TABLE_SELECTOR)
    except Exception as e:
        logger.warning(f"Could not parse detail page: {e}")
        return None
    return str(table) if table is not None else None


def fetch_detail_fragment(
    session: requests.Session,
    hyperlink: str,
    base_url: str = DETAIL_BASE_URL,
    timeout: float = DETAIL_TIMEOUT,
) -> str | None:
    """
    Fetch a record's detail page and extract its disclosure table.

    Never raises: a failed fetch, an unparseable page, or a page without the
    table all return None.
    """
    try:
        address = build_detail_address(base_url, hyperlink)
    except Exception as e:
        logger.warning(f"Could not build detail address from {hyperlink!r}: {e}")
        return None

    try:
        page = fetch_detail_page(session, address, timeout=timeout)
    except Exception as e:
        logger.warning(f"Unexpected error fetching {address}: {e}")
        return None
    if not page.ok:
        return None
    return extract_fragment(page.markup)
