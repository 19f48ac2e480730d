"""
Pytest configuration and shared fixtures for twse_disclosures tests.
"""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from twse_disclosures.config import get_settings

DETAIL_TABLE = '<table class="hasBorder"><tr><td>X</td></tr></table>'


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test away from any real .env and with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "START_DATE",
        "END_DATE",
        "STOCK_IDS",
        "LISTING_URL",
        "DETAIL_BASE_URL",
        "REQUEST_TIMEOUT",
        "DETAIL_TIMEOUT",
        "MAX_WORKERS",
        "OUTPUT_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # CLI tests install console handlers on the package logger
    pkg_logger = logging.getLogger("twse_disclosures")
    pkg_logger.handlers = [logging.NullHandler()]
    pkg_logger.propagate = True


def make_response(json_data=None, text="", status_code=200):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.encoding = "utf-8"
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def response_factory():
    """Factory for mock requests.Response objects."""
    return make_response


def detail_page(table: str = DETAIL_TABLE) -> str:
    return f"<html><body><h2>公告</h2>{table}<table class='other'></table></body></html>"


@pytest.fixture
def detail_page_factory():
    """Factory for detail page markup wrapping a table."""
    return detail_page


@pytest.fixture
def mock_session():
    """Session whose POST returns a listing and whose GET returns detail pages.

    Configure with:
        mock_session.listing_rows = [...]
        mock_session.detail_pages = {"substring of address": markup or Exception}
    """
    session = MagicMock(spec=requests.Session)
    session.listing_rows = []
    session.detail_pages = {}

    def post(url, data=None, headers=None, timeout=None):
        return make_response(json_data={"data": session.listing_rows})

    def get(url, headers=None, timeout=None):
        for needle, page in session.detail_pages.items():
            if needle in url:
                if isinstance(page, Exception):
                    raise page
                return make_response(text=page)
        return make_response(text="<html><body>empty</body></html>")

    session.post.side_effect = post
    session.get.side_effect = get
    return session
