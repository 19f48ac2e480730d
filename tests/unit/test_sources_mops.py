"""
Unit tests for the MOPS client.
"""

from unittest.mock import MagicMock
from urllib.parse import unquote

import pytest
import requests

from twse_disclosures.constants import FORM_CONTENT_TYPE, LISTING_URL
from twse_disclosures.exceptions import FetchError
from twse_disclosures.sources.mops import (
    encode_form,
    fetch_detail_page,
    fetch_listing,
    listing_params,
)


class TestEncodeForm:
    """Tests for encode_form function."""

    def test_joins_pairs_in_order(self):
        """Test that pairs are joined with & in dict order."""
        assert encode_form({"b": "2", "a": "1"}) == "b=2&a=1"

    def test_values_percent_encoded(self):
        """Test that non-ASCII and reserved characters in values are encoded."""
        assert encode_form({"SUBJECT": "自結"}) == "SUBJECT=%E8%87%AA%E7%B5%90"
        assert encode_form({"q": "a b&c/d"}) == "q=a%20b%26c%2Fd"

    def test_uri_component_safe_characters_kept(self):
        """Test the encodeURIComponent safe set is left alone."""
        assert encode_form({"q": "-_.!~*'()"}) == "q=-_.!~*'()"

    def test_non_string_and_empty_values(self):
        """Test that numbers are stringified and empty values kept."""
        assert encode_form({"RADIO_CM": 1, "CO_ID": ""}) == "RADIO_CM=1&CO_ID="

    def test_keys_not_encoded(self):
        """Test that keys are used as-is."""
        assert encode_form({"a b": "1"}) == "a b=1"


class TestListingParams:
    """Tests for listing_params function."""

    def test_dates_filled_in(self):
        """Test that the date range is merged into the fixed query."""
        params = listing_params("113/01/01", "113/03/31")
        assert params["SDATE"] == "113/01/01"
        assert params["EDATE"] == "113/03/31"
        assert params["SUBJECT"] == "自結"
        assert params["TYPEK"] == "sii"
        assert params["CO_MARKET"] == 17
        assert params["lang"] == "TW"

    def test_does_not_mutate_defaults(self):
        """Test that repeated calls don't leak dates between runs."""
        listing_params("113/01/01", "113/01/31")
        assert listing_params("", "")["SDATE"] == ""


class TestFetchListing:
    """Tests for fetch_listing function."""

    def test_returns_rows(self, response_factory):
        """Test a successful listing fetch."""
        rows = [{"COMPANY_ID": "1101", "HYPERLINK": "a=1"}]
        session = MagicMock()
        session.post.return_value = response_factory(json_data={"data": rows})

        result = fetch_listing(session, "113/01/01", "113/03/31")

        assert result == rows
        session.post.assert_called_once()
        call_args = session.post.call_args
        assert call_args[0][0] == LISTING_URL
        assert call_args[1]["headers"]["Content-Type"] == FORM_CONTENT_TYPE
        body = call_args[1]["data"].decode("utf-8")
        assert "SDATE=113%2F01%2F01" in body
        assert unquote(body).endswith("lang=TW&AN=")

    def test_custom_url_and_timeout(self, response_factory):
        """Test that url and timeout are passed through."""
        session = MagicMock()
        session.post.return_value = response_factory(json_data={"data": []})

        fetch_listing(session, "a", "b", url="http://example.test/q", timeout=3)

        assert session.post.call_args[0][0] == "http://example.test/q"
        assert session.post.call_args[1]["timeout"] == 3

    def test_transport_error_raises_fetch_error(self):
        """Test that network errors become FetchError with the cause."""
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(FetchError, match="connection refused") as exc_info:
            fetch_listing(session, "a", "b")

        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_http_error_raises_fetch_error(self, response_factory):
        """Test that a non-success status is fatal."""
        session = MagicMock()
        session.post.return_value = response_factory(status_code=503)

        with pytest.raises(FetchError, match="503"):
            fetch_listing(session, "a", "b")

    def test_non_json_body_raises_fetch_error(self, response_factory):
        """Test that an unparseable body is fatal."""
        session = MagicMock()
        response = response_factory()
        response.json.side_effect = ValueError("Expecting value")
        session.post.return_value = response

        with pytest.raises(FetchError, match="Expecting value"):
            fetch_listing(session, "a", "b")

    @pytest.mark.parametrize("payload", [{}, {"data": None}, {"data": "x"}, [], None])
    def test_missing_rows_raises_fetch_error(self, payload, response_factory):
        """Test that a body without a row list is fatal."""
        session = MagicMock()
        session.post.return_value = response_factory(json_data=payload)

        with pytest.raises(FetchError):
            fetch_listing(session, "a", "b")

    def test_non_mapping_rows_raise_fetch_error(self, response_factory):
        """Test that rows must be mappings."""
        session = MagicMock()
        session.post.return_value = response_factory(json_data={"data": [{"A": 1}, "oops"]})

        with pytest.raises(FetchError, match="not mappings"):
            fetch_listing(session, "a", "b")

    def test_single_attempt(self):
        """Test that a failed listing fetch is not retried."""
        session = MagicMock()
        session.post.side_effect = requests.Timeout("timed out")

        with pytest.raises(FetchError):
            fetch_listing(session, "a", "b")

        assert session.post.call_count == 1


class TestFetchDetailPage:
    """Tests for fetch_detail_page function."""

    def test_returns_markup(self, response_factory):
        """Test a successful detail fetch."""
        session = MagicMock()
        session.get.return_value = response_factory(text="<table></table>")

        page = fetch_detail_page(session, "http://example.test/d?a=1", timeout=5)

        assert page.ok
        assert page.markup == "<table></table>"
        assert page.address == "http://example.test/d?a=1"
        assert session.get.call_args[1]["timeout"] == 5

    def test_transport_error_is_no_data(self):
        """Test that network errors are returned, not raised."""
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("reset by peer")

        page = fetch_detail_page(session, "http://example.test/d")

        assert not page.ok
        assert page.markup is None
        assert "reset by peer" in page.error

    def test_http_error_is_no_data(self, response_factory):
        """Test that a non-success status is returned as no data."""
        session = MagicMock()
        session.get.return_value = response_factory(status_code=404)

        page = fetch_detail_page(session, "http://example.test/d")

        assert page.markup is None
        assert "404" in page.error

    def test_latin1_default_switched_to_utf8(self, response_factory):
        """Test that requests' ISO-8859-1 fallback is replaced with UTF-8."""
        session = MagicMock()
        response = response_factory(text="<p>ok</p>")
        response.encoding = "ISO-8859-1"
        session.get.return_value = response

        fetch_detail_page(session, "http://example.test/d")

        assert response.encoding == "utf-8"
