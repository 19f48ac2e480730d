"""
Unit tests for listing row key normalization.
"""

import pytest

from twse_disclosures.parsing.fields import normalize_keys, normalize_records, to_camel_case


class TestToCamelCase:
    """Tests for to_camel_case function."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("CO_ID", "coId"),
            ("COMPANY_ID", "companyId"),
            ("HYPERLINK", "hyperlink"),
            ("SUBJECT", "subject"),
            ("CDATE", "cdate"),
            ("company_name", "companyName"),
            ("co-id", "coId"),
            ("AN_CODE_NO", "anCodeNo"),
        ],
    )
    def test_upper_snake_keys(self, key, expected):
        """Test conversion of service-style keys."""
        assert to_camel_case(key) == expected

    @pytest.mark.parametrize("key", ["companyId", "hyperlink", "coId", "subject"])
    def test_canonical_keys_unchanged(self, key):
        """Test that already-canonical keys come back as-is."""
        assert to_camel_case(key) == key

    def test_capitalized_single_word(self):
        """Test that a capitalized single word is lowercased at the front."""
        assert to_camel_case("Subject") == "subject"

    def test_repeated_separators(self):
        """Test that runs of separators are collapsed."""
        assert to_camel_case("CO__ID") == "coId"
        assert to_camel_case("_CO_ID_") == "coId"


class TestNormalizeKeys:
    """Tests for normalize_keys function."""

    def test_example_mapping(self):
        """Test the documented CO_ID/SUBJECT example."""
        assert normalize_keys({"CO_ID": "1101", "SUBJECT": "x"}) == {"coId": "1101", "subject": "x"}

    def test_values_pass_through(self):
        """Test that values are not coerced."""
        row = {"COMPANY_ID": 1101, "FLAGS": [1, 2], "NOTE": None}
        assert normalize_keys(row) == {"companyId": 1101, "flags": [1, 2], "note": None}

    def test_idempotent(self):
        """Test that normalizing twice is the same as normalizing once."""
        row = {"COMPANY_ID": "1101", "HYPERLINK": "a=1", "CO_SHORT_NAME": "台泥"}
        once = normalize_keys(row)
        assert normalize_keys(once) == once

    def test_order_independent(self):
        """Test that key order does not change the result."""
        a = normalize_keys({"CO_ID": "1101", "SUBJECT": "x"})
        b = normalize_keys({"SUBJECT": "x", "CO_ID": "1101"})
        assert a == b

    def test_collision_keeps_first(self):
        """Test that the first key wins when two keys collapse together."""
        assert normalize_keys({"CO_ID": "first", "co_id": "second"}) == {"coId": "first"}


class TestNormalizeRecords:
    """Tests for normalize_records function."""

    def test_preserves_order(self):
        """Test that rows keep their listing order."""
        rows = [{"COMPANY_ID": "2330"}, {"COMPANY_ID": "1101"}]
        assert normalize_records(rows) == [{"companyId": "2330"}, {"companyId": "1101"}]

    def test_empty(self):
        """Test normalization of an empty listing."""
        assert normalize_records([]) == []
