"""
Tests for consent form field ordering.
"""
from submission_exporter.processors.consent_fields import (
    CONSENT_FIELD_ORDER, get_company_name, order_consent_fields
)


class TestConsentFieldOrder:
    """Test cases for CONSENT_FIELD_ORDER and order_consent_fields."""

    def test_canonical_list_has_25_unique_labels(self):
        assert len(CONSENT_FIELD_ORDER) == 25
        assert len(set(CONSENT_FIELD_ORDER)) == 25
        assert CONSENT_FIELD_ORDER[0].startswith("Company Name")
        assert CONSENT_FIELD_ORDER[-1] == "Signature"

    def test_known_fields_before_unknown(self):
        entries = [("X", "x"), ("Y", "y")]
        entries += [(label, "v") for label in reversed(CONSENT_FIELD_ORDER)]

        ordered = order_consent_fields(entries)
        labels = [label for label, _ in ordered]

        assert labels[:25] == list(CONSENT_FIELD_ORDER)
        assert labels[25:] == ["X", "Y"]

    def test_unknown_fields_keep_submission_order(self):
        entries = [("Y", "1"), ("Signature", "sig.png"), ("X", "2"), ("City", "Austin")]
        labels = [label for label, _ in order_consent_fields(entries)]
        assert labels == ["City", "Signature", "Y", "X"]

    def test_values_travel_with_labels(self):
        entries = [("Signature", "sig.png"), ("Client Email", "a@example.com")]
        assert order_consent_fields(entries) == [("Client Email", "a@example.com"), ("Signature", "sig.png")]

    def test_empty_input(self):
        assert order_consent_fields([]) == []


class TestGetCompanyName:
    """Test cases for get_company_name."""

    def test_matches_case_insensitive_substring(self):
        data = [("Client Email", "a@example.com"), ("COMPANY NAME (official)", "Acme Widgets")]
        assert get_company_name(data) == "Acme Widgets"

    def test_first_match_wins(self):
        data = [("Company Name", "First Co"), ("Parent Company Name", "Second Co")]
        assert get_company_name(data) == "First Co"

    def test_missing_field(self):
        assert get_company_name([("Client Email", "a@example.com")]) == "Unknown"

    def test_empty_value(self):
        assert get_company_name([("Company Name", None)]) == "Unknown"
        assert get_company_name([("Company Name", "")]) == "Unknown"
