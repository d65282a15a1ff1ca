"""Tests for the treatment catalog."""

import pytest

from resort_booking.tools.treatments import (
    TREATMENT_CATALOG,
    get_all_treatments,
    get_treatment_names,
    match_treatment,
)


class TestCatalog:
    def test_names_are_sorted(self):
        names = get_treatment_names()
        assert names == sorted(names)
        assert len(names) == len(TREATMENT_CATALOG) == 6

    def test_all_treatments_have_descriptions(self):
        for treatment in get_all_treatments():
            assert treatment["name"]
            assert treatment["description"]

    def test_all_treatments_in_catalog_order(self):
        assert [t["id"] for t in get_all_treatments()] == list(TREATMENT_CATALOG)


class TestMatchTreatment:
    @pytest.mark.parametrize("query,expected", [
        ("Yoga", "Yoga"),
        ("therapeutic-massage", "Therapeutic Massage"),
        ("a deep massage please", "Therapeutic Massage"),
        ("something for my dosha", "Ayurvedic Treatments"),
        ("FACIAL", "Facial Treatments"),
        ("acu", "Acupuncture"),
    ])
    def test_matches(self, query, expected):
        assert match_treatment(query) == expected

    @pytest.mark.parametrize("query", ["", "   ", "reiki"])
    def test_no_match(self, query):
        assert match_treatment(query) is None
