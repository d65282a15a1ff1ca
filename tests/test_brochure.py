"""Tests for the treatments brochure PDF."""

from datetime import date

import pytest

from resort_booking.config import ResortConfig
from resort_booking.tools.brochure import brochure_filename, build_brochure, save_brochure
from resort_booking.tools.treatments import get_all_treatments

ISSUED = date(2026, 10, 17)

RESORT = ResortConfig(
    name="OLU Ayurveda Beach Resort",
    admin_whatsapp="+94 77 503 0038",
    contact_phone="+94 77 209 6730",
    contact_email="info@oluayurvedabeach.lk",
    address="Mirissa, Sri Lanka",
    hours="Daily 8:00 AM \u2013 8:00 PM",
)


def _plain(treatments=None) -> bytes:
    return build_brochure(treatments, resort=RESORT, issued=ISSUED, compress=False)


class TestBuildBrochure:
    def test_is_a_pdf(self):
        pdf = build_brochure(resort=RESORT, issued=ISSUED)
        assert pdf.startswith(b"%PDF-")
        assert pdf.rstrip().endswith(b"%%EOF")

    def test_lists_every_catalog_treatment_in_order(self):
        pdf = _plain()
        positions = [
            pdf.index(f"{number}. {t['name']}".encode())
            for number, t in enumerate(get_all_treatments(), start=1)
        ]
        assert positions == sorted(positions)

    def test_contact_block_uses_resort_details(self):
        pdf = _plain()
        assert b"Contact Us" in pdf
        assert b"Phone: +94 77 209 6730" in pdf
        assert b"Email: info@oluayurvedabeach.lk" in pdf
        assert b"Address: Mirissa, Sri Lanka" in pdf

    def test_non_latin1_punctuation_is_flattened(self):
        assert b"Hours: Daily 8:00 AM - 8:00 PM" in _plain()

    def test_single_page_footer(self):
        assert b"Page 1 of 1" in _plain([{"name": "Yoga", "description": "Breathwork."}])

    def test_long_catalog_spills_onto_more_pages(self):
        treatments = [
            {"name": f"Treatment {n}", "description": "Herbal oils and steam. " * 8}
            for n in range(30)
        ]
        pdf = _plain(treatments)
        assert b"Page 2 of " in pdf
        assert b"30. Treatment 29" in pdf

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError, match="at least one treatment"):
            build_brochure([], resort=RESORT, issued=ISSUED)


class TestSaveBrochure:
    def test_filename_carries_issue_date(self):
        assert brochure_filename(ISSUED) == "OLU_Ayurveda_Treatments_2026-10-17.pdf"

    def test_writes_into_directory(self, tmp_path):
        path = save_brochure(tmp_path / "downloads", issued=ISSUED)
        assert path == tmp_path / "downloads" / "OLU_Ayurveda_Treatments_2026-10-17.pdf"
        assert path.read_bytes().startswith(b"%PDF-")
