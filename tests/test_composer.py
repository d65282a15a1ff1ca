"""Tests for admin and customer message composition."""

from datetime import date, datetime

from resort_booking.booking.composer import (
    compose_admin_message,
    compose_customer_message,
    compose_messages,
    format_long_date,
    format_received_at,
)
from resort_booking.booking.validator import build_request
from tests.conftest import NOW, make_form

BOOKING_ID = 1792240200000
RESORT = "OLU Ayurveda Beach Resort"


def _request(**overrides):
    return build_request(make_form(**overrides))


class TestFormatting:
    def test_long_date(self):
        assert format_long_date(date(2026, 10, 20)) == "Tuesday, October 20, 2026"

    def test_long_date_single_digit_day(self):
        assert format_long_date(date(2027, 1, 5)) == "Tuesday, January 5, 2027"

    def test_received_at(self):
        assert format_received_at(datetime(2026, 10, 17, 14, 30)) == "Oct 17, 2026, 02:30 PM"

    def test_received_at_morning(self):
        assert format_received_at(datetime(2026, 3, 2, 9, 5)) == "Mar 2, 2026, 09:05 AM"


class TestComposedMessages:
    def test_admin_contains_treatment_and_customer_contains_long_date(self):
        request = _request(treatment="Yoga", preferred_time="14:00")
        messages = compose_messages(request, BOOKING_ID, NOW, RESORT)
        assert "Yoga" in messages.admin
        assert "Tuesday, October 20, 2026" in messages.customer
        assert "14:00" in messages.customer

    def test_deterministic(self):
        request = _request(special_notes="Sea view")
        first = compose_messages(request, BOOKING_ID, NOW, RESORT)
        second = compose_messages(request, BOOKING_ID, NOW, RESORT)
        assert first == second

    def test_every_field_appears_verbatim(self):
        request = _request(special_notes="Allergic to sesame oil")
        messages = compose_messages(request, BOOKING_ID, NOW, RESORT)
        combined = messages.admin + messages.customer
        for value in [
            request.full_name,
            request.email,
            request.phone,
            request.treatment,
            request.preferred_date.isoformat(),
            request.preferred_time,
            request.special_notes,
            str(BOOKING_ID),
        ]:
            assert value in combined

    def test_template_delimiters_not_escaped(self):
        request = _request(special_notes="{full_name} ${x} %s *bold* <b>")
        admin = compose_admin_message(request, BOOKING_ID, NOW, RESORT)
        assert "{full_name} ${x} %s *bold* <b>" in admin

    def test_notes_block_omitted_without_notes(self):
        admin = compose_admin_message(_request(), BOOKING_ID, NOW, RESORT)
        assert "Customer Notes" not in admin

    def test_admin_header_and_received_line(self):
        admin = compose_admin_message(_request(), BOOKING_ID, NOW, RESORT)
        assert admin.startswith(f"🕉️ *NEW BOOKING - {RESORT}*")
        assert f"*Booking ID:* {BOOKING_ID}" in admin
        assert "*Received:* Oct 17, 2026, 02:30 PM" in admin

    def test_customer_addressed_by_name(self):
        customer = compose_customer_message(_request(), BOOKING_ID, RESORT)
        assert customer.startswith("🕉️ *Thank you for your booking, Nadia Perera!*")
        assert f"Thank you for choosing {RESORT}!" in customer
        assert "nadia@example.com" not in customer

    def test_resort_name_defaults_to_configuration(self):
        from resort_booking.config import settings

        customer = compose_customer_message(_request(), BOOKING_ID)
        assert settings.resort.name in customer
