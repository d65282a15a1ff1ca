"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_booking_schema(self):
        from resort_booking.schemas.booking_schema import (
            BookingForm, BookingRequest, SubmitOutcome,
        )
        form = BookingForm()
        assert form.full_name == ""
        assert form.special_notes is None
        assert SubmitOutcome.SUCCESS == "success"
        assert BookingRequest is not None


class TestBookingImports:
    def test_package_reexports(self):
        from resort_booking.booking import (
            BookingService, BrowserPlatform, DeliveryDispatcher, DeviceClass,
            DispatchOutcome, Platform, build_request, compose_messages,
            process_booking, validate_booking,
        )
        assert issubclass(BrowserPlatform, Platform)
        assert DeviceClass.MOBILE == "mobile"
        assert DispatchOutcome.FALLBACK == "fallback"
        assert callable(validate_booking)
        assert callable(build_request)
        assert callable(compose_messages)
        assert callable(process_booking)
        assert BookingService is not None
        assert DeliveryDispatcher is not None


class TestToolImports:
    def test_import_treatments(self):
        from resort_booking.tools.treatments import TREATMENT_CATALOG, match_treatment
        assert len(TREATMENT_CATALOG) >= 6
        assert callable(match_treatment)

    def test_import_whatsapp(self):
        from resort_booking.tools.whatsapp import build_links
        assert callable(build_links)

    def test_import_booking_api(self):
        from resort_booking.tools.booking_api import BookingApiClient
        assert BookingApiClient is not None

    def test_import_brochure(self):
        from resort_booking.tools.brochure import build_brochure
        assert callable(build_brochure)


class TestEntryPoints:
    def test_import_console_demo(self):
        from console_demo import ConsoleSession
        assert set(ConsoleSession.SCENARIOS) == {"booking", "invalid"}

    def test_config_singleton(self):
        from resort_booking.config import settings
        assert settings.resort.name
        assert settings.dispatch.desktop_wait_ms > 0
