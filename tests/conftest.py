"""Shared test fixtures and helpers."""

import asyncio
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from resort_booking.booking.platform import DeviceClass, Platform
from resort_booking.schemas.booking_schema import BookingForm

TODAY = date(2026, 10, 17)
NOW = datetime(2026, 10, 17, 14, 30)
ADMIN_PHONE = "+94 77 503 0038"
TREATMENTS = [
    "Acupuncture",
    "Ayurvedic Treatments",
    "Facial Treatments",
    "Spa Packages",
    "Therapeutic Massage",
    "Yoga",
]


def make_form(**overrides) -> BookingForm:
    """Helper to create a valid BookingForm relative to TODAY."""
    values = {
        "full_name": "Nadia Perera",
        "email": "nadia@example.com",
        "phone": "+94 77 123 4567",
        "treatment": "Yoga",
        "preferred_date": (TODAY + timedelta(days=3)).isoformat(),
        "preferred_time": "14:00",
        "special_notes": None,
    }
    values.update(overrides)
    return BookingForm(**values)


class FakeLink:
    def __init__(self, platform: "FakePlatform", uri: str) -> None:
        self.platform = platform
        self.uri = uri
        self.clicks = 0
        self.removed = False

    def click(self) -> None:
        self.clicks += 1
        if self.platform.fail_on_click:
            raise RuntimeError("protocol handler crashed")
        if self.platform.signal_on_click:
            self.platform.fire_signal()
        elif self.platform.signal_after is not None:
            asyncio.get_running_loop().call_later(
                self.platform.signal_after, self.platform.fire_signal
            )

    def remove(self) -> None:
        self.removed = True


class FakePlatform(Platform):
    """In-memory platform recording links, listeners and navigations."""

    def __init__(
        self,
        device_class: DeviceClass = DeviceClass.DESKTOP,
        signal_after: Optional[float] = None,
        signal_on_click: bool = False,
        focused: bool = True,
        hidden: bool = False,
        fail_on_click: bool = False,
        fail_on_navigate: bool = False,
    ) -> None:
        self.device_class = device_class
        self.signal_after = signal_after
        self.signal_on_click = signal_on_click
        self.focused = focused
        self.hidden = hidden
        self.fail_on_click = fail_on_click
        self.fail_on_navigate = fail_on_navigate
        self.links: list[FakeLink] = []
        self.listeners: list = []
        self.navigations: list[str] = []

    def detect_device_class(self) -> DeviceClass:
        return self.device_class

    def create_hidden_link(self, uri: str) -> FakeLink:
        link = FakeLink(self, uri)
        self.links.append(link)
        return link

    def on_visibility_or_blur(self, callback):
        self.listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self.listeners:
                self.listeners.remove(callback)

        return unsubscribe

    def fire_signal(self) -> None:
        for callback in list(self.listeners):
            callback()

    def has_focus(self) -> bool:
        return self.focused

    def is_hidden(self) -> bool:
        return self.hidden

    def navigate(self, url: str) -> None:
        if self.fail_on_navigate:
            raise RuntimeError("navigation blocked")
        self.navigations.append(url)


@pytest.fixture
def valid_form():
    return make_form()


@pytest.fixture
def fake_platform():
    return FakePlatform()
