from resort_booking.booking.composer import compose_messages
from resort_booking.booking.dispatcher import DeliveryDispatcher, DispatchOutcome
from resort_booking.booking.platform import BrowserPlatform, DeviceClass, Platform
from resort_booking.booking.service import BookingService, process_booking
from resort_booking.booking.validator import build_request, validate_booking

__all__ = [
    "validate_booking",
    "build_request",
    "compose_messages",
    "DeliveryDispatcher",
    "DispatchOutcome",
    "Platform",
    "BrowserPlatform",
    "DeviceClass",
    "BookingService",
    "process_booking",
]
