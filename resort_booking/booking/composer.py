"""
Booking message templates for the resort admin and the customer.

Composition is deterministic: the same request, booking ID, timestamp and
resort name always produce the same strings. User-supplied values are
inserted verbatim since the destination is a chat message.
"""

from datetime import date, datetime
from typing import Optional

from resort_booking.config import settings
from resort_booking.schemas.booking_schema import BookingRequest, ComposedMessages

DIVIDER = "━" * 40


def format_long_date(value: date) -> str:
    """``date(2026, 10, 20)`` -> ``Tuesday, October 20, 2026``."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_received_at(value: datetime) -> str:
    """``datetime(2026, 10, 17, 14, 30)`` -> ``Oct 17, 2026, 02:30 PM``."""
    return f"{value:%b} {value.day}, {value.year}, {value:%I:%M %p}"


def compose_admin_message(
    request: BookingRequest,
    booking_id: int,
    submitted_at: datetime,
    resort_name: Optional[str] = None,
) -> str:
    """Operator-facing message carrying every booking field."""
    resort_name = resort_name or settings.resort.name
    lines = [
        f"🕉️ *NEW BOOKING - {resort_name}*",
        f"📋 *Booking ID:* {booking_id}",
        "",
        DIVIDER,
        "",
        "👤 *Customer Details:*",
        f"   Name: {request.full_name}",
        f"   Email: {request.email}",
        f"   Phone: {request.phone}",
        "",
        DIVIDER,
        "",
        f"💆 *Treatment:* {request.treatment}",
        f"📅 *Preferred Date:* {format_long_date(request.preferred_date)} "
        f"({request.preferred_date.isoformat()})",
        f"⏰ *Preferred Time:* {request.preferred_time}",
        "",
    ]
    if request.special_notes:
        lines += ["📝 *Customer Notes:*", request.special_notes, ""]
    lines += [
        DIVIDER,
        "",
        f"⏰ *Received:* {format_received_at(submitted_at)}",
        "",
        "Please confirm this booking with the customer. Thank you! 🙏",
    ]
    return "\n".join(lines)


def compose_customer_message(
    request: BookingRequest,
    booking_id: int,
    resort_name: Optional[str] = None,
) -> str:
    """Customer confirmation with the key details and reassurance."""
    resort_name = resort_name or settings.resort.name
    return "\n".join([
        f"🕉️ *Thank you for your booking, {request.full_name}!*",
        "",
        f"📋 *Your Booking ID:* {booking_id}",
        "",
        DIVIDER,
        "",
        f"We're delighted to confirm your reservation at *{resort_name}*.",
        "",
        "📋 *Booking Details:*",
        f"   💆 Treatment: {request.treatment}",
        f"   📅 Date: {format_long_date(request.preferred_date)}",
        f"   ⏰ Time: {request.preferred_time}",
        "",
        DIVIDER,
        "",
        "Our team will review your booking and send a final confirmation shortly. "
        "If you have any questions or need to make changes, please don't hesitate "
        "to contact us.",
        "",
        f"Thank you for choosing {resort_name}! 🙏",
    ])


def compose_messages(
    request: BookingRequest,
    booking_id: int,
    submitted_at: datetime,
    resort_name: Optional[str] = None,
) -> ComposedMessages:
    return ComposedMessages(
        admin=compose_admin_message(request, booking_id, submitted_at, resort_name),
        customer=compose_customer_message(request, booking_id, resort_name),
    )
