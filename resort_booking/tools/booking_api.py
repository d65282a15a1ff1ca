"""
HTTP client for the booking persistence endpoint.

The endpoint stores one row per booking and answers 201 on success, 400
with a field-error map when its own schema check fails, and 500 when the
store is unavailable. Every outcome comes back as a tagged SubmitResult;
transport failures are never raised to the caller and nothing is retried.
"""

import logging
from typing import Optional

import httpx

from resort_booking.config import settings
from resort_booking.schemas.booking_schema import (
    BookingPayload,
    BookingRequest,
    SubmitOutcome,
    SubmitResult,
)

logger = logging.getLogger(__name__)

BOOKINGS_PATH = "/api/bookings"
UNAVAILABLE_MESSAGE = "Unable to create booking right now. Please try again."
FIELD_ERRORS_MESSAGE = "Please correct the highlighted fields."

# Wire (camelCase) field name -> BookingForm field name
_WIRE_TO_FIELD: dict[str, str] = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "treatment": "treatment",
    "preferredDate": "preferred_date",
    "preferredTime": "preferred_time",
    "notes": "special_notes",
}


def _parse_field_errors(body: object) -> Optional[dict[str, str]]:
    """Flatten ``{"errors": {"fullName": ["..."]}}`` into ``{"full_name": "..."}``."""
    if not isinstance(body, dict) or not isinstance(body.get("errors"), dict):
        return None
    errors: dict[str, str] = {}
    for wire_name, messages in body["errors"].items():
        if isinstance(messages, list):
            messages = next((m for m in messages if m), None)
        if not messages:
            continue
        errors[_WIRE_TO_FIELD.get(wire_name, wire_name)] = str(messages)
    return errors or None


class BookingApiClient:
    """Submits validated bookings to the persistence endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.api.base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.api.timeout_sec
        self._transport = transport

    async def submit(self, request: BookingRequest) -> SubmitResult:
        payload = BookingPayload.from_request(request).model_dump(by_alias=True)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(BOOKINGS_PATH, json=payload)
        except httpx.TimeoutException:
            logger.warning("Timeout calling booking endpoint: %s", self._base_url)
            return SubmitResult(outcome=SubmitOutcome.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)
        except httpx.HTTPError as e:
            logger.warning("Booking endpoint unreachable: %s (%s)", self._base_url, e)
            return SubmitResult(outcome=SubmitOutcome.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)

        if resp.status_code == 201:
            logger.info("Booking stored for treatment '%s'", request.treatment)
            return SubmitResult(outcome=SubmitOutcome.SUCCESS, message="Booking received.")

        if resp.status_code == 400:
            try:
                errors = _parse_field_errors(resp.json())
            except ValueError:
                errors = None
            if errors:
                return SubmitResult(
                    outcome=SubmitOutcome.FIELD_ERRORS,
                    message=FIELD_ERRORS_MESSAGE,
                    field_errors=errors,
                )

        logger.warning(
            "Booking endpoint rejected submission: HTTP %s", resp.status_code
        )
        return SubmitResult(outcome=SubmitOutcome.UNAVAILABLE, message=UNAVAILABLE_MESSAGE)
