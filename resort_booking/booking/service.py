"""
Booking flow: validate -> compose -> (persist) -> dispatch.

``process_booking`` is the synchronous, side-effect-free half: it checks
the form, assigns a display booking ID, renders both messages and builds
the web chat URLs. ``BookingService.submit`` adds the optional persistence
call and hands the admin message to the delivery dispatcher.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

from resort_booking.booking.composer import compose_messages
from resort_booking.booking.dispatcher import DeliveryDispatcher, DispatchResult
from resort_booking.booking.validator import build_request, validate_booking
from resort_booking.config import settings
from resort_booking.logging_context import booking_scope, get_booking_logger
from resort_booking.schemas.booking_schema import (
    BookingForm,
    BookingResult,
    SubmitResult,
    WhatsAppLinks,
)
from resort_booking.tools.booking_api import BookingApiClient
from resort_booking.tools.whatsapp import DeliveryConstructionError, build_web_url

logger = get_booking_logger(__name__)

INVALID_FORM_MESSAGE = "Please correct the highlighted fields."


def generate_booking_id(now: datetime) -> int:
    """Milliseconds since the epoch; a display label, not a unique key."""
    return int(now.timestamp() * 1000)


def _chat_url(phone: str, message: str) -> str:
    """Web chat URL, or an empty string when the number has no digits."""
    try:
        return build_web_url(phone, message)
    except DeliveryConstructionError as e:
        logger.warning("No chat URL: %s", e)
        return ""


def process_booking(
    form: BookingForm,
    admin_phone: Optional[str] = None,
    treatments: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
    resort_name: Optional[str] = None,
) -> BookingResult:
    """
    Validate a form and prepare both chat messages and their web URLs.

    Args:
        form: Raw booking form input.
        admin_phone: Admin WhatsApp destination. Defaults to configuration.
        treatments: Selectable treatment names. Defaults to the catalog.
        now: Submission timestamp; also fixes "today" for date validation.
        resort_name: Name used in message headers. Defaults to configuration.
    """
    now = now or datetime.now()
    admin_phone = admin_phone or settings.resort.admin_whatsapp

    errors = validate_booking(form, treatments=treatments, today=now.date())
    if errors:
        return BookingResult(
            success=False,
            message=INVALID_FORM_MESSAGE,
            field_errors=errors,
        )

    request = build_request(form)
    booking_id = generate_booking_id(now)
    messages = compose_messages(request, booking_id, now, resort_name)

    return BookingResult(
        success=True,
        message="Booking processed successfully",
        booking_id=booking_id,
        messages=messages,
        whatsapp_urls=WhatsAppLinks(
            admin=_chat_url(admin_phone, messages.admin),
            customer=_chat_url(request.phone, messages.customer),
        ),
    )


@dataclass
class BookingSubmission:
    """Everything that happened for one submitted form."""
    result: BookingResult
    stored: Optional[SubmitResult] = None
    dispatch: Optional[DispatchResult] = None

    @property
    def ok(self) -> bool:
        return self.result.success and (self.stored is None or self.stored.ok)


class BookingService:
    """Runs the full submission flow for the booking form."""

    def __init__(
        self,
        dispatcher: DeliveryDispatcher,
        api_client: Optional[BookingApiClient] = None,
        admin_phone: Optional[str] = None,
        treatments: Optional[Iterable[str]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._dispatcher = dispatcher
        self._api_client = api_client
        self._admin_phone = admin_phone or settings.resort.admin_whatsapp
        self._treatments = list(treatments) if treatments is not None else None
        self._clock = clock

    async def submit(self, form: BookingForm) -> BookingSubmission:
        result = process_booking(
            form,
            admin_phone=self._admin_phone,
            treatments=self._treatments,
            now=self._clock(),
        )
        if not result.success:
            return BookingSubmission(result=result)

        with booking_scope(str(result.booking_id)):
            return await self._deliver(form, result)

    async def _deliver(self, form: BookingForm, result: BookingResult) -> BookingSubmission:
        submission = BookingSubmission(result=result)

        if self._api_client is not None:
            submission.stored = await self._api_client.submit(build_request(form))
            if not submission.stored.ok:
                logger.warning(
                    "Booking not stored (%s); skipping delivery",
                    submission.stored.outcome.value,
                )
                return submission

        submission.dispatch = await self._dispatcher.dispatch(
            self._admin_phone, result.messages.admin
        )
        return submission
