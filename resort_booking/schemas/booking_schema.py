"""Booking form, request, message and submission data models."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NOTES_MAX_LENGTH = 500


class BookingForm(BaseModel):
    """Raw booking form input as entered by the visitor."""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    treatment: str = ""
    preferred_date: str = ""
    preferred_time: str = ""
    special_notes: Optional[str] = None


class BookingRequest(BaseModel):
    """Validated booking request data."""
    full_name: str
    email: str
    phone: str
    treatment: str
    preferred_date: date
    preferred_time: str
    special_notes: Optional[str] = None


class ComposedMessages(BaseModel):
    """Chat messages rendered for the resort admin and the customer."""
    admin: str
    customer: str


class WhatsAppLinks(BaseModel):
    """Web URLs that open a chat with each audience, message prefilled."""
    admin: str = ""
    customer: str = ""


class BookingResult(BaseModel):
    """Outcome of processing a booking form."""
    success: bool
    message: str
    booking_id: int = 0
    field_errors: dict[str, str] = Field(default_factory=dict)
    messages: Optional[ComposedMessages] = None
    whatsapp_urls: WhatsAppLinks = Field(default_factory=WhatsAppLinks)


class BookingPayload(BaseModel):
    """JSON body accepted by the persistence endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    email: str
    phone: str
    treatment: str
    preferred_date: str = Field(alias="preferredDate")
    preferred_time: str = Field(alias="preferredTime")
    notes: Optional[str] = None

    @classmethod
    def from_request(cls, request: BookingRequest) -> "BookingPayload":
        notes = request.special_notes
        if notes is not None:
            notes = notes[:NOTES_MAX_LENGTH]
        return cls(
            full_name=request.full_name,
            email=request.email,
            phone=request.phone,
            treatment=request.treatment,
            preferred_date=request.preferred_date.isoformat(),
            preferred_time=request.preferred_time,
            notes=notes,
        )


class SubmitOutcome(str, Enum):
    SUCCESS = "success"
    FIELD_ERRORS = "field_errors"
    UNAVAILABLE = "unavailable"


class SubmitResult(BaseModel):
    """Tagged result of a persistence call."""
    outcome: SubmitOutcome
    message: str = ""
    field_errors: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome == SubmitOutcome.SUCCESS
