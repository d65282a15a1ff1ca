"""
Booking form validation.

Each field has its own rule returning an error message or None. Rules are
independent; ``validate_booking`` runs all of them and returns every
failure at once so the form can highlight all problem fields together.
Validation is pure: no logging, no I/O, and the same input always yields
the same mapping.

Usage:
    errors = validate_booking(form, today=date.today())
    if not errors:
        request = build_request(form)
"""

import re
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from resort_booking.schemas.booking_schema import BookingForm, BookingRequest
from resort_booking.tools.treatments import get_treatment_names
from resort_booking.utils import digits_only

# Validation thresholds
MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 8
MAX_PHONE_DIGITS = 15

_NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_PATTERN = re.compile(r"^\+?[0-9\s()-]+$")
_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def one_year_after(day: date) -> date:
    """Same calendar day next year; 29 February maps to 28 February."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


def parse_date(value: str) -> Optional[date]:
    """Parse a zero-padded ``YYYY-MM-DD`` date; anything else is None."""
    value = value.strip()
    if not _DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _validate_full_name(value: str, **_: object) -> Optional[str]:
    name = _clean(value)
    if not name:
        return "Full name is required"
    if len(name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters"
    if not _NAME_PATTERN.match(name):
        return "Name can only contain letters, spaces, hyphens, and apostrophes"
    return None


def _validate_email(value: str, **_: object) -> Optional[str]:
    email = _clean(value)
    if not email:
        return "Email is required"
    if not _EMAIL_PATTERN.match(email):
        return "Please enter a valid email address"
    return None


def _validate_phone(value: str, **_: object) -> Optional[str]:
    phone = _clean(value)
    if not phone:
        return "Phone number is required"
    digit_count = len(digits_only(phone))
    if digit_count < MIN_PHONE_DIGITS:
        return "Phone number is too short"
    if digit_count > MAX_PHONE_DIGITS:
        return "Phone number is too long"
    if not _PHONE_PATTERN.match(phone):
        return "Please enter a valid phone number (include country code)"
    return None


def _validate_treatment(value: str, treatments: Iterable[str] = (), **_: object) -> Optional[str]:
    treatment = _clean(value)
    if not treatment:
        return "Please select a treatment"
    if treatment not in treatments:
        return "Please select a treatment from the list"
    return None


def _validate_preferred_date(value: str, today: Optional[date] = None, **_: object) -> Optional[str]:
    raw = _clean(value)
    if not raw:
        return "Preferred date is required"
    selected = parse_date(raw)
    if selected is None:
        return "Please enter a valid date"
    if selected < today:
        return "Date cannot be in the past"
    if selected > one_year_after(today):
        return "Date cannot be more than 1 year in advance"
    return None


def _validate_preferred_time(value: str, **_: object) -> Optional[str]:
    raw = _clean(value)
    if not raw:
        return "Preferred time is required"
    return None


FIELD_RULES: dict[str, Callable[..., Optional[str]]] = {
    "full_name": _validate_full_name,
    "email": _validate_email,
    "phone": _validate_phone,
    "treatment": _validate_treatment,
    "preferred_date": _validate_preferred_date,
    "preferred_time": _validate_preferred_time,
}


def validate_booking(
    form: BookingForm,
    treatments: Optional[Iterable[str]] = None,
    today: Optional[date] = None,
) -> dict[str, str]:
    """
    Validate every required field of a booking form.

    Args:
        form: Raw form input.
        treatments: Catalog of selectable treatment names. Defaults to the
            resort's treatment catalog.
        today: Reference date for the date range rule. Defaults to the
            local current date.

    Returns:
        Mapping of field name to error message; empty when the form is
        submittable.
    """
    catalog = frozenset(treatments if treatments is not None else get_treatment_names())
    today = today or date.today()

    errors: dict[str, str] = {}
    for field_name, rule in FIELD_RULES.items():
        message = rule(getattr(form, field_name), treatments=catalog, today=today)
        if message:
            errors[field_name] = message
    return errors


def build_request(form: BookingForm) -> BookingRequest:
    """Build a BookingRequest from a form that passed ``validate_booking``."""
    notes = _clean(form.special_notes)
    return BookingRequest(
        full_name=_clean(form.full_name),
        email=_clean(form.email),
        phone=_clean(form.phone),
        treatment=_clean(form.treatment),
        preferred_date=parse_date(form.preferred_date),
        preferred_time=_clean(form.preferred_time),
        special_notes=notes or None,
    )
