"""
Console booking desk: fill in the booking form from a terminal.

Runs the real validator, message composer and delivery dispatcher. With
``--dry-run`` nothing is opened; the composed messages and chat URLs are
printed instead. The persistence endpoint is only called when
``PERSIST_BOOKINGS`` is enabled.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking --dry-run
    python console_demo.py --scenario invalid
    python console_demo.py --brochure downloads
"""

import argparse
import asyncio
from datetime import date, timedelta
from typing import Optional

from resort_booking.booking.dispatcher import DeliveryDispatcher
from resort_booking.booking.platform import BrowserPlatform
from resort_booking.booking.service import BookingService, process_booking
from resort_booking.config import settings
from resort_booking.schemas.booking_schema import BookingForm
from resort_booking.tools.booking_api import BookingApiClient
from resort_booking.tools.brochure import save_brochure
from resort_booking.tools.treatments import get_treatment_names, match_treatment
from resort_booking.utils import format_phone_input

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

FORM_PROMPTS: list[tuple[str, str]] = [
    ("full_name", "Full name"),
    ("email", "Email"),
    ("phone", "Phone (with country code)"),
    ("treatment", "Treatment"),
    ("preferred_date", "Preferred date (YYYY-MM-DD)"),
    ("preferred_time", "Preferred time (e.g. 14:00)"),
    ("special_notes", "Special notes (optional)"),
]


def _in_days(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


class ConsoleSession:
    """Collects a booking form in the terminal and submits it."""

    MAX_INPUT_LENGTH = 500

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, dict[str, str]] = {
        "booking": {
            "full_name": "Nadia Perera",
            "email": "nadia@example.com",
            "phone": "94771234567",
            "treatment": "massage",
            "preferred_date": _in_days(3),
            "preferred_time": "14:00",
            "special_notes": "First visit, prefers a female therapist",
        },
        "invalid": {
            "full_name": "A",
            "email": "not-an-email",
            "phone": "123",
            "treatment": "",
            "preferred_date": _in_days(-1),
            "preferred_time": "",
        },
    }

    def __init__(self, dry_run: bool = False) -> None:
        self.dry_run = dry_run
        self.values: dict[str, str] = {}

    def desk_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Booking Desk]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.resort.name.upper()} - {title}{RESET}")
        print(f"{BOLD}  Admin WhatsApp: {settings.resort.admin_whatsapp}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def _normalize(self, field_name: str, raw: str) -> str:
        if field_name == "phone":
            return format_phone_input(raw)
        if field_name == "treatment":
            return match_treatment(raw) or raw
        return raw

    def run_scenario(self, scenario: str) -> None:
        """Auto-fill a pre-scripted form for demo purposes."""
        values = self.SCENARIOS.get(scenario)
        if values is None:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for field_name, label in FORM_PROMPTS:
            raw = values.get(field_name, "")
            print(f"{BLUE}{label}: {RESET}{raw}")
            self.values[field_name] = self._normalize(field_name, raw)
        self._submit()

    def run(self) -> None:
        self._banner("Booking Desk")
        self.desk_say("Treatments: " + ", ".join(get_treatment_names()))
        self.desk_say("Type 'quit' at any prompt to exit.")

        while True:
            for field_name, label in FORM_PROMPTS:
                if field_name in self.values:
                    continue
                raw = self._ask(label)
                if raw is None:
                    print(f"\n{DIM}Session ended.{RESET}")
                    return
                self.values[field_name] = self._normalize(field_name, raw)

            if self._submit():
                return

    def _ask(self, label: str) -> Optional[str]:
        while True:
            raw = input(f"\n{BLUE}{label}: {RESET}").strip()
            if raw.lower() in ("quit", "exit", "q"):
                return None
            if len(raw) > self.MAX_INPUT_LENGTH:
                self.desk_say("That was quite long. Could you keep it brief?")
                continue
            return raw

    def _submit(self) -> bool:
        form = BookingForm(**self.values)

        if self.dry_run:
            result = process_booking(form)
            if not result.success:
                self._show_errors(result.field_errors)
                return False
            self.desk_say(f"Booking ID {result.booking_id} prepared.")
            print(f"\n{YELLOW}--- Admin message ---{RESET}\n{result.messages.admin}")
            print(f"\n{YELLOW}--- Customer message ---{RESET}\n{result.messages.customer}")
            self.system_log(f"Admin URL: {result.whatsapp_urls.admin}")
            self.system_log(f"Customer URL: {result.whatsapp_urls.customer}")
            return True

        service = BookingService(
            dispatcher=DeliveryDispatcher(BrowserPlatform()),
            api_client=BookingApiClient() if settings.api.enabled else None,
        )
        submission = asyncio.run(service.submit(form))

        if not submission.result.success:
            self._show_errors(submission.result.field_errors)
            return False
        if submission.stored is not None and not submission.stored.ok:
            if submission.stored.field_errors:
                self._show_errors(submission.stored.field_errors)
                return False
            self.desk_say(submission.stored.message)
            return True

        self.desk_say(
            f"Booking ID {submission.result.booking_id} sent to the resort via WhatsApp."
        )
        if submission.dispatch is not None:
            self.system_log(f"Dispatch: {submission.dispatch.outcome.value}")
            self.system_log(f"Trace: {' -> '.join(submission.dispatch.state_trace)}")
        return True

    def _show_errors(self, errors: dict[str, str]) -> None:
        self.desk_say("Please correct the following:")
        labels = dict(FORM_PROMPTS)
        for field_name, message in errors.items():
            print(f"  {RED}{labels.get(field_name, field_name)}: {message}{RESET}")
            self.values.pop(field_name, None)


def main() -> None:
    parser = argparse.ArgumentParser(description="Console booking desk")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-fill a pre-scripted form instead of interactive mode",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print messages and URLs instead of opening WhatsApp",
    )
    parser.add_argument(
        "--brochure",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Save the treatments brochure PDF into DIR and exit",
    )
    args = parser.parse_args()

    if args.brochure is not None:
        path = save_brochure(args.brochure)
        print(f"{GREEN}Brochure saved: {path}{RESET}")
        return

    session = ConsoleSession(dry_run=args.dry_run)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
