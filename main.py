"""
Booking desk entry point.

Collects a booking in the terminal, then hands the admin message to
WhatsApp (native app first, wa.me fallback). Preview mode prints the
composed messages and chat URLs without opening anything.

Usage:
    Send:     python main.py
    Preview:  python main.py preview
"""

import logging
import sys

from resort_booking.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode(dry_run: bool) -> None:
    from console_demo import ConsoleSession

    logger.debug("Starting %s (dry_run=%s)", settings.app_name, dry_run)
    session = ConsoleSession(dry_run=dry_run)
    session.run()


if __name__ == "__main__":
    _run_console_mode(dry_run=len(sys.argv) > 1 and sys.argv[1] == "preview")
