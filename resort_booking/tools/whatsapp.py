"""
WhatsApp deep link and web fallback URL construction.

The native URI (``whatsapp://send?phone=...&text=...``) is intercepted by an
installed app; the web URL (``https://wa.me/<phone>?text=...``) does the same
job in a browser. Both carry the destination as bare digits and the message
percent-encoded the way JavaScript's ``encodeURIComponent`` does it.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, unquote, urlsplit

from resort_booking.config import settings
from resort_booking.utils import digits_only

# Characters encodeURIComponent leaves alone beyond quote()'s own safe set
_URI_COMPONENT_SAFE = "!*'()"


class DeliveryConstructionError(ValueError):
    """Raised when a deep link cannot be built from the given phone/message."""


@dataclass(frozen=True)
class WhatsAppLinkPair:
    """Native URI and web fallback URL for a single message."""
    phone: str
    app_uri: str
    web_url: str


def encode_message(message: str) -> str:
    return quote(message, safe=_URI_COMPONENT_SAFE)


def decode_text_param(uri: str) -> Optional[str]:
    """Return the decoded ``text`` query parameter of a deep link or web URL."""
    for part in urlsplit(uri).query.split("&"):
        key, _, value = part.partition("=")
        if key == "text":
            return unquote(value)
    return None


def _require_digits(phone: str) -> str:
    digits = digits_only(phone)
    if not digits:
        raise DeliveryConstructionError(f"Phone number has no digits: {phone!r}")
    return digits


def build_app_uri(phone: str, message: str, base: Optional[str] = None) -> str:
    """Build the custom-scheme URI that hands a message to the native app."""
    digits = _require_digits(phone)
    base = base or settings.dispatch.app_uri
    return f"{base}?phone={digits}&text={encode_message(message)}"


def build_web_url(phone: str, message: str, base: Optional[str] = None) -> str:
    """Build the HTTPS fallback URL on the messaging provider's domain."""
    digits = _require_digits(phone)
    base = (base or settings.dispatch.web_url).rstrip("/")
    return f"{base}/{digits}?text={encode_message(message)}"


def build_links(phone: str, message: str) -> WhatsAppLinkPair:
    """Build both delivery URIs, raising DeliveryConstructionError if impossible."""
    return WhatsAppLinkPair(
        phone=_require_digits(phone),
        app_uri=build_app_uri(phone, message),
        web_url=build_web_url(phone, message),
    )
