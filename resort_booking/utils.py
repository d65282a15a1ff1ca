"""Phone number helpers shared by the validator, link builder and console."""

import re


def digits_only(value: str) -> str:
    """Strip everything except digits.

    Examples:
        >>> digits_only("+94 77 503 0038")
        '94775030038'
        >>> digits_only("(077) 503-0038")
        '0775030038'
    """
    return re.sub(r"[^0-9]", "", value or "")


def format_phone_input(value: str) -> str:
    """Group phone digits the way the booking form displays them while typing.

    Sri Lankan numbers (starting 94) become ``+94 XX XXX XXXX``, local numbers
    (starting 0) become ``0XX XXX XXXX`` and anything else is treated as an
    international number without a recognised country code.

    Examples:
        >>> format_phone_input("94775030038")
        '+94 77 503 0038'
        >>> format_phone_input("0775030038")
        '077 503 0038'
        >>> format_phone_input("4155550123")
        '+415 555 0123'
    """
    digits = digits_only(value)
    if not digits:
        return ""

    if digits.startswith("94"):
        if len(digits) <= 2:
            return f"+{digits}"
        if len(digits) <= 4:
            return f"+{digits[:2]} {digits[2:]}"
        if len(digits) <= 7:
            return f"+{digits[:2]} {digits[2:4]} {digits[4:]}"
        return f"+{digits[:2]} {digits[2:4]} {digits[4:7]} {digits[7:11]}"

    if digits.startswith("0"):
        if len(digits) <= 3:
            return digits
        if len(digits) <= 6:
            return f"{digits[:3]} {digits[3:]}"
        return f"{digits[:3]} {digits[3:6]} {digits[6:10]}"

    if len(digits) <= 3:
        return f"+{digits}"
    if len(digits) <= 6:
        return f"+{digits[:3]} {digits[3:]}"
    return f"+{digits[:3]} {digits[3:6]} {digits[6:10]}"
