"""Surrogate identifier generation."""

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a new opaque identifier.

    The value is the current time in milliseconds followed by eleven
    random characters, both in base 36.  Callers must not rely on
    identifiers sorting chronologically.
    """
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(11))
    return _to_base36(millis) + suffix
