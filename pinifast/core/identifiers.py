"""Opaque identifier helpers."""

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def random_base36(bits: int = 52) -> str:
    return to_base36(secrets.randbits(bits))


def generate_id() -> str:
    """Random base36 prefix followed by the base36 millisecond timestamp."""
    return random_base36() + to_base36(int(time.time() * 1000))
