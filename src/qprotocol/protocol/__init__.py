"""Response envelope decoding and status checks."""

from .checks import (
    ENVELOPE_FIELDS,
    check_and_throw,
    decode_response,
    get_status_code,
    has_envelope,
)

__all__ = [
    "ENVELOPE_FIELDS",
    "check_and_throw",
    "decode_response",
    "get_status_code",
    "has_envelope",
]
