"""Status checks on QServer response bodies.

Every response body may embed a status envelope::

    {"TypeCode": "...", "StatusCode": "InvalidId", "Message": "bad id"}

Detection is structural: a body counts as an envelope only when the text
contains all three field names. Anything else is an implicit success. The
HTTP status code plays no part here, the transport has already accepted it.
"""

from __future__ import annotations

import simplejson as json
from loguru import logger
from mashumaro.exceptions import InvalidFieldValue, MissingField

from qprotocol.types import (
    ProtocolDecodeError,
    ProtocolError,
    StatusCode,
    StatusEnvelope,
)

ENVELOPE_FIELDS = ("TypeCode", "StatusCode", "Message")

# JSON types each envelope field may carry when present
_FIELD_TYPES = {"TypeCode": str, "StatusCode": (str, int), "Message": str}


def has_envelope(response: str) -> bool:
    """Whether the body text mentions every envelope field name."""
    return all(name in response for name in ENVELOPE_FIELDS)


def _fields_well_typed(data: dict) -> bool:
    for name, types in _FIELD_TYPES.items():
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, types):
            return False
    return True


def decode_response(response: str) -> StatusEnvelope:
    """Decode the status envelope carried by a response body.

    Parameters
    ----------
    response : str
        Raw body text as received from QServer.

    Returns
    -------
    StatusEnvelope
        The embedded envelope, or an implicit success envelope when the body
        doesn't carry one.

    Raises
    ------
    ProtocolDecodeError
        If the body looks like an envelope but isn't one, including fields
        that are null or of the wrong JSON type.
    """
    if not has_envelope(response):
        return StatusEnvelope.implicit_success()

    try:
        data = json.loads(response)
    except json.JSONDecodeError as e:
        raise ProtocolDecodeError(response) from e

    if data is None:
        return StatusEnvelope.implicit_success()
    if not isinstance(data, dict) or not _fields_well_typed(data):
        raise ProtocolDecodeError(response)

    try:
        return StatusEnvelope.from_dict(data)
    except (MissingField, InvalidFieldValue, TypeError, ValueError) as e:
        raise ProtocolDecodeError(response) from e


def get_status_code(response: str) -> StatusCode | int | str:
    """Status code reported by a response body."""
    return decode_response(response).status_code


def check_and_throw(response: str | None) -> None:
    """Raise if the response body reports a logical failure.

    Raises
    ------
    ProtocolError
        With the server's status code and message for any non-benign status,
        including codes this client doesn't know about.
    ProtocolDecodeError
        If the body looks like an envelope but can't be decoded.
    """
    if response is None:
        raise ProtocolError(
            StatusCode.ERROR,
            "Invalid response received from REST request, it may not be None!",
        )

    envelope = decode_response(response)
    if envelope.is_benign:
        if envelope.status_code != StatusCode.SUCCESS:
            logger.debug("QServer reported {}", envelope.status_code.wire_name)
        return

    error = ProtocolError(envelope.status_code, envelope.message)
    logger.warning("{}", error)
    raise error
