"""
Message types, status codes and errors for talking to QServer.

The qprotocol.types package holds everything the transport and the response
protocol pass between each other and up to calling code:

1. Status codes (status.py)
    - The closed `StatusCode` enumeration and its benign subset.

2. Messages (messages.py)
    - `StatusEnvelope`, the optional status block in a response body.
    - `HttpParameter` and `EndpointRequest`, describing an outgoing call.
    - Transport outcomes: `HttpResult`, `TimedOut`, `TransportFailure`.

3. Protocols (protocols.py)
    - `RestfulInterface`, the structural type of a QServer client.

4. Errors (this module)
    - One exception per failure kind, all deriving from `CommsError`.

Handling failures:
```python
from qprotocol.types import ProtocolError, StatusCode
try:
    client.put("channels/3/enable")
except ProtocolError as err:
    if err.status_code == StatusCode.CHANNEL_DISABLED:
        ...
```

See Also
--------
qprotocol.restful : HTTP client
qprotocol.protocol : Response envelope checks
"""

from __future__ import annotations

from typing import Any

from .messages import (
    EndpointRequest,
    HttpParameter,
    HttpResult,
    Message,
    StatusEnvelope,
    TimedOut,
    TransportFailure,
    TransportOutcome,
)
from .protocols import RestfulInterface
from .status import BENIGN_STATUS_CODES, StatusCode, is_benign


# Exceptions
class CommsError(Exception):
    """Base exception for communication errors."""

    pass


class ArgumentError(CommsError, ValueError):
    """Raised when a client is constructed with invalid configuration."""

    pass


class TransportError(CommsError):
    """Raised when the server answers with an HTTP status we don't accept."""

    def __init__(self, method: str, endpoint: str, body: str | None):
        super().__init__(
            f"{method} command failed: {endpoint} with error message: {body}"
        )
        self.method = method
        self.endpoint = endpoint
        self.body = body


class ServerTimeoutError(CommsError, TimeoutError):
    """Raised when the server does not answer within the request timeout."""

    def __init__(self, url: str):
        super().__init__(f"Unable to reach the QServer on the provided URL {url}.")
        self.url = url


class ProtocolDecodeError(CommsError):
    """Raised when a body looks like a status envelope but can't be decoded.

    This points at a protocol mismatch between client and server rather than
    a failure the server meant to report.
    """

    def __init__(self, body: str):
        super().__init__(f"Unable to decode the response given from QServer: {body}")
        self.body = body


class ProtocolError(CommsError):
    """Raised when the server reports a non-benign status code."""

    def __init__(self, status_code: StatusCode | int | str, message: str = ""):
        name = (
            status_code.wire_name
            if isinstance(status_code, StatusCode)
            else str(status_code)
        )
        super().__init__(f"QServer reported {name}: {message}")
        self.status_code = status_code
        self.message = message


class DeserializationError(CommsError):
    """Raised when a response body can't be materialized as the target type."""

    def __init__(self, target: Any, body: str, reason: str = ""):
        super().__init__(
            f"Unable to decode response as {getattr(target, '__name__', target)}: "
            f"{reason}"
        )
        self.target = target
        self.body = body


__all__ = [
    "Message",
    "StatusEnvelope",
    "HttpParameter",
    "EndpointRequest",
    "HttpResult",
    "TimedOut",
    "TransportFailure",
    "TransportOutcome",
    "RestfulInterface",
    "StatusCode",
    "BENIGN_STATUS_CODES",
    "is_benign",
    "CommsError",
    "ArgumentError",
    "TransportError",
    "ServerTimeoutError",
    "ProtocolDecodeError",
    "ProtocolError",
    "DeserializationError",
]
