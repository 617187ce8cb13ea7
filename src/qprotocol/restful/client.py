"""HTTP client for QServer.

`RestfulClient` performs blocking PUT/GET/DELETE calls against
``url + endpoint + ?query``. Each call is checked in two stages:

1. Transport: the HTTP status must be one QServer uses to answer
   (see `ACCEPTED_STATUS_CODES`), otherwise `TransportError`.
2. Protocol: the body is checked for a status envelope with
   `qprotocol.protocol.check_and_throw`, which raises `ProtocolError` for
   any non-benign status.

A timeout raises `ServerTimeoutError`. Each call has `REQUEST_TIMEOUT` seconds
in total, counted from sending the request to reading the last byte of the
body. Other httpx transport errors (connection refused, DNS, TLS) propagate
as they are. Nothing is retried.

All clients share one `httpx.Client` unless another is passed in, so
connections are pooled process-wide. `last_response` holds the raw text of
the latest body and is shared between threads using the same client.

Examples
--------
```python
client = RestfulClient("http://192.168.100.2:8080/")
client.put("hardware/channels/3", body={"Enabled": True})
info = client.get("system/info", SystemInfo)
client.delete("acquisition/buffers", parameters=[("id", 7)])
```
"""

from __future__ import annotations

import threading
import time
from typing import Any, Iterable, TypeVar

import httpx
from loguru import logger

from qprotocol.protocol import check_and_throw, decode_response
from qprotocol.restful.converter import JsonCodec
from qprotocol.types import (
    ArgumentError,
    EndpointRequest,
    HttpParameter,
    HttpResult,
    ServerTimeoutError,
    StatusEnvelope,
    TimedOut,
    TransportError,
    TransportFailure,
    TransportOutcome,
)
from qprotocol.util.defaults import REQUEST_TIMEOUT
from qprotocol.util.logging import log_traffic

T = TypeVar("T")

Parameters = Iterable[HttpParameter | tuple[str, Any]]

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_NO_BODY = object()

_shared_http_client: httpx.Client | None = None
_shared_http_lock = threading.Lock()


def get_shared_http_client() -> httpx.Client:
    """The process-wide httpx client, created on first use."""
    global _shared_http_client
    with _shared_http_lock:
        if _shared_http_client is None or _shared_http_client.is_closed:
            _shared_http_client = httpx.Client(timeout=REQUEST_TIMEOUT)
            logger.debug("Created shared HTTP client.")
        return _shared_http_client


def close_shared_http_client() -> None:
    """Close the process-wide httpx client, if one was created."""
    global _shared_http_client
    with _shared_http_lock:
        if _shared_http_client is not None:
            _shared_http_client.close()
            _shared_http_client = None
            logger.debug("Closed shared HTTP client.")


def build_url(
    base_url: str, endpoint: str, parameters: Parameters | None = None
) -> str:
    """Join base URL, endpoint and an unescaped ``name=value&...`` query."""
    return EndpointRequest.build(base_url, endpoint, parameters).url


class RestfulClient:
    """Blocking PUT/GET/DELETE access to one QServer.

    Parameters
    ----------
    url : str
        Base URL of the server, prepended verbatim to every endpoint.
    http_client : httpx.Client, optional
        Client to send requests with. Defaults to the shared client.

    Raises
    ------
    ArgumentError
        If `url` is None or empty.
    """

    def __init__(self, url: str, http_client: httpx.Client | None = None):
        if not url:
            raise ArgumentError("Argument url may not be None or empty!")

        self.url = url
        self.last_response: str | None = None
        if http_client is None:
            http_client = get_shared_http_client()
        self._http = http_client
        self._codec = JsonCodec()

    def __repr__(self):
        return f"{self.__class__.__name__}(url={self.url!r})"

    # ------------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------------

    def put(
        self, endpoint: str, body: Any = None, parameters: Parameters = ()
    ) -> None:
        """PUT `body` as JSON to `endpoint`.

        Raises
        ------
        TransportError
            If the HTTP status is not one QServer answers with.
        ServerTimeoutError
            If the server didn't answer in time.
        ProtocolError
            If the body reports a non-benign status.
        ProtocolDecodeError
            If the body looks like a status envelope but can't be decoded.
        """
        self._exchange("PUT", endpoint, body, parameters)

    def get(
        self, endpoint: str, target: type[T] | Any = Any, parameters: Parameters = ()
    ) -> T:
        """GET `endpoint` and decode the body as `target`.

        The status check runs before decoding. With the default `target` only
        leaf scalars are decoded, objects and arrays come back as None.

        Raises
        ------
        DeserializationError
            If the body can't be decoded as `target`. Otherwise as `put`.
        """
        body_text = self._exchange("GET", endpoint, _NO_BODY, parameters)
        return self._codec.decode(body_text, target)

    def get_text(self, endpoint: str, parameters: Parameters = ()) -> str:
        """GET `endpoint` and return the checked body text without decoding it.

        Raises as `put`.
        """
        return self._exchange("GET", endpoint, _NO_BODY, parameters)

    def delete(self, endpoint: str, parameters: Parameters = ()) -> None:
        """DELETE `endpoint`. Raises as `put`."""
        self._exchange("DELETE", endpoint, _NO_BODY, parameters)

    def get_status(
        self, endpoint: str, parameters: Parameters = ()
    ) -> StatusEnvelope:
        """GET `endpoint` and return its status envelope without raising on it.

        Transport failures still raise as in `put`.
        """
        outcome = self.send("GET", endpoint, parameters=parameters)
        return decode_response(self._accept("GET", endpoint, outcome))

    # ------------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------------

    def send(
        self,
        method: str,
        endpoint: str,
        body: Any = _NO_BODY,
        parameters: Parameters = (),
    ) -> TransportOutcome:
        """Perform one HTTP exchange and classify the result without raising.

        `last_response` is updated whenever a whole body was read in time.
        Leave `body` out to send no content; an explicit None is sent as
        ``null``.
        """
        request = EndpointRequest.build(self.url, endpoint, parameters)
        payload = ""
        content = None
        headers = None
        if body is not _NO_BODY:
            payload = self._codec.encode(body)
            content = payload.encode("utf-8")
            headers = {"Content-Type": JSON_CONTENT_TYPE}

        logger.debug("{} {}", method, request.url)
        log_traffic("->", "{} {} {}", method, request.url, payload)
        deadline = time.monotonic() + REQUEST_TIMEOUT
        try:
            with self._http.stream(
                method,
                request.url,
                content=content,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
            ) as response:
                received = bytearray()
                for chunk in response.iter_bytes():
                    received += chunk
                    if time.monotonic() > deadline:
                        break
                if time.monotonic() > deadline:
                    logger.debug(
                        "{} {} exceeded {}s while reading the body",
                        method,
                        request.url,
                        REQUEST_TIMEOUT,
                    )
                    return TimedOut(self.url)
                text = received.decode(
                    response.encoding or "utf-8", errors="replace"
                )
        except httpx.TimeoutException:
            return TimedOut(self.url)
        except httpx.TransportError as e:
            return TransportFailure(e)

        self.last_response = text
        log_traffic("<-", "{} {}", response.status_code, text)
        return HttpResult(response.status_code, text)

    def _accept(
        self, method: str, endpoint: str, outcome: TransportOutcome
    ) -> str:
        if isinstance(outcome, TimedOut):
            logger.warning(
                "{} {} timed out after {}s", method, endpoint, REQUEST_TIMEOUT
            )
            raise ServerTimeoutError(outcome.url)
        if isinstance(outcome, TransportFailure):
            raise outcome.cause
        if not outcome.is_accepted:
            logger.warning(
                "{} {} returned unsupported HTTP status {}",
                method,
                endpoint,
                outcome.status_code,
            )
            raise TransportError(method, endpoint, outcome.body_text)
        return outcome.body_text

    def _exchange(
        self, method: str, endpoint: str, body: Any, parameters: Parameters
    ) -> str:
        outcome = self.send(method, endpoint, body, parameters)
        body_text = self._accept(method, endpoint, outcome)
        check_and_throw(body_text)
        return body_text
