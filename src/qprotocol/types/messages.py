"""Message types exchanged with QServer over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from qprotocol.util.defaults import ACCEPTED_STATUS_CODES

from .status import StatusCode, is_benign


def _status_to_wire(status_code: StatusCode | int | str) -> int | str:
    if isinstance(status_code, StatusCode):
        return status_code.wire_name
    return status_code


@dataclass
class Message(DataClassDictMixin):
    """Base class for all messages."""

    def __repr__(self):
        msg = self.__class__.__name__ + "("
        for i, (field, val) in enumerate(self.__dict__.items()):
            if i:
                msg += ", "
            if isinstance(val, str) and len(val) > 80:
                msg += f"{field}=<Text len={len(val)}>"
            else:
                msg += f"{field}={val!r}"
        return msg + ")"


@dataclass(kw_only=True, repr=False)
class StatusEnvelope(Message):
    """Status block QServer embeds in a response body.

    On the wire: ``{"TypeCode": str, "StatusCode": str | int, "Message": str}``.
    Fields missing from the body keep their defaults, so an envelope without
    ``StatusCode`` reads as a success.
    """

    type_code: str = field(default="", metadata=field_options(alias="TypeCode"))
    status_code: StatusCode | int | str = field(
        default=StatusCode.SUCCESS,
        metadata=field_options(
            alias="StatusCode",
            serialize=_status_to_wire,
            deserialize=StatusCode.parse,
        ),
    )
    message: str = field(default="", metadata=field_options(alias="Message"))

    class Config(BaseConfig):
        serialize_by_alias = True

    @classmethod
    def implicit_success(cls) -> StatusEnvelope:
        """Envelope assumed for a body that doesn't carry one."""
        return cls(status_code=StatusCode.SUCCESS)

    @property
    def is_benign(self) -> bool:
        return is_benign(self.status_code)


@dataclass(frozen=True)
class HttpParameter:
    """A single ``name=value`` query parameter."""

    name: str
    value: Any

    def __str__(self) -> str:
        return f"{self.name}={self.value}"

    @classmethod
    def coerce(cls, item: HttpParameter | tuple[str, Any]) -> HttpParameter:
        if isinstance(item, cls):
            return item
        name, value = item
        return cls(name, value)


@dataclass(frozen=True)
class EndpointRequest:
    """Everything needed to address one QServer endpoint.

    `base_url` and `path` are joined verbatim. Query values are not escaped,
    callers pre-escape where QServer needs it.
    """

    base_url: str
    path: str
    parameters: tuple[HttpParameter, ...] = ()
    body: Any = None

    @classmethod
    def build(
        cls,
        base_url: str,
        path: str,
        parameters: Iterable[HttpParameter | tuple[str, Any]] | None = None,
        body: Any = None,
    ) -> EndpointRequest:
        params = tuple(HttpParameter.coerce(p) for p in parameters or ())
        return cls(base_url=base_url, path=path, parameters=params, body=body)

    @property
    def query(self) -> str:
        return "&".join(str(p) for p in self.parameters)

    @property
    def url(self) -> str:
        if self.parameters:
            return f"{self.base_url}{self.path}?{self.query}"
        return f"{self.base_url}{self.path}"


# ============================================================================
# Transport outcomes, one per request
# ============================================================================


@dataclass(frozen=True)
class HttpResult:
    """The server answered; the body may still report a logical failure."""

    status_code: int
    body_text: str

    @property
    def is_accepted(self) -> bool:
        return self.status_code in ACCEPTED_STATUS_CODES


@dataclass(frozen=True)
class TimedOut:
    """No answer within the request timeout."""

    url: str


@dataclass(frozen=True)
class TransportFailure:
    """The exchange failed below HTTP (connect, DNS, TLS, ...)."""

    cause: Exception


TransportOutcome = HttpResult | TimedOut | TransportFailure
