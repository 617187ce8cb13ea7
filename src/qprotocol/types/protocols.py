"""Structural type of a QServer client.

Code that talks to QServer should depend on `RestfulInterface` rather than on
`qprotocol.restful.RestfulClient`, so a fake can stand in for the real client:

    class FakeQServer:
        url = "http://fake/"
        last_response = None

        def put(self, endpoint, body=None, parameters=()): ...
        def get(self, endpoint, target=Any, parameters=()): ...
        def delete(self, endpoint, parameters=()): ...

    assert isinstance(FakeQServer(), RestfulInterface)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .messages import HttpParameter

T = TypeVar("T")

Parameters = Iterable["HttpParameter | tuple[str, Any]"]


@runtime_checkable
class RestfulInterface(Protocol):
    """Blocking PUT/GET/DELETE access to QServer."""

    url: str
    last_response: str | None

    def put(
        self, endpoint: str, body: Any = None, parameters: Parameters = ()
    ) -> None: ...

    def get(
        self, endpoint: str, target: type[T] = ..., parameters: Parameters = ()
    ) -> T: ...

    def delete(self, endpoint: str, parameters: Parameters = ()) -> None: ...
