from typing import Callable, Optional

import httpx
import pytest

from qprotocol.restful import RestfulClient

BASE_URL = "http://qserver.test/"


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow running test")


class FakeQServer:
    """Scripted stand-in for QServer behind an `httpx.MockTransport`.

    Answers every request with `status_code` and `body`, or raises `error`,
    or defers to `responder` when set. Requests are recorded in `requests`.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = ""
        self.error: Optional[Exception] = None
        self.responder: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def reply(self, body: str = "", status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def qserver():
    return FakeQServer()


@pytest.fixture
def http_client(qserver):
    client = httpx.Client(transport=httpx.MockTransport(qserver.handler))
    yield client
    client.close()


@pytest.fixture
def client(http_client):
    return RestfulClient(BASE_URL, http_client=http_client)
