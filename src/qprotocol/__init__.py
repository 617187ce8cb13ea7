# -*- coding: utf-8 -*-
"""# qprotocol

Python client for QServer, the REST server of a remote instrument controller.

Every call is a blocking HTTP PUT, GET or DELETE with a JSON body. QServer
answers logical failures inside the body, in a status envelope, so each
response is checked twice: once for the HTTP status and once for the
envelope. Failures surface as exceptions from `qprotocol.types`.

```python
from qprotocol import RestfulClient, ProtocolError

client = RestfulClient("http://192.168.100.2:8080/")
try:
    client.put("hardware/channel", body={"Enabled": True}, parameters=[("id", 3)])
except ProtocolError as err:
    print(err.status_code, err.message, client.last_response)
```

- `qprotocol.restful`: HTTP client and JSON codec.
- `qprotocol.protocol`: status envelope checks.
- `qprotocol.types`: status codes, messages, errors.
- `qprotocol.cli`: `qprotocol` command line tool.
"""

from ._version import __version__
from .protocol import check_and_throw, decode_response, get_status_code
from .restful import RestfulClient, build_url
from .types import (
    ArgumentError,
    CommsError,
    DeserializationError,
    HttpParameter,
    ProtocolDecodeError,
    ProtocolError,
    RestfulInterface,
    ServerTimeoutError,
    StatusCode,
    StatusEnvelope,
    TransportError,
)

__all__ = [
    "__version__",
    "RestfulClient",
    "build_url",
    "check_and_throw",
    "decode_response",
    "get_status_code",
    "ArgumentError",
    "CommsError",
    "DeserializationError",
    "HttpParameter",
    "ProtocolDecodeError",
    "ProtocolError",
    "RestfulInterface",
    "ServerTimeoutError",
    "StatusCode",
    "StatusEnvelope",
    "TransportError",
]
