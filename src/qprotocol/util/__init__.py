# -*- coding: utf-8 -*-
"""
Constants and logging helpers for qprotocol.

Examples
--------
Logging client traffic to the terminal:
```python
from qprotocol.util import add_traffic_sink, start_client_log
start_client_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")
add_traffic_sink("qserver-traffic.log")
```

See Also
--------
qprotocol.util.defaults : Fixed timeout, accepted HTTP codes, log levels
qprotocol.util.logging : Logging configuration
"""

from .defaults import (
    ACCEPTED_STATUS_CODES,
    DEFAULT_LOGLEVEL,
    REQUEST_TIMEOUT,
    SINGLE_LINE_ERR_LOG,
    TEST_LOGLEVEL,
)
from .logging import (
    TRAFFIC_FORMAT,
    add_traffic_sink,
    clear_log,
    format_error_response,
    get_log_filename,
    log_default_path_client,
    log_traffic,
    shutdown_client_log,
    start_client_log,
)

__all__ = [
    "ACCEPTED_STATUS_CODES",
    "DEFAULT_LOGLEVEL",
    "REQUEST_TIMEOUT",
    "SINGLE_LINE_ERR_LOG",
    "TEST_LOGLEVEL",
    "TRAFFIC_FORMAT",
    "add_traffic_sink",
    "clear_log",
    "format_error_response",
    "get_log_filename",
    "log_default_path_client",
    "log_traffic",
    "shutdown_client_log",
    "start_client_log",
]
