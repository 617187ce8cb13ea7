"""
Command-line interface for qprotocol.

Single requests against a QServer, mostly for bring-up and diagnostics.
Built on Click, with the same `--tree` helper on every group.

Examples
--------
Reading an endpoint:
```bash
$ qprotocol get http://192.168.100.2:8080/ system/info
```

Enabling a channel with query parameters:
```bash
$ qprotocol put http://192.168.100.2:8080/ hardware/channel -p id=3 -b '{"Enabled": true}'
```

Recording the exchange with QServer:
```bash
$ qprotocol get http://192.168.100.2:8080/ system/info --traffic-log traffic.log
```

CLI Tree
--------

```
$ qprotocol --tree
cli
└── codes
└── delete
└── get
└── put
└── status
```
"""

from .base import cli, tree_option

__all__ = ["cli", "tree_option"]
