"""HTTP access to QServer."""

from .client import (
    RestfulClient,
    build_url,
    close_shared_http_client,
    get_shared_http_client,
)
from .converter import JsonCodec, JsonScalar, infer_value, inferred_field

__all__ = [
    "RestfulClient",
    "build_url",
    "close_shared_http_client",
    "get_shared_http_client",
    "JsonCodec",
    "JsonScalar",
    "infer_value",
    "inferred_field",
]
