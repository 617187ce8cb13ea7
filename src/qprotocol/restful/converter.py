"""JSON encoding and decoding for QServer payloads.

Request bodies and typed responses go through mashumaro, so models are plain
dataclasses (optionally with `DataClassDictMixin`). Untyped values are only
inferred at the leaves: strings, numbers, booleans and null come back as
Python scalars, while objects and arrays come back as `None`. If a response
has nested structure, decode it into a dataclass rather than `Any`.

Examples
--------
```python
@dataclass
class ChannelInfo:
    id: int
    name: str
    setting: JsonScalar = inferred_field()

codec = JsonCodec()
codec.decode('{"id": 3, "name": "ch3", "setting": 2.5}', ChannelInfo)
codec.decode("42", Any)  # -> 42
codec.decode('{"a": 1}', Any)  # -> None
```
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar, Union

import simplejson as json
from mashumaro import DataClassDictMixin, field_options
from mashumaro.codecs.basic import BasicDecoder, BasicEncoder
from mashumaro.exceptions import (
    InvalidFieldValue,
    MissingField,
    UnserializableDataError,
    UnserializableField,
)

from qprotocol.types import DeserializationError

T = TypeVar("T")

JsonScalar = Union[str, int, float, bool, None]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def infer_value(token: Any) -> JsonScalar:
    """Map a decoded JSON value onto a leaf scalar.

    Integers that fit in a signed 64-bit value stay integers, larger ones
    become floats. Objects and arrays are not materialized.
    """
    if token is None or isinstance(token, (str, bool, float)):
        return token
    if isinstance(token, int):
        if _INT64_MIN <= token <= _INT64_MAX:
            return token
        return float(token)
    return None


def inferred_field(default: JsonScalar = None) -> Any:
    """Dataclass field whose value is decoded with `infer_value`."""
    return dataclasses.field(
        default=default, metadata=field_options(deserialize=infer_value)
    )


def _is_untyped(target: Any) -> bool:
    return target is Any or target is object


class JsonCodec:
    """Serializes request bodies and materializes response bodies."""

    def __init__(self) -> None:
        self._decoders: dict[Any, BasicDecoder] = {}
        self._encoders: dict[type, BasicEncoder] = {}

    def encode(self, body: Any) -> str:
        """Serialize a request body to JSON text. `None` gives ``null``."""
        if isinstance(body, DataClassDictMixin):
            data = body.to_dict()
        elif dataclasses.is_dataclass(body) and not isinstance(body, type):
            data = self._encoder(type(body)).encode(body)
        else:
            data = body
        return json.dumps(data, for_json=True)

    def decode(self, text: str, target: type[T] | Any = Any) -> T:
        """Decode JSON text into `target`.

        Raises
        ------
        DeserializationError
            If the text isn't JSON or doesn't fit `target`.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(target, text, str(e)) from e

        if _is_untyped(target):
            return infer_value(data)

        try:
            return self._decoder(target).decode(data)
        except (
            MissingField,
            InvalidFieldValue,
            UnserializableDataError,
            UnserializableField,
            TypeError,
            ValueError,
        ) as e:
            raise DeserializationError(target, text, str(e)) from e

    def _decoder(self, target: Any) -> BasicDecoder:
        decoder = self._decoders.get(target)
        if decoder is None:
            decoder = BasicDecoder(target)
            self._decoders[target] = decoder
        return decoder

    def _encoder(self, body_type: type) -> BasicEncoder:
        encoder = self._encoders.get(body_type)
        if encoder is None:
            encoder = BasicEncoder(body_type)
            self._encoders[body_type] = encoder
        return encoder
