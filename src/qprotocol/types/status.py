"""Status codes reported by QServer inside a response envelope."""

from __future__ import annotations

from enum import IntEnum


class StatusCode(IntEnum):
    """Logical outcome of a QServer request.

    Only `SUCCESS`, `UPDATED` and `REQUIRES_RESTART` are benign, everything
    else (including values QServer may add later) is a failure.
    """

    SUCCESS = 0
    UPDATED = 1
    REQUIRES_RESTART = 2
    ERROR = 3
    INVALID_CONFIGURATION = 4
    INVALID_ID = 5
    VERSION_MISMATCH = 6
    ACTION_NOT_FOUND = 7
    CHANNEL_ONLY = 8
    ANALOG_OUTPUT_CHANNEL_ONLY = 9
    DATA_CHANNEL_ONLY = 10
    CHANNEL_DISABLED = 11
    CHANNEL_DOES_NOT_SUPPORT_TEST_SIGNALS = 12
    CHANNEL_DOES_NOT_SUPPORT_TEDS = 13
    ACTION_HAS_SIDE_EFFECTS = 14
    AUTO_ZERO_NOT_SUPPORTED = 15
    AUTO_ZERO_FAILED = 16
    READING_STATUS_REGISTER_FAILED = 17
    STATUS_REGISTER_NOT_SUPPORTED = 18
    CAN_FD_CHANNEL_ONLY = 19

    @property
    def wire_name(self) -> str:
        """Name as QServer spells it, e.g. ``InvalidId``."""
        return _WIRE_NAMES[self]

    @classmethod
    def parse(cls, raw: StatusCode | int | str) -> StatusCode | int | str:
        """Map a raw envelope value onto a member.

        Accepts members, integers, numeric strings and member names in either
        QServer (``InvalidId``) or Python (``INVALID_ID``) spelling, ignoring
        case. Values that match nothing are returned unchanged so the caller
        can still report them.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int):
            try:
                return cls(raw)
            except ValueError:
                return raw
        if isinstance(raw, str):
            text = raw.strip()
            if text.lstrip("-").isdigit():
                return cls.parse(int(text))
            return _BY_LOWER_NAME.get(text.lower().replace("_", ""), raw)
        return raw


def _camel(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


_WIRE_NAMES = {code: _camel(code.name) for code in StatusCode}

_BY_LOWER_NAME = {code.name.lower().replace("_", ""): code for code in StatusCode}

BENIGN_STATUS_CODES = frozenset(
    {StatusCode.SUCCESS, StatusCode.UPDATED, StatusCode.REQUIRES_RESTART}
)


def is_benign(status_code: StatusCode | int | str) -> bool:
    """True only for the benign members; unknown values are failures."""
    return status_code in BENIGN_STATUS_CODES and isinstance(status_code, StatusCode)
