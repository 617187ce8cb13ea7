"""Tests for status envelope detection and classification."""

import pytest

from qprotocol.protocol import (
    check_and_throw,
    decode_response,
    get_status_code,
    has_envelope,
)
from qprotocol.types import (
    BENIGN_STATUS_CODES,
    ProtocolDecodeError,
    ProtocolError,
    StatusCode,
    StatusEnvelope,
)


def envelope(status, message="", type_code="x"):
    if isinstance(status, str):
        status = f'"{status}"'
    return (
        f'{{"TypeCode": "{type_code}", "StatusCode": {status}, '
        f'"Message": "{message}"}}'
    )


class TestDetection:
    @pytest.mark.parametrize(
        "body",
        [
            "plain text",
            "",
            "null",
            '{"Value": 3}',
            '{"StatusCode": "Error", "Message": "no type code"}',
            '[{"TypeCode": "x", "Message": "m"}]',
            "TypeCode StatusCode but not the third",
        ],
    )
    def test_without_all_field_names_is_success(self, body):
        assert not has_envelope(body)
        assert decode_response(body).status_code == StatusCode.SUCCESS
        check_and_throw(body)

    def test_field_names_in_any_order_and_place(self):
        assert has_envelope("Message ... StatusCode ... TypeCode")

    def test_implicit_success_envelope(self):
        implicit = StatusEnvelope.implicit_success()
        assert implicit.status_code == StatusCode.SUCCESS
        assert implicit.message == ""
        assert implicit.is_benign


class TestClassification:
    @pytest.mark.parametrize("status", ["Success", "Updated", "RequiresRestart"])
    def test_benign_status_returns(self, status):
        check_and_throw(envelope(status))

    def test_success_envelope(self):
        check_and_throw('{"TypeCode":"x","StatusCode":"Success","Message":""}')

    def test_invalid_id_raises_with_code_and_message(self):
        body = '{"TypeCode":"x","StatusCode":"InvalidId","Message":"bad id"}'
        with pytest.raises(ProtocolError) as exc_info:
            check_and_throw(body)
        assert exc_info.value.status_code == StatusCode.INVALID_ID
        assert exc_info.value.message == "bad id"
        assert "InvalidId" in str(exc_info.value)

    @pytest.mark.parametrize(
        "status",
        [code for code in StatusCode if code not in BENIGN_STATUS_CODES],
    )
    def test_every_failure_code_raises(self, status):
        with pytest.raises(ProtocolError) as exc_info:
            check_and_throw(envelope(status.wire_name, "nope"))
        assert exc_info.value.status_code is status

    def test_numeric_status_code(self):
        with pytest.raises(ProtocolError) as exc_info:
            check_and_throw(envelope(int(StatusCode.CHANNEL_DISABLED)))
        assert exc_info.value.status_code == StatusCode.CHANNEL_DISABLED
        check_and_throw(envelope(0))

    @pytest.mark.parametrize("status", ["Overheated", 999, -1])
    def test_unknown_status_fails_closed(self, status):
        with pytest.raises(ProtocolError) as exc_info:
            check_and_throw(envelope(status, "new code"))
        assert exc_info.value.status_code == status
        assert exc_info.value.message == "new code"

    def test_missing_status_field_reads_as_success(self):
        # field names only appear inside the message text
        body = '{"TypeCode": "x", "Message": "StatusCode not set"}'
        assert has_envelope(body)
        assert get_status_code(body) == StatusCode.SUCCESS
        check_and_throw(body)

    def test_none_response_raises(self):
        with pytest.raises(ProtocolError) as exc_info:
            check_and_throw(None)
        assert exc_info.value.status_code == StatusCode.ERROR


class TestDecodeErrors:
    @pytest.mark.parametrize(
        "body",
        [
            '{"TypeCode": "x", "StatusCode": "Error", "Message": ',
            "TypeCode StatusCode Message",
            '["TypeCode", "StatusCode", "Message"]',
            '"TypeCode StatusCode Message"',
        ],
    )
    def test_envelope_like_garbage_raises_decode_error(self, body):
        with pytest.raises(ProtocolDecodeError) as exc_info:
            check_and_throw(body)
        assert exc_info.value.body == body

    @pytest.mark.parametrize(
        "body",
        [
            '{"TypeCode": "x", "StatusCode": null, "Message": "m"}',
            '{"TypeCode": "x", "StatusCode": "Error", "Message": null}',
            '{"TypeCode": null, "StatusCode": "Success", "Message": ""}',
            '{"TypeCode": "x", "StatusCode": true, "Message": ""}',
            '{"TypeCode": "x", "StatusCode": 1.5, "Message": ""}',
            '{"TypeCode": "x", "StatusCode": ["Error"], "Message": ""}',
            '{"TypeCode": "x", "StatusCode": "Error", "Message": 3}',
        ],
    )
    def test_null_or_mistyped_fields_raise_decode_error(self, body):
        with pytest.raises(ProtocolDecodeError) as exc_info:
            check_and_throw(body)
        assert exc_info.value.body == body

    def test_decode_error_is_not_a_protocol_error(self):
        with pytest.raises(ProtocolDecodeError):
            decode_response("{TypeCode StatusCode Message}")
        assert not issubclass(ProtocolDecodeError, ProtocolError)


class TestEnvelope:
    def test_decode_fields(self):
        decoded = decode_response(envelope("Updated", "restart later", "Channel"))
        assert decoded.type_code == "Channel"
        assert decoded.status_code == StatusCode.UPDATED
        assert decoded.message == "restart later"
        assert decoded.is_benign

    def test_get_status_code(self):
        assert get_status_code(envelope("DataChannelOnly")) == (
            StatusCode.DATA_CHANNEL_ONLY
        )
        assert get_status_code("no envelope here") == StatusCode.SUCCESS

    def test_serializes_with_wire_names(self):
        env = StatusEnvelope(
            type_code="x", status_code=StatusCode.INVALID_ID, message="bad id"
        )
        assert env.to_dict() == {
            "TypeCode": "x",
            "StatusCode": "InvalidId",
            "Message": "bad id",
        }

    def test_repr(self):
        env = StatusEnvelope(
            type_code="x", status_code=StatusCode.INVALID_ID, message="bad id"
        )
        assert repr(env) == (
            "StatusEnvelope(type_code='x', "
            f"status_code={StatusCode.INVALID_ID!r}, message='bad id')"
        )

    def test_repr_shortens_long_text(self):
        env = StatusEnvelope(message="m" * 100)
        assert "message=<Text len=100>" in repr(env)
        assert repr(env).startswith("StatusEnvelope(type_code='', ")
