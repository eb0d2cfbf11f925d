import json

from lcx_client.adapters.lcx.decoder import PARSE_ERROR_MESSAGE, decode_frame
from lcx_client.models.messages import DataMessage, ErrorMessage, StatusMessage


def test_json_object_becomes_data():
    message = decode_frame('{"a":1}')
    assert isinstance(message, DataMessage)
    assert message.payload == {"a": 1}


def test_json_array_with_leading_whitespace_becomes_data():
    message = decode_frame('  \n[1, 2]')
    assert isinstance(message, DataMessage)
    assert message.payload == [1, 2]


def test_malformed_json_becomes_error_with_cause():
    message = decode_frame("{bad json")
    assert isinstance(message, ErrorMessage)
    assert message.message == PARSE_ERROR_MESSAGE
    assert isinstance(message.cause, json.JSONDecodeError)


def test_plain_text_is_passed_through():
    message = decode_frame("PING")
    assert isinstance(message, StatusMessage)
    assert message.message == "PING"


def test_bytes_are_decoded_as_utf8():
    message = decode_frame(b'{"Type":"ticker"}')
    assert isinstance(message, DataMessage)
    assert message.payload == {"Type": "ticker"}


def test_invalid_utf8_becomes_error():
    message = decode_frame(b"\xff\xfe{")
    assert isinstance(message, ErrorMessage)
    assert isinstance(message.cause, UnicodeDecodeError)


def test_empty_frame_is_status():
    assert decode_frame("") == StatusMessage(message="")
