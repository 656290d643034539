"""Tests for the base64 token codec."""

import base64

import pytest

from paramsign.core.token import decode_token, encode_token
from paramsign.errors import DecodingError, EncodingError


def test_round_trip_keeps_types():
    params = {"s": "x", "n": 3, "f": 1.5, "b": True, "z": None, "nested": {"k": [1, 2]}}
    assert decode_token(encode_token(params)) == params


def test_token_is_standard_base64_json():
    token = encode_token({"a": "1"})
    assert base64.b64decode(token) == b'{"a":"1"}'


def test_unicode_values():
    params = {"name": "Zoë ✓"}
    assert decode_token(encode_token(params)) == params


def test_encode_unserializable():
    with pytest.raises(EncodingError):
        encode_token({"a": object()})


def test_decode_bad_alphabet():
    token = encode_token({"a": "1"})
    with pytest.raises(DecodingError):
        decode_token("!!" + token[2:])


def test_decode_non_ascii():
    with pytest.raises(DecodingError):
        decode_token("é")


def test_decode_bad_padding():
    with pytest.raises(DecodingError):
        decode_token("abc")


def test_decode_not_json():
    with pytest.raises(DecodingError):
        decode_token(base64.b64encode(b"not json").decode())


def test_decode_not_utf8():
    with pytest.raises(DecodingError):
        decode_token(base64.b64encode(b"\xff\xfe").decode())


def test_decode_not_object():
    with pytest.raises(DecodingError):
        decode_token(base64.b64encode(b"[1, 2]").decode())


def test_decode_non_text():
    with pytest.raises(DecodingError):
        decode_token(None)


def test_decode_strips_whitespace():
    token = encode_token({"a": "1"})
    assert decode_token(f"  {token}\n") == {"a": "1"}


def _deep_list(depth):
    value = []
    for _ in range(depth):
        value = [value]
    return value


def test_decode_deeply_nested():
    body = '{"a":' + "[" * 100000 + "]" * 100000 + "}"
    with pytest.raises(DecodingError):
        decode_token(base64.b64encode(body.encode()).decode())


def test_encode_deeply_nested():
    with pytest.raises(EncodingError):
        encode_token({"a": _deep_list(100000)})
