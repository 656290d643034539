"""Tests for timestamp injection."""

from paramsign.core.timestamp import with_timestamp


def _clock():
    return 1700000000.75


def test_injects_when_missing():
    params = {"a": "1"}
    result = with_timestamp(params, clock=_clock)
    assert result["timestamp"] == "1700000000"
    assert "timestamp" not in params  # original untouched


def test_injects_when_empty():
    assert with_timestamp({"timestamp": ""}, clock=_clock)["timestamp"] == "1700000000"
    assert with_timestamp({"timestamp": None}, clock=_clock)["timestamp"] == "1700000000"


def test_existing_not_overwritten():
    assert with_timestamp({"timestamp": "123"}, clock=_clock)["timestamp"] == "123"
    assert with_timestamp({"timestamp": 456}, clock=_clock)["timestamp"] == 456


def test_returns_copy():
    params = {"timestamp": "1"}
    assert with_timestamp(params) is not params


def test_default_clock_is_now():
    import time

    before = int(time.time())
    ts = int(with_timestamp({})["timestamp"])
    assert before <= ts <= int(time.time())
