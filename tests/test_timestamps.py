from datetime import timedelta

from backend.db.timestamps import next_timestamp, utc_now


def test_next_timestamp_without_previous_is_now():
    before = utc_now()
    assert next_timestamp() >= before


def test_next_timestamp_is_strictly_after_previous():
    future = utc_now() + timedelta(seconds=5)
    assert next_timestamp(future) == future + timedelta(microseconds=1)


def test_next_timestamp_uses_clock_when_ahead():
    past = utc_now() - timedelta(seconds=5)
    assert next_timestamp(past) > past + timedelta(seconds=4)
