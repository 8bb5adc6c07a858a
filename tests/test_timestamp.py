import re
import time
from datetime import datetime, timedelta, timezone

from logerr.timestamp import Timestamp, file_safe_utc

SAMPLE_NS = 1_600_000_000_123_456_789


def test_int_is_whole_seconds():
    assert int(Timestamp(SAMPLE_NS)) == 1_600_000_000


def test_str_has_nanosecond_fraction():
    text = str(Timestamp(SAMPLE_NS))
    assert ".123456789 " in text


def test_str_pads_fraction_with_leading_zeros():
    text = str(Timestamp(1_600_000_000_000_000_042))
    assert ".000000042 " in text


def test_str_format_shape():
    text = str(Timestamp(SAMPLE_NS))
    assert bool(re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{9} .*", text)) is True
    assert text[4] == "-"
    assert text[10] == " "
    assert text[19] == "."
    assert text[29] == " "


def test_str_seconds_match_local_time():
    text = str(Timestamp(SAMPLE_NS))
    local = datetime.fromtimestamp(1_600_000_000)
    assert text.startswith(local.strftime("%Y-%m-%d %H:%M:%S"))


def test_default_is_current_time():
    before = time.time_ns()
    stamp = Timestamp()
    after = time.time_ns()
    assert before <= stamp.nanoseconds <= after


def test_datetime_property_is_utc():
    dt = Timestamp(SAMPLE_NS).datetime
    assert dt.tzinfo == timezone.utc
    assert int(dt.timestamp()) == 1_600_000_000
    assert dt.microsecond == 123456


def test_file_safe_utc_worked_example():
    now = datetime(2020, 11, 10, 12, 34, 56, 789123, tzinfo=timezone.utc)
    assert file_safe_utc(now) == "2020-11-10T123456.789Z"


def test_file_safe_utc_converts_offset_to_utc():
    utc = datetime(2020, 11, 10, 12, 34, 56, 789000, tzinfo=timezone.utc)
    shifted = utc.astimezone(timezone(timedelta(hours=2)))
    assert file_safe_utc(shifted) == file_safe_utc(utc)


def test_file_safe_utc_naive_is_utc():
    naive = datetime(2020, 11, 10, 12, 34, 56, 789000)
    assert file_safe_utc(naive) == file_safe_utc(naive.replace(tzinfo=timezone.utc))


def test_file_safe_utc_default_has_no_colons():
    text = file_safe_utc()
    assert ":" not in text
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{6}\.\d{3}Z", text)