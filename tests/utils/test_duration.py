from datetime import timedelta

import pytest

from fabricctl.utils.duration import format_duration, parse_duration


@pytest.mark.parametrize("text,expected", [
    ("5s", timedelta(seconds=5)),
    ("500ms", timedelta(milliseconds=500)),
    ("1m30s", timedelta(seconds=90)),
    ("2min", timedelta(minutes=2)),
    ("1h", timedelta(hours=1)),
    ("0", timedelta(0)),
    (" 20s ", timedelta(seconds=20)),
])
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "5", "5x", "s5", "5s junk"])
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_format_duration():
    assert format_duration(timedelta(seconds=20)) == "20s"
    assert format_duration(timedelta(milliseconds=1500)) == "1500ms"
