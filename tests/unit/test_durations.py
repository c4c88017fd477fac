import pytest

from plikd_config.durations import format_size, format_ttl, parse_size, parse_ttl


@pytest.mark.parametrize(
    "value,expected",
    [
        ("30d", 30 * 86400),
        ("1h30m", 5400),
        ("90s", 90),
        ("90", 90),
        (" 2D ", 2 * 86400),
        ("0", 0),
        ("-1", -1),
        ("-30d", -1),
    ],
)
def test_parse_ttl(value: str, expected: int):
    assert parse_ttl(value) == expected


@pytest.mark.parametrize("value", ["", "d", "30x", "1h 30m", "h1", "1.5d"])
def test_parse_ttl_invalid(value: str):
    with pytest.raises(ValueError):
        parse_ttl(value)


def test_parse_size():
    assert parse_size("10GB") == 10_000_000_000
    assert parse_size("512 MiB") == 512 * 1024 * 1024
    assert parse_size("1024") == 1024


def test_parse_size_invalid():
    with pytest.raises(ValueError):
        parse_size("ten gigs")


def test_format_ttl():
    assert format_ttl(-1) == "unlimited"
    assert format_ttl(0) == "0s"
    assert format_ttl(30 * 86400) == "30d"
    assert format_ttl(5400) == "1h30m"


def test_format_size_is_human_readable():
    assert "GiB" in format_size(10 * 1024 * 1024 * 1024)
