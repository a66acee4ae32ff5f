"""Tests for API value formatting."""

from datetime import datetime, timezone

import pytest

from quotecard.formatting import (
    format_count,
    format_duration,
    relative_time,
    sanitize_comment_text,
)


@pytest.mark.parametrize(
    "count,expected",
    [
        (0, "0"),
        (999, "999"),
        (1234, "1.2K"),
        (3_400_000, "3.4M"),
        (1_000_000_000, "1.0B"),
    ],
)
def test_format_count(count: int, expected: str) -> None:
    assert format_count(count) == expected


@pytest.mark.parametrize(
    "duration,expected",
    [
        ("PT3M45S", "3:45"),
        ("PT1H2M3S", "1:02:03"),
        ("PT45S", "0:45"),
        ("PT2H", "2:00:00"),
        ("P1D", ""),
    ],
)
def test_format_duration(duration: str, expected: str) -> None:
    assert format_duration(duration) == expected


def test_relative_time_picks_largest_unit() -> None:
    now = datetime(2024, 6, 10, 12, 0, 0, tzinfo=timezone.utc)

    assert relative_time("2024-06-08T12:00:00Z", now) == "2 days ago"
    assert relative_time("2024-06-10T11:00:00Z", now) == "1 hour ago"
    assert relative_time("2024-06-10T11:59:30Z", now) == "30 seconds ago"
    assert relative_time("2024-03-01T12:00:00Z", now) == "3 months ago"
    assert relative_time("2021-06-01T12:00:00Z", now) == "3 years ago"


def test_sanitize_comment_text() -> None:
    raw = "Great <b>video</b>!!  Watched   it 123 times @channel #1 $$ <br>bye"

    assert sanitize_comment_text(raw) == "Great video!! Watched it times channel 1 bye"


def test_sanitize_unescapes_entities() -> None:
    assert sanitize_comment_text("Tom &amp; Jerry") == "Tom & Jerry"
