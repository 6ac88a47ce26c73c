import datetime as dt

import pytest

from webrender.utils import canonical, iso_date, join_url, parse_bool, parse_int


@pytest.mark.parametrize(
    "path, expected",
    [
        ("blog/index.html", "/blog/"),
        ("about.html", "/about/"),
        ("feed.atom", "/feed.atom"),
        ("index.html", "/"),
        ("/index.html", "/"),
        ("", "/"),
        ("blog/2023-01-01-a.html", "/blog/2023-01-01-a/"),
        ("img/logo.png", "/img/logo.png"),
        ("/already/", "/already/"),
        ("myindex.html", "/myindex/"),
        ("blog/myindex.html", "/blog/myindex/"),
        ("blog/index/index.html", "/blog/index/"),
    ],
)
def test_canonical(path, expected):
    assert canonical(path) == expected


@pytest.mark.parametrize(
    "path",
    ["about.html", "blog/index.html", "myindex.html", "feed.atom", "a/b/c.html", "sitemap.txt", "/x/", "index.html", ""],
)
def test_canonical_is_idempotent(path):
    once = canonical(path)
    assert canonical(once) == once


def test_join_url():
    assert join_url("https://example.com/", "/feed.atom") == "https://example.com/feed.atom"
    assert join_url("https://example.com", "") == "https://example.com"
    assert join_url("", "feed.atom") == "/feed.atom"


def test_iso_date_normalizes_to_utc():
    naive = dt.datetime(2023, 6, 1)
    assert iso_date(naive) == "2023-06-01T00:00:00Z"
    plus_two = dt.datetime(2023, 6, 1, 2, 30, tzinfo=dt.timezone(dt.timedelta(hours=2)))
    assert iso_date(plus_two) == "2023-06-01T00:30:00Z"


def test_parse_helpers():
    assert parse_bool("yes") is True
    assert parse_bool("off") is False
    assert parse_bool(None) is False
    assert parse_int("7", 0) == 7
    assert parse_int("seven", 3) == 3
