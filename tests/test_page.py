from pathlib import Path

import pytest

from webrender.content import date_from_filename, parse_front_matter, split_front_matter
from webrender.errors import FrontMatterParseError, InputReadError
from webrender.page import new_page


def test_markdown_page_with_front_matter():
    raw = b"---\ntitle: X\ndescription: about x\nheader: <p>hi</p>\nstyle: compact\nextra: ignored\n---\n# Body\n"
    page = new_page("notes/x.md", raw, False)

    assert page.name == "notes/x.html"
    assert page.source_path == "notes/x.md"
    assert page.title == "X"
    assert page.description == "about x"
    assert page.header == "<p>hi</p>"
    assert page.style == "compact"
    assert page.main == "<h1>Body</h1>"
    assert page.raw == raw
    assert not hasattr(page, "extra")


def test_missing_closing_delimiter_keeps_whole_body():
    raw = b"---\nthis only looks like front matter\n"
    page = new_page("odd.md", raw, False)

    assert page.title == ""
    assert page.body == raw
    assert "this only looks like front matter" in page.main


def test_body_may_contain_more_delimiters():
    page = new_page("post.md", b"---\ntitle: T\n---\nabove\n\n---\n\nbelow\n", False)

    assert page.title == "T"
    assert "<hr />" in page.main
    assert "below" in page.main


def test_invalid_front_matter_raises():
    with pytest.raises(FrontMatterParseError):
        new_page("bad.md", b"---\ntitle: [unclosed\n---\nbody\n", False)


def test_front_matter_must_be_mapping():
    with pytest.raises(FrontMatterParseError):
        new_page("bad.md", b"---\n- a\n- b\n---\nbody\n", False)


def test_pass_through_page_is_untouched():
    raw = b"---\ntitle: nope\n---\nkeep me"
    page = new_page("raw.md", raw, True)

    assert page.pass_through
    assert page.name == "raw.md"
    assert page.title == ""
    assert page.main == ""
    assert page.raw == raw


def test_plain_non_markdown_content_becomes_pass_through():
    page = new_page("notes.txt", b"plain text", False)

    assert page.pass_through
    assert page.name == "notes.txt"
    assert page.raw == b"plain text"


def test_non_markdown_with_front_matter_is_rendered_through_layout():
    page = new_page("card.html", b"---\ntitle: Card\n---\n<p>hi</p>", False)

    assert not page.pass_through
    assert page.title == "Card"


def test_non_utf8_markdown_raises_read_error():
    with pytest.raises(InputReadError):
        new_page("latin.md", "caf\xe9".encode("latin-1"), False)


def test_place_builds_output_path(tmp_path):
    page = new_page("blog/a.md", b"text", False)
    page.place(tmp_path)

    assert page.output_path == Path(tmp_path, "blog", "a.html")
    assert page.is_html


def test_code_blocks_are_highlighted():
    raw = b"```python\nprint('hi')\n```\n"
    assert "codehilite" in new_page("c.md", raw, False).main
    assert "codehilite" not in new_page("c.md", raw, False, highlight=False).main


def test_split_front_matter():
    assert split_front_matter(b"no front matter") == (None, b"no front matter")
    assert split_front_matter(b"---\na: 1\n---\nbody") == (b"\na: 1\n", b"\nbody")


def test_yaml_dates_become_strings():
    assert parse_front_matter(b"date: 2023-01-02\n") == {"date": "2023-01-02"}
    assert parse_front_matter(b"") == {}


@pytest.mark.parametrize(
    "name, expected",
    [
        ("blog/2023-06-01-b.md", "2023-06-01"),
        ("2023-13-01-bad.md", ""),
        ("hello-world.md", ""),
        ("blog/2023-06-01.html", "2023-06-01"),
    ],
)
def test_date_from_filename(name, expected):
    assert date_from_filename(name) == expected
