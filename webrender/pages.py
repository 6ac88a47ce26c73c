from __future__ import annotations

import datetime as dt
import html
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional

from .config import Options
from .content import date_from_filename, parse_day
from .errors import FeedEncodeError
from .page import Page, new_page
from .render import ping_attr
from .utils import iso_date, join_url

ATOM_NS = "http://www.w3.org/2005/Atom"
FEED_NAME = "feed.atom"
SITEMAP_NAME = "sitemap.txt"
BLOG_URL = "/blog/"
BLOG_INDEX_NAME = "index.html"


@dataclass
class Person:
    name: str
    uri: str = ""
    email: str = ""


@dataclass
class FeedEntry:
    title: str
    link: str
    id: str
    published: str
    updated: str
    summary: str
    author: Optional[Person] = None


@dataclass
class Feed:
    title: str
    id: str
    self_link: str
    alternate_link: str
    updated: str
    author: Optional[Person] = None
    entries: list[FeedEntry] = field(default_factory=list)


def new_feed(options: Options, updated: dt.datetime) -> Feed:
    base = options.url_base
    author = None
    if options.author_name:
        author = Person(
            name=options.author_name,
            uri=options.author_uri or base,
            email=options.author_email,
        )
    return Feed(
        title=options.feed_title,
        id=options.feed_id or f"{base}/",
        self_link=join_url(base, FEED_NAME),
        alternate_link=base + BLOG_URL,
        updated=iso_date(updated),
        author=author,
    )


def feed_entry(page: Page, feed: Feed) -> FeedEntry:
    # undated posts are stamped with the feed's own build time
    stamp = feed.updated
    day = parse_day(page.date)
    if day is not None:
        stamp = iso_date(dt.datetime.combine(day, dt.time(), tzinfo=dt.timezone.utc))
    return FeedEntry(
        title=page.title,
        link=page.url_canonical,
        id=page.url_canonical,
        published=stamp,
        updated=stamp,
        summary=page.title,
        author=feed.author,
    )


def _sub(parent: ET.Element, tag: str, text: str = "", **attrs: str) -> ET.Element:
    el = ET.SubElement(parent, tag, attrs)
    if text:
        el.text = text
    return el


def _person(parent: ET.Element, person: Person) -> None:
    el = _sub(parent, "author")
    _sub(el, "name", person.name)
    if person.uri:
        _sub(el, "uri", person.uri)
    if person.email:
        _sub(el, "email", person.email)


def encode_feed(feed: Feed) -> bytes:
    root = ET.Element("feed", {"xmlns": ATOM_NS})
    _sub(root, "title", feed.title)
    _sub(root, "id", feed.id)
    _sub(root, "link", rel="self", href=feed.self_link, type="application/atom+xml")
    _sub(root, "link", rel="alternate", href=feed.alternate_link, type="text/html")
    _sub(root, "updated", feed.updated)
    if feed.author is not None:
        _person(root, feed.author)
    for entry in feed.entries:
        el = _sub(root, "entry")
        _sub(el, "title", entry.title)
        _sub(el, "link", rel="alternate", href=entry.link, type="text/html")
        _sub(el, "id", entry.id)
        _sub(el, "published", entry.published)
        _sub(el, "updated", entry.updated)
        if entry.author is not None:
            _person(el, entry.author)
        _sub(el, "summary", entry.summary, type="text")

    tree = ET.ElementTree(root)
    ET.indent(tree, space="\t")
    try:
        body = ET.tostring(root, encoding="unicode")
    except (TypeError, ValueError) as exc:
        raise FeedEncodeError(f"encode atom: {exc}") from exc
    return ('<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n").encode("utf-8")


def build_feed_page(feed: Feed) -> Page:
    return new_page(FEED_NAME, encode_feed(feed), True)


def build_sitemap_page(pages: list[Page]) -> Page:
    urls = [page.url_canonical for page in pages]
    return new_page(SITEMAP_NAME, "\n".join(urls).encode("utf-8"), True)


def is_blog_page(page: Page) -> bool:
    return not page.pass_through and BLOG_URL in page.url_absolute


def is_blog_index(page: Page) -> bool:
    return PurePosixPath(page.name).name == BLOG_INDEX_NAME


def blog_heading(options: Options, src: str) -> str:
    ping = ""
    if options.link_tracking:
        ping = f' ping="{ping_attr(options.url_logger, src, BLOG_URL)}"'
    return f'<h2><a href="{BLOG_URL}"{ping}>b<em>log</em></a></h2>'


def post_header(page: Page, options: Options) -> str:
    date = html.escape(page.date)
    return blog_heading(options, page.url_canonical) + "\n" + f'<p><time datetime="{date}">{date}</time></p>'


def index_header(options: Options) -> str:
    return blog_heading(options, options.url_base + BLOG_URL) + "\n" + f"<p>{options.blog_tagline}</p>"


def index_item(page: Page, options: Options) -> str:
    date = html.escape(page.date)
    ping = ""
    if options.link_tracking:
        ping = f' ping="{ping_attr(options.url_logger, BLOG_URL, page.url_canonical)}"'
    return (
        f'<li><time datetime="{date}">{date}</time> | '
        f'<a href="{page.url_absolute}"{ping}>{html.escape(page.title)}</a></li>\n'
    )


def build_blog(pages: list[Page], feed: Feed, options: Options) -> Optional[Page]:
    """Fill blog posts and the blog index from ``pages`` in their current order.

    Posts get a date, a header and a feed entry; the index page, returned if
    there is one, gets the list of posts as its body.
    """
    index = None
    items = []
    for page in pages:
        if not is_blog_page(page):
            continue
        if is_blog_index(page):
            if index is None:
                index = page
            continue
        page.date = date_from_filename(page.source_path) or page.date
        page.header = post_header(page, options)
        items.append(index_item(page, options))
        feed.entries.append(feed_entry(page, feed))

    if index is not None:
        index.main = "<ul>\n" + "".join(items) + "</ul>\n"
        index.header = index_header(options)
    return index
