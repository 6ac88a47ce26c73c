from __future__ import annotations

import datetime as dt
import os
import stat
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from .config import Options
from .content import is_markdown
from .errors import (
    InputNotFound,
    InputReadError,
    OutputCollisionError,
    OutputErrors,
    OutputWriteError,
    RenderError,
    TemplateExecutionError,
    with_context,
)
from .page import Page, new_page
from .pages import Feed, build_blog, build_feed_page, build_sitemap_page, new_feed
from .render import LAYOUT_TEMPLATE, add_link_pings, execute_template, load_templates, rewrite_image_blocks, write_bytes
from .utils import canonical


def process(options: Options, now: Optional[dt.datetime] = None) -> list[Page]:
    """Read, fill and write the whole site. Returns the pages written."""
    feed = new_feed(options, now or dt.datetime.now(dt.timezone.utc))
    try:
        pages = process_input(options)
    except RenderError as exc:
        raise with_context(exc, "process input") from exc
    try:
        pages = process_fill(options, pages, feed)
    except RenderError as exc:
        raise with_context(exc, "process fill") from exc
    try:
        process_output(options, pages)
    except RenderError as exc:
        raise with_context(exc, "process output") from exc
    return pages


def read_page(path: Path, name: str, options: Options) -> Page:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise InputReadError(f"read {path}: {exc}") from exc
    page = new_page(name, raw, not is_markdown(name), highlight=options.highlight)
    page.place(options.out)
    return page


def walk(root: Path, options: Options) -> list[Page]:
    """Read every regular file under ``root``.

    The first error aborts the walk: unreadable directories, symbolic links
    and anything that is not a regular file or directory.
    """

    def fail(exc: OSError) -> None:
        raise InputReadError(f"walk {exc.filename}: {exc}") from exc

    pages = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=fail):
        dirnames.sort()
        base = Path(dirpath)
        for name in dirnames + sorted(filenames):
            path = base / name
            try:
                mode = path.lstat().st_mode
            except OSError as exc:
                raise InputReadError(f"walk {path}: {exc}") from exc
            if stat.S_ISLNK(mode):
                raise InputReadError(f"walk {path}: symbolic links are not supported")
            if name in dirnames:
                continue
            if not stat.S_ISREG(mode):
                raise InputReadError(f"walk {path}: not a regular file")
            pages.append(read_page(path, path.relative_to(root).as_posix(), options))
    pages.sort(key=lambda p: p.source_path)
    return pages


def check_collisions(pages: list[Page]) -> None:
    seen: dict[str, str] = {}
    for page in pages:
        other = seen.get(page.name)
        if other is not None:
            raise OutputCollisionError(f"{page.source_path} and {other} both write {page.name}")
        seen[page.name] = page.source_path


def process_input(options: Options) -> list[Page]:
    src = options.input
    if not src.exists():
        raise InputNotFound(f"input {src}: no such file or directory")
    if src.is_file():
        return [read_page(src, src.name, options)]
    pages = walk(src, options)
    check_collisions(pages)
    return pages


def stamp(page: Page, options: Options) -> None:
    page.analytics_id = options.analytics_id
    page.url_base = options.url_base
    page.url_logger = options.url_logger
    page.url_absolute = canonical(page.name)
    page.url_canonical = options.url_base + page.url_absolute


def process_fill(options: Options, pages: list[Page], feed: Feed) -> list[Page]:
    for page in pages:
        stamp(page, options)
    if len(pages) <= 1:
        return pages

    pages.sort(key=lambda p: p.source_path, reverse=True)
    build_blog(pages, feed, options)

    for page in pages:
        if not page.is_html:
            continue
        if options.link_tracking:
            page.main = add_link_pings(page.main, options.url_logger, page.url_canonical)
        page.main = rewrite_image_blocks(page.main)

    append_generated(pages, build_feed_page(feed), options)
    append_generated(pages, build_sitemap_page(pages), options)
    check_collisions(pages)
    return pages


def append_generated(pages: list[Page], page: Page, options: Options) -> None:
    stamp(page, options)
    page.place(options.out)
    pages.append(page)


def write_page(page: Page, templates: dict[str, str]) -> None:
    if page.pass_through:
        data = page.raw
    else:
        try:
            data = execute_template(templates, LAYOUT_TEMPLATE, page)
        except TemplateExecutionError as exc:
            raise TemplateExecutionError(f"execute {page.name}: {exc}") from exc
    try:
        write_bytes(page.output_path, data)
    except OSError as exc:
        raise OutputWriteError(f"write {page.name}: {exc}") from exc


def process_output(options: Options, pages: list[Page]) -> None:
    if not pages:
        return
    templates = load_templates(options.templates_dir)

    errors: list[RenderError] = []
    with ThreadPoolExecutor(max_workers=min(options.workers, len(pages))) as executor:
        futures = [executor.submit(write_page, page, templates) for page in pages]
    for future in futures:
        exc = future.exception()
        if exc is None:
            continue
        if not isinstance(exc, RenderError):
            raise exc
        errors.append(exc)
    if errors:
        raise OutputErrors(errors)
