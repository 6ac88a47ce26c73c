from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

from .content import is_markdown, parse_front_matter, render_markdown, split_front_matter
from .errors import InputReadError


@dataclass
class Page:
    source_path: str
    name: str
    raw: bytes
    body: bytes
    pass_through: bool = False
    output_path: Optional[Path] = None

    # front matter
    date: str = ""
    description: str = ""
    header: str = ""
    style: str = ""
    title: str = ""

    # filled in by the pipeline
    main: str = ""
    analytics_id: str = ""
    url_absolute: str = ""
    url_base: str = ""
    url_canonical: str = ""
    url_logger: str = ""

    @property
    def is_html(self) -> bool:
        return PurePosixPath(self.name).suffix == ".html"

    def place(self, out_dir: Path) -> None:
        self.output_path = Path(out_dir, *PurePosixPath(self.name).parts)


def new_page(name: str, raw: bytes, pass_through: bool, highlight: bool = True) -> Page:
    """Build a page from a site-relative file name and its contents.

    Unless the page is pass-through, content opening with ``---`` is read as
    YAML front matter followed by the body, and ``.md`` files are rendered to
    HTML under a ``.html`` name.
    """
    page = Page(source_path=name, name=name, raw=raw, body=raw, pass_through=pass_through)
    if pass_through:
        return page

    block, page.body = split_front_matter(raw)
    if block is not None:
        for key, value in parse_front_matter(block, name).items():
            setattr(page, key, value)
    elif not is_markdown(name):
        page.pass_through = True
        return page

    if is_markdown(name):
        page.name = str(PurePosixPath(name).with_suffix(".html"))
        try:
            text = page.body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputReadError(f"decode {name}: {exc}") from exc
        page.main = render_markdown(text, highlight=highlight)
    return page
