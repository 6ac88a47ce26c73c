from __future__ import annotations

import html
import re
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .errors import TemplateExecutionError

if TYPE_CHECKING:
    from .page import Page

LAYOUT_TEMPLATE = "layout.html"
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

HEADING_IMG_RE = re.compile(r"<h([1-6])>\s*<img\s([^>]*?)\s*/?>\s*</h\1>", re.IGNORECASE)
ATTR_RE = re.compile(r'(\w+)="([^"]*)"')
LINK_RE = re.compile(r'<a href="([^"]*)">')

PICTURE_TEMPLATE = """
<picture>
\t<source type="image/webp" srcset="{base}.webp">
\t<source type="image/jpeg" srcset="{base}.jpg">
\t<img src="{base}.png" alt="{alt}">
</picture>
"""

ANALYTICS_TEMPLATE = (
    '<script async src="https://www.googletagmanager.com/gtag/js?id={id}"></script>'
    "<script>window.dataLayer=window.dataLayer||[];"
    "function gtag(){{dataLayer.push(arguments);}}"
    "gtag('js',new Date());gtag('config','{id}');</script>"
)


def rewrite_image_blocks(html_text: str) -> str:
    """Turn a heading that only holds a ``.webp`` image into a ``<picture>``
    with ``.webp``, ``.jpg`` and ``.png`` variants of the same file."""

    def repl(match: re.Match) -> str:
        attrs = dict(ATTR_RE.findall(match.group(2)))
        src = attrs.get("src", "")
        if not src.endswith(".webp"):
            return match.group(0)
        return PICTURE_TEMPLATE.format(base=src[: -len(".webp")], alt=attrs.get("alt", ""))

    return HEADING_IMG_RE.sub(repl, html_text)


def ping_attr(logger: str, src: str, dst: str) -> str:
    return html.escape(f"{logger}?trigger=ping&src={src}&dst={dst}")


def add_link_pings(html_text: str, logger: str, src: str) -> str:
    def repl(match: re.Match) -> str:
        href = match.group(1)
        return f'<a href="{href}" ping="{ping_attr(logger, src, href)}">'

    return LINK_RE.sub(repl, html_text)


def render_template(template: str, **context: str) -> str:
    output = template
    late_keys = {"main", "header"}
    for key, value in context.items():
        if key in late_keys:
            continue
        output = output.replace(f"{{{{{key}}}}}", value)
    for key in ("header", "main"):
        if key in context:
            output = output.replace(f"{{{{{key}}}}}", context[key])
    return output


def load_templates(templates_dir: Optional[Path] = None) -> dict[str, str]:
    """Read every template in ``templates_dir`` keyed by file name.

    Templates from ``templates_dir`` override the packaged defaults.
    """
    templates = {}
    dirs = [DEFAULT_TEMPLATES_DIR]
    if templates_dir is not None:
        dirs.append(Path(templates_dir))
    for directory in dirs:
        if not directory.is_dir():
            raise TemplateExecutionError(f"templates directory not found: {directory}")
        for path in sorted(directory.iterdir()):
            if path.is_file():
                templates[path.name] = path.read_text(encoding="utf-8")
    return templates


def page_context(page: Page) -> dict[str, str]:
    analytics_id = page.analytics_id
    analytics = ANALYTICS_TEMPLATE.format(id=html.escape(analytics_id)) if analytics_id else ""
    return {
        "title": html.escape(page.title),
        "description": html.escape(page.description),
        "date": html.escape(page.date),
        "style": html.escape(page.style),
        "analytics_id": html.escape(analytics_id),
        "analytics": analytics,
        "url_absolute": page.url_absolute,
        "url_base": page.url_base,
        "url_canonical": page.url_canonical,
        "url_logger": page.url_logger,
        "header": page.header,
        "main": page.main,
    }


def execute_template(templates: dict[str, str], name: str, page: Page) -> bytes:
    template = templates.get(name)
    if template is None:
        raise TemplateExecutionError(f'no template named "{name}"')
    return render_template(template, **page_context(page)).encode("utf-8")


def write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
