from __future__ import annotations

import datetime as dt
import re
from pathlib import PurePosixPath

import markdown
import yaml

from .errors import FrontMatterParseError

DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
FRONT_MATTER_DELIM = b"---"
FRONT_MATTER_KEYS = ("date", "description", "header", "style", "title")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def split_front_matter(data: bytes) -> tuple[bytes | None, bytes]:
    """Split ``data`` into its front matter block and body.

    The block is returned as ``None`` when ``data`` does not open with the
    delimiter or the closing delimiter is missing; the body is then the whole
    of ``data``.
    """
    if not data.startswith(FRONT_MATTER_DELIM):
        return None, data
    parts = data.split(FRONT_MATTER_DELIM, 2)
    if len(parts) < 3:
        return None, data
    return parts[1], parts[2]


def parse_front_matter(block: bytes, name: str = "") -> dict[str, str]:
    try:
        meta = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontMatterParseError(f"front matter {name}: {exc}") from exc
    if meta is None:
        return {}
    if not isinstance(meta, dict):
        raise FrontMatterParseError(f"front matter {name}: expected a mapping, got {type(meta).__name__}")

    fields = {}
    for key in FRONT_MATTER_KEYS:
        value = meta.get(key)
        if value is None:
            continue
        if isinstance(value, (dt.date, dt.datetime)):
            value = value.isoformat()
        fields[key] = str(value)
    return fields


def parse_day(value: str) -> dt.date | None:
    """Parse the ``YYYY-MM-DD`` prefix of ``value``; ``None`` if it has none."""
    prefix = value[:10]
    if not DATE_PREFIX_RE.match(prefix):
        return None
    try:
        return dt.date.fromisoformat(prefix)
    except ValueError:
        return None


def date_from_filename(name: str) -> str:
    """Return the ``YYYY-MM-DD`` prefix of a file name, or "" if it has none."""
    prefix = PurePosixPath(name).name[:10]
    return prefix if parse_day(prefix) else ""


def is_markdown(name: str) -> bool:
    return PurePosixPath(name).suffix == ".md"


def render_markdown(text: str, highlight: bool = True) -> str:
    extensions = list(MARKDOWN_EXTENSIONS)
    extension_configs = {}
    if highlight:
        extensions.append("codehilite")
        extension_configs["codehilite"] = {"guess_lang": False}
    md = markdown.Markdown(extensions=extensions, extension_configs=extension_configs)
    return md.convert(text)
