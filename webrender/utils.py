from __future__ import annotations

import datetime as dt


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def canonical(path: str) -> str:
    """Map a site-relative file path to the URL path it is served at.

    ``about.html`` -> ``/about/``, ``blog/index.html`` -> ``/blog/``;
    anything not ending in ``.html`` only gains a leading slash.
    """
    if not path.startswith("/"):
        path = "/" + path
    if path.endswith(".html"):
        path = path[: -len(".html")]
        if path.endswith("/index"):
            path = path[: -len("index")]
        if not path:
            path = "/"
        if not path.endswith("/"):
            path += "/"
    return path


def iso_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")
