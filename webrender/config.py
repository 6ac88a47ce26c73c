from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

from .errors import ConfigError
from .utils import parse_bool, parse_int

DEFAULT_TAGLINE = "Artisanal, <em>hand-crafted</em> blog posts imbued with delayed <em>regrets</em>"
MAX_WORKERS = 32


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"TOML config must be a mapping: {path}")
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"YAML config must be a mapping: {path}")
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"JSON config must be a mapping: {path}")
    return data


@dataclass
class Options:
    input: Path = Path("src")
    out: Path = Path("public")
    analytics_id: str = ""
    url_base: str = ""
    url_logger: str = ""
    templates_dir: Optional[Path] = None
    build_workers: int = 0
    highlight: bool = True
    link_tracking: bool = False

    feed_title: str = "web log"
    feed_id: str = ""
    author_name: str = ""
    author_uri: str = ""
    author_email: str = ""
    blog_tagline: str = DEFAULT_TAGLINE

    def __post_init__(self) -> None:
        self.input = Path(self.input)
        self.out = Path(self.out)
        if self.templates_dir:
            self.templates_dir = Path(self.templates_dir)
        else:
            self.templates_dir = None
        self.url_base = self.url_base.rstrip("/")

    @property
    def workers(self) -> int:
        workers = self.build_workers
        if workers <= 0:
            workers = os.cpu_count() or 1
        return max(1, min(workers, MAX_WORKERS))

    @classmethod
    def from_args(cls, args: object) -> Options:
        return cls(
            input=Path(args.input),
            out=Path(args.out),
            analytics_id=args.ga or "",
            url_base=args.base or "",
            url_logger=args.logger or "",
            templates_dir=args.templates or None,
            build_workers=parse_int(args.build_workers, 0),
            highlight=parse_bool(args.highlight),
            link_tracking=parse_bool(args.link_tracking),
            feed_title=args.feed_title,
            feed_id=args.feed_id or "",
            author_name=args.author_name or "",
            author_uri=args.author_uri or "",
            author_email=args.author_email or "",
            blog_tagline=args.blog_tagline,
        )
