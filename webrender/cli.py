from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_TAGLINE, Options, load_config
from .errors import RenderError
from .process import process
from .utils import parse_bool, parse_int


def build_site(args: argparse.Namespace) -> int:
    options = Options.from_args(args)
    pages = process(options)
    return len(pages)


def main(argv: Optional[Sequence[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
    except RenderError as exc:
        print(f"render: {exc}", file=sys.stderr)
        sys.exit(1)

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    def cfg_int(key: str, default: int) -> int:
        value = cfg_value(key, default)
        return parse_int(value, default)

    parser = argparse.ArgumentParser(description="Render a directory of Markdown and static files into a website.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--in", dest="input", default=cfg_str("in", "src"), help="Input file or directory.")
    parser.add_argument("--out", default=cfg_str("out", "public"), help="Output directory.")
    parser.add_argument("--ga", default=cfg_str("ga", ""), help="Google Analytics id.")
    parser.add_argument("--base", default=cfg_str("base", ""), help="Base URL, e.g. https://example.com.")
    parser.add_argument("--logger", default=cfg_str("logger", ""), help="Click tracking endpoint URL.")
    parser.add_argument(
        "--templates",
        default=cfg_str("templates", ""),
        help="Directory of templates overriding the built-in layout.",
    )
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 0),
        type=int,
        help="Number of worker threads for writing output (0 = auto).",
    )
    parser.add_argument(
        "--highlight",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("highlight", True),
        help="Highlight fenced code blocks with Pygments.",
    )
    parser.add_argument(
        "--link-tracking",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("link_tracking", False),
        help="Add ping attributes pointing at the logger to links.",
    )
    parser.add_argument("--feed-title", default=cfg_str("feed_title", "web log"), help="Atom feed title.")
    parser.add_argument("--feed-id", default=cfg_str("feed_id", ""), help="Atom feed id (defaults to base URL).")
    parser.add_argument("--author-name", default=cfg_str("author_name", ""), help="Atom feed author name.")
    parser.add_argument("--author-uri", default=cfg_str("author_uri", ""), help="Atom feed author URI.")
    parser.add_argument("--author-email", default=cfg_str("author_email", ""), help="Atom feed author email.")
    parser.add_argument(
        "--blog-tagline",
        default=cfg_str("blog_tagline", DEFAULT_TAGLINE),
        help="HTML shown under the heading of the blog index.",
    )
    args = parser.parse_args(argv)
    start = time.perf_counter()
    try:
        written = build_site(args)
    except RenderError as exc:
        print(f"render: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {args.out} ({written} files)")
