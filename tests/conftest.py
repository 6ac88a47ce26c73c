from pathlib import Path

import pytest

from webrender.config import Options

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR---binary"


def write_tree(root: Path, files: dict) -> None:
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def site_files():
    return {
        "index.md": "---\ntitle: Home\ndescription: Front page\n---\n# Welcome\n\nHello there.\n",
        "about.md": "---\ntitle: About\n---\nAbout me.\n\n#### ![A cat](/img/cat.webp)\n",
        "blog/index.md": "---\ntitle: Blog\n---\nplaceholder\n",
        "blog/2023-01-01-a.md": "---\ntitle: A\n---\nFirst post.\n",
        "blog/2023-06-01-b.md": "---\ntitle: B\n---\nSecond post, see [about](/about/).\n",
        "img/logo.png": PNG_BYTES,
    }


@pytest.fixture
def site(tmp_path, site_files):
    src = tmp_path / "src"
    write_tree(src, site_files)
    return src


@pytest.fixture
def options(tmp_path, site):
    return Options(
        input=site,
        out=tmp_path / "public",
        analytics_id="UA-1",
        url_base="https://example.com/",
        url_logger="https://stats.example.com/api",
        build_workers=4,
        feed_title="example log",
        author_name="Jo Example",
        author_email="jo@example.com",
    )
