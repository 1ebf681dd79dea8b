import datetime as dt
import os
from pathlib import Path

import pytest

from docr.config import Settings


def set_mtime(path: Path, when: dt.datetime) -> None:
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))


@pytest.fixture
def site(tmp_path):
    templates = tmp_path / "templates"
    (templates / "css").mkdir(parents=True)
    (templates / "js").mkdir()
    (templates / "css" / "style.css").write_text("body {}", encoding="utf-8")
    (templates / "js" / "main.js").write_text("// js", encoding="utf-8")
    (templates / "pretty-feed-v3.xsl").write_text("<xsl/>", encoding="utf-8")
    (templates / "page.html").write_text(
        "<h1>{{title}}</h1><p>{{modification_date}}</p><nav>{{buttons}}</nav>{{content}}",
        encoding="utf-8",
    )
    (templates / "index.html").write_text(
        "<title>{{site_name}}</title><nav>{{buttons}}</nav>{{readme}}",
        encoding="utf-8",
    )
    markdown_dir = tmp_path / "markdown"
    markdown_dir.mkdir()
    (markdown_dir / "README.md").write_text("# Welcome\n\nIndex body.", encoding="utf-8")
    return Settings(
        website_name="Test Site",
        github_username="octocat",
        website_url="https://example.com",
        website_description="Test & description",
        template_dir=str(templates),
        markdown_dir=str(markdown_dir),
        output_dir=str(tmp_path / "output"),
    )
