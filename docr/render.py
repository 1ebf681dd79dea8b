from __future__ import annotations

import shutil
from pathlib import Path

import markdown
from pygments.formatters import HtmlFormatter

from .autolink import AutolinkExtension
from .utils import warn

FEED_STYLESHEET = "pretty-feed-v3.xsl"
STATIC_DIRS = ("css", "js")
CODEHILITE_CSS = "codehilite.css"


def create_markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[
            "fenced_code",
            "codehilite",
            "tables",
            "footnotes",
            "toc",
            "nl2br",
            AutolinkExtension(),
        ],
        extension_configs={"codehilite": {"css_class": "codehilite", "guess_lang": False}},
    )


def render_markdown(data: bytes) -> str:
    text = data.decode("utf-8").lstrip("\ufeff")
    return create_markdown().convert(text)


def render_template(template: str, **context: str) -> str:
    output = template
    late_keys = {"content", "readme", "buttons"}
    for key, value in context.items():
        if key in late_keys:
            continue
        output = output.replace(f"{{{{{key}}}}}", value)
    for key in late_keys:
        if key in context:
            output = output.replace(f"{{{{{key}}}}}", context[key])
    return output


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_tree_files(source: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    for item in sorted(source.rglob("*")):
        if item.is_file():
            target = dest / item.relative_to(source)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, target)


def copy_static(template_dir: Path, output_dir: Path) -> None:
    for name in STATIC_DIRS:
        source = template_dir / name
        if source.is_dir():
            copy_tree_files(source, output_dir / name)
        else:
            warn(f"static directory not found, skipping: {source}")
    # Required by the <?xml-stylesheet?> header in rss.xml.
    shutil.copy2(template_dir / FEED_STYLESHEET, output_dir / FEED_STYLESHEET)
    write_text(output_dir / "css" / CODEHILITE_CSS, HtmlFormatter().get_style_defs(".codehilite"))
