from __future__ import annotations

import datetime as dt
import html
import re
from dataclasses import dataclass
from pathlib import Path

from .config import Settings
from .content import DATE_FMT, Fallback, feed_title, local_midnight, parse_filename
from .render import FEED_STYLESHEET, render_markdown, render_template, write_text
from .utils import mtime_of, rfc1123_date, warn

README_NAME = "README.md"
INDEX_SOURCE = "index.md"
INDEX_NAME = "index.html"
FEED_NAME = "rss.xml"
FEED_STYLESHEET_PI = f'<?xml-stylesheet href="{FEED_STYLESHEET}" type="text/xsl"?>'
# XML 1.0 forbids C0 controls other than TAB, LF and CR.
XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


@dataclass
class Page:
    title: str
    output_name: str
    content: str
    modification_date: dt.datetime
    source: Path


def build_page(md_file: Path, settings: Settings) -> Page:
    parsed = parse_filename(md_file.stem)
    if isinstance(parsed, Fallback):
        if parsed.reason == "invalid-date":
            warn(
                f"Markdown file '{md_file.name}' has an invalid date prefix. "
                "Using filename as title and file modification time as date."
            )
        else:
            warn(
                f"Markdown file '{md_file.name}' does not follow the naming convention "
                "(yyyy-mm-dd-title.md). Using filename as title."
            )
        timestamp = mtime_of(md_file)
    else:
        if not parsed.has_title:
            warn(f"Markdown file '{md_file.name}' is missing a title. Using date as the title.")
        if settings.timestamps_from_filename:
            timestamp = local_midnight(parsed.date)
        else:
            timestamp = mtime_of(md_file)

    return Page(
        title=parsed.canonical_title,
        output_name=parsed.output_name,
        content=render_markdown(md_file.read_bytes()),
        modification_date=timestamp,
        source=md_file,
    )


def list_markdown_files(markdown_dir: Path) -> list[Path]:
    files = []
    for path in sorted(markdown_dir.rglob("*.md"), key=lambda p: p.as_posix()):
        if not path.is_file() or path.name == README_NAME:
            continue
        if path.name == INDEX_SOURCE:
            warn(f"Markdown file '{path}' would overwrite the index page. Skipping it; use README.md instead.")
            continue
        files.append(path)
    return files


def collect_pages(settings: Settings) -> list[Page]:
    return [build_page(md_file, settings) for md_file in list_markdown_files(settings.markdown_path)]


def sort_pages(pages: list[Page]) -> list[Page]:
    ordered = sorted(pages, key=lambda p: p.output_name)
    return sorted(ordered, key=lambda p: p.modification_date, reverse=True)


def build_buttons(pages: list[Page]) -> str:
    buttons = []
    for page in sort_pages(pages):
        if page.output_name == INDEX_NAME:
            continue
        date_str = page.modification_date.strftime(DATE_FMT)
        buttons.append(f'<a href="{html.escape(page.output_name)}" class="button">{date_str}</a>')
    return "".join(buttons)


def build_pages(template: str, pages: list[Page], buttons: str, settings: Settings) -> None:
    year = str(dt.datetime.now().year)
    for page in pages:
        html_doc = render_template(
            template,
            title=html.escape(page.title),
            content=page.content,
            site_name=html.escape(settings.website_name),
            github_username=html.escape(settings.github_username),
            buttons=buttons,
            modification_date=rfc1123_date(page.modification_date),
            year=year,
        )
        write_text(settings.output_path / page.output_name, html_doc)
        print(f"Generated page: {page.output_name}")


def build_index(template: str, buttons: str, settings: Settings) -> None:
    readme_html = render_markdown((settings.markdown_path / README_NAME).read_bytes())
    html_doc = render_template(
        template,
        site_name=html.escape(settings.website_name),
        github_username=html.escape(settings.github_username),
        readme=readme_html,
        buttons=buttons,
        year=str(dt.datetime.now().year),
    )
    write_text(settings.output_path / INDEX_NAME, html_doc)


def xml_text(text: str) -> str:
    return XML_ILLEGAL_RE.sub("\ufffd", html.escape(text))


def build_feed_items(pages: list[Page]) -> list[str]:
    items = []
    for page in sort_pages(pages):
        title = feed_title(page.output_name, page.modification_date)
        items.append(
            "\n".join(
                [
                    "    <item>",
                    f"      <title>{xml_text(title)}</title>",
                    f"      <link>{xml_text(title)}.html</link>",
                    f"      <description>{xml_text(page.content)}</description>",
                    f"      <pubDate>{rfc1123_date(page.modification_date)}</pubDate>",
                    "    </item>",
                ]
            )
        )
    return items


def build_rss(pages: list[Page], settings: Settings) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        FEED_STYLESHEET_PI,
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>{xml_text(settings.website_name)}</title>",
        f"    <link>{xml_text(settings.website_url)}</link>",
        f"    <description>{xml_text(settings.website_description)}</description>",
    ]
    lines.extend(build_feed_items(pages))
    lines.extend(["  </channel>", "</rss>"])
    return "\n".join(lines) + "\n"


def write_rss(pages: list[Page], settings: Settings) -> None:
    write_text(settings.output_path / FEED_NAME, build_rss(pages, settings))
