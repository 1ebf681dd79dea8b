from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .config import DEFAULT_CONFIG, Settings, load_settings
from .pages import build_buttons, build_index, build_pages, collect_pages, write_rss
from .render import copy_static, read_template
from .utils import check_directories


def build_site(settings: Settings) -> int:
    check_directories([settings.template_path, settings.markdown_path])

    template_dir = settings.template_path
    page_template = read_template(template_dir / "page.html")
    index_template = read_template(template_dir / "index.html")

    pages = collect_pages(settings)

    output_dir = settings.output_path
    output_dir.mkdir(parents=True, exist_ok=True)
    copy_static(template_dir, output_dir)

    buttons = build_buttons(pages)
    build_pages(page_template, pages, buttons, settings)
    build_index(index_template, buttons, settings)
    write_rss(pages, settings)
    return len(pages)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a static site and RSS feed from dated Markdown files.")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help="Path to settings file (JSON/TOML/YAML).",
    )
    parser.add_argument("--markdown-dir", help="Directory containing Markdown pages and README.md.")
    parser.add_argument("--template-dir", help="Directory containing page.html, index.html and static assets.")
    parser.add_argument("--output-dir", help="Output directory for the generated site.")
    parser.add_argument("--website-name", help="Site title.")
    parser.add_argument("--github-username", help="GitHub handle shown in templates.")
    parser.add_argument("--website-url", help="Public site URL used for the RSS channel.")
    parser.add_argument("--website-description", help="Site description used for the RSS channel.")
    parser.add_argument(
        "--timestamps-from-filename",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Take page dates from yyyy-mm-dd filename prefixes instead of file modification times.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if key != "config"}
    start = time.perf_counter()
    try:
        settings = load_settings(Path(args.config), overrides=overrides)
        count = build_site(settings)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Static pages and RSS feed generated successfully ({count} pages).")
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {settings.output_dir}")
