"""End-to-end tests for docr.cli."""

import datetime as dt
import json
import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path

import pytest

from conftest import set_mtime
from docr.cli import build_site, main


class TestBuildSite:
    def test_generates_pages_index_and_feed(self, site, capsys):
        root = Path(site.markdown_dir)
        (root / "2023-01-01-hello.md").write_text("# Hello\n\nFirst.", encoding="utf-8")
        (root / "2023-06-15.md").write_text("Dated only.", encoding="utf-8")
        notes = root / "notes.md"
        notes.write_text("Notes.", encoding="utf-8")
        set_mtime(notes, dt.datetime(2023, 3, 1))

        assert build_site(site) == 3

        output = Path(site.output_dir)
        for name in ["2023-01-01-hello.html", "2023-06-15.html", "notes.html", "index.html", "rss.xml"]:
            assert (output / name).exists()
        assert (output / "css" / "style.css").exists()
        assert (output / "js" / "main.js").exists()
        assert (output / "pretty-feed-v3.xsl").exists()
        assert (output / "css" / "codehilite.css").exists()

        index = (output / "index.html").read_text(encoding="utf-8")
        first = index.index('href="2023-06-15.html"')
        second = index.index('href="notes.html"')
        third = index.index('href="2023-01-01-hello.html"')
        assert first < second < third
        assert "Index body." in index

        page = (output / "2023-01-01-hello.html").read_text(encoding="utf-8")
        assert page.startswith("<h1>hello</h1>")
        assert "Sun, 01 Jan 2023 00:00:00" in page

        rss = (output / "rss.xml").read_text(encoding="utf-8")
        items = ET.fromstring(rss.encode("utf-8")).findall("channel/item")
        assert [item.findtext("link") for item in items] == ["2023-06-15.html", "notes.html", "hello.html"]

        out = capsys.readouterr().out
        assert "Generated page: 2023-01-01-hello.html" in out

    def test_only_readme(self, site):
        assert build_site(site) == 0
        output = Path(site.output_dir)
        assert "<nav></nav>" in (output / "index.html").read_text(encoding="utf-8")
        rss = (output / "rss.xml").read_text(encoding="utf-8")
        assert ET.fromstring(rss.encode("utf-8")).findall("channel/item") == []

    def test_missing_markdown_dir_exits(self, site, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            build_site(replace(site, markdown_dir=str(tmp_path / "nope")))
        assert exc.value.code == 1
        assert "directory does not exist" in capsys.readouterr().err

    def test_missing_readme_raises(self, site):
        (Path(site.markdown_dir) / "README.md").unlink()
        with pytest.raises(FileNotFoundError):
            build_site(site)


class TestMain:
    def write_config(self, site, tmp_path) -> Path:
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "websiteName": site.website_name,
                    "templateDir": site.template_dir,
                    "markdownDir": site.markdown_dir,
                    "outputDir": site.output_dir,
                }
            ),
            encoding="utf-8",
        )
        return path

    def test_success(self, site, tmp_path, capsys):
        config = self.write_config(site, tmp_path)
        main(["--config", str(config), "--website-name", "From CLI"])
        out = capsys.readouterr().out
        assert "generated successfully" in out
        index = (Path(site.output_dir) / "index.html").read_text(encoding="utf-8")
        assert "<title>From CLI</title>" in index

    def test_read_error_exits_nonzero(self, site, tmp_path, capsys):
        config = self.write_config(site, tmp_path)
        (Path(site.markdown_dir) / "README.md").unlink()
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config)])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_decode_error_exits_nonzero(self, site, tmp_path):
        config = self.write_config(site, tmp_path)
        (Path(site.markdown_dir) / "2023-01-01-bad.md").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config)])
        assert exc.value.code == 1

    def test_unreadable_config_exits_nonzero(self, tmp_path, capsys):
        config = tmp_path / "settings.json"
        config.mkdir()
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config)])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestBundledTemplates:
    def test_every_placeholder_is_filled(self, site, tmp_path):
        templates = Path(__file__).resolve().parent.parent / "templates"
        (Path(site.markdown_dir) / "2023-01-01-hello.md").write_text("# Hello", encoding="utf-8")
        build_site(replace(site, template_dir=str(templates)))
        output = Path(site.output_dir)
        for name in ["index.html", "2023-01-01-hello.html"]:
            assert "{{" not in (output / name).read_text(encoding="utf-8")
