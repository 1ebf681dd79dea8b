from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

from .utils import parse_bool

try:
    import tomllib as toml
except ImportError:
    try:
        import tomli as toml
    except ImportError:  # pragma: no cover - optional dependency
        toml = None

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

ENV_PREFIX = "DOCR_"
DEFAULT_CONFIG = "settings.json"

# Keys written by older settings.json files.
CAMEL_CASE_KEYS = {
    "githubUsername": "github_username",
    "websiteName": "website_name",
    "templateDir": "template_dir",
    "markdownDir": "markdown_dir",
    "outputDir": "output_dir",
    "websiteURL": "website_url",
    "websiteDescription": "website_description",
    "timestampsFromFilename": "timestamps_from_filename",
}


@dataclass(frozen=True)
class Settings:
    website_name: str = "My Website"
    github_username: str = ""
    website_url: str = ""
    website_description: str = ""
    template_dir: str = "templates"
    markdown_dir: str = "markdown"
    output_dir: str = "output"
    timestamps_from_filename: bool = True

    @property
    def template_path(self) -> Path:
        return Path(self.template_dir)

    @property
    def markdown_path(self) -> Path:
        return Path(self.markdown_dir)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


SETTING_NAMES = tuple(field.name for field in fields(Settings))


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        if toml is None:
            print("TOML config requires tomllib (Python 3.11+) or tomli.", file=sys.stderr)
            sys.exit(1)
        try:
            data = toml.loads(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(data, dict):
            print(f"TOML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        if yaml is None:
            print("YAML config requires PyYAML.", file=sys.stderr)
            sys.exit(1)
        try:
            data = yaml.safe_load(text)
        except Exception as exc:  # pragma: no cover - depends on parser
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def normalize_keys(config: Mapping[str, object]) -> dict:
    normalized = {}
    for key, value in config.items():
        key = CAMEL_CASE_KEYS.get(key, key)
        if key in SETTING_NAMES and value is not None:
            normalized[key] = value
    return normalized


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict:
    if environ is None:
        environ = os.environ
    overrides = {}
    for name in SETTING_NAMES:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def coerce(values: Mapping[str, object]) -> dict:
    coerced = {}
    for key, value in values.items():
        if key == "timestamps_from_filename":
            coerced[key] = parse_bool(value)
        else:
            coerced[key] = str(value)
    return coerced


def load_settings(
    path: Path,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, object]] = None,
) -> Settings:
    """Build the run's settings: defaults, then config file, then env, then overrides.

    ``overrides`` holds command-line values; entries set to ``None`` are ignored.
    """
    values = normalize_keys(load_config(path))
    values.update(env_overrides(environ))
    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})
    return replace(Settings(), **coerce(values))
