from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path


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


def rfc1123_date(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.strftime("%a, %d %b %Y %H:%M:%S %z")


def mtime_of(path: Path) -> dt.datetime:
    return dt.datetime.fromtimestamp(path.stat().st_mtime).astimezone()


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def check_directories(paths: list[Path]) -> None:
    for path in paths:
        if not path.is_dir():
            fail(f"{path} directory does not exist")
