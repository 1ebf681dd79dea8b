from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Union

DATE_FMT = "%Y-%m-%d"
NAME_SEPARATOR = "-"


@dataclass(frozen=True)
class WellFormed:
    date: dt.date
    title: str = ""

    @property
    def date_str(self) -> str:
        return self.date.strftime(DATE_FMT)

    @property
    def has_title(self) -> bool:
        return bool(self.title)

    @property
    def canonical_title(self) -> str:
        return self.title or self.date_str

    @property
    def output_name(self) -> str:
        if self.title:
            return f"{self.date_str}{NAME_SEPARATOR}{self.title}.html"
        return f"{self.date_str}.html"


@dataclass(frozen=True)
class Fallback:
    title: str
    reason: str = "pattern"

    @property
    def canonical_title(self) -> str:
        return self.title

    @property
    def output_name(self) -> str:
        return f"{self.title}.html"


ParsedName = Union[WellFormed, Fallback]


def has_date_prefix(parts: list[str]) -> bool:
    return len(parts) >= 3 and len(parts[0]) == 4 and len(parts[1]) == 2 and len(parts[2]) == 2


def parse_date_parts(year: str, month: str, day: str) -> Optional[dt.date]:
    if not (year.isdigit() and month.isdigit() and day.isdigit()):
        return None
    try:
        return dt.date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_filename(stem: str) -> ParsedName:
    """Split a Markdown base name into its date and title.

    ``2023-01-01-hello`` is well-formed, ``2023-06-15`` is well-formed without
    a title and anything else falls back to the raw name. A name whose leading
    segments have the right shape but do not form a real date (``XXXX-YY-ZZ``)
    falls back with ``reason="invalid-date"``.
    """
    parts = stem.split(NAME_SEPARATOR)
    if not has_date_prefix(parts):
        return Fallback(stem)
    date = parse_date_parts(parts[0], parts[1], parts[2])
    if date is None:
        return Fallback(stem, reason="invalid-date")
    return WellFormed(date, NAME_SEPARATOR.join(parts[3:]))


def local_midnight(value: dt.date) -> dt.datetime:
    return dt.datetime(value.year, value.month, value.day).astimezone()


def feed_title(output_name: str, modification_date: dt.datetime) -> str:
    stem = output_name[: -len(".html")] if output_name.endswith(".html") else output_name
    parsed = parse_filename(stem)
    if isinstance(parsed, WellFormed):
        stem = parsed.canonical_title
    return stem or modification_date.strftime(DATE_FMT)
