"""Access logging in the nginx "combined" format."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Mapping

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class AccessRecord:
    """One served request, as needed for an access log line."""

    ip: str
    time: _dt.datetime
    method: str
    uri: str
    protocol: str
    status: int
    size: int
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str:
        """Return a request header, matched case-insensitively, or ""."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return ""


def empty_dash(s: str) -> str:
    """Return "-" for an empty string, otherwise the string itself."""
    return s or "-"


def _format_time(moment: _dt.datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=_dt.timezone.utc)
    offset = moment.utcoffset() or _dt.timedelta(0)
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return (
        f"{moment.day:02d}/{_MONTHS[moment.month - 1]}/{moment.year:04d}:"
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} "
        f"{sign}{hours:02d}{mins:02d}"
    )


def format_access_line(record: AccessRecord) -> str:
    """Render a record in the combined log format."""
    return (
        f"{empty_dash(record.ip)} - {empty_dash(record.header('logged-in-user'))} "
        f"[{_format_time(record.time)}] "
        f'"{record.method} {record.uri} {record.protocol}" '
        f"{record.status} {record.size} "
        f'"{empty_dash(record.header("Referer"))}" '
        f'"{empty_dash(record.header("User-Agent"))}"'
    )


def log_access(record: AccessRecord) -> None:
    """Print the access line for a record to standard output."""
    print("access: " + format_access_line(record))