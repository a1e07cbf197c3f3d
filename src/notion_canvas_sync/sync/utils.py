"""Shared utilities for sync operations."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

MAX_WORKERS = 16


def now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp from Canvas or Notion, None if invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


def same_instant(left: str | None, right: str | None) -> bool:
    """Compare two timestamps, tolerating formatting differences.

    Canvas sends "2026-02-15T23:59:00Z" where Notion echoes back
    "2026-02-15T23:59:00.000+00:00".
    """
    if left is None or right is None:
        return left == right
    left_dt, right_dt = parse_iso(left), parse_iso(right)
    if left_dt is None or right_dt is None:
        return left == right
    return left_dt == right_dt


def title_property(text: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": text}}]}


def date_property(start: str) -> dict[str, Any]:
    return {"date": {"start": start}}


def number_property(value: int) -> dict[str, Any]:
    return {"number": value}


def rich_text_property(text: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": text}}]}


def url_property(url: str | None) -> dict[str, Any]:
    return {"url": url}


def read_date(prop: dict[str, Any] | None) -> str | None:
    """Start of a date property value, None when unset or not a date."""
    if not prop or prop.get("type") != "date" or not prop.get("date"):
        return None
    return prop["date"].get("start")


def read_url(prop: dict[str, Any] | None) -> str | None:
    if not prop or prop.get("type") != "url":
        return None
    return prop.get("url")


def run_all(func: Callable[[Any], Any], items: Iterable[Any]) -> list[Any]:
    """Call func on every item concurrently and collect the results in order.

    The first exception raised by any call is re-raised. Calls already in
    flight are not cancelled, their results are dropped.
    """
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=min(len(items), MAX_WORKERS)) as executor:
        return list(executor.map(func, items))
