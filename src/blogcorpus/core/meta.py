"""Metadata overlay and normalization: dates, date parts, and tags"""

import calendar
from datetime import date, datetime, time
from typing import Any, Mapping

from dateutil import parser as dateutil_parser

from blogcorpus.core.errors import MetadataDecodeError
from blogcorpus.core.models import PostMeta


def default_title(name: str) -> str:
    """'my-first-post' -> 'My First Post'. Only the first letter of each word is touched."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def default_meta(name: str, now: datetime) -> dict[str, Any]:
    """Starting metadata for a post that no metadata file has touched yet."""
    return {"title": default_title(name), "date": now, "tags": []}


def overlay_meta(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return base with every top-level field of overlay replacing its counterpart.

    Later overlays win per field; nested values are replaced, not merged. Neither
    input is modified.
    """
    merged = dict(base)
    for key, value in overlay.items():
        merged[str(key)] = value
    return merged


def coerce_date(value: Any, now: datetime, source: str = "") -> datetime:
    """Turn whatever a metadata file supplied as a date into an aware datetime.

    Numbers are epoch milliseconds. Naive values take the timezone of now.
    """
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            dt = datetime.combine(value, time())
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            dt = datetime.fromtimestamp(value / 1000, tz=now.tzinfo)
        elif isinstance(value, str):
            dt = dateutil_parser.parse(value)
        else:
            raise TypeError(f"unsupported date value {value!r}")
    except (TypeError, ValueError, OverflowError) as e:
        raise MetadataDecodeError(source, e) from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=now.tzinfo)
    return dt


def coerce_tags(value: Any) -> list[str]:
    """Tags as a list of unique strings in first-seen order; a string is comma-separated."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = value
    else:
        items = [value]
    tags = (str(t).strip() for t in items)
    return list(dict.fromkeys(t for t in tags if t))


def resolve_meta(name: str, raw: Mapping[str, Any], now: datetime, source: str = None) -> PostMeta:
    """Normalize a merged metadata record and re-derive the date parts from its date."""
    dt = coerce_date(raw.get("date", now), now, source or name)
    title = raw.get("title")
    raw = {k: v for k, v in raw.items() if k != "monthName"}      # recomputed below
    return PostMeta.model_validate(overlay_meta(raw, {
        "title":      default_title(name) if title is None else str(title),
        "date":       dt,
        "year":       f"{dt.year:04d}",
        "month":      f"{dt.month:02d}",
        "day":        f"{dt.day:02d}",
        "month_name": calendar.month_name[dt.month],
        "tags":       coerce_tags(raw.get("tags")),
    }))
