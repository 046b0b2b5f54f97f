"""RSS 2.0 and Atom feed construction for the latest posts"""

from datetime import datetime
from email.utils import format_datetime

from blogcorpus.config import Settings
from blogcorpus.core.models import Post
from blogcorpus.util.xml import data_to_xml


ATOM_NS = "http://www.w3.org/2005/Atom"
RSS_TTL = 1800


def select_latest(posts: list[Post], count: int) -> list[Post]:
    """Newest first, at most count posts."""
    return list(reversed(posts))[:count]


def rfc822(dt: datetime) -> str:
    """'Tue, 01 Jan 2013 10:00:00 +0000'; locale independent."""
    return format_datetime(dt)


def iso8601(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")


def site_url(settings: Settings, path: str) -> str:
    return f"http://{settings.domain}{settings.base}/{path}"


def build_rss(settings: Settings, latest: list[Post], now: datetime) -> str:
    """Serialize latest as an RSS 2.0 document."""
    items = []
    for post in latest:
        url = site_url(settings, post.name)
        items.append({
            "title":       post.meta.title,
            "description": post.html,
            "link":        url,
            "guid":        url,
            "pubDate":     rfc822(post.meta.date),
        })
    data = {
        "@": {"version": "2.0"},
        "channel": {
            "title":         settings.title,
            "description":   settings.description,
            "link":          site_url(settings, "rss20.xml"),
            "lastBuildDate": rfc822(now),
            "pubDate":       rfc822(now),
            "ttl":           RSS_TTL,
            "item":          items,
        },
    }
    return data_to_xml("rss", data)


def build_atom(settings: Settings, latest: list[Post], now: datetime) -> str:
    """Serialize latest as an Atom document."""
    entries = []
    for post in latest:
        url = site_url(settings, post.name)
        entries.append({
            "title":   post.meta.title,
            "id":      url,
            "link":    [
                {"@": {"href": url}},
                {"@": {"href": url, "rel": "self"}},
            ],
            "content": {"@": {"type": "html"}, "#": post.html},
            "updated": iso8601(post.meta.date),
        })
    data = {
        "@":       {"xmlns": ATOM_NS},
        "title":   settings.title,
        "link":    {"@": {"href": site_url(settings, "atom.xml"), "rel": "self"}},
        "updated": iso8601(now),
        "id":      f"http://{settings.domain}/",
        "author":  {"name": settings.author_name, "email": settings.author_email},
        "entry":   entries,
    }
    return data_to_xml("feed", data)
