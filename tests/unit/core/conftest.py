"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from blogcorpus.core.meta import resolve_meta
from blogcorpus.core.models import Post


def make_post(name: str, date: str, now: datetime, tags: list[str] = None) -> Post:
    """A resolved Post with the given date string and tags."""
    meta = resolve_meta(name, {"title": name, "date": date, "tags": tags or []}, now)
    return Post(name=name, meta=meta, content=f"{name} body", html=f"<p>{name}</p>")


@pytest.fixture(name="post_factory")
def post_factory_fixture(now):
    def _make(name: str, date: str, tags: list[str] = None) -> Post:
        return make_post(name, date, now, tags)
    return _make
