"""Publication filtering, ordering, and prev/next linking"""

import logging
from datetime import datetime
from typing import Iterable

from blogcorpus.core.models import Post


logger = logging.getLogger(__name__)


def is_published(post: Post, now: datetime) -> bool:
    """A post is visible once its date has passed; future dates are scheduled posts."""
    return post.meta.date < now


def order_posts(posts: Iterable[Post], now: datetime) -> list[Post]:
    """Published posts sorted ascending by date, ties broken by name."""
    published = [p for p in posts if is_published(p, now)]
    published.sort(key=lambda p: (p.meta.date, p.name))
    logger.debug("Found %d published post(s)", len(published))
    return published


def link_posts(posts: list[Post]) -> list[Post]:
    """Wire prev/next by position in posts; the first has no prev, the last no next."""
    for i, post in enumerate(posts):
        post.prev = posts[i - 1] if i > 0 else None
        post.next = posts[i + 1] if i < len(posts) - 1 else None
    return posts
