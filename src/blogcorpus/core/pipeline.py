"""Corpus build orchestration: scan -> parse -> resolve -> link -> aggregate -> feeds"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Union

from blogcorpus.config import Settings, validate_settings
from blogcorpus.core.aggregate import build_archive, build_tagged
from blogcorpus.core.chronology import link_posts, order_posts
from blogcorpus.core.feeds import build_atom, build_rss, select_latest
from blogcorpus.core.models import Corpus
from blogcorpus.core.parse import parse_dir
from blogcorpus.core.scan import list_entries


logger = logging.getLogger(__name__)


def read_blog(settings: Union[Settings, Mapping[str, Any]], now: datetime = None) -> Corpus:
    """Build a Corpus from settings.content_dir as of now (default: the current time).

    A naive now is taken as local time. Settings are validated before any file is
    touched; any error aborts the whole build.
    """
    if not isinstance(settings, Settings):
        settings = validate_settings(settings)
    now = now or datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()

    content_dir = Path(settings.content_dir)
    filenames = list_entries(content_dir)
    post = parse_dir(
        content_dir, filenames, now,
        parser_config=settings.parser_config,
        workers=settings.parse_workers,
    )

    posts = link_posts(order_posts(post.values(), now))
    latest = select_latest(posts, settings.latest_count)

    corpus = Corpus(
        now=now,
        posts=posts,
        post=post,
        latest=latest,
        archive=build_archive(posts),
        tagged=build_tagged(posts),
        rss=build_rss(settings, latest, now),
        atom=build_atom(settings, latest, now),
    )
    logger.info(
        "Built corpus from %s: %d post(s), %d published, %d in feeds",
        content_dir, len(post), len(posts), len(latest),
    )
    return corpus
