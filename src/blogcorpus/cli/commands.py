"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from blogcorpus.config import Settings, load_config
from blogcorpus.core.errors import BlogError
from blogcorpus.core.models import Corpus
from blogcorpus.core.pipeline import read_blog
from blogcorpus.util.logging import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _read(settings: Settings) -> Corpus:
    try:
        return read_blog(settings)
    except BlogError as e:
        _fail(str(e))


def build_cmd(
    content_dir: Annotated[Optional[str], typer.Argument(help="Directory of post files")] = None,
    domain: Annotated[Optional[str], typer.Option("--domain", help="Host name used in feed links")] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="Blog title")] = None,
    description: Annotated[Optional[str], typer.Option("--description", help="Blog description")] = None,
    base: Annotated[Optional[str], typer.Option("--base", help="URL path prefix, e.g. /blog")] = None,
    latest: Annotated[Optional[int], typer.Option("--latest-count", help="Posts included in the feeds")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level")] = None,
    ):
    """Build the corpus and write rss20.xml and atom.xml."""
    settings = _settings(overrides={
        "content_dir": content_dir, "domain": domain, "title": title,
        "description": description, "base": base, "latest_count": latest,
        "output_dir": out, "log_level": log_level,
    })
    corpus = _read(settings)

    output_dir = Path(settings.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / "rss20.xml").write_text(corpus.rss, encoding="utf-8")
        (output_dir / "atom.xml").write_text(corpus.atom, encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot write feeds to {output_dir}", e)

    typer.echo(
        f"Built {len(corpus.posts)} published post(s) "
        f"({len(corpus.post) - len(corpus.posts)} scheduled), "
        f"{len(corpus.tagged)} tag(s); feeds written to {output_dir}/"
    )


def list_cmd(
    content_dir: Annotated[Optional[str], typer.Argument(help="Directory of post files")] = None,
    domain: Annotated[Optional[str], typer.Option("--domain", help="Host name used in feed links")] = None,
    all_posts: Annotated[bool, typer.Option("--all", help="Include posts dated in the future")] = False,
    ):
    """List published posts in chronological order."""
    settings = _settings(overrides={"content_dir": content_dir, "domain": domain})
    corpus = _read(settings)

    if all_posts:
        rows = sorted(corpus.post.values(), key=lambda p: (p.meta.date, p.name))
    else:
        rows = corpus.posts
    if not rows:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in rows:
        flag = "" if p.meta.date < corpus.now else " (scheduled)"
        typer.echo(f"{p.meta.date:%Y-%m-%d}  {p.name}  {p.meta.title}{flag}")
