"""Content file decoding and per-name post assembly"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from blogcorpus.core.errors import FilesystemError, MetadataDecodeError
from blogcorpus.core.formats import DECODE_ERRORS, DECODERS, RENDERERS
from blogcorpus.core.meta import default_meta, overlay_meta, resolve_meta
from blogcorpus.core.models import ParsedFile, Post, SourceFormat


logger = logging.getLogger(__name__)

ORDER_PREFIX_RE = re.compile(r'^\d+-')


def split_filename(filename: str) -> tuple[str, str]:
    """Split on the first '.': 'a.b.md' -> ('a', 'b.md'), 'README' -> ('README', '')."""
    base, _, ext = filename.partition('.')
    return base, ext


def strip_order_prefix(base: str) -> str:
    """Drop a leading manual-ordering prefix: '01-hello' -> 'hello'."""
    return ORDER_PREFIX_RE.sub('', base, count=1)


def parse_file(path: Path, parser_config: str = 'gfm-like') -> Optional[ParsedFile]:
    """Decode one content file, or return None if its extension is not recognized.

    Metadata that fails to decode (or is not a mapping) raises MetadataDecodeError.
    """
    base, ext = split_filename(path.name)
    fmt = SourceFormat.from_extension(ext)
    if fmt is None:
        logger.debug("Skipping %s: unrecognized extension %r", path.name, ext)
        return None

    name = strip_order_prefix(base)
    logger.debug("Reading file %s (name=%s, format=%s)", path.name, name, fmt.value)
    try:
        contents = path.read_text(encoding='utf-8', errors='replace')   # bad bytes -> U+FFFD
    except OSError as e:
        raise FilesystemError(path, e) from e

    if fmt.is_metadata:
        try:
            meta = DECODERS[fmt](contents)
        except DECODE_ERRORS as e:
            raise MetadataDecodeError(path.name, e) from e
        if not isinstance(meta, dict):
            raise MetadataDecodeError(
                path.name, TypeError(f"expected a mapping, got {type(meta).__name__}")
            )
        return ParsedFile(filename=path.name, name=name, format=fmt, meta=meta)

    html = RENDERERS[fmt](contents, parser_config)
    return ParsedFile(filename=path.name, name=name, format=fmt, content=contents, html=html)


@dataclass
class _Draft:
    """Mutable per-name state while files are still being merged."""
    meta:        dict[str, Any]
    content:     str = ""
    html:        str = ""
    date_source: Optional[str] = None     # file that last supplied 'date'


class PostBuilder:
    """Accumulates parsed files by post name and produces Posts once all are merged.

    Files must be added in filename order: when two metadata files set the same
    field for one name, the one added last wins.
    """

    def __init__(self, now: datetime):
        self.now = now
        self._drafts: dict[str, _Draft] = {}

    def __len__(self) -> int:
        return len(self._drafts)

    def _draft(self, name: str) -> _Draft:
        if name not in self._drafts:
            self._drafts[name] = _Draft(meta=default_meta(name, self.now))
        return self._drafts[name]

    def add(self, parsed: ParsedFile) -> None:
        draft = self._draft(parsed.name)
        if parsed.meta is not None:
            draft.meta = overlay_meta(draft.meta, parsed.meta)
            if 'date' in parsed.meta:
                draft.date_source = parsed.filename
        if parsed.content is not None:
            draft.content = parsed.content
            draft.html = parsed.html or ""

    def build(self) -> dict[str, Post]:
        """Resolve every draft's metadata and return Posts keyed by name."""
        return {
            name: Post(
                name=name,
                meta=resolve_meta(name, d.meta, self.now, source=d.date_source),
                content=d.content,
                html=d.html,
            )
            for name, d in self._drafts.items()
        }


def parse_files(
    content_dir: Path,
    filenames: list[str],
    parser_config: str = 'gfm-like',
    workers: int = 1,
    ) -> list[ParsedFile]:
    """Parse filenames under content_dir, preserving input order in the result.

    With workers > 1 files are decoded on a thread pool; the returned order is still
    the input order, so merging stays deterministic.
    """
    paths = [Path(content_dir) / f for f in filenames]
    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(paths))) as executor:
            results = list(executor.map(lambda p: parse_file(p, parser_config), paths))
    else:
        results = [parse_file(p, parser_config) for p in paths]
    return [r for r in results if r is not None]


def parse_dir(
    content_dir: Path,
    filenames: list[str],
    now: datetime,
    parser_config: str = 'gfm-like',
    workers: int = 1,
    ) -> dict[str, Post]:
    """Parse and merge every recognized file into Posts keyed by name."""
    builder = PostBuilder(now)
    for parsed in parse_files(content_dir, filenames, parser_config, workers):
        builder.add(parsed)
    logger.debug("Found %d post(s)", len(builder))
    return builder.build()
