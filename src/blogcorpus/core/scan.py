"""Content directory listing"""

import logging
import stat
from pathlib import Path

from blogcorpus.core.errors import FilesystemError


logger = logging.getLogger(__name__)


def list_entries(content_dir: Path) -> list[str]:
    """Return sorted names of the non-directory entries directly under content_dir.

    No filtering by name or extension happens here. Raises FilesystemError if the
    directory cannot be listed or an entry cannot be inspected.
    """
    content_dir = Path(content_dir)
    try:
        entries = sorted(content_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise FilesystemError(content_dir, e) from e

    names = []
    for p in entries:
        try:
            is_dir = stat.S_ISDIR(p.stat().st_mode)
        except OSError as e:
            raise FilesystemError(p, e) from e
        if not is_dir:
            names.append(p.name)
    logger.debug("Found %d file(s) in %s", len(names), content_dir)
    return names
