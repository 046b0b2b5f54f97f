"""Exception hierarchy for corpus builds; any of these aborts the whole build"""

from pathlib import Path


class BlogError(Exception):
    """Base class for every error raised while building a corpus."""


class ConfigError(BlogError, ValueError):
    """Missing or invalid build configuration."""


class FilesystemError(BlogError, OSError):
    """The content directory (or one of its entries) could not be read."""

    def __init__(self, path: Path, cause: Exception = None):
        self.path = Path(path)
        self.cause = cause
        msg = f"Cannot read {self.path}"
        if cause:
            msg += f": {cause}"
        super().__init__(msg)


class MetadataDecodeError(BlogError, ValueError):
    """A metadata file (or a date inside one) could not be decoded."""

    def __init__(self, filename: str, cause: Exception = None):
        self.filename = filename
        self.cause = cause
        msg = f"Error parsing {filename}"
        if cause:
            msg += f": {cause}"
        super().__init__(msg)
