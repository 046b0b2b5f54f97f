"""Data models for the parse, resolve, and assemble pipeline"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceFormat(str, Enum):
    """Recognized content file extensions."""
    MARKDOWN = "md"
    TEXTILE = "textile"
    TEXT = "txt"
    HTML = "html"
    JSON = "json"
    YAML = "yaml"
    INI = "ini"

    @classmethod
    def from_extension(cls, ext: str) -> Optional["SourceFormat"]:
        """Return the format for ext, or None when the extension is not recognized."""
        try:
            return cls(ext)
        except ValueError:
            return None

    @property
    def is_metadata(self) -> bool:
        return self in (SourceFormat.JSON, SourceFormat.YAML, SourceFormat.INI)


class PostMeta(BaseModel):
    """Resolved post metadata; unknown keys from metadata files are kept as extra fields."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title:      str
    date:       datetime
    year:       str
    month:      str         # zero-padded, "01".."12"
    day:        str         # zero-padded, "01".."31"
    month_name: str = Field(alias="monthName")
    tags:       list[str] = []


@dataclass
class ParsedFile:
    """Result of decoding a single content file; not every field is set for every format."""
    filename: str
    name:     str
    format:   SourceFormat
    meta:     Optional[dict[str, Any]] = None     # metadata formats only
    content:  Optional[str] = None                # body formats only
    html:     Optional[str] = None


@dataclass(eq=False)
class Post:
    """One logical post, possibly assembled from several files sharing a name."""
    name:    str
    meta:    PostMeta
    content: str = ""
    html:    str = ""
    prev:    Optional["Post"] = field(default=None, repr=False)
    next:    Optional["Post"] = field(default=None, repr=False)


@dataclass(frozen=True)
class Corpus:
    """Finished build output."""
    now:     datetime
    posts:   list[Post]                          # published, ascending by date
    post:    dict[str, Post]                     # every post by name, future ones included
    latest:  list[Post]                          # published, descending, truncated
    archive: dict[str, dict[str, list[Post]]]    # year -> month -> posts
    tagged:  dict[str, list[Post]]
    rss:     str
    atom:    str
    pages:   list = field(default_factory=list)  # index pagination is not built
