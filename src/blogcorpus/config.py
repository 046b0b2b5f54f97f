"""Build configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from blogcorpus.core.errors import ConfigError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOGCORPUS_"


class Settings(BaseModel):
    """Options for one corpus build; camelCase keys (contentDir, latestCount) are accepted too."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    domain:        str = Field(...,  min_length=1, description="Host name used in feed links")
    content_dir:   str = Field(...,  min_length=1, description="Directory of post files")
    title:         str = ""
    description:   str = ""
    base:          str = Field(default="", description="URL path prefix, e.g. '/blog'")
    latest_count:  int = Field(default=10, ge=0, description="Posts in latest and in the feeds")
    index_count:   int = Field(default=10, ge=0, description="Reserved for index pagination; unused")
    author_name:   str = Field(default="Anonymous", description="Atom feed author")
    author_email:  Optional[str] = None
    parse_workers: int = Field(default=1,  ge=1, description="Threads used to decode files")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:    str = Field(default="dist", description="Where the CLI writes feed files")
    log_level:     str = Field(default="WARNING", pattern="(?i)^(debug|info|warning|error|critical)$", description="Logging level name")


def _by_name(data: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite camelCase aliases to field names so later layers override earlier ones."""
    aliases = {f.alias: name for name, f in Settings.model_fields.items() if f.alias}
    return {aliases.get(k, k): v for k, v in data.items()}


def validate_settings(data: Mapping[str, Any]) -> Settings:
    """Build Settings from a plain mapping, turning validation failures into ConfigError."""
    try:
        return Settings.model_validate(_by_name(data))
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        if missing:
            raise ConfigError(f"Provide {', '.join(missing)}") from e
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOGCORPUS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping")
        data = _by_name(data)

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return validate_settings(data)
