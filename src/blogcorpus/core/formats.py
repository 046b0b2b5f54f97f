"""Per-format decoders and renderers, one handler bound to each SourceFormat"""

import configparser
import html
import itertools
import json
import re
from typing import Any, Callable

import textile
import yaml
from markdown_it import MarkdownIt

from blogcorpus.core.models import SourceFormat


_INI_ROOT = "__root__"
_INI_NO_DEFAULTS = "__no_defaults__"

# "key[] = v" lines; each gets a unique suffix so repeats survive parsing
_INI_ARRAY_LINE_RE = re.compile(r"^([^\s=:;#\[][^=:]*?)\[\]\s*([=:])", re.MULTILINE)
_INI_ARRAY_KEY_RE = re.compile(r"^(.*)\[\]\d+$")


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _ini_value(value: str) -> Any:
    """Unquote an INI value and map true/false to booleans."""
    value = value.strip()
    if len(value) > 1 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def decode_json(text: str) -> Any:
    return json.loads(text)


def decode_yaml(text: str) -> Any:
    """An empty document decodes to {}; anything else is returned as loaded."""
    data = yaml.safe_load(text)
    return {} if data is None else data


def _ini_items(items: list[tuple[str, str]]) -> dict[str, Any]:
    """Collect INI options, folding repeated 'key[]' entries into one list under 'key'."""
    data: dict[str, Any] = {}
    for key, value in items:
        m = _INI_ARRAY_KEY_RE.match(key)
        if m:
            if not isinstance(data.get(m.group(1)), list):
                data[m.group(1)] = []
            data[m.group(1)].append(_ini_value(value))
        else:
            data[key] = _ini_value(value)
    return data


def decode_ini(text: str) -> dict[str, Any]:
    """Decode INI text; keys before the first section are top-level, sections nest.

    Repeated 'tags[] = a' lines become a list.
    """
    counter = itertools.count()
    text = _INI_ARRAY_LINE_RE.sub(lambda m: f"{m.group(1)}[]{next(counter)} {m.group(2)}", text)
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section=_INI_NO_DEFAULTS,
    )
    parser.optionxform = str        # keep key case
    parser.read_string(f"[{_INI_ROOT}]\n{text}")
    data = _ini_items(parser.items(_INI_ROOT))
    for section in parser.sections():
        if section == _INI_ROOT:
            continue
        data[section] = _ini_items(parser.items(section))
    return data


def render_markdown(text: str, preset: str = "gfm-like") -> str:
    return _make_parser(preset).render(text)


def render_textile(text: str, preset: str = None) -> str:
    return textile.textile(text)


def render_text(text: str, preset: str = None) -> str:
    """Plain text is escaped and wrapped in a preformatted block."""
    return f"<pre>{html.escape(text)}</pre>"


def render_html(text: str, preset: str = None) -> str:
    return text


DECODERS: dict[SourceFormat, Callable[[str], Any]] = {
    SourceFormat.JSON: decode_json,
    SourceFormat.YAML: decode_yaml,
    SourceFormat.INI:  decode_ini,
}

RENDERERS: dict[SourceFormat, Callable[[str, str], str]] = {
    SourceFormat.MARKDOWN: render_markdown,
    SourceFormat.TEXTILE:  render_textile,
    SourceFormat.TEXT:     render_text,
    SourceFormat.HTML:     render_html,
}

DECODE_ERRORS = (ValueError, yaml.YAMLError, configparser.Error)
