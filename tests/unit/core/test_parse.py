"""Unit tests for core/parse.py"""

import pytest

from blogcorpus.core.errors import MetadataDecodeError
from blogcorpus.core.formats import render_markdown
from blogcorpus.core.models import SourceFormat
from blogcorpus.core.parse import (
    PostBuilder,
    parse_dir,
    parse_file,
    parse_files,
    split_filename,
    strip_order_prefix,
)


@pytest.mark.parametrize("filename,expected", [
    ("hello.md", ("hello", "md")),
    ("01-hello.md", ("01-hello", "md")),
    ("archive.tar.gz", ("archive", "tar.gz")),
    ("README", ("README", "")),
])
def test_split_filename(filename, expected):
    """Only the first '.' separates the base name from the extension."""
    assert split_filename(filename) == expected


@pytest.mark.parametrize("base,expected", [
    ("01-hello", "hello"),
    ("2013-01-01-new-year", "01-01-new-year"),
    ("hello", "hello"),
    ("v2-notes", "v2-notes"),
    ("123", "123"),
])
def test_strip_order_prefix(base, expected):
    """One leading run of digits plus hyphen is removed, nothing else."""
    assert strip_order_prefix(base) == expected


def test_parse_file_unrecognized_extension(tmp_path):
    """Unknown extensions are skipped, not errors."""
    f = tmp_path / "note.xyz"
    f.write_text("whatever")
    assert parse_file(f) is None


def test_parse_file_markdown(tmp_path):
    f = tmp_path / "01-hello.md"
    f.write_text("World")
    parsed = parse_file(f)
    assert parsed.name == "hello"
    assert parsed.format is SourceFormat.MARKDOWN
    assert parsed.content == "World"
    assert parsed.html == render_markdown("World")
    assert parsed.meta is None


def test_parse_file_html_is_raw(tmp_path):
    f = tmp_path / "page.html"
    f.write_text("<p>raw</p>")
    parsed = parse_file(f)
    assert parsed.content == parsed.html == "<p>raw</p>"


def test_parse_file_text_is_preformatted(tmp_path):
    f = tmp_path / "notes.txt"
    f.write_text("1 < 2")
    assert parse_file(f).html == "<pre>1 &lt; 2</pre>"


def test_parse_file_json_meta(tmp_path):
    f = tmp_path / "hello.json"
    f.write_text('{"title": "Hi", "tags": ["x"]}')
    parsed = parse_file(f)
    assert parsed.meta == {"title": "Hi", "tags": ["x"]}
    assert parsed.content is None


def test_parse_file_bad_json_names_file(tmp_path):
    """Malformed JSON raises MetadataDecodeError identifying the file."""
    f = tmp_path / "bad.json"
    f.write_text("{not json")
    with pytest.raises(MetadataDecodeError, match="bad.json") as exc:
        parse_file(f)
    assert exc.value.filename == "bad.json"


def test_parse_file_bad_yaml_names_file(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("title: [unclosed\n")
    with pytest.raises(MetadataDecodeError, match="bad.yaml"):
        parse_file(f)


def test_parse_file_bad_ini_names_file(tmp_path):
    """INI failures surface through the same decode error."""
    f = tmp_path / "bad.ini"
    f.write_text("[unterminated\nkey = value\n")
    with pytest.raises(MetadataDecodeError, match="bad.ini"):
        parse_file(f)


def test_parse_file_non_mapping_meta(tmp_path):
    """Metadata must be a mapping; a JSON list is rejected."""
    f = tmp_path / "list.json"
    f.write_text('["a", "b"]')
    with pytest.raises(MetadataDecodeError, match="expected a mapping"):
        parse_file(f)


@pytest.fixture(name="parsed")
def parsed_fixture(tmp_path):
    """Write text to filename under tmp_path and return its ParsedFile."""
    def _parsed(filename: str, text: str):
        path = tmp_path / filename
        path.write_text(text)
        return parse_file(path)
    return _parsed

def test_builder_default_post(now, parsed):
    """A body-only post gets the synthesized title, the build time, and no tags."""
    builder = PostBuilder(now)
    builder.add(parsed("my-first-post.md", "Body"))
    post = builder.build()["my-first-post"]
    assert post.meta.title == "My First Post"
    assert post.meta.date == now
    assert post.meta.tags == []
    assert post.content == "Body"


def test_builder_later_meta_wins_per_field(now, parsed):
    """Overlays replace only the fields they set; the later file wins on conflicts."""
    builder = PostBuilder(now)
    builder.add(parsed("a.json", '{"title": "First", "author": "ann"}'))
    builder.add(parsed("a.yaml", "title: Second\n"))
    meta = builder.build()["a"].meta
    assert meta.title == "Second"
    assert meta.author == "ann"


def test_builder_bad_date_names_source(now, parsed):
    """An unparseable date is reported against the file that supplied it."""
    builder = PostBuilder(now)
    builder.add(parsed("a.json", '{"date": "not a date"}'))
    with pytest.raises(MetadataDecodeError, match="a.json"):
        builder.build()


def test_parse_dir_merges_by_name(tmp_path, now):
    """Files sharing a name after prefix stripping merge into one post."""
    (tmp_path / "01-hello.md").write_text("World")
    (tmp_path / "hello.json").write_text('{"title": "Hi", "tags": ["x"]}')
    (tmp_path / "note.xyz").write_text("ignored")
    posts = parse_dir(tmp_path, ["01-hello.md", "hello.json", "note.xyz"], now)
    assert list(posts) == ["hello"]
    post = posts["hello"]
    assert post.name == "hello"
    assert post.meta.title == "Hi"
    assert post.meta.tags == ["x"]
    assert post.content == "World"
    assert post.html == render_markdown("World")


def test_parse_files_threaded_keeps_order(tmp_path):
    """A thread pool returns results in input order."""
    names = [f"{i:02d}-p{i}.md" for i in range(12)]
    for n in names:
        (tmp_path / n).write_text(n)
    sequential = parse_files(tmp_path, names)
    threaded = parse_files(tmp_path, names, workers=4)
    assert [p.filename for p in threaded] == [p.filename for p in sequential] == names



def test_parse_file_invalid_utf8_is_replaced(tmp_path):
    """Undecodable bytes in a body file become U+FFFD instead of failing the build."""
    f = tmp_path / "latin.md"
    f.write_bytes(b"caf\xe9")
    parsed = parse_file(f)
    assert parsed.content == "caf�"
    assert "caf�" in parsed.html


@pytest.mark.parametrize("text", ["false\n", "[]\n", "0\n", "just a string\n"])
def test_parse_file_yaml_non_mapping(tmp_path, text):
    """A YAML document that is not a mapping is rejected, even when it is falsy."""
    f = tmp_path / "a.yaml"
    f.write_text(text)
    with pytest.raises(MetadataDecodeError, match="a.yaml.*expected a mapping"):
        parse_file(f)


def test_parse_file_yaml_empty_is_empty_meta(tmp_path):
    f = tmp_path / "a.yaml"
    f.write_text("")
    assert parse_file(f).meta == {}


def test_builder_ini_tag_array(now, parsed):
    """Repeated 'tags[]' lines in an INI file end up as the post's tags."""
    builder = PostBuilder(now)
    builder.add(parsed("a.ini", "tags[] = x\ntags[] = y\n"))
    meta = builder.build()["a"].meta
    assert meta.tags == ["x", "y"]
    assert meta.model_extra == {}
