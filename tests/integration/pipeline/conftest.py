"""Sample content directory shared by pipeline integration tests"""

import pytest


SAMPLE_FILES = {
    "01-hello.md": "World",
    "hello.json": '{"title": "Hi", "tags": ["x"], "date": "2013-01-01T10:00:00+00:00"}',
    "second-post.yaml": "date: 2013-02-14\ntags: [x, y]\nauthor: ann\n",
    "second-post.textile": "h1. Second\n\nSome *bold* text.",
    "notes.txt": "a < b",
    "notes.ini": "date = 2013-02-20T08:00:00+00:00\ntags = y\n",
    "page.html": "<p>raw</p>",
    "page.json": '{"date": "2014-03-03T00:00:00+00:00"}',
    "future.md": "Not yet",
    "future.yaml": "date: 2099-01-01T00:00:00+00:00\ntags: [x]\n",
    "note.xyz": "ignored",
}


@pytest.fixture(name="content_dir")
def content_dir_fixture(write_files):
    root = write_files(SAMPLE_FILES)
    (root / "drafts").mkdir()
    (root / "drafts" / "hidden.md").write_text("in a subdirectory")
    return root


@pytest.fixture(name="options")
def options_fixture(content_dir):
    return {
        "domain": "example.com",
        "contentDir": str(content_dir),
        "title": "Sample",
        "description": "A sample blog",
        "latestCount": 2,
    }
