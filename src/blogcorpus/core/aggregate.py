"""Archive and tag indexes over the published sequence"""

from blogcorpus.core.models import Post


def build_archive(posts: list[Post]) -> dict[str, dict[str, list[Post]]]:
    """Group posts by year then month; each bucket keeps the input order."""
    archive: dict[str, dict[str, list[Post]]] = {}
    for post in posts:
        archive.setdefault(post.meta.year, {}).setdefault(post.meta.month, []).append(post)
    return archive


def build_tagged(posts: list[Post]) -> dict[str, list[Post]]:
    """Map each tag to the posts carrying it, in input order."""
    tagged: dict[str, list[Post]] = {}
    for post in posts:
        for tag in post.meta.tags:
            tagged.setdefault(tag, []).append(post)
    return tagged
