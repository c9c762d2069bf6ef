from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

from .content import Post, PostCollection, resolve

logger = logging.getLogger(__name__)

POST_SUFFIX = ".txt"


class ContentRootError(OSError):
    """Raised when the posts directory is missing or cannot be listed."""


def category_filter(name: str, ignore_case: bool = False):
    """Predicate selecting the posts filed under the directory ``name``.

    ``misc`` in any case also collects the posts sitting directly in the
    root. Directory names otherwise compare case-sensitively unless
    ``ignore_case`` is set.
    """
    name = name.strip("/")
    wanted = name.lower() if ignore_case else name
    include_root = name.lower() == "misc"

    def matches(post: Post) -> bool:
        if include_root and not post.directory:
            return True
        directory = post.directory.lower() if ignore_case else post.directory
        return bool(directory) and directory == wanted

    return matches


class PostRepository:
    """Posts stored as ``.txt`` files under ``root``.

    Files directly inside ``root`` are uncategorized; anything below a
    subdirectory takes that first directory as its category. Every call
    rescans the tree.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _list_files(self) -> list[Path]:
        if not self.root.is_dir():
            raise ContentRootError(f"Posts directory not found: {self.root}")

        def unreadable(exc: OSError) -> None:
            raise ContentRootError(f"Cannot read posts directory {exc.filename or self.root}: {exc}") from exc

        paths = []
        for dirpath, _dirnames, filenames in os.walk(self.root, onerror=unreadable):
            for name in filenames:
                if name.endswith(POST_SUFFIX):
                    paths.append(Path(dirpath) / name)
        return sorted(paths, key=lambda p: p.as_posix())

    def _iter_posts(self) -> Iterator[Post]:
        for path in self._list_files():
            yield Post.from_file(path, self.root)

    def fetch_all(self) -> PostCollection:
        posts = PostCollection(self._iter_posts())
        logger.debug("Loaded %d posts from %s", len(posts), self.root)
        return posts

    def fetch_by_slug(self, slug: str) -> Optional[Post]:
        slug = slug.strip("/")
        if slug.endswith(POST_SUFFIX):
            slug = slug[: -len(POST_SUFFIX)]
        if not slug:
            return None
        return resolve(slug, self._iter_posts())

    def fetch_by_category(self, name: str, ignore_case: bool = False) -> PostCollection:
        return self.fetch_all().filter(category_filter(name, ignore_case))

    def fetch_by_date(
        self, year: int, month: Optional[int] = None, day: Optional[int] = None
    ) -> PostCollection:
        def matches(post: Post) -> bool:
            if post.date.year != year:
                return False
            if month is not None and post.date.month != month:
                return False
            if day is not None and post.date.day != day:
                return False
            return True

        return self.fetch_all().filter(matches)

    def fetch_random(self, rng=None) -> Optional[Post]:
        return self.fetch_all().random_post(rng)

    def year_range(self) -> Optional[tuple[int, int]]:
        return self.fetch_all().year_range()
