from __future__ import annotations

import dataclasses
import datetime as dt
import random
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

from unidecode import unidecode

UNTITLED_PREFIX = "~"
UNTITLED_TITLE = "* * *"
MISC_CATEGORY = "Misc"

CYRILLIC_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d",
    "е": "e", "ё": "yo", "ж": "zh", "з": "z", "и": "i",
    "й": "y", "к": "k", "л": "l", "м": "m", "н": "n",
    "о": "o", "п": "p", "р": "r", "с": "s", "т": "t",
    "у": "u", "ф": "f", "х": "h", "ц": "ts", "ч": "ch",
    "ш": "sh", "щ": "sch", "ъ": "", "ы": "y", "ь": "",
    "э": "e", "ю": "yu", "я": "ya",
}
CYRILLIC_TABLE = str.maketrans(CYRILLIC_TO_LATIN)
SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
WHITESPACE_RE = re.compile(r"\s+")
DATE_PATH_RE = re.compile(r"^(?P<year>\d{4})(?:/(?P<month>\d{2})(?:/(?P<day>\d{2}))?)?/?$")


class DatePathError(ValueError):
    """Raised when an archive path is not a valid ``yyyy[/mm[/dd]]`` date."""


def slugify(title: str) -> str:
    text = title.lower().translate(CYRILLIC_TABLE)
    text = unidecode(text).lower()
    text = SLUG_STRIP_RE.sub("", text)
    text = WHITESPACE_RE.sub("-", text)
    return text.strip("-")


def display_title(title: str) -> str:
    if title.startswith(UNTITLED_PREFIX):
        return UNTITLED_TITLE
    return title


def category_label(directory: str) -> str:
    if not directory:
        return MISC_CATEGORY
    return directory[:1].upper() + directory[1:]


@dataclasses.dataclass(frozen=True)
class Post:
    title: str
    slug: str
    date: dt.datetime
    category: str
    content: str
    path: Path
    directory: str = ""

    @property
    def display_title(self) -> str:
        return display_title(self.title)

    @classmethod
    def from_file(cls, path: Path, root: Path) -> "Post":
        parts = path.relative_to(root).parts
        directory = parts[0] if len(parts) > 1 else ""
        title = path.stem
        return cls(
            title=title,
            slug=slugify(title),
            date=dt.datetime.fromtimestamp(path.stat().st_mtime),
            category=category_label(directory),
            content=path.read_bytes().decode("utf-8", "replace"),
            path=path,
            directory=directory,
        )


def resolve(slug: str, posts: Iterable[Post]) -> Optional[Post]:
    # Colliding slugs resolve to whichever post the scan yields first.
    for post in posts:
        if post.slug == slug:
            return post
    return None


def format_year_range(years: Optional[tuple[int, int]]) -> str:
    if years is None:
        return str(dt.date.today().year)
    first, last = years
    if first == last:
        return str(first)
    return f"{first}-{last}"


class PostCollection:
    """Posts ordered newest first."""

    def __init__(self, posts: Iterable[Post] = ()):
        self._posts = sorted(posts, key=lambda post: post.date, reverse=True)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, index: int) -> Post:
        return self._posts[index]

    def __bool__(self) -> bool:
        return bool(self._posts)

    def __repr__(self) -> str:
        return f"PostCollection({[post.title for post in self._posts]!r})"

    def filter(self, predicate) -> "PostCollection":
        return PostCollection(post for post in self._posts if predicate(post))

    def index_of(self, post: Post) -> int:
        for index, item in enumerate(self._posts):
            if item.path == post.path:
                return index
        raise ValueError(f"{post.path} is not in this collection")

    def newest_date(self) -> Optional[dt.datetime]:
        return self._posts[0].date if self._posts else None

    def year_range(self) -> Optional[tuple[int, int]]:
        if not self._posts:
            return None
        years = [post.date.year for post in self._posts]
        return min(years), max(years)

    def random_post(self, rng=None) -> Optional[Post]:
        if not self._posts:
            return None
        return (rng or random).choice(self._posts)


def parse_date_path(value: str) -> tuple[int, Optional[int], Optional[int]]:
    match = DATE_PATH_RE.match(value.strip())
    if not match:
        raise DatePathError(f"Invalid date path: {value!r}")
    year = int(match.group("year"))
    month = int(match.group("month")) if match.group("month") else None
    day = int(match.group("day")) if match.group("day") else None
    try:
        dt.date(year, month or 1, day or 1)
    except ValueError as exc:
        raise DatePathError(f"Invalid date path: {value!r}") from exc
    return year, month, day
