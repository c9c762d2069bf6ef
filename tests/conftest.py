from __future__ import annotations

import datetime as dt
import os
from pathlib import Path

import pytest

from weblog.config import WeblogConfig
from weblog.repository import PostRepository


def write_post(root: Path, rel_path: str, content: str, when: dt.datetime) -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))
    return path


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    root = tmp_path / "weblog"
    root.mkdir()
    return root


@pytest.fixture
def sample_posts(posts_dir: Path) -> Path:
    write_post(posts_dir, "Hello World.txt", "First post.\nSecond line.", dt.datetime(2022, 3, 1, 12, 0))
    write_post(posts_dir, "tech/Python Tips.txt", "Use the stdlib.", dt.datetime(2023, 1, 5, 12, 0))
    write_post(posts_dir, "tech/Привет мир.txt", "Cyrillic title.", dt.datetime(2023, 6, 10, 12, 0))
    write_post(posts_dir, "books/~untitled.txt", "A quiet note.", dt.datetime(2024, 1, 5, 12, 0))
    return posts_dir


@pytest.fixture
def repository(sample_posts: Path) -> PostRepository:
    return PostRepository(sample_posts)


@pytest.fixture
def config(posts_dir: Path) -> WeblogConfig:
    return WeblogConfig.from_mapping(
        {
            "weblog_dir": str(posts_dir),
            "domain": "example.org",
            "author_name": "Jane Doe",
            "author_email": "jane@example.org",
            "about_text": "Notes and essays.\\n\\n\\nNo cookies here.",
            "rewrites": {"old-name": "python-tips", "away": "https://example.com/x"},
        }
    )
