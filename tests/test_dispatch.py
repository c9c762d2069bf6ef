from __future__ import annotations

from pathlib import Path

import pytest

from weblog.config import WeblogConfig
from weblog.dispatch import DATE_PARSE_MESSAGE, TEXT_MIMETYPE, XML_MIMETYPE, dispatch
from weblog.pages import NOT_FOUND
from weblog.repository import PostRepository


class Deterministic:
    def choice(self, seq):
        return seq[-1]

    def randint(self, low: int, high: int) -> int:
        return high


def run(go: str, repository: PostRepository, config: WeblogConfig):
    return dispatch(go, repository, config, Deterministic())


def test_home(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("", repository, config)
    assert response.status == 200
    assert response.mimetype == TEXT_MIMETYPE
    assert response.body.startswith("\n\n\nAbout")


@pytest.mark.parametrize("go", ["python-tips", "/python-tips/", "python-tips.txt"])
def test_single_post(go: str, repository: PostRepository, config: WeblogConfig) -> None:
    response = run(go, repository, config)
    assert response.status == 200
    assert "Python Tips" in response.body
    assert "Hello World" not in response.body


def test_sitemap(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("sitemap.xml", repository, config)
    assert response.mimetype == XML_MIMETYPE
    assert "<urlset" in response.body


def test_rss(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("rss", repository, config)
    assert response.status == 200
    assert response.mimetype == XML_MIMETYPE
    assert response.body.count("<item>") == 4


def test_category_rss(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("rss/tech", repository, config)
    assert response.status == 200
    assert response.body.count("<item>") == 2
    assert run("rss/unknown", repository, config).status == 404


def test_random(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("random", repository, config)
    assert response.status == 200
    assert "Hello World" in response.body


def test_random_on_empty_repository(posts_dir: Path, config: WeblogConfig) -> None:
    response = run("random", PostRepository(posts_dir), config)
    assert response.status == 404
    assert response.body == NOT_FOUND


@pytest.mark.parametrize(
    ("go", "titles"),
    [
        ("2023", ["Привет мир", "Python Tips"]),
        ("2023/06", ["Привет мир"]),
        ("2023/06/10/", ["Привет мир"]),
        ("2024/01/05", ["* * *"]),
    ],
)
def test_date_archive(go: str, titles: list, repository: PostRepository, config: WeblogConfig) -> None:
    response = run(go, repository, config)
    assert response.status == 200
    for title in ("* * *", "Привет мир", "Python Tips", "Hello World"):
        assert (title in response.body) == (title in titles)
    assert response.body.count("Copyright (c)") == 1


@pytest.mark.parametrize("go", ["2023/13", "2023/02/30"])
def test_bad_date(go: str, repository: PostRepository, config: WeblogConfig) -> None:
    response = run(go, repository, config)
    assert response.status == 404
    assert DATE_PARSE_MESSAGE in response.body


def test_date_without_posts(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("2019", repository, config)
    assert response.status == 404
    assert DATE_PARSE_MESSAGE not in response.body


@pytest.mark.parametrize("go", ["tech", "tech/", "misc"])
def test_category_listing(go: str, repository: PostRepository, config: WeblogConfig) -> None:
    assert run(go, repository, config).status == 200


@pytest.mark.parametrize("go", ["nothing", "Tech", "some/deep/path", "../etc"])
def test_not_found(go: str, repository: PostRepository, config: WeblogConfig) -> None:
    assert run(go, repository, config).status == 404


def test_internal_rewrite(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("old-name/", repository, config)
    assert response.status == 301
    assert response.location == "http://example.org/python-tips/"


def test_external_rewrite(repository: PostRepository, config: WeblogConfig) -> None:
    response = run("away", repository, config)
    assert response.status == 301
    assert response.location == "https://example.com/x"
