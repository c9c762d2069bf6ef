from __future__ import annotations

import dataclasses
import logging
import re
from typing import Optional

from .config import WeblogConfig
from .content import DatePathError, parse_date_path
from .feeds import render_category_rss, render_rss, render_sitemap
from .pages import render_home, render_listing, render_not_found, render_post_page
from .repository import PostRepository
from .utils import join_url

logger = logging.getLogger(__name__)

TEXT_MIMETYPE = "text/plain; charset=utf-8"
XML_MIMETYPE = "application/xml; charset=utf-8"
CATEGORY_RE = re.compile(r"^[\w-]+$")
CATEGORY_RSS_RE = re.compile(r"^rss/(?P<category>[\w-]+)/?$")
DATE_ROUTE_RE = re.compile(r"^\d{4}(?:/\d{2}(?:/\d{2})?)?/?$")
DATE_PARSE_MESSAGE = "Failed to parse date. Format should be yyyy/mm/dd."


@dataclasses.dataclass(frozen=True)
class Response:
    status: int
    body: str = ""
    mimetype: str = TEXT_MIMETYPE
    location: Optional[str] = None


def text(body: str) -> Response:
    return Response(200, body)


def xml(body: str) -> Response:
    return Response(200, body, XML_MIMETYPE)


def not_found(message: Optional[str] = None, rng=None) -> Response:
    return Response(404, render_not_found(message, rng))


def rewrite_target(go: str, config: WeblogConfig) -> Optional[str]:
    key = go.rstrip("/")
    target = config.rewrites.get(key)
    if target is None:
        return None
    if target.startswith(("http://", "https://")):
        return target
    return join_url(config.url, target.strip("/")) + "/"


def dispatch(go: str, repository: PostRepository, config: WeblogConfig, rng=None) -> Response:
    """Resolve one request path (the ``go`` parameter) to a response.

    A rewrite entry wins over everything, then a post slug, then the
    fixed routes; whatever is left is tried as a category.
    """
    go = go.strip().lstrip("/")

    location = rewrite_target(go, config)
    if location is not None:
        logger.info("Redirecting %s to %s", go, location)
        return Response(301, location=location)

    post = repository.fetch_by_slug(go)
    if post is not None:
        return text(render_post_page(post, config))

    if not go:
        return text(render_home(repository, config))

    path = go.rstrip("/")
    if path == "sitemap.xml":
        return xml(render_sitemap(repository.fetch_all(), config))

    match = CATEGORY_RSS_RE.match(go)
    if match:
        feed = render_category_rss(repository, match.group("category"), config)
        if feed is None:
            return not_found(rng=rng)
        return xml(feed)

    if path == "rss":
        posts = repository.fetch_all()
        return xml(render_rss(posts, posts, config))

    if path == "random":
        post = repository.fetch_random(rng)
        if post is None:
            return not_found(rng=rng)
        return text(render_post_page(post, config))

    if DATE_ROUTE_RE.match(go):
        try:
            year, month, day = parse_date_path(go)
        except DatePathError:
            return not_found(DATE_PARSE_MESSAGE, rng)
        posts = repository.fetch_by_date(year, month, day)
        if not posts:
            return not_found(rng=rng)
        return text(render_listing(posts, config))

    if CATEGORY_RE.match(path):
        posts = repository.fetch_by_category(path)
        if posts:
            return text(render_listing(posts, config))

    return not_found(rng=rng)
