from __future__ import annotations

import random
from typing import Optional

from . import __version__
from .config import SHOW_URLS_FULL, WeblogConfig
from .content import Post, PostCollection, format_year_range
from .layout import (
    center_text,
    format_about_header,
    format_about_text,
    format_post_content,
    format_post_header,
)
from .repository import PostRepository
from .utils import join_url

POST_SEPARATOR = "\n\n\n\n"
PAGE_LEAD = "\n\n\n"
HEADER_DATE_FMT = "%d %B %Y"
NOT_FOUND = "404 Not Found\n"
CAT_FOUND = "404 Cat Found\n\n  ／l、meow\n（ﾟ､ ｡ ７\n  l  ~ヽ\n  じしf_,)ノ\n"


def post_url(post: Post, config: WeblogConfig) -> str:
    if config.show_urls == SHOW_URLS_FULL:
        return join_url(config.url, post.slug) + "/"
    return "/" + post.slug


def render_post(post: Post, config: WeblogConfig, show_url: bool = False) -> str:
    date = post.date.strftime(HEADER_DATE_FMT)
    parts = [
        format_post_header(post.title, post.category, date, config),
        "\n\n\n",
        format_post_content(post.content, config),
    ]
    if show_url and config.show_urls:
        parts.append("\n" + " " * config.prefix_length + post_url(post, config) + "\n\n")
    return "".join(parts)


def footer_spacer(config: WeblogConfig) -> str:
    return "\n\n\n\n" if config.show_powered_by else "\n\n\n"


def render_footer(config: WeblogConfig, years: str) -> str:
    lines = []
    if config.show_copyright:
        lines.append(center_text(f"Copyright (c) {years} {config.author}", config.line_width))
    if config.show_powered_by:
        lines.append(center_text(f"Powered by Weblog v{__version__}", config.line_width))
    return "".join(line + "\n\n" for line in lines)


def render_posts(posts: PostCollection, config: WeblogConfig) -> str:
    return POST_SEPARATOR.join(render_post(post, config, show_url=True) for post in posts)


def render_home(repository: PostRepository, config: WeblogConfig) -> str:
    posts = repository.fetch_all()
    return "".join(
        [
            format_about_header(config.author_name, config),
            format_about_text(config.about_text, config),
            render_posts(posts, config),
            footer_spacer(config),
            render_footer(config, format_year_range(posts.year_range())),
        ]
    )


def render_post_page(post: Post, config: WeblogConfig, show_url: bool = False) -> str:
    return "".join(
        [
            PAGE_LEAD,
            render_post(post, config, show_url=show_url),
            footer_spacer(config),
            render_footer(config, str(post.date.year)),
        ]
    )


def render_listing(posts: PostCollection, config: WeblogConfig) -> str:
    """Category and date archives: every post with its permalink."""
    return "".join(
        [
            PAGE_LEAD,
            render_posts(posts, config),
            footer_spacer(config),
            render_footer(config, format_year_range(posts.year_range())),
        ]
    )


def render_not_found(message: Optional[str] = None, rng=None) -> str:
    if message:
        return f"404 Not Found\n\n{message}\n"
    if (rng or random).randint(1, 10) == 1:
        return CAT_FOUND
    return NOT_FOUND
