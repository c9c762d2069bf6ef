from __future__ import annotations

import datetime as dt
import html
from typing import Optional

from . import __version__
from .config import WeblogConfig
from .content import PostCollection
from .repository import PostRepository, category_filter
from .utils import iso_day, join_url, rfc822_date

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
ATOM_NS = "http://www.w3.org/2005/Atom"
ABOUT_BREAK = "\n\n\n"


def _sitemap_url(loc: str, lastmod: str, changefreq: str) -> str:
    return "\n".join(
        [
            "  <url>",
            f"    <loc>{html.escape(loc)}</loc>",
            f"    <lastmod>{lastmod}</lastmod>",
            "    <priority>1.0</priority>",
            f"    <changefreq>{changefreq}</changefreq>",
            "  </url>",
        ]
    )


def render_sitemap(posts: PostCollection, config: WeblogConfig, today: Optional[dt.date] = None) -> str:
    newest = posts.newest_date()
    if newest is not None:
        home_lastmod = iso_day(newest)
    else:
        home_lastmod = (today or dt.date.today()).isoformat()
    urls = [_sitemap_url(config.url + "/", home_lastmod, "daily")]
    for post in posts:
        loc = join_url(config.url, post.slug) + "/"
        urls.append(_sitemap_url(loc, iso_day(post.date), "weekly"))
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NS}">',
            "\n".join(urls),
            "</urlset>",
            "",
        ]
    )


def channel_description(about_text: str) -> str:
    if ABOUT_BREAK not in about_text:
        return ""
    return about_text.split(ABOUT_BREAK, 1)[0]


def item_description(content: str) -> str:
    paragraphs = [paragraph for paragraph in content.strip().split("\n") if paragraph]
    return "".join(f"&lt;p&gt;{html.escape(paragraph)}&lt;/p&gt;" for paragraph in paragraphs)


def render_rss(
    posts: PostCollection,
    all_posts: PostCollection,
    config: WeblogConfig,
    category: Optional[str] = None,
    last_build: Optional[dt.datetime] = None,
    now: Optional[dt.datetime] = None,
) -> str:
    """Render an RSS 2.0 document for ``posts``.

    ``all_posts`` is the full newest-first collection; an item's guid is its
    distance from the end of that collection, so the oldest post is ``1`` in
    every feed, filtered or not.
    """
    if last_build is None:
        last_build = posts.newest_date() or now or dt.datetime.now()
    base_url = html.escape(config.url)
    title = html.escape(config.author_name)
    self_link = f"{base_url}/rss/"
    if category:
        title += " - " + html.escape(category[:1].upper() + category[1:])
        self_link = f"{base_url}/rss/{html.escape(category)}/"

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<rss version="2.0" xmlns:atom="{ATOM_NS}">',
        "<channel>",
        f"<title>{title}</title>",
        f"<link>{base_url}/</link>",
        f'<atom:link href="{self_link}" rel="self" type="application/rss+xml" />',
        f"<description>{html.escape(channel_description(config.about_text))}</description>",
        "<language>en</language>",
        f"<generator>Weblog v{__version__}</generator>",
        f"<lastBuildDate>{rfc822_date(last_build)}</lastBuildDate>",
    ]

    total = len(all_posts)
    for post in posts:
        guid = total - all_posts.index_of(post)
        lines.extend(
            [
                "<item>",
                f"<title>{html.escape(post.display_title)}</title>",
                f'<guid isPermaLink="false">{guid}</guid>',
                f"<link>{base_url}/{html.escape(post.slug)}/</link>",
                f"<pubDate>{rfc822_date(post.date)}</pubDate>",
                f"<category>{html.escape(post.category)}</category>",
                f"<description>{item_description(post.content)}</description>",
                "</item>",
            ]
        )

    lines.extend(["</channel>", "</rss>", ""])
    return "\n".join(lines)


def render_category_rss(repository: PostRepository, category: str, config: WeblogConfig) -> Optional[str]:
    all_posts = repository.fetch_all()
    posts = all_posts.filter(category_filter(category, ignore_case=True))
    if not posts:
        return None
    return render_rss(
        posts,
        all_posts,
        config,
        category=category,
        last_build=posts.newest_date(),
    )
