"""Fixed-width text formatting.

All widths count code points. Every function takes the request's
:class:`~weblog.config.WeblogConfig` (or plain numbers) explicitly; nothing
here reads global state.
"""
from __future__ import annotations

import re

from .config import WeblogConfig
from .content import display_title

FIELD_WIDTH = 20
ABOUT_LABEL = "About"
SENTENCE_END_RE = re.compile(r"\.(\s)")


def center_text(text: str, width: int) -> str:
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + text


def format_paragraph(text: str, width: int, prefix_length: int) -> str:
    """Greedy word wrap with every line indented by ``prefix_length`` spaces.

    Words are split on single spaces, so a doubled space after a sentence
    survives as an empty word. A word that does not fit on an empty line is
    left on its own overflowing line rather than broken.
    """
    prefix = " " * prefix_length
    line = prefix
    lines = []
    for word in text.split(" "):
        if len(line + word) > width and line.strip():
            lines.append(line.rstrip())
            line = prefix + word + " "
        else:
            line += word + " "
    lines.append(line.rstrip())
    return "\n".join(lines)


def _title_padding(field_width: int, text_width: int, mobile: bool) -> tuple[int, int]:
    left = int((field_width - text_width) / 2)
    right = field_width - text_width - left
    if mobile and field_width % 2 != 0:
        left += 2
    return max(0, left), max(0, right)


def format_post_header(title: str, category: str, date: str, config: WeblogConfig) -> str:
    title = display_title(title)
    include_category = config.show_category and bool(category)
    include_date = config.show_date and bool(date)
    category_width = FIELD_WIDTH if include_category else 0
    date_width = FIELD_WIDTH if include_date else 0
    title_width = config.line_width - category_width - date_width

    left, right = _title_padding(title_width, len(title), config.mobile)
    header = ""
    if include_category:
        header += category.ljust(category_width)
    header += " " * left + title + " " * right
    if include_date:
        header += date.rjust(date_width)
    return header


def format_about_header(author_name: str, config: WeblogConfig) -> str:
    left_text = "" if config.mobile else ABOUT_LABEL
    width = config.line_width
    space_left = int((width - len(author_name)) / 2)
    space_right = width - space_left - len(author_name)
    if config.mobile and len(author_name) % 2 != 0:
        space_left += 2
    line = (
        left_text
        + " " * max(0, space_left - len(left_text))
        + author_name
        + " " * max(0, space_right)
    )
    return f"\n\n\n{line}\n\n\n"


def _prepare_paragraph(paragraph: str, config: WeblogConfig) -> str:
    paragraph = paragraph.rstrip()
    if not config.mobile:
        # Two spaces after a full stop.
        paragraph = SENTENCE_END_RE.sub(r". \1", paragraph)
    return paragraph


def format_post_content(content: str, config: WeblogConfig) -> str:
    formatted = []
    for paragraph in content.split("\n"):
        paragraph = _prepare_paragraph(paragraph, config)
        formatted.append(format_paragraph(paragraph, config.line_width, config.prefix_length) + "\n")
    return "".join(formatted)


def format_separator(config: WeblogConfig) -> str:
    indent = config.prefix_length if config.mobile else 0
    return "\n\n\n" + " " * indent + "_" * (config.line_width - indent) + "\n\n\n\n\n"


def format_about_text(about_text: str, config: WeblogConfig) -> str:
    text = format_post_content(about_text, config)
    if config.show_separator:
        return text + format_separator(config)
    return text + "\n\n\n\n\n"
