from __future__ import annotations

import dataclasses

import pytest

from weblog.config import WeblogConfig
from weblog.layout import (
    center_text,
    format_about_header,
    format_about_text,
    format_paragraph,
    format_post_content,
    format_post_header,
)

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat."
)


def test_center_text() -> None:
    assert center_text("ABC", 9) == "   ABC"
    assert center_text("ABCD", 9) == "  ABCD"
    assert center_text("too long for it", 4) == "too long for it"


def test_format_paragraph_wraps_greedily() -> None:
    assert format_paragraph("aaa bbb ccc", 10, 3) == "   aaa bbb\n   ccc"


@pytest.mark.parametrize("width", [20, 35, 50, 72])
def test_format_paragraph_respects_width(width: int) -> None:
    lines = format_paragraph(LOREM, width, 3).split("\n")
    assert all(len(line) <= width for line in lines)
    assert all(line.startswith("   ") for line in lines)
    assert " ".join(line.strip() for line in lines) == LOREM


def test_format_paragraph_keeps_long_word_whole() -> None:
    assert format_paragraph("supercalifragilistic", 10, 3) == "   supercalifragilistic"
    assert format_paragraph("a supercalifragilistic b", 10, 3) == "   a\n   supercalifragilistic\n   b"


def test_format_paragraph_keeps_double_spaces() -> None:
    assert format_paragraph("End.  Next", 72, 3) == "   End.  Next"


def test_format_paragraph_empty() -> None:
    assert format_paragraph("", 72, 3) == ""


def test_post_header_desktop() -> None:
    config = WeblogConfig()
    header = format_post_header("Hello", "Tech", "05 January 2023", config)
    assert len(header) == 72
    assert header.startswith("Tech" + " " * 16)
    assert header.endswith(" 05 January 2023")
    assert header[20 + 13 : 20 + 18] == "Hello"


def test_post_header_without_metadata_columns() -> None:
    config = dataclasses.replace(WeblogConfig(), show_category=False, show_date=False)
    header = format_post_header("Hello", "Tech", "05 January 2023", config)
    assert header == " " * 33 + "Hello" + " " * 34


def test_post_header_untitled_sentinel() -> None:
    header = format_post_header("~draft", "Misc", "01 May 2024", WeblogConfig())
    assert "* * *" in header
    assert "draft" not in header


def test_post_header_mobile_odd_width_shifts_left() -> None:
    config = WeblogConfig().for_request(mobile=True)
    assert config.line_width == 35
    header = format_post_header("Hello", "Tech", "05 January 2023", config)
    assert header == " " * 17 + "Hello" + " " * 15


def test_post_header_mobile_even_width() -> None:
    config = dataclasses.replace(WeblogConfig(), line_width=74).for_request(mobile=True)
    assert config.line_width == 36
    header = format_post_header("Hi", "", "", config)
    assert header == " " * 17 + "Hi" + " " * 17


def test_post_content_desktop_adds_sentence_spacing() -> None:
    assert format_post_content("One. Two.\nThree", WeblogConfig()) == "   One.  Two.\n   Three\n"


def test_post_content_mobile_keeps_single_spacing() -> None:
    config = WeblogConfig().for_request(mobile=True)
    assert format_post_content("One. Two.\nThree", config) == "   One. Two.\n   Three\n"


def test_about_header() -> None:
    header = format_about_header("Jane Doe", WeblogConfig())
    assert header == "\n\n\nAbout" + " " * 27 + "Jane Doe" + " " * 32 + "\n\n\n"


def test_about_header_mobile_drops_label() -> None:
    header = format_about_header("Jane Doe", WeblogConfig().for_request(mobile=True))
    assert "About" not in header
    assert header.strip() == "Jane Doe"


def test_about_text_with_separator() -> None:
    config = dataclasses.replace(WeblogConfig(), show_separator=True)
    text = format_about_text("Hi there.", config)
    assert text == "   Hi there.\n" + "\n\n\n" + "_" * 72 + "\n\n\n\n\n"


def test_about_text_mobile_separator_is_indented() -> None:
    config = dataclasses.replace(WeblogConfig(), show_separator=True).for_request(mobile=True)
    text = format_about_text("Hi.", config)
    assert text.endswith("\n\n\n   " + "_" * 32 + "\n\n\n\n\n")


def test_about_text_without_separator() -> None:
    assert format_about_text("Hi.", WeblogConfig()) == "   Hi.\n\n\n\n\n\n"
