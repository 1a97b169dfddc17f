"""Tests for CSS-selector-based HTML extraction helpers."""

from __future__ import annotations

from vodhub.infrastructure.common.html_selectors import (
    IMAGE_URL_RE,
    extract_text,
    find_image_url,
    parse_html,
)

_PAGE = """\
<html><body>
<div class="header"><img src="/static/logo.png"></div>
<h1 class="title"> 流浪地球2 </h1>
<div class="info">
  <span class="tag">科幻</span>
  <span class="tag">2023</span>
</div>
<div class="sketch content"><p>太阳即将毁灭，</p><p>人类开启“流浪地球”计划。</p></div>
<img src="https://img.test/cover/123.jpg">
</body></html>
"""


class TestParseHtml:
    def test_returns_soup(self) -> None:
        soup = parse_html("<div>hello</div>")
        assert soup.find("div") is not None

    def test_empty_html(self) -> None:
        assert parse_html("") is not None


class TestExtractText:
    def test_heading(self) -> None:
        soup = parse_html(_PAGE)
        assert extract_text(soup, "h1") == "流浪地球2"

    def test_separator_joins_blocks(self) -> None:
        soup = parse_html(_PAGE)
        text = extract_text(soup, "div.sketch", separator=" ")
        assert text == "太阳即将毁灭， 人类开启“流浪地球”计划。"

    def test_fallback_selector(self) -> None:
        soup = parse_html(_PAGE)
        assert extract_text(soup, "span.missing", "div.info span") == "科幻"

    def test_fallback_then_default(self) -> None:
        soup = parse_html(_PAGE)
        assert extract_text(soup, "h2", "h3", default="n/a") == "n/a"


class TestFindImageUrl:
    def test_first_absolute_image_url(self) -> None:
        assert find_image_url(_PAGE) == "https://img.test/cover/123.jpg"

    def test_relative_images_ignored(self) -> None:
        assert find_image_url('<img src="/a.jpg">') == ""

    def test_other_extensions(self) -> None:
        assert IMAGE_URL_RE.search("x https://i.test/p.WEBP y") is not None
