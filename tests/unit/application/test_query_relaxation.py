"""Tests for fallback query derivation."""

from __future__ import annotations

import pytest

from vodhub.application.query_relaxation import (
    relaxed_queries,
    simplify_query,
    strip_digits,
)


class TestSimplifyQuery:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("流浪地球 2.2023", "流浪地球"),
            ("Naruto: Shippuden", "Naruto"),
            ("进击的巨人·最终季", "进击的巨人"),
            ("复仇者联盟4：终局之战", "复仇者联盟4"),
            ("海贼王～和之国", "海贼王"),
            ("名侦探柯南_剧场版", "名侦探柯南"),
            ("灌篮高手，重制", "灌篮高手"),
            ("[字幕组]鬼灭之刃", None),
            ("spider-man", "spider"),
            ("大话西游！", "大话西游"),
            ("abc ", "abc"),
        ],
    )
    def test_cut_at_first_separator(self, query: str, expected: str | None) -> None:
        assert simplify_query(query) == expected

    @pytest.mark.parametrize("query", ["三体", "Inception", "", " leading"])
    def test_nothing_new(self, query: str) -> None:
        assert simplify_query(query) is None


class TestStripDigits:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("复仇者联盟4", "复仇者联盟"),
            ("2046", None),
            ("狂飙", None),
            ("１２猴子", None),
            ("a1b2c3", "abc"),
        ],
    )
    def test_strip(self, query: str, expected: str | None) -> None:
        assert strip_digits(query) == expected


class TestRelaxedQueries:
    def test_separator_then_digits(self) -> None:
        assert relaxed_queries("复仇者联盟4：终局之战") == ["复仇者联盟4", "复仇者联盟"]

    def test_separator_only(self) -> None:
        assert relaxed_queries("流浪地球 2.2023") == ["流浪地球"]

    def test_digit_stage_needs_separator_stage(self) -> None:
        # Digits alone never trigger a fallback.
        assert relaxed_queries("流浪地球2") == []

    def test_digit_stage_skipped_when_empty(self) -> None:
        assert relaxed_queries("007:Skyfall") == ["007"]

    def test_plain_query(self) -> None:
        assert relaxed_queries("三体") == []
