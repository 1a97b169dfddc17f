"""Tests for upstream envelope validation."""

from __future__ import annotations

import pytest

from vodhub.infrastructure.sources.envelope import parse_envelope, parse_item


class TestParseEnvelope:
    def test_valid(self) -> None:
        env = parse_envelope({"list": [{"vod_id": 1}], "pagecount": 3})
        assert env is not None
        assert env.items == [{"vod_id": 1}]
        assert env.pagecount == 3

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            "oops",
            {},
            {"list": None},
            {"list": "not-a-list"},
            {"list": {"vod_id": 1}},
        ],
    )
    def test_malformed(self, data) -> None:
        assert parse_envelope(data) is None

    def test_empty_list_is_valid(self) -> None:
        env = parse_envelope({"list": []})
        assert env is not None
        assert env.items == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 1),
            ("7", 7),
            (7.0, 7),
            (0, 1),
            (-3, 1),
            ("many", 1),
            (True, 1),
            ([2], 1),
        ],
    )
    def test_pagecount_defaults_to_one(self, raw, expected: int) -> None:
        data = {"list": []}
        if raw is not None:
            data["pagecount"] = raw
        env = parse_envelope(data)
        assert env is not None
        assert env.pagecount == expected

    def test_non_object_items_dropped(self) -> None:
        env = parse_envelope({"list": [{"vod_id": 1}, "junk", 3, None]})
        assert env is not None
        assert env.items == [{"vod_id": 1}]


class TestParseItem:
    def test_coerces_numbers_and_nulls(self) -> None:
        item = parse_item(
            {
                "vod_id": 12345,
                "vod_name": "Title",
                "vod_pic": None,
                "vod_year": 2023,
                "vod_content": None,
                "vod_douban_id": "35267208",
                "type_name": "剧情片",
            }
        )
        assert item is not None
        assert item.vod_id == "12345"
        assert item.vod_pic == ""
        assert item.vod_year == "2023"
        assert item.vod_content == ""
        assert item.vod_douban_id == 35267208
        assert item.type_name == "剧情片"

    @pytest.mark.parametrize("douban", ["", "n/a", None, True, {"id": 1}])
    def test_bad_douban_id_becomes_none(self, douban) -> None:
        item = parse_item({"vod_id": "1", "vod_name": "x", "vod_douban_id": douban})
        assert item is not None
        assert item.vod_douban_id is None

    @pytest.mark.parametrize(
        "raw",
        [
            {"vod_name": "no id"},
            {"vod_id": "", "vod_name": "empty id"},
            {"vod_id": "1"},
            {"vod_id": "1", "vod_name": ["list"]},
        ],
    )
    def test_rejects_unusable_items(self, raw) -> None:
        assert parse_item(raw) is None

    def test_extra_fields_ignored(self) -> None:
        item = parse_item({"vod_id": "1", "vod_name": "x", "vod_time": "2024"})
        assert item is not None
