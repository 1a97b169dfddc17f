"""Boundary models for the CMS "videolist" JSON envelope.

Upstream payloads are loosely typed: ids arrive as ints or strings,
optional fields as ``null`` or ``""``, and ``pagecount`` sometimes as a
string.  These models coerce what can be coerced and reject the rest, so
nothing past the adapter ever touches a raw dict.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from vodhub.infrastructure.common.converters import to_int


def _to_str(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class RawVodItem(BaseModel):
    """One entry of ``list`` in search or detail responses."""

    model_config = ConfigDict(extra="ignore")

    vod_id: str
    vod_name: str
    vod_pic: str = ""
    vod_remarks: Optional[str] = None
    vod_play_url: Optional[str] = None
    vod_class: Optional[str] = None
    vod_year: str = ""
    vod_content: str = ""
    vod_douban_id: Optional[int] = None
    type_name: Optional[str] = None
    vod_area: Optional[str] = None
    vod_director: Optional[str] = None
    vod_actor: Optional[str] = None

    @field_validator("vod_id", "vod_name", "vod_pic", "vod_year", "vod_content", mode="before")
    @classmethod
    def _coerce_required_str(cls, v: Any) -> Any:
        return _to_str(v)

    @field_validator(
        "vod_remarks",
        "vod_play_url",
        "vod_class",
        "type_name",
        "vod_area",
        "vod_director",
        "vod_actor",
        mode="before",
    )
    @classmethod
    def _coerce_optional_str(cls, v: Any) -> Any:
        return None if v is None else _to_str(v)

    @field_validator("vod_douban_id", mode="before")
    @classmethod
    def _coerce_douban_id(cls, v: Any) -> Optional[int]:
        if isinstance(v, bool):
            return None
        return to_int(v) if isinstance(v, (int, str)) else None

    @field_validator("vod_id")
    @classmethod
    def _require_id(cls, v: str) -> str:
        if not v:
            raise ValueError("vod_id must not be empty")
        return v


class RawEnvelope(BaseModel):
    """``{"list": [...], "pagecount": n}``; items stay raw until mapped."""

    model_config = ConfigDict(extra="ignore")

    items: list[dict[str, Any]]
    pagecount: int = 1

    @field_validator("pagecount", mode="before")
    @classmethod
    def _coerce_pagecount(cls, v: Any) -> int:
        if isinstance(v, bool):
            return 1
        count = to_int(v) if isinstance(v, (int, float, str)) else None
        return count if count and count > 0 else 1

    @field_validator("items", mode="before")
    @classmethod
    def _drop_non_objects(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [item for item in v if isinstance(item, dict)]
        return v


def parse_envelope(data: Any) -> RawEnvelope | None:
    """Validate a decoded JSON body; ``None`` when ``list`` is missing or not an array."""
    if not isinstance(data, dict) or not isinstance(data.get("list"), list):
        return None
    try:
        return RawEnvelope.model_validate(
            {"items": data["list"], "pagecount": data.get("pagecount", 1)}
        )
    except ValidationError:
        return None


def parse_item(raw: dict[str, Any]) -> RawVodItem | None:
    """Validate one raw item; ``None`` when required fields are unusable."""
    try:
        return RawVodItem.model_validate(raw)
    except ValidationError:
        return None
