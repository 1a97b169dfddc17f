"""Type conversion utilities."""

from __future__ import annotations


def to_int(raw: str | int | float | None) -> int | None:
    """Convert an upstream numeric field to int, or None if unusable.

    Handles:
        - None → None
        - int → int (passthrough)
        - 3.0 → 3
        - "123" / " 123 " → 123
        - "1,234" → 1234
        - "" / "n/a" → None
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None

    if isinstance(raw, str):
        txt = raw.strip().replace(",", "").replace(" ", "")
        if not txt.isdigit():
            return None
        return int(txt)

    return None
