"""Query simplification for the staged search fallback.

Titles typed by users often carry subtitles, episode markers or years
("流浪地球 2.2023", "Naruto: Shippuden").  When an exact search finds
nothing, the query is cut at the first separator, then stripped of
digits.
"""

from __future__ import annotations

import re

# whitespace . · : ： ～ ~ — _ @ ， , [ ] ! ！ -
SEPARATOR_RE = re.compile(r"[\s.·:：～~—_@，,\[\]!！-]")
DIGIT_RE = re.compile(r"[0-9]")


def simplify_query(query: str) -> str | None:
    """Text before the first separator, or None if that gives nothing new."""
    if not SEPARATOR_RE.search(query):
        return None
    head = SEPARATOR_RE.split(query, maxsplit=1)[0]
    if not head or head == query:
        return None
    return head


def strip_digits(query: str) -> str | None:
    """*query* without ASCII digits, or None if it has none or becomes empty."""
    if not DIGIT_RE.search(query):
        return None
    return DIGIT_RE.sub("", query) or None


def relaxed_queries(query: str) -> list[str]:
    """The fallback queries tried after *query*, in order.

    >>> relaxed_queries("流浪地球 2.2023")
    ['流浪地球']
    >>> relaxed_queries("Top Gun 2")
    ['Top']
    >>> relaxed_queries("007:Skyfall")
    ['007']
    """
    simplified = simplify_query(query)
    if simplified is None:
        return []
    stages = [simplified]
    digitless = strip_digits(simplified)
    if digitless is not None:
        stages.append(digitless)
    return stages
