"""
================================================================================
Inner Text Extraction
================================================================================

Strips child markup out of an element's inner HTML, leaving only the text that
belongs to the element itself.

    >>> parse_inner_text("<p>A<span>B</span>C</p>")
    'AC'

Child elements are removed as whole spans and their content is never parsed,
so text nested inside a child is dropped along with it.

Author: Automation Team
License: MIT
================================================================================
"""

import re
from functools import lru_cache
from typing import List, Optional, Tuple

from .enums import HtmlTagType

_TAG_START_RE = re.compile(r"<([a-z][a-z0-9]*)", re.IGNORECASE)


@lru_cache(maxsize=128)
def _marker_pattern(name: str) -> re.Pattern:
    return re.compile(rf"<(/?){re.escape(name)}\b[^>]*?(/?)>", re.IGNORECASE)


def _find_closing(text: str, name: str, start: int) -> Optional[Tuple[int, int]]:
    """
    Locate the closing marker pairing with an opening `name` tag that ends
    just before `start`, counting nested tags of the same name.

    Returns:
        (start, end) of the closing marker, or None when it is missing
    """
    depth = 1
    for marker in _marker_pattern(name).finditer(text, start):
        if marker.group(1):
            depth -= 1
            if depth == 0:
                return marker.start(), marker.end()
        elif not marker.group(2):
            depth += 1
    return None


def _unwrap(text: str) -> str:
    """Drop the outer markers when the blob is a single wrapped element."""
    stripped = text.strip()
    opening = _TAG_START_RE.match(stripped)
    if not opening:
        return text
    opening_end = stripped.find(">", opening.end())
    if opening_end == -1 or stripped[opening_end - 1] == "/":
        return text
    closing = _find_closing(stripped, opening.group(1), opening_end + 1)
    if closing is None or closing[1] != len(stripped):
        return text
    return stripped[opening_end + 1:closing[0]]


def parse_inner_text(raw: Optional[str]) -> Optional[str]:
    """
    Remove the child elements from an inner HTML blob.

    Every child whose tag name is a known HtmlTagType is cut out from its
    opening tag through its matching closing tag. An opening tag with no
    closing tag is removed on its own and the text after it is kept. Unknown
    tags and unterminated markup are left untouched.

    Args:
        raw: Inner (or outer) HTML of a single element

    Returns:
        The remaining text, or None for empty input
    """
    if not raw:
        return None

    text = _unwrap(raw)
    parts: List[str] = []
    pos = 0
    while pos < len(text):
        lt = text.find("<", pos)
        if lt == -1:
            parts.append(text[pos:])
            break
        parts.append(text[pos:lt])

        start = _TAG_START_RE.match(text, lt)
        if start is None or HtmlTagType.lookup(start.group(1)) is None:
            parts.append("<")
            pos = lt + 1
            continue

        opening_end = text.find(">", start.end())
        if opening_end == -1:
            parts.append(text[lt:])
            break

        pos = opening_end + 1
        if text[opening_end - 1] != "/":
            closing = _find_closing(text, start.group(1), pos)
            if closing is not None:
                pos = closing[1]

    return "".join(parts)


__all__ = ["parse_inner_text"]
