"""
================================================================================
Tag Matching Predicates
================================================================================

Two flavours of "does this parsed tag satisfy this SelectorData":

    - literal_matches: plain string comparison (used by StructureValidator.matches)
    - pattern_matches: case-insensitive regular expressions (used by the
      HtmlTree / HtmlTag search API)

The pattern flavour treats tag names and attribute values as regular
expressions, so a value such as ``a.b`` also matches ``axb``. Escape values
with ``re.escape`` when a literal lookup through the search API is wanted.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from .enums import HtmlAttributeType
from .exceptions import InvalidSelectorError
from .selector_data import SelectorData

if TYPE_CHECKING:
    from .html_tree import HtmlTag


def normalize_text(text: str) -> str:
    """Collapse whitespace runs and trim, like a browser's rendered innerText."""
    return " ".join(text.split())


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a case-insensitive search pattern.

    Raises:
        InvalidSelectorError: When the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern, re.IGNORECASE | re.DOTALL)
    except re.error as e:
        raise InvalidSelectorError(f"Invalid search pattern {pattern!r}: {e}") from e


def _find_attribute(tag: "HtmlTag", attribute_name: str) -> Optional[str]:
    for key, value in tag.attributes.items():
        if key.lower() == attribute_name:
            return value
    return None


# ============================================================
# Literal comparison
# ============================================================

def _literal_inner_text(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    text = normalize_text(tag.to_text())
    if selector_data.attribute_type.is_exact_match:
        return text == selector_data.attribute_value
    return selector_data.attribute_value in text


def _literal_attribute_text(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    expected = selector_data.attribute_value.lower()
    for value in tag.attributes.values():
        value = value.lower()
        if selector_data.attribute_type.is_exact_match:
            if value == expected:
                return True
        elif expected in value:
            return True
    return False


def _literal_named_attribute(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    value = _find_attribute(tag, selector_data.attribute_type.attribute_name)
    return value is not None and value == selector_data.attribute_value


def literal_matches(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    """
    Literal predicate over a parsed tag.

    - Tag names are compared case-insensitively
    - INNER_TEXT_* compares against the tag's rendered text
    - ATTRIBUTE_TEXT_* scans every attribute value, case-insensitively
    - Any other kind requires that attribute to exist with an equal value
    """
    if selector_data.tag_type and tag.name != selector_data.tag_type.lower():
        return False

    attribute_type = selector_data.attribute_type
    if attribute_type is HtmlAttributeType.NONE:
        return True
    if attribute_type.is_inner_text:
        return _literal_inner_text(tag, selector_data)
    if attribute_type.is_attribute_text:
        return _literal_attribute_text(tag, selector_data)
    return _literal_named_attribute(tag, selector_data)


# ============================================================
# Regular expression comparison
# ============================================================

def _search(pattern: str, candidate: str, exact: bool) -> bool:
    compiled = compile_pattern(pattern)
    if exact:
        return compiled.fullmatch(candidate) is not None
    return compiled.search(candidate) is not None


def _pattern_inner_text(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    return _search(
        selector_data.attribute_value,
        normalize_text(tag.to_text()),
        selector_data.attribute_type.is_exact_match,
    )


def _pattern_attribute_text(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    exact = selector_data.attribute_type.is_exact_match
    return any(
        _search(selector_data.attribute_value, value, exact)
        for value in tag.attributes.values()
    )


def _pattern_named_attribute(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    attribute_name = selector_data.attribute_type.attribute_name
    return any(
        _search(attribute_name, key, False) and _search(selector_data.attribute_value, value, False)
        for key, value in tag.attributes.items()
    )


def pattern_matches(tag: "HtmlTag", selector_data: SelectorData) -> bool:
    """
    Regular expression predicate used by the search API.

    The tag pattern is ``<tag_type>`` searched in the bracketed tag name, and
    attribute names/values are searched as case-insensitive patterns.
    """
    if selector_data.tag_type and not _search(f"<{selector_data.tag_type}>", tag.tag, False):
        return False

    attribute_type = selector_data.attribute_type
    if attribute_type is HtmlAttributeType.NONE:
        return True
    if attribute_type.is_inner_text:
        return _pattern_inner_text(tag, selector_data)
    if attribute_type.is_attribute_text:
        return _pattern_attribute_text(tag, selector_data)
    return _pattern_named_attribute(tag, selector_data)


def html_matches(tag: "HtmlTag", pattern: str) -> bool:
    """Case-insensitive pattern search over the tag's raw markup."""
    return _search(pattern, tag.raw_html, False)


__all__ = [
    "normalize_text",
    "compile_pattern",
    "literal_matches",
    "pattern_matches",
    "html_matches",
]
