"""
================================================================================
HtmlTree
================================================================================

Lightweight tokenizing HTML parser producing a flat, document-ordered list of
tags plus a nested tree of the same tags.

The parser consumes the markup left to right, matching in priority order:
    1. comments / doctype / CDATA     -> <COMMENT> (single)
    2. <script>...</script> blocks     -> <SCRIPT> (single, opaque body)
    3. opening tags                    -> open, or single when written `<x/>`
    4. closing tags                    -> closes the most recent matching open tag
    5. text up to the next `<`         -> <TEXT> (single)
Anything else is discarded so the scan always makes progress.

This is not a validating HTML parser: overlapping or unbalanced markup
produces a best-effort tree instead of an error.

Usage:
    >>> tree = HtmlTree('<div id="x">hello</div>')
    >>> tree.first_tag(SelectorData("x", HtmlTagType.DIV, HtmlAttributeType.ID, "x"))
    Line number 1: <DIV> - attribute count 1, inner tag count 1

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from loguru import logger

from ..common import get_config
from .exceptions import ConfigurationError, StructuralLimitExceededError
from .matching import html_matches, pattern_matches
from .selector_data import SelectorData

DEFAULT_MAX_TAGS = 10_000_000

TEXT_TAG = "<TEXT>"
COMMENT_TAG = "<COMMENT>"
SCRIPT_TAG = "<SCRIPT>"

_FLAGS = re.IGNORECASE | re.DOTALL

_COMMENT_RE = re.compile(r"\s*(<!--.*?-->|<![^<>]+>|<!\[[^\s/<>]+\[.*?\]\]>)\s*", _FLAGS)
_SCRIPT_RE = re.compile(r"\s*(<script(?P<attrs>\s+[^>]*)?>(?P<body>.*?)</script>)\s*", _FLAGS)
_OPEN_TAG_RE = re.compile(r"\s*<(?P<name>[^\s/<>]+)(?P<attrs>\s+[^>]*?)?\s*(?P<close>/\s*)?>\s*", _FLAGS)
_CLOSE_TAG_RE = re.compile(r"\s*</(?P<name>[^\s/<>]+)( /)?>\s*", _FLAGS)
_TEXT_RE = re.compile(r"\s*([^<]+)(?=<)", _FLAGS)
_SKIP_RE = re.compile(r"<+(?=<)|(?:(?!<).)+|<.*?(?=<)", _FLAGS)
_BLANK_RE = re.compile(r"\s*\Z")

# name="value" | name='value' | name=value | name
_ATTRIBUTE_RE = re.compile(
    r"""\s+(?P<n1>[^\s/>"'=]+)\s*=\s*"(?P<v1>[^"]*)\""""
    r"""|\s+(?P<n2>[^\s/>"'=]+)\s*=\s*'(?P<v2>[^']*)'"""
    r"""|\s+(?P<n3>[^\s/>"'=]+)\s*=\s*(?P<v3>[^\s>]*)"""
    r"""|\s+(?P<n4>[^\s/>"'=]+)""",
    _FLAGS,
)


class TagStatus(str, Enum):
    """Encapsulation status tracked while parsing."""
    OPEN = "OPEN"
    SINGLE = "SINGLE"
    CLOSED = "CLOSED"


def parse_attributes(markup: Optional[str]) -> Dict[str, str]:
    """
    Extract the attributes of an opening tag.

    A bare attribute (``<input disabled>``) gets an empty string value and a
    repeated attribute keeps its last value.
    """
    attributes: Dict[str, str] = {}
    if not markup:
        return attributes
    for match in _ATTRIBUTE_RE.finditer(markup):
        for index in range(1, 5):
            name = match.group(f"n{index}")
            if name is not None:
                value = match.group(f"v{index}") if index < 4 else ""
                attributes[name.strip()] = (value or "").strip()
                break
    return attributes


class HtmlTag:
    """
    A tag found in parsed HTML.

    Attributes:
        tag: Upper-cased, bracket-wrapped name, e.g. ``<DIV>`` or ``<TEXT>``
        status: OPEN, SINGLE or CLOSED
        raw_html: The markup this tag was generated from (trimmed)
        line_number: Line in the source where the tag starts
        attributes: Attributes declared on the tag, in source order
        parent: Enclosing tag, None for a top-level tag
        previous / next: Neighbouring tags in document order
        children: Tags nested between this tag's opening and closing markers
    """

    def __init__(
        self,
        tag: str,
        status: TagStatus,
        raw_html: str,
        line_number: int,
        previous: Optional["HtmlTag"] = None,
    ):
        self.tag = tag.strip().upper()
        self.status = TagStatus(status)
        self.raw_html = raw_html.strip()
        self.line_number = line_number
        self.attributes: Dict[str, str] = {}
        self.parent: Optional[HtmlTag] = None
        self.previous = previous
        self.next: Optional[HtmlTag] = None
        self.children: List[HtmlTag] = []

    @property
    def name(self) -> str:
        """Lower-cased tag name without brackets, e.g. ``div``."""
        return self.tag[1:-1].lower()

    def first_tag(self, selector_data: SelectorData) -> Optional["HtmlTag"]:
        """
        Depth-first search of the children for the first tag matching
        `selector_data`. All comparisons are case-insensitive regular
        expressions.
        """
        for child in self.children:
            if pattern_matches(child, selector_data):
                return child
            found = child.first_tag(selector_data)
            if found is not None:
                return found
        return None

    def first_html(self, pattern: str) -> Optional["HtmlTag"]:
        """Depth-first search of the children for raw markup matching `pattern`."""
        for child in self.children:
            if html_matches(child, pattern):
                return child
            found = child.first_html(pattern)
            if found is not None:
                return found
        return None

    def search(self, selector_data: SelectorData) -> List["HtmlTag"]:
        """All descendants matching `selector_data`, depth-first."""
        found: List[HtmlTag] = []
        for child in self.children:
            if pattern_matches(child, selector_data):
                found.append(child)
            found.extend(child.search(selector_data))
        return found

    def search_html(self, pattern: str) -> List["HtmlTag"]:
        """All descendants whose raw markup matches `pattern`, depth-first."""
        found: List[HtmlTag] = []
        for child in self.children:
            if html_matches(child, pattern):
                found.append(child)
            found.extend(child.search_html(pattern))
        return found

    def next_tag(self, selector_data: SelectorData) -> Optional["HtmlTag"]:
        """The next tag in document order matching `selector_data`, nested or not."""
        current = self.next
        while current is not None:
            if pattern_matches(current, selector_data):
                return current
            current = current.next
        return None

    def next_html(self, pattern: str) -> Optional["HtmlTag"]:
        """The next tag in document order whose raw HTML matches `pattern`."""
        current = self.next
        while current is not None:
            if html_matches(current, pattern):
                return current
            current = current.next
        return None

    def previous_tag(self, selector_data: SelectorData) -> Optional["HtmlTag"]:
        """The closest preceding tag in document order matching `selector_data`."""
        current = self.previous
        while current is not None:
            if pattern_matches(current, selector_data):
                return current
            current = current.previous
        return None

    def previous_html(self, pattern: str) -> Optional["HtmlTag"]:
        """The closest preceding tag in document order whose raw HTML matches `pattern`."""
        current = self.previous
        while current is not None:
            if html_matches(current, pattern):
                return current
            current = current.previous
        return None

    def iter_descendants(self) -> Iterator["HtmlTag"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def to_text(self) -> str:
        """
        Text of this tag and its children. ``<BR>`` becomes a newline and a
        non-empty ``<P>`` is followed by a blank line.
        """
        parts: List[str] = []
        if self.tag == TEXT_TAG:
            parts.append(self.raw_html)
        elif self.tag == "<BR>" and not self.children:
            parts.append("\n")
        parts.extend(child.to_text() for child in self.children)
        if self.tag == "<P>" and self.children:
            parts.append("\n\n")
        elif self.tag == "<BR>" and self.children:
            parts.append("\n")
        return "".join(parts)

    def __str__(self) -> str:
        return (
            f"Line number {self.line_number}: {self.tag} - attribute count "
            f"{len(self.attributes)}, inner tag count {len(self.children)}"
        )

    def __repr__(self) -> str:
        return f"HtmlTag({self.tag!r}, status={self.status.value}, line={self.line_number})"


class HtmlTree:
    """
    Parses HTML into HtmlTag objects and provides search helpers over them.

    Attributes:
        all_tags: Every tag found, in document order
        top_level_tags: Tags not nested inside any other tag
    """

    def __init__(self, raw_html: str = "", max_tags: Optional[int] = None):
        """
        Args:
            raw_html: Markup to parse
            max_tags: Safety limit on the number of tags, defaults to the
                ``html_tree.max_tags`` configuration value
        """
        if max_tags is None:
            max_tags = get_config("html_tree.max_tags", DEFAULT_MAX_TAGS)
        try:
            self.max_tags = int(max_tags)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"html_tree.max_tags must be an integer, got {max_tags!r}") from e
        if self.max_tags < 1:
            raise ConfigurationError(f"html_tree.max_tags must be positive, got {self.max_tags}")
        self.all_tags: List[HtmlTag] = []
        self.top_level_tags: List[HtmlTag] = []
        self.parse(raw_html)

    def parse(self, raw_html: str) -> Tuple[List[HtmlTag], List[HtmlTag]]:
        """
        Parse `raw_html`, replacing any previous result.

        Returns:
            (all_tags, top_level_tags)

        Raises:
            StructuralLimitExceededError: When more than `max_tags` tags are produced
        """
        self.all_tags = []
        self.top_level_tags = []
        self._last_tag: Optional[HtmlTag] = None
        self._line_number = 1

        raw_html = raw_html or ""
        pos = 0
        while not _BLANK_RE.match(raw_html, pos):
            match = self._consume(raw_html, pos)
            if match is not None and match.end() > pos:
                consumed = match.group(0)
                new_pos = match.end()
            else:
                # Unrecognized input, drop a single character and move on
                consumed = raw_html[pos]
                new_pos = pos + 1
            self._line_number += consumed.count("\n")
            pos = new_pos

            if len(self.all_tags) > self.max_tags:
                message = (
                    f"Number of tags in document has exceeded {self.max_tags:,} entries, "
                    f"the markup is most likely corrupt"
                )
                logger.error(message)
                raise StructuralLimitExceededError(message)

        logger.debug(
            f"Parsed {len(self.all_tags)} tags ({len(self.top_level_tags)} top-level) "
            f"over {self._line_number} lines"
        )
        return self.all_tags, self.top_level_tags

    def _consume(self, raw_html: str, pos: int) -> Optional[re.Match]:
        match = _COMMENT_RE.match(raw_html, pos)
        if match:
            self._add_tag(COMMENT_TAG, TagStatus.SINGLE, match.group(0))
            return match

        match = _SCRIPT_RE.match(raw_html, pos)
        if match:
            tag = self._add_tag(SCRIPT_TAG, TagStatus.SINGLE, match.group(0))
            tag.attributes.update(parse_attributes(match.group("attrs")))
            return match

        match = _OPEN_TAG_RE.match(raw_html, pos)
        if match:
            self_closing = (match.group("close") or "").strip() == "/"
            tag = self._add_tag(
                f"<{match.group('name')}>",
                TagStatus.SINGLE if self_closing else TagStatus.OPEN,
                match.group(0),
            )
            tag.attributes.update(parse_attributes(match.group("attrs")))
            return match

        match = _CLOSE_TAG_RE.match(raw_html, pos)
        if match:
            self._close_tag(f"<{match.group('name').upper()}>")
            return match

        match = _TEXT_RE.match(raw_html, pos)
        if match:
            self._add_tag(TEXT_TAG, TagStatus.SINGLE, match.group(0))
            return match

        return _SKIP_RE.match(raw_html, pos)

    def _add_tag(self, name: str, status: TagStatus, raw_html: str) -> HtmlTag:
        tag = HtmlTag(name, status, raw_html, self._line_number, self._last_tag)
        self.top_level_tags.append(tag)
        if self._last_tag is not None:
            self._last_tag.next = tag
        self._last_tag = tag
        self.all_tags.append(tag)
        return tag

    def _close_tag(self, name: str) -> None:
        """
        Find the most recent open tag with this name and no children, then
        move every following tag sharing its parent inside it.
        """
        opening = self._last_tag
        while opening is not None and (
            opening.tag != name or opening.status is not TagStatus.OPEN or opening.children
        ):
            opening = opening.previous

        if opening is None:
            logger.debug(f"Ignoring closing tag {name} without a matching opening tag")
            return

        current = opening.next
        while current is not None:
            if current.parent is opening.parent:
                siblings = opening.parent.children if opening.parent else self.top_level_tags
                siblings.remove(current)
                current.parent = opening
                opening.children.append(current)
            current = current.next
        opening.status = TagStatus.CLOSED

    # ------------------------------------------------------------------
    # Search API (case-insensitive regular expressions)
    # ------------------------------------------------------------------

    def first_tag(self, selector_data: SelectorData) -> Optional[HtmlTag]:
        """
        Return the first tag, in document order, matching `selector_data`.

        The tag type, attribute name and attribute value are all treated as
        case-insensitive regular expressions.
        """
        for tag in self.all_tags:
            if pattern_matches(tag, selector_data):
                return tag
        return None

    def first_html(self, pattern: str) -> Optional[HtmlTag]:
        """Return the first tag whose raw markup matches `pattern`."""
        for tag in self.all_tags:
            if html_matches(tag, pattern):
                return tag
        return None

    def search(self, selector_data: SelectorData) -> List[HtmlTag]:
        """Return every tag, in document order, matching `selector_data`."""
        return [tag for tag in self.all_tags if pattern_matches(tag, selector_data)]

    def search_html(self, pattern: str) -> List[HtmlTag]:
        """Return every tag whose raw markup matches `pattern`."""
        return [tag for tag in self.all_tags if html_matches(tag, pattern)]

    def __iter__(self) -> Iterator[HtmlTag]:
        return iter(self.all_tags)

    def __len__(self) -> int:
        return len(self.all_tags)


__all__ = [
    "HtmlTag",
    "HtmlTree",
    "TagStatus",
    "parse_attributes",
    "DEFAULT_MAX_TAGS",
    "TEXT_TAG",
    "COMMENT_TAG",
    "SCRIPT_TAG",
]
