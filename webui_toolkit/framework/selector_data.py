"""
================================================================================
Selector Data
================================================================================

Declarative descriptors for "find an element by tag + attribute rule".

    - SelectorData: one immutable descriptor
    - SelectorDataSet: a named, ordered collection sharing one tag type

Usage:
    >>> login = SelectorData("login", HtmlTagType.BUTTON, HtmlAttributeType.ID, "btn-login")
    >>> inputs = SelectorDataSet(HtmlTagType.INPUT, [
    ...     SelectorData.untagged("username", HtmlAttributeType.NAME, "username"),
    ...     SelectorData.untagged("password", HtmlAttributeType.TYPE, "password"),
    ... ])

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Union

from loguru import logger

from .enums import HtmlAttributeType, HtmlTagType, tag_name
from .exceptions import InvalidSelectorError, SelectorDataSetError


@dataclass(frozen=True)
class SelectorData:
    """
    Immutable description of one element lookup.

    Attributes:
        name: Diagnostic label, also the key inside a SelectorDataSet
        tag_type: Tag name (HtmlTagType member or raw string)
        attribute_type: How `attribute_value` is compared
        attribute_value: Value to match, only optional with HtmlAttributeType.NONE
    """
    name: str
    tag_type: Optional[Union[HtmlTagType, str]]
    attribute_type: HtmlAttributeType = HtmlAttributeType.NONE
    attribute_value: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag_type", tag_name(self.tag_type))
        if not isinstance(self.attribute_type, HtmlAttributeType):
            object.__setattr__(self, "attribute_type", HtmlAttributeType(self.attribute_type))

        if self.attribute_type is not HtmlAttributeType.NONE and not self.attribute_value:
            raise InvalidSelectorError(
                f"SelectorData '{self.name}' uses {self.attribute_type.value} "
                f"but has no attribute value"
            )

    @classmethod
    def untagged(
        cls,
        name: str,
        attribute_type: HtmlAttributeType,
        attribute_value: Optional[str] = None,
    ) -> "SelectorData":
        """Create an item whose tag type is assigned by a SelectorDataSet."""
        return cls(name, None, attribute_type, attribute_value)

    def with_tag(self, tag: Union[HtmlTagType, str]) -> "SelectorData":
        return replace(self, tag_type=tag_name(tag))

    def without_attribute(self) -> "SelectorData":
        """Same tag, no attribute rule. Used to list every candidate element."""
        return replace(self, attribute_type=HtmlAttributeType.NONE, attribute_value=None)


class SelectorDataSet:
    """
    Named, ordered collection of SelectorData sharing one tag type.

    Names are compared case-insensitively. Adding a name that already
    exists is rejected rather than overwritten.
    """

    def __init__(
        self,
        tag: Union[HtmlTagType, str],
        items: Optional[Iterable[SelectorData]] = None,
    ):
        """
        Args:
            tag: Tag type for all the items in this collection
            items: Items to add; their tag type is overridden with `tag`
        """
        self.tag_type = tag_name(tag)
        self._items: List[SelectorData] = []
        for item in items or []:
            self.add(item)

    @property
    def items(self) -> List[SelectorData]:
        return list(self._items)

    @property
    def names(self) -> List[str]:
        return [item.name for item in self._items]

    def get(self, name: str) -> Optional[SelectorData]:
        """
        Return the item matching `name` (not case sensitive), or None.
        """
        wanted = name.lower()
        for item in self._items:
            if item.name.lower() == wanted:
                return item
        return None

    def add(self, item: SelectorData) -> SelectorData:
        """
        Add an item, re-tagged with this set's tag type.

        Raises:
            SelectorDataSetError: When an item with the same name exists
        """
        if self.get(item.name) is not None:
            raise SelectorDataSetError(
                f"The collection already contains a SelectorData object with the name {item.name}"
            )
        tagged = item.with_tag(self.tag_type)
        self._items.append(tagged)
        logger.debug(f"Added '{item.name}' to <{self.tag_type}> selector set")
        return tagged

    def remove(self, name: str) -> None:
        """
        Remove the item matching `name` (not case sensitive).

        Raises:
            SelectorDataSetError: When no item has that name
        """
        item = self.get(name)
        if item is None:
            raise SelectorDataSetError(f"An item with the name {name} was not found")
        self._items.remove(item)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[SelectorData]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"SelectorDataSet(tag_type={self.tag_type!r}, names={self.names!r})"


__all__ = [
    "SelectorData",
    "SelectorDataSet",
]
