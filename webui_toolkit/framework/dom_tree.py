"""
================================================================================
DomTree
================================================================================

Cursor for walking the live document relative to a chosen root element.

Nodes never hold on to element handles. A DomNode is a DomLocator (root query,
root index, child index path) and every operation resolves it against the
document again, so the cursor keeps working when the page re-renders between
moves.

Usage:
    >>> tree = DomTree(StructureValidator(PlaywrightDocument(page)))
    >>> tree.build(SelectorData("menu", HtmlTagType.UL, HtmlAttributeType.ID, "menu"))
    >>> first = tree.move_to_first_child()
    >>> if first is not None:
    ...     logger.info(first.get_text())

Every move returns the new current node, or None without moving when the
target does not exist. The root has no parent and no siblings.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import allure
from loguru import logger

from .document import LiveDocumentProvider
from .exceptions import ElementNotFoundError
from .selector_data import SelectorData
from .structure_validator import StructureValidator


@dataclass(frozen=True)
class DomLocator:
    """
    Recipe for finding an element again.

    Attributes:
        root_query: CSS query that finds the root element
        root_index: Position of the root among the query results
        path: Child indexes walked from the root, empty for the root itself
    """
    root_query: str
    root_index: int = 0
    path: Tuple[int, ...] = ()

    @property
    def is_root(self) -> bool:
        return not self.path

    @property
    def parent(self) -> Optional["DomLocator"]:
        if self.is_root:
            return None
        return DomLocator(self.root_query, self.root_index, self.path[:-1])

    def child(self, index: int) -> "DomLocator":
        return DomLocator(self.root_query, self.root_index, self.path + (index,))

    def resolve(self, document: LiveDocumentProvider) -> Optional[Any]:
        """Find the element in the current document, or None."""
        elements = document.find_elements_matching(self.root_query)
        if self.root_index >= len(elements):
            return None
        element = elements[self.root_index]
        for index in self.path:
            children = document.get_children(element)
            if index >= len(children):
                return None
            element = children[index]
        return element

    def __str__(self) -> str:
        steps = "".join(f" > :nth-child({index + 1})" for index in self.path)
        return f"{self.root_query}[{self.root_index}]{steps}"


class DomNode:
    """
    A position in the live document.

    Element accessors raise ElementNotFoundError when the element is no
    longer on the page. Two nodes are equal when they share a locator.
    """

    def __init__(self, document: LiveDocumentProvider, locator: DomLocator):
        self.document = document
        self.locator = locator

    def find(self) -> Optional[Any]:
        return self.locator.resolve(self.document)

    def resolve(self) -> Any:
        element = self.find()
        if element is None:
            message = f"Element at {self.locator} is no longer in the document"
            logger.error(message)
            raise ElementNotFoundError(message)
        return element

    def exists(self) -> bool:
        return self.find() is not None

    def has_children(self) -> bool:
        return bool(self.document.get_children(self.resolve()))

    def get_children(self) -> List["DomNode"]:
        children = self.document.get_children(self.resolve())
        return [DomNode(self.document, self.locator.child(i)) for i in range(len(children))]

    def has_attributes(self) -> bool:
        return bool(self.get_attributes())

    def get_attributes(self) -> Dict[str, str]:
        return dict(self.document.get_attributes(self.resolve()))

    def get_text(self) -> str:
        return self.document.get_text(self.resolve())

    def get_tag_name(self) -> str:
        return self.document.get_tag_name(self.resolve())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomNode):
            return NotImplemented
        return self.locator == other.locator

    def __hash__(self) -> int:
        return hash(self.locator)

    def __repr__(self) -> str:
        return f"DomNode({self.locator})"


class DomTree:
    """
    Navigates the live document from a root element.

    Attributes:
        root_node: Node the tree was built from
        current_node: Cursor position
        previous_node: Position before the last successful move
        current_siblings: Children of the current node's parent, empty at the root
    """

    def __init__(self, structure_validator: StructureValidator):
        self.structure_validator = structure_validator
        self.document = structure_validator.document
        self.root_node: Optional[DomNode] = None
        self.current_node: Optional[DomNode] = None
        self.previous_node: Optional[DomNode] = None
        self.current_siblings: List[DomNode] = []

    @allure.step("Build DOM tree from: {root_selector_data}")
    def build(self, root_selector_data: SelectorData) -> DomNode:
        """
        Resolve the root element and put the cursor on it.

        Raises:
            ElementNotFoundError: When no element matches `root_selector_data`
            InvalidSelectorError: When the selector kind has no query
        """
        location = self.structure_validator.locate(root_selector_data)
        if location is None:
            message = f"Root element '{root_selector_data.name}' was not found, cannot build DomTree"
            logger.error(message)
            raise ElementNotFoundError(message)

        query, index = location
        self.root_node = DomNode(self.document, DomLocator(query, index))
        self.current_node = self.root_node
        self.previous_node = None
        self.current_siblings = []
        logger.debug(f"DomTree built at {self.root_node.locator}")
        return self.root_node

    def _current(self) -> DomNode:
        if self.current_node is None:
            raise ElementNotFoundError("DomTree has no root, call build() first")
        return self.current_node

    def _live_children(self, node: DomNode) -> Optional[List[DomNode]]:
        element = node.find()
        if element is None:
            logger.warning(f"Element at {node.locator} has vanished from the document")
            return None
        count = len(self.document.get_children(element))
        return [DomNode(self.document, node.locator.child(i)) for i in range(count)]

    def _move(self, node: DomNode, siblings: List[DomNode]) -> DomNode:
        self.previous_node = self.current_node
        self.current_node = node
        self.current_siblings = siblings
        logger.debug(f"Moved from {self.previous_node.locator} to {node.locator}")
        return node

    def move_to_first_child(self) -> Optional[DomNode]:
        return self.move_to_nth_child(0)

    def move_to_nth_child(self, index: int) -> Optional[DomNode]:
        """
        Move to the child at zero-based `index`, or return None when the
        current node has no such child.
        """
        current = self._current()
        with allure.step(f"Move to child {index} of {current.locator}"):
            if index < 0:
                return None
            children = self._live_children(current)
            if not children or index >= len(children):
                logger.debug(f"{current.locator} has no child at index {index}")
                return None
            return self._move(children[index], children)

    @allure.step("Move to parent")
    def move_to_parent(self) -> Optional[DomNode]:
        """Move to the parent node. Always None at the root."""
        current = self._current()
        if current.locator.is_root:
            logger.debug("Root node has no parent")
            return None

        parent = DomNode(self.document, current.locator.parent)
        if not parent.exists():
            logger.warning(f"Parent {parent.locator} has vanished from the document")
            return None

        siblings: List[DomNode] = []
        if not parent.locator.is_root:
            siblings = self._live_children(DomNode(self.document, parent.locator.parent)) or []
        return self._move(parent, siblings)

    @allure.step("Move to next sibling")
    def next_sibling(self) -> Optional[DomNode]:
        return self._move_to_sibling(1)

    @allure.step("Move to previous sibling")
    def previous_sibling(self) -> Optional[DomNode]:
        return self._move_to_sibling(-1)

    def _move_to_sibling(self, offset: int) -> Optional[DomNode]:
        current = self._current()
        if current.locator.is_root:
            logger.debug("Root node has no siblings")
            return None

        siblings = self._live_children(DomNode(self.document, current.locator.parent))
        if siblings is None:
            return None
        index = current.locator.path[-1] + offset
        if index < 0 or index >= len(siblings):
            logger.debug(f"{current.locator} has no sibling at offset {offset:+d}")
            return None
        return self._move(siblings[index], siblings)


__all__ = ["DomLocator", "DomNode", "DomTree"]
