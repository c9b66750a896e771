"""
================================================================================
Structure Validator
================================================================================

Turns SelectorData descriptors into CSS queries and checks them against a live
document through a LiveDocumentProvider.

Provides:
    - Query building (SelectorData -> CSS selector)
    - Literal matching of parsed HtmlTags
    - Existence checks (unique, nth, whole sets, child-of)
    - Inner text and attribute text lookups
    - Locators able to re-find an element after a re-render

"Not found" is reported as ``None`` (or ``False``). Exceptions are raised only
for selectors that cannot be used on the requested call path, and for
selectors expected to be unique that match several elements.

Usage:
    >>> validator = StructureValidator(PlaywrightDocument(page))
    >>> login = SelectorData("login", HtmlTagType.BUTTON, HtmlAttributeType.ID, "btn-login")
    >>> element = validator.check_element_exists(login)
    >>> if element is None:
    ...     pytest.fail("login button missing")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

import allure
from loguru import logger

from .document import LiveDocumentProvider
from .enums import NAMED_ATTRIBUTE_TYPES, HtmlAttributeType, HtmlTagType
from .exceptions import AmbiguousSelectorError, InvalidSelectorError
from .html_tree import HtmlTag
from .inner_text import parse_inner_text as _parse_inner_text
from .matching import literal_matches, normalize_text
from .selector_data import SelectorData, SelectorDataSet

RECAPTCHA_SOURCE = "https://www.google.com/recaptcha"


class StructureValidator:
    """
    Validates page structure against SelectorData descriptors.

    Attributes:
        document: Provider every lookup goes through
    """

    def __init__(self, document: LiveDocumentProvider):
        self.document = document

    # ------------------------------------------------------------------
    # Query building and matching
    # ------------------------------------------------------------------

    def build_css_selector(self, selector_data: SelectorData) -> Optional[str]:
        """
        Map a SelectorData onto a CSS query.

        ID becomes ``#value``, named attribute kinds become
        ``tag[attr='value']`` and NONE / INNER_TEXT_* become ``tag``.
        ATTRIBUTE_TEXT_* has no structural query and yields None, as do
        kinds with no mapping (a warning is logged). Never raises.
        """
        attribute_type = selector_data.attribute_type
        tag = (selector_data.tag_type or "").lower()

        if attribute_type is HtmlAttributeType.ID:
            query = f"#{selector_data.attribute_value}"
        elif attribute_type in NAMED_ATTRIBUTE_TYPES:
            query = f"{tag}[{attribute_type.attribute_name}='{selector_data.attribute_value}']"
        elif attribute_type is HtmlAttributeType.NONE or attribute_type.is_inner_text:
            if not tag:
                return None
            query = tag
        elif attribute_type.is_attribute_text:
            return None
        else:
            logger.warning(
                f"No CSS selector mapping for {attribute_type.value} "
                f"(SelectorData '{selector_data.name}')"
            )
            return None

        logger.debug(f"Built CSS selector for '{selector_data.name}': {query}")
        return query

    def matches(self, tag: HtmlTag, selector_data: SelectorData) -> bool:
        """
        Literal check of a parsed tag against `selector_data`.

        Unlike the HtmlTree search API, values here are never treated as
        regular expressions.
        """
        return literal_matches(tag, selector_data)

    def _require_query(self, selector_data: SelectorData) -> str:
        query = self.build_css_selector(selector_data)
        if query is None:
            message = (
                f"SelectorData '{selector_data.name}' ({selector_data.attribute_type.value}) "
                f"cannot be turned into a query"
            )
            logger.error(message)
            raise InvalidSelectorError(message)
        return query

    def _tag_query(self, selector_data: SelectorData) -> str:
        if not selector_data.tag_type:
            message = f"SelectorData '{selector_data.name}' needs a tag type for a text lookup"
            logger.error(message)
            raise InvalidSelectorError(message)
        return selector_data.tag_type.lower()

    def _query_and_filter(
        self, selector_data: SelectorData
    ) -> Tuple[str, Optional[Callable[[Any, SelectorData], bool]]]:
        """CSS query for `selector_data` plus the per-element check text kinds need."""
        attribute_type = selector_data.attribute_type
        if attribute_type.is_inner_text:
            return self._tag_query(selector_data), self._text_matches
        if attribute_type.is_attribute_text:
            return self._tag_query(selector_data), self._attribute_value_matches
        return self._require_query(selector_data), None

    # ------------------------------------------------------------------
    # Element lookups
    # ------------------------------------------------------------------

    def get_all_elements_matching(self, selector_data: SelectorData) -> List[Any]:
        """
        Every element on the page satisfying `selector_data`, in document order.

        Raises:
            InvalidSelectorError: When the selector kind has no query
        """
        query, predicate = self._query_and_filter(selector_data)
        elements = self.document.find_elements_matching(query)
        if predicate is None:
            return list(elements)
        return [element for element in elements if predicate(element, selector_data)]

    def _elements_by_inner_text(self, selector_data: SelectorData) -> List[Any]:
        return [
            element for element in self.document.find_elements_matching(self._tag_query(selector_data))
            if self._text_matches(element, selector_data)
        ]

    def _elements_by_attribute_value(self, selector_data: SelectorData) -> List[Any]:
        return [
            element for element in self.document.find_elements_matching(self._tag_query(selector_data))
            if self._attribute_value_matches(element, selector_data)
        ]

    def _text_matches(self, element: Any, selector_data: SelectorData) -> bool:
        text = normalize_text(self.document.get_text(element) or "")
        if selector_data.attribute_type.is_exact_match:
            return text == selector_data.attribute_value
        return selector_data.attribute_value in text

    def _attribute_value_matches(self, element: Any, selector_data: SelectorData) -> bool:
        expected = selector_data.attribute_value.lower()
        for value in self.document.get_attributes(element).values():
            value = (value or "").lower()
            if selector_data.attribute_type.is_exact_match:
                if value == expected:
                    return True
            elif expected in value:
                return True
        return False

    @allure.step("Check element exists: {selector_data}")
    def check_element_exists(self, selector_data: SelectorData) -> Optional[Any]:
        """
        Return the single element matching `selector_data`, or None.

        Raises:
            AmbiguousSelectorError: When more than one element matches
            InvalidSelectorError: When the selector kind has no query
        """
        elements = self.get_all_elements_matching(selector_data)
        if not elements:
            logger.info(f"Element '{selector_data.name}' was not found")
            return None
        if len(elements) > 1:
            message = (
                f"SelectorData '{selector_data.name}' matched {len(elements)} elements, "
                f"expected exactly one"
            )
            logger.error(message)
            raise AmbiguousSelectorError(message)
        logger.debug(f"Element '{selector_data.name}' found")
        return elements[0]

    @allure.step("Check element {index} exists: {selector_data}")
    def check_nth_element_exists(self, selector_data: SelectorData, index: int) -> Optional[Any]:
        """
        Return the element at zero-based `index` among the matches, or None
        when there are not that many.

        Raises:
            InvalidSelectorError: When `index` is negative
        """
        if index < 0:
            message = f"Element index must not be negative, got {index}"
            logger.error(message)
            raise InvalidSelectorError(message)
        elements = self.get_all_elements_matching(selector_data)
        if index >= len(elements):
            logger.info(
                f"Element '{selector_data.name}' #{index} not found "
                f"({len(elements)} match(es))"
            )
            return None
        return elements[index]

    def check_elements_exist(self, selector_data_set: SelectorDataSet) -> bool:
        """True when every item of the set resolves to exactly one element."""
        with allure.step(f"Check {len(selector_data_set)} <{selector_data_set.tag_type}> element(s) exist"):
            for selector_data in selector_data_set:
                if self.check_element_exists(selector_data) is None:
                    logger.warning(f"Element '{selector_data.name}' is missing from the page")
                    return False
            return True

    def check_element_exists_by_tag_and_inner_text(self, selector_data: SelectorData) -> Optional[Any]:
        """
        First element of the tag type whose rendered text contains (or equals)
        the selector value.

        Raises:
            InvalidSelectorError: When the selector is not an INNER_TEXT_* kind
        """
        if not selector_data.attribute_type.is_inner_text:
            message = (
                f"SelectorData '{selector_data.name}' uses {selector_data.attribute_type.value}, "
                f"an inner text lookup needs InnerText_Contains or InnerText_ExactMatch"
            )
            logger.error(message)
            raise InvalidSelectorError(message)
        with allure.step(f"Find <{selector_data.tag_type}> by text: {selector_data.attribute_value}"):
            elements = self._elements_by_inner_text(selector_data)
            return elements[0] if elements else None

    def check_element_exists_by_attribute_value(self, selector_data: SelectorData) -> Optional[Any]:
        """
        First element of the tag type with any attribute value containing (or
        equal to) the selector value, compared case-insensitively.

        Raises:
            InvalidSelectorError: When the selector is not an ATTRIBUTE_TEXT_* kind
        """
        if not selector_data.attribute_type.is_attribute_text:
            message = (
                f"SelectorData '{selector_data.name}' uses {selector_data.attribute_type.value}, "
                f"an attribute value lookup needs AttributeText_Contains or AttributeText_ExactMatch"
            )
            logger.error(message)
            raise InvalidSelectorError(message)
        with allure.step(f"Find <{selector_data.tag_type}> by attribute value: {selector_data.attribute_value}"):
            elements = self._elements_by_attribute_value(selector_data)
            return elements[0] if elements else None

    def check_child_element_exists(
        self,
        parent_selector_data: SelectorData,
        selector_data: SelectorData,
    ) -> Optional[Any]:
        """
        First element matching `selector_data` nested anywhere inside an
        element matching `parent_selector_data`.

        Parents are resolved with all their filters first (text and attribute
        value included), then searched one by one in document order.

        Raises:
            InvalidSelectorError: When either selector kind has no query
        """
        child_query, predicate = self._query_and_filter(selector_data)
        with allure.step(f"Find '{selector_data.name}' inside '{parent_selector_data.name}'"):
            for parent in self.get_all_elements_matching(parent_selector_data):
                for element in self.document.find_elements_within(parent, child_query):
                    if predicate is None or predicate(element, selector_data):
                        return element
            logger.info(f"Element '{selector_data.name}' was not found inside '{parent_selector_data.name}'")
            return None

    def locate(self, selector_data: SelectorData) -> Optional[Tuple[str, int]]:
        """
        A (query, index) pair that finds the first element matching
        `selector_data` again with ``find_elements_matching(query)[index]``.

        Raises:
            InvalidSelectorError: When the selector kind has no query
        """
        query, predicate = self._query_and_filter(selector_data)
        for index, element in enumerate(self.document.find_elements_matching(query)):
            if predicate is None or predicate(element, selector_data):
                return query, index
        return None

    def recaptcha_present(self) -> bool:
        """True when the page embeds a Google reCAPTCHA frame."""
        recaptcha = SelectorData(
            "reCAPTCHA",
            HtmlTagType.IFRAME,
            HtmlAttributeType.ATTRIBUTE_TEXT_CONTAINS,
            RECAPTCHA_SOURCE,
        )
        present = self.check_element_exists_by_attribute_value(recaptcha) is not None
        if present:
            logger.warning("reCAPTCHA detected on the page")
        return present

    def parse_inner_text(self, raw: Optional[str]) -> Optional[str]:
        """Strip child elements out of an inner HTML blob."""
        return _parse_inner_text(raw)


__all__ = ["StructureValidator", "RECAPTCHA_SOURCE"]
