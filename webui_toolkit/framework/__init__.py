"""
================================================================================
WebUI Structure Framework
================================================================================

Offline HTML parsing plus live-document structure checks and navigation.

Components:
    - selector_data: SelectorData / SelectorDataSet element descriptors
    - html_tree: Tokenizing parser producing a searchable HtmlTag tree
    - structure_validator: CSS query building and existence checks
    - dom_tree: Re-resolving cursor over the live document
    - document: LiveDocumentProvider seam (Playwright, BeautifulSoup)
    - inner_text: Child markup stripping for inner HTML blobs

Author: Automation Team
License: MIT
================================================================================
"""

from .document import LiveDocumentProvider, PlaywrightDocument, SoupDocument
from .dom_tree import DomLocator, DomNode, DomTree
from .enums import HtmlAttributeType, HtmlTagType
from .exceptions import (
    AmbiguousSelectorError,
    ConfigurationError,
    ElementNotFoundError,
    InvalidSelectorError,
    SelectorDataSetError,
    StructuralLimitExceededError,
    WebUiAutomationError,
)
from .html_tree import HtmlTag, HtmlTree, TagStatus
from .inner_text import parse_inner_text
from .selector_data import SelectorData, SelectorDataSet
from .structure_validator import StructureValidator

__all__ = [
    "LiveDocumentProvider",
    "PlaywrightDocument",
    "SoupDocument",
    "DomLocator",
    "DomNode",
    "DomTree",
    "HtmlAttributeType",
    "HtmlTagType",
    "AmbiguousSelectorError",
    "ConfigurationError",
    "ElementNotFoundError",
    "InvalidSelectorError",
    "SelectorDataSetError",
    "StructuralLimitExceededError",
    "WebUiAutomationError",
    "HtmlTag",
    "HtmlTree",
    "TagStatus",
    "parse_inner_text",
    "SelectorData",
    "SelectorDataSet",
    "StructureValidator",
]
