"""
================================================================================
WebUI Toolkit
================================================================================

Structure validation and navigation utilities for UI test automation.

Modules:
    - common: Shared configuration and logging utilities
    - framework: HTML parsing, selector checks and live DOM navigation

Example:
    from webui_toolkit.common import init_logger
    from webui_toolkit.framework import (
        HtmlAttributeType, HtmlTagType, SelectorData, SoupDocument, StructureValidator,
    )

    init_logger()
    validator = StructureValidator(SoupDocument(open("page.html").read()))
    menu = SelectorData("menu", HtmlTagType.UL, HtmlAttributeType.ID, "menu")
    assert validator.check_element_exists(menu) is not None

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "framework",
]
