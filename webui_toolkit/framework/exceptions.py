"""
================================================================================
Toolkit Exceptions
================================================================================

Exception hierarchy shared by the structure validation and DOM navigation
components. "Element absent" is normally reported as a ``None`` return; the
exceptions below are reserved for caller mistakes and fatal conditions.

Author: Automation Team
License: MIT
================================================================================
"""


class WebUiAutomationError(Exception):
    """Base exception for all toolkit failures."""
    pass


class ElementNotFoundError(WebUiAutomationError):
    """Raised when an element required to continue cannot be located."""
    pass


class InvalidSelectorError(WebUiAutomationError):
    """Raised when a SelectorData is unsupported or used on the wrong call path."""
    pass


class AmbiguousSelectorError(WebUiAutomationError):
    """Raised when a selector expected to be unique matches several elements."""
    pass


class SelectorDataSetError(WebUiAutomationError):
    """Raised on duplicate or unknown names in a SelectorDataSet."""
    pass


class StructuralLimitExceededError(WebUiAutomationError):
    """Raised when parsed markup produces more tags than the safety limit."""
    pass


class ConfigurationError(WebUiAutomationError):
    """Raised when a configuration value cannot be used."""
    pass


__all__ = [
    "WebUiAutomationError",
    "ElementNotFoundError",
    "InvalidSelectorError",
    "AmbiguousSelectorError",
    "SelectorDataSetError",
    "StructuralLimitExceededError",
    "ConfigurationError",
]
