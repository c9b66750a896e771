"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by the component they cover.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "unit: Unit tests without a browser"
    )

    # Component markers
    config.addinivalue_line(
        "markers", "parser: Tests related to HTML parsing and inner text"
    )
    config.addinivalue_line(
        "markers", "selector: Tests related to selectors and structure validation"
    )
    config.addinivalue_line(
        "markers", "navigation: Tests related to live DOM navigation"
    )


def pytest_collection_modifyitems(config, items):
    """
    Auto-add the 'unit' marker to tests in the unit directory.
    """
    for item in items:
        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "WebUI Toolkit Test Suite",
        "=" * 60,
        "",
    ]
