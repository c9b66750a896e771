"""
Shared fixtures for the unit suites: a static sample page served through
SoupDocument, plus a validator and DomTree bound to it.
"""

import pytest

from webui_toolkit.framework import DomTree, SoupDocument, StructureValidator

SAMPLE_PAGE = """
<html>
<body>
<div id="app">
  <ul id="menu" class="nav">
    <li class="item"><a href="/home" class="nav">Home</a></li>
    <li class="item"><a href="/about">About <b>us</b></a></li>
    <li class="item">Contact</li>
  </ul>
  <form name="login">
    <input type="text" name="username" placeholder="User name" formcontrolname="user">
    <input type="password" name="password">
    <button type="submit" title="Sign in">Log In</button>
  </form>
  <p class="note">Welcome back</p>
  <p class="note">Second note</p>
</div>
</body>
</html>
"""


@pytest.fixture
def sample_page() -> str:
    return SAMPLE_PAGE


@pytest.fixture
def document(sample_page) -> SoupDocument:
    return SoupDocument(sample_page)


@pytest.fixture
def validator(document) -> StructureValidator:
    return StructureValidator(document)


@pytest.fixture
def dom_tree(validator) -> DomTree:
    return DomTree(validator)
