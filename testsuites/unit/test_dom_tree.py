import pytest

from webui_toolkit.framework import (
    DomLocator,
    DomNode,
    ElementNotFoundError,
    HtmlAttributeType,
    HtmlTagType,
    InvalidSelectorError,
    SelectorData,
)

pytestmark = pytest.mark.navigation

MENU = SelectorData("menu", HtmlTagType.UL, HtmlAttributeType.ID, "menu")


@pytest.mark.P0
@pytest.mark.smoke
def test_build_puts_cursor_on_root(dom_tree):
    root = dom_tree.build(MENU)

    assert root == DomNode(dom_tree.document, DomLocator("#menu"))
    assert dom_tree.root_node is root
    assert dom_tree.current_node is root
    assert dom_tree.previous_node is None
    assert dom_tree.current_siblings == []
    assert root.get_tag_name() == "ul"


@pytest.mark.P0
def test_build_without_match_raises(dom_tree):
    with pytest.raises(ElementNotFoundError):
        dom_tree.build(SelectorData("missing", HtmlTagType.DIV, HtmlAttributeType.ID, "missing"))


def test_build_with_unusable_selector_raises(dom_tree):
    with pytest.raises(InvalidSelectorError):
        dom_tree.build(SelectorData("label", HtmlTagType.LABEL, HtmlAttributeType.FOR, "username"))

    assert dom_tree.root_node is None
    assert dom_tree.current_node is None


def test_build_from_inner_text(dom_tree):
    root = dom_tree.build(SelectorData("contact", HtmlTagType.LI, HtmlAttributeType.INNER_TEXT_EXACT_MATCH, "Contact"))

    assert root.locator == DomLocator("li", 2)
    assert root.get_text() == "Contact"


def test_moves_before_build_raise(dom_tree):
    with pytest.raises(ElementNotFoundError):
        dom_tree.move_to_first_child()


@pytest.mark.P0
def test_child_then_parent_returns_to_root(dom_tree):
    root = dom_tree.build(MENU)

    child = dom_tree.move_to_first_child()
    assert child is not None
    assert child.get_tag_name() == "li"
    assert dom_tree.previous_node == root
    assert len(dom_tree.current_siblings) == 3

    parent = dom_tree.move_to_parent()
    assert parent == root
    assert dom_tree.current_node == root
    assert dom_tree.previous_node == child
    assert dom_tree.current_siblings == []


@pytest.mark.P0
def test_root_has_no_parent_or_siblings(dom_tree):
    root = dom_tree.build(MENU)

    assert dom_tree.move_to_parent() is None
    assert dom_tree.next_sibling() is None
    assert dom_tree.previous_sibling() is None
    assert dom_tree.current_node is root


@pytest.mark.P0
def test_leaf_has_no_first_child(dom_tree):
    dom_tree.build(MENU)
    contact = dom_tree.move_to_nth_child(2)
    assert contact.get_text() == "Contact"
    assert not contact.has_children()

    assert dom_tree.move_to_first_child() is None
    assert dom_tree.current_node is contact


def test_nth_child_out_of_range(dom_tree):
    root = dom_tree.build(MENU)

    assert dom_tree.move_to_nth_child(3) is None
    assert dom_tree.move_to_nth_child(-1) is None
    assert dom_tree.current_node is root


def test_sibling_moves(dom_tree):
    dom_tree.build(MENU)
    first = dom_tree.move_to_first_child()

    assert dom_tree.previous_sibling() is None
    second = dom_tree.next_sibling()
    assert second.get_text() == "About us"
    third = dom_tree.next_sibling()
    assert third.get_text() == "Contact"
    assert dom_tree.next_sibling() is None
    assert dom_tree.current_node == third

    assert dom_tree.previous_sibling() == second
    assert dom_tree.previous_sibling() == first
    assert dom_tree.previous_node == second


def test_parent_refreshes_siblings_from_grandparent(dom_tree):
    dom_tree.build(SelectorData("app", HtmlTagType.DIV, HtmlAttributeType.ID, "app"))
    form = dom_tree.move_to_nth_child(1)
    assert form.get_attributes() == {"name": "login"}

    dom_tree.move_to_nth_child(2)
    assert dom_tree.current_node.get_text() == "Log In"
    assert len(dom_tree.current_siblings) == 3

    assert dom_tree.move_to_parent() == form
    assert [node.get_tag_name() for node in dom_tree.current_siblings] == ["ul", "form", "p", "p"]


def test_node_accessors(dom_tree):
    dom_tree.build(MENU)
    root = dom_tree.root_node

    assert root.has_children()
    assert root.has_attributes()
    assert root.get_attributes() == {"id": "menu", "class": "nav"}
    children = root.get_children()
    assert [child.locator.path for child in children] == [(0,), (1,), (2,)]
    link = children[1].get_children()[0]
    assert link.get_tag_name() == "a"
    assert link.get_attributes() == {"href": "/about"}
    assert str(link.locator) == "#menu[0] > :nth-child(2) > :nth-child(1)"


@pytest.mark.P1
def test_nodes_re_resolve_after_re_render(dom_tree, document):
    dom_tree.build(MENU)
    second = dom_tree.move_to_nth_child(1)
    assert second.get_text() == "About us"

    document.load('<ul id="menu"><li>Start</li><li>Pricing</li><li>Blog</li><li>Jobs</li></ul>')

    assert second.get_text() == "Pricing"
    assert dom_tree.next_sibling().get_text() == "Blog"
    assert len(dom_tree.current_siblings) == 4


@pytest.mark.P1
def test_vanished_node(dom_tree, document):
    dom_tree.build(MENU)
    child = dom_tree.move_to_first_child()

    document.load("<div>gone</div>")

    assert not child.exists()
    assert dom_tree.move_to_first_child() is None
    assert dom_tree.next_sibling() is None
    assert dom_tree.move_to_parent() is None
    assert dom_tree.current_node is child
    with pytest.raises(ElementNotFoundError):
        child.get_text()


def test_locator_helpers():
    root = DomLocator("#menu", 0)
    child = root.child(1).child(0)

    assert root.is_root
    assert root.parent is None
    assert child.path == (1, 0)
    assert child.parent == root.child(1)
    assert child.parent.parent == root
    assert len({DomNode(None, child), DomNode(None, root.child(1).child(0))}) == 1
