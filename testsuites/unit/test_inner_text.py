import pytest

from webui_toolkit.framework import parse_inner_text

pytestmark = pytest.mark.parser


@pytest.mark.P0
@pytest.mark.smoke
def test_strips_wrapper_and_child_elements():
    assert parse_inner_text("<p>A<span>B</span>C</p>") == "AC"


@pytest.mark.parametrize("raw", [None, ""])
def test_empty_input(raw):
    assert parse_inner_text(raw) is None


def test_plain_text_is_unchanged():
    assert parse_inner_text("just text") == "just text"
    assert parse_inner_text("a < b") == "a < b"


def test_nested_children_of_the_same_name():
    assert parse_inner_text("<div>x<div>y<div>z</div></div>w</div>") == "xw"


def test_child_content_is_not_parsed():
    assert parse_inner_text('Total: <b class="x">12 <i>items</i></b> left') == "Total:  left"


@pytest.mark.P1
def test_opening_tag_without_closing_tag():
    assert parse_inner_text("Hello <br> world") == "Hello  world"
    assert parse_inner_text("a<br/>b") == "ab"


def test_unknown_and_unterminated_tags_are_kept():
    assert parse_inner_text("a <custom>b</custom> c") == "a <custom>b</custom> c"
    assert parse_inner_text("text <span class='x'") == "text <span class='x'"


def test_siblings_are_not_treated_as_a_wrapper():
    assert parse_inner_text("<b>x</b> and <i>y</i>") == " and "
