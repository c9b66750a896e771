import pytest

from webui_toolkit.framework import (
    ConfigurationError,
    HtmlAttributeType,
    HtmlTagType,
    HtmlTree,
    SelectorData,
    StructuralLimitExceededError,
    TagStatus,
)
from webui_toolkit.framework.html_tree import parse_attributes

pytestmark = pytest.mark.parser

PSEUDO_TAGS = {"<TEXT>", "<COMMENT>", "<SCRIPT>"}

WELL_FORMED = (
    "<html><body><div class=\"wrap\"><p>first</p><span>second</span>"
    "<ul><li>one</li><li>two</li></ul></div></body></html>"
)


def _shape(tag):
    return (
        tag.tag,
        tag.status,
        dict(tag.attributes),
        tag.raw_html,
        [_shape(child) for child in tag.children],
    )


@pytest.mark.P0
@pytest.mark.smoke
def test_single_div_with_text():
    tree = HtmlTree('<div id="x">hello</div>')

    elements = [tag for tag in tree.all_tags if tag.tag not in PSEUDO_TAGS]
    assert len(elements) == 1
    div = elements[0]
    assert div.tag == "<DIV>"
    assert div.name == "div"
    assert div.attributes == {"id": "x"}
    assert div.status is TagStatus.CLOSED
    assert len(div.children) == 1
    assert div.children[0].tag == "<TEXT>"
    assert div.children[0].raw_html == "hello"
    assert div.children[0].parent is div
    assert tree.top_level_tags == [div]


@pytest.mark.P0
def test_parse_is_idempotent():
    first = HtmlTree(WELL_FORMED)
    second = HtmlTree(WELL_FORMED)

    assert len(first.all_tags) == len(second.all_tags)
    assert [_shape(tag) for tag in first.top_level_tags] == [_shape(tag) for tag in second.top_level_tags]

    # Re-parsing with the same instance replaces the previous result
    first.parse(WELL_FORMED)
    assert [_shape(tag) for tag in first.top_level_tags] == [_shape(tag) for tag in second.top_level_tags]


@pytest.mark.P0
def test_well_formed_tags_are_all_closed():
    tree = HtmlTree(WELL_FORMED)

    elements = [tag for tag in tree.all_tags if tag.tag not in PSEUDO_TAGS]
    assert [tag.name for tag in elements] == ["html", "body", "div", "p", "span", "ul", "li", "li"]
    assert all(tag.status is TagStatus.CLOSED for tag in elements)


def test_closed_tags_contain_exactly_their_span():
    tree = HtmlTree(WELL_FORMED)

    for index, tag in enumerate(tree.all_tags):
        descendants = list(tag.iter_descendants())
        assert descendants == tree.all_tags[index + 1:index + 1 + len(descendants)]
        for descendant in descendants:
            assert descendant.parent is not None


def test_sequential_links_follow_document_order():
    tree = HtmlTree(WELL_FORMED)

    for previous, current in zip(tree.all_tags, tree.all_tags[1:]):
        assert previous.next is current
        assert current.previous is previous
    assert tree.all_tags[0].previous is None
    assert tree.all_tags[-1].next is None


def test_self_closing_and_bare_attributes():
    tree = HtmlTree('<form><input disabled name=user /><img src="a.png"/><br></form>')

    form, text_input, image, line_break = tree.all_tags
    assert form.status is TagStatus.CLOSED
    assert text_input.status is TagStatus.SINGLE
    assert text_input.attributes == {"disabled": "", "name": "user"}
    assert image.status is TagStatus.SINGLE
    assert image.attributes == {"src": "a.png"}
    assert line_break.status is TagStatus.OPEN
    assert form.children == [text_input, image, line_break]


def test_attribute_quoting_styles():
    attributes = parse_attributes(""" id="a" class='b c' data-x=1 hidden title = " spaced " """)

    assert attributes == {
        "id": "a",
        "class": "b c",
        "data-x": "1",
        "hidden": "",
        "title": "spaced",
    }


def test_repeated_attribute_keeps_last_value():
    assert parse_attributes(' id="a" id="b"') == {"id": "b"}


def test_comments_doctype_and_script_are_single_tags():
    tree = HtmlTree(
        '<!DOCTYPE html><!-- note --><script type="text/javascript">'
        "if (a < b) { go(); }</script><div></div>"
    )

    doctype, comment, script, div = tree.all_tags
    assert doctype.tag == "<COMMENT>"
    assert comment.tag == "<COMMENT>"
    assert comment.raw_html == "<!-- note -->"
    assert script.tag == "<SCRIPT>"
    assert script.status is TagStatus.SINGLE
    assert script.attributes == {"type": "text/javascript"}
    assert "a < b" in script.raw_html
    assert div.tag == "<DIV>"
    assert div.status is TagStatus.CLOSED


def test_line_numbers():
    tree = HtmlTree("<div>\n<p>a</p>\n<span>b</span>\n</div>")

    div = tree.first_tag(SelectorData("div", HtmlTagType.DIV))
    paragraph = tree.first_tag(SelectorData("p", HtmlTagType.P))
    span = tree.first_tag(SelectorData("span", HtmlTagType.SPAN))
    assert (div.line_number, paragraph.line_number, span.line_number) == (1, 2, 3)


@pytest.mark.P1
def test_unbalanced_markup_degrades_without_error():
    tree = HtmlTree("<div><span>text</div></p>tail<b>")

    div = tree.first_tag(SelectorData("div", HtmlTagType.DIV))
    span = tree.first_tag(SelectorData("span", HtmlTagType.SPAN))
    assert div.status is TagStatus.CLOSED
    assert span.status is TagStatus.OPEN
    assert span.parent is div


def test_empty_input():
    tree = HtmlTree("")
    assert tree.all_tags == []
    assert tree.top_level_tags == []
    assert len(HtmlTree("   \n  ")) == 0


@pytest.mark.P0
def test_tag_limit_raises():
    with pytest.raises(StructuralLimitExceededError):
        HtmlTree("<div>" * 11, max_tags=10)


def test_tag_limit_boundary_is_inclusive():
    tree = HtmlTree("<div>" * 10, max_tags=10)
    assert len(tree) == 10


def test_tag_limit_from_environment(monkeypatch):
    monkeypatch.setenv("WEBUI_MAX_TAGS", "5")

    with pytest.raises(StructuralLimitExceededError):
        HtmlTree("<b>" * 6)


@pytest.mark.parametrize("max_tags", ["many", 0])
def test_invalid_tag_limit(max_tags):
    with pytest.raises(ConfigurationError):
        HtmlTree("<div></div>", max_tags=max_tags)


def test_search_api_is_case_insensitive():
    tree = HtmlTree('<DIV ID="Main"><a HREF="/Home">Home</a></DIV>')

    found = tree.first_tag(SelectorData("main", HtmlTagType.DIV, HtmlAttributeType.ID, "main"))
    assert found is not None
    assert found.tag == "<DIV>"
    assert tree.first_tag(SelectorData("home", HtmlTagType.A, HtmlAttributeType.HREF, "/home")) is not None


@pytest.mark.P1
def test_search_api_treats_values_as_patterns():
    tree = HtmlTree('<a href="axb">x</a><h2>Title</h2><h5>Other</h5>')

    link = tree.first_tag(SelectorData("link", HtmlTagType.A, HtmlAttributeType.HREF, "a.b"))
    assert link is not None
    assert link.attributes["href"] == "axb"

    headings = tree.search(SelectorData("headings", "h[1-3]"))
    assert [tag.tag for tag in headings] == ["<H2>"]


def test_search_and_html_helpers():
    tree = HtmlTree(
        '<ul><li class="item">one</li><li class="item active">two</li><li>three</li></ul>'
    )

    items = tree.search(SelectorData("items", HtmlTagType.LI, HtmlAttributeType.CLASS, "item"))
    assert len(items) == 2
    assert tree.search(SelectorData("all", HtmlTagType.LI))[2].to_text() == "three"

    active = tree.first_html('class="item active"')
    assert active is not None
    assert active.to_text() == "two"
    assert len(tree.search_html("<li")) == 3


def test_inner_text_search():
    tree = HtmlTree("<p>Hello <b>world</b></p><p>Bye</p>")

    exact = tree.first_tag(SelectorData("bye", HtmlTagType.P, HtmlAttributeType.INNER_TEXT_EXACT_MATCH, "Bye"))
    assert exact is tree.search(SelectorData("p", HtmlTagType.P))[1]
    contains = tree.first_tag(SelectorData("hello", HtmlTagType.P, HtmlAttributeType.INNER_TEXT_CONTAINS, "world"))
    assert contains is tree.all_tags[0]


def test_attribute_text_search():
    tree = HtmlTree('<iframe src="https://www.google.com/recaptcha/api2"></iframe><iframe src="/ads"></iframe>')

    found = tree.search(
        SelectorData("captcha", HtmlTagType.IFRAME, HtmlAttributeType.ATTRIBUTE_TEXT_CONTAINS, "recaptcha")
    )
    assert len(found) == 1
    assert found[0].attributes["src"].endswith("api2")


def test_tag_level_navigation():
    tree = HtmlTree(
        '<div id="a"><span>one</span><span class="x">two</span></div>'
        '<div id="b"><span>three</span></div>'
    )
    first_div = tree.top_level_tags[0]
    span = SelectorData("span", HtmlTagType.SPAN)

    assert [tag.to_text() for tag in first_div.search(span)] == ["one", "two"]
    assert first_div.first_tag(SelectorData("x", HtmlTagType.SPAN, HtmlAttributeType.CLASS, "x")).to_text() == "two"
    assert first_div.first_html("class=") is first_div.search(span)[1]
    assert len(first_div.search_html("span")) == 2

    second_div = first_div.next_tag(SelectorData("div", HtmlTagType.DIV))
    assert second_div is tree.top_level_tags[1]
    assert second_div.previous_tag(SelectorData("div", HtmlTagType.DIV)) is first_div
    assert second_div.next_html("three") is second_div.children[0].children[0]
    assert second_div.previous_html('class="x"') is first_div.children[1]
    assert second_div.next_tag(SelectorData("div", HtmlTagType.DIV)) is None


def test_to_text_line_breaks():
    tree = HtmlTree("<div><p>Hello<br>World</p><p>Again</p></div>")

    assert tree.top_level_tags[0].to_text() == "Hello\nWorld\n\nAgain\n\n"


def test_str_summary():
    tree = HtmlTree('<div id="x">hello</div>')

    assert str(tree.all_tags[0]) == "Line number 1: <DIV> - attribute count 1, inner tag count 1"
