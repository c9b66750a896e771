"""
================================================================================
Selector Enumerations
================================================================================

Enumerations used to describe how an element should be located: the HTML tag
to look for and the attribute rule to apply to it.

Author: Automation Team
License: MIT
================================================================================
"""

from enum import Enum
from typing import Optional, Union


class HtmlAttributeType(str, Enum):
    """How a SelectorData value is compared against an element."""
    ATTRIBUTE_TEXT_CONTAINS = "AttributeText_Contains"
    ATTRIBUTE_TEXT_EXACT_MATCH = "AttributeText_ExactMatch"
    ID = "Id"
    CLASS = "Class"
    NAME = "Name"
    TYPE = "Type"
    FOR = "For"
    HREF = "Href"
    SRC = "Src"
    TITLE = "Title"
    INNER_TEXT_CONTAINS = "InnerText_Contains"
    INNER_TEXT_EXACT_MATCH = "InnerText_ExactMatch"
    FORM_CONTROL_NAME = "FormControlName"
    PLACEHOLDER = "PlaceHolder"
    UAT_ID = "UatId"
    NONE = "None"

    @property
    def attribute_name(self) -> str:
        """HTML attribute name for this kind, e.g. ``formcontrolname``."""
        return self.value.lower()

    @property
    def is_inner_text(self) -> bool:
        return self in (
            HtmlAttributeType.INNER_TEXT_CONTAINS,
            HtmlAttributeType.INNER_TEXT_EXACT_MATCH,
        )

    @property
    def is_attribute_text(self) -> bool:
        return self in (
            HtmlAttributeType.ATTRIBUTE_TEXT_CONTAINS,
            HtmlAttributeType.ATTRIBUTE_TEXT_EXACT_MATCH,
        )

    @property
    def is_exact_match(self) -> bool:
        return self in (
            HtmlAttributeType.INNER_TEXT_EXACT_MATCH,
            HtmlAttributeType.ATTRIBUTE_TEXT_EXACT_MATCH,
        )


# Named attribute kinds that map onto a `tag[attr='value']` CSS selector
NAMED_ATTRIBUTE_TYPES = frozenset({
    HtmlAttributeType.CLASS,
    HtmlAttributeType.NAME,
    HtmlAttributeType.TYPE,
    HtmlAttributeType.HREF,
    HtmlAttributeType.SRC,
    HtmlAttributeType.TITLE,
    HtmlAttributeType.FORM_CONTROL_NAME,
    HtmlAttributeType.PLACEHOLDER,
})


class HtmlTagType(str, Enum):
    """Recognized HTML tag names."""
    A = "a"
    ACRONYM = "acronym"
    ADDRESS = "address"
    AREA = "area"
    B = "b"
    BASEFONT = "basefont"
    BDO = "bdo"
    BGSOUND = "bgsound"
    BIG = "big"
    BLOCKQUOTE = "blockquote"
    BODY = "body"
    BR = "br"
    BUTTON = "button"
    CAPTION = "caption"
    CENTER = "center"
    CITE = "cite"
    CODE = "code"
    COL = "col"
    COLGROUP = "colgroup"
    DD = "dd"
    DEL = "del"
    DFN = "dfn"
    DIR = "dir"
    DIV = "div"
    DL = "dl"
    DT = "dt"
    EM = "em"
    EMBED = "embed"
    FIELDSET = "fieldset"
    FONT = "font"
    FORM = "form"
    FRAME = "frame"
    FRAMESET = "frameset"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    HEAD = "head"
    HR = "hr"
    HTML = "html"
    I = "i"  # noqa: E741
    IFRAME = "iframe"
    IMG = "img"
    INPUT = "input"
    INS = "ins"
    ISINDEX = "isindex"
    KBD = "kbd"
    LABEL = "label"
    LEGEND = "legend"
    LI = "li"
    LINK = "link"
    MAP = "map"
    MARQUEE = "marquee"
    MENU = "menu"
    META = "meta"
    NAV = "nav"
    NOBR = "nobr"
    NOFRAMES = "noframes"
    NOSCRIPT = "noscript"
    OL = "ol"
    OPTION = "option"
    P = "p"
    PARAM = "param"
    PRE = "pre"
    Q = "q"
    RT = "rt"
    RUBY = "ruby"
    S = "s"
    SAMP = "samp"
    SCRIPT = "script"
    SELECT = "select"
    SMALL = "small"
    SPAN = "span"
    STRIKE = "strike"
    STRONG = "strong"
    STYLE = "style"
    SUB = "sub"
    SUP = "sup"
    SVG = "svg"
    TABLE = "table"
    TBODY = "tbody"
    TD = "td"
    TEXTAREA = "textarea"
    TFOOT = "tfoot"
    TH = "th"
    THEAD = "thead"
    TITLE = "title"
    TR = "tr"
    TT = "tt"
    U = "u"
    UL = "ul"
    VAR = "var"
    WBR = "wbr"
    XML = "xml"

    @classmethod
    def lookup(cls, name: str) -> Optional["HtmlTagType"]:
        """Case-insensitive lookup by tag name, ``None`` when unknown."""
        try:
            return cls(name.lower())
        except ValueError:
            return None


def tag_name(tag: Union[HtmlTagType, str, None]) -> Optional[str]:
    """Normalize an HtmlTagType member or raw string into a plain tag name."""
    if tag is None:
        return None
    if isinstance(tag, HtmlTagType):
        return tag.value
    return str(tag)


__all__ = [
    "HtmlAttributeType",
    "HtmlTagType",
    "NAMED_ATTRIBUTE_TYPES",
    "tag_name",
]
