"""Parse markup into a bs4 tree and render nodes back to HTML piecewise.

The tree walker serializes node by node (open tag, children, close tag)
instead of calling ``Tag.decode`` so output can be produced while image
probes are still pending further down the document.
"""

from __future__ import annotations

from typing import Optional, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.builder import HTMLParserTreeBuilder
from bs4.element import NavigableString, PageElement, Tag

from .errors import MarkupParseError

# Elements with no end tag in HTML (img, br, source, track, ...).
VOID_ELEMENTS = frozenset(HTMLParserTreeBuilder().empty_element_tags)

_FORMATTER = "minimal"


def parse_markup(html: Union[str, bytes], call_id: Optional[str] = None) -> BeautifulSoup:
    """Parse ``html`` with a dedicated BeautifulSoup instance.

    ``html.parser`` keeps fragments as fragments (no implied html/body) and
    multi-valued attribute splitting is disabled so ``class`` stays a string.
    """

    if not isinstance(html, (str, bytes)):
        raise MarkupParseError(
            f"expected markup as str or bytes, got {type(html).__name__}", call_id
        )
    try:
        return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise MarkupParseError(f"failed to parse markup: {exc}", call_id) from exc


def _attribute_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        value = " ".join(str(item) for item in value)
    return str(value).replace("&", "&amp;").replace('"', "&quot;")


def render_open(node: PageElement) -> str:
    """Render the opening part of ``node``: start tag, text, comment, doctype."""

    if isinstance(node, Tag):
        attrs = "".join(
            f' {name}="{_attribute_value(value)}"' for name, value in node.attrs.items()
        )
        return f"<{node.name}{attrs}>"
    if isinstance(node, NavigableString):
        # Keeps script/style bodies verbatim and adds <!-- --> etc. for comments.
        return node.output_ready(formatter=_FORMATTER)
    return ""


def render_close(node: PageElement) -> str:
    if isinstance(node, Tag) and node.name not in VOID_ELEMENTS:
        return f"</{node.name}>"
    return ""


def has_children(node: PageElement) -> bool:
    return isinstance(node, Tag) and bool(node.contents)


__all__ = [
    "VOID_ELEMENTS",
    "has_children",
    "parse_markup",
    "render_close",
    "render_open",
]
