"""
Element classification: maps tag names onto the handful of semantic kinds a
renderer cares about. Layered on top of the parsed tree; the parser itself
never classifies.
"""

from enum import Enum
from typing import Iterable, Optional

from feedtree.models.feed import Element, TagElement, TextElement


class ElementKind(str, Enum):
    """Semantic kinds of content nodes."""
    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LINK = "link"
    IMAGE = "image"
    FIGURE = "figure"
    FIGCAPTION = "figcaption"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    UNORDERED_LIST = "unorderedList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    BREAK = "break"


TAG_KINDS = {
    "p": ElementKind.PARAGRAPH,
    "h1": ElementKind.HEADING,
    "h2": ElementKind.HEADING,
    "h3": ElementKind.HEADING,
    "h4": ElementKind.HEADING,
    "h5": ElementKind.HEADING,
    "h6": ElementKind.HEADING,
    "a": ElementKind.LINK,
    "img": ElementKind.IMAGE,
    "figure": ElementKind.FIGURE,
    "figcaption": ElementKind.FIGCAPTION,
    "strong": ElementKind.STRONG,
    "b": ElementKind.STRONG,
    "em": ElementKind.EMPHASIS,
    "i": ElementKind.EMPHASIS,
    "ul": ElementKind.UNORDERED_LIST,
    "ol": ElementKind.ORDERED_LIST,
    "li": ElementKind.LIST_ITEM,
    "br": ElementKind.BREAK,
}

BLOCK_KINDS = frozenset({
    ElementKind.HEADING,
    ElementKind.PARAGRAPH,
    ElementKind.FIGURE,
    ElementKind.UNORDERED_LIST,
    ElementKind.ORDERED_LIST,
})


def classify(element: Element) -> Optional[ElementKind]:
    """Kind of ``element``, or None for tags with no semantic kind (div, span, ...)."""
    if isinstance(element, TextElement):
        return ElementKind.TEXT
    if isinstance(element, TagElement):
        return TAG_KINDS.get(element.tag)
    return None


def is_block_kind(kind: Optional[ElementKind]) -> bool:
    return kind in BLOCK_KINDS


def count_blocks(elements: Iterable[Element]) -> int:
    """Number of block-level nodes anywhere in a forest."""
    total = 0
    for element in elements:
        if is_block_kind(classify(element)):
            total += 1
        if isinstance(element, TagElement):
            total += count_blocks(element.children)
    return total
