"""
Element Tree Parser
===================

Turns a post's HTML body into a forest of ``TagElement`` / ``TextElement``
nodes.

This module provides:
- Fragment parsing with BeautifulSoup (several top-level siblings allowed)
- A structural transcription of every text and element node, depth-first
- Attribute lists that keep source order and repeated names

It does not sanitize, reformat or classify markup. BeautifulSoup is only
touched here; the rest of the package sees the domain models.
"""

from html.parser import HTMLParser
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from feedtree.models.feed import Attribute, Element, TagElement, TextElement
from feedtree.utils.exceptions import EmptyContentError
from feedtree.utils.logging import get_logger_for_component

# Strings that are markup artifacts rather than document text.
NON_CONTENT_STRINGS = (Comment, CData, ProcessingInstruction, Declaration, Doctype)

RawAttributes = Sequence[Tuple[str, Optional[str]]]


class StartTagRecorder(HTMLParser):
    """Records every start tag with its attribute list exactly as tokenized.

    This is the tokenizer behind BeautifulSoup's ``html.parser`` builder, so
    the recorded tags line up one-to-one with the soup's tags in document
    order. The soup itself keeps attributes in a dict, which cannot hold a
    name twice or remember where a repeat occurred.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.start_tags: List[Tuple[str, RawAttributes]] = []

    def handle_starttag(self, tag, attrs):
        self.start_tags.append((tag, attrs))


def map_source_attributes(soup: BeautifulSoup, html_content: str) -> Optional[Dict[int, RawAttributes]]:
    """Pair each tag in ``soup`` with its source attribute list.

    Returns:
        Mapping of ``id(tag)`` to attributes, or None if the tokenized start
        tags do not line up with the soup's tags
    """
    recorder = StartTagRecorder()
    recorder.feed(html_content)
    recorder.close()

    tags = soup.find_all(True)
    if len(tags) != len(recorder.start_tags):
        return None

    mapping: Dict[int, RawAttributes] = {}
    for tag, (name, attrs) in zip(tags, recorder.start_tags):
        if tag.name != name:
            return None
        mapping[id(tag)] = attrs
    return mapping


def convert_attributes(
    tag: Tag, source_attributes: Optional[Dict[int, RawAttributes]] = None
) -> Tuple[Attribute, ...]:
    """Attributes of ``tag`` in source order, one entry per occurrence."""
    if source_attributes is not None and id(tag) in source_attributes:
        pairs = source_attributes[id(tag)]
    else:
        pairs = tag.attrs.items()

    return tuple(
        Attribute(name=name, value=value if value is not None else "")
        for name, value in pairs
    )


def convert_children(
    tag: Tag, source_attributes: Optional[Dict[int, RawAttributes]] = None
) -> Tuple[Element, ...]:
    children = (convert_node(child, source_attributes) for child in tag.children)
    return tuple(child for child in children if child is not None)


def convert_node(
    node: Any, source_attributes: Optional[Dict[int, RawAttributes]] = None
) -> Optional[Element]:
    """Convert one BeautifulSoup node, recursively.

    Text becomes a trimmed ``TextElement`` (whitespace-only text gives an
    empty leaf, which is kept). Elements become ``TagElement`` with a
    lowercase name. Comments, CDATA sections, doctypes, declarations and
    processing instructions yield None.
    """
    if isinstance(node, NON_CONTENT_STRINGS):
        return None

    if isinstance(node, NavigableString):
        return TextElement(value=str(node).strip())

    if isinstance(node, Tag):
        return TagElement(
            tag=node.name.lower(),
            attributes=convert_attributes(node, source_attributes),
            children=convert_children(node, source_attributes),
        )

    return None


class ContentParser:
    """HTML fragment parser producing the domain element tree."""

    def __init__(self):
        self.logger = get_logger_for_component("element_parser")
        self.parser = "html.parser"

    def parse(self, html_content: str) -> Tuple[Element, ...]:
        """
        Parse an HTML fragment into its root elements.

        Args:
            html_content: Post body HTML; need not have a single root

        Returns:
            Root elements in document order

        Raises:
            EmptyContentError: If the content is blank
        """
        if not html_content or not html_content.strip():
            raise EmptyContentError()

        soup = BeautifulSoup(html_content, self.parser, multi_valued_attributes=None)

        source_attributes = map_source_attributes(soup, html_content)
        if source_attributes is None:
            self.logger.warning(
                "Start tags did not line up with the parsed tree; "
                "repeated attribute names keep only their last value"
            )

        # The soup object is the synthetic container; its children are the roots
        elements = convert_children(soup, source_attributes)

        self.logger.debug(
            f"Parsed content: {len(html_content)} chars -> {len(elements)} root elements"
        )
        return elements


def parse_content(html_content: str) -> Tuple[Element, ...]:
    """Quick function to parse an HTML fragment into elements."""
    return ContentParser().parse(html_content)
