"""
Document Extractor
==================

Reads the outer RSS document with feedparser and returns normalized channel
and item records.

This module provides:
- Strict well-formedness checking (malformed XML is an error, not a warning)
- Channel metadata and per-item field extraction in source order
- Text normalization of narrative fields and canonical publish dates
- Item links and categories read from the RSS markup as written

Item bodies come back as HTML strings; turning them into element trees is
the Element Tree Parser's job.
"""

import io
import xml.sax
from xml.etree import ElementTree as ET
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import feedparser

from feedtree.config.settings import ParserSettings, get_settings
from feedtree.ingestion.date_normalizer import normalize_date
from feedtree.ingestion.text_normalizer import normalize_text
from feedtree.utils.exceptions import InvalidDateError, MalformedDocumentError
from feedtree.utils.logging import get_logger_for_component


@dataclass(frozen=True)
class ChannelRecord:
    """Normalized channel metadata."""

    title: str
    description: str
    link: str


@dataclass(frozen=True)
class ItemRecord:
    """One normalized feed item; ``content_html`` is the raw body markup."""

    title: str
    link: str
    author: str
    publish_date: str
    content_html: str
    categories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtractedDocument:
    """Channel record plus its items in source order."""

    channel: ChannelRecord
    items: Tuple[ItemRecord, ...]


# RSS 0.90 and 1.0 are RDF documents whose items live in a namespace
RDF_VERSIONS = ("rss090", "rss10")


@dataclass(frozen=True)
class RawItemFields:
    """Item fields read straight from the RSS markup."""

    link: str
    categories: Tuple[str, ...]


def read_rss_item_fields(data: bytes) -> Optional[Tuple[RawItemFields, ...]]:
    """
    Read each RSS ``<item>``'s own ``<link>`` and ``<category>`` elements.

    feedparser substitutes a permalink ``<guid>`` for a missing link and
    collapses repeated categories; here every category is kept as written,
    empty ones included, in document order.

    Args:
        data: Feed document

    Returns:
        One entry per ``<item>`` in document order, or None if the bytes
        cannot be read as XML
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError:
        return None

    fields: List[RawItemFields] = []
    for item in root.iter("item"):
        link = item.find("link")
        fields.append(
            RawItemFields(
                link="".join(link.itertext()).strip() if link is not None else "",
                categories=tuple(
                    "".join(category.itertext()) for category in item.findall("category")
                ),
            )
        )
    return tuple(fields)


class DocumentExtractor:
    """
    RSS document reader built on feedparser.

    feedparser is run with HTML sanitizing and relative-URI rewriting turned
    off so item bodies reach the element parser exactly as published.
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        """Initialize extractor.

        Args:
            settings: Parser settings (default from config)
        """
        self.settings = settings or get_settings().parser
        self.logger = get_logger_for_component("document_extractor")

    def extract(
        self, data: Union[bytes, str], source: Optional[str] = None
    ) -> ExtractedDocument:
        """
        Extract channel and items from raw feed bytes.

        Args:
            data: Feed document
            source: Where the bytes came from, for error context only

        Returns:
            ExtractedDocument with normalized fields

        Raises:
            MalformedDocumentError: If the XML is not well-formed or holds no feed
            InvalidDateError: If a date is unrecognized under the ``fail`` policy
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        # BytesIO keeps feedparser from treating the payload as a path or URL
        parsed = feedparser.parse(
            io.BytesIO(data), sanitize_html=False, resolve_relative_uris=False
        )

        bozo_exception = parsed.get("bozo_exception")
        if parsed.get("bozo") and isinstance(bozo_exception, xml.sax.SAXException):
            raise MalformedDocumentError(
                f"Feed XML is not well-formed: {bozo_exception}",
                feed_url=source,
            ) from bozo_exception

        if not parsed.get("version"):
            raise MalformedDocumentError(
                "Document does not contain a recognizable feed channel",
                feed_url=source,
            )

        if parsed.get("bozo"):
            # encoding overrides and similar; the document itself parsed fine
            self.logger.warning(f"Feed parsing warning: {bozo_exception}")

        channel = self._extract_channel(parsed.feed)
        raw_items = self._read_raw_items(data, parsed)

        items = []
        for index, entry in enumerate(parsed.entries):
            raw = raw_items[index] if raw_items is not None else None
            try:
                items.append(self._extract_item(entry, raw))
            except InvalidDateError as e:
                e.context["item_index"] = index
                raise

        self.logger.info(
            f"Extracted {len(items)} items from {parsed.version} document",
            extra={"feed_version": parsed.version},
        )
        return ExtractedDocument(channel=channel, items=tuple(items))

    def _extract_channel(self, feed_data: Any) -> ChannelRecord:
        return ChannelRecord(
            title=normalize_text(feed_data.get("title", "")),
            description=normalize_text(feed_data.get("subtitle", "")),
            link=(feed_data.get("link") or "").strip(),
        )

    def _read_raw_items(
        self, data: bytes, parsed: Any
    ) -> Optional[Tuple[RawItemFields, ...]]:
        if not parsed.version.startswith("rss") or parsed.version in RDF_VERSIONS:
            return None

        raw_items = read_rss_item_fields(data)
        if raw_items is None or len(raw_items) != len(parsed.entries):
            self.logger.warning(
                "Could not match RSS items to feed entries; "
                "links and categories come from feedparser"
            )
            return None
        return raw_items

    def _extract_item(self, entry: Any, raw: Optional[RawItemFields] = None) -> ItemRecord:
        """Extract and normalize one entry."""
        # content:encoded first, then the RSS description
        contents = entry.get("content") or []
        if contents:
            body = contents[0].get("value", "")
        else:
            body = entry.get("summary", "")

        if raw is not None:
            link, categories = raw.link, raw.categories
        else:
            link = (entry.get("link") or "").strip()
            # feedparser copies a permalink guid into link when there is no <link>
            if entry.get("guidislink") and link == entry.get("id"):
                link = ""
            categories = tuple(tag.get("term") or "" for tag in entry.get("tags") or [])

        return ItemRecord(
            title=normalize_text(entry.get("title", "")),
            link=link,
            author=normalize_text(entry.get("author", "")),
            publish_date=normalize_date(
                entry.get("published", ""),
                policy=self.settings.date_policy,
                sentinel=self.settings.date_sentinel,
            ),
            content_html=normalize_text(body),
            categories=categories,
        )


def extract_document(data: Union[bytes, str]) -> ExtractedDocument:
    """Quick function to extract records from a feed document."""
    return DocumentExtractor().extract(data)
