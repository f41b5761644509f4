"""
Feed Parsing Pipeline
=====================

Entry point of the core: raw feed bytes in, ``Feed`` out.

raw bytes -> DocumentExtractor -> ContentParser (per item) -> assemble_feed

Each call is independent and keeps no state between calls. Item bodies can
be parsed on a thread pool; results are always reassembled in item order.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

from ..config.settings import ParserSettings, get_settings
from ..content.element_parser import ContentParser
from ..ingestion.document_extractor import DocumentExtractor, ItemRecord
from ..models.feed import Element, Feed
from ..utils.exceptions import EmptyContentError
from ..utils.logging import get_logger_for_component, PerformanceLogger
from .feed_assembler import assemble_feed


class FeedParser:
    """Converts feed documents into element-tree feeds."""

    def __init__(self, settings: Optional[ParserSettings] = None):
        """Initialize the pipeline.

        Args:
            settings: Parser settings (default from config)
        """
        self.settings = settings or get_settings().parser
        self.extractor = DocumentExtractor(self.settings)
        self.content_parser = ContentParser()
        self.logger = get_logger_for_component("pipeline")

    def parse(self, data: Union[bytes, str], source: Optional[str] = None) -> Feed:
        """Parse a feed document.

        Args:
            data: Raw feed document
            source: Origin of the bytes (URL, file name), for logs and errors

        Returns:
            The parsed feed

        Raises:
            MalformedDocumentError: If the outer XML is unusable
            EmptyContentError: If any item has a blank body
            InvalidDateError: If a date is unrecognized under the ``fail`` policy
        """
        with PerformanceLogger(self.logger, "feed parse", source=source or "<bytes>"):
            document = self.extractor.extract(data, source=source)
            contents = self._parse_contents(document.items)
            return assemble_feed(document.channel, document.items, contents)

    def _parse_item(self, indexed_item: Tuple[int, ItemRecord]) -> Tuple[Element, ...]:
        index, item = indexed_item
        try:
            return self.content_parser.parse(item.content_html)
        except EmptyContentError as e:
            raise EmptyContentError(
                f"Item {index} has no content",
                item_index=index,
                item_title=item.title,
                item_link=item.link,
            ) from e

    def _parse_contents(self, items: Sequence[ItemRecord]) -> List[Tuple[Element, ...]]:
        workers = min(self.settings.max_workers, len(items))
        if workers <= 1:
            return [self._parse_item(pair) for pair in enumerate(items)]

        self.logger.debug(f"Parsing {len(items)} item bodies on {workers} threads")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="feedtree") as executor:
            # map yields in submission order and re-raises the first failure in that order
            return list(executor.map(self._parse_item, enumerate(items)))


def parse_feed(data: Union[bytes, str], settings: Optional[ParserSettings] = None) -> Feed:
    """Quick function to parse a feed document."""
    return FeedParser(settings).parse(data)
