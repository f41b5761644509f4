"""
FeedTree - RSS to Element Tree Converter
========================================

Converts RSS documents whose items carry HTML bodies into typed,
serializable feed trees.

Main Components:
- Ingestion: feedparser-based extraction, text and date normalization
- Content: HTML fragment to element tree conversion, element classification
- Processing: the parsing pipeline and feed assembly
- Fetching: HTTP retrieval of feed documents
- Configuration: environment variables with Pydantic validation
"""

__version__ = "1.0.0"
__author__ = "FeedTree Development Team"
__description__ = "RSS to typed element tree converter"

from .config.settings import get_settings
from .models.feed import Attribute, Element, Feed, Post, TagElement, TextElement
from .processing.pipeline import FeedParser, parse_feed
from .utils.logging import configure_application_logging, get_logger_for_component
from .utils.exceptions import (
    FeedTreeError,
    MalformedDocumentError,
    EmptyContentError,
    InvalidDateError,
)

__all__ = [
    "get_settings",
    "Attribute",
    "Element",
    "Feed",
    "Post",
    "TagElement",
    "TextElement",
    "FeedParser",
    "parse_feed",
    "configure_application_logging",
    "get_logger_for_component",
    "FeedTreeError",
    "MalformedDocumentError",
    "EmptyContentError",
    "InvalidDateError",
]
