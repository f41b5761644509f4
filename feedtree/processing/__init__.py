"""
FeedTree Processing Module
==========================

Feed-to-tree pipeline and final feed assembly.
"""

from .feed_assembler import assemble_feed
from .pipeline import FeedParser, parse_feed

__all__ = [
    'assemble_feed',
    'FeedParser',
    'parse_feed',
]
