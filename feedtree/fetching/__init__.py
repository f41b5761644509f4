"""
FeedTree Fetching Module
========================

HTTP retrieval of feed documents for the parsing pipeline.
"""

from .feed_fetcher import FeedFetcher, fetch_and_parse

__all__ = [
    "FeedFetcher",
    "fetch_and_parse",
]
