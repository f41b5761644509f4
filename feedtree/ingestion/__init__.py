"""
FeedTree Ingestion Module
=========================

Outer document handling for RSS feeds.

This module handles:
- Channel and item extraction with feedparser
- Text cleanup of narrative fields (CDATA markers, mis-decoded punctuation)
- Publish date normalization to RFC 3339
"""
