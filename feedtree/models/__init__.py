"""
FeedTree Models
===============

Feed, Post and the content-tree element types.
"""

from .feed import Attribute, Element, Feed, Post, TagElement, TextElement

__all__ = ["Attribute", "Element", "Feed", "Post", "TagElement", "TextElement"]
