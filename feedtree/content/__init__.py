"""
FeedTree Content Module
=======================

Post body handling:
- HTML fragment to element tree conversion
- Semantic classification of element nodes
"""
