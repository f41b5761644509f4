"""
Feed Assembler
==============

Combines extracted records and parsed bodies into the final ``Feed``.
"""

from typing import Sequence

from ..ingestion.document_extractor import ChannelRecord, ItemRecord
from ..models.feed import Element, Feed, Post


def build_post(item: ItemRecord, content: Sequence[Element]) -> Post:
    return Post(
        title=item.title,
        link=item.link,
        author=item.author,
        published=item.publish_date,
        content=tuple(content),
        categories=tuple(item.categories),
    )


def assemble_feed(
    channel: ChannelRecord,
    items: Sequence[ItemRecord],
    contents: Sequence[Sequence[Element]],
) -> Feed:
    """Build a Feed, pairing ``items[i]`` with ``contents[i]``.

    Args:
        channel: Channel metadata
        items: Item records in source order
        contents: Parsed body forest per item, same order as ``items``

    Returns:
        The assembled feed; post order equals item order

    Raises:
        ValueError: If ``items`` and ``contents`` differ in length
    """
    if len(items) != len(contents):
        raise ValueError(
            f"Got {len(contents)} parsed bodies for {len(items)} items"
        )

    return Feed(
        title=channel.title,
        description=channel.description,
        link=channel.link,
        posts=tuple(build_post(item, content) for item, content in zip(items, contents)),
    )
