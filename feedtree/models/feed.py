"""
FeedTree Data Models
====================

Immutable Pydantic models for the parsed feed tree.

A content node is either a ``TextElement`` (a text leaf) or a ``TagElement``
(tag name, attributes, children). The two variants share no fields and
reject unknown ones, so a node carrying both a tag and a value, or neither,
cannot be built. Dumping a model yields the wire shape directly::

    {"tag": "p", "attributes": [...], "children": [...]}
    {"value": "Hello"}
"""

import json
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

_FROZEN = {"frozen": True, "extra": "forbid"}


class Attribute(BaseModel):
    """A single HTML attribute, kept verbatim."""
    name: str = Field(..., description="Attribute name")
    value: str = Field(default="", description="Attribute value, entities unescaped")

    model_config = _FROZEN


class TextElement(BaseModel):
    """Text leaf of a content tree. The value may be empty."""
    value: str = Field(..., description="Trimmed text")

    model_config = _FROZEN


class TagElement(BaseModel):
    """Tag node of a content tree."""
    tag: str = Field(..., min_length=1, description="Lowercase tag name")
    attributes: Tuple[Attribute, ...] = Field(default=(), description="Attributes in source order")
    children: Tuple["Element", ...] = Field(default=(), description="Child nodes in source order")

    model_config = _FROZEN

    @field_validator('tag')
    @classmethod
    def lowercase_tag(cls, v):
        return v.lower()

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default


Element = Union[TagElement, TextElement]

TagElement.model_rebuild()


class Post(BaseModel):
    """One syndicated entry with its parsed body."""
    title: str = Field(default="", description="Post title")
    link: str = Field(default="", description="Post URL")
    author: str = Field(default="", description="Post author")
    published: str = Field(default="", description="RFC 3339 publish timestamp")
    content: Tuple[Element, ...] = Field(default=(), description="Parsed body forest")
    categories: Tuple[str, ...] = Field(default=(), description="Categories in source order")

    model_config = _FROZEN

    def __str__(self) -> str:
        return f"Post({self.title[:50]})"


class Feed(BaseModel):
    """Top-level parsed document."""
    title: str = Field(default="", description="Channel title")
    description: str = Field(default="", description="Channel description")
    link: str = Field(default="", description="Channel link")
    posts: Tuple[Post, ...] = Field(default=(), description="Posts in source item order")

    model_config = _FROZEN

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain dicts and lists in the wire shape."""
        return self.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Feed":
        """Rebuild a feed from its wire shape."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        return f"Feed({self.title[:50]}: {len(self.posts)} posts)"
