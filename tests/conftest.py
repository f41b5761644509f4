"""
PyTest Configuration and Fixtures
=================================

Shared fixtures and configuration for FeedTree tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables before any imports
os.environ["FEEDTREE_LOGGING__CONSOLE_LOGGING"] = "false"


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop the cached settings singleton around every test."""
    import feedtree.config.settings as settings_module

    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture
def parser_settings():
    """Sequential parser settings with the default date policy."""
    from feedtree.config.settings import ParserSettings

    return ParserSettings()


# ============================================================================
# Feed Document Fixtures
# ============================================================================


def build_rss(*items: str, title: str = "Engineering Notes") -> bytes:
    """Wrap item snippets in a Medium-style RSS 2.0 document."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:content="http://purl.org/rss/1.0/modules/content/">
    <channel>
        <title>{title}</title>
        <description>Stories from the team</description>
        <link>https://medium.com/@someone</link>
        {''.join(items)}
    </channel>
</rss>""".encode("utf-8")


def build_item(
    title: str = "First Post",
    link: str = "https://medium.com/@someone/first-post",
    author: str = "Someone",
    pub_date: str = "Mon, 02 Jan 2006 15:04:05 -0700",
    content: str = "<p>Hello <strong>World</strong></p>",
    categories=("python", "rss"),
) -> str:
    category_xml = "".join(f"<category>{c}</category>" for c in categories)
    return f"""
        <item>
            <title>{title}</title>
            <link>{link}</link>
            <dc:creator>{author}</dc:creator>
            <pubDate>{pub_date}</pubDate>
            {category_xml}
            <content:encoded><![CDATA[{content}]]></content:encoded>
        </item>"""


@pytest.fixture
def sample_rss():
    """Two-item feed covering the common fields."""
    return build_rss(
        build_item(),
        build_item(
            title="Second Post",
            link="https://medium.com/@someone/second-post",
            pub_date="Tue, 03 Jan 2006 10:00:00 GMT",
            content='<h2>Intro</h2><figure><img src="a.png" alt="A"><figcaption>Cap</figcaption></figure>',
            categories=("design",),
        ),
    )


@pytest.fixture
def malformed_rss():
    """RSS document with an unterminated tag."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
    <channel>
        <title>Broken</title>
        <item>
            <title>Unterminated
        </item>
    </channel>
</rss>"""


@pytest.fixture
def rss_builder():
    """Expose the document builders to tests that need custom items."""
    return build_rss, build_item
