"""
FeedTree Input Validators
=========================

Validation for the values the fetch collaborator turns into requests.
"""

import re
from urllib.parse import urlparse, urlunparse, quote

from .exceptions import ValidationError, ErrorCode


class URLValidator:
    """URL validation and normalization utilities."""

    ALLOWED_SCHEMES = {'http', 'https'}

    @classmethod
    def validate_feed_url(cls, url: str) -> str:
        """Validate and normalize a feed URL.

        Args:
            url: URL to validate

        Returns:
            Normalized URL (lowercase scheme and host, no fragment)

        Raises:
            ValidationError: If URL is invalid
        """
        if not url or not isinstance(url, str):
            raise ValidationError(
                "URL is required and must be a string",
                error_code=ErrorCode.VALIDATION_REQUIRED_FIELD,
                field_name="url"
            )

        parsed = urlparse(url.strip())

        if parsed.scheme.lower() not in cls.ALLOWED_SCHEMES:
            raise ValidationError(
                f"URL scheme must be {' or '.join(sorted(cls.ALLOWED_SCHEMES))}",
                error_code=ErrorCode.VALIDATION_INVALID_FORMAT,
                field_name="url"
            )

        if not parsed.netloc:
            raise ValidationError(
                "URL must include a hostname",
                error_code=ErrorCode.VALIDATION_INVALID_FORMAT,
                field_name="url"
            )

        return urlunparse(parsed._replace(
            scheme=parsed.scheme.lower(),
            netloc=parsed.netloc.lower(),
            path=parsed.path or '/',
            fragment=''
        ))


# Medium handles may be given with or without the leading "@".
_USERNAME_PATTERN = re.compile(r'^@?[A-Za-z0-9_.\-]+$')


def validate_username(username: str) -> str:
    """Validate a feed owner's username and return it URL-quoted.

    Raises:
        ValidationError: If the username is missing or has invalid characters
    """
    if not username or not username.strip():
        raise ValidationError(
            "Username required",
            error_code=ErrorCode.VALIDATION_REQUIRED_FIELD,
            field_name="username",
            user_message="Username required",
        )

    username = username.strip()
    if not _USERNAME_PATTERN.match(username):
        raise ValidationError(
            f"Username contains invalid characters: {username!r}",
            field_name="username",
        )

    return quote(username, safe="@")


def validate_url(url: str) -> bool:
    """Quick boolean check for an http(s) URL."""
    try:
        URLValidator.validate_feed_url(url)
        return True
    except ValidationError:
        return False
