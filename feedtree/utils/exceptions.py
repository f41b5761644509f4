"""
FeedTree Custom Exceptions
==========================

Exception hierarchy for FeedTree with error codes, context information,
and user-friendly error messages.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for categorizing exceptions."""

    # Configuration errors (C001-C099)
    CONFIG_INVALID = "C001"

    # Feed document errors (F001-F099)
    FEED_FETCH_TIMEOUT = "F002"
    MALFORMED_DOCUMENT = "F003"
    FEED_NETWORK_ERROR = "F004"
    FEED_ACCESS_DENIED = "F005"
    FEED_NOT_FOUND = "F006"

    # Content errors (P001-P099)
    EMPTY_CONTENT = "P001"
    CONTENT_PARSE_ERROR = "P002"

    # Validation errors (V001-V099)
    VALIDATION_REQUIRED_FIELD = "V001"
    VALIDATION_INVALID_FORMAT = "V002"

    # System errors (S001-S099)
    SYSTEM_FILE_ERROR = "S001"
    SYSTEM_PERMISSION_DENIED = "S002"


class FeedTreeError(Exception):
    """Base exception for all FeedTree errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
        recoverable: bool = False,
    ):
        """Initialize FeedTree error.

        Args:
            message: Technical error message for logging
            error_code: Categorized error code
            context: Additional context information
            user_message: User-friendly error message
            recoverable: Whether the error is recoverable
        """
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}
        self.user_message = user_message or message
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code.value if self.error_code else None,
            "error_message": str(self),
            "user_message": self.user_message,
            "context": self.context,
            "recoverable": self.recoverable,
        }

    def __str__(self) -> str:
        """String representation with error code."""
        if self.error_code:
            return f"[{self.error_code.value}] {super().__str__()}"
        return super().__str__()


def _passthrough(kwargs: Dict[str, Any], *consumed: str) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if k not in consumed}


class ConfigurationError(FeedTreeError):
    """Configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if config_key:
            context["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.CONFIG_INVALID),
            context=context,
            user_message=kwargs.get("user_message", f"Configuration error: {message}"),
            **_passthrough(kwargs, "context", "error_code", "user_message"),
        )


class FeedError(FeedTreeError):
    """Feed document errors."""

    def __init__(self, message: str, feed_url: Optional[str] = None, **kwargs):
        """Initialize feed error.

        Args:
            message: Error message
            feed_url: Feed URL that caused the error, when known
            **kwargs: Additional arguments for FeedTreeError
        """
        context = kwargs.get("context", {})
        if feed_url:
            context["feed_url"] = feed_url

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.MALFORMED_DOCUMENT),
            context=context,
            user_message=kwargs.get(
                "user_message", f"Feed processing failed: {message}"
            ),
            recoverable=kwargs.get("recoverable", False),
            **_passthrough(kwargs, "context", "error_code", "user_message", "recoverable"),
        )


class MalformedDocumentError(FeedError):
    """Outer XML is not well-formed or has no channel/item structure."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.MALFORMED_DOCUMENT,
            user_message=kwargs.pop("user_message", "Failed to parse feed"),
            recoverable=False,
            **kwargs,
        )


class FeedFetchError(FeedError):
    """Feed fetching errors raised by the fetch collaborator."""

    def __init__(self, message: str, feed_url: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            feed_url=feed_url,
            error_code=kwargs.pop("error_code", ErrorCode.FEED_NETWORK_ERROR),
            user_message=kwargs.pop("user_message", "Failed to fetch feed"),
            recoverable=kwargs.pop("recoverable", True),
            **kwargs,
        )


class ContentError(FeedTreeError):
    """Post body errors."""

    def __init__(
        self,
        message: str,
        item_index: Optional[int] = None,
        item_title: Optional[str] = None,
        item_link: Optional[str] = None,
        **kwargs,
    ):
        """Initialize content error.

        Args:
            message: Error message
            item_index: Position of the offending item in the feed
            item_title: Title of the offending item
            item_link: Link of the offending item
            **kwargs: Additional arguments for FeedTreeError
        """
        context = kwargs.get("context", {})
        if item_index is not None:
            context["item_index"] = item_index
        if item_title:
            context["item_title"] = item_title
        if item_link:
            context["item_link"] = item_link

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.CONTENT_PARSE_ERROR),
            context=context,
            user_message=kwargs.get("user_message", "Post content could not be parsed"),
            recoverable=kwargs.get("recoverable", False),
            **_passthrough(kwargs, "context", "error_code", "user_message", "recoverable"),
        )


class EmptyContentError(ContentError):
    """An item body is blank after normalization."""

    def __init__(self, message: str = "document is empty", **kwargs):
        kwargs.setdefault("error_code", ErrorCode.EMPTY_CONTENT)
        kwargs.setdefault("user_message", "Post content is empty")
        super().__init__(message, **kwargs)


class ValidationError(FeedTreeError):
    """Data validation errors."""

    def __init__(self, message: str, field_name: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        if field_name:
            context["field_name"] = field_name

        super().__init__(
            message=message,
            error_code=kwargs.get("error_code", ErrorCode.VALIDATION_INVALID_FORMAT),
            context=context,
            user_message=kwargs.get(
                "user_message", f"Invalid {field_name or 'input'}: {message}"
            ),
            recoverable=kwargs.get("recoverable", False),
            **_passthrough(kwargs, "context", "error_code", "user_message", "recoverable"),
        )


class InvalidDateError(ValidationError):
    """Publish date matched none of the accepted formats."""

    def __init__(self, raw_date: str, **kwargs):
        context = kwargs.pop("context", {})
        context["raw_date"] = raw_date
        super().__init__(
            f"Unrecognized date format: {raw_date!r}",
            field_name="published",
            context=context,
            **kwargs,
        )


# Foreign exceptions the command line can run into, most specific first:
# ConnectionError and PermissionError are both OSError subclasses.
_FOREIGN_ERRORS = (
    ((ConnectionError, TimeoutError), ErrorCode.FEED_NETWORK_ERROR, "Network connection failed", True),
    (PermissionError, ErrorCode.SYSTEM_PERMISSION_DENIED, "Access denied", False),
    (OSError, ErrorCode.SYSTEM_FILE_ERROR, "Could not read or write file", False),
)


def handle_exception(
    exception: Exception,
    logger,
    operation: str,
    context: Optional[Dict[str, Any]] = None,
) -> FeedTreeError:
    """Log an exception and return it as a FeedTreeError.

    FeedTree errors are returned unchanged. Network and file-system errors
    get their own codes; anything else becomes an uncoded "unexpected error".

    Args:
        exception: Original exception
        logger: Logger to report the failure on
        operation: What was being done, e.g. "parse feed"
        context: Additional context information

    Returns:
        The categorized error
    """
    if isinstance(exception, FeedTreeError):
        error = exception
    else:
        context = dict(context or {})
        context["operation"] = operation
        context["original_exception_type"] = type(exception).__name__

        for types, code, user_message, recoverable in _FOREIGN_ERRORS:
            if isinstance(exception, types):
                error = FeedTreeError(
                    f"{operation} failed: {exception}",
                    error_code=code,
                    context=context,
                    user_message=user_message,
                    recoverable=recoverable,
                )
                break
        else:
            error = FeedTreeError(
                f"Unexpected error during {operation}: {exception}",
                context=context,
                user_message="An unexpected error occurred",
            )

    logger.error(f"Operation '{operation}' failed", extra=error.to_dict())
    return error
