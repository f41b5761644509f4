"""
Exception Hierarchy Tests
=========================

Tests for error codes, context and user messages of FeedTree exceptions.
"""

from unittest.mock import Mock

from feedtree.utils.exceptions import (
    ConfigurationError,
    ContentError,
    EmptyContentError,
    ErrorCode,
    FeedFetchError,
    FeedTreeError,
    InvalidDateError,
    MalformedDocumentError,
    ValidationError,
    handle_exception,
)


class TestFeedTreeError:
    """Test the base exception."""

    def test_str_includes_code(self):
        error = FeedTreeError("boom", error_code=ErrorCode.CONFIG_INVALID)
        assert str(error) == "[C001] boom"

    def test_str_without_code(self):
        assert str(FeedTreeError("boom")) == "boom"

    def test_to_dict(self):
        error = FeedTreeError(
            "boom",
            error_code=ErrorCode.CONTENT_PARSE_ERROR,
            context={"key": "value"},
            user_message="Friendly",
            recoverable=True,
        )

        assert error.to_dict() == {
            "error_type": "FeedTreeError",
            "error_code": "P002",
            "error_message": "[P002] boom",
            "user_message": "Friendly",
            "context": {"key": "value"},
            "recoverable": True,
        }

    def test_user_message_defaults_to_message(self):
        assert FeedTreeError("boom").user_message == "boom"


class TestSpecificErrors:
    """Test defaults of the concrete exceptions."""

    def test_malformed_document(self):
        error = MalformedDocumentError("bad xml", feed_url="https://example.com/feed")

        assert isinstance(error, FeedTreeError)
        assert error.error_code == ErrorCode.MALFORMED_DOCUMENT
        assert error.context == {"feed_url": "https://example.com/feed"}
        assert error.user_message == "Failed to parse feed"
        assert not error.recoverable

    def test_empty_content_defaults(self):
        error = EmptyContentError()

        assert isinstance(error, ContentError)
        assert error.error_code == ErrorCode.EMPTY_CONTENT
        assert error.user_message == "Post content is empty"
        assert "document is empty" in str(error)

    def test_empty_content_item_context(self):
        error = EmptyContentError("Item 2 has no content", item_index=2, item_title="T")

        assert error.context == {"item_index": 2, "item_title": "T"}

    def test_fetch_error_defaults(self):
        error = FeedFetchError("down", feed_url="https://example.com/feed")

        assert error.error_code == ErrorCode.FEED_NETWORK_ERROR
        assert error.recoverable
        assert error.user_message == "Failed to fetch feed"

    def test_fetch_error_overrides(self):
        error = FeedFetchError("missing", error_code=ErrorCode.FEED_NOT_FOUND, recoverable=False)

        assert error.error_code == ErrorCode.FEED_NOT_FOUND
        assert not error.recoverable

    def test_invalid_date(self):
        error = InvalidDateError("someday")

        assert isinstance(error, ValidationError)
        assert error.error_code == ErrorCode.VALIDATION_INVALID_FORMAT
        assert error.context == {"raw_date": "someday", "field_name": "published"}

    def test_configuration_error_key(self):
        error = ConfigurationError("bad", config_key="parser.max_workers")

        assert error.context["config_key"] == "parser.max_workers"
        assert error.user_message == "Configuration error: bad"


class TestHandleException:
    """Test conversion of arbitrary exceptions."""

    def setup_method(self):
        self.logger = Mock()

    def test_feedtree_error_passes_through(self):
        original = EmptyContentError()

        assert handle_exception(original, self.logger, "parse") is original
        self.logger.error.assert_called_once()

    def test_connection_error(self):
        error = handle_exception(ConnectionError("refused"), self.logger, "fetch")

        assert error.error_code == ErrorCode.FEED_NETWORK_ERROR
        assert error.recoverable
        assert error.context["operation"] == "fetch"
        assert error.context["original_exception_type"] == "ConnectionError"

    def test_file_not_found(self):
        error = handle_exception(FileNotFoundError("feed.xml"), self.logger, "parse")

        assert isinstance(error, FeedTreeError)
        assert error.error_code == ErrorCode.SYSTEM_FILE_ERROR
        assert error.user_message == "Could not read or write file"
        assert not error.recoverable

    def test_permission_error(self):
        error = handle_exception(PermissionError("out.json"), self.logger, "write output")

        assert error.error_code == ErrorCode.SYSTEM_PERMISSION_DENIED
        assert error.user_message == "Access denied"
        assert "write output failed" in str(error)

    def test_timeout_is_network_error(self):
        error = handle_exception(TimeoutError("slow"), self.logger, "fetch")

        assert error.error_code == ErrorCode.FEED_NETWORK_ERROR

    def test_unexpected_error(self):
        error = handle_exception(RuntimeError("odd"), self.logger, "parse")

        assert error.error_code is None
        assert error.user_message == "An unexpected error occurred"
        self.logger.error.assert_called_once()
