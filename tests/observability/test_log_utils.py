"""Tests for safe logging helpers and logging setup."""

import logging

from navigator.observability.correlation import get_correlation_id, set_correlation_id
from navigator.observability.log_utils import log_exception_with_context, safe_log_value
from navigator.observability.logger import configure_logging


class TestSafeLogValue:
    """Test value summarization."""

    def test_vectors_should_be_summarized_by_length(self) -> None:
        assert safe_log_value([0.1] * 1024) == "list(1024 items)"

    def test_dicts_should_be_summarized_by_keys(self) -> None:
        assert safe_log_value({"a": 1, "b": 2}) == "dict(2 keys)"

    def test_none_should_be_literal(self) -> None:
        assert safe_log_value(None) == "None"

    def test_long_strings_should_be_truncated(self) -> None:
        value = safe_log_value("x" * 20, max_length=5)

        assert value == "xxxxx... (truncated, 20 total)"


class TestLogExceptionWithContext:
    """Test error logging with context."""

    def test_should_log_error_with_type_and_context(self, caplog) -> None:
        logger = logging.getLogger("navigator.tests")

        with caplog.at_level(logging.ERROR, logger="navigator.tests"):
            log_exception_with_context(logger, "Failed to process a.pdf", ValueError("bad"), path="a.pdf")

        record = caplog.records[0]
        assert record.error_type == "ValueError"
        assert record.path == "a.pdf"
        assert "bad" in record.getMessage()


class TestConfigureLogging:
    """Test root logger setup."""

    def test_repeated_calls_should_not_duplicate_handlers(self) -> None:
        root = logging.getLogger()
        original_handlers = root.handlers[:]
        original_level = root.level
        try:
            configure_logging("DEBUG")
            configure_logging("DEBUG")

            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
            assert logging.getLogger("botocore").level == logging.WARNING
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in original_handlers:
                root.addHandler(handler)
            root.setLevel(original_level)

    def test_correlation_id_should_be_generated_when_missing(self) -> None:
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value
