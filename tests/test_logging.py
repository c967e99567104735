"""Tests for component logging."""

import io
import logging

from splitsmith.utils.logging import configure_logging, get_logger, log_warning


class TestConfigureLogging:
    """Test routing Splitsmith loggers to a stream."""

    def test_component_lines_reach_stream(self, reset_logging):
        """Debug lines from component loggers are formatted with their name."""
        stream = io.StringIO()
        configure_logging(logging.DEBUG, stream=stream)

        get_logger("ledger").debug("Committed 1.0 to 'A'")
        log_warning(get_logger("admin"), "Rename left keys behind", {"failed_keys": ["k"]})

        output = stream.getvalue()
        assert "DEBUG splitsmith.ledger: Committed 1.0 to 'A'" in output
        assert "WARNING splitsmith.admin: Rename left keys behind | Context: {'failed_keys': ['k']}" in output

    def test_level_filters(self, reset_logging):
        stream = io.StringIO()
        configure_logging(logging.WARNING, stream=stream)

        get_logger("selection").info("Allocated 'A'")
        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handler(self, reset_logging):
        """A second call moves output instead of duplicating it."""
        first, second = io.StringIO(), io.StringIO()
        configure_logging(logging.DEBUG, stream=first)
        configure_logging(logging.DEBUG, stream=second)

        get_logger("store").debug("hgetall")

        assert first.getvalue() == ""
        assert second.getvalue().count("hgetall") == 1

    def test_unknown_component_uses_root_logger(self):
        assert get_logger("nope") is get_logger()
        assert get_logger().name == "splitsmith"
