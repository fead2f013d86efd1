"""Unit tests for logging utilities."""

import io
import json
import logging
import sys

from codeweave.utils.logging import (
    ROOT_LOGGER,
    CodeweaveLogger,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    VerboseFormatter,
    configure_from_cli,
    get_logger,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "hello %s", args: tuple = ("world",)) -> logging.LogRecord:
    return logging.LogRecord("codeweave.test", level, __file__, 1, msg, args, None)


class TestFormatters:
    """Tests for output formatters."""

    def test_human_without_colors(self) -> None:
        """Test the plain human format."""
        assert HumanFormatter(use_colors=False).format(_record()) == "[INFO] hello world"

    def test_human_with_colors(self) -> None:
        """Test that colored output wraps the level tag."""
        output = HumanFormatter(use_colors=True).format(_record(logging.WARNING))

        assert output.startswith("\033[33m[WARNING]")
        assert output.endswith(" hello world")

    def test_verbose_includes_time(self) -> None:
        """Test that verbose output carries a clock time."""
        output = VerboseFormatter(use_colors=False).format(_record())

        assert output.startswith("[INFO][")
        assert output[7:15].count(":") == 2
        assert output.endswith("] hello world")

    def test_json_fields(self) -> None:
        """Test the JSON line fields."""
        data = json.loads(JSONFormatter().format(_record(logging.ERROR)))

        assert data["level"] == "ERROR"
        assert data["logger"] == "codeweave.test"
        assert data["msg"] == "hello world"
        assert "ts" in data

    def test_json_extra_data(self) -> None:
        """Test that structured data is merged into the JSON line."""
        record = _record()
        record.extra_data = {"files": 3}

        data = json.loads(JSONFormatter().format(record))

        assert data["files"] == 3


class TestSetupLogging:
    """Tests for logging setup."""

    def test_single_stream(self) -> None:
        """Test that a given stream receives every record."""
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.DEBUG, stream=stream)

        logger = logging.getLogger(f"{ROOT_LOGGER}.tests")
        logger.debug("debug line")
        logger.error("error line")

        assert stream.getvalue() == "[DEBUG] debug line\n[ERROR] error line\n"

    def test_level_filters_records(self) -> None:
        """Test that records below the level are dropped."""
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.WARNING, stream=stream)

        logging.getLogger(f"{ROOT_LOGGER}.tests").info("hidden")

        assert stream.getvalue() == ""

    def test_split_streams(self) -> None:
        """Test that info goes to stdout and warnings to stderr."""
        setup_logging(LogMode.HUMAN, logging.INFO)

        handlers = logging.getLogger(ROOT_LOGGER).handlers
        streams = [h.stream for h in handlers]

        assert streams == [sys.stdout, sys.stderr]
        info, warning = _record(logging.INFO), _record(logging.WARNING)
        assert handlers[0].filter(info) and not handlers[0].filter(warning)
        assert handlers[1].level == logging.WARNING

    def test_does_not_propagate(self) -> None:
        """Test that records stay out of the root logger."""
        setup_logging(stream=io.StringIO())

        assert logging.getLogger(ROOT_LOGGER).propagate is False

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Test that setup does not stack handlers."""
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1


class TestConfigureFromCli:
    """Tests for CLI flag handling."""

    def test_quiet(self) -> None:
        """Test that quiet keeps warnings only."""
        configure_from_cli(quiet=True)

        assert logging.getLogger(ROOT_LOGGER).level == logging.WARNING

    def test_verbose(self) -> None:
        """Test that verbose enables debug records with timestamps."""
        configure_from_cli(verbose=True)

        logger = logging.getLogger(ROOT_LOGGER)
        assert logger.level == logging.DEBUG
        assert isinstance(logger.handlers[0].formatter, VerboseFormatter)

    def test_ci(self) -> None:
        """Test that CI mode uses JSON lines."""
        configure_from_cli(ci=True)

        assert isinstance(logging.getLogger(ROOT_LOGGER).handlers[0].formatter, JSONFormatter)


class TestStructuredLogging:
    """Tests for the structured logger."""

    def test_structured_record(self) -> None:
        """Test that structured data reaches the JSON output."""
        stream = io.StringIO()
        setup_logging(LogMode.JSON, logging.INFO, stream=stream)
        logger = get_logger(f"{ROOT_LOGGER}.tests.structured")

        assert isinstance(logger, CodeweaveLogger)
        logger.structured(logging.INFO, "run finished", processed=2)

        data = json.loads(stream.getvalue())
        assert data["msg"] == "run finished"
        assert data["processed"] == 2

    def test_structured_respects_level(self) -> None:
        """Test that disabled levels produce no output."""
        stream = io.StringIO()
        setup_logging(LogMode.JSON, logging.WARNING, stream=stream)

        get_logger(f"{ROOT_LOGGER}.tests.quiet").structured(logging.INFO, "hidden")

        assert stream.getvalue() == ""
