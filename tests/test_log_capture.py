"""
Unit tests for the structured logger.

Tests cover:
- Message prefixes and capture
- Debug detail levels
- Leaving the application's logging configuration alone
- YAML rendering of complex values
"""

import logging
import os
import subprocess
import sys
import textwrap

import pytest
import structlog

from BinaryFlagsLib.config import Config
from BinaryFlagsLib.structured_logger import StructuredLogger, detail_filter, set_detail_level


@pytest.fixture
def host_structlog_config():
    """Install an application-style structlog config and restore the previous one afterwards."""
    saved = structlog.get_config()
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    yield structlog.get_config()["processors"]
    structlog.reset_defaults()
    structlog.configure(**saved)


class TestCapture:
    """Tests for message capture."""

    def test_prefix_added(self, captured_logs):
        StructuredLogger("capture.test", prefix="Widget.run()> ").info("hello")

        assert any("Widget.run()> hello" in message for message in captured_logs())

    def test_level_in_message(self, captured_logs):
        StructuredLogger("capture.test").warning("careful")

        assert any(message.startswith("WARNING") and "careful" in message for message in captured_logs())

    def test_extra_values(self, captured_logs):
        StructuredLogger("capture.test").info("changed", before=1, after=3)

        assert any("before=1" in message and "after=3" in message for message in captured_logs())


class TestDetailLevels:
    """Tests for debug, debug2 and debug3 filtering."""

    def test_more_detailed_debug_dropped(self, captured_logs):
        logger = StructuredLogger("detail.test")
        logger.debug("level one")
        logger.debug2("level two")
        logger.debug3("level three")

        messages = captured_logs()
        assert any("level one" in message for message in messages)
        assert any("level two" in message for message in messages)
        assert not any("level three" in message for message in messages)

    def test_module_level(self, captured_logs):
        set_detail_level(3, module="detail.verbose")
        try:
            StructuredLogger("detail.verbose").debug3("very detailed")
        finally:
            detail_filter.module_levels.pop("detail.verbose", None)

        assert any("very detailed" in message for message in captured_logs())


class TestApplicationConfigUntouched:
    """The library must not reconfigure logging for the application using it."""

    def test_structlog_config_survives_import(self):
        """Importing the package in a fresh interpreter keeps the host's pipeline and root level."""
        script = textwrap.dedent("""
            import logging
            import structlog

            logging.getLogger().setLevel(logging.WARNING)
            structlog.configure(processors=[structlog.processors.JSONRenderer()])
            host_processors = structlog.get_config()["processors"]

            import BinaryFlagsLib
            Host = type("Host", (BinaryFlagsLib.BinaryFlags,), {"READY": 1})
            Host().add_flag(Host.READY)

            assert structlog.get_config()["processors"] == host_processors
            assert logging.getLogger().level == logging.WARNING
            assert not logging.getLogger().handlers
        """)
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

        result = subprocess.run([sys.executable, "-c", script], cwd=project_root,
                                capture_output=True, text=True)

        assert result.returncode == 0, result.stderr

    def test_apply_leaves_root_logger(self):
        root_level = logging.getLogger().level
        previous = detail_filter.get_level()
        try:
            Config().load_from_dict({"LOG_DETAIL_LEVEL": 3}).apply()
        finally:
            set_detail_level(previous)

        assert logging.getLogger().level == root_level

    def test_detail_level_leaves_root_logger(self):
        root_level = logging.getLogger().level
        previous = detail_filter.get_level()
        try:
            set_detail_level(3)
        finally:
            set_detail_level(previous)

        assert logging.getLogger().level == root_level

    def test_capture_with_application_config(self, host_structlog_config, captured_logs):
        StructuredLogger("host.test").info("still captured")

        assert any("still captured" in message for message in captured_logs())


class TestYamlValues:
    """Tests for rendering complex values."""

    def test_dict_rendered_as_yaml(self, captured_logs):
        StructuredLogger("yaml.test").info("loaded", values={"MASK_WIDTH": 32})

        assert any("values=MASK_WIDTH: 32" in message for message in captured_logs())
