"""
Shared pytest fixtures for BinaryFlagsLib tests.

Provides sample flag vocabularies, instances built from them, and helpers
for capturing log output.
"""

import pytest
import os
import sys
from unittest.mock import MagicMock

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from BinaryFlagsLib.binary_flags import BinaryFlags
from BinaryFlagsLib.config import default_app_config
from BinaryFlagsLib.structured_logger import (
    start_message_capture, stop_message_capture, get_stored_messages,
    set_detail_level, get_detail_level,
)


class ExampleFlags(BinaryFlags):
    FOO = 1
    BAR = 2
    BAZ = 4
    QUX = 8


class PermissionFlags(BinaryFlags):
    IS_ADMIN = 2**0
    CAN_INSPECT = 2**1
    CAN_MODIFY = 2**2
    NOT_A_FLAG = "text"
    ENABLED_BY_DEFAULT = True
    helper_value = 16


@pytest.fixture
def example_flags():
    """A fresh ExampleFlags instance with an empty mask."""
    return ExampleFlags()


@pytest.fixture
def permission_flags():
    return PermissionFlags()


@pytest.fixture
def on_modify():
    """A mock to register as the on-modify callback."""
    return MagicMock()


@pytest.fixture
def restore_config():
    """Put the global config back the way it was after the test."""
    saved = {
        "NAME_STYLE": default_app_config.NAME_STYLE,
        "MASK_WIDTH": default_app_config.MASK_WIDTH,
        "LOG_DETAIL_LEVEL": default_app_config.LOG_DETAIL_LEVEL,
    }
    yield default_app_config
    default_app_config.load_from_dict(saved)


@pytest.fixture
def captured_logs():
    """Capture log lines with debug output up to debug2 enabled; yields a reader for them."""
    previous_level = get_detail_level()
    set_detail_level(2)
    start_message_capture()
    yield get_stored_messages
    stop_message_capture()
    set_detail_level(previous_level)
