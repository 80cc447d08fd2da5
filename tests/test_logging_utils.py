"""Tests for the logging helpers."""

import logging

from rnastruct.core.logging_utils import get_logger, set_level


def test_get_logger_name():
    assert get_logger("rnastruct.parsers.vienna").name == "rnastruct.parsers.vienna"


def test_set_level_applies_to_children():
    root = logging.getLogger("rnastruct")
    previous = root.level
    try:
        set_level("debug")
        assert root.level == logging.DEBUG
        assert get_logger("rnastruct.parsers.bpseq").getEffectiveLevel() == logging.DEBUG
        set_level(logging.WARNING)
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
