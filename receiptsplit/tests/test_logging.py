"""Tests for the receiptsplit logger namespace."""

import logging

from receiptsplit.runtime.logging import LOG_FORMAT, LOG_FORMAT_DEBUG, LOG_NAMESPACE, get_logger, set_log_level


def test_loggers_live_under_the_package_namespace() -> None:
    assert get_logger("receiptsplit.receipt.pipeline").name == "receiptsplit.receipt.pipeline"
    assert get_logger("scripts.tool").name == "receiptsplit.scripts.tool"
    assert get_logger(LOG_NAMESPACE).propagate is False


def test_set_log_level_switches_format() -> None:
    root = get_logger(LOG_NAMESPACE)
    previous = root.level
    try:
        set_log_level(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert all(handler.formatter._fmt == LOG_FORMAT_DEBUG for handler in root.handlers)
    finally:
        set_log_level(previous)
