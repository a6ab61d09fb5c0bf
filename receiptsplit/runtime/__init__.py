"""Runtime infrastructure for receiptsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Locale preset loading via load_locale_rules()

Usage:
    from receiptsplit.runtime import get_logger, load_locale_rules

    logger = get_logger(__name__)
    rules = load_locale_rules("it_en")
"""

from receiptsplit.runtime.locale_rules import (
    DEFAULT_LOCALE,
    available_locales,
    default_locale,
    load_locale_rules,
    load_locale_rules_file,
)
from receiptsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from receiptsplit.runtime.paths import ProjectPaths, get_paths, reset_paths

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Locale rules
    "DEFAULT_LOCALE",
    "available_locales",
    "default_locale",
    "load_locale_rules",
    "load_locale_rules_file",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
