"""Runtime loader for locale keyword presets."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from receiptsplit.domain.errors import UnknownLocaleError
from receiptsplit.receipt.locale_rules import LocaleRules, build_locale_rules
from receiptsplit.runtime.logging import get_logger
from receiptsplit.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_LOCALE = "it_en"


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def default_locale() -> str:
    """Locale preset name from $RECEIPTSPLIT_LOCALE, else the built-in default."""
    return os.environ.get("RECEIPTSPLIT_LOCALE", "").strip() or DEFAULT_LOCALE


def available_locales() -> list[str]:
    """Names of every preset visible to the loader (user and bundled)."""
    p = get_paths()
    names: set[str] = set()
    for directory in (p.locale_rules, p.bundled_locale_rules):
        if directory.is_dir():
            names.update(path.stem for path in directory.glob("*.toml"))
    return sorted(names)


def _resolve_locale_file(name: str) -> Path:
    p = get_paths()
    for directory in (p.locale_rules, p.bundled_locale_rules):
        candidate = directory / f"{name}.toml"
        if candidate.is_file():
            return candidate
    raise UnknownLocaleError(f"Unknown locale preset {name!r}; available: {', '.join(available_locales())}")


@lru_cache(maxsize=8)
def load_locale_rules(name: str | None = None) -> LocaleRules:
    """Load a named locale preset; user presets shadow bundled ones."""
    locale_name = name or default_locale()
    path = _resolve_locale_file(locale_name)
    rules = build_locale_rules(_load_toml(path), name=locale_name)
    logger.debug(
        "Loaded locale %s from %s (%d classifier rules)",
        locale_name,
        path,
        len(rules.classification_rules),
    )
    return rules


def load_locale_rules_file(path: Path) -> LocaleRules:
    """Load a preset from an explicit file path (not cached)."""
    return build_locale_rules(_load_toml(path), name=path.stem)
