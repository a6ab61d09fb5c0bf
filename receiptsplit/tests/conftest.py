"""Shared pytest fixtures for receiptsplit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from receiptsplit.receipt.locale_rules import LocaleRules
from receiptsplit.runtime.locale_rules import load_locale_rules
from receiptsplit.runtime.paths import reset_paths


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point RECEIPTSPLIT_HOME at a temp dir so user config never leaks into tests."""
    monkeypatch.setenv("RECEIPTSPLIT_HOME", str(tmp_path))
    monkeypatch.delenv("RECEIPTSPLIT_LOCALE", raising=False)
    reset_paths()
    load_locale_rules.cache_clear()
    yield tmp_path
    reset_paths()
    load_locale_rules.cache_clear()


@pytest.fixture
def it_en_rules() -> LocaleRules:
    return load_locale_rules("it_en")


@pytest.fixture
def en_rules() -> LocaleRules:
    return load_locale_rules("en")
