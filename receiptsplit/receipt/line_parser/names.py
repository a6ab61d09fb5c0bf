"""Item name building, dedup keys and display cleanup."""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence

from ..locale_rules import LocaleRules


def build_name(tokens: Sequence[str], consumed: Collection[int], rules: LocaleRules) -> str:
    """Join the tokens left after removing price, quantity and marker tokens."""
    return " ".join(token for i, token in enumerate(tokens) if i not in consumed and not rules.is_marker(token))


def normalize_name(name: str) -> str:
    """Dedup key form: lowercase ASCII letters, digits and single spaces only."""
    lowered = re.sub(r"\s+", " ", name.lower())
    stripped = re.sub(r"[^a-z0-9 ]", "", lowered)
    return re.sub(r" +", " ", stripped).strip()


def prettify_name(name: str) -> str:
    """Display form: collapse whitespace, keep case and punctuation."""
    return re.sub(r"\s+", " ", name).strip()
