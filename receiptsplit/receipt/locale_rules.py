"""Locale-dependent keyword sets used by the line parser.

Block-lists, currency markers and quantity markers are data, not logic. A
locale preset is a TOML document (see ``receipt/rules/*.toml``) turned into an
immutable ``LocaleRules`` by ``build_locale_rules``. Loading files from disk is
a runtime concern and lives in ``receiptsplit.runtime.locale_rules``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

MatchMode = Literal["substring", "word", "prefix"]

DEFAULT_MIN_LINE_LENGTH = 2


@dataclass(frozen=True)
class ClassificationRule:
    """A tagged block-list entry; a line matching any keyword is dropped."""

    tag: str
    keywords: tuple[str, ...]
    match: MatchMode = "substring"

    def matches(self, lowered_line: str) -> str | None:
        """Return the first keyword found in ``lowered_line``, or None."""
        for keyword in self.keywords:
            if self.match == "prefix":
                # The keyword must end at a non-letter: "iva:" but not "ivanhoe".
                if re.match(rf"{re.escape(keyword)}(?![^\W\d_])", lowered_line):
                    return keyword
            elif self.match == "word":
                if re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", lowered_line):
                    return keyword
            elif keyword in lowered_line:
                return keyword
        return None


@dataclass(frozen=True)
class LocaleRules:
    """All keyword sets for one locale preset."""

    name: str
    classification_rules: tuple[ClassificationRule, ...]
    currency_glyphs: frozenset[str]
    currency_words: frozenset[str]
    price_words: frozenset[str]
    tax_words: tuple[str, ...]
    quantity_markers: tuple[str, ...]
    count_units: frozenset[str]
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH

    def is_currency_marker(self, token: str) -> bool:
        """True for a standalone currency code/name or a glyph-only token."""
        lowered = token.lower()
        if lowered in self.currency_words:
            return True
        return bool(token) and all(ch in self.currency_glyphs for ch in token)

    def is_price_word(self, token: str) -> bool:
        return token.lower() in self.price_words

    def is_marker(self, token: str) -> bool:
        return self.is_currency_marker(token) or self.is_price_word(token)

    def is_tax_word(self, token: str) -> bool:
        """True if the token names a tax (``IVA``, ``IVA:``, ``VAT``, ``imposta``...)."""
        match = re.match(r"[^a-z]*([a-z]+)", token.lower())
        return match is not None and match.group(1) in self.tax_words

    def strip_currency_glyphs(self, token: str) -> str:
        return "".join(ch for ch in token if ch not in self.currency_glyphs)

    def has_currency_glyph(self, token: str) -> bool:
        return any(ch in self.currency_glyphs for ch in token)


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize a keywords value from TOML into a lowercased tuple."""
    if isinstance(raw, str):
        value = raw.strip().lower()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip().lower() for v in raw if str(v).strip())
    return tuple()


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name, {})
    return value if isinstance(value, Mapping) else {}


def build_locale_rules(config: Mapping[str, Any], name: str | None = None) -> LocaleRules:
    """Build ``LocaleRules`` from a parsed TOML mapping."""
    classifier = _section(config, "classifier")
    price = _section(config, "price")
    quantity = _section(config, "quantity")

    rules: list[ClassificationRule] = []
    for rule in classifier.get("rules", []):
        if not isinstance(rule, Mapping):
            continue
        keywords = _normalize_keywords(rule.get("keywords"))
        if not keywords:
            continue
        match = str(rule.get("match", "substring")).strip().lower()
        if match not in ("substring", "word", "prefix"):
            raise ValueError(f"Unsupported match mode {match!r} in classifier rule {rule.get('tag')!r}")
        rules.append(
            ClassificationRule(
                tag=str(rule.get("tag") or "blocked").strip(),
                keywords=keywords,
                match=match,  # type: ignore[arg-type]
            )
        )

    glyphs: set[str] = set()
    for raw_glyph in price.get("currency_glyphs", []):
        glyphs.update(str(raw_glyph).strip())

    return LocaleRules(
        name=name or str(config.get("name", "custom")),
        classification_rules=tuple(rules),
        currency_glyphs=frozenset(glyphs),
        currency_words=frozenset(_normalize_keywords(price.get("currency_words"))),
        price_words=frozenset(_normalize_keywords(price.get("price_words"))),
        tax_words=_normalize_keywords(price.get("tax_words")),
        quantity_markers=_normalize_keywords(quantity.get("markers")),
        count_units=frozenset(_normalize_keywords(quantity.get("count_units"))),
        min_line_length=int(classifier.get("min_length", DEFAULT_MIN_LINE_LENGTH)),
    )

