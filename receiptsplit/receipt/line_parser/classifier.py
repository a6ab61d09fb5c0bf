"""Keep/drop decision for reconstructed receipt lines."""

from __future__ import annotations

from dataclasses import dataclass

from ..locale_rules import LocaleRules

TOO_SHORT_TAG = "too_short"


@dataclass(frozen=True)
class LineClassification:
    """Outcome of classifying one line; ``tag`` names the rule that dropped it."""

    keep: bool
    tag: str | None = None
    keyword: str | None = None


def classify_line(line: str, rules: LocaleRules) -> LineClassification:
    """Run the locale's tagged block-list rules in order; first match drops the line."""
    stripped = line.strip()
    if len(stripped) < rules.min_line_length:
        return LineClassification(keep=False, tag=TOO_SHORT_TAG)

    lowered = stripped.lower()
    for rule in rules.classification_rules:
        keyword = rule.matches(lowered)
        if keyword is not None:
            return LineClassification(keep=False, tag=rule.tag, keyword=keyword)
    return LineClassification(keep=True)


def is_item_candidate(line: str, rules: LocaleRules) -> bool:
    return classify_line(line, rules).keep
