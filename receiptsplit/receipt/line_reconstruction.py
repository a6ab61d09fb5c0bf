"""Group positioned OCR fragments into receipt lines.

Fragments arrive unordered, one per recognized text span. A fragment joins the
first existing bucket whose running y estimate is within ``Y_TOLERANCE``;
otherwise it seeds a new bucket. The estimate drifts toward each new member
(average of old estimate and new center), so slightly tilted lines still
cluster.

This is a greedy, order-dependent heuristic, not an optimal segmentation:
the same fragments in a different order can cluster differently. Callers must
pass fragments in the order the OCR engine produced them so results are
reproducible.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from receiptsplit.domain.bill import TextFragment

# How close two y centers must be (normalized height) to share a line
Y_TOLERANCE = 0.02


@dataclass
class LineBucket:
    """Fragments believed to sit on the same visual line."""

    y_estimate: float
    fragments: list[tuple[float, str]] = field(default_factory=list)

    def add(self, fragment: TextFragment) -> None:
        self.fragments.append((fragment.x_center, fragment.text))
        self.y_estimate = (self.y_estimate + fragment.y_center) / 2

    def text(self) -> str:
        ordered = sorted(self.fragments, key=lambda piece: piece[0])
        joined = " ".join(text for _, text in ordered)
        return re.sub(r"\s+", " ", joined).strip()


def bucket_fragments(fragments: Iterable[TextFragment], tolerance: float = Y_TOLERANCE) -> list[LineBucket]:
    """Assign fragments to buckets in input order."""
    buckets: list[LineBucket] = []
    for fragment in fragments:
        if not fragment.text.strip():
            continue
        for bucket in buckets:
            if abs(bucket.y_estimate - fragment.y_center) < tolerance:
                bucket.add(fragment)
                break
        else:
            buckets.append(LineBucket(y_estimate=fragment.y_center, fragments=[(fragment.x_center, fragment.text)]))
    return buckets


def reconstruct_lines(fragments: Iterable[TextFragment], tolerance: float = Y_TOLERANCE) -> list[str]:
    """Return receipt lines ordered top to bottom.

    y = 1 is the top of the page, so buckets are sorted by descending y.
    ``sorted`` is stable, so buckets with equal estimates keep creation order.
    """
    buckets = bucket_fragments(fragments, tolerance)
    buckets.sort(key=lambda bucket: bucket.y_estimate, reverse=True)
    lines = [bucket.text() for bucket in buckets]
    return [line for line in lines if line]
