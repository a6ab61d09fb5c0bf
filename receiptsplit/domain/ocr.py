"""OCR collaborator contract: recognition modes and the client protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from receiptsplit.domain.bill import TextFragment


class OCRMode(str, Enum):
    """Recognition presets; accurate favours precision, fast favours recall."""

    ACCURATE = "accurate"
    FAST = "fast"


@dataclass(frozen=True)
class OCRParameters:
    """Engine settings for one mode.

    ``min_text_height`` is a fraction of image height; shorter detections are
    treated as noise.
    """

    language_correction: bool
    min_text_height: float
    min_confidence: float


MODE_PARAMETERS: dict[OCRMode, OCRParameters] = {
    OCRMode.ACCURATE: OCRParameters(language_correction=True, min_text_height=0.012, min_confidence=0.7),
    OCRMode.FAST: OCRParameters(language_correction=False, min_text_height=0.006, min_confidence=0.5),
}


class OCRClient(Protocol):
    """Anything that can turn image bytes into positioned text fragments.

    Implementations raise ``OCRFailed`` for hard failures. An image with no
    readable text is not a failure: it returns an empty list.
    """

    async def recognize(self, image: bytes, mode: OCRMode) -> list[TextFragment]: ...
