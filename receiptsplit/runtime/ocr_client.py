"""OCR collaborator implementations: HTTP service client and cached results."""

from __future__ import annotations

import json
import os
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx

from receiptsplit.domain.bill import TextFragment
from receiptsplit.domain.errors import OCRFailed
from receiptsplit.domain.ocr import MODE_PARAMETERS, OCRMode
from receiptsplit.receipt.ocr_helpers import OCR_IMAGE_PADDING, detections_to_fragments, preprocess_image_bytes
from receiptsplit.runtime.logging import get_logger
from receiptsplit.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_OCR_URL = "http://localhost:8001"
DEFAULT_TIMEOUT = 60.0


def default_ocr_url() -> str:
    return os.environ.get("OCR_SERVICE_URL", DEFAULT_OCR_URL)


class HttpOCRClient:
    """Send receipt images to an OCR HTTP service.

    The service takes a multipart ``file`` plus the mode's parameters as form
    fields, and answers with a PaddleOCR-style detection payload.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        padding: int = OCR_IMAGE_PADDING,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or default_ocr_url()).rstrip("/")
        self.timeout = timeout
        self.padding = padding
        self._transport = transport
        # Last raw payload per mode, kept for debugging/caching.
        self.last_raw_results: dict[OCRMode, dict[str, Any]] = {}

    async def recognize(self, image: bytes, mode: OCRMode) -> list[TextFragment]:
        params = MODE_PARAMETERS[mode]
        prepared = preprocess_image_bytes(image, padding=self.padding)
        logger.info("Sending receipt to OCR service at %s (mode=%s)...", self.base_url, mode.value)

        try:
            start_time = time.time()
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/ocr",
                    files={"file": ("receipt.jpg", prepared, "image/jpeg")},
                    data={
                        "mode": mode.value,
                        "language_correction": "true" if params.language_correction else "false",
                        "min_text_height": str(params.min_text_height),
                    },
                )
            logger.info("OCR service returned in %.2f seconds", time.time() - start_time)
        except httpx.RequestError as e:
            logger.error("Failed to connect to OCR service: %s", e)
            raise OCRFailed(f"Failed to connect to OCR service: {e}") from e

        if response.status_code != 200:
            logger.error("OCR service error: %s", response.status_code)
            raise OCRFailed(f"OCR service error: {response.status_code}")

        try:
            raw_result = response.json()
        except ValueError as e:
            raise OCRFailed(f"OCR service returned invalid JSON: {e}") from e
        if not isinstance(raw_result, dict):
            raise OCRFailed("OCR service returned an unexpected payload")

        self.last_raw_results[mode] = raw_result
        fragments = detections_to_fragments(raw_result, params, padding=self.padding)
        logger.debug("OCR %s pass: %d fragments", mode.value, len(fragments))
        return fragments


class StaticOCRClient:
    """Serve pre-recognized fragments per mode (cached OCR output, fixtures).

    ``failure`` fails every pass; ``failures`` fails only the listed modes.
    """

    def __init__(
        self,
        fragments: Mapping[OCRMode, Sequence[TextFragment]] | Sequence[TextFragment],
        failure: OCRFailed | None = None,
        failures: Mapping[OCRMode, OCRFailed] | None = None,
    ) -> None:
        if isinstance(fragments, Mapping):
            self._fragments = {mode: list(found) for mode, found in fragments.items()}
        else:
            self._fragments = {mode: list(fragments) for mode in OCRMode}
        self._failures: dict[OCRMode, OCRFailed] = {mode: failure for mode in OCRMode} if failure else {}
        self._failures.update(failures or {})
        self.calls: list[OCRMode] = []

    async def recognize(self, image: bytes, mode: OCRMode) -> list[TextFragment]:
        self.calls.append(mode)
        if mode in self._failures:
            raise self._failures[mode]
        return list(self._fragments.get(mode, []))


def save_ocr_json(ocr_result: dict[str, Any], image_path: Path, mode: OCRMode) -> Path:
    """Save a raw OCR payload next to other cached results for later ``parse`` runs."""
    ocr_json_dir = get_paths().receipts_ocr_json
    ocr_json_dir.mkdir(parents=True, exist_ok=True)
    ocr_json_path = ocr_json_dir / f"{image_path.stem}.{mode.value}.json"
    ocr_json_path.write_text(json.dumps(ocr_result, indent=2))
    logger.debug("OCR JSON saved to: %s", ocr_json_path)
    return ocr_json_path
