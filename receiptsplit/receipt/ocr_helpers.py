"""Pure OCR transformation helpers: image preprocessing and payload parsing."""

import io
from typing import Any

from receiptsplit.domain.bill import TextFragment
from receiptsplit.domain.errors import OCRFailed
from receiptsplit.domain.ocr import OCRParameters

MAX_IMAGE_DIMENSION = 2000  # Downscale if either dimension exceeds this
OCR_IMAGE_PADDING = 50  # White padding around image to prevent edge truncation
CONTRAST_BOOST = 1.25


def preprocess_image_bytes(
    image_bytes: bytes,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    padding: int = OCR_IMAGE_PADDING,
    contrast: float = CONTRAST_BOOST,
) -> bytes:
    """
    Prepare a receipt photo for OCR.

    Applies EXIF orientation, downscales so the longest side fits
    ``max_dimension``, converts to grayscale with a contrast boost, and adds
    white padding so text at the edges is not truncated.

    Args:
        image_bytes: Image data as bytes
        max_dimension: Maximum allowed dimension (width or height)
        padding: White padding to add around image (pixels)
        contrast: Contrast enhancement factor (1.0 = unchanged)

    Returns:
        JPEG bytes ready to send to the OCR service

    Raises:
        OCRFailed: If the bytes are not a readable image
    """
    from PIL import Image, ImageEnhance, ImageOps, UnidentifiedImageError

    try:
        img = Image.open(io.BytesIO(image_bytes))
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError) as e:
        raise OCRFailed(f"Could not read image: {e}") from e

    width, height = img.size
    if width > max_dimension or height > max_dimension:
        if width > height:
            new_width = max_dimension
            new_height = int(height * (max_dimension / width))
        else:
            new_height = max_dimension
            new_width = int(width * (max_dimension / height))
        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    img = ImageOps.grayscale(img)
    if contrast != 1.0:
        img = ImageEnhance.Contrast(img).enhance(contrast)

    if padding > 0:
        img = ImageOps.expand(img, border=padding, fill="white")

    buffer = io.BytesIO()
    img.convert("RGB").save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def detections_to_fragments(
    raw_result: dict[str, Any],
    params: OCRParameters,
    padding: int = OCR_IMAGE_PADDING,
) -> list[TextFragment]:
    """
    Transform a raw PaddleOCR-style payload into normalized text fragments.

    The payload carries the padded image size and
    ``detections: [[bbox, [text, confidence]], ...]`` with pixel bboxes whose
    y grows downward. Fragments come back in detection order with
    bottom-origin y (1.0 = top of the page), padding removed.

    Detections below ``params.min_confidence`` or shorter than
    ``params.min_text_height`` (fraction of image height) are dropped.

    Raises:
        OCRFailed: If the payload is missing its image size or is malformed
    """
    try:
        image_width = float(raw_result["image_width"]) - 2 * padding
        image_height = float(raw_result["image_height"]) - 2 * padding
    except (KeyError, TypeError, ValueError) as e:
        raise OCRFailed(f"Malformed OCR payload: {e}") from e
    if image_width <= 0 or image_height <= 0:
        raise OCRFailed(f"Malformed OCR payload: image size {image_width}x{image_height}")

    detections = raw_result.get("detections", [])
    if not isinstance(detections, list):
        raise OCRFailed(f"Malformed OCR payload: detections must be a list, got {type(detections).__name__}")

    fragments: list[TextFragment] = []
    for detection in detections:
        try:
            bbox, (text, confidence) = detection
            confidence = float(confidence)
            xs = [float(point[0]) - padding for point in bbox]
            ys = [float(point[1]) - padding for point in bbox]
        except (TypeError, ValueError, IndexError) as e:
            raise OCRFailed(f"Malformed OCR detection {detection!r}: {e}") from e

        text = str(text).strip()
        if not text or not xs or not ys:
            continue
        if confidence < params.min_confidence:
            continue
        if (max(ys) - min(ys)) / image_height < params.min_text_height:
            continue

        x_center = _clamp((min(xs) + max(xs)) / 2 / image_width)
        y_center_from_top = _clamp((min(ys) + max(ys)) / 2 / image_height)
        fragments.append(TextFragment(text=text, x_center=x_center, y_center=1.0 - y_center_from_top))

    return fragments


def fragments_from_json(data: Any, params: OCRParameters, padding: int = OCR_IMAGE_PADDING) -> list[TextFragment]:
    """
    Load fragments from cached OCR JSON.

    Accepts either a raw detection payload (see ``detections_to_fragments``)
    or a list of ``{"text", "x", "y"}`` objects already in normalized,
    bottom-origin coordinates.
    """
    if isinstance(data, dict) and "detections" in data:
        return detections_to_fragments(data, params, padding=padding)
    if isinstance(data, dict):
        data = data.get("fragments", [])
    if not isinstance(data, list):
        raise OCRFailed("Cached OCR JSON must be a detection payload or a list of fragments")

    fragments: list[TextFragment] = []
    for entry in data:
        try:
            fragments.append(
                TextFragment(text=str(entry["text"]), x_center=float(entry["x"]), y_center=float(entry["y"]))
            )
        except (KeyError, TypeError, ValueError) as e:
            raise OCRFailed(f"Malformed cached fragment {entry!r}: {e}") from e
    return fragments
