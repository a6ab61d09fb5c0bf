"""Receipt CLI command handlers."""

from __future__ import annotations

import argparse
import asyncio
import json
from collections.abc import Sequence
from pathlib import Path

from receiptsplit.domain.bill import BillItem
from receiptsplit.domain.errors import OCRFailed, UnknownLocaleError
from receiptsplit.domain.ocr import MODE_PARAMETERS, OCRMode
from receiptsplit.receipt.locale_rules import LocaleRules
from receiptsplit.receipt.ocr_helpers import fragments_from_json
from receiptsplit.receipt.pipeline import ParseOptions, run_pipeline
from receiptsplit.runtime import get_logger, load_locale_rules

logger = get_logger(__name__)


def _load_rules(locale: str | None) -> LocaleRules | None:
    try:
        return load_locale_rules(locale)
    except UnknownLocaleError as exc:
        print(f"Error: {exc}")
        return None


def _format_price(item: BillItem) -> str:
    return f"{item.price:.2f}" if item.price is not None else "--"


def print_items(items: Sequence[BillItem]) -> None:
    """Display recognized items for review."""
    print("\n" + "=" * 60)
    print(f"ITEMS ({len(items)})")
    print("=" * 60)
    for i, item in enumerate(items, 1):
        qty_str = f" x{item.quantity}" if item.quantity > 1 else ""
        print(f"  {i}. {item.name}{qty_str} - {_format_price(item)}")
    print("=" * 60 + "\n")


def cmd_scan(args: argparse.Namespace) -> int:
    """Recognize a receipt image through the OCR service and list its items."""
    from receiptsplit.application import BillSession, RecognitionOrchestrator
    from receiptsplit.runtime.ocr_client import HttpOCRClient, save_ocr_json

    image_path = Path(args.image)
    if not image_path.exists():
        logger.error("Receipt file not found: %s", image_path)
        print(f"Error: Receipt file not found: {image_path}")
        return 1

    rules = _load_rules(args.locale)
    if rules is None:
        return 1

    client = HttpOCRClient(base_url=args.ocr_url)
    session = BillSession()
    orchestrator = RecognitionOrchestrator(
        session=session,
        ocr_client=client,
        rules=rules,
        options=ParseOptions(require_price=not args.keep_unpriced),
    )
    result = asyncio.run(orchestrator.analyze(image_path.read_bytes()))

    if args.save_ocr:
        for mode, raw_result in client.last_raw_results.items():
            saved = save_ocr_json(raw_result, image_path, mode)
            print(f"Saved OCR JSON: {saved}")

    if result.status == "failed":
        print(f"OCR failed: {result.message}")
        print("Make sure the OCR service is running before scanning receipts.")
        return 1
    if result.status == "empty":
        print(result.message)
        return 1

    assert result.mode is not None
    print(f"Recognized with {result.mode.value} pass")
    print_items(session.items)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """Run the pipeline over cached OCR JSON, without an OCR service."""
    json_path = Path(args.ocr_json)
    if not json_path.exists():
        print(f"Error: OCR JSON not found: {json_path}")
        return 1

    rules = _load_rules(args.locale)
    if rules is None:
        return 1

    mode = OCRMode(args.mode)
    try:
        fragments = fragments_from_json(json.loads(json_path.read_text()), MODE_PARAMETERS[mode])
    except (ValueError, OCRFailed) as exc:
        print(f"Error: could not read {json_path}: {exc}")
        return 1

    run = run_pipeline(fragments, rules, ParseOptions(require_price=not args.keep_unpriced))
    if args.show_lines:
        print("\nLINES")
        for line in run.lines:
            print(f"  {line}")
    if not run.items:
        print("No items found.")
        return 1
    print_items(run.items)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server for a bill session."""
    import uvicorn

    from receiptsplit.runtime.ocr_client import HttpOCRClient
    from receiptsplit.runtime.receipt_server import create_app

    rules = _load_rules(args.locale)
    if rules is None:
        return 1

    app = create_app(ocr_client=HttpOCRClient(base_url=args.ocr_url), rules=rules)
    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Upload endpoint: http://{args.host}:{args.port}/analyze")
    print("Press Ctrl+C to stop")

    uvicorn.run(app, host=args.host, port=args.port)
    return 0
