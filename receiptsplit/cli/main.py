#!/usr/bin/env python3

import argparse
from collections.abc import Sequence

from receiptsplit.runtime.ocr_client import default_ocr_url


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt item recognition and bill splitting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan <image>               Recognize a receipt image via the OCR service
  parse <ocr.json>           Parse cached OCR output (no OCR service needed)
  serve [--host] [--port]    Start the bill session HTTP server

Environment:
  RECEIPTSPLIT_LOCALE        Default locale preset (en, it_en)
  RECEIPTSPLIT_LOG_LEVEL     DEBUG, INFO, WARNING, ERROR
  OCR_SERVICE_URL            OCR service base URL
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_parse_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--locale", default=None, help="Locale preset name (default: $RECEIPTSPLIT_LOCALE or it_en)")
        sub.add_argument(
            "--keep-unpriced",
            action="store_true",
            help="Keep lines that have a name but no price as unpriced items",
        )

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Recognize a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument("--ocr-url", default=default_ocr_url(), help="OCR service URL")
    scan_parser.add_argument("--save-ocr", action="store_true", help="Save raw OCR JSON under receipts/ocr_json/")
    add_parse_options(scan_parser)

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse cached OCR JSON")
    parse_parser.add_argument("ocr_json", help="Path to OCR JSON (detection payload or fragment list)")
    parse_parser.add_argument(
        "--mode",
        choices=["accurate", "fast"],
        default="accurate",
        help="Filtering thresholds to apply to a detection payload (default: accurate)",
    )
    parse_parser.add_argument("--show-lines", action="store_true", help="Print reconstructed lines")
    add_parse_options(parse_parser)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start bill session server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")
    serve_parser.add_argument("--ocr-url", default=default_ocr_url(), help="OCR service URL")
    serve_parser.add_argument("--locale", default=None, help="Locale preset name")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "scan":
        from receiptsplit.cli.receipt import cmd_scan

        return cmd_scan(args)
    elif args.command == "parse":
        from receiptsplit.cli.receipt import cmd_parse

        return cmd_parse(args)
    elif args.command == "serve":
        from receiptsplit.cli.receipt import cmd_serve

        return cmd_serve(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
