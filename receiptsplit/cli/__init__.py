"""Command-line interface for receiptsplit.

Usage:
    receiptsplit scan <image> [--ocr-url URL] [--locale it_en] [--keep-unpriced] [--save-ocr]
    receiptsplit parse <ocr.json> [--locale it_en] [--keep-unpriced] [--mode accurate|fast]
    receiptsplit serve [--host] [--port]
"""
