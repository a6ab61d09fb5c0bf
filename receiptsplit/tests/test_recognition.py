"""Tests for the accurate-then-fast recognition orchestrator."""

import asyncio
from decimal import Decimal

import pytest

from receiptsplit.application import BillSession, RecognitionOrchestrator
from receiptsplit.application.recognition import EMPTY_RESULT_MESSAGE, RecognitionState
from receiptsplit.domain.bill import BillItem, TextFragment
from receiptsplit.domain.errors import AnalysisInProgressError, NoPriceableLines, NoTextFound, OCRFailed
from receiptsplit.domain.ocr import OCRMode
from receiptsplit.receipt.locale_rules import LocaleRules
from receiptsplit.runtime.ocr_client import StaticOCRClient

IMAGE = b"fake-image"

BURGER_LINE = [TextFragment("Burger", 0.2, 0.8), TextFragment("7.99", 0.8, 0.8)]


def _orchestrator(client: StaticOCRClient, rules: LocaleRules) -> RecognitionOrchestrator:
    return RecognitionOrchestrator(session=BillSession(), ocr_client=client, rules=rules)


def test_accurate_pass_success_skips_fast(en_rules: LocaleRules) -> None:
    client = StaticOCRClient({OCRMode.ACCURATE: BURGER_LINE, OCRMode.FAST: []})
    orchestrator = _orchestrator(client, en_rules)

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert result.status == "success"
    assert result.mode is OCRMode.ACCURATE
    assert client.calls == [OCRMode.ACCURATE]
    assert [item.name for item in orchestrator.session.items] == ["Burger"]
    assert orchestrator.state is RecognitionState.SUCCESS
    assert orchestrator.session.bill_image == IMAGE


def test_fast_pass_runs_when_accurate_is_empty(en_rules: LocaleRules) -> None:
    client = StaticOCRClient({OCRMode.ACCURATE: [], OCRMode.FAST: BURGER_LINE})
    orchestrator = _orchestrator(client, en_rules)

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert client.calls == [OCRMode.ACCURATE, OCRMode.FAST]
    assert result.status == "success"
    assert result.mode is OCRMode.FAST
    assert [(item.name, item.price) for item in orchestrator.session.items] == [("Burger", Decimal("7.99"))]


def test_both_passes_empty(en_rules: LocaleRules) -> None:
    client = StaticOCRClient([])
    orchestrator = _orchestrator(client, en_rules)

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert result.status == "empty"
    assert isinstance(result.error, NoTextFound)
    assert result.message == EMPTY_RESULT_MESSAGE
    assert orchestrator.session.last_error == EMPTY_RESULT_MESSAGE
    assert orchestrator.state is RecognitionState.EMPTY


def test_text_without_prices_is_no_priceable_lines(en_rules: LocaleRules) -> None:
    client = StaticOCRClient([TextFragment("Thank you for visiting", 0.5, 0.5)])
    orchestrator = _orchestrator(client, en_rules)

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert result.status == "empty"
    assert isinstance(result.error, NoPriceableLines)


def test_empty_result_keeps_previous_items(en_rules: LocaleRules) -> None:
    orchestrator = _orchestrator(StaticOCRClient([]), en_rules)
    previous = BillItem(name="Soup", price=Decimal("4.50"))
    orchestrator.session.commit([previous])

    asyncio.run(orchestrator.analyze(IMAGE))

    assert orchestrator.session.items == [previous]


def test_ocr_failure_is_terminal(en_rules: LocaleRules) -> None:
    client = StaticOCRClient([], failure=OCRFailed("service unavailable"))
    orchestrator = _orchestrator(client, en_rules)

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert result.status == "failed"
    assert result.message == "service unavailable"
    assert client.calls == [OCRMode.ACCURATE]
    assert orchestrator.session.last_error == "service unavailable"
    assert orchestrator.state is RecognitionState.FAILED
    assert not orchestrator.session.is_analyzing


def test_ocr_failure_on_fast_pass_is_terminal(en_rules: LocaleRules) -> None:
    client = StaticOCRClient(
        {OCRMode.ACCURATE: [], OCRMode.FAST: BURGER_LINE},
        failures={OCRMode.FAST: OCRFailed("fast pass timed out")},
    )
    orchestrator = _orchestrator(client, en_rules)
    previous = BillItem(name="Soup", price=Decimal("4.50"))
    orchestrator.session.commit([previous])

    result = asyncio.run(orchestrator.analyze(IMAGE))

    assert client.calls == [OCRMode.ACCURATE, OCRMode.FAST]
    assert result.status == "failed"
    assert result.mode is OCRMode.FAST
    assert orchestrator.session.items == [previous]
    assert orchestrator.session.last_error == "fast pass timed out"
    assert orchestrator.state is RecognitionState.FAILED


def test_success_replaces_previous_batch_and_clears_error(en_rules: LocaleRules) -> None:
    orchestrator = _orchestrator(StaticOCRClient(BURGER_LINE), en_rules)
    orchestrator.session.commit([BillItem(name="Soup", price=Decimal("4.50"))])
    orchestrator.session.set_error("old error")

    asyncio.run(orchestrator.analyze(IMAGE))

    assert [item.name for item in orchestrator.session.items] == ["Burger"]
    assert orchestrator.session.last_error is None


def test_cancelled_analysis_commits_nothing(en_rules: LocaleRules) -> None:
    orchestrator = _orchestrator(StaticOCRClient(BURGER_LINE), en_rules)
    previous = BillItem(name="Soup", price=Decimal("4.50"))
    orchestrator.session.commit([previous])

    result = asyncio.run(orchestrator.analyze(IMAGE, cancelled=lambda: True))

    assert result.status == "cancelled"
    assert orchestrator.session.items == [previous]
    assert orchestrator.state is RecognitionState.IDLE
    assert not orchestrator.session.is_analyzing


def test_concurrent_analysis_is_rejected(en_rules: LocaleRules) -> None:
    client = StaticOCRClient(BURGER_LINE)
    orchestrator = _orchestrator(client, en_rules)
    orchestrator.session.begin_analysis()

    with pytest.raises(AnalysisInProgressError):
        asyncio.run(orchestrator.analyze(IMAGE))

    assert client.calls == []


def test_analyzing_flag_is_visible_to_listeners(en_rules: LocaleRules) -> None:
    orchestrator = _orchestrator(StaticOCRClient(BURGER_LINE), en_rules)
    seen: list[bool] = []
    orchestrator.session.subscribe(lambda session: seen.append(session.is_analyzing))

    asyncio.run(orchestrator.analyze(IMAGE))

    assert seen[0] is True
    assert seen[-1] is False
