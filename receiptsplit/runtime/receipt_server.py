"""FastAPI server exposing one bill session to a phone or web client."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from receiptsplit.application import BillSession, RecognitionOrchestrator
from receiptsplit.domain.errors import AnalysisInProgressError
from receiptsplit.domain.ocr import OCRClient
from receiptsplit.receipt.locale_rules import LocaleRules
from receiptsplit.receipt.pipeline import ParseOptions
from receiptsplit.runtime.locale_rules import load_locale_rules
from receiptsplit.runtime.logging import get_logger
from receiptsplit.runtime.ocr_client import HttpOCRClient

logger = get_logger(__name__)

_STATUS_CODES = {"success": 200, "empty": 422, "failed": 502}


class QuantityUpdate(BaseModel):
    quantity: int = Field(ge=1)


class PeopleUpdate(BaseModel):
    people: list[str]


class MoveRequest(BaseModel):
    source: int
    destination: int


def _session_payload(session: BillSession) -> dict[str, Any]:
    return {
        "items": [item.to_dict() for item in session.items],
        "is_analyzing": session.is_analyzing,
        "last_error": session.last_error,
    }


def create_app(
    ocr_client: OCRClient | None = None,
    rules: LocaleRules | None = None,
    options: ParseOptions | None = None,
) -> FastAPI:
    """Build the app around a fresh bill session."""
    session = BillSession()
    orchestrator = RecognitionOrchestrator(
        session=session,
        ocr_client=ocr_client or HttpOCRClient(),
        rules=rules or load_locale_rules(),
        options=options,
    )

    app = FastAPI(title="Receipt Splitter")
    app.state.session = session
    app.state.orchestrator = orchestrator

    def edited(operation: Callable[[], None]) -> dict[str, Any]:
        operation()
        return _session_payload(session)

    @app.post("/analyze")
    async def analyze(request: Request) -> JSONResponse:
        """Receive a receipt image and replace the bill's items with what was recognized."""
        form = await request.form()
        upload = None
        for key, value in form.items():
            logger.debug("Form field: key=%r, type=%s", key, type(value))
            if hasattr(value, "read"):
                upload = value
                break

        if upload is None:
            return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

        contents = await upload.read()  # type: ignore[union-attr]
        try:
            result = await orchestrator.analyze(contents)
        except AnalysisInProgressError as e:
            return JSONResponse({"status": "busy", "message": str(e)}, status_code=409)

        body = {
            "status": result.status,
            "message": result.message,
            "mode": result.mode.value if result.mode else None,
            **_session_payload(session),
        }
        return JSONResponse(body, status_code=_STATUS_CODES[result.status])

    @app.get("/items")
    async def list_items() -> dict[str, Any]:
        return _session_payload(session)

    @app.post("/items/{index}/toggle")
    async def toggle_item(index: int) -> dict[str, Any]:
        return edited(lambda: session.toggle_selected(index))

    @app.put("/items/{index}/quantity")
    async def update_quantity(index: int, update: QuantityUpdate) -> dict[str, Any]:
        return edited(lambda: session.set_quantity(index, update.quantity))

    @app.put("/items/{index}/people")
    async def update_people(index: int, update: PeopleUpdate) -> dict[str, Any]:
        return edited(lambda: session.set_assigned_people(index, update.people))

    @app.delete("/items/{index}")
    async def delete_item(index: int) -> dict[str, Any]:
        return edited(lambda: session.delete_item(index))

    @app.post("/items/move")
    async def move_item(move: MoveRequest) -> dict[str, Any]:
        return edited(lambda: session.move_item(move.source, move.destination))

    @app.post("/reset")
    async def reset() -> dict[str, Any]:
        return edited(session.reset)

    @app.get("/people/{person_id}/total")
    async def person_total(person_id: str) -> dict[str, str]:
        return {"person_id": person_id, "total": str(session.total_for(person_id))}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    return app
