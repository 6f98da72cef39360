"""Ingredient analysis endpoints: JSON list, label photo scan, and SSE progress stream."""

import asyncio
import json
import queue
import threading
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import StreamingResponse

from labelscan.config import settings
from labelscan.errors import AnalysisCancelled
from labelscan.logging import get_logger
from labelscan.schemas.analysis import AnalysisResponse, AnalyzeRequest, ResolvedIngredientOut, ScanResponse
from labelscan.services.analyzer import IngredientAnalyzer, ResolvedIngredient
from labelscan.services.ocr.engine import OcrSession
from labelscan.services.parsing.label_parser import require_ingredients

router = APIRouter()
logger = get_logger(__name__)

STREAM_POLL_INTERVAL = 0.05


def get_analyzer() -> IngredientAnalyzer:
    return IngredientAnalyzer()


def new_ocr_session() -> OcrSession:
    return OcrSession()


def _emit_sse(event: str, data: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


@router.post("/analyze", response_model=AnalysisResponse)
def analyze_ingredients(payload: AnalyzeRequest) -> AnalysisResponse:
    ingredients = require_ingredients(payload.ingredients)
    session = get_analyzer().analyze(ingredients, payload.user_age)
    return AnalysisResponse.from_session(session)


def _scan_image(content: bytes, user_age: Optional[str]) -> ScanResponse:
    with new_ocr_session() as ocr:
        result = ocr.extract(content)
    logger.info("scan.ocr confidence=%.2f ingredients=%s", result.confidence, len(result.ingredients))
    ingredients = require_ingredients(result.ingredients)
    session = get_analyzer().analyze(ingredients, user_age)
    return ScanResponse.from_session(session, ocr_text=result.text, ocr_confidence=result.confidence)


@router.post("/scan", response_model=ScanResponse)
async def scan_label(
    image: UploadFile = File(...),
    user_age: str | None = Form(default=None),
) -> ScanResponse:
    content = await image.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Image too large")
    logger.info("scan.start filename=%s bytes=%s", image.filename, len(content))
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _scan_image, content, user_age)


def _run_stream_analysis(
    ingredients: list[str],
    user_age,
    event_queue: queue.Queue,
    cancel_event: threading.Event,
) -> None:
    def on_progress(index: int, item: ResolvedIngredient, completed: int, total: int) -> None:
        data = ResolvedIngredientOut.from_resolved(item).model_dump()
        event_queue.put(("ingredient", {"index": index, "completed": completed, "total": total, **data}))

    try:
        session = get_analyzer().analyze(ingredients, user_age, on_progress=on_progress, cancel_event=cancel_event)
        event_queue.put(("complete", AnalysisResponse.from_session(session).model_dump()))
    except AnalysisCancelled:
        logger.info("analysis.stream.cancelled count=%s", len(ingredients))
    except Exception as e:
        logger.exception("analysis.stream.failed error=%s", e)
        event_queue.put(("error", {"error": "analysis_failed", "detail": str(e)}))


def _on_stream_job_done(job) -> None:
    if job.cancelled():
        logger.info("analysis.stream.job_cancelled")
        return
    exc = job.exception()
    if exc is not None:
        logger.error("analysis.stream.job_failed error=%s", exc)


@router.post("/analyze/stream")
async def stream_analysis(payload: AnalyzeRequest):
    """
    SSE stream: one `ingredient` event per resolved entry (with its input index), then `complete`
    carrying the full analysis. Disconnecting cancels the remaining work.
    """
    ingredients = require_ingredients(payload.ingredients)
    event_queue: queue.Queue = queue.Queue()
    cancel_event = threading.Event()
    job = asyncio.get_running_loop().run_in_executor(
        None, _run_stream_analysis, ingredients, payload.user_age, event_queue, cancel_event
    )
    job.add_done_callback(_on_stream_job_done)

    async def generate():
        try:
            while True:
                try:
                    event, data = event_queue.get_nowait()
                except queue.Empty:
                    if job.done() and event_queue.empty():
                        break
                    await asyncio.sleep(STREAM_POLL_INTERVAL)
                    continue
                yield _emit_sse(event, data)
                if event in ("complete", "error"):
                    break
        finally:
            cancel_event.set()

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive", "X-Accel-Buffering": "no"},
    )
