"""
API routes for training log parsing.

The editor sends the raw document text on every request; nothing parsed is
stored server side. Statistics share one application-level cache, scoped by
a digest of the document so concurrent clients never read each other's entries.
"""

import hashlib
import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, Field

from training_log_api.config import settings
from training_log_api.models import DateRange, StatsInterval, Suggestion
from training_log_api.parsers.log_parser import parse_content
from training_log_api.parsers.models import TrainingSession
from training_log_api.services.export_service import ExportService
from training_log_api.services.statistics_service import StatisticsCache, StatisticsService
from training_log_api.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter()

statistics_service = StatisticsService(StatisticsCache(ttl_seconds=settings.STATS_CACHE_TTL_SECONDS))

STATISTICS_KINDS = ("exercises", "progress", "completion", "volume")

# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------


class DocumentRequest(BaseModel):
    """Request carrying a whole training log document"""
    text: str = Field(..., max_length=settings.MAX_DOCUMENT_LENGTH, description="Raw log text")


class StatisticsRequest(DocumentRequest):
    exercise: Optional[str] = Field(default=None, description="Exercise name, required for progress")
    interval: StatsInterval = "week"
    date_range: DateRange = "alltime"


class ParseResponse(BaseModel):
    sessions: List[TrainingSession]
    session_count: int


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/parse", response_model=ParseResponse)
def parse_document(request: DocumentRequest) -> ParseResponse:
    """Parse a training log into sessions."""
    sessions = parse_content(request.text)
    logger.info(f"Parsed {len(sessions)} sessions from {len(request.text)} characters")
    return ParseResponse(sessions=sessions, session_count=len(sessions))


@router.post("/export/notation", response_class=PlainTextResponse)
def export_notation(request: DocumentRequest) -> str:
    """Re-render the document in canonical notation."""
    return ExportService.render_notation(parse_content(request.text))


@router.post("/export/csv")
def export_csv(request: DocumentRequest) -> Response:
    csv_text = ExportService.render_csv(parse_content(request.text))
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="training-data.csv"'},
    )


@router.post("/suggestions/exercises", response_model=List[Suggestion])
def suggest_exercises(request: DocumentRequest):
    return SuggestionService.exercise_suggestions(request.text)


@router.post("/suggestions/titles", response_model=List[Suggestion])
def suggest_titles(request: DocumentRequest):
    return SuggestionService.title_suggestions(request.text)


@router.get("/suggestions/dates", response_model=List[Suggestion])
def suggest_dates():
    return SuggestionService.date_suggestions(datetime.now())


@router.post("/statistics/{kind}")
def statistics(kind: str, request: StatisticsRequest) -> Any:
    """
    Aggregate statistics over the document.

    kind is one of: exercises, progress, completion, volume.
    """
    if kind not in STATISTICS_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown statistics kind: {kind}")

    scope = (_document_digest(request.text), request.date_range)
    sessions = StatisticsService.filter_by_range(
        parse_content(request.text), request.date_range, datetime.now()
    )

    if kind == "exercises":
        return statistics_service.unique_exercises(sessions, scope=scope)
    if kind == "progress":
        if not request.exercise:
            raise HTTPException(status_code=400, detail="exercise is required for progress statistics")
        return statistics_service.exercise_progress(sessions, request.exercise, scope=scope)
    if kind == "completion":
        return statistics_service.completion_stats(sessions, request.interval, scope=scope)
    return statistics_service.volume_by_session(sessions, scope=scope)


def _document_digest(text: str) -> str:
    """Cache scope of a document: two different texts never share statistics."""
    return hashlib.sha256(text.encode("utf-8", errors="replace")).hexdigest()
