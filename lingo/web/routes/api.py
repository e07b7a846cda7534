"""REST API routes for the translation store, config and transcription."""

import asyncio
import base64
import binascii
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from ...clients.store_client import compute_stats_from_translations
from ...config import config
from ...constants import LOCALES, PROJECTS
from ...errors import TranscriptionError
from ...models.submission import TranslationFilters, TranslationStatus
from ...transcription.service import SUPPORTED_MIME_TYPES
from ..services.translation_store import REQUIRED_FIELDS

logger = logging.getLogger(__name__)

router = APIRouter()

STATUSES = {status.value for status in TranslationStatus}

# Request/Response models
class TranscribeRequest(BaseModel):
    audio: str  # base64
    mimeType: str
    targetLocale: Optional[str] = None

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

def _parse_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value) if value is not None else 0
    except ValueError:
        return default
    return parsed if parsed > 0 else default

# Translation store endpoints
@router.post("/translations")
async def create_translation(request: Request):
    """Submit a new translation."""
    store = request.app.state.translation_store

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Invalid JSON body")

    if not isinstance(body, dict):
        return _error(400, "Invalid JSON body")

    for field in REQUIRED_FIELDS:
        if not body.get(field):
            return _error(400, f"Missing required field: {field}")

    status = body.get("status") or TranslationStatus.PENDING.value
    if status not in STATUSES:
        return _error(400, f"Invalid status: {status}")
    body["status"] = status

    try:
        row_id = await asyncio.to_thread(store.create, body)
    except SQLAlchemyError:
        logger.exception("Database error while saving translation")
        return _error(500, "Failed to save translation")

    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "id": row_id,
            "message": "Translation saved successfully",
        },
    )

@router.get("/translations")
async def list_translations(
    request: Request,
    user_id: Optional[str] = None,
    project: Optional[str] = None,
    locale: Optional[str] = None,
    status: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
):
    """List a user's translations with optional filters."""
    store = request.app.state.translation_store

    if not user_id:
        return _error(400, "user_id is required")

    filters = TranslationFilters(
        project=project,
        locale=locale,
        status=status,
        date_from=date_from,
        date_to=date_to,
        limit=_parse_int(limit, 50),
        offset=_parse_int(offset, 0),
    )

    try:
        rows = await asyncio.to_thread(store.list_translations, user_id, filters)
    except SQLAlchemyError:
        logger.exception("Database error while listing translations")
        return _error(500, "Failed to fetch translations")

    return {
        "translations": rows,
        "meta": {
            "total": len(rows),
            "limit": filters.limit,
            "offset": filters.offset,
        },
    }

@router.get("/translations/stats")
async def translation_stats(request: Request, user_id: Optional[str] = None):
    """Aggregate a user's translations by project, locale, status and day."""
    store = request.app.state.translation_store

    if not user_id:
        return _error(400, "user_id is required")

    try:
        rows = await asyncio.to_thread(
            store.list_translations, user_id, TranslationFilters(limit=1000)
        )
    except SQLAlchemyError:
        logger.exception("Database error while computing stats")
        return _error(500, "Failed to fetch translations")

    return compute_stats_from_translations(rows).to_dict()

# Config endpoint
@router.get("/config")
async def get_config():
    """Public settings for clients."""
    return {
        "strings_per_session": config.strings_per_session,
        "default_project": config.default_project,
        "default_locale": config.default_locale,
        "projects": [
            {"id": p.id, "name": p.name, "slug": p.slug, "description": p.description}
            for p in PROJECTS
        ],
        "locales": [
            {"code": loc.code, "name": loc.name, "wp_locale": loc.wp_locale}
            for loc in LOCALES
        ],
    }

# Transcription endpoint
@router.post("/transcribe")
async def transcribe(request: Request, body: TranscribeRequest):
    """Transcribe dictated audio into plain text."""
    service = request.app.state.transcription_service

    if not service.is_ready:
        raise HTTPException(503, f"Transcription unavailable: {service.error or service.status.value}")

    if body.mimeType not in SUPPORTED_MIME_TYPES:
        raise HTTPException(
            400, f"Unsupported audio format. Supported: {', '.join(SUPPORTED_MIME_TYPES)}"
        )

    try:
        audio = base64.b64decode(body.audio, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(400, "Audio must be base64 encoded")

    try:
        service.validate(audio, body.mimeType)
    except TranscriptionError as e:
        raise HTTPException(400, e.message)

    try:
        text = await service.transcribe_async(audio, body.mimeType, body.targetLocale)
    except TranscriptionError as e:
        raise HTTPException(502, e.message)

    return {"text": text}
