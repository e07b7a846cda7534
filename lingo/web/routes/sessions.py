"""Translation session routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ...config import config
from ...errors import PreviewError, UnsupportedPreviewTargetError
from ...models.session import StartSessionOptions
from ...preview.playground import (
    PreviewConfig,
    build_playground_url,
    build_playground_url_with_query,
    prepare_preview,
)

router = APIRouter()


# Request models
class StartSessionRequest(BaseModel):
    project_slug: str
    locale_slug: str
    sample_size: int = Field(default_factory=lambda: config.strings_per_session, ge=1, le=100)
    project_name: Optional[str] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None


class SubmitRequest(BaseModel):
    translation: str


class PreviewRequest(BaseModel):
    wp_locale: Optional[str] = None
    use_query: bool = False


def _get_tracker(request: Request, session_id: str):
    session = request.app.state.session_manager.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return session.tracker


@router.post("/sessions")
async def start_session(request: Request, body: StartSessionRequest):
    """Start a session: fetch, sample and return the first string."""
    session_manager = request.app.state.session_manager

    session = session_manager.create_session()
    await session.tracker.start_session(StartSessionOptions(
        project_slug=body.project_slug,
        locale_slug=body.locale_slug,
        sample_size=body.sample_size,
        project_name=body.project_name,
        user_id=body.user_id,
        user_email=body.user_email,
    ))

    return {"session_id": session.session_id, **session.tracker.to_dict()}


@router.get("/sessions")
async def list_sessions(request: Request):
    """List all sessions."""
    sessions = request.app.state.session_manager.list_sessions()
    return {
        "sessions": [
            {
                "session_id": s.session_id,
                "created_at": s.created_at,
                "state": s.tracker.state.value,
                "project_slug": s.tracker.options.project_slug if s.tracker.options else None,
                "locale_slug": s.tracker.options.locale_slug if s.tracker.options else None,
            }
            for s in sessions
        ]
    }


@router.get("/sessions/{session_id}")
async def get_session(request: Request, session_id: str):
    """Get session state."""
    tracker = _get_tracker(request, session_id)
    return {"session_id": session_id, **tracker.to_dict()}


@router.post("/sessions/{session_id}/submit")
async def submit_translation(request: Request, session_id: str, body: SubmitRequest):
    """Submit a translation for the current string."""
    tracker = _get_tracker(request, session_id)

    receipt = tracker.submit(body.translation)
    if not receipt.accepted:
        raise HTTPException(409, "No string to translate")

    return {
        "session_id": session_id,
        "accepted": True,
        "persisting": receipt.task is not None,
        **tracker.to_dict(),
    }


@router.post("/sessions/{session_id}/skip")
async def skip_string(request: Request, session_id: str):
    """Skip the current string."""
    tracker = _get_tracker(request, session_id)

    if not tracker.skip():
        raise HTTPException(409, "No string to skip")

    return {"session_id": session_id, **tracker.to_dict()}


@router.post("/sessions/{session_id}/reset")
async def reset_session(request: Request, session_id: str):
    """Reset the session to idle."""
    tracker = _get_tracker(request, session_id)
    tracker.reset_session()
    return {"session_id": session_id, **tracker.to_dict()}


@router.delete("/sessions/{session_id}")
async def delete_session(request: Request, session_id: str):
    """Forget a session."""
    if not request.app.state.session_manager.delete_session(session_id):
        raise HTTPException(404, "Session not found")
    return {"status": "deleted"}


@router.post("/sessions/{session_id}/preview")
async def preview_session(request: Request, session_id: str, body: Optional[PreviewRequest] = None):
    """Build a Playground preview of the session's translations."""
    tracker = _get_tracker(request, session_id)
    body = body or PreviewRequest()

    if tracker.options is None:
        raise HTTPException(400, "Session has not been started")

    try:
        blueprint = prepare_preview(PreviewConfig(
            project_slug=tracker.options.project_slug,
            locale=tracker.options.locale_slug,
            translations=tracker.translations_for_preview(),
            wp_locale=body.wp_locale,
        ))
    except (UnsupportedPreviewTargetError, PreviewError) as e:
        raise HTTPException(400, e.message)

    if body.use_query:
        url = build_playground_url_with_query(blueprint)
    else:
        url = build_playground_url(blueprint)

    return {"url": url, "blueprint": blueprint.to_dict()}
