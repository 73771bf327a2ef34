"""
Route handlers for the Question Companion JSON API.

Covers:
- Static catalog (steps, keyword chips, UI messages)
- Session lifecycle (create / read / delete)
- Form mutations (fields, stage, keyword toggle) returning the derived view
- Copy action and plain-text summary
"""
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from question_companion.config.settings import get_config
from question_companion.config.types import StepKey
from question_companion.config.logger import get_logger
from question_companion.infra.clipboard import UnknownClipboardBackend
from question_companion.pipeline._catalog import get_catalog, get_steps
from question_companion.pipeline.service import CompanionSession

logger = get_logger(__name__)

router = APIRouter()


# =========================================================================
# Session store (in-memory, transient)
# =========================================================================

_sessions: dict = {}


def _session_cutoff() -> datetime:
    ttl = timedelta(minutes=get_config().web.session_ttl_minutes)
    return datetime.now(timezone.utc) - ttl


def _cleanup_sessions():
    """Close and drop sessions idle longer than the configured TTL (lazy cleanup)."""
    cutoff = _session_cutoff()
    expired = [k for k, v in _sessions.items() if v["touched_at"] < cutoff]
    for k in expired:
        _sessions.pop(k)["session"].close()
    if expired:
        logger.info(f"Expired {len(expired)} idle session(s)")


def close_all_sessions():
    """Tear down every session; called on app shutdown."""
    for entry in _sessions.values():
        entry["session"].close()
    _sessions.clear()


def _get_session(token: str) -> CompanionSession:
    entry = _sessions.get(token)
    if entry is None:
        raise HTTPException(404, "Unknown or expired session")
    if entry["touched_at"] < _session_cutoff():
        _sessions.pop(token)["session"].close()
        logger.info(f"Session {token} expired")
        raise HTTPException(404, "Unknown or expired session")
    entry["touched_at"] = datetime.now(timezone.utc)
    return entry["session"]


async def _json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(400, "Request body must be JSON")
    if not isinstance(body, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return body


def _view_response(token: str, session: CompanionSession, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        {"token": token, "view": session.view().model_dump(mode="json")},
        status_code=status_code,
    )


# =========================================================================
# Catalog
# =========================================================================

@router.get("/api/catalog")
async def api_catalog():
    """Steps, keyword chips and UI messages for building the page."""
    return {
        "steps": [step.model_dump(mode="json") for step in get_steps()],
        "keywords": get_config().keywords.catalog,
        "messages": get_catalog()["messages"],
    }


# =========================================================================
# Session lifecycle
# =========================================================================

@router.post("/api/sessions")
async def api_create_session():
    _cleanup_sessions()

    try:
        session = CompanionSession()
    except UnknownClipboardBackend as e:
        logger.error(f"Cannot create session: {e}")
        raise HTTPException(500, str(e))

    token = uuid.uuid4().hex
    _sessions[token] = {
        "session": session,
        "created_at": datetime.now(timezone.utc),
        "touched_at": datetime.now(timezone.utc),
    }
    return _view_response(token, session, status_code=201)


@router.get("/api/sessions/{token}")
async def api_get_session(token: str):
    return _view_response(token, _get_session(token))


@router.delete("/api/sessions/{token}", status_code=204)
async def api_delete_session(token: str):
    entry = _sessions.pop(token, None)
    if entry is None:
        raise HTTPException(404, "Unknown or expired session")
    entry["session"].close()
    return Response(status_code=204)


# =========================================================================
# Mutations
# =========================================================================

@router.put("/api/sessions/{token}/fields/{field}")
async def api_set_field(token: str, field: str, request: Request):
    session = _get_session(token)
    body = await _json_body(request)
    value = body.get("value", "")
    if not isinstance(value, str):
        raise HTTPException(400, "Field value must be a string")
    try:
        session.store.set_field(field, value)
    except ValueError:
        raise HTTPException(400, f"Unknown field: {field}")
    return _view_response(token, session)


@router.put("/api/sessions/{token}/stage")
async def api_set_stage(token: str, request: Request):
    session = _get_session(token)
    body = await _json_body(request)
    stage = body.get("stage", "")
    try:
        session.store.set_stage(stage)
    except ValueError:
        allowed = ", ".join(k.value for k in StepKey)
        raise HTTPException(400, f"Unknown stage '{stage}'. Expected one of: {allowed}")
    return _view_response(token, session)


@router.post("/api/sessions/{token}/stage/next")
async def api_next_stage(token: str):
    session = _get_session(token)
    session.store.next_stage()
    return _view_response(token, session)


@router.post("/api/sessions/{token}/stage/previous")
async def api_previous_stage(token: str):
    session = _get_session(token)
    session.store.previous_stage()
    return _view_response(token, session)


@router.post("/api/sessions/{token}/keywords/{keyword}")
async def api_toggle_keyword(token: str, keyword: str):
    session = _get_session(token)
    session.store.toggle_keyword(keyword)
    return _view_response(token, session)


# =========================================================================
# Copy + summary
# =========================================================================

@router.post("/api/sessions/{token}/copy")
async def api_copy_summary(token: str):
    """Run the copy action. Clipboard failure is reported, not raised."""
    session = _get_session(token)
    copied = await session.copy_summary()
    return JSONResponse({
        "token": token,
        "copied": copied,
        "view": session.view().model_dump(mode="json"),
    })


@router.get("/api/sessions/{token}/summary", response_class=PlainTextResponse)
async def api_summary(token: str):
    return PlainTextResponse(_get_session(token).view().summary)
