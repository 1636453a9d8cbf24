from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from .config import API_BASE
from .models import ClarifyReplyRequest, ClarifyResponse, ClarifyStartRequest
from .utils import _log_debug
from .agent.orchestrator import (ClarificationStateError, abort_clarification,
                                 build_session_response, get_clarification,
                                 handle_clarification_reply, start_clarification)

router = APIRouter()
logger = logging.getLogger(__name__)


def _state_error(exc: ClarificationStateError) -> HTTPException:
  return HTTPException(status_code=exc.status_code, detail=exc.reason)


@router.get(f"{API_BASE}/health")
def health():
  return {"ok": True}


@router.post(f"{API_BASE}/voice/clarify/start", response_model=ClarifyResponse)
def clarify_start(body: ClarifyStartRequest):
  try:
    session = start_clarification(body.session_id, body.parsed, body.missing_fields)
  except Exception as exc:
    logger.exception("Clarification start error")
    raise HTTPException(status_code=500, detail=f"Clarification start error: {exc}")
  return build_session_response(session)


@router.post(f"{API_BASE}/voice/clarify/reply", response_model=ClarifyResponse)
def clarify_reply(body: ClarifyReplyRequest):
  try:
    session = handle_clarification_reply(body.session_id, body.parsed or {}, body.transcript)
  except ClarificationStateError as exc:
    _log_debug(f"[CLARIFY] reply rejected: {exc}")
    raise _state_error(exc)
  except Exception as exc:
    logger.exception("Clarification reply error")
    raise HTTPException(status_code=500, detail=f"Clarification reply error: {exc}")
  return build_session_response(session)


@router.get(f"{API_BASE}/voice/clarify/{{session_id}}", response_model=ClarifyResponse)
def clarify_get(session_id: str):
  try:
    session = get_clarification(session_id)
  except ClarificationStateError as exc:
    raise _state_error(exc)
  return build_session_response(session)


@router.delete(f"{API_BASE}/voice/clarify/{{session_id}}")
def clarify_abort(session_id: str):
  try:
    abort_clarification(session_id)
  except ClarificationStateError as exc:
    raise _state_error(exc)
  return {"ok": True, "session_id": session_id}
