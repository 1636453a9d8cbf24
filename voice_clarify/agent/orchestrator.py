from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .. import config
from ..utils import _has_value, _log_debug
from .clarification import (build_pending_queue, merge_clarification_response,
                            sync_time_from_calendar)
from .fields import canonical_field_name, field_concept
from .question_agent import build_clarification_question
from .schemas import (ActionDraft, ClarificationConfig, ClarificationSession,
                      ClarificationStatus)
from .state import (clear_session, get_session, release_session_lock, save_session,
                    session_lock)

RESPONSE_VERSION = "voice_clarify.v1"


class ClarificationStateError(RuntimeError):

  def __init__(self, session_id: str, reason: str, status_code: int = 409):
    super().__init__(f"session {session_id!r}: {reason}")
    self.session_id = session_id
    self.reason = reason
    self.status_code = status_code


def _next_status(queue: List[str]) -> ClarificationStatus:
  if queue:
    return ClarificationStatus.AWAITING_CLARIFICATION
  return ClarificationStatus.COMPLETE


def _require_awaiting(session: Optional[ClarificationSession],
                      session_id: str) -> ClarificationSession:
  if session is None:
    raise ClarificationStateError(session_id, "no clarification in progress", status_code=404)
  if session.status != ClarificationStatus.AWAITING_CLARIFICATION:
    raise ClarificationStateError(session_id, f"not awaiting a reply ({session.status.value})")
  return session


def _drop_answered_unranked(queue: Sequence[str], updates: Dict[str, Any]) -> List[str]:
  """Labels the filter cannot judge are cleared once the reply fills their key."""
  remaining: List[str] = []
  for label in queue:
    if field_concept(label) is None and _has_value(updates.get(canonical_field_name(label))):
      continue
    remaining.append(label)
  return remaining


def build_session_response(session: ClarificationSession,
                           today: Optional[date] = None) -> Dict[str, Any]:
  question = None
  if session.status == ClarificationStatus.AWAITING_CLARIFICATION and session.pending_fields:
    built = build_clarification_question(session.pending_fields[0], today=today)
    question = built.model_dump(exclude_none=True) if built else None
  exhausted = (session.status == ClarificationStatus.AWAITING_CLARIFICATION and
               session.turns >= config.MAX_CLARIFICATION_TURNS)
  return {
      "version": RESPONSE_VERSION,
      "status": session.status.value,
      "session_id": session.session_id,
      "draft": session.draft.to_payload(),
      "pending_fields": list(session.pending_fields),
      "question": question,
      "answered_field": session.last_answered_field,
      "turns": session.turns,
      "exhausted": exhausted,
  }


def start_clarification(session_id: str,
                        parsed: Optional[Dict[str, Any]],
                        missing_fields: Optional[Sequence[str]],
                        cfg: Optional[ClarificationConfig] = None) -> ClarificationSession:
  """First parse of a voice command: build the draft and the question queue."""
  with session_lock(session_id):
    draft = sync_time_from_calendar(ActionDraft.from_payload(parsed))
    queue = build_pending_queue(list(missing_fields or []), draft, cfg)
    session = ClarificationSession(session_id=session_id,
                                   status=_next_status(queue),
                                   draft=draft,
                                   pending_fields=queue)
    save_session(session)
  _log_debug(f"[CLARIFY] start session={session_id} status={session.status.value} "
             f"pending={queue}")
  return session


def handle_clarification_reply(session_id: str,
                               parsed: Optional[Dict[str, Any]],
                               transcript: str,
                               cfg: Optional[ClarificationConfig] = None) -> ClarificationSession:
  """Fold one user reply into the session; the reply answers pending_fields[0]."""
  # Unknown or finished ids are rejected before a lock is registered for them.
  _require_awaiting(get_session(session_id), session_id)
  with session_lock(session_id):
    # An abort or a concurrent reply may have won the lock first.
    session = get_session(session_id)
    if session is None or session.status != ClarificationStatus.AWAITING_CLARIFICATION:
      release_session_lock(session_id)
    session = _require_awaiting(session, session_id)

    asked = session.pending_fields[0] if session.pending_fields else None
    updates = merge_clarification_response(parsed, session.pending_fields, transcript, cfg)

    merged = {**session.draft.to_payload(), **updates}
    draft = sync_time_from_calendar(ActionDraft.from_payload(merged))
    queue = build_pending_queue(_drop_answered_unranked(session.pending_fields, updates),
                                draft, cfg)

    session.draft = draft
    session.pending_fields = queue
    session.turns += 1
    session.last_answered_field = canonical_field_name(asked) if asked else None
    session.status = _next_status(queue)
    save_session(session)

  _log_debug(f"[CLARIFY] reply session={session_id} turn={session.turns} answered={asked} "
             f"keys={sorted(updates)} status={session.status.value} pending={queue}")
  if queue and session.turns >= config.MAX_CLARIFICATION_TURNS:
    _log_debug(f"[CLARIFY] session={session_id} reached {session.turns} turns, still pending")
  return session


def get_clarification(session_id: str) -> ClarificationSession:
  session = get_session(session_id)
  if session is None:
    raise ClarificationStateError(session_id, "no clarification in progress", status_code=404)
  return session


def abort_clarification(session_id: str) -> None:
  if get_session(session_id) is None:
    raise ClarificationStateError(session_id, "no clarification in progress", status_code=404)
  # Waits for an in-flight reply so it cannot save the session back afterwards.
  with session_lock(session_id):
    removed = clear_session(session_id)
  if not removed:
    raise ClarificationStateError(session_id, "no clarification in progress", status_code=404)
  _log_debug(f"[CLARIFY] aborted session={session_id}")
