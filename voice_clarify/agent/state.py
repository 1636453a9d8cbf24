from __future__ import annotations

from collections import OrderedDict
from threading import Lock
from typing import Dict, Optional

from .. import config
from .schemas import ClarificationSession, ClarificationStatus

_sessions: "OrderedDict[str, ClarificationSession]" = OrderedDict()
_session_locks: Dict[str, Lock] = {}
_registry_lock = Lock()


def session_lock(session_id: str) -> Lock:
  """Per-session lock; one clarification merge in flight per session."""
  with _registry_lock:
    lock = _session_locks.get(session_id)
    if lock is None:
      lock = Lock()
      _session_locks[session_id] = lock
    return lock


def release_session_lock(session_id: str) -> None:
  with _registry_lock:
    _session_locks.pop(session_id, None)


def get_session(session_id: str) -> Optional[ClarificationSession]:
  stored = _sessions.get(session_id)
  if stored is None:
    return None
  return stored.model_copy(deep=True)


def _evict_completed() -> None:
  # Completed sessions are kept only for snapshots; oldest go first.
  completed = [sid for sid, stored in _sessions.items()
               if stored.status == ClarificationStatus.COMPLETE]
  overflow = len(completed) - max(config.MAX_COMPLETED_SESSIONS, 0)
  for sid in completed[:max(overflow, 0)]:
    _sessions.pop(sid, None)
    _session_locks.pop(sid, None)


def save_session(session: ClarificationSession) -> None:
  if not session.session_id:
    return
  with _registry_lock:
    _sessions[session.session_id] = session.model_copy(deep=True)
    _sessions.move_to_end(session.session_id)
    if session.status == ClarificationStatus.COMPLETE:
      _session_locks.pop(session.session_id, None)
      _evict_completed()


def clear_session(session_id: str) -> bool:
  if not session_id:
    return False
  with _registry_lock:
    removed = _sessions.pop(session_id, None) is not None
    _session_locks.pop(session_id, None)
  return removed


def reset_sessions() -> None:
  with _registry_lock:
    _sessions.clear()
    _session_locks.clear()
