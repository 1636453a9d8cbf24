from __future__ import annotations

import copy
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..utils import _dedupe_preserving_order, _has_value, _log_debug
from .. import config
from .fields import field_concept, field_priority, is_title_label
from .normalizer import normalize_input_as_text
from .schemas import ActionDraft, ClarificationConfig, normalize_aliases

DraftLike = Union[ActionDraft, Mapping[str, Any]]

_MIDNIGHT_SENTINELS = ("00:00:00", "00:00")

_DEFAULT_CONFIG: Optional[ClarificationConfig] = None
_filler_patterns: Dict[tuple, "re.Pattern[str]"] = {}


def _config(cfg: Optional[ClarificationConfig]) -> ClarificationConfig:
  global _DEFAULT_CONFIG
  if cfg is not None:
    return cfg
  if _DEFAULT_CONFIG is None:
    _DEFAULT_CONFIG = ClarificationConfig()
  return _DEFAULT_CONFIG


def _filler_pattern(phrases: Sequence[str]) -> "re.Pattern[str]":
  key = tuple(phrases)
  pattern = _filler_patterns.get(key)
  if pattern is None:
    # Longest first so "titled" / "the title is" beat "title".
    ordered = sorted(key, key=len, reverse=True)
    alternatives = "|".join(re.escape(p).replace(r"\ ", r"\s+") for p in ordered)
    pattern = re.compile(rf"^(?:{alternatives})\s+", re.IGNORECASE)
    _filler_patterns[key] = pattern
  return pattern


def _get(draft: DraftLike, key: str) -> Any:
  if isinstance(draft, ActionDraft):
    return getattr(draft, key, None)
  if isinstance(draft, Mapping):
    return draft.get(key)
  return None


def _calendar_get(draft: DraftLike, key: str) -> Any:
  calendar = _get(draft, "calendar")
  if calendar is None:
    return None
  if isinstance(calendar, Mapping):
    return calendar.get(key)
  return getattr(calendar, key, None)


# ---------------------------------------------------------------------------
#  Generic-value classifier
# ---------------------------------------------------------------------------

def is_generic_title(value: Any, cfg: Optional[ClarificationConfig] = None) -> bool:
  if value is None:
    return True
  if not isinstance(value, str):
    return False
  return value.strip().lower() in _config(cfg).generic_titles


# ---------------------------------------------------------------------------
#  Missing-field filter
# ---------------------------------------------------------------------------

def _still_missing(label: str, draft: DraftLike, cfg: ClarificationConfig) -> bool:
  concept = field_concept(label)
  if concept == "title":
    title = _get(draft, "title")
    return not _has_value(title) or is_generic_title(title, cfg)
  if concept == "time":
    return not _has_value(_get(draft, "due_time"))
  if concept == "date":
    return not _has_value(_get(draft, "due_date"))
  if concept == "duration":
    return (not _has_value(_get(draft, "duration_minutes")) and
            not _has_value(_calendar_get(draft, "duration_minutes")))
  # Unknown labels stay pending: one extra question beats dropped data.
  return True


def filter_pending_fields(missing: Sequence[str],
                          draft: Optional[DraftLike],
                          cfg: Optional[ClarificationConfig] = None) -> List[str]:
  resolved = _config(cfg)
  if draft is None:
    draft = {}
  return [label for label in (missing or []) if _still_missing(label, draft, resolved)]


# ---------------------------------------------------------------------------
#  Clarification order
# ---------------------------------------------------------------------------

def order_by_priority(fields: Sequence[str]) -> List[str]:
  # sorted() is stable, so equal ranks keep their input order.
  return sorted(fields or [], key=field_priority)


# ---------------------------------------------------------------------------
#  Calendar -> task time sync
# ---------------------------------------------------------------------------

def _calendar_time(draft: DraftLike, calendar: Any = None) -> Optional[str]:
  if calendar is None:
    calendar = _get(draft, "calendar")
  start = _calendar_get({"calendar": calendar}, "start_datetime")
  if not isinstance(start, str):
    return None
  _, separator, time_part = start.partition("T")
  if not separator or not time_part or time_part in _MIDNIGHT_SENTINELS:
    return None
  return time_part[:8]


def sync_time_from_calendar(draft: DraftLike, calendar: Any = None) -> DraftLike:
  """
  Fill an empty due_time from calendar.start_datetime. Never mutates the input.

  `calendar` overrides the draft's own calendar object when given.
  """
  if _has_value(_get(draft, "due_time")):
    return draft.model_copy(deep=True) if isinstance(draft, ActionDraft) else copy.deepcopy(dict(draft))

  time_part = _calendar_time(draft, calendar)
  if isinstance(draft, ActionDraft):
    synced = draft.model_copy(deep=True)
    if time_part:
      synced.due_time = time_part
    return synced

  synced_payload = copy.deepcopy(dict(draft)) if isinstance(draft, Mapping) else {}
  if time_part:
    synced_payload["due_time"] = time_part
  return synced_payload


# ---------------------------------------------------------------------------
#  Clarification-response merger
# ---------------------------------------------------------------------------

def clean_title_transcript(transcript: Any,
                           cfg: Optional[ClarificationConfig] = None) -> Optional[str]:
  resolved = _config(cfg)
  text = normalize_input_as_text(transcript)
  if resolved.filler_phrases:
    text = _filler_pattern(resolved.filler_phrases).sub("", text, count=1)
  text = text.strip()
  if 0 < len(text) < resolved.max_title_length:
    return text
  return None


def merge_clarification_response(parser_result: Optional[Mapping[str, Any]],
                                 pending_queue: Sequence[str],
                                 raw_transcript: str,
                                 cfg: Optional[ClarificationConfig] = None) -> Dict[str, Any]:
  """
  Fold the parser's reading of one user reply into draft updates.

  The reply is assumed to answer pending_queue[0]. When the parser came back
  empty and that field is the title, the transcript itself becomes the title.
  """
  payload = dict(parser_result) if isinstance(parser_result, Mapping) else {}
  result = normalize_aliases(payload)

  if not result and pending_queue and is_title_label(pending_queue[0]):
    title = clean_title_transcript(raw_transcript, cfg)
    if title:
      result["title"] = title
      _log_debug(f"[CLARIFY] hard fallback: transcript used as title: {title!r}")
  return result


# ---------------------------------------------------------------------------
#  Queue assembly
# ---------------------------------------------------------------------------

def required_meeting_fields(draft: DraftLike,
                            cfg: Optional[ClarificationConfig] = None) -> List[str]:
  """Fields a meeting always needs, whatever the parser claimed."""
  if _get(draft, "category") != config.MEETING_CATEGORY:
    return []
  candidates = ["title", "date", "time", "duration"]
  return filter_pending_fields(candidates, draft, cfg)


def build_pending_queue(missing: Sequence[str],
                        draft: DraftLike,
                        cfg: Optional[ClarificationConfig] = None) -> List[str]:
  synced = sync_time_from_calendar(draft)
  labels = _dedupe_preserving_order(missing or [])
  covered = {field_concept(label) for label in labels}
  for label in required_meeting_fields(synced, cfg):
    if field_concept(label) not in covered:
      labels.append(label)
  return order_by_priority(filter_pending_fields(labels, synced, cfg))
