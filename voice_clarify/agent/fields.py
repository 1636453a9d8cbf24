"""
Field-label matching for clarification.

Labels come from the upstream parser as free text ("title", "meeting time",
"how long"), so every rule here is a case-insensitive substring test.
"""

from __future__ import annotations

from typing import Literal, Optional

FieldConcept = Literal["title", "time", "date", "duration"]

UNRANKED_PRIORITY = 99

_DURATION_MARKERS = ("duration", "length", "how long")


def _lower(label: str) -> str:
  return label.lower() if isinstance(label, str) else ""


def _is_duration_label(lowered: str) -> bool:
  return any(marker in lowered for marker in _DURATION_MARKERS)


def field_concept(label: str) -> Optional[FieldConcept]:
  """Concept a pending-field label stands for, first match wins."""
  lowered = _lower(label)
  if "title" in lowered:
    return "title"
  if "time" in lowered and "date" not in lowered:
    return "time"
  if "date" in lowered and "time" not in lowered:
    return "date"
  if _is_duration_label(lowered):
    return "duration"
  return None


def is_title_label(label: str) -> bool:
  return field_concept(label) == "title"


def field_priority(label: str) -> int:
  lowered = _lower(label)
  if "title" in lowered or "name" in lowered:
    return 1
  if "time" in lowered and "date" not in lowered:
    return 2
  if "date" in lowered and "time" not in lowered:
    return 3
  if _is_duration_label(lowered):
    return 4
  if "description" in lowered or "details" in lowered:
    return 5
  return UNRANKED_PRIORITY


def canonical_field_name(label: str) -> str:
  """Map a free-text label onto the draft key it refers to."""
  lowered = _lower(label)
  if "title" in lowered or "name" in lowered:
    return "title"
  if "time" in lowered and "date" not in lowered:
    return "due_time"
  if "date" in lowered and "time" not in lowered:
    return "due_date"
  if "datetime" in lowered or "start" in lowered:
    return "start_datetime"
  if "description" in lowered or "details" in lowered:
    return "description"
  if _is_duration_label(lowered):
    return "duration_minutes"
  return label
