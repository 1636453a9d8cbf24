from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import config
from .normalizer import normalize_date_string, parse_duration_string, parse_time_string

TITLE_ALIASES: Tuple[str, ...] = (
    "name",
    "meeting_title",
    "event_title",
    "task_name",
    "event_name",
)
# (alias, canonical) pairs, applied in order; "time" wins over "start_time".
FIELD_ALIASES: Tuple[Tuple[str, str], ...] = (
    ("time", "due_time"),
    ("date", "due_date"),
    ("duration", "duration_minutes"),
    ("start_time", "due_time"),
)


def _present(value: Any) -> bool:
  if value is None:
    return False
  if isinstance(value, str):
    return bool(value.strip())
  return True


def normalize_aliases(payload: Dict[str, Any]) -> Dict[str, Any]:
  """Fold parser key synonyms onto canonical draft keys. Returns a new dict."""
  result = dict(payload)

  if not _present(result.get("title")):
    for alias in TITLE_ALIASES:
      if _present(result.get(alias)):
        result["title"] = result[alias]
        break
  for alias in TITLE_ALIASES:
    result.pop(alias, None)

  for alias, canonical in FIELD_ALIASES:
    if _present(result.get(alias)) and not _present(result.get(canonical)):
      result[canonical] = result[alias]
  return result


# ---------------------------------------------------------------------------
#  Draft
# ---------------------------------------------------------------------------

class CalendarDetails(BaseModel):
  model_config = ConfigDict(extra="ignore")

  start_datetime: Optional[str] = None
  duration_minutes: Optional[int] = None
  create_event: Optional[bool] = None
  event_title: Optional[str] = None

  @field_validator("duration_minutes", mode="before")
  @classmethod
  def _coerce_duration(cls, value: Any) -> Optional[int]:
    return parse_duration_string(value)

  @field_validator("start_datetime", mode="before")
  @classmethod
  def _coerce_start(cls, value: Any) -> Optional[str]:
    if not isinstance(value, str):
      return None
    return value.strip() or None


class ActionDraft(BaseModel):
  """In-progress task/calendar action assembled across clarification turns."""
  model_config = ConfigDict(extra="ignore")

  title: Optional[str] = None
  due_date: Optional[str] = None
  due_time: Optional[str] = None
  duration_minutes: Optional[int] = None
  description: Optional[str] = None
  category: Optional[str] = None
  calendar: CalendarDetails = Field(default_factory=CalendarDetails)

  @field_validator("title", "description", "category", mode="before")
  @classmethod
  def _coerce_text(cls, value: Any) -> Optional[str]:
    if value is None:
      return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
      value = str(value)
    if not isinstance(value, str):
      return None
    return value.strip()

  @field_validator("due_time", mode="before")
  @classmethod
  def _coerce_time(cls, value: Any) -> Optional[str]:
    return parse_time_string(value)

  @field_validator("due_date", mode="before")
  @classmethod
  def _coerce_date(cls, value: Any) -> Optional[str]:
    return normalize_date_string(value)

  @field_validator("duration_minutes", mode="before")
  @classmethod
  def _coerce_duration(cls, value: Any) -> Optional[int]:
    return parse_duration_string(value)

  @field_validator("calendar", mode="before")
  @classmethod
  def _coerce_calendar(cls, value: Any) -> Any:
    if isinstance(value, (dict, CalendarDetails)):
      return value
    return {}

  @classmethod
  def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "ActionDraft":
    if not isinstance(payload, dict):
      return cls()
    return cls.model_validate(normalize_aliases(payload))

  def to_payload(self) -> Dict[str, Any]:
    return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
#  Clarification
# ---------------------------------------------------------------------------

class ClarificationConfig(BaseModel):
  model_config = ConfigDict(frozen=True)

  generic_titles: Tuple[str, ...] = Field(
      default_factory=lambda: config.GENERIC_TITLES)
  filler_phrases: Tuple[str, ...] = Field(
      default_factory=lambda: config.FILLER_PHRASES)
  max_title_length: int = Field(
      default_factory=lambda: config.MAX_TITLE_LENGTH, gt=0)

  @field_validator("generic_titles", "filler_phrases", mode="before")
  @classmethod
  def _lower_all(cls, value: Any) -> Any:
    if isinstance(value, (list, tuple, set, frozenset)):
      return tuple(str(item).strip().lower() for item in value)
    return value


class ClarificationOption(BaseModel):
  id: str
  label: str
  value: Any


class ClarificationQuestion(BaseModel):
  question: str
  field_name: str
  options: Optional[List[ClarificationOption]] = None


class ClarificationStatus(str, Enum):
  AWAITING_FIRST_PARSE = "awaiting_first_parse"
  AWAITING_CLARIFICATION = "awaiting_clarification"
  COMPLETE = "complete"


class ClarificationSession(BaseModel):
  model_config = ConfigDict(extra="forbid")

  session_id: str = Field(min_length=1)
  status: ClarificationStatus = ClarificationStatus.AWAITING_FIRST_PARSE
  draft: ActionDraft = Field(default_factory=ActionDraft)
  pending_fields: List[str] = Field(default_factory=list)
  turns: int = 0
  last_answered_field: Optional[str] = None
