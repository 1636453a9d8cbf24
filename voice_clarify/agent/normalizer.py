from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
import re

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[t ](\d{1,2}:\d{2}(?::\d{2})?)")
_AND_A_HALF_RE = re.compile(r"\b(\d+|one|an|a|two|three|four)\s+(?:hours?\s+)?and\s+a\s+half\b")
_SPOKEN_TIME_RE = re.compile(r"(\d{1,2})(?:[:.](\d{2}))?\s*(am|pm)?\b")
_HOURS_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)\b(?:\s*(?:and\s*)?(\d+)\s*(?:minutes?|mins?|m)\b)?")
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minutes?|mins?|m)\b")
_BARE_NUMBER_RE = re.compile(r"^(\d+)$")

_WORD_HOURS = {
    "one": 60,
    "an": 60,
    "a": 60,
    "two": 120,
    "three": 180,
    "four": 240,
}


def normalize_input_as_text(value: Optional[str]) -> str:
  if not isinstance(value, str):
    return ""
  return value.strip()


def parse_time_string(value: Any) -> Optional[str]:
  """Coerce a spoken or clock time ("3pm", "9:30 a.m.", "15:00") to HH:MM:SS."""
  if not isinstance(value, str):
    return None
  text = value.strip().lower()
  if not text:
    return None
  if text == "noon":
    return "12:00:00"
  # "2026-02-28T15:00:00Z" -> "15:00:00"
  stamped = _DATETIME_RE.match(text)
  if stamped:
    text = stamped.group(1)

  clock = _CLOCK_RE.match(text)
  if clock:
    hour, minute = int(clock.group(1)), int(clock.group(2))
    second = int(clock.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
      return None
    return f"{hour:02d}:{minute:02d}:{second:02d}"

  spoken = _SPOKEN_TIME_RE.search(text.replace(".", "").replace(" o'clock", ""))
  if not spoken:
    return None
  hour = int(spoken.group(1))
  minute = int(spoken.group(2) or 0)
  period = spoken.group(3)
  if period == "pm" and hour < 12:
    hour += 12
  elif period == "am" and hour == 12:
    hour = 0
  if hour > 23 or minute > 59:
    return None
  return f"{hour:02d}:{minute:02d}:00"


def parse_duration_string(value: Any) -> Optional[int]:
  """Coerce a duration to whole minutes. Unparseable input yields None."""
  if isinstance(value, bool):
    return None
  if isinstance(value, (int, float)):
    minutes = int(value)
    return minutes if minutes > 0 else None
  if not isinstance(value, str):
    return None
  text = value.strip().lower()
  if not text:
    return None

  # Before the hour patterns, which would stop at "an hour" / "1 hour".
  and_a_half = _AND_A_HALF_RE.search(text)
  if and_a_half:
    count = and_a_half.group(1)
    hours = int(count) if count.isdigit() else _WORD_HOURS[count] // 60
    return hours * 60 + 30

  hours_match = _HOURS_RE.search(text)
  if hours_match:
    minutes = round(float(hours_match.group(1)) * 60) + int(hours_match.group(2) or 0)
    return minutes if minutes > 0 else None

  minutes_match = _MINUTES_RE.search(text)
  if minutes_match:
    minutes = int(minutes_match.group(1))
    return minutes if minutes > 0 else None

  bare = _BARE_NUMBER_RE.match(text)
  if bare:
    minutes = int(bare.group(1))
    return minutes if minutes > 0 else None

  if "half hour" in text or "half an hour" in text:
    return 30
  if "quarter hour" in text or "quarter of an hour" in text:
    return 15
  for word, minutes in _WORD_HOURS.items():
    if re.search(rf"\b{word} hours?\b", text):
      return minutes
  return None


def normalize_date_string(value: Any) -> Optional[str]:
  if not isinstance(value, str):
    return None
  cleaned = value.strip()
  if not cleaned:
    return None
  # "2026-02-01T00:00:00Z" -> "2026-02-01"
  if "T" in cleaned:
    cleaned = cleaned.split("T")[0]
  try:
    return datetime.strptime(cleaned, "%Y-%m-%d").strftime("%Y-%m-%d")
  except ValueError:
    return None
