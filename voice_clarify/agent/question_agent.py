from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

from .fields import canonical_field_name
from .schemas import ClarificationOption, ClarificationQuestion

_TIME_OPTIONS = (
    ("9:00 AM", "09:00:00"),
    ("12:00 PM", "12:00:00"),
    ("3:00 PM", "15:00:00"),
    ("5:00 PM", "17:00:00"),
)
_DURATION_OPTIONS = (
    ("30 minutes", 30),
    ("1 hour", 60),
    ("1.5 hours", 90),
    ("2 hours", 120),
)

_QUESTION_TEXT: Dict[str, str] = {
    "title": "What should the event be called?",
    "due_time": "What time should the event be scheduled?",
    "due_date": "What date should this be scheduled?",
    "duration_minutes": "How long should this event last?",
    "description": "Any details you'd like to add?",
    "start_datetime": "When should it start?",
}


def _options(pairs) -> List[ClarificationOption]:
  return [
      ClarificationOption(id=str(index), label=label, value=value)
      for index, (label, value) in enumerate(pairs, start=1)
  ]


def build_clarification_question(field_label: str,
                                 today: Optional[date] = None) -> Optional[ClarificationQuestion]:
  """Fixed question for the field at the head of the pending queue."""
  if not isinstance(field_label, str) or not field_label.strip():
    return None
  canonical = canonical_field_name(field_label)

  options: Optional[List[ClarificationOption]] = None
  if canonical == "due_time":
    options = _options(_TIME_OPTIONS)
  elif canonical == "duration_minutes":
    options = _options(_DURATION_OPTIONS)
  elif canonical == "due_date":
    base = today or date.today()
    options = _options((
        ("Today", base.isoformat()),
        ("Tomorrow", (base + timedelta(days=1)).isoformat()),
    ))

  text = _QUESTION_TEXT.get(canonical)
  if text is None:
    text = f"Could you tell me more about the {field_label.strip()}?"
  return ClarificationQuestion(question=text, field_name=canonical, options=options)
