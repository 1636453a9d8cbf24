from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any


class ClarifyStartRequest(BaseModel):
    session_id: str = Field(min_length=1)
    parsed: Dict[str, Any] = Field(default_factory=dict)
    missing_fields: List[str] = Field(default_factory=list)


class ClarifyReplyRequest(BaseModel):
    session_id: str = Field(min_length=1)
    parsed: Optional[Dict[str, Any]] = None  # parser output for this reply; {} when it found nothing
    transcript: str = ""


class ClarifyResponse(BaseModel):
    version: str
    status: str
    session_id: str
    draft: Dict[str, Any]
    pending_fields: List[str]
    question: Optional[Dict[str, Any]] = None
    answered_field: Optional[str] = None
    turns: int = 0
    exhausted: bool = False
