"""
Voice-command clarification agent
"""

from .clarification import (
    build_pending_queue,
    filter_pending_fields,
    is_generic_title,
    merge_clarification_response,
    order_by_priority,
    sync_time_from_calendar,
)
from .schemas import ActionDraft, ClarificationConfig, ClarificationStatus

__all__ = [
    "ActionDraft",
    "ClarificationConfig",
    "ClarificationStatus",
    "build_pending_queue",
    "filter_pending_fields",
    "is_generic_title",
    "merge_clarification_response",
    "order_by_priority",
    "sync_time_from_calendar",
]
