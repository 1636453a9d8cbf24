from __future__ import annotations

from typing import Any, Iterable, List

from .config import LLM_DEBUG


def _log_debug(message: str) -> None:
    if LLM_DEBUG:
        print(message, flush=True)


def _has_value(value: Any) -> bool:
    """Mirror the parser's notion of "provided": None, blank strings and 0 are not."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (int, float)):
        return value != 0
    return True


def _dedupe_preserving_order(values: Iterable[str]) -> List[str]:
    out: List[str] = []
    seen: set[str] = set()
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out
