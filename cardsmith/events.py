"""Pipeline events streamed to API clients.

A run emits ``started``, one ``status`` per stage, ``cards`` once the
model has answered, then ``result`` and ``done``. The streaming service
adds ``error`` when a run fails.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Coroutine, Literal

logger = logging.getLogger(__name__)

PipelineEvent = Literal["started", "status", "cards", "result", "done", "error"]
Stage = Literal["scraping", "generating", "inserting"]

EventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


async def emit_event(
    on_event: EventCallback | None,
    event: PipelineEvent,
    data: dict[str, Any] | None = None,
) -> None:
    if on_event is None:
        return
    await on_event(event, data or {})


async def emit_status(on_event: EventCallback | None, stage: Stage, message: str) -> None:
    """Report that the run entered *stage*."""
    logger.debug("pipeline stage", extra={"stage": stage})
    await emit_event(on_event, "status", {"step": stage, "message": message})
