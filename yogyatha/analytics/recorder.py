"""Search event recorder — best-effort telemetry for every search.

The engine calls `SearchEventRecorder.record` once per scoring pass.
Sink failures are logged and swallowed: analytics must never block or
fail a search.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from yogyatha.analytics.events import EventBus, event_bus
from yogyatha.schemas.eligibility import Profile
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import SearchEvent

logger = logging.getLogger(__name__)


class AnalyticsSink(Protocol):
    """Anything that accepts a search event. Append-only."""

    def record_search(self, event: SearchEvent) -> None: ...


class SearchEventRecorder:
    """Builds SearchEvents and hands them to a sink without awaiting."""

    def __init__(self, sink: AnalyticsSink, clock: Callable[[], float] = time.time) -> None:
        self._sink = sink
        self._clock = clock

    def record(self, username: str, profile: Profile) -> None:
        try:
            event = SearchEvent(
                username=username,
                state=profile.state,
                role=profile.role,
                income=profile.income,
                timestamp=int(self._clock() * 1000),
            )
            self._sink.record_search(event)
        except Exception:
            logger.warning("Dropped search event for user %s", username, exc_info=True)


class EventBusSink:
    """Publishes search events onto the event bus (fire-and-forget)."""

    def __init__(self, bus: EventBus = event_bus) -> None:
        self._bus = bus

    def record_search(self, event: SearchEvent) -> None:
        self._bus.publish_nowait(SystemEvent(
            event_type=EventType.SEARCH_EXECUTED,
            actor_id=event.username,
            actor_role="citizen",
            data=event.model_dump(mode="json"),
            source_module="eligibility.engine",
        ))
