"""Analytics service — persists search/track events and summarizes them.

Registered on the event bus for the event types in `watched_types`.
Never raises into the bus: a failed write is logged and dropped.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import (
    AnalyticsData,
    AnalyticsSummary,
    CountEntry,
    SearchEvent,
    TrackEvent,
)
from yogyatha.storage.repositories import AnalyticsRepository

logger = logging.getLogger(__name__)


def _ranked(values: Iterable[str]) -> list[CountEntry]:
    """Occurrence counts, most frequent first."""
    return [CountEntry(name=name, count=count) for name, count in Counter(values).most_common()]


class AnalyticsService:
    """Bridge between the event bus and the analytics repository."""

    watched_types: list[EventType] = [EventType.SEARCH_EXECUTED, EventType.APPLICATION_TRACKED]

    def __init__(self, repo: AnalyticsRepository) -> None:
        self._repo = repo

    async def on_event(self, event: SystemEvent) -> None:
        try:
            if event.event_type == EventType.SEARCH_EXECUTED:
                await self._repo.append_search(SearchEvent.model_validate(event.data))
            elif event.event_type == EventType.APPLICATION_TRACKED:
                await self._repo.append_tracked(TrackEvent.model_validate(event.data))
        except Exception:
            logger.exception("Failed to persist analytics event %s (actor=%s)", event.event_type.value, event.actor_id)

    async def summary(self) -> AnalyticsSummary:
        return summarize(await self._repo.get_analytics())


def summarize(data: AnalyticsData) -> AnalyticsSummary:
    """Admin dashboard aggregates over the raw analytics lists."""
    return AnalyticsSummary(
        total_searches=len(data.searches),
        total_tracked=len(data.tracked),
        top_schemes=_ranked(t.scheme_name for t in data.tracked),
        searches_by_state=_ranked(s.state for s in data.searches),
        searches_by_role=_ranked(s.role.value for s in data.searches),
    )
