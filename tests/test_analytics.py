"""Tests for AnalyticsService, summaries and the audit logger."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from yogyatha.analytics.audit import AUDIT_KEY, AuditLogger
from yogyatha.analytics.service import AnalyticsService, summarize
from yogyatha.models.enums import Role
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import AnalyticsData, CountEntry, SearchEvent, TrackEvent
from yogyatha.storage.base import MemoryStore
from yogyatha.storage.repositories import AnalyticsRepository


def _search(state: str, role: Role, ts: int = 1) -> SearchEvent:
    return SearchEvent(username="u", state=state, role=role, income=10, timestamp=ts)


class TestOnEvent:
    @pytest.mark.asyncio()
    async def test_persists_search(self):
        repo = AnalyticsRepository(MemoryStore())
        service = AnalyticsService(repo)
        search = _search("Assam", Role.STUDENT)

        await service.on_event(SystemEvent(
            event_type=EventType.SEARCH_EXECUTED, data=search.model_dump(mode="json"),
        ))

        assert (await repo.get_analytics()).searches == [search]

    @pytest.mark.asyncio()
    async def test_persists_tracked(self):
        repo = AnalyticsRepository(MemoryStore())
        service = AnalyticsService(repo)
        track = TrackEvent(scheme_id="a", scheme_name="A", timestamp=5)

        await service.on_event(SystemEvent(
            event_type=EventType.APPLICATION_TRACKED, data=track.model_dump(mode="json"),
        ))

        assert (await repo.get_analytics()).tracked == [track]

    @pytest.mark.asyncio()
    async def test_ignores_other_types(self):
        repo = MagicMock()
        repo.append_search = AsyncMock()
        repo.append_tracked = AsyncMock()

        await AnalyticsService(repo).on_event(SystemEvent(event_type=EventType.SCHEME_CREATED))

        repo.append_search.assert_not_awaited()
        repo.append_tracked.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_bad_payload_logged_not_raised(self):
        repo = AnalyticsRepository(MemoryStore())
        await AnalyticsService(repo).on_event(SystemEvent(
            event_type=EventType.SEARCH_EXECUTED, data={"username": "u"},
        ))
        assert (await repo.get_analytics()).searches == []

    @pytest.mark.asyncio()
    async def test_store_failure_logged_not_raised(self):
        repo = MagicMock()
        repo.append_search = AsyncMock(side_effect=ConnectionError("down"))

        await AnalyticsService(repo).on_event(SystemEvent(
            event_type=EventType.SEARCH_EXECUTED,
            data=_search("Assam", Role.STUDENT).model_dump(mode="json"),
        ))

        repo.append_search.assert_awaited_once()

    def test_watched_types(self):
        assert set(AnalyticsService.watched_types) == {EventType.SEARCH_EXECUTED, EventType.APPLICATION_TRACKED}


class TestSummarize:
    def test_counts_sorted_descending(self):
        data = AnalyticsData(
            searches=[
                _search("Bihar", Role.FARMER),
                _search("Kerala", Role.STUDENT),
                _search("Kerala", Role.FARMER),
                _search("Kerala", Role.CITIZEN),
            ],
            tracked=[
                TrackEvent(scheme_id="a", scheme_name="A", timestamp=1),
                TrackEvent(scheme_id="b", scheme_name="B", timestamp=2),
                TrackEvent(scheme_id="b", scheme_name="B", timestamp=3),
            ],
        )

        summary = summarize(data)

        assert summary.total_searches == 4
        assert summary.total_tracked == 3
        assert summary.top_schemes == [CountEntry(name="B", count=2), CountEntry(name="A", count=1)]
        assert summary.searches_by_state[0] == CountEntry(name="Kerala", count=3)
        assert summary.searches_by_role[0] == CountEntry(name="Farmer", count=2)

    def test_empty(self):
        summary = summarize(AnalyticsData())
        assert summary.total_searches == 0
        assert summary.top_schemes == []

    @pytest.mark.asyncio()
    async def test_service_summary_reads_repo(self):
        repo = AnalyticsRepository(MemoryStore())
        await repo.append_search(_search("Goa", Role.CITIZEN))
        summary = await AnalyticsService(repo).summary()
        assert summary.searches_by_state == [CountEntry(name="Goa", count=1)]


class TestAuditLogger:
    @pytest.mark.asyncio()
    async def test_appends_every_event(self):
        store = MemoryStore()
        audit = AuditLogger(store)

        await audit.on_event(SystemEvent(event_type=EventType.SYSTEM_STARTUP))
        await audit.on_event(SystemEvent(event_type=EventType.SCHEME_DELETED, data={"scheme_id": "x"}))

        assert len(await store.read_list(AUDIT_KEY)) == 2
        recent = await audit.recent()
        assert [e.event_type for e in recent] == [EventType.SCHEME_DELETED, EventType.SYSTEM_STARTUP]

    @pytest.mark.asyncio()
    async def test_recent_limit(self):
        audit = AuditLogger(MemoryStore())
        for _ in range(5):
            await audit.on_event(SystemEvent(event_type=EventType.PROFILE_SAVED))
        assert len(await audit.recent(limit=2)) == 2

    @pytest.mark.asyncio()
    async def test_store_failure_swallowed(self):
        store = MagicMock()
        store.append = AsyncMock(side_effect=ConnectionError("down"))
        await AuditLogger(store).on_event(SystemEvent(event_type=EventType.SYSTEM_STARTUP))
        store.append.assert_awaited_once()
