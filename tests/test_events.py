"""Tests for the event bus — subscription, dispatch, isolation, lifecycle."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from yogyatha.analytics.events import EventBus
from yogyatha.schemas.events import EventType, SystemEvent


def _event(event_type: EventType = EventType.SEARCH_EXECUTED) -> SystemEvent:
    return SystemEvent(event_type=event_type, actor_id="asha", data={"k": "v"})


class _Collector:
    def __init__(self) -> None:
        self.events: list[SystemEvent] = []

    async def __call__(self, event: SystemEvent) -> None:
        self.events.append(event)


class TestDispatch:
    @pytest.mark.asyncio()
    async def test_global_subscriber_receives_all(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)

        await bus.dispatch(_event(EventType.SEARCH_EXECUTED))
        await bus.dispatch(_event(EventType.SCHEME_CREATED))

        assert [e.event_type for e in collector.events] == [
            EventType.SEARCH_EXECUTED,
            EventType.SCHEME_CREATED,
        ]

    @pytest.mark.asyncio()
    async def test_typed_subscriber_filters(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector, event_types=[EventType.APPLICATION_TRACKED])

        await bus.dispatch(_event(EventType.SEARCH_EXECUTED))
        await bus.dispatch(_event(EventType.APPLICATION_TRACKED))

        assert [e.event_type for e in collector.events] == [EventType.APPLICATION_TRACKED]

    @pytest.mark.asyncio()
    async def test_failing_handler_isolated(self):
        bus = EventBus()
        failing = AsyncMock(side_effect=RuntimeError("boom"))
        collector = _Collector()
        bus.subscribe(failing)
        bus.subscribe(collector)

        await bus.dispatch(_event())

        failing.assert_awaited_once()
        assert len(collector.events) == 1

    @pytest.mark.asyncio()
    async def test_unsubscribe(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)
        bus.subscribe(collector, event_types=[EventType.SEARCH_EXECUTED])
        bus.unsubscribe(collector)

        await bus.dispatch(_event())

        assert collector.events == []

    @pytest.mark.asyncio()
    async def test_no_subscribers_is_noop(self):
        await EventBus().dispatch(_event())


class TestQueue:
    @pytest.mark.asyncio()
    async def test_emit_delivered_by_worker(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)
        await bus.start()

        await bus.emit(_event())
        await bus.join()

        assert len(collector.events) == 1
        await bus.stop()

    @pytest.mark.asyncio()
    async def test_publish_nowait_delivered_by_worker(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)
        await bus.start()

        bus.publish_nowait(_event())
        await bus.join()

        assert len(collector.events) == 1
        await bus.stop()

    @pytest.mark.asyncio()
    async def test_emit_without_start_starts_worker(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)

        await bus.emit(_event())
        await bus.stop()

        assert len(collector.events) == 1

    @pytest.mark.asyncio()
    async def test_publish_nowait_without_start_starts_worker(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)

        bus.publish_nowait(_event(EventType.SEARCH_EXECUTED))
        await bus.emit(_event(EventType.PROFILE_SAVED))
        await bus.stop()

        assert [e.event_type for e in collector.events] == [EventType.SEARCH_EXECUTED, EventType.PROFILE_SAVED]

    @pytest.mark.asyncio()
    async def test_stop_drains_pending(self):
        bus = EventBus()
        collector = _Collector()
        bus.subscribe(collector)
        await bus.start()

        for _ in range(3):
            bus.publish_nowait(_event())
        await bus.stop()

        assert len(collector.events) == 3

    @pytest.mark.asyncio()
    async def test_worker_survives_handler_failure(self):
        bus = EventBus()
        bus.subscribe(AsyncMock(side_effect=RuntimeError("boom")))
        collector = _Collector()
        bus.subscribe(collector)
        await bus.start()

        await bus.emit(_event())
        await bus.emit(_event())
        await bus.stop()

        assert len(collector.events) == 2

    def test_publish_nowait_outside_loop_raises(self):
        with pytest.raises(RuntimeError):
            EventBus().publish_nowait(_event())


class TestSystemEvent:
    def test_frozen(self):
        event = _event()
        with pytest.raises(ValueError):
            event.actor_id = "other"

    def test_defaults(self):
        event = _event()
        assert event.id is not None
        assert event.timestamp.tzinfo is not None
