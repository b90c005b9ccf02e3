"""Tests for the search event recorder and its event-bus sink."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from yogyatha.analytics.events import EventBus
from yogyatha.analytics.recorder import EventBusSink, SearchEventRecorder
from yogyatha.eligibility import PAN_INDIA, score_and_filter
from yogyatha.models.enums import Category, Language, Role
from yogyatha.schemas.eligibility import EligibilityRules, Profile, Scheme
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import SearchEvent


def _profile() -> Profile:
    return Profile(
        date_of_birth="1990-01-01",
        income=150_000,
        state="Bihar",
        category=Category.OBC,
        role=Role.FARMER,
    )


def _scheme() -> Scheme:
    return Scheme(
        id="kisan",
        name={Language.EN: "Kisan"},
        eligibility=EligibilityRules(
            max_income=200_000, states=[PAN_INDIA], categories=[Category.OBC], roles=[Role.FARMER],
        ),
    )


class TestSearchEventRecorder:
    def test_builds_event(self):
        sink = MagicMock()
        recorder = SearchEventRecorder(sink, clock=lambda: 1_700_000_000.5)

        recorder.record("ravi", _profile())

        sink.record_search.assert_called_once_with(SearchEvent(
            username="ravi",
            state="Bihar",
            role=Role.FARMER,
            income=150_000,
            timestamp=1_700_000_000_500,
        ))

    def test_sink_failure_swallowed(self):
        sink = MagicMock()
        sink.record_search.side_effect = ConnectionError("store down")
        recorder = SearchEventRecorder(sink)

        recorder.record("ravi", _profile())  # does not raise

        sink.record_search.assert_called_once()

    def test_sink_failure_does_not_break_search(self):
        sink = MagicMock()
        sink.record_search.side_effect = RuntimeError("no loop")
        recorder = SearchEventRecorder(sink)

        result = score_and_filter([_scheme()], _profile(), "ravi", recorder, today=date(2026, 10, 19))

        assert [s.id for s in result] == ["kisan"]
        assert result[0].score == 11

    def test_bus_sink_outside_loop_is_dropped(self):
        recorder = SearchEventRecorder(EventBusSink(EventBus()))
        recorder.record("ravi", _profile())  # RuntimeError from the bus is logged


class TestEventBusSink:
    @pytest.mark.asyncio()
    async def test_publishes_search_executed(self):
        bus = EventBus()
        received: list[SystemEvent] = []

        async def handler(event: SystemEvent) -> None:
            received.append(event)

        bus.subscribe(handler, event_types=[EventType.SEARCH_EXECUTED])
        await bus.start()

        SearchEventRecorder(EventBusSink(bus), clock=lambda: 10.0).record("ravi", _profile())
        await bus.stop()

        assert len(received) == 1
        event = received[0]
        assert event.actor_id == "ravi"
        assert event.data == {
            "username": "ravi",
            "state": "Bihar",
            "role": "Farmer",
            "income": 150_000,
            "timestamp": 10_000,
        }

    def test_uses_publish_nowait(self):
        bus = MagicMock()
        EventBusSink(bus).record_search(SearchEvent(
            username="ravi", state="Bihar", role=Role.FARMER, income=1, timestamp=1,
        ))
        bus.publish_nowait.assert_called_once()
        assert bus.publish_nowait.call_args.args[0].event_type == EventType.SEARCH_EXECUTED
