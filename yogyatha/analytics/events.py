"""Event bus — async pub/sub for SystemEvents.

Searches, tracked applications and catalog changes emit events that are
consumed by AnalyticsService and AuditLogger.

Usage:
    # Emit an event from async code:
    from yogyatha.analytics.events import event_bus

    await event_bus.emit(SystemEvent(
        event_type=EventType.SCHEME_CREATED,
        data={"scheme_id": scheme.id},
    ))

    # Fire-and-forget from sync code running inside the event loop:
    event_bus.publish_nowait(event)

    # Register a subscriber at startup:
    event_bus.subscribe(my_handler)  # async def my_handler(event: SystemEvent) -> None
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from yogyatha.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)

# Type alias for event handler functions
EventHandler = Callable[[SystemEvent], Coroutine[Any, Any, None]]


class EventBus:
    """Queue-backed dispatcher. Handler failures are logged and isolated."""

    def __init__(self) -> None:
        self._subscribers: list[EventHandler] = []
        self._type_subscribers: dict[EventType, list[EventHandler]] = {}
        self._queue: asyncio.Queue[SystemEvent] | None = None
        self._worker_task: asyncio.Task[None] | None = None

    # ── Subscriptions ────────────────────────────────────────────────

    def subscribe(self, handler: EventHandler, event_types: list[EventType] | None = None) -> None:
        """Register an event handler.

        Args:
            handler: Async function that accepts a SystemEvent.
            event_types: If provided, handler only receives these event types.
                         If None, handler receives ALL events.
        """
        if event_types is None:
            self._subscribers.append(handler)
            logger.info("Registered global event subscriber: %s", _handler_name(handler))
        else:
            for et in event_types:
                self._type_subscribers.setdefault(et, []).append(handler)
            logger.info(
                "Registered event subscriber %s for types: %s",
                _handler_name(handler),
                [t.value for t in event_types],
            )

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        if handler in self._subscribers:
            self._subscribers.remove(handler)
        for handlers in self._type_subscribers.values():
            if handler in handlers:
                handlers.remove(handler)

    # ── Publishing ───────────────────────────────────────────────────

    async def emit(self, event: SystemEvent) -> None:
        """Queue an event for the background worker.

        The emitter is never blocked by slow subscribers.
        """
        queue = self._ensure_queue()
        await queue.put(event)
        logger.debug("Event emitted: %s (actor=%s)", event.event_type.value, event.actor_id)

    def publish_nowait(self, event: SystemEvent) -> None:
        """Queue an event without awaiting. For sync callers inside the loop.

        Raises RuntimeError when called outside a running event loop.
        """
        self._ensure_queue().put_nowait(event)
        logger.debug("Event published: %s (actor=%s)", event.event_type.value, event.actor_id)

    async def dispatch(self, event: SystemEvent) -> None:
        """Deliver a single event to all matching subscribers right away."""
        handlers: list[EventHandler] = list(self._subscribers)
        handlers.extend(self._type_subscribers.get(event.event_type, []))

        if not handlers:
            return

        # Run all handlers concurrently; isolate failures
        results = await asyncio.gather(
            *[self._safe_call(handler, event) for handler in handlers],
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("Event handler failed for %s: %s", event.event_type.value, result)

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self) -> None:
        """Create the queue and worker. Call during FastAPI lifespan startup."""
        self._worker_task = None
        self._queue = asyncio.Queue()
        self._ensure_worker()
        logger.info(
            "Event bus started with %d global + %d typed subscribers",
            len(self._subscribers),
            sum(len(v) for v in self._type_subscribers.values()),
        )

    async def stop(self) -> None:
        """Drain pending events, then stop the worker."""
        if self._queue is not None:
            await self._queue.join()

        if self._worker_task is not None and not self._worker_task.done():
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                pass

        self._worker_task = None
        self._queue = None
        logger.info("Event bus stopped")

    async def join(self) -> None:
        """Wait until every queued event has been dispatched."""
        if self._queue is not None:
            await self._queue.join()

    # ── Internals ────────────────────────────────────────────────────

    def _ensure_queue(self) -> asyncio.Queue[SystemEvent]:
        """Return the live queue, creating it (and the worker) on first use."""
        loop = asyncio.get_running_loop()
        if self._worker_task is not None and self._worker_task.get_loop() is not loop:
            # Reused from another event loop (e.g. a previous app lifespan)
            self._worker_task = None
            self._queue = None
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._ensure_worker()
        return self._queue

    def _ensure_worker(self) -> None:
        """Start the background worker if not already running."""
        if self._worker_task is None or self._worker_task.done():
            self._worker_task = asyncio.get_running_loop().create_task(self._worker())
            logger.info("Event worker started")

    async def _worker(self) -> None:
        """Drain the queue and dispatch to subscribers until cancelled."""
        while True:
            queue = self._queue
            if queue is None:
                return
            try:
                event = await queue.get()
            except asyncio.CancelledError:
                logger.info("Event worker shutting down")
                break
            try:
                await self.dispatch(event)
            except Exception:
                logger.exception("Error in event worker")
            finally:
                queue.task_done()

    async def _safe_call(self, handler: EventHandler, event: SystemEvent) -> None:
        """Call a handler with error isolation."""
        try:
            await handler(event)
        except Exception:
            logger.exception(
                "Handler %s failed for event %s", _handler_name(handler), event.event_type.value,
            )
            raise


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


# Module-level singleton
event_bus = EventBus()
