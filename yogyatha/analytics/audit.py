"""Audit log subscriber — appends every SystemEvent to the audit list.

Registered as a global subscriber (receives ALL events). This is the
service's append-only trail for debugging and admin review.

Never raises — failures are logged but never propagate to the event bus.
"""

from __future__ import annotations

import logging

from yogyatha.schemas.events import SystemEvent
from yogyatha.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

AUDIT_KEY = "audit"


class AuditLogger:
    """Writes events to the store's audit list."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def on_event(self, event: SystemEvent) -> None:
        try:
            await self._store.append(AUDIT_KEY, event.model_dump_json())
        except Exception:
            logger.exception(
                "Failed to persist audit event: %s (actor=%s)",
                event.event_type.value,
                event.actor_id,
            )

    async def recent(self, limit: int = 50) -> list[SystemEvent]:
        """Latest `limit` events, newest first."""
        rows = await self._store.read_list(AUDIT_KEY)
        return [SystemEvent.model_validate_json(r) for r in reversed(rows[-limit:])] if limit > 0 else []
