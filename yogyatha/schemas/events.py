"""SystemEvent schema — the event type that flows through the event bus.

Searches, application tracking and catalog changes emit SystemEvents.
Subscribers (AnalyticsService, AuditLogger) consume them asynchronously.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """All event types emitted by the system."""

    # Eligibility
    SEARCH_EXECUTED = "search.executed"

    # Applications
    APPLICATION_TRACKED = "application.tracked"
    APPLICATION_STATUS_CHANGED = "application.status_changed"
    APPLICATION_DELETED = "application.deleted"

    # Catalog
    SCHEME_CREATED = "scheme.created"
    SCHEME_UPDATED = "scheme.updated"
    SCHEME_DELETED = "scheme.deleted"

    # Users
    USER_REGISTERED = "user.registered"
    PROFILE_SAVED = "profile.saved"

    # Admin
    ADMIN_ACCESS = "admin.access"

    # System
    SYSTEM_STARTUP = "system.startup"
    SYSTEM_SHUTDOWN = "system.shutdown"


class SystemEvent(BaseModel):
    """Event published on the bus.

    Immutable once created. Consumed by:
    - AnalyticsService → appends search/track records
    - AuditLogger → appends every event to the audit list
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Context (optional, anonymous searches have no actor)
    actor_id: str | None = None
    actor_role: str | None = None

    # Flexible payload
    data: dict[str, Any] = Field(default_factory=dict)

    source_module: str | None = Field(default=None, description="Module that emitted this event")

    model_config = {"frozen": True}
