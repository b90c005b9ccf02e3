"""Repositories over the key-value store.

Each repository owns a small set of keys and serializes records as JSON
through Pydantic. All of them take the store (and, where they emit
events, the event bus) as constructor arguments.

Every read-modify-write of a stored record runs under `store.lock(key)`,
so concurrent requests cannot track the same scheme twice or drop a
catalog edit.
"""

from __future__ import annotations

import json
import logging
import secrets
import time
from datetime import date

from pydantic import TypeAdapter, ValidationError

from yogyatha.analytics.events import EventBus, event_bus
from yogyatha.models.enums import ApplicationStatus
from yogyatha.schemas.eligibility import Profile, Scheme, SchemeCreate, SchemeUpdate
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import (
    AnalyticsData,
    SearchEvent,
    TrackedApplication,
    TrackEvent,
    User,
)
from yogyatha.storage.base import KeyValueStore
from yogyatha.storage.catalog import DEFAULT_SCHEMES

logger = logging.getLogger(__name__)

SCHEMES_KEY = "schemes"
SEARCHES_KEY = "analytics:searches"
TRACKED_KEY = "analytics:tracked"

_schemes_adapter = TypeAdapter(list[Scheme])
_apps_adapter = TypeAdapter(list[TrackedApplication])


class ApplicationAlreadyTrackedError(Exception):
    """The user already tracks an application for this scheme."""


class UserExistsError(Exception):
    """A user with this username is already registered."""


def _now_ms() -> int:
    return int(time.time() * 1000)


def _unique_id(prefix: str, taken: set[str]) -> str:
    """`<prefix>-<epoch ms>`, bumped until it does not collide."""
    stamp = _now_ms()
    while f"{prefix}-{stamp}" in taken:
        stamp += 1
    return f"{prefix}-{stamp}"


# ── Scheme catalog ─────────────────────────────────────────────────────────


class SchemeRepository:
    """Scheme catalog. Order is insertion order and is what ties fall back to."""

    def __init__(self, store: KeyValueStore, bus: EventBus = event_bus) -> None:
        self._store = store
        self._bus = bus

    async def get_schemes(self) -> list[Scheme]:
        """Current catalog snapshot. Seeds (or repairs) it with the defaults."""
        raw = await self._store.get(SCHEMES_KEY)
        if raw is None:
            await self._save(DEFAULT_SCHEMES)
            return list(DEFAULT_SCHEMES)
        try:
            return _schemes_adapter.validate_json(raw)
        except ValidationError:
            logger.error("Stored scheme catalog is corrupt, restoring defaults", exc_info=True)
            await self._save(DEFAULT_SCHEMES)
            return list(DEFAULT_SCHEMES)

    async def get_scheme(self, scheme_id: str) -> Scheme | None:
        for scheme in await self.get_schemes():
            if scheme.id == scheme_id:
                return scheme
        return None

    async def add_scheme(self, data: SchemeCreate) -> Scheme:
        async with self._store.lock(SCHEMES_KEY):
            schemes = await self.get_schemes()
            scheme = Scheme(
                id=_unique_id("custom", {s.id for s in schemes}),
                **data.model_dump(),
            )
            await self._save([*schemes, scheme])
        await self._emit(EventType.SCHEME_CREATED, scheme.id)
        return scheme

    async def update_scheme(self, scheme_id: str, updates: SchemeUpdate) -> Scheme | None:
        """Apply the fields set on `updates`. Returns None for an unknown id."""
        changes = updates.model_dump(exclude_unset=True)
        async with self._store.lock(SCHEMES_KEY):
            schemes = await self.get_schemes()
            updated: Scheme | None = None
            result: list[Scheme] = []
            for scheme in schemes:
                if scheme.id == scheme_id:
                    updated = Scheme.model_validate({**scheme.model_dump(), **changes})
                    result.append(updated)
                else:
                    result.append(scheme)

            if updated is None:
                return None
            await self._save(result)
        await self._emit(EventType.SCHEME_UPDATED, scheme_id, fields=sorted(changes))
        return updated

    async def delete_scheme(self, scheme_id: str) -> bool:
        async with self._store.lock(SCHEMES_KEY):
            schemes = await self.get_schemes()
            remaining = [s for s in schemes if s.id != scheme_id]
            if len(remaining) == len(schemes):
                return False
            await self._save(remaining)
        await self._emit(EventType.SCHEME_DELETED, scheme_id)
        return True

    async def _save(self, schemes: list[Scheme]) -> None:
        payload = [s.model_dump(mode="json", exclude={"score"}) for s in schemes]
        await self._store.put(SCHEMES_KEY, json.dumps(payload, ensure_ascii=False))

    async def _emit(self, event_type: EventType, scheme_id: str, **extra: object) -> None:
        await self._bus.emit(SystemEvent(
            event_type=event_type,
            actor_role="admin",
            data={"scheme_id": scheme_id, **extra},
            source_module="storage.schemes",
        ))


# ── User profiles ──────────────────────────────────────────────────────────


class ProfileRepository:
    """Last saved eligibility profile per user."""

    def __init__(self, store: KeyValueStore, bus: EventBus = event_bus) -> None:
        self._store = store
        self._bus = bus

    @staticmethod
    def _key(username: str) -> str:
        return f"profile:{username}"

    async def get_profile(self, username: str) -> Profile | None:
        raw = await self._store.get(self._key(username))
        if raw is None:
            return None
        return Profile.model_validate_json(raw)

    async def save_profile(self, username: str, profile: Profile) -> None:
        await self._store.put(self._key(username), profile.model_dump_json())
        await self._bus.emit(SystemEvent(
            event_type=EventType.PROFILE_SAVED,
            actor_id=username,
            actor_role="citizen",
            source_module="storage.profiles",
        ))


# ── Application tracking ───────────────────────────────────────────────────


class ApplicationRepository:
    """Applications each user is tracking."""

    def __init__(self, store: KeyValueStore, bus: EventBus = event_bus) -> None:
        self._store = store
        self._bus = bus

    @staticmethod
    def _key(username: str) -> str:
        return f"apps:{username}"

    async def list_applications(self, username: str) -> list[TrackedApplication]:
        raw = await self._store.get(self._key(username))
        if raw is None:
            return []
        return _apps_adapter.validate_json(raw)

    async def track_application(self, username: str, scheme: Scheme) -> TrackedApplication:
        """Start tracking `scheme`. Raises ApplicationAlreadyTrackedError on repeats."""
        async with self._store.lock(self._key(username)):
            apps = await self.list_applications(username)
            if any(app.scheme_id == scheme.id for app in apps):
                msg = f"Application for {scheme.id} already tracked"
                raise ApplicationAlreadyTrackedError(msg)

            app = TrackedApplication(
                id=_unique_id("app", {a.id for a in apps}),
                user_id=username,
                scheme_id=scheme.id,
                scheme_name=dict(scheme.name),
                scheme_icon=scheme.icon or "document-text",
                application_date=date.today(),
                status=ApplicationStatus.APPLIED,
            )
            await self._save(username, [*apps, app])

        track = TrackEvent(scheme_id=scheme.id, scheme_name=scheme.display_name(), timestamp=_now_ms())
        await self._bus.emit(SystemEvent(
            event_type=EventType.APPLICATION_TRACKED,
            actor_id=username,
            actor_role="citizen",
            data=track.model_dump(mode="json"),
            source_module="storage.applications",
        ))
        return app

    async def update_status(
        self, username: str, app_id: str, status: ApplicationStatus,
    ) -> TrackedApplication | None:
        async with self._store.lock(self._key(username)):
            apps = await self.list_applications(username)
            updated: TrackedApplication | None = None
            for i, app in enumerate(apps):
                if app.id == app_id:
                    updated = app.model_copy(update={"status": status})
                    apps[i] = updated

            if updated is None:
                return None
            await self._save(username, apps)
        await self._bus.emit(SystemEvent(
            event_type=EventType.APPLICATION_STATUS_CHANGED,
            actor_id=username,
            actor_role="citizen",
            data={"application_id": app_id, "status": status.value},
            source_module="storage.applications",
        ))
        return updated

    async def delete_application(self, username: str, app_id: str) -> bool:
        async with self._store.lock(self._key(username)):
            apps = await self.list_applications(username)
            remaining = [a for a in apps if a.id != app_id]
            if len(remaining) == len(apps):
                return False
            await self._save(username, remaining)
        await self._bus.emit(SystemEvent(
            event_type=EventType.APPLICATION_DELETED,
            actor_id=username,
            actor_role="citizen",
            data={"application_id": app_id},
            source_module="storage.applications",
        ))
        return True

    async def _save(self, username: str, apps: list[TrackedApplication]) -> None:
        await self._store.put(self._key(username), _apps_adapter.dump_json(apps).decode())


# ── Analytics ──────────────────────────────────────────────────────────────


class AnalyticsRepository:
    """Append-only search and track records."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def append_search(self, event: SearchEvent) -> None:
        await self._store.append(SEARCHES_KEY, event.model_dump_json())

    async def append_tracked(self, event: TrackEvent) -> None:
        await self._store.append(TRACKED_KEY, event.model_dump_json())

    async def get_analytics(self) -> AnalyticsData:
        searches = [SearchEvent.model_validate_json(r) for r in await self._store.read_list(SEARCHES_KEY)]
        tracked = [TrackEvent.model_validate_json(r) for r in await self._store.read_list(TRACKED_KEY)]
        return AnalyticsData(searches=searches, tracked=tracked)

    async def get_search_history(self, username: str) -> list[SearchEvent]:
        """The user's searches, newest first."""
        data = await self.get_analytics()
        history = [s for s in data.searches if s.username == username]
        return sorted(history, key=lambda s: s.timestamp, reverse=True)


# ── Users ──────────────────────────────────────────────────────────────────


class UserRepository:
    """Registered users. Credentials are a plain equality check."""

    def __init__(self, store: KeyValueStore, bus: EventBus = event_bus) -> None:
        self._store = store
        self._bus = bus

    @staticmethod
    def _key(username: str) -> str:
        return f"user:{username}"

    async def get_user(self, username: str) -> User | None:
        raw = await self._store.get(self._key(username))
        if raw is None:
            return None
        return User.model_validate_json(raw)

    async def register(self, user: User) -> User:
        async with self._store.lock(self._key(user.username)):
            if await self.get_user(user.username) is not None:
                msg = f"User {user.username} already exists"
                raise UserExistsError(msg)
            await self._store.put(self._key(user.username), user.model_dump_json())
        await self._bus.emit(SystemEvent(
            event_type=EventType.USER_REGISTERED,
            actor_id=user.username,
            actor_role="citizen",
            source_module="storage.users",
        ))
        return user

    async def authenticate(self, username: str, password: str) -> User | None:
        user = await self.get_user(username)
        if user is None:
            return None
        if not secrets.compare_digest(user.password.encode("utf-8"), password.encode("utf-8")):
            return None
        return user
