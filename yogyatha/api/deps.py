"""FastAPI dependencies — build repositories from the app's store and bus."""
# ruff: noqa: B008

from __future__ import annotations

from fastapi import Depends, Request

from yogyatha.analytics.events import EventBus
from yogyatha.analytics.recorder import EventBusSink, SearchEventRecorder
from yogyatha.analytics.service import AnalyticsService
from yogyatha.storage.base import KeyValueStore
from yogyatha.storage.repositories import (
    AnalyticsRepository,
    ApplicationRepository,
    ProfileRepository,
    SchemeRepository,
    UserRepository,
)


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_bus(request: Request) -> EventBus:
    return request.app.state.event_bus


def get_scheme_repo(store: KeyValueStore = Depends(get_store), bus: EventBus = Depends(get_bus)) -> SchemeRepository:
    return SchemeRepository(store, bus)


def get_profile_repo(store: KeyValueStore = Depends(get_store), bus: EventBus = Depends(get_bus)) -> ProfileRepository:
    return ProfileRepository(store, bus)


def get_application_repo(
    store: KeyValueStore = Depends(get_store), bus: EventBus = Depends(get_bus),
) -> ApplicationRepository:
    return ApplicationRepository(store, bus)


def get_user_repo(store: KeyValueStore = Depends(get_store), bus: EventBus = Depends(get_bus)) -> UserRepository:
    return UserRepository(store, bus)


def get_analytics_repo(store: KeyValueStore = Depends(get_store)) -> AnalyticsRepository:
    return AnalyticsRepository(store)


def get_analytics_service(repo: AnalyticsRepository = Depends(get_analytics_repo)) -> AnalyticsService:
    return AnalyticsService(repo)


def get_recorder(bus: EventBus = Depends(get_bus)) -> SearchEventRecorder:
    return SearchEventRecorder(EventBusSink(bus))
