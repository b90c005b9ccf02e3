"""Admin API — scheme catalog management and analytics.

All routes require HTTP Basic Auth via the verify_admin dependency.
"""
# ruff: noqa: B008

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from yogyatha.analytics.audit import AuditLogger
from yogyatha.analytics.events import EventBus
from yogyatha.analytics.service import AnalyticsService
from yogyatha.api.auth import verify_admin
from yogyatha.api.deps import get_analytics_repo, get_analytics_service, get_bus, get_scheme_repo, get_store
from yogyatha.schemas.eligibility import Scheme, SchemeCreate, SchemeUpdate
from yogyatha.schemas.events import EventType, SystemEvent
from yogyatha.schemas.tracking import AnalyticsData, AnalyticsSummary
from yogyatha.storage.base import KeyValueStore
from yogyatha.storage.repositories import AnalyticsRepository, SchemeRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


async def _emit_access(bus: EventBus, admin: str, page: str) -> None:
    """Emit ADMIN_ACCESS audit event for each admin call."""
    await bus.emit(SystemEvent(
        event_type=EventType.ADMIN_ACCESS,
        actor_id=admin,
        actor_role="admin",
        data={"page": page, "interface": "api"},
        source_module="api.admin",
    ))


# ── Scheme management ────────────────────────────────────────────────


@router.post("/schemes", response_model=Scheme, status_code=status.HTTP_201_CREATED)
async def create_scheme(
    body: SchemeCreate,
    admin: str = Depends(verify_admin),
    schemes: SchemeRepository = Depends(get_scheme_repo),
    bus: EventBus = Depends(get_bus),
) -> Scheme:
    await _emit_access(bus, admin, "schemes.create")
    scheme = await schemes.add_scheme(body)
    logger.info("Admin %s created scheme %s", admin, scheme.id)
    return scheme


@router.put("/schemes/{scheme_id}", response_model=Scheme)
async def update_scheme(
    scheme_id: str,
    body: SchemeUpdate,
    admin: str = Depends(verify_admin),
    schemes: SchemeRepository = Depends(get_scheme_repo),
    bus: EventBus = Depends(get_bus),
) -> Scheme:
    await _emit_access(bus, admin, "schemes.update")
    updated = await schemes.update_scheme(scheme_id, body)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scheme not found")
    logger.info("Admin %s updated scheme %s", admin, scheme_id)
    return updated


@router.delete("/schemes/{scheme_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scheme(
    scheme_id: str,
    admin: str = Depends(verify_admin),
    schemes: SchemeRepository = Depends(get_scheme_repo),
    bus: EventBus = Depends(get_bus),
) -> None:
    await _emit_access(bus, admin, "schemes.delete")
    if not await schemes.delete_scheme(scheme_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scheme not found")
    logger.info("Admin %s deleted scheme %s", admin, scheme_id)


# ── Analytics ────────────────────────────────────────────────────────


@router.get("/analytics", response_model=AnalyticsSummary)
async def analytics_summary(
    admin: str = Depends(verify_admin),
    service: AnalyticsService = Depends(get_analytics_service),
    bus: EventBus = Depends(get_bus),
) -> AnalyticsSummary:
    await _emit_access(bus, admin, "analytics")
    return await service.summary()


@router.get("/analytics/raw", response_model=AnalyticsData)
async def analytics_raw(
    admin: str = Depends(verify_admin),
    repo: AnalyticsRepository = Depends(get_analytics_repo),
    bus: EventBus = Depends(get_bus),
) -> AnalyticsData:
    await _emit_access(bus, admin, "analytics.raw")
    return await repo.get_analytics()


@router.get("/audit", response_model=list[SystemEvent])
async def audit_log(
    limit: int = Query(default=50, ge=1, le=500),
    admin: str = Depends(verify_admin),
    store: KeyValueStore = Depends(get_store),
) -> list[SystemEvent]:
    return await AuditLogger(store).recent(limit)
