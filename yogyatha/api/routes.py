"""Citizen-facing API — catalog, eligibility search, profiles, tracking."""
# ruff: noqa: B008

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from yogyatha.analytics.recorder import SearchEventRecorder
from yogyatha.api.deps import (
    get_analytics_repo,
    get_application_repo,
    get_profile_repo,
    get_recorder,
    get_scheme_repo,
    get_user_repo,
)
from yogyatha.eligibility import calculate_age, explain_scheme, score_and_filter
from yogyatha.eligibility.documents import documents_for_state
from yogyatha.models.enums import Language
from yogyatha.schemas.eligibility import Profile, Scheme, SchemeExplanation
from yogyatha.schemas.requests import (
    LoginRequest,
    SearchRequest,
    SearchResponse,
    StatusUpdate,
    TrackRequest,
)
from yogyatha.schemas.tracking import SearchEvent, TrackedApplication, User, UserPublic
from yogyatha.storage.repositories import (
    AnalyticsRepository,
    ApplicationAlreadyTrackedError,
    ApplicationRepository,
    ProfileRepository,
    SchemeRepository,
    UserExistsError,
    UserRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["citizen"])


# ── Catalog ──────────────────────────────────────────────────────────


@router.get("/schemes", response_model=list[Scheme])
async def list_schemes(schemes: SchemeRepository = Depends(get_scheme_repo)) -> list[Scheme]:
    return await schemes.get_schemes()


@router.get("/schemes/{scheme_id}", response_model=Scheme)
async def get_scheme(scheme_id: str, schemes: SchemeRepository = Depends(get_scheme_repo)) -> Scheme:
    scheme = await schemes.get_scheme(scheme_id)
    if scheme is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scheme not found")
    return scheme


@router.get("/documents", response_model=list[str])
async def list_documents(state: str | None = Query(default=None)) -> list[str]:
    """Documents worth keeping ready for the given state."""
    return documents_for_state(state)


# ── Eligibility ──────────────────────────────────────────────────────


@router.post("/search", response_model=SearchResponse)
async def search(
    body: SearchRequest,
    schemes: SchemeRepository = Depends(get_scheme_repo),
    recorder: SearchEventRecorder = Depends(get_recorder),
) -> SearchResponse:
    """Score the whole catalog for `body.profile` and return the ranked matches."""
    catalog = await schemes.get_schemes()
    results = score_and_filter(catalog, body.profile, body.username, recorder)
    logger.info(
        "Search by %s matched %d of %d schemes",
        body.username, len(results), len(catalog),
    )
    return SearchResponse(
        age=calculate_age(body.profile.date_of_birth),
        evaluated=len(catalog),
        results=results,
    )


@router.post("/schemes/{scheme_id}/explain", response_model=SchemeExplanation)
async def explain(
    scheme_id: str,
    profile: Profile,
    language: Language = Query(default=Language.EN),
    schemes: SchemeRepository = Depends(get_scheme_repo),
) -> SchemeExplanation:
    scheme = await schemes.get_scheme(scheme_id)
    if scheme is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scheme not found")
    return explain_scheme(scheme, profile, language=language)


# ── Profiles ─────────────────────────────────────────────────────────


@router.get("/users/{username}/profile", response_model=Profile)
async def get_profile(username: str, profiles: ProfileRepository = Depends(get_profile_repo)) -> Profile:
    profile = await profiles.get_profile(username)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No saved profile")
    return profile


@router.put("/users/{username}/profile", response_model=Profile)
async def save_profile(
    username: str,
    profile: Profile,
    profiles: ProfileRepository = Depends(get_profile_repo),
) -> Profile:
    await profiles.save_profile(username, profile)
    return profile


@router.get("/users/{username}/searches", response_model=list[SearchEvent])
async def search_history(
    username: str,
    analytics: AnalyticsRepository = Depends(get_analytics_repo),
) -> list[SearchEvent]:
    return await analytics.get_search_history(username)


# ── Application tracking ─────────────────────────────────────────────


@router.get("/users/{username}/applications", response_model=list[TrackedApplication])
async def list_applications(
    username: str,
    apps: ApplicationRepository = Depends(get_application_repo),
) -> list[TrackedApplication]:
    return await apps.list_applications(username)


@router.post(
    "/users/{username}/applications",
    response_model=TrackedApplication,
    status_code=status.HTTP_201_CREATED,
)
async def track_application(
    username: str,
    body: TrackRequest,
    schemes: SchemeRepository = Depends(get_scheme_repo),
    apps: ApplicationRepository = Depends(get_application_repo),
) -> TrackedApplication:
    scheme = await schemes.get_scheme(body.scheme_id)
    if scheme is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scheme not found")
    try:
        return await apps.track_application(username, scheme)
    except ApplicationAlreadyTrackedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Application already tracked.") from exc


@router.patch("/users/{username}/applications/{app_id}", response_model=TrackedApplication)
async def update_application_status(
    username: str,
    app_id: str,
    body: StatusUpdate,
    apps: ApplicationRepository = Depends(get_application_repo),
) -> TrackedApplication:
    updated = await apps.update_status(username, app_id, body.status)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return updated


@router.delete("/users/{username}/applications/{app_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    username: str,
    app_id: str,
    apps: ApplicationRepository = Depends(get_application_repo),
) -> None:
    if not await apps.delete_application(username, app_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")


# ── Accounts ─────────────────────────────────────────────────────────


@router.post("/auth/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register(body: User, users: UserRepository = Depends(get_user_repo)) -> UserPublic:
    try:
        user = await users.register(body)
    except UserExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken") from exc
    return UserPublic.model_validate(user.model_dump(exclude={"password"}))


@router.post("/auth/login", response_model=UserPublic)
async def login(body: LoginRequest, users: UserRepository = Depends(get_user_repo)) -> UserPublic:
    user = await users.authenticate(body.username, body.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    return UserPublic.model_validate(user.model_dump(exclude={"password"}))
