"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from yogyatha.models.enums import ApplicationStatus
from yogyatha.schemas.eligibility import Profile, Scheme


class SearchRequest(BaseModel):
    username: str = Field(default="guest", min_length=1)
    profile: Profile


class SearchResponse(BaseModel):
    """Ranked schemes that passed the minimum score."""

    age: int
    evaluated: int                     # catalog size at search time
    results: list[Scheme]


class TrackRequest(BaseModel):
    scheme_id: str


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class LoginRequest(BaseModel):
    username: str
    password: str
