"""Schemas for application tracking, users and analytics records."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from yogyatha.models.enums import ApplicationStatus, Language, Role

# ---------------------------------------------------------------------------
# Tracked applications
# ---------------------------------------------------------------------------


class TrackedApplication(BaseModel):
    """An application the user told us they submitted."""

    id: str
    user_id: str
    scheme_id: str
    scheme_name: dict[Language, str]
    scheme_icon: str = "document-text"
    application_date: date
    status: ApplicationStatus = ApplicationStatus.APPLIED
    application_number: str | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserPublic(BaseModel):
    """User fields that are safe to return from the API."""

    username: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    mobile: str = ""


class User(UserPublic):
    """Stored user record. Passwords are compared verbatim."""

    password: str


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


class SearchEvent(BaseModel):
    """One executed search. `timestamp` is epoch milliseconds."""

    username: str
    state: str
    role: Role
    income: int
    timestamp: int


class TrackEvent(BaseModel):
    """One newly tracked application. `timestamp` is epoch milliseconds."""

    scheme_id: str
    scheme_name: str
    timestamp: int


class AnalyticsData(BaseModel):
    """Raw append-only analytics lists."""

    searches: list[SearchEvent] = Field(default_factory=list)
    tracked: list[TrackEvent] = Field(default_factory=list)


class CountEntry(BaseModel):
    """A label with its occurrence count."""

    name: str
    count: int


class AnalyticsSummary(BaseModel):
    """Aggregated view shown on the admin dashboard."""

    total_searches: int
    total_tracked: int
    top_schemes: list[CountEntry] = Field(default_factory=list)
    searches_by_state: list[CountEntry] = Field(default_factory=list)
    searches_by_role: list[CountEntry] = Field(default_factory=list)
