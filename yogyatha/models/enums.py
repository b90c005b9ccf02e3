"""Domain enums shared by the Pydantic schemas, the engine and the API.

All enums use the str mixin so they serialize to their display value in JSON.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Languages the scheme catalog carries localized text for."""

    EN = "en"
    HI = "hi"
    TE = "te"


class Category(str, Enum):
    """Social category of the applicant — gates scheme eligibility."""

    GENERAL = "General"
    SC = "SC"
    ST = "ST"
    OBC = "OBC"
    EWS = "EWS"


class Role(str, Enum):
    """Occupation / life role of the applicant."""

    CITIZEN = "Citizen"
    STUDENT = "Student"
    FARMER = "Farmer"
    ENTREPRENEUR = "Entrepreneur"
    JOB_SEEKER = "Job Seeker"


class Gender(str, Enum):
    """Self-declared gender. Carried on profiles and rules, never scored."""

    FEMALE = "Female"
    MALE = "Male"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class ApplicationStatus(str, Enum):
    """Lifecycle of an application the user is tracking."""

    APPLIED = "Applied"
    IN_REVIEW = "In Review"
    DOCUMENTS_REQUESTED = "Documents Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class StorageBackend(str, Enum):
    """Key-value store implementations selectable from settings."""

    MEMORY = "memory"
    REDIS = "redis"
