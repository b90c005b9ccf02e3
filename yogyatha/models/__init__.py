"""Domain enums for Yogyatha."""

from __future__ import annotations

from yogyatha.models.enums import (
    ApplicationStatus,
    Category,
    Gender,
    Language,
    Role,
    StorageBackend,
)

__all__ = [
    "ApplicationStatus",
    "Category",
    "Gender",
    "Language",
    "Role",
    "StorageBackend",
]
