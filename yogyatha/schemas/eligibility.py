"""Pydantic schemas for the eligibility engine.

Pure data classes — no storage dependencies, no HTTP dependencies.
Used as inputs/outputs for the deterministic scoring pipeline.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from yogyatha.models.enums import Category, Gender, Language, Role

LocalizedText = dict[Language, str]
LocalizedList = dict[Language, list[str]]


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class Profile(BaseModel):
    """The searching user's attributes, built by the caller per search.

    `date_of_birth` stays a raw string: the age calculator owns parsing and
    degrades malformed input to age 0 instead of rejecting the search.
    """

    date_of_birth: str = ""            # ISO YYYY-MM-DD
    income: int = Field(default=0, ge=0, description="Annual income")
    state: str = ""
    category: Category
    role: Role
    gender: Gender | None = None       # never scored
    documents_owned: list[str] = Field(default_factory=list)  # advisory only


# ---------------------------------------------------------------------------
# Scheme catalog
# ---------------------------------------------------------------------------


class EligibilityRules(BaseModel):
    """Structured eligibility criteria of a single scheme."""

    model_config = {"frozen": True}

    min_age: int = 0
    max_age: int = 120
    max_income: int
    states: list[str] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    roles: list[Role] = Field(default_factory=list)
    genders: list[Gender] | None = None  # advisory, not enforced

    @model_validator(mode="after")
    def check_age_bounds(self) -> EligibilityRules:
        """Reject inverted age ranges."""
        if self.min_age > self.max_age:
            msg = f"min_age ({self.min_age}) must not exceed max_age ({self.max_age})"
            raise ValueError(msg)
        return self


class SchemeContent(BaseModel):
    """Descriptive fields of a scheme. Passed through untouched by the engine."""

    icon: str | None = None            # e.g. "academic-cap", "leaf"
    name: LocalizedText
    description: LocalizedText = Field(default_factory=dict)
    eligibility: EligibilityRules
    benefits: LocalizedList = Field(default_factory=dict)
    documents: LocalizedList = Field(default_factory=dict)
    apply_link: str = ""
    source_url: str | None = None
    easy_summary: LocalizedText = Field(default_factory=dict)


class Scheme(SchemeContent):
    """A welfare scheme from the catalog.

    Immutable during a scoring pass. `score` is only set on the copies the
    engine returns and is never persisted with the catalog record.
    """

    model_config = {"frozen": True}

    id: str
    score: int | None = Field(default=None, ge=0, le=11)

    def display_name(self, language: Language = Language.EN) -> str:
        """Name in the requested language, falling back to English then the id."""
        return self.name.get(language) or self.name.get(Language.EN) or self.id


class SchemeCreate(SchemeContent):
    """Admin input for a new scheme. The id is assigned by the repository."""

    @model_validator(mode="after")
    def check_rule_sets(self) -> SchemeCreate:
        """A catalog scheme must name at least one state, category and role."""
        rules = self.eligibility
        empty = [
            name for name, values in (
                ("states", rules.states),
                ("categories", rules.categories),
                ("roles", rules.roles),
            ) if not values
        ]
        if empty:
            msg = f"Eligibility must list at least one value for: {', '.join(empty)}"
            raise ValueError(msg)
        return self


class SchemeUpdate(BaseModel):
    """Partial admin update. Only fields that are set are applied."""

    icon: str | None = None
    name: LocalizedText | None = None
    description: LocalizedText | None = None
    eligibility: EligibilityRules | None = None
    benefits: LocalizedList | None = None
    documents: LocalizedList | None = None
    apply_link: str | None = None
    source_url: str | None = None
    easy_summary: LocalizedText | None = None


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------


class RuleCondition(BaseModel):
    """One evaluated eligibility criterion."""

    name: str
    description: str
    met: bool
    is_hard: bool = False
    points: int = 0                    # awarded when met and no hard gate failed
    value: Any = None                  # the profile value that was checked


class SchemeExplanation(BaseModel):
    """Why a profile got the score it did for one scheme."""

    scheme_id: str
    age: int
    score: int
    included: bool                     # score passes the minimum threshold
    conditions: list[RuleCondition]
    missing_documents: list[str] = Field(default_factory=list)
