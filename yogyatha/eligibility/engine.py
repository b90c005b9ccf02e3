"""Eligibility engine — scores the scheme catalog against a profile.

Pure Python orchestrator. No storage access, no awaiting.
The only side effect is the search event handed to the recorder, which
never blocks or fails the scoring pass.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING

from yogyatha.eligibility.age import calculate_age
from yogyatha.eligibility.documents import missing_documents
from yogyatha.eligibility.rules import evaluate_rules, score_conditions
from yogyatha.models.enums import Language
from yogyatha.schemas.eligibility import Profile, Scheme, SchemeExplanation

if TYPE_CHECKING:
    from yogyatha.analytics.recorder import SearchEventRecorder

# Minimum score a scheme needs to appear in search results.
MIN_SCORE = 5


def score_scheme(scheme: Scheme, profile: Profile, age: int) -> Scheme:
    """Return a copy of `scheme` with its score set. The input is not modified."""
    score = score_conditions(evaluate_rules(scheme.eligibility, profile, age))
    return scheme.model_copy(update={"score": score})


def filter_and_rank(scored: Iterable[Scheme]) -> list[Scheme]:
    """Keep schemes scoring at least MIN_SCORE, highest score first.

    `sorted` is stable, so equal scores keep their catalog order.
    """
    eligible = [s for s in scored if (s.score or 0) >= MIN_SCORE]
    return sorted(eligible, key=lambda s: s.score or 0, reverse=True)


def score_and_filter(
    schemes: Iterable[Scheme],
    profile: Profile,
    username: str,
    recorder: SearchEventRecorder,
    *,
    today: date | None = None,
) -> list[Scheme]:
    """Run one search: record it, score every scheme, filter and rank.

    Returns the ranked list of scored copies; the catalog is left untouched.
    """
    recorder.record(username, profile)

    age = calculate_age(profile.date_of_birth, today)
    scored = [score_scheme(scheme, profile, age) for scheme in schemes]
    return filter_and_rank(scored)


def explain_scheme(
    scheme: Scheme,
    profile: Profile,
    *,
    today: date | None = None,
    language: Language = Language.EN,
) -> SchemeExplanation:
    """Per-criterion breakdown of a single scheme's score. Records nothing."""
    age = calculate_age(profile.date_of_birth, today)
    conditions = evaluate_rules(scheme.eligibility, profile, age)
    score = score_conditions(conditions)
    return SchemeExplanation(
        scheme_id=scheme.id,
        age=age,
        score=score,
        included=score >= MIN_SCORE,
        conditions=conditions,
        missing_documents=missing_documents(scheme, profile, language),
    )
