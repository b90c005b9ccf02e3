"""Eligibility engine — rule-based scoring of welfare schemes."""

from yogyatha.eligibility.age import calculate_age
from yogyatha.eligibility.engine import (
    MIN_SCORE,
    explain_scheme,
    filter_and_rank,
    score_and_filter,
    score_scheme,
)
from yogyatha.eligibility.regions import PAN_INDIA
from yogyatha.eligibility.rules import MAX_SCORE
from yogyatha.schemas.eligibility import EligibilityRules, Profile, RuleCondition, Scheme

__all__ = [
    "calculate_age",
    "score_and_filter",
    "score_scheme",
    "filter_and_rank",
    "explain_scheme",
    "MIN_SCORE",
    "MAX_SCORE",
    "PAN_INDIA",
    "Profile",
    "Scheme",
    "EligibilityRules",
    "RuleCondition",
]
