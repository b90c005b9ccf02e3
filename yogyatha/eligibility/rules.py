"""Per-criterion eligibility checks.

Each check takes a scheme's EligibilityRules, the Profile and the
precomputed age, and returns a RuleCondition. Hard conditions are gates:
if any gate fails the scheme scores 0, otherwise the points of every met
condition are added up. Pure Python, deterministic.
"""

from __future__ import annotations

from collections.abc import Callable

from yogyatha.eligibility.regions import PAN_INDIA
from yogyatha.schemas.eligibility import EligibilityRules, Profile, RuleCondition

AGE_POINTS = 3
INCOME_POINTS = 2
STATE_POINTS = 2
CATEGORY_POINTS = 2
ROLE_POINTS = 2

MAX_SCORE = AGE_POINTS + INCOME_POINTS + STATE_POINTS + CATEGORY_POINTS + ROLE_POINTS

RuleCheck = Callable[[EligibilityRules, Profile, int], RuleCondition]


# ── Gates ──────────────────────────────────────────────────────────────────


def check_state(rules: EligibilityRules, profile: Profile, age: int) -> RuleCondition:
    """Profile state is listed, or the scheme is nationwide."""
    met = PAN_INDIA in rules.states or profile.state in rules.states
    return RuleCondition(
        name="state",
        description="Scheme must be available in the applicant's state",
        met=met,
        is_hard=True,
        points=STATE_POINTS,
        value=profile.state,
    )


def check_category(rules: EligibilityRules, profile: Profile, age: int) -> RuleCondition:
    """Profile category is one of the scheme's categories."""
    return RuleCondition(
        name="category",
        description="Applicant's social category must be covered by the scheme",
        met=profile.category in rules.categories,
        is_hard=True,
        points=CATEGORY_POINTS,
        value=profile.category.value,
    )


# ── Scored criteria ────────────────────────────────────────────────────────


def check_age(rules: EligibilityRules, profile: Profile, age: int) -> RuleCondition:
    """Age within [min_age, max_age], both inclusive."""
    return RuleCondition(
        name="age",
        description=f"Age should be between {rules.min_age} and {rules.max_age}",
        met=rules.min_age <= age <= rules.max_age,
        points=AGE_POINTS,
        value=age,
    )


def check_income(rules: EligibilityRules, profile: Profile, age: int) -> RuleCondition:
    """Annual income at or below the ceiling."""
    return RuleCondition(
        name="income",
        description=f"Annual income should not exceed {rules.max_income}",
        met=profile.income <= rules.max_income,
        points=INCOME_POINTS,
        value=profile.income,
    )


def check_role(rules: EligibilityRules, profile: Profile, age: int) -> RuleCondition:
    """Profile role is one of the scheme's target roles."""
    return RuleCondition(
        name="role",
        description="Scheme should target the applicant's role",
        met=profile.role in rules.roles,
        points=ROLE_POINTS,
        value=profile.role.value,
    )


GATE_CHECKS: tuple[RuleCheck, ...] = (check_state, check_category)
CRITERIA_CHECKS: tuple[RuleCheck, ...] = (check_age, check_income, check_role)


def evaluate_rules(rules: EligibilityRules, profile: Profile, age: int) -> list[RuleCondition]:
    """Run every gate and criterion. Gender and documents are not checked."""
    return [check(rules, profile, age) for check in (*GATE_CHECKS, *CRITERIA_CHECKS)]


def score_conditions(conditions: list[RuleCondition]) -> int:
    """0 if any hard gate failed, else the sum of points of met conditions."""
    if any(c.is_hard and not c.met for c in conditions):
        return 0
    return sum(c.points for c in conditions if c.met)
