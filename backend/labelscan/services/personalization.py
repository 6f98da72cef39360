"""
Age-based personalization of ingredient safety.

Cohorts: child (< 18) and adult (everyone else, including unknown age). Older
adults (> 65) only change the generic daily-limit text and caveats. Risk can be
raised for children, never lowered.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from labelscan.logging import get_logger
from labelscan.services.reference.models import AgeRestrictions, IngredientRecord, SafetyLevel

logger = get_logger(__name__)

CHILD_AGE_LIMIT = 18
OLDER_ADULT_AGE = 65
MAX_PLAUSIBLE_AGE = 130

WARNING_MARKER = "⚠️"

CHILD_DAILY_LIMIT = (
    "Children should follow stricter limits - consult pediatric nutrition guidelines and healthcare providers"
)
OLDER_ADULT_DAILY_LIMIT = (
    "Older adults may need reduced intake - consult healthcare provider for personalized recommendations"
)
ADULT_DAILY_LIMIT = "Follow standard adult serving recommendations and monitor individual tolerance"

CHILD_CAVEAT = "Children may be more sensitive to food additives and should consume processed foods in moderation."
OLDER_ADULT_CAVEAT = "Older adults may want to limit processed food additives and focus on whole foods."


class AgeCohort(str, Enum):
    CHILD = "child"
    ADULT = "adult"


@dataclass(frozen=True)
class Personalization:
    effective_safety_level: SafetyLevel
    message: str
    daily_limit_text: str


def _coerce_age(value: object) -> Optional[int]:
    age: Optional[int] = None
    if isinstance(value, bool):
        age = None
    elif isinstance(value, int):
        age = value
    elif isinstance(value, float) and value.is_integer():
        age = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        age = int(value.strip())
    if age is None or age < 0 or age > MAX_PLAUSIBLE_AGE:
        return None
    return age


def normalize_user_age(value: object) -> Optional[int]:
    """Return a usable age or None. Negative, non-numeric and absurd values count as absent."""
    if value is None:
        return None
    age = _coerce_age(value)
    if age is None:
        logger.info("age.invalid value=%r using adult default", value)
    return age


def cohort_for(user_age: Optional[int]) -> AgeCohort:
    age = _coerce_age(user_age)
    if age is not None and age < CHILD_AGE_LIMIT:
        return AgeCohort.CHILD
    return AgeCohort.ADULT


def is_older_adult(user_age: Optional[int]) -> bool:
    age = _coerce_age(user_age)
    return age is not None and age > OLDER_ADULT_AGE


def age_based_daily_limit(user_age: Optional[int]) -> str:
    if cohort_for(user_age) is AgeCohort.CHILD:
        return CHILD_DAILY_LIMIT
    if is_older_adult(user_age):
        return OLDER_ADULT_DAILY_LIMIT
    return ADULT_DAILY_LIMIT


def age_caveat(user_age: Optional[int]) -> Optional[str]:
    """Extra sentence for generated (non-database) messages; None for regular adults."""
    if cohort_for(user_age) is AgeCohort.CHILD:
        return CHILD_CAVEAT
    if is_older_adult(user_age):
        return OLDER_ADULT_CAVEAT
    return None


def with_age_caveat(message: str, user_age: Optional[int]) -> str:
    caveat = age_caveat(user_age)
    if not caveat:
        return message
    return f"{message} {caveat}".strip()


def personalize(
    base_safety_level: SafetyLevel,
    age_restrictions: Optional[AgeRestrictions],
    health_impact: str,
    user_age: Optional[int],
    daily_limit: Optional[str] = None,
) -> Personalization:
    user_age = normalize_user_age(user_age)
    is_child = cohort_for(user_age) is AgeCohort.CHILD
    override = age_restrictions.for_cohort(is_child) if age_restrictions else None
    level = base_safety_level
    message = health_impact

    if is_child and base_safety_level is SafetyLevel.CAUTION:
        level = SafetyLevel.WARNING
        message = f"{WARNING_MARKER} For your age ({user_age}): {override or health_impact}"
    elif is_child and override:
        message = f"For your age ({user_age}): {override}"
    elif override:
        message = override

    return Personalization(
        effective_safety_level=base_safety_level.escalate_to(level),
        message=message,
        daily_limit_text=daily_limit or age_based_daily_limit(user_age),
    )


def personalize_record(record: IngredientRecord, user_age: Optional[int]) -> Personalization:
    return personalize(
        record.base_safety_level,
        record.age_restrictions,
        record.health_impact,
        user_age,
        daily_limit=record.daily_limit,
    )
