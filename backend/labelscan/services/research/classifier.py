"""
Heuristic classification for ingredients missing from the reference store.
Rules are checked in HEURISTIC_RULES order against the normalized key; first match wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from labelscan.services.personalization import (
    AgeCohort,
    age_based_daily_limit,
    cohort_for,
    is_older_adult,
    normalize_user_age,
    with_age_caveat,
)
from labelscan.services.reference.models import SafetyLevel
from labelscan.services.research.base import ResearchedIngredient

DEFAULT_SOURCES = ("General food safety guidelines",)

# FD&C names and E-numbers in the colour range (E100-E199), e.g. "e102", "e-150d".
_COLOR_CODE = re.compile(r"fd&c|\be-?1\d{2}[a-z]?\b")


def _has_any(*words: str) -> Callable[[str], bool]:
    return lambda key: any(w in key for w in words)


@dataclass(frozen=True)
class HeuristicRule:
    name: str
    predicate: Callable[[str], bool]
    safety_level: SafetyLevel
    definition: str
    message: str
    sources: tuple[str, ...] = DEFAULT_SOURCES


HEURISTIC_RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule(
        "natural",
        _has_any("natural", "organic"),
        SafetyLevel.SAFE,
        "This appears to be a natural ingredient.",
        "Natural ingredients are generally safer but individual sensitivities may still occur.",
    ),
    HeuristicRule(
        "artificial",
        _has_any("artificial", "synthetic"),
        SafetyLevel.CAUTION,
        "This appears to be an artificial ingredient.",
        "Artificial ingredients require individual assessment for safety and potential sensitivities.",
    ),
    HeuristicRule(
        "coloring",
        lambda key: _has_any("color", "colour", "dye")(key) or bool(_COLOR_CODE.search(key)),
        SafetyLevel.CAUTION,
        "This appears to be a food coloring agent.",
        "Food colorings may cause allergic reactions or hyperactivity in sensitive individuals, "
        "especially children.",
        ("FDA Color Additives", "European Food Safety Authority"),
    ),
    HeuristicRule(
        "preservative",
        _has_any("preservative", "acid"),
        SafetyLevel.CAUTION,
        "This appears to be a preservative or acidifying agent.",
        "Preservatives help food safety but some individuals may have sensitivities.",
    ),
    HeuristicRule(
        "vitamin_mineral",
        _has_any("vitamin", "mineral"),
        SafetyLevel.SAFE,
        "This appears to be a vitamin or mineral supplement.",
        "Vitamins and minerals are generally beneficial when consumed in appropriate amounts.",
    ),
    HeuristicRule(
        "extract",
        _has_any("extract", "essence"),
        SafetyLevel.SAFE,
        "This appears to be a natural extract or essence.",
        "Natural extracts are generally safe but may cause allergies in sensitive individuals.",
    ),
)


def match_rule(normalized_key: str) -> Optional[HeuristicRule]:
    key = (normalized_key or "").lower()
    for rule in HEURISTIC_RULES:
        if rule.predicate(key):
            return rule
    return None


def _age_group(user_age: Optional[int]) -> str:
    if cohort_for(user_age) is AgeCohort.CHILD:
        return "children and adolescents"
    if is_older_adult(user_age):
        return "older adults"
    return "adults"


def basic_health_impact(ingredient: str, safety_level: SafetyLevel, user_age: Optional[int]) -> str:
    group = _age_group(user_age)
    if safety_level is SafetyLevel.SAFE:
        return (
            f"{ingredient} is generally considered safe for consumption by {group} when used in normal food "
            "quantities. Monitor for any individual sensitivities."
        )
    if safety_level is SafetyLevel.WARNING:
        return (
            f"{ingredient} has been associated with potential health concerns and should be consumed with "
            f"caution or avoided, especially by {group}. Consider consulting a healthcare provider."
        )
    return (
        f"{ingredient} requires moderate caution. Individual sensitivities may vary, and {group} should "
        "monitor their response to this ingredient."
    )


def classify_unknown(normalized_key: str, original_text: str, user_age: Optional[int]) -> ResearchedIngredient:
    """Classify an unmatched ingredient by lexical cues. Total: every input gets a result."""
    user_age = normalize_user_age(user_age)
    name = (original_text or "").strip() or (normalized_key or "").strip() or "This ingredient"
    rule = match_rule(normalized_key)
    definition = f"{name} is a food ingredient."
    if rule:
        level = rule.safety_level
        definition = f"{definition} {rule.definition}"
        message = rule.message
        sources = rule.sources
    else:
        level = SafetyLevel.CAUTION
        message = basic_health_impact(name, level, user_age)
        sources = DEFAULT_SOURCES
    return ResearchedIngredient(
        name=name,
        definition=definition,
        health_impacts=with_age_caveat(message, user_age),
        safety_level=level,
        daily_limit=age_based_daily_limit(user_age),
        sources=tuple(sources),
    )
