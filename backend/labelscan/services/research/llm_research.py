"""
LLM-backed research for ingredients missing from the reference store.
Any LLM error is raised as ResearchProviderFailure; the analyzer degrades that one ingredient.
"""

import re
from typing import List, Optional

import dspy

from labelscan.errors import ResearchProviderFailure
from labelscan.logging import get_logger
from labelscan.services.llm.dspy_client import run_with_logging
from labelscan.services.llm.prompts import INGREDIENT_RESEARCH_PROMPT_VERSION, INGREDIENT_RESEARCH_TEMPLATE
from labelscan.services.personalization import age_based_daily_limit, normalize_user_age, with_age_caveat
from labelscan.services.reference.models import SafetyLevel
from labelscan.services.research.base import ResearchedIngredient, ResearchProvider

logger = get_logger(__name__)


class IngredientResearchSignature(dspy.Signature):
    """Explain a food ingredient and rate its safety."""

    ingredient_text: str = dspy.InputField()
    user_age: str = dspy.InputField(desc="age in years, or 'unknown'")
    prompt_template: str = dspy.InputField()
    definition: str = dspy.OutputField()
    health_impacts: str = dspy.OutputField()
    safety_level: str = dspy.OutputField(desc="one of: safe, caution, warning")
    daily_limit: str = dspy.OutputField(desc="guidance text or 'none'")
    sources: str = dspy.OutputField(desc="comma-separated source names")


class IngredientResearcher(dspy.Module):
    def __init__(self) -> None:
        super().__init__()
        self.predict = dspy.Predict(IngredientResearchSignature)

    def forward(self, ingredient_text: str, user_age: str) -> dspy.Prediction:
        return self.predict(
            ingredient_text=ingredient_text,
            user_age=user_age,
            prompt_template=INGREDIENT_RESEARCH_TEMPLATE,
        )


def _parse_safety_level(raw: object) -> SafetyLevel:
    """First level word found in the output; anything unrecognised is caution."""
    text = str(raw or "").lower()
    for word in re.findall(r"[a-z]+", text):
        if word in ("safe", "caution", "warning"):
            return SafetyLevel(word)
    return SafetyLevel.CAUTION


def _parse_sources(raw: object) -> List[str]:
    parts = re.split(r"[,;\n]", str(raw or ""))
    return [p.strip().strip("-* ") for p in parts if p.strip().strip("-* ")]


def _text(prediction, attr: str) -> str:
    value = getattr(prediction, attr, None)
    return value.strip() if isinstance(value, str) else ""


class LlmResearchProvider(ResearchProvider):
    name = "llm"

    def research(self, ingredient_text: str, user_age: Optional[int]) -> ResearchedIngredient:
        user_age = normalize_user_age(user_age)
        try:
            researcher = IngredientResearcher()
            prediction = run_with_logging(
                prompt_name="ingredient_research",
                prompt_version=INGREDIENT_RESEARCH_PROMPT_VERSION,
                fn=researcher.forward,
                ingredient_text=ingredient_text,
                user_age=str(user_age) if user_age is not None else "unknown",
            )
        except Exception as e:
            logger.warning("research.llm_failed text=%s error=%s", ingredient_text, e)
            raise ResearchProviderFailure(ingredient_text, str(e)) from e

        definition = _text(prediction, "definition")
        health_impacts = _text(prediction, "health_impacts")
        if not definition and not health_impacts:
            raise ResearchProviderFailure(ingredient_text, "empty LLM response")
        daily_limit = _text(prediction, "daily_limit")
        if daily_limit.lower() in ("", "none", "n/a"):
            daily_limit = age_based_daily_limit(user_age)
        return ResearchedIngredient(
            name=ingredient_text,
            definition=definition or f"{ingredient_text} is a food ingredient.",
            health_impacts=with_age_caveat(health_impacts, user_age),
            safety_level=_parse_safety_level(getattr(prediction, "safety_level", "")),
            daily_limit=daily_limit,
            sources=tuple(_parse_sources(getattr(prediction, "sources", ""))) or ("LLM research",),
        )
