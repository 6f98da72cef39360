from typing import Optional

from labelscan.services.parsing.normalizer import normalize_ingredient_name
from labelscan.services.research.base import ResearchedIngredient, ResearchProvider
from labelscan.services.research.classifier import classify_unknown


class LocalResearchProvider(ResearchProvider):
    """Offline provider: lexical heuristics only, never fails."""

    name = "local"

    def research(self, ingredient_text: str, user_age: Optional[int]) -> ResearchedIngredient:
        return classify_unknown(normalize_ingredient_name(ingredient_text), ingredient_text, user_age)
