from dataclasses import dataclass, field
from typing import Optional

from labelscan.services.reference.models import SafetyLevel


@dataclass(frozen=True)
class ResearchedIngredient:
    name: str
    definition: str
    health_impacts: str
    safety_level: SafetyLevel
    daily_limit: Optional[str] = None
    sources: tuple[str, ...] = field(default_factory=tuple)


class ResearchProvider:
    """Looks up an ingredient the reference store does not know. May raise ResearchProviderFailure."""

    name = "base"

    def research(self, ingredient_text: str, user_age: Optional[int]) -> ResearchedIngredient:
        raise NotImplementedError
