from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SafetyLevel(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"

    @property
    def rank(self) -> int:
        return _SAFETY_RANK[self]

    def escalate_to(self, other: "SafetyLevel") -> "SafetyLevel":
        """Return the more severe of the two levels."""
        return other if other.rank > self.rank else self

    @classmethod
    def parse(cls, value: object, default: "SafetyLevel | None" = None) -> "SafetyLevel":
        """Coerce free text ("Warning", " safe ") to a level; unknown text gives default (caution)."""
        text = str(value or "").strip().lower()
        for level in cls:
            if level.value == text:
                return level
        return default or cls.CAUTION


_SAFETY_RANK = {SafetyLevel.SAFE: 0, SafetyLevel.CAUTION: 1, SafetyLevel.WARNING: 2}


class IngredientCategory(str, Enum):
    PRESERVATIVE = "preservative"
    SWEETENER = "sweetener"
    COLORING = "coloring"
    FLAVOR = "flavor"
    THICKENER = "thickener"
    EMULSIFIER = "emulsifier"
    NATURAL = "natural"
    VITAMIN = "vitamin"
    MINERAL = "mineral"
    OTHER = "other"


@dataclass(frozen=True)
class AgeRestrictions:
    child: Optional[str] = None
    adult: Optional[str] = None

    def for_cohort(self, is_child: bool) -> Optional[str]:
        return self.child if is_child else self.adult


@dataclass(frozen=True)
class IngredientRecord:
    id: str
    key: str  # lookup key in the reference store, lower-case
    canonical_name: str
    category: IngredientCategory
    base_safety_level: SafetyLevel
    description: str
    health_impact: str
    aliases: frozenset = field(default_factory=frozenset)
    alternatives: Optional[str] = None
    daily_limit: Optional[str] = None
    age_restrictions: Optional[AgeRestrictions] = None
    allergen_notes: frozenset = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        restrictions = self.age_restrictions
        return {
            "id": self.id,
            "key": self.key,
            "canonical_name": self.canonical_name,
            "aliases": sorted(self.aliases),
            "category": self.category.value,
            "base_safety_level": self.base_safety_level.value,
            "description": self.description,
            "health_impact": self.health_impact,
            "alternatives": self.alternatives,
            "daily_limit": self.daily_limit,
            "age_restrictions": (
                {"child": restrictions.child, "adult": restrictions.adult} if restrictions else None
            ),
            "allergen_notes": sorted(self.allergen_notes),
        }
