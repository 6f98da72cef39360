from typing import Optional, Union

from pydantic import BaseModel, Field

from labelscan.services.analyzer import AnalysisSession, ResolvedIngredient


class AnalyzeRequest(BaseModel):
    ingredients: list[str]
    # Anything that is not a plausible age is treated as "no age given".
    user_age: Optional[Union[int, float, str]] = None


class ResolvedIngredientOut(BaseModel):
    source_text: str
    normalized_key: str
    name: str
    safety_level: str
    message: str
    description: Optional[str] = None
    matched_record_id: Optional[str] = None
    match_rule: Optional[str] = None
    category: Optional[str] = None
    daily_limit: Optional[str] = None
    alternatives: Optional[str] = None
    allergen_notes: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)
    is_heuristic: bool = False
    is_degraded: bool = False

    @classmethod
    def from_resolved(cls, item: ResolvedIngredient) -> "ResolvedIngredientOut":
        return cls(
            source_text=item.source_text,
            normalized_key=item.normalized_key,
            name=item.display_name,
            safety_level=item.effective_safety_level.value,
            message=item.message,
            description=item.description,
            matched_record_id=item.matched_record_id,
            match_rule=item.match_rule,
            category=item.category.value if item.category else None,
            daily_limit=item.daily_limit_text,
            alternatives=item.alternatives_text,
            allergen_notes=list(item.allergen_notes),
            sources=list(item.sources),
            is_heuristic=item.is_heuristic,
            is_degraded=item.is_degraded,
        )


class AnalysisResponse(BaseModel):
    user_age: Optional[int] = None
    overall_verdict: str
    counts: dict[str, int]
    ingredients: list[ResolvedIngredientOut]

    @classmethod
    def from_session(cls, session: AnalysisSession, **extra) -> "AnalysisResponse":
        return cls(
            user_age=session.user_age,
            overall_verdict=session.overall_verdict.value,
            counts=session.counts(),
            ingredients=[ResolvedIngredientOut.from_resolved(r) for r in session.resolved],
            **extra,
        )


class ScanResponse(AnalysisResponse):
    ocr_text: str
    ocr_confidence: float


class IngredientLookupResponse(BaseModel):
    query: str
    normalized_key: str
    match_rule: str
    record: dict
