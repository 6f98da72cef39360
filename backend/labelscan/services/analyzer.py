"""
Batch ingredient resolution.

Each scanned fragment is normalized, looked up in the reference store and
personalized, or handed to the research provider when the store has no match.
Results always line up with the input: resolved[i] belongs to input_ingredients[i].
A failing or slow research call degrades that one entry to caution and the batch
carries on.
"""

import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from labelscan.config import settings
from labelscan.errors import AnalysisCancelled
from labelscan.logging import get_logger
from labelscan.services.parsing.normalizer import normalize_ingredient_name
from labelscan.services.personalization import age_based_daily_limit, normalize_user_age, personalize_record
from labelscan.services.reference.models import IngredientCategory, SafetyLevel
from labelscan.services.reference.store import IngredientReferenceStore, get_reference_store
from labelscan.services.research.base import ResearchedIngredient, ResearchProvider
from labelscan.utils.timing import time_span

logger = get_logger(__name__)

# Product policy: 3 or more caution entries (and no warnings) make the whole product caution.
CAUTION_COUNT_THRESHOLD = 2

RESEARCH_POOL_HEADROOM = 2

DEGRADED_MESSAGE = (
    "This ingredient requires further research. We could not look it up right now, "
    "so treat it with caution and check the label or a trusted source."
)
DEGRADED_SOURCES = ("Research unavailable",)

ProgressCallback = Callable[[int, "ResolvedIngredient", int, int], None]


@dataclass(frozen=True)
class ResolvedIngredient:
    source_text: str
    normalized_key: str
    display_name: str
    effective_safety_level: SafetyLevel
    message: str
    description: Optional[str] = None
    matched_record_id: Optional[str] = None
    match_rule: Optional[str] = None
    category: Optional[IngredientCategory] = None
    daily_limit_text: Optional[str] = None
    alternatives_text: Optional[str] = None
    allergen_notes: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    is_heuristic: bool = False
    is_degraded: bool = False


@dataclass
class AnalysisSession:
    input_ingredients: list[str]
    user_age: Optional[int]
    resolved: list[ResolvedIngredient] = field(default_factory=list)
    overall_verdict: SafetyLevel = SafetyLevel.SAFE

    def counts(self) -> dict[str, int]:
        out = {level.value: 0 for level in SafetyLevel}
        for item in self.resolved:
            out[item.effective_safety_level.value] += 1
        return out


def aggregate_verdict(levels: Sequence[SafetyLevel]) -> SafetyLevel:
    if any(level is SafetyLevel.WARNING for level in levels):
        return SafetyLevel.WARNING
    if sum(1 for level in levels if level is SafetyLevel.CAUTION) > CAUTION_COUNT_THRESHOLD:
        return SafetyLevel.CAUTION
    return SafetyLevel.SAFE


def build_research_provider() -> ResearchProvider:
    """LLM provider when USE_LLM_RESEARCH is set, else the offline heuristics."""
    if settings.use_llm_research:
        from labelscan.services.research.llm_research import LlmResearchProvider

        return LlmResearchProvider()
    from labelscan.services.research.local import LocalResearchProvider

    return LocalResearchProvider()


def _from_research(source_text: str, key: str, research: ResearchedIngredient) -> ResolvedIngredient:
    return ResolvedIngredient(
        source_text=source_text,
        normalized_key=key,
        display_name=research.name or source_text,
        effective_safety_level=research.safety_level,
        message=research.health_impacts,
        description=research.definition,
        daily_limit_text=research.daily_limit,
        sources=tuple(research.sources),
        is_heuristic=True,
    )


def _degraded(source_text: str, key: str, user_age: Optional[int]) -> ResolvedIngredient:
    return ResolvedIngredient(
        source_text=source_text,
        normalized_key=key,
        display_name=source_text.strip() or key,
        effective_safety_level=SafetyLevel.CAUTION,
        message=DEGRADED_MESSAGE,
        description=f"{source_text.strip() or 'This ingredient'} is not in our ingredient database.",
        daily_limit_text=age_based_daily_limit(user_age),
        sources=DEGRADED_SOURCES,
        is_heuristic=True,
        is_degraded=True,
    )


class IngredientAnalyzer:
    def __init__(
        self,
        store: Optional[IngredientReferenceStore] = None,
        research_provider: Optional[ResearchProvider] = None,
        research_timeout_s: Optional[float] = None,
        concurrent: Optional[bool] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.store = store if store is not None else get_reference_store()
        self.research_provider = research_provider or build_research_provider()
        self.research_timeout_s = (
            research_timeout_s if research_timeout_s is not None else settings.research_timeout_s
        )
        self.concurrent = settings.analysis_concurrent if concurrent is None else concurrent
        self.max_workers = max_workers or settings.analysis_max_workers

    def _research(
        self, source_text: str, user_age: Optional[int], pool: ThreadPoolExecutor
    ) -> Optional[ResearchedIngredient]:
        """
        Run the provider on the research pool, bounded by research_timeout_s.

        The timeout covers time queued in the pool as well as the call itself, and a
        timed-out call keeps its thread until the provider returns. The pool is sized at
        RESEARCH_POOL_HEADROOM times the worker count so one hung lookup does not
        starve the entries after it.
        """
        future = pool.submit(self.research_provider.research, source_text, user_age)
        try:
            return future.result(timeout=self.research_timeout_s)
        except FutureTimeout:
            future.cancel()
            logger.warning(
                "research.timeout provider=%s text=%s timeout_s=%s",
                self.research_provider.name,
                source_text,
                self.research_timeout_s,
            )
        except Exception as e:
            logger.warning(
                "research.failed provider=%s text=%s error=%s", self.research_provider.name, source_text, e
            )
        return None

    def _resolve(self, source_text: str, user_age: Optional[int], pool: ThreadPoolExecutor) -> ResolvedIngredient:
        key = normalize_ingredient_name(source_text)
        match = self.store.match_ingredient(key)
        if match is not None:
            record = match.record
            result = personalize_record(record, user_age)
            return ResolvedIngredient(
                source_text=source_text,
                normalized_key=key,
                display_name=record.canonical_name,
                effective_safety_level=result.effective_safety_level,
                message=result.message,
                description=record.description,
                matched_record_id=record.id,
                match_rule=match.rule,
                category=record.category,
                daily_limit_text=result.daily_limit_text,
                alternatives_text=record.alternatives,
                allergen_notes=tuple(sorted(record.allergen_notes)),
            )
        research = self._research(source_text, user_age, pool)
        if research is None:
            return _degraded(source_text, key, user_age)
        return _from_research(source_text, key, research)

    def _resolve_or_degrade(
        self, source_text: str, user_age: Optional[int], pool: ThreadPoolExecutor
    ) -> ResolvedIngredient:
        try:
            return self._resolve(source_text, user_age, pool)
        except Exception as e:
            logger.warning("ingredient.resolve_failed text=%s error=%s", source_text, e)
            return _degraded(source_text, normalize_ingredient_name(source_text), user_age)

    def _research_pool(self) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(
            max_workers=self.max_workers * RESEARCH_POOL_HEADROOM, thread_name_prefix="research"
        )

    def resolve_ingredient(self, source_text: str, user_age: object = None) -> ResolvedIngredient:
        """Resolve one fragment outside a batch."""
        pool = self._research_pool()
        try:
            return self._resolve(source_text, normalize_user_age(user_age), pool)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def analyze(
        self,
        ingredients: Sequence[str],
        user_age: object = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> AnalysisSession:
        age = normalize_user_age(user_age)
        items = list(ingredients)
        session = AnalysisSession(input_ingredients=items, user_age=age)
        mode = "concurrent" if self.concurrent and len(items) > 1 else "sequential"
        logger.info("analysis.start count=%s age=%s mode=%s", len(items), age, mode)

        pool = self._research_pool()
        try:
            with time_span("analysis.total", count=len(items), mode=mode) as span:
                if mode == "concurrent":
                    resolved = self._analyze_concurrent(items, age, pool, on_progress, cancel_event)
                else:
                    resolved = self._analyze_sequential(items, age, pool, on_progress, cancel_event)
                session.resolved = resolved
                session.overall_verdict = aggregate_verdict([r.effective_safety_level for r in resolved])
                span.add(verdict=session.overall_verdict.value)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        logger.info(
            "analysis.end count=%s verdict=%s counts=%s heuristic=%s degraded=%s",
            len(session.resolved),
            session.overall_verdict.value,
            session.counts(),
            sum(1 for r in session.resolved if r.is_heuristic),
            sum(1 for r in session.resolved if r.is_degraded),
        )
        return session

    def _analyze_sequential(
        self,
        items: list[str],
        age: Optional[int],
        pool: ThreadPoolExecutor,
        on_progress: Optional[ProgressCallback],
        cancel_event: Optional[threading.Event],
    ) -> list[ResolvedIngredient]:
        resolved: list[ResolvedIngredient] = []
        for index, text in enumerate(items):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("analysis.cancelled completed=%s total=%s", index, len(items))
                raise AnalysisCancelled()
            item = self._resolve_or_degrade(text, age, pool)
            resolved.append(item)
            if on_progress:
                on_progress(index, item, index + 1, len(items))
        return resolved

    def _analyze_concurrent(
        self,
        items: list[str],
        age: Optional[int],
        pool: ThreadPoolExecutor,
        on_progress: Optional[ProgressCallback],
        cancel_event: Optional[threading.Event],
    ) -> list[ResolvedIngredient]:
        slots: list[Optional[ResolvedIngredient]] = [None] * len(items)
        workers = min(self.max_workers, len(items))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resolve")
        try:
            futures: dict[Future, int] = {
                executor.submit(self._resolve_or_degrade, text, age, pool): index for index, text in enumerate(items)
            }
            pending = set(futures)
            completed = 0
            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    logger.info("analysis.cancelled completed=%s total=%s", completed, len(items))
                    raise AnalysisCancelled()
                done, pending = wait(pending, timeout=0.1, return_when=FIRST_COMPLETED)
                for fut in done:
                    index = futures[fut]
                    item = fut.result()
                    slots[index] = item
                    completed += 1
                    if on_progress:
                        on_progress(index, item, completed, len(items))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return [item for item in slots if item is not None]
