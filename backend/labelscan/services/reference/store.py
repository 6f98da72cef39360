"""
Read-only ingredient reference store.

Lookup walks MATCH_RULES top to bottom. Each rule scans every record (in insertion
order) before the next rule is tried, so exact matches always beat substring
containment and the first record encountered wins within a rule.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Optional

from labelscan.logging import get_logger
from labelscan.services.reference.models import IngredientRecord

logger = get_logger(__name__)


def _contains_either_way(key: str, candidate: str) -> bool:
    return bool(candidate) and (candidate in key or key in candidate)


@dataclass(frozen=True)
class MatchRule:
    name: str
    predicate: Callable[[str, IngredientRecord], bool]


MATCH_RULES: tuple[MatchRule, ...] = (
    MatchRule("key", lambda key, rec: key == rec.key or key == rec.id.lower()),
    MatchRule("name", lambda key, rec: key == rec.canonical_name.lower()),
    MatchRule("alias", lambda key, rec: any(key == alias.lower() for alias in sorted(rec.aliases))),
    MatchRule(
        "alias_substring",
        lambda key, rec: any(_contains_either_way(key, alias.lower()) for alias in sorted(rec.aliases)),
    ),
    MatchRule("name_substring", lambda key, rec: _contains_either_way(key, rec.canonical_name.lower())),
)


@dataclass(frozen=True)
class StoreMatch:
    record: IngredientRecord
    rule: str


class IngredientReferenceStore:
    def __init__(self, records: Iterable[IngredientRecord], rules: tuple[MatchRule, ...] = MATCH_RULES) -> None:
        by_key: dict[str, IngredientRecord] = {}
        for record in records:
            if record.key in by_key:
                raise ValueError(f"duplicate ingredient key: {record.key}")
            by_key[record.key] = record
        self._records = by_key
        self._ordered = tuple(by_key.values())
        self._rules = rules

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self):
        return iter(self._ordered)

    @property
    def records(self) -> tuple[IngredientRecord, ...]:
        return self._ordered

    def get(self, key: str) -> Optional[IngredientRecord]:
        return self._records.get(key)

    def match_ingredient(self, key: str) -> Optional[StoreMatch]:
        """Return the first matching record and the rule that matched, or None."""
        key = (key or "").strip().lower()
        if not key:
            return None
        for rule in self._rules:
            for record in self._ordered:
                if rule.predicate(key, record):
                    logger.debug("store.match key=%s record=%s rule=%s", key, record.id, rule.name)
                    return StoreMatch(record=record, rule=rule.name)
        logger.debug("store.miss key=%s", key)
        return None

    def find_ingredient(self, key: str) -> Optional[IngredientRecord]:
        match = self.match_ingredient(key)
        return match.record if match else None


@lru_cache(maxsize=1)
def get_reference_store() -> IngredientReferenceStore:
    """Process-wide store built from the bundled records."""
    from labelscan.services.reference.data import INGREDIENT_RECORDS

    store = IngredientReferenceStore(INGREDIENT_RECORDS)
    logger.info("store.loaded records=%s", len(store))
    return store
