"""Tests for the ingredient reference store and its match cascade."""

import dataclasses

import pytest

from labelscan.services.parsing.normalizer import normalize_ingredient_name
from labelscan.services.reference.data import INGREDIENT_RECORDS
from labelscan.services.reference.models import IngredientCategory, IngredientRecord, SafetyLevel
from labelscan.services.reference.store import MATCH_RULES, IngredientReferenceStore, get_reference_store


def _rec(key: str, aliases: list[str], name: str | None = None, level=SafetyLevel.CAUTION) -> IngredientRecord:
    return IngredientRecord(
        id=key,
        key=key,
        canonical_name=name or key.title(),
        category=IngredientCategory.COLORING,
        base_safety_level=level,
        description="d",
        health_impact="h",
        aliases=frozenset(aliases),
    )


@pytest.fixture(name="store")
def store_fixture():
    return get_reference_store()


def test_bundled_store_loads_all_records(store):
    assert len(store) == len(INGREDIENT_RECORDS)
    keys = [r.key for r in store]
    assert keys == [r.key for r in INGREDIENT_RECORDS]
    assert get_reference_store() is store


def test_rule_order_is_fixed():
    assert [r.name for r in MATCH_RULES] == ["key", "name", "alias", "alias_substring", "name_substring"]


def test_exact_key_match(store):
    match = store.match_ingredient("sugar")
    assert match.record.id == "sugar"
    assert match.rule == "key"


def test_id_slot_counts_as_key(store):
    match = store.match_ingredient("yellow5")
    assert match.record.key == "yellow 5"
    assert match.rule == "key"


def test_canonical_name_match_is_case_insensitive(store):
    match = store.match_ingredient("BHT (Butylated Hydroxytoluene)")
    assert match.record.id == "bht"
    assert match.rule == "name"


def test_alias_match(store):
    match = store.match_ingredient("tartrazine")
    assert match.record.id == "yellow5"
    assert match.rule == "alias"
    assert store.find_ingredient("sea salt").id == "salt"


def test_alias_substring_match(store):
    match = store.match_ingredient("organic cane sugar")
    assert match.record.id == "sugar"
    assert match.rule == "alias_substring"
    assert store.find_ingredient("bht preservative").id == "bht"


def test_name_substring_match(store):
    match = store.match_ingredient("brown sugar")
    assert match.record.id == "sugar"
    assert match.rule == "name_substring"


def test_miss_returns_none(store):
    assert store.find_ingredient("xyzatolinepreservativeblend") is None


def test_blank_key_is_a_miss(store):
    assert store.find_ingredient("") is None
    assert store.find_ingredient("   ") is None
    assert store.match_ingredient(None) is None


def test_exact_alias_beats_longer_alias_substring():
    lake = _rec("lake_dye", ["red 40 lake"])
    plain = _rec("red_dye", ["red 40"])
    store = IngredientReferenceStore([lake, plain])
    match = store.match_ingredient("red 40")
    assert match.record is plain
    assert match.rule == "alias"


def test_substring_tie_goes_to_first_record():
    first = _rec("first", ["gum"])
    second = _rec("second", ["arabic"])
    store = IngredientReferenceStore([first, second])
    assert store.find_ingredient("gum arabic blend").key == "first"
    store = IngredientReferenceStore([second, first])
    assert store.find_ingredient("gum arabic blend").key == "second"


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        IngredientReferenceStore([_rec("dup", []), _rec("dup", ["x"])])


def test_records_are_immutable(store):
    record = store.get("sugar")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.base_safety_level = SafetyLevel.SAFE


def test_optional_fields_absent_are_distinguishable(store):
    stevia = store.get("stevia")
    assert stevia.age_restrictions is None
    assert stevia.alternatives is None
    assert stevia.daily_limit is None
    assert stevia.allergen_notes == frozenset()
    payload = stevia.to_dict()
    assert payload["age_restrictions"] is None
    assert payload["allergen_notes"] == []


@pytest.mark.parametrize(
    "text,record_id",
    [
        ("Vegetable oil", "vegetable_oil"),
        ("Oil", "vegetable_oil"),
        ("Canola oil", "vegetable_oil"),
        ("Non-hydrogenated soybean oil", "non_hydrogenated_oil"),
        ("Non-hydrogenated vegetable oil", "non_hydrogenated_oil"),
        ("Hydrogenated vegetable oil", "hydrogenated_oil"),
        ("Partially hydrogenated soybean oil", "hydrogenated_oil"),
    ],
)
def test_everyday_oils_are_not_hydrogenated(store, text, record_id):
    assert store.find_ingredient(normalize_ingredient_name(text)).id == record_id
