import pytest

from labelscan.errors import NoIngredientsExtracted
from labelscan.services.parsing.label_parser import (
    _fallback_split,
    extract_ingredient_candidates,
    parse_ingredients,
    require_ingredients,
)


def test_parse_ingredient_section():
    text = "NUTRITION FACTS\nIngredients: Enriched flour (wheat flour, niacin), sugar; salt. Contains: wheat"
    assert parse_ingredients(text) == ["Enriched flour wheat flour", "niacin", "sugar", "salt"]


def test_parse_without_header_uses_whole_text():
    assert parse_ingredients("1. Sugar, 2. Salt") == ["Sugar", "Salt"]


def test_parse_drops_tiny_fragments():
    assert parse_ingredients("a, sugar, water") == ["sugar", "water"]


def test_parse_joins_ocr_line_breaks():
    text = "Ingredients: water, high fructose\ncorn syrup, citric acid."
    assert parse_ingredients(text) == ["water", "high fructose corn syrup", "citric acid"]


def test_parse_empty_text():
    assert parse_ingredients("") == []
    assert parse_ingredients("   \n ") == []
    assert extract_ingredient_candidates("") == []


def test_fallback_split_limits_and_filters():
    assert _fallback_split("a1,bb,ccc,dddd\neeee;ffff", 2) == ["ccc", "dddd"]
    assert _fallback_split("Sugar\nSALT", 20) == ["sugar", "salt"]


def test_extract_uses_fallback_when_parse_finds_nothing():
    assert extract_ingredient_candidates("[[[]]]") == ["[[[]]]"]


def test_require_ingredients():
    with pytest.raises(NoIngredientsExtracted):
        require_ingredients([])
    with pytest.raises(NoIngredientsExtracted):
        require_ingredients(["", "   "])
    assert require_ingredients(["sugar", ""]) == ["sugar", ""]
