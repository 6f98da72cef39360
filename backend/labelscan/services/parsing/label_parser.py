import re
from typing import List

from labelscan.config import settings
from labelscan.errors import NoIngredientsExtracted
from labelscan.logging import get_logger

logger = get_logger(__name__)

# Ingredient list sections on a label, checked in order.
INGREDIENT_SECTION_PATTERNS = [
    re.compile(r"ingredients?:?\s*(.*?)(?=\.|nutrition|allergen|contains|$)", re.IGNORECASE),
    re.compile(r"contains?:?\s*(.*?)(?=\.|nutrition|allergen|ingredients|$)", re.IGNORECASE),
]
MIN_SECTION_LENGTH = 10
MIN_FRAGMENT_LENGTH = 2
MAX_FRAGMENT_LENGTH = 200


def _clean_fragment(fragment: str) -> str:
    fragment = re.sub(r"^\d+\.?\s*", "", fragment)  # numbering
    fragment = re.sub(r"[\[\]()]", "", fragment)
    fragment = re.sub(r"\.$", "", fragment)
    return fragment.strip()


def _ingredient_section(clean_text: str) -> str:
    for pattern in INGREDIENT_SECTION_PATTERNS:
        match = pattern.search(clean_text)
        if match and len(match.group(1).strip()) > MIN_SECTION_LENGTH:
            return match.group(1).strip()
    return clean_text


def parse_ingredients(text: str) -> List[str]:
    """Split label text into ingredient fragments (display order preserved)."""
    clean_text = re.sub(r"\s+", " ", (text or "").replace("\n", " ")).strip()
    if not clean_text:
        return []
    section = _ingredient_section(clean_text)
    raw = [part.strip() for part in re.split(r"[,;]\s*", section)]
    raw = [part for part in raw if MIN_FRAGMENT_LENGTH <= len(part) < MAX_FRAGMENT_LENGTH]
    cleaned = [_clean_fragment(part) for part in raw]
    return [part for part in cleaned if len(part) >= MIN_FRAGMENT_LENGTH]


def _fallback_split(text: str, limit: int) -> List[str]:
    parts = [part.strip() for part in re.split(r"[,\n;]", text.lower())]
    return [part for part in parts if 2 < len(part) < 100][:limit]


def extract_ingredient_candidates(text: str, limit: int | None = None) -> List[str]:
    """
    Ingredient fragments from OCR text. Uses parse_ingredients, then a looser split
    on commas/semicolons/newlines when that yields nothing.
    """
    ingredients = parse_ingredients(text)
    if not ingredients and (text or "").strip():
        limit = limit if limit is not None else settings.ocr_fallback_max_ingredients
        ingredients = _fallback_split(text, limit)
        logger.info("label_parser.fallback count=%s", len(ingredients))
    logger.info("label_parser.end count=%s", len(ingredients))
    return ingredients


def require_ingredients(ingredients: List[str]) -> List[str]:
    """Raise NoIngredientsExtracted unless at least one non-blank fragment is present."""
    if not any(item and item.strip() for item in ingredients):
        raise NoIngredientsExtracted()
    return list(ingredients)
