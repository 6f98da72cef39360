from fastapi import APIRouter, HTTPException, Query

from labelscan.schemas.analysis import IngredientLookupResponse
from labelscan.services.parsing.normalizer import normalize_ingredient_name
from labelscan.services.reference.store import get_reference_store

router = APIRouter()


@router.get("/ingredients")
def list_ingredients() -> dict:
    """All reference records, in lookup order."""
    store = get_reference_store()
    return {"count": len(store), "ingredients": [record.to_dict() for record in store]}


@router.get("/ingredients/lookup", response_model=IngredientLookupResponse)
def lookup_ingredient(q: str = Query(..., min_length=1)) -> IngredientLookupResponse:
    key = normalize_ingredient_name(q)
    match = get_reference_store().match_ingredient(key)
    if match is None:
        raise HTTPException(status_code=404, detail=f"No reference entry for '{q}'")
    return IngredientLookupResponse(
        query=q,
        normalized_key=key,
        match_rule=match.rule,
        record=match.record.to_dict(),
    )
