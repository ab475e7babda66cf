"""
Nutrition router for food lookup.

This router contains endpoints for:
- GET /nutrition/barcode/{code} - Look up a product by barcode
- GET /nutrition/search?q= - Search foods by name or brand
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, get_nutrition_use_case
from application.use_cases import NutritionUseCase

router = APIRouter(
    prefix="/nutrition",
    tags=["Nutrition"],
)


@router.get("/barcode/{code}")
async def lookup_barcode_endpoint(
    code: str,
    refresh: bool = Query(False, description="Re-fetch from Open Food Facts even if stored"),
    user_id: str = Depends(get_current_user),
    nutrition: NutritionUseCase = Depends(get_nutrition_use_case),
):
    """
    Look up a food item by barcode.

    Stored items are returned directly; otherwise the product is fetched
    from Open Food Facts, normalized and stored.
    """
    result = await nutrition.lookup_barcode(code, refresh=refresh)
    return result.item


@router.get("/search")
async def search_food_endpoint(
    q: Optional[str] = Query(None, description="Search terms (min 2 characters)"),
    user_id: str = Depends(get_current_user),
    nutrition: NutritionUseCase = Depends(get_nutrition_use_case),
):
    """
    Search foods, local results first, at most 20 items.
    """
    result = await nutrition.search_food(q)
    return result.items
