"""
Food item domain model.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NormalizedFoodItem(BaseModel):
    """
    A food product in the internal per-serving macro schema.

    calories_per_serving is always a finite number >= 0; every other
    nutrient is None when the source gave nothing usable.
    """

    id: Optional[str] = None
    barcode: Optional[str] = None
    name: str
    brand: Optional[str] = None
    serving_size_g: Optional[float] = None
    serving_description: Optional[str] = None
    calories_per_serving: float = Field(default=0.0, ge=0)
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    fiber_g: Optional[float] = None
    sugar_g: Optional[float] = None
    sodium_mg: Optional[int] = None
    source: Optional[str] = "openfoodfacts"

    def dedupe_key(self) -> str:
        """Key used to merge local and remote search results."""
        if self.barcode:
            return f"barcode:{self.barcode}"
        brand = (self.brand or "").lower().strip()
        return f"name:{self.name.lower().strip()}|brand:{brand}"

    def to_record(self) -> dict:
        """Row payload for the food_items table (id is assigned by the store)."""
        return self.model_dump(exclude={"id"})
